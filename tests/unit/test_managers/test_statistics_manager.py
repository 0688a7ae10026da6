"""
Unit tests for StatisticsManager.
"""

import threading
import time
from datetime import date, datetime
from unittest.mock import Mock

import pytest

from traewelling.api.api_manager import NetworkException
from traewelling.managers.statistics_manager import StatisticsManager
from traewelling.models.statistics_data import PersonalStatistics


@pytest.fixture
def manager(qapp, test_config, api_factory):
    manager = StatisticsManager(test_config, api_factory)
    manager.request_statistics = Mock()
    return manager


class TestDateRange:
    """Test date range selection."""

    def test_defaults_to_today(self, manager):
        start, end = manager.date_range

        assert start.date() == date.today()
        assert end.date() == date.today()
        assert (end.hour, end.minute) == (23, 59)

    def test_set_date_range_normalizes(self, manager):
        changes = []
        manager.date_range_changed.connect(lambda *args: changes.append(args))

        manager.set_date_range(datetime(2024, 1, 5, 14, 30), datetime(2024, 1, 7, 8, 15))

        start, end = manager.date_range
        assert (start.date(), start.hour, start.minute) == (date(2024, 1, 5), 0, 0)
        assert (end.date(), end.hour, end.minute) == (date(2024, 1, 7), 23, 59)
        assert changes == [(start, end)]
        manager.request_statistics.assert_called_once()

    def test_reversed_range_is_swapped(self, manager):
        manager.set_date_range(date(2024, 1, 7), date(2024, 1, 5))

        start, end = manager.date_range
        assert start.date() == date(2024, 1, 5)
        assert end.date() == date(2024, 1, 7)
        assert start < end


class TestFetchStatistics:
    """Test fetching statistics for the selected range."""

    @pytest.mark.asyncio
    async def test_fetch_publishes(self, manager, mock_api, statistics_response):
        statistics = PersonalStatistics.from_dict(statistics_response["data"])
        mock_api.get_personal_statistics.return_value = statistics
        published = []
        manager.statistics_updated.connect(published.append)

        result = await manager.fetch_statistics_async()

        assert result is statistics
        assert manager.current_statistics is statistics
        assert published == [statistics]
        mock_api.get_personal_statistics.assert_awaited_once_with(*manager.date_range)

    @pytest.mark.asyncio
    async def test_fetch_uses_selected_range(self, manager, mock_api):
        mock_api.get_personal_statistics.return_value = PersonalStatistics()
        manager.set_date_range(date(2024, 1, 5), date(2024, 1, 7))

        await manager.fetch_statistics_async()

        from_time, until_time = mock_api.get_personal_statistics.call_args.args
        assert from_time.date() == date(2024, 1, 5)
        assert until_time.date() == date(2024, 1, 7)

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_statistics(self, manager, mock_api):
        previous = PersonalStatistics()
        manager.current_statistics = previous
        mock_api.get_personal_statistics.side_effect = NetworkException("offline")
        errors = []
        manager.error_occurred.connect(errors.append)

        assert await manager.fetch_statistics_async() is None

        assert manager.current_statistics is previous
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_result_for_superseded_range_is_dropped(self, manager, mock_api):
        previous = PersonalStatistics()
        manager.current_statistics = previous

        async def get_statistics(from_time, until_time):
            manager.set_date_range(date(2024, 1, 5), date(2024, 1, 7))
            return PersonalStatistics()

        mock_api.get_personal_statistics.side_effect = get_statistics
        published = []
        manager.statistics_updated.connect(published.append)

        assert await manager.fetch_statistics_async() is None

        assert manager.current_statistics is previous
        assert published == []


class TestRangeChangeDuringFetch:
    """Test picking a range while statistics are still being fetched."""

    def test_new_range_is_fetched_after_running_fetch(
        self, qapp, test_config, api_factory, mock_api
    ):
        manager = StatisticsManager(test_config, api_factory)
        started = threading.Event()
        release = threading.Event()
        calls = []
        latest = PersonalStatistics()

        async def get_statistics(from_time, until_time):
            calls.append((from_time.date(), until_time.date()))
            if len(calls) == 1:
                started.set()
                release.wait(timeout=5)
                return PersonalStatistics()
            return latest

        mock_api.get_personal_statistics.side_effect = get_statistics

        manager.request_statistics()
        assert started.wait(timeout=5)
        manager.set_date_range(date(2024, 1, 5), date(2024, 1, 7))
        release.set()

        deadline = time.monotonic() + 5
        while manager.current_statistics is not latest and time.monotonic() < deadline:
            time.sleep(0.01)

        assert calls[-1] == (date(2024, 1, 5), date(2024, 1, 7))
        assert len(calls) == 2
        assert manager.current_statistics is latest
