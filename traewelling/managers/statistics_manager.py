"""
Statistics state management.

StatisticsManager holds the selected date range and the statistics fetched
for it. Changing the range normalizes it to whole days and triggers a fetch.
"""

import logging
import threading
from datetime import datetime
from typing import Optional, Tuple

from PySide6.QtCore import Signal

from ..models.statistics_data import PersonalStatistics
from ..utils.helpers import DateLike, default_date_range, normalize_date_range
from .request_manager import BaseRequestManager

logger = logging.getLogger(__name__)


class StatisticsManager(BaseRequestManager):
    """
    Observable state for the statistics screen.

    A failed request keeps current_statistics as it was; the error is only
    reported through error_occurred. A range picked while a fetch is running
    is fetched as soon as that fetch finishes.
    """

    date_range_changed = Signal(object, object)  # start, end datetimes
    statistics_updated = Signal(object)  # PersonalStatistics

    def __init__(self, config, api_factory=None, parent=None, rate_limiter=None):
        super().__init__(config, api_factory, parent, rate_limiter)

        self.date_range: Tuple[datetime, datetime] = default_date_range()
        self.current_statistics: Optional[PersonalStatistics] = None
        self._fetch_lock = threading.Lock()

    def set_date_range(self, start: DateLike, end: DateLike) -> None:
        """
        Select a new date range and request statistics for it.

        Args:
            start: First day (time of day is ignored)
            end: Last day (time of day is ignored)
        """
        self.date_range = normalize_date_range(start, end)
        logger.info(
            f"Statistics range set to {self.date_range[0].isoformat()} - "
            f"{self.date_range[1].isoformat()}"
        )
        self.date_range_changed.emit(*self.date_range)
        self.request_statistics()

    def request_statistics(self) -> None:
        """Fetch statistics for the current range in the background."""
        self._run_in_background(
            self.fetch_statistics_async, self._fetch_lock, queue_if_busy=True
        )

    async def fetch_statistics_async(self) -> Optional[PersonalStatistics]:
        """
        Fetch and publish statistics for the current range.

        Returns:
            The statistics, or None if the request failed or the range
            changed while it was running
        """
        requested_range = self.date_range
        from_time, until_time = requested_range

        self._set_loading(True)
        try:
            async with self._create_api() as api:
                statistics = await api.get_personal_statistics(from_time, until_time)
        except Exception as e:
            self._report_error(e)
            return None
        finally:
            self._set_loading(False)

        if self.date_range != requested_range:
            logger.debug("Discarding statistics for a range that is no longer selected")
            return None

        self.current_statistics = statistics
        self.statistics_updated.emit(statistics)
        return statistics
