"""
Unit tests for the check-in card widget.

Tests delay-aware station rows, the travel progress bar, the like toggle,
the status menu and the card's footer content.
"""

import copy
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from traewelling.managers.status_manager import CheckInCardManager
from traewelling.models.status_data import Status
from traewelling.ui.widgets.check_in_card import (
    PROGRESS_STEPS,
    CheckInCardWidget,
    StationRowWidget,
)
from traewelling.utils.helpers import format_local_time

CET = timezone(timedelta(hours=1))


def cet(hour, minute=0):
    return datetime(2024, 1, 5, hour, minute, tzinfo=CET)


@pytest.fixture
def card_manager(qapp, test_config):
    manager = CheckInCardManager(test_config)
    manager.create_favorite = Mock()
    manager.delete_favorite = Mock()
    manager.delete_status = Mock()
    return manager


@pytest.fixture
def make_card(qapp, test_config, card_manager, sample_status):
    cards = []

    def _make_card(status=None, config=None):
        card = CheckInCardWidget(
            status or sample_status, card_manager, config or test_config
        )
        cards.append(card)
        return card

    yield _make_card

    for card in cards:
        card.release_subscriptions()
        card.deleteLater()


class TestStationRow:
    """Test StationRowWidget."""

    def test_delayed_departure(self, qapp, sample_status):
        origin = sample_status.journey.origin
        row = StationRowWidget(origin, origin.departure_planned, origin.departure_real)

        assert row.has_delay
        assert row.time_label.text() == format_local_time(cet(8, 2))
        assert row.planned_label.text() == format_local_time(cet(8, 0))
        assert row.planned_label.font().strikeOut()
        assert not row.planned_label.isHidden()

    def test_on_time_arrival(self, qapp, sample_status):
        destination = sample_status.journey.destination
        row = StationRowWidget(
            destination, destination.arrival_planned, destination.arrival_real
        )

        assert not row.has_delay
        assert row.time_label.text() == format_local_time(cet(8, 30))
        assert row.planned_label.isHidden()

    def test_no_times(self, qapp, sample_status):
        row = StationRowWidget(sample_status.journey.origin, None, None)

        assert row.time_label.text() == "--:--"
        assert row.displayed_time is None

    def test_station_selection(self, qapp, sample_status):
        origin = sample_status.journey.origin
        row = StationRowWidget(origin, origin.departure_planned, origin.departure_real)
        selections = []
        row.station_selected.connect(lambda *args: selections.append(args))

        row.name_label.clicked.emit()
        row.time_label.clicked.emit()

        assert selections == [(100, None), (100, cet(8, 2))]


class TestCardProgress:
    """Test the travel progress bar."""

    def test_halfway(self, make_card):
        card = make_card()

        # Effective departure 08:02, arrival 08:30
        assert card.update_progress(cet(8, 16)) == 0.5
        assert card.progress_bar.value() == PROGRESS_STEPS // 2

    def test_before_departure(self, make_card):
        card = make_card()

        assert card.update_progress(cet(7, 0)) == 0.0
        assert card.progress_bar.value() == 0

    def test_after_arrival(self, make_card):
        card = make_card()

        assert card.update_progress(cet(9, 0)) == 1.0
        assert card.progress_bar.value() == PROGRESS_STEPS

    def test_zero_length_journey(self, make_card, status_payload):
        payload = copy.deepcopy(status_payload)
        payload["train"]["manualDeparture"] = "2024-01-05T08:10:00+01:00"
        payload["train"]["manualArrival"] = "2024-01-05T08:10:00+01:00"
        card = make_card(Status.from_dict(payload))

        assert card.update_progress(cet(8, 10)) == 1.0

    def test_timer_follows_visibility(self, qapp, make_card):
        card = make_card()
        assert not card.is_progress_timer_active()

        card.show()
        qapp.processEvents()
        assert card.is_progress_timer_active()
        assert card._progress_timer.interval() == 5000

        card.hide()
        qapp.processEvents()
        assert not card.is_progress_timer_active()


class TestCardContent:
    """Test journey details and footer content."""

    def test_details(self, make_card):
        card = make_card()

        assert card.line_label.text() == "RE 1 (3101)"
        assert card.distance_label.text() == "41 km"
        assert card.duration_label.text() == "30m"
        assert card.body_label.text() == "❝ Off to the coast"

    def test_user_label(self, make_card):
        card = make_card()
        selected = []
        card.user_selected.connect(selected.append)

        card.user_label.clicked.emit()

        assert card.user_label.text().startswith("railfan, ")
        assert selected == ["railfan"]

    def test_long_date(self, make_card, test_config):
        test_config.display.display_long_date = True
        card = make_card(config=test_config)

        assert ".01.2024 " in card.user_label.text()

    def test_tags_shown(self, make_card):
        card = make_card()

        assert len(card.tag_labels) == 1
        assert "trwl:seat: 42" in card.tag_labels[0].text()

    def test_tags_hidden_by_setting(self, make_card, test_config):
        test_config.display.display_tags_in_card = False
        assert make_card(config=test_config).tag_labels == []

    def test_event_row(self, make_card, make_status):
        assert make_card().event_label is None

        card = make_card(make_status(event={"id": 1, "name": "Rail Summit", "slug": None}))
        assert "Rail Summit" in card.event_label.text()

    def test_station_selection_is_forwarded(self, make_card):
        card = make_card()
        selections = []
        card.station_selected.connect(lambda *args: selections.append(args))

        card.destination_row.name_label.clicked.emit()

        assert selections == [(200, None)]


class TestCardLikes:
    """Test the like toggle."""

    def test_initial_state(self, make_card):
        card = make_card()

        assert not card.like_button.isHidden()
        assert card.like_button.text() == "♡ 3"

    def test_star_for_other_clients(self, make_card, make_status):
        card = make_card(make_status(client={"name": "Another Client"}, liked=True))
        assert card.like_button.text() == "★ 3"

    def test_hidden_when_not_likeable(self, make_card, make_status):
        card = make_card(make_status(isLikable=False))
        assert card.like_button.isHidden()

    def test_toggle_requests_like(self, make_card, card_manager):
        card = make_card()

        card.toggle_like()

        card_manager.create_favorite.assert_called_once_with(42)
        # Local state waits for the server
        assert card.liked is False
        assert card.like_count == 3

    def test_toggle_requests_unlike(self, make_card, make_status, card_manager):
        card = make_card(make_status(liked=True))

        card.toggle_like()

        card_manager.delete_favorite.assert_called_once_with(42)

    def test_confirmed_like(self, make_card, card_manager):
        card = make_card()

        card_manager.favorite_changed.emit(42, True, 4)

        assert card.liked is True
        assert card.like_count == 4
        assert card.like_button.text() == "♥ 4"

    def test_confirmed_like_without_count(self, make_card, card_manager):
        card = make_card()

        card_manager.favorite_changed.emit(42, True, -1)
        assert card.like_count == 4

        card_manager.favorite_changed.emit(42, False, -1)
        assert card.like_count == 3
        assert card.liked is False

    def test_other_status_is_ignored(self, make_card, card_manager):
        card = make_card()

        card_manager.favorite_changed.emit(7, True, 10)

        assert card.liked is False
        assert card.like_count == 3

    def test_released_card_ignores_updates(self, make_card, card_manager):
        card = make_card()
        card.release_subscriptions()

        card_manager.favorite_changed.emit(42, True, 4)

        assert card.liked is False


class TestCardMenu:
    """Test the status menu."""

    def test_foreign_status(self, make_card, sample_status):
        card = make_card()
        joined = []
        card.join_connection_requested.connect(joined.append)

        assert card.edit_action is None
        assert card.delete_action is None
        assert card.share_action is None
        card.join_action.trigger()

        assert joined == [sample_status]

    def test_report_foreign_status(self, make_card, sample_status):
        card = make_card()
        reports = []
        card.report_requested.connect(reports.append)

        card.report_action.trigger()

        assert reports == [sample_status]

    def test_own_status(self, make_card, test_config, sample_status, card_manager):
        test_config.logged_in_user_id = 2
        card = make_card(config=test_config)
        edits = []
        card.edit_requested.connect(edits.append)

        assert card.join_action is None
        assert card.report_action is None
        card.edit_action.trigger()
        card.delete_action.trigger()

        assert edits == [sample_status]
        card_manager.delete_status.assert_called_once_with(42)

    def test_share_own_status(self, make_card, test_config, sample_status):
        test_config.logged_in_user_id = 2
        card = make_card(config=test_config)
        shares = []
        card.share_requested.connect(shares.append)

        card.share_action.trigger()

        assert shares == [sample_status]

    def test_deleted_after_confirmation(self, make_card, card_manager, sample_status):
        card = make_card()
        deleted = []
        card.deleted.connect(deleted.append)

        card_manager.status_deleted.emit(7)
        card_manager.status_deleted.emit(42)

        assert deleted == [sample_status]
