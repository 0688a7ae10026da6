"""
Unit tests for status data models.

Tests parsing of API status objects and the derived properties used by the
check-in card.
"""

import copy
from datetime import datetime, timedelta, timezone

import pytest

from traewelling.models.status_data import (
    Journey,
    ProductType,
    Status,
    StatusBusiness,
    StatusTag,
    StatusVisibility,
    TripStation,
)

CET = timezone(timedelta(hours=1))


def cet(hour, minute=0):
    return datetime(2024, 1, 5, hour, minute, tzinfo=CET)


def make_station(**overrides):
    values = dict(
        id=1,
        name="Berlin Hbf",
        ril_identifier="BL",
        arrival_planned=None,
        arrival_real=None,
        departure_planned=None,
        departure_real=None,
    )
    values.update(overrides)
    return TripStation(**values)


def make_journey(**overrides):
    values = dict(
        trip="1|123",
        product_type=ProductType.REGIONAL,
        line="RE 1",
        line_id="re-1",
        journey_number=3101,
        distance=41250,
        duration=30,
        origin=make_station(departure_planned=cet(8, 0)),
        destination=make_station(id=2, name="Potsdam Hbf", arrival_planned=cet(8, 30)),
    )
    values.update(overrides)
    return Journey(**values)


class TestProductType:
    """Test ProductType enum."""

    def test_from_api(self):
        assert ProductType.from_api("nationalExpress") == ProductType.NATIONAL_EXPRESS
        assert ProductType.from_api("suburban") == ProductType.SUBURBAN

    def test_unknown_values(self):
        assert ProductType.from_api("hovercraft") == ProductType.UNKNOWN
        assert ProductType.from_api(None) == ProductType.UNKNOWN

    def test_every_type_has_name_and_icon(self):
        for product_type in ProductType:
            assert product_type.display_name
            assert product_type.icon


class TestStatusVisibility:
    """Test StatusVisibility enum."""

    def test_from_api(self):
        assert StatusVisibility.from_api(3) == StatusVisibility.PRIVATE

    def test_unknown_falls_back_to_public(self):
        assert StatusVisibility.from_api(99) == StatusVisibility.PUBLIC


class TestJourneyTimes:
    """Test effective timestamp resolution."""

    def test_planned_only(self):
        journey = make_journey()

        assert journey.effective_departure == cet(8, 0)
        assert journey.effective_arrival == cet(8, 30)
        assert journey.displayed_departure_real is None

    def test_real_overrides_planned(self):
        journey = make_journey(
            origin=make_station(departure_planned=cet(8, 0), departure_real=cet(8, 3)),
            destination=make_station(arrival_planned=cet(8, 30), arrival_real=cet(8, 35)),
        )

        assert journey.effective_departure == cet(8, 3)
        assert journey.effective_arrival == cet(8, 35)

    def test_manual_overrides_real(self):
        journey = make_journey(
            origin=make_station(departure_planned=cet(8, 0), departure_real=cet(8, 3)),
            destination=make_station(arrival_planned=cet(8, 30), arrival_real=cet(8, 35)),
            departure_manual=cet(8, 10),
            arrival_manual=cet(8, 40),
        )

        assert journey.effective_departure == cet(8, 10)
        assert journey.effective_arrival == cet(8, 40)
        assert journey.displayed_departure_real == cet(8, 10)
        assert journey.displayed_arrival_real == cet(8, 40)

    def test_format_line(self):
        assert make_journey().format_line() == "RE 1 (3101)"
        assert make_journey(line="ICE 123", journey_number=123).format_line() == "ICE 123"
        assert make_journey(journey_number=None).format_line() == "RE 1"


class TestStatusParsing:
    """Test Status.from_dict."""

    def test_parses_sample(self, sample_status):
        status = sample_status

        assert status.id == 42
        assert status.body == "Off to the coast"
        assert status.business == StatusBusiness.PRIVATE
        assert status.visibility == StatusVisibility.PUBLIC
        assert status.created_at == cet(7, 55)
        assert status.user.id == 2
        assert status.user.username == "railfan"
        assert status.client_name == "Traewelling Desktop"
        assert status.tags == [StatusTag("trwl:seat", "42", StatusVisibility.PUBLIC)]
        assert status.event is None

    def test_parses_journey(self, sample_status):
        journey = sample_status.journey

        assert journey.product_type == ProductType.REGIONAL
        assert journey.line == "RE 1"
        assert journey.distance == 41250
        assert journey.operator.name == "DB Regio AG"
        assert journey.origin.name == "Berlin Hbf"
        assert journey.origin.departure_real == cet(8, 2)
        assert journey.destination.arrival_planned == cet(8, 30)
        assert journey.effective_departure == cet(8, 2)

    def test_user_details_object(self, make_status):
        status = make_status(
            userDetails={
                "id": 9,
                "username": "conductor",
                "displayName": "The Conductor",
                "profilePicture": None,
            }
        )

        assert status.user.id == 9
        assert status.user.username == "conductor"
        assert status.user.display_name == "The Conductor"

    def test_event(self, make_status):
        status = make_status(event={"id": 1, "name": "Rail Summit", "slug": "rail-summit"})

        assert status.has_event
        assert status.event.slug == "rail-summit"

    def test_event_without_name(self, make_status):
        assert not make_status(event={"id": 1, "name": "", "slug": None}).has_event

    def test_missing_train_raises(self, status_payload):
        payload = copy.deepcopy(status_payload)
        del payload["train"]

        with pytest.raises(KeyError):
            Status.from_dict(payload)

    def test_invalid_timestamp_raises(self, make_status):
        with pytest.raises(ValueError):
            make_status(createdAt="yesterday")


class TestStatusLikes:
    """Test like state derived properties."""

    def test_can_be_liked(self, sample_status):
        assert sample_status.can_be_liked
        assert sample_status.like_count == 3
        assert not sample_status.is_liked

    def test_not_likeable(self, make_status):
        assert not make_status(isLikable=False).can_be_liked

    def test_missing_like_data(self, make_status):
        status = make_status(likes=None, liked=None)

        assert not status.can_be_liked
        assert status.like_count == 0
        assert not status.is_liked


class TestStatusOwnership:
    """Test ownership and client checks."""

    def test_is_own_status(self, sample_status):
        assert sample_status.is_own_status(2)
        assert not sample_status.is_own_status(1)
        assert not sample_status.is_own_status(None)

    def test_is_checked_in_with(self, sample_status):
        assert sample_status.is_checked_in_with("Traewelling Desktop")
        assert not sample_status.is_checked_in_with("Another Client")


class TestStatusTag:
    def test_format(self):
        assert StatusTag("trwl:seat", "42").format() == "trwl:seat: 42"
