"""
Global pytest configuration and fixtures.
"""

import os

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import copy
import warnings
from unittest.mock import AsyncMock, MagicMock

import pytest
from PySide6.QtWidgets import QApplication

from traewelling.managers.config_manager import (
    APIConfig,
    ConfigData,
    DisplayConfig,
    RefreshConfig,
)
from traewelling.models.status_data import Status


def pytest_configure(config):
    """Configure pytest to suppress RuntimeWarnings."""
    warnings.filterwarnings("ignore", category=RuntimeWarning)
    warnings.filterwarnings("ignore", message=".*AsyncMockMixin.*was never awaited.*")


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for UI tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def test_config():
    """Provide a test configuration."""
    return ConfigData(
        api=APIConfig(
            token="test-token",
            base_url="https://traewelling.test/api/v1",
            web_url="https://traewelling.test",
            timeout_seconds=10,
            max_retries=3,
            rate_limit_per_minute=60,
        ),
        refresh=RefreshConfig(
            auto_enabled=True,
            interval_minutes=2,
            progress_interval_seconds=5,
        ),
        display=DisplayConfig(
            theme="dark",
            display_tags_in_card=True,
            display_long_date=False,
        ),
        logged_in_user_id=1,
    )


@pytest.fixture
def status_payload():
    """Provide a status object as returned by the statuses endpoint."""
    return {
        "id": 42,
        "body": "Off to the coast",
        "business": 0,
        "visibility": 0,
        "likes": 3,
        "liked": False,
        "isLikable": True,
        "client": {"id": 7, "name": "Traewelling Desktop"},
        "createdAt": "2024-01-05T07:55:00+01:00",
        "user": 2,
        "username": "railfan",
        "profilePicture": "https://traewelling.test/@railfan/picture",
        "tags": [{"key": "trwl:seat", "value": "42", "visibility": 0}],
        "event": None,
        "train": {
            "trip": "1|123|0|80|5012024",
            "category": "regional",
            "lineName": "RE 1",
            "lineId": "re-1",
            "journeyNumber": 3101,
            "distance": 41250,
            "duration": 30,
            "manualDeparture": None,
            "manualArrival": None,
            "operator": {"id": 5, "identifier": "db-regio-ag", "name": "DB Regio AG"},
            "origin": {
                "id": 100,
                "name": "Berlin Hbf",
                "rilIdentifier": "BL",
                "arrivalPlanned": None,
                "arrivalReal": None,
                "departurePlanned": "2024-01-05T08:00:00+01:00",
                "departureReal": "2024-01-05T08:02:00+01:00",
                "platform": "14",
                "cancelled": False,
            },
            "destination": {
                "id": 200,
                "name": "Potsdam Hbf",
                "rilIdentifier": "BPD",
                "arrivalPlanned": "2024-01-05T08:30:00+01:00",
                "arrivalReal": "2024-01-05T08:30:00+01:00",
                "departurePlanned": None,
                "departureReal": None,
                "platform": "3",
                "cancelled": False,
            },
        },
    }


@pytest.fixture
def make_status(status_payload):
    """Build a Status from the sample payload with top-level overrides."""

    def _make_status(**overrides):
        payload = copy.deepcopy(status_payload)
        payload.update(overrides)
        return Status.from_dict(payload)

    return _make_status


@pytest.fixture
def sample_status(make_status):
    return make_status()


@pytest.fixture
def statuses_response(status_payload):
    """Provide a paginated statuses response."""
    return {
        "data": [status_payload],
        "links": {"first": None, "last": None, "prev": None, "next": None},
        "meta": {"current_page": 1, "per_page": 15},
    }


@pytest.fixture
def statistics_response():
    """Provide a statistics response."""
    return {
        "data": {
            "purpose": [],
            "categories": [
                {"name": "regional", "count": 3, "duration": 120},
                {"name": "suburban", "count": 2, "duration": 45},
            ],
            "operators": [
                {"name": "DB Regio AG", "count": 3, "duration": 120},
                {"name": "S-Bahn Berlin", "count": 2, "duration": 45},
            ],
            "time": [],
        }
    }


@pytest.fixture
def mock_api():
    """Provide a mocked TraewellingAPIManager instance."""
    api = MagicMock()
    api.get_active_statuses = AsyncMock(return_value=[])
    api.get_personal_statistics = AsyncMock()
    api.create_favorite = AsyncMock(return_value=None)
    api.delete_favorite = AsyncMock(return_value=None)
    api.delete_status = AsyncMock(return_value=True)
    return api


@pytest.fixture
def api_factory(mock_api):
    """Provide an api_factory whose context manager yields mock_api."""
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=mock_api)
    context.__aexit__ = AsyncMock(return_value=None)
    return lambda config, rate_limiter=None: context
