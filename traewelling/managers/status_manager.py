"""
Check-in state management.

ActiveCheckinsManager owns the list of check-ins currently en route and
refreshes it on request or on a timer. CheckInCardManager performs the
actions a check-in card offers: liking, unliking and deleting a status.
"""

import logging
import threading
from datetime import datetime
from typing import List, Optional

from PySide6.QtCore import QTimer, Signal

from ..models.status_data import Status
from .request_manager import BaseRequestManager

logger = logging.getLogger(__name__)


class ActiveCheckinsManager(BaseRequestManager):
    """
    Observable state for the active check-ins screen.

    Widgets subscribe to statuses_updated. A failed refresh leaves
    current_statuses untouched and emits error_occurred instead.
    """

    statuses_updated = Signal(list)  # List[Status]

    def __init__(self, config, api_factory=None, parent=None, rate_limiter=None):
        super().__init__(config, api_factory, parent, rate_limiter)

        self.current_statuses: List[Status] = []
        self.last_update: Optional[datetime] = None
        self._fetch_lock = threading.Lock()

        self._refresh_timer = QTimer(self)
        self._refresh_timer.timeout.connect(self.refresh)

    def start_auto_refresh(self) -> None:
        """Start automatic refresh if enabled in the configuration."""
        if not self.config.refresh.auto_enabled:
            logger.info("Auto-refresh disabled in configuration")
            return

        interval_ms = self.config.refresh.interval_minutes * 60 * 1000
        self._refresh_timer.start(interval_ms)
        logger.info(
            f"Auto-refresh started with {self.config.refresh.interval_minutes}min interval"
        )

    def stop_auto_refresh(self) -> None:
        self._refresh_timer.stop()

    def is_auto_refresh_active(self) -> bool:
        return self._refresh_timer.isActive()

    def refresh(self) -> None:
        """Fetch active check-ins in the background."""
        self._run_in_background(self.fetch_active_statuses_async, self._fetch_lock)

    async def fetch_active_statuses_async(self) -> Optional[List[Status]]:
        """
        Fetch active check-ins and publish them.

        Returns:
            The fetched statuses, or None if the request failed
        """
        self._set_loading(True)
        try:
            async with self._create_api() as api:
                statuses = await api.get_active_statuses()
        except Exception as e:
            self._report_error(e)
            return None
        finally:
            self._set_loading(False)

        self.current_statuses = statuses
        self.last_update = datetime.now()
        logger.info(f"Publishing {len(statuses)} active check-ins")
        self.statuses_updated.emit(statuses)
        return statuses

    def remove_status(self, status_id: int) -> None:
        """Drop a deleted status from the current list and republish it."""
        remaining = [status for status in self.current_statuses if status.id != status_id]
        if len(remaining) != len(self.current_statuses):
            self.current_statuses = remaining
            self.statuses_updated.emit(remaining)


class CheckInCardManager(BaseRequestManager):
    """
    Actions on a single check-in.

    Results are published per status id so every card can filter for its
    own status.
    """

    # status id, liked, like count reported by the server (-1 when unknown)
    favorite_changed = Signal(int, bool, int)
    status_deleted = Signal(int)

    def create_favorite(self, status_id: int) -> None:
        self._run_in_background(lambda: self.set_favorite_async(status_id, True))

    def delete_favorite(self, status_id: int) -> None:
        self._run_in_background(lambda: self.set_favorite_async(status_id, False))

    def delete_status(self, status_id: int) -> None:
        self._run_in_background(lambda: self.delete_status_async(status_id))

    async def set_favorite_async(self, status_id: int, liked: bool) -> bool:
        """
        Like or unlike a status.

        Returns:
            bool: True if the server accepted the change
        """
        try:
            async with self._create_api() as api:
                if liked:
                    count = await api.create_favorite(status_id)
                else:
                    count = await api.delete_favorite(status_id)
        except Exception as e:
            self._report_error(e)
            return False

        self.favorite_changed.emit(status_id, liked, -1 if count is None else count)
        return True

    async def delete_status_async(self, status_id: int) -> bool:
        """
        Delete a status.

        Returns:
            bool: True if the status was deleted
        """
        try:
            async with self._create_api() as api:
                await api.delete_status(status_id)
        except Exception as e:
            self._report_error(e)
            return False

        self.status_deleted.emit(status_id)
        return True
