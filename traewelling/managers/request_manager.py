"""
Shared plumbing for managers that talk to the Träwelling API.

Requests run on a short-lived worker thread with its own asyncio event loop.
Results and errors are published through Qt signals, which Qt delivers on
the UI thread.
"""

import asyncio
import logging
import threading
from typing import Awaitable, Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from ..api.api_manager import (
    APIException,
    AuthenticationException,
    DataParsingException,
    NetworkException,
    NotFoundException,
    RateLimiter,
    RateLimitException,
    TraewellingAPIManager,
)
from .config_manager import ConfigData

logger = logging.getLogger(__name__)

ApiFactory = Callable[[ConfigData, RateLimiter], TraewellingAPIManager]


class APIErrorHandler:
    """
    Centralized mapping of API errors to user-facing messages.

    The most specific exception type listed first wins.
    """

    def __init__(self, logger: logging.Logger):
        """Initialize error handler."""
        self._logger = logger
        self._messages = [
            (AuthenticationException, "Your API token was rejected. Check the configuration."),
            (RateLimitException, "Too many requests. Please wait a moment."),
            (NotFoundException, "The requested check-in no longer exists."),
            (NetworkException, "Network error. Check your connection."),
            (DataParsingException, "Received unexpected data from Träwelling."),
            (APIException, "Träwelling could not handle the request."),
        ]

    def handle_error(self, error: Exception) -> str:
        """Log error and return user-friendly message."""
        for exception_type, message in self._messages:
            if isinstance(error, exception_type):
                self._logger.error(f"{type(error).__name__}: {error}")
                return message

        self._logger.error(f"Unexpected error: {error}", exc_info=True)
        return "An unexpected error occurred."


class BaseRequestManager(QObject):
    """
    Base class for managers that issue API requests off the UI thread.

    All API managers created by one request manager share its rate limiter,
    so the configured calls-per-minute budget applies across requests.
    """

    loading_changed = Signal(bool)
    error_occurred = Signal(str)

    def __init__(
        self,
        config: ConfigData,
        api_factory: Optional[ApiFactory] = None,
        parent: Optional[QObject] = None,
        rate_limiter: Optional[RateLimiter] = None,
    ):
        """
        Initialize request manager.

        Args:
            config: Application configuration
            api_factory: Builds the API manager used for each request
                (defaults to TraewellingAPIManager)
            parent: Parent QObject
            rate_limiter: Limiter shared with other managers; a private one
                is created when omitted
        """
        super().__init__(parent)
        self.config = config
        self._api_factory = api_factory or TraewellingAPIManager
        self.rate_limiter = rate_limiter or RateLimiter(config.api.rate_limit_per_minute)
        self._error_handler = APIErrorHandler(logger)
        self._queue_lock = threading.Lock()
        self._queued_requests: Dict[int, Callable[[], Awaitable[object]]] = {}
        self.is_loading = False

    def _create_api(self) -> TraewellingAPIManager:
        return self._api_factory(self.config, self.rate_limiter)

    def _set_loading(self, is_loading: bool) -> None:
        if self.is_loading != is_loading:
            self.is_loading = is_loading
            self.loading_changed.emit(is_loading)

    def _report_error(self, error: Exception) -> None:
        self.error_occurred.emit(self._error_handler.handle_error(error))

    def _run_in_background(
        self,
        coroutine_factory: Callable[[], Awaitable[object]],
        lock: Optional[threading.Lock] = None,
        queue_if_busy: bool = False,
    ) -> Optional[threading.Thread]:
        """
        Run a coroutine on a daemon thread with a fresh event loop.

        Args:
            coroutine_factory: Creates the coroutine to run
            lock: Held for the duration of the run
            queue_if_busy: While another run holds the lock, run once more
                after it finishes instead of skipping. Only the latest queued
                request is kept.

        Returns:
            The started thread, or None if the run was skipped or queued
        """
        if lock is not None:
            with self._queue_lock:
                if not lock.acquire(blocking=False):
                    if queue_if_busy:
                        logger.debug("Request queued until the running one finishes")
                        self._queued_requests[id(lock)] = coroutine_factory
                    else:
                        logger.warning("Another request of this kind is in progress, skipping")
                    return None

        def run_async():
            try:
                loop = asyncio.new_event_loop()
                asyncio.set_event_loop(loop)
                try:
                    loop.run_until_complete(coroutine_factory())
                finally:
                    loop.close()
            except Exception as e:
                logger.error(f"Error in background request: {e}", exc_info=True)
                self._report_error(e)
            finally:
                if lock is not None:
                    self._finish_locked_run(lock)

        thread = threading.Thread(target=run_async, daemon=True)
        thread.start()
        return thread

    def _finish_locked_run(self, lock: threading.Lock) -> None:
        with self._queue_lock:
            lock.release()
            queued = self._queued_requests.pop(id(lock), None)

        if queued is not None:
            logger.debug("Processing queued request")
            self._run_in_background(queued, lock, queue_if_busy=True)
