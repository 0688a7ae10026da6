"""
Träwelling API manager for fetching check-in and statistics data.

This module handles all communication with the Träwelling REST API,
including rate limiting, error handling, and data parsing.
"""

import asyncio
import logging
import threading
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import aiohttp

from version import __user_agent__
from ..managers.config_manager import ConfigData
from ..models.statistics_data import PersonalStatistics
from ..models.status_data import Status

logger = logging.getLogger(__name__)


class APIException(Exception):
    """Base exception for API-related errors."""

    pass


class NetworkException(APIException):
    """Exception for network-related errors."""

    pass


class RateLimitException(APIException):
    """Exception for rate limit exceeded errors."""

    pass


class AuthenticationException(APIException):
    """Exception for authentication failures."""

    pass


class NotFoundException(APIException):
    """Exception for requests against resources that do not exist."""

    pass


class DataParsingException(APIException):
    """Exception for responses that do not match the expected payload."""

    pass


class RateLimiter:
    """
    Rate limiter for API calls to respect Träwelling API limits.

    One limiter is shared by requests running on different worker threads,
    each with its own event loop, so its state is guarded by a thread lock.
    """

    def __init__(self, calls_per_minute: int):
        """
        Initialize rate limiter.

        Args:
            calls_per_minute: Maximum calls allowed per minute
        """
        self.calls_per_minute = calls_per_minute
        self.calls: List[datetime] = []
        self.lock = threading.Lock()

    def _reserve(self) -> float:
        """Record a call slot and return the seconds to wait before using it."""
        with self.lock:
            now = datetime.now()
            # Remove calls older than 1 minute; reserved future slots stay
            self.calls = sorted(
                call_time
                for call_time in self.calls
                if now - call_time < timedelta(minutes=1)
            )

            wait_time = 0.0
            if len(self.calls) >= self.calls_per_minute:
                # Wait until enough calls are more than 1 minute old
                blocking_call = self.calls[len(self.calls) - self.calls_per_minute]
                wait_time = max(0.0, 60 - (now - blocking_call).total_seconds())

            self.calls.append(now + timedelta(seconds=wait_time))
            return wait_time

    async def wait_if_needed(self):
        """Wait if rate limit would be exceeded."""
        wait_time = self._reserve()
        if wait_time > 0:
            logger.info(f"Rate limit reached, waiting {wait_time:.1f} seconds")
            await asyncio.sleep(wait_time)


class TraewellingAPIManager:
    """
    Handles Träwelling API communications with rate limiting and error handling.

    Provides methods to fetch active check-ins and personal statistics and to
    like or delete statuses, while respecting rate limits and retrying
    network failures with exponential backoff.
    """

    def __init__(self, config: ConfigData, rate_limiter: Optional[RateLimiter] = None):
        """
        Initialize API manager.

        Args:
            config: Application configuration containing the API token
            rate_limiter: Limiter shared between API managers; a private one
                is created when omitted
        """
        self.config = config
        self.session: Optional[aiohttp.ClientSession] = None
        self.rate_limiter = rate_limiter or RateLimiter(config.api.rate_limit_per_minute)

    async def __aenter__(self):
        """Async context manager entry."""
        timeout = aiohttp.ClientTimeout(total=self.config.api.timeout_seconds)
        self.session = aiohttp.ClientSession(
            timeout=timeout,
            headers={
                "User-Agent": __user_agent__,
                "Accept": "application/json",
                "Authorization": f"Bearer {self.config.api.token}",
            },
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()

    def _url(self, path: str) -> str:
        return f"{self.config.api.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _request(
        self, method: str, path: str, params: Optional[Dict[str, str]] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Perform a request with retries.

        Args:
            method: HTTP method
            path: Endpoint path relative to the API base URL
            params: Query parameters

        Returns:
            Optional[dict]: Decoded JSON body, or None for an empty response

        Raises:
            APIException: For API-related errors
            NetworkException: For network-related errors
        """
        await self.rate_limiter.wait_if_needed()

        url = self._url(path)

        for attempt in range(self.config.api.max_retries):
            try:
                if not self.session:
                    raise NetworkException("Session not initialized")

                logger.info(
                    f"{method} {path} (attempt {attempt + 1}/{self.config.api.max_retries})"
                )

                async with self.session.request(method, url, params=params) as response:
                    if response.status in (200, 201):
                        return await response.json()
                    elif response.status == 204:
                        return None
                    elif response.status in (401, 403):
                        raise AuthenticationException("Invalid or expired API token")
                    elif response.status == 404:
                        raise NotFoundException(f"Resource not found: {path}")
                    elif response.status == 429:
                        raise RateLimitException("Rate limit exceeded")
                    else:
                        error_text = await response.text()
                        raise APIException(f"API error {response.status}: {error_text}")

            except aiohttp.ClientError as e:
                if attempt == self.config.api.max_retries - 1:
                    raise NetworkException(f"Network error: {str(e)}")

                wait_time = 2**attempt  # Exponential backoff
                logger.warning(
                    f"Network error on attempt {attempt + 1}, retrying in {wait_time}s: {e}"
                )
                await asyncio.sleep(wait_time)

        return None

    async def get_active_statuses(self) -> List[Status]:
        """
        Fetch the check-ins that are currently en route.

        Returns:
            List[Status]: Active statuses in API order

        Raises:
            APIException: For API-related errors
            NetworkException: For network-related errors
        """
        data = await self._request("GET", "/statuses")
        statuses = self._parse_statuses_response(data)
        logger.info(f"Successfully fetched {len(statuses)} active statuses")
        return statuses

    async def get_personal_statistics(
        self, from_time: datetime, until_time: datetime
    ) -> PersonalStatistics:
        """
        Fetch per-operator and per-product-type check-in counts.

        Args:
            from_time: Start of the range
            until_time: End of the range

        Returns:
            PersonalStatistics: Aggregated statistics for the range
        """
        params = {
            "from": from_time.isoformat(),
            "until": until_time.isoformat(),
        }
        data = await self._request("GET", "/statistics", params=params)
        return self._parse_statistics_response(data)

    async def create_favorite(self, status_id: int) -> Optional[int]:
        """
        Like a status.

        Returns:
            Optional[int]: New like count if the server reported it
        """
        data = await self._request("POST", f"/status/{status_id}/like")
        return self._parse_like_count(data)

    async def delete_favorite(self, status_id: int) -> Optional[int]:
        """
        Remove the like from a status.

        Returns:
            Optional[int]: New like count if the server reported it
        """
        data = await self._request("DELETE", f"/status/{status_id}/like")
        return self._parse_like_count(data)

    async def delete_status(self, status_id: int) -> bool:
        """
        Delete one of the user's own statuses.

        Returns:
            bool: True once the server accepted the deletion
        """
        await self._request("DELETE", f"/status/{status_id}")
        logger.info(f"Deleted status {status_id}")
        return True

    def _parse_statuses_response(self, data: Optional[Dict[str, Any]]) -> List[Status]:
        """
        Parse a paginated status list.

        Raises:
            DataParsingException: If the payload is malformed
        """
        if not data or "data" not in data:
            logger.warning("No status data in API response")
            return []

        statuses = []
        for status_data in data["data"]:
            try:
                statuses.append(Status.from_dict(status_data))
            except (KeyError, TypeError, ValueError) as e:
                raise DataParsingException(f"Invalid status payload: {e}")
        return statuses

    def _parse_statistics_response(
        self, data: Optional[Dict[str, Any]]
    ) -> PersonalStatistics:
        if not data or "data" not in data:
            raise DataParsingException("No statistics data in API response")

        try:
            return PersonalStatistics.from_dict(data["data"])
        except (KeyError, TypeError, ValueError) as e:
            raise DataParsingException(f"Invalid statistics payload: {e}")

    def _parse_like_count(self, data: Optional[Dict[str, Any]]) -> Optional[int]:
        if not data:
            return None
        payload = data.get("data")
        if isinstance(payload, dict) and isinstance(payload.get("count"), int):
            return payload["count"]
        return None
