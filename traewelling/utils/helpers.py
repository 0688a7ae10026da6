"""
Helper utility functions for the Traewelling desktop client.

This module contains the time calculations behind the check-in card and the
statistics screen: effective timestamp resolution, travel progress, delay
detection and date range normalization, plus formatting for display.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, TypeVar, Union

from dateutil.parser import isoparse

T = TypeVar("T")

DateLike = Union[date, datetime]


def first_present(*values: Optional[T]) -> Optional[T]:
    """
    Resolve an ordered chain of optional values.

    Args:
        values: Candidates ordered from most to least specific

    Returns:
        The first value that is not None, or None if all are missing
    """
    for value in values:
        if value is not None:
            return value
    return None


def local_now() -> datetime:
    """Get the current instant as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def calculate_progress(
    from_time: datetime, to_time: datetime, now: Optional[datetime] = None
) -> float:
    """
    Calculate how far a journey has progressed.

    Args:
        from_time: Effective departure instant
        to_time: Effective arrival instant
        now: Instant to evaluate at (defaults to the current instant)

    Returns:
        float: 1.0 at or after arrival, 0.0 at or before departure, otherwise
        the elapsed fraction of the journey. A journey whose arrival is not
        after its departure is complete once its departure has passed.
    """
    if now is None:
        now = local_now()

    if now >= to_time:
        return 1.0
    if now <= from_time:
        return 0.0

    # from_time < now < to_time, so the span is positive
    elapsed = (now - from_time).total_seconds()
    return elapsed / (to_time - from_time).total_seconds()


def progress_for_display(progress: float) -> float:
    """
    Coerce a progress value into something a progress bar can show.

    NaN is shown as fully elapsed.
    """
    if math.isnan(progress):
        return 1.0
    return min(max(progress, 0.0), 1.0)


@dataclass(frozen=True)
class TimeDisplay:
    """Which timestamp a station row shows and whether it is delayed."""

    primary: datetime
    planned: datetime
    has_delay: bool

    @property
    def struck_through(self) -> Optional[datetime]:
        """Planned time shown crossed out next to a delayed primary time."""
        return self.planned if self.has_delay else None


def resolve_time_display(planned: datetime, real: Optional[datetime]) -> TimeDisplay:
    """
    Decide between planned and real time for a departure or arrival.

    Any non-zero difference counts as a delay.

    Args:
        planned: Scheduled time
        real: Actual or manually entered time, if known

    Returns:
        TimeDisplay: Primary time and delay flag
    """
    has_delay = (first_present(real, planned) - planned) != timedelta(0)
    if has_delay and real is not None:
        return TimeDisplay(primary=real, planned=planned, has_delay=True)
    return TimeDisplay(primary=planned, planned=planned, has_delay=False)


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def normalize_date_range(start: DateLike, end: DateLike) -> Tuple[datetime, datetime]:
    """
    Expand a picked date range to whole days in local time.

    Args:
        start: First day of the range (time of day is ignored)
        end: Last day of the range (time of day is ignored)

    Returns:
        Tuple of start at 00:00 and end at 23:59, both timezone-aware
    """
    first_day, last_day = sorted((_as_date(start), _as_date(end)))
    range_start = datetime.combine(first_day, time(0, 0)).astimezone()
    range_end = datetime.combine(last_day, time(23, 59)).astimezone()
    return range_start, range_end


def default_date_range() -> Tuple[datetime, datetime]:
    """Get the normalized range covering today."""
    today = date.today()
    return normalize_date_range(today, today)


def parse_api_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO 8601 timestamp from the API.

    Args:
        value: Timestamp string such as "2024-01-05T08:00:00+01:00"

    Returns:
        Optional[datetime]: Timezone-aware datetime, or None for empty input

    Raises:
        ValueError: If the string is not a valid timestamp
    """
    if not value:
        return None
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed


def format_local_time(dt: datetime) -> str:
    """
    Format datetime to HH:MM in local time.

    Args:
        dt: Datetime object to format

    Returns:
        str: Formatted time string
    """
    return dt.astimezone().strftime("%H:%M")


def format_local_datetime(dt: datetime) -> str:
    """Format datetime to a short local date and time."""
    return dt.astimezone().strftime("%d.%m.%Y %H:%M")


def format_distance(meters: int) -> str:
    """
    Format a travelled distance.

    Args:
        meters: Distance in metres

    Returns:
        str: "850 m" below one kilometre, otherwise whole kilometres ("12 km")
    """
    if meters < 1000:
        return f"{meters} m"
    return f"{meters // 1000} km"


def format_duration(minutes: int) -> str:
    """
    Format a duration given in minutes.

    Returns:
        str: Formatted duration string (e.g., "1h 30m", "45m")
    """
    hours = minutes // 60
    remainder = minutes % 60

    if hours > 0:
        return f"{hours}h {remainder}m"
    else:
        return f"{remainder}m"
