"""
Utility functions for the Traewelling desktop client.

This module contains the time calculations and display formatting used
throughout the application.
"""

from .helpers import (
    calculate_progress,
    first_present,
    normalize_date_range,
    progress_for_display,
    resolve_time_display,
)

__all__ = [
    "calculate_progress",
    "first_present",
    "normalize_date_range",
    "progress_for_display",
    "resolve_time_display",
]
