"""
UI widgets for the Träwelling desktop client.

Check-in cards, the active check-ins list and the statistics screen, all
built on the themed base widget.
"""

from .base_widget import BaseThemedWidget
from .check_in_card import CheckInCardWidget, StationRowWidget
from .active_checkins_widget import ActiveCheckinsWidget
from .empty_state_widget import EmptyStateWidget
from .statistics_widget import DateRangeDialog, StatisticsWidget

__all__ = [
    "BaseThemedWidget",
    "CheckInCardWidget",
    "StationRowWidget",
    "ActiveCheckinsWidget",
    "EmptyStateWidget",
    "DateRangeDialog",
    "StatisticsWidget",
]
