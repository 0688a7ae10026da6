"""
User interface components for the Träwelling desktop client.

This module contains the main window and the check-in and statistics
widgets.
"""

from .main_window import MainWindow
from .widgets.active_checkins_widget import ActiveCheckinsWidget
from .widgets.check_in_card import CheckInCardWidget

__all__ = ["MainWindow", "ActiveCheckinsWidget", "CheckInCardWidget"]
