"""
Base class for themed widgets.

All check-in and statistics widgets inherit from it to share theme handling
and logging.
"""

import logging
from typing import Dict, Optional

from PySide6.QtWidgets import QFrame, QWidget

from ...managers.theme_manager import get_theme_colors


class BaseThemedWidget(QFrame):
    """
    Base class for the application's widgets.

    Provides theme support, a per-class logger, and standardized initialization.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        """
        Initialize base widget.

        Args:
            parent: Parent widget
        """
        super().__init__(parent)
        self.current_theme = "dark"
        self.logger = logging.getLogger(self.__class__.__name__)
        # Set object name for easier debugging and styling
        self.setObjectName(self.__class__.__name__)

    def update_theme(self, theme: str) -> None:
        """
        Update widget theme and refresh styling.

        Args:
            theme: New theme name ("dark" or "light")
        """
        if theme != self.current_theme:
            self.current_theme = theme
            self._apply_theme_styles()

    def _apply_theme_styles(self) -> None:
        """
        Apply theme-specific styles to the widget.

        Subclasses define their own styling here.
        """
        pass

    def get_theme_colors(self, theme: Optional[str] = None) -> Dict[str, str]:
        """Get the palette for the given theme, or the current one."""
        return get_theme_colors(theme or self.current_theme)
