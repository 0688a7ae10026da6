"""
Empty state widget for when no check-ins are available.

This module provides a widget that displays a friendly message when there is
nothing to show, with proper theming support.
"""

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from .base_widget import BaseThemedWidget


class EmptyStateWidget(BaseThemedWidget):
    """Widget displayed when a list has no entries."""

    def __init__(
        self,
        message: str = "Nobody is travelling right now",
        subtitle: str = "Pull new check-ins with the refresh button",
        theme: str = "dark",
        parent: Optional[QWidget] = None,
    ):
        """
        Initialize empty state widget.

        Args:
            message: Main message to display
            subtitle: Secondary line below the message
            theme: Current theme ("dark" or "light")
            parent: Parent widget
        """
        super().__init__(parent)
        self.current_theme = theme

        self._setup_ui(message, subtitle)
        self._apply_theme_styles()

    def _setup_ui(self, message: str, subtitle: str) -> None:
        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.icon_label = QLabel("🚉")
        icon_font = QFont()
        icon_font.setPointSize(48)
        self.icon_label.setFont(icon_font)
        self.icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.icon_label)

        self.message_label = QLabel(message)
        message_font = QFont()
        message_font.setPointSize(16)
        self.message_label.setFont(message_font)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.message_label)

        self.subtitle_label = QLabel(subtitle)
        subtitle_font = QFont()
        subtitle_font.setPointSize(12)
        self.subtitle_label.setFont(subtitle_font)
        self.subtitle_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.subtitle_label.setVisible(bool(subtitle))
        layout.addWidget(self.subtitle_label)

    def _apply_theme_styles(self) -> None:
        colors = self.get_theme_colors()
        self.setStyleSheet(
            f"QLabel {{ color: {colors['text_secondary']}; background-color: transparent; }}"
        )
