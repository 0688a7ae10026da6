"""
Theme management for the Traewelling desktop client.

This module handles switching between light and dark themes, managing theme
state, and providing the palettes widgets and charts are styled with.
"""

from PySide6.QtCore import QObject, Signal

THEME_COLORS = {
    "dark": {
        "background_primary": "#1b1b1f",
        "background_secondary": "#2a2a30",
        "background_hover": "#3a3a42",
        "text_primary": "#f4f4f6",
        "text_secondary": "#b4b4bc",
        "text_disabled": "#6c6c74",
        "primary_accent": "#f0767c",
        "border_primary": "#3a3a42",
        "success": "#4caf50",
        "warning": "#ff9800",
        "error": "#f44336",
        "heart": "#e53950",
        "star": "#f5c518",
    },
    "light": {
        "background_primary": "#ffffff",
        "background_secondary": "#f6f1f1",
        "background_hover": "#ece4e4",
        "text_primary": "#1f1f1f",
        "text_secondary": "#6d6d6d",
        "text_disabled": "#bdbdbd",
        "primary_accent": "#c72730",
        "border_primary": "#e0d6d6",
        "success": "#388e3c",
        "warning": "#f57c00",
        "error": "#d32f2f",
        "heart": "#d0263e",
        "star": "#d9a400",
    },
}


def get_theme_colors(theme: str) -> dict:
    """
    Get the color palette for a theme.

    Args:
        theme: Theme name ("dark" or "light"); unknown names fall back to dark

    Returns:
        dict: Color names mapped to hex values
    """
    return THEME_COLORS.get(theme, THEME_COLORS["dark"])


class ThemeManager(QObject):
    """
    Manages application themes and theme switching.

    Provides functionality to switch between light and dark themes and emits
    a signal when the theme changes so widgets can restyle themselves.
    """

    # Signal emitted when theme changes (theme_name: str)
    theme_changed = Signal(str)

    def __init__(self, theme: str = "dark"):
        """Initialize the theme manager, defaulting to the dark theme."""
        super().__init__()
        self.current_theme = theme if theme in THEME_COLORS else "dark"

    def switch_theme(self) -> None:
        """Switch between light and dark themes."""
        self.current_theme = "light" if self.current_theme == "dark" else "dark"
        self.theme_changed.emit(self.current_theme)

    def set_theme(self, theme_name: str) -> None:
        """
        Set specific theme.

        Args:
            theme_name: Theme name ("dark" or "light")
        """
        if theme_name in THEME_COLORS and theme_name != self.current_theme:
            self.current_theme = theme_name
            self.theme_changed.emit(self.current_theme)

    def get_theme_icon(self) -> str:
        """Get appropriate theme toggle icon."""
        return "☀️" if self.current_theme == "dark" else "🌙"

    def get_theme_tooltip(self) -> str:
        return (
            "Switch to Light Theme"
            if self.current_theme == "dark"
            else "Switch to Dark Theme"
        )

    def get_current_colors(self) -> dict:
        """Get all colors for current theme."""
        return get_theme_colors(self.current_theme)

    def get_main_window_stylesheet(self) -> str:
        """
        Get main window stylesheet for current theme.

        Returns:
            str: CSS stylesheet for main window
        """
        colors = self.get_current_colors()

        return f"""
        QMainWindow, QTabWidget::pane {{
            background-color: {colors['background_primary']};
            color: {colors['text_primary']};
        }}

        QTabBar::tab {{
            background-color: {colors['background_secondary']};
            color: {colors['text_secondary']};
            padding: 8px 16px;
        }}

        QTabBar::tab:selected {{
            color: {colors['primary_accent']};
            border-bottom: 2px solid {colors['primary_accent']};
        }}

        QToolBar {{
            background-color: {colors['background_secondary']};
            border-bottom: 1px solid {colors['border_primary']};
        }}

        QStatusBar {{
            background-color: {colors['background_secondary']};
            color: {colors['text_secondary']};
            border-top: 1px solid {colors['border_primary']};
        }}
        """
