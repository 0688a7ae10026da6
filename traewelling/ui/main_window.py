"""
Main window for the Träwelling desktop client.

This module contains the primary application window with the active
check-ins and statistics tabs, a toolbar with refresh and theme switching,
and a status bar for errors.
"""

import logging
from datetime import datetime
from typing import Optional
from urllib.parse import quote, urlencode

from PySide6.QtCore import QUrl, Signal
from PySide6.QtGui import QAction, QDesktopServices, QGuiApplication, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMessageBox, QStatusBar, QTabWidget, QToolBar

from version import __app_display_name__, get_about_text
from ..api.api_manager import RateLimiter
from ..managers.config_manager import ConfigManager
from ..managers.statistics_manager import StatisticsManager
from ..managers.status_manager import ActiveCheckinsManager, CheckInCardManager
from ..managers.theme_manager import ThemeManager
from ..models.status_data import Status
from .widgets.active_checkins_widget import ActiveCheckinsWidget
from .widgets.statistics_widget import StatisticsWidget

logger = logging.getLogger(__name__)

STATUS_MESSAGE_TIMEOUT_MS = 8000


class MainWindow(QMainWindow):
    """
    Main application window.

    Owns the managers for its lifetime and stops their timers when closed.
    """

    theme_changed = Signal(str)

    def __init__(self, config_manager: ConfigManager, api_factory=None):
        """
        Initialize the main window.

        Args:
            config_manager: Loaded configuration manager
            api_factory: Optional factory for API clients, passed to managers
        """
        super().__init__()

        self.config_manager = config_manager
        self.config = config_manager.config or config_manager.load_config()
        self.theme_manager = ThemeManager(self.config.display.theme)

        # One request budget for the whole app
        self.rate_limiter = RateLimiter(self.config.api.rate_limit_per_minute)
        self.checkins_manager = ActiveCheckinsManager(
            self.config, api_factory, self, self.rate_limiter
        )
        self.card_manager = CheckInCardManager(
            self.config, api_factory, self, self.rate_limiter
        )
        self.statistics_manager = StatisticsManager(
            self.config, api_factory, self, self.rate_limiter
        )

        self.setWindowTitle(f"🚆 {__app_display_name__}")
        self.resize(*self.config.ui.window_size)

        self.setup_ui()
        self.setup_menu_bar()
        self.setup_toolbar()
        self.connect_signals()
        self.apply_theme()

        if not self.config_manager.validate_api_token():
            self.show_status_message("No API token configured, edit the config file")

        logger.debug("Main window initialized")

    def setup_ui(self) -> None:
        self.tabs = QTabWidget()
        theme = self.theme_manager.current_theme

        self.active_checkins_widget = ActiveCheckinsWidget(
            self.checkins_manager, self.card_manager, self.config, theme=theme
        )
        self.tabs.addTab(self.active_checkins_widget, "Active check-ins")

        self.statistics_widget = StatisticsWidget(self.statistics_manager, theme=theme)
        self.tabs.addTab(self.statistics_widget, "Statistics")

        self.setCentralWidget(self.tabs)
        self.setStatusBar(QStatusBar())

    def setup_menu_bar(self) -> None:
        menubar = self.menuBar()
        menubar.setNativeMenuBar(False)

        file_menu = menubar.addMenu("&File")
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence("Ctrl+Q"))
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = menubar.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self.show_about_dialog)
        help_menu.addAction(about_action)

    def setup_toolbar(self) -> None:
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.refresh_action = QAction("🔄 Refresh", self)
        self.refresh_action.setShortcut(QKeySequence("F5"))
        self.refresh_action.triggered.connect(self.manual_refresh)
        toolbar.addAction(self.refresh_action)

        self.theme_action = QAction(self.theme_manager.get_theme_icon(), self)
        self.theme_action.setToolTip(self.theme_manager.get_theme_tooltip())
        self.theme_action.triggered.connect(self.toggle_theme)
        toolbar.addAction(self.theme_action)

    def connect_signals(self) -> None:
        self.theme_manager.theme_changed.connect(self.on_theme_changed)

        for manager in (self.checkins_manager, self.card_manager, self.statistics_manager):
            manager.error_occurred.connect(self.show_status_message)

        widget = self.active_checkins_widget
        widget.status_selected.connect(self.open_status_page)
        widget.user_selected.connect(self.open_user_page)
        widget.station_selected.connect(self.open_station_board)
        widget.join_connection_requested.connect(self._open_status_on_web)
        widget.edit_requested.connect(self._open_status_on_web)
        widget.report_requested.connect(self._open_status_on_web)
        widget.share_requested.connect(self.share_status)

    def manual_refresh(self) -> None:
        """Refresh the tab currently shown."""
        if self.tabs.currentWidget() is self.statistics_widget:
            self.statistics_manager.request_statistics()
        else:
            self.active_checkins_widget.refresh()

    def toggle_theme(self) -> None:
        """Toggle between light and dark themes and persist the choice."""
        self.theme_manager.switch_theme()
        if self.config_manager.update_theme(self.theme_manager.current_theme):
            logger.info(f"Theme switched to {self.theme_manager.current_theme}")

    def on_theme_changed(self, theme_name: str) -> None:
        self.apply_theme()
        self.active_checkins_widget.update_theme(theme_name)
        self.statistics_widget.update_theme(theme_name)
        self.theme_action.setText(self.theme_manager.get_theme_icon())
        self.theme_action.setToolTip(self.theme_manager.get_theme_tooltip())
        self.theme_changed.emit(theme_name)

    def apply_theme(self) -> None:
        self.setStyleSheet(self.theme_manager.get_main_window_stylesheet())

    def show_status_message(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def web_url(self, path: str) -> QUrl:
        return QUrl(f"{self.config.api.web_url.rstrip('/')}{path}")

    def open_status_page(self, status_id: int) -> bool:
        return QDesktopServices.openUrl(self.web_url(f"/status/{status_id}"))

    def open_user_page(self, username: str) -> bool:
        return QDesktopServices.openUrl(self.web_url(f"/@{quote(username)}"))

    def open_station_board(self, station_id: int, when: Optional[datetime]) -> bool:
        params = {"stationId": station_id}
        if when is not None:
            params["when"] = when.isoformat()
        return QDesktopServices.openUrl(self.web_url(f"/stationboard?{urlencode(params)}"))

    def _open_status_on_web(self, status: Status) -> None:
        # Editing, joining a connection and reporting happen on the website
        self.open_status_page(status.id)

    def share_status(self, status: Status) -> str:
        """Copy the status link to the clipboard."""
        url = self.web_url(f"/status/{status.id}").toString()
        QGuiApplication.clipboard().setText(url)
        self.show_status_message("Link to the check-in copied to the clipboard")
        return url

    def show_about_dialog(self) -> None:
        about_text = get_about_text()
        about_text += f"<p><small>Config: {self.config_manager.config_path}</small></p>"

        msg_box = QMessageBox(self)
        msg_box.setIcon(QMessageBox.Icon.Information)
        msg_box.setWindowTitle("About")
        msg_box.setText(about_text)
        msg_box.exec()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if not self.checkins_manager.is_auto_refresh_active():
            self.checkins_manager.start_auto_refresh()
            self.active_checkins_widget.refresh()
            self.statistics_manager.request_statistics()

    def closeEvent(self, event) -> None:
        """Stop timers and store the window size before closing."""
        logger.debug("Application closing")
        self.checkins_manager.stop_auto_refresh()
        self.active_checkins_widget.clear_cards()

        self.config.ui.window_size = (self.width(), self.height())
        self.config_manager.save_config(self.config)

        super().closeEvent(event)
