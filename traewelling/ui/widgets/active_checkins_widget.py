"""
Active check-ins list widget.

This module provides the scrollable list of check-in cards shown on the
dashboard, with a refresh button and an empty state.
"""

import logging
from typing import List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from ...managers.config_manager import ConfigData
from ...managers.status_manager import ActiveCheckinsManager, CheckInCardManager
from ...models.status_data import Status
from .base_widget import BaseThemedWidget
from .check_in_card import CheckInCardWidget
from .empty_state_widget import EmptyStateWidget

logger = logging.getLogger(__name__)


class ActiveCheckinsWidget(BaseThemedWidget):
    """
    List of the check-ins currently en route.

    The refresh indicator stays on until the manager publishes a new list or
    finishes loading. A failed refresh keeps the cards already shown.
    """

    status_selected = Signal(int)
    user_selected = Signal(str)
    station_selected = Signal(int, object)
    join_connection_requested = Signal(object)
    edit_requested = Signal(object)
    share_requested = Signal(object)
    report_requested = Signal(object)

    def __init__(
        self,
        checkins_manager: ActiveCheckinsManager,
        card_manager: Optional[CheckInCardManager] = None,
        config: Optional[ConfigData] = None,
        theme: str = "dark",
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.current_theme = theme
        self.checkins_manager = checkins_manager
        self.card_manager = card_manager
        self.config = config or ConfigData()

        self.cards: List[CheckInCardWidget] = []
        self.is_refreshing = False

        self._setup_ui()
        self._connect_signals()
        self._apply_theme_styles()

        if checkins_manager.current_statuses:
            self.update_statuses(checkins_manager.current_statuses)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)

        header_layout = QHBoxLayout()
        self.title_label = QLabel("Active check-ins")
        title_font = QFont()
        title_font.setPointSize(16)
        title_font.setBold(True)
        self.title_label.setFont(title_font)
        header_layout.addWidget(self.title_label)
        header_layout.addStretch()

        self.refresh_button = QPushButton("🔄")
        self.refresh_button.setToolTip("Refresh check-ins")
        self.refresh_button.setFixedSize(36, 36)
        self.refresh_button.clicked.connect(self.refresh)
        header_layout.addWidget(self.refresh_button)
        layout.addLayout(header_layout)

        self.refresh_indicator = QProgressBar()
        self.refresh_indicator.setRange(0, 0)
        self.refresh_indicator.setTextVisible(False)
        self.refresh_indicator.setFixedHeight(3)
        self.refresh_indicator.setVisible(False)
        layout.addWidget(self.refresh_indicator)

        self.container_widget = QWidget()
        self.container_layout = QVBoxLayout(self.container_widget)
        self.container_layout.setContentsMargins(0, 0, 0, 0)
        self.container_layout.setSpacing(8)
        self.container_layout.addStretch()

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidget(self.container_widget)
        self.scroll_area.setWidgetResizable(True)
        self.scroll_area.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.scroll_area.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding
        )
        layout.addWidget(self.scroll_area, 1)

        self.empty_state = EmptyStateWidget(theme=self.current_theme)
        layout.addWidget(self.empty_state, 1)

        self._update_empty_state()

    def _connect_signals(self) -> None:
        self.checkins_manager.statuses_updated.connect(self.update_statuses)
        self.checkins_manager.loading_changed.connect(self._on_loading_changed)
        self.checkins_manager.error_occurred.connect(self._on_error)

    def refresh(self) -> None:
        """Start a refresh and show the refresh indicator."""
        self.set_refreshing(True)
        self.checkins_manager.refresh()

    def set_refreshing(self, refreshing: bool) -> None:
        self.is_refreshing = refreshing
        self.refresh_indicator.setVisible(refreshing)
        self.refresh_button.setEnabled(not refreshing)

    def _on_loading_changed(self, loading: bool) -> None:
        if not loading:
            self.set_refreshing(False)

    def _on_error(self, message: str) -> None:
        logger.warning(f"Refresh failed, keeping {len(self.cards)} cards: {message}")
        self.set_refreshing(False)

    def update_statuses(self, statuses: List[Status]) -> None:
        """
        Replace the displayed cards.

        Args:
            statuses: Check-ins to display, in order
        """
        self.set_refreshing(False)
        self.clear_cards()

        for status in statuses:
            self.add_card(status)

        self._update_empty_state()
        logger.debug(f"Displaying {len(self.cards)} check-in cards")

    def add_card(self, status: Status) -> CheckInCardWidget:
        card = CheckInCardWidget(
            status, self.card_manager, self.config, theme=self.current_theme
        )
        card.status_selected.connect(self.status_selected)
        card.user_selected.connect(self.user_selected)
        card.station_selected.connect(self.station_selected)
        card.join_connection_requested.connect(self.join_connection_requested)
        card.edit_requested.connect(self.edit_requested)
        card.share_requested.connect(self.share_requested)
        card.report_requested.connect(self.report_requested)
        card.deleted.connect(self._on_card_deleted)

        # Insert before the trailing stretch
        self.container_layout.insertWidget(self.container_layout.count() - 1, card)
        self.cards.append(card)
        return card

    def clear_cards(self) -> None:
        for card in self.cards:
            card.release_subscriptions()
            self.container_layout.removeWidget(card)
            card.deleteLater()
        self.cards.clear()

    def _on_card_deleted(self, status: Status) -> None:
        self.checkins_manager.remove_status(status.id)

    def _update_empty_state(self) -> None:
        has_cards = bool(self.cards)
        self.scroll_area.setVisible(has_cards)
        self.empty_state.setVisible(not has_cards)

    def _apply_theme_styles(self) -> None:
        colors = self.get_theme_colors()
        self.setStyleSheet(
            f"""
            ActiveCheckinsWidget {{
                background-color: {colors['background_primary']};
                border: none;
            }}
            QScrollArea, QScrollArea > QWidget > QWidget {{
                background-color: {colors['background_primary']};
                border: none;
            }}
            QPushButton {{
                background-color: {colors['background_secondary']};
                color: {colors['text_primary']};
                border: 1px solid {colors['border_primary']};
                border-radius: 18px;
            }}
            QPushButton:hover {{
                background-color: {colors['background_hover']};
            }}
            QProgressBar::chunk {{
                background-color: {colors['primary_accent']};
            }}
            """
        )
        self.title_label.setStyleSheet(f"color: {colors['text_primary']};")
        self.empty_state.update_theme(self.current_theme)
        for card in self.cards:
            card.update_theme(self.current_theme)
