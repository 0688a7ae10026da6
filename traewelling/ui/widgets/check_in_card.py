"""
Check-in card widget.

This module provides the card shown for each check-in: destination and
origin rows with delay-aware times, journey details, a travel-progress bar
that re-samples while the card is visible, and a footer with likes, author,
visibility and the actions available for the status.
"""

from datetime import datetime
from typing import List, Optional

from PySide6.QtCore import QEasingCurve, QPropertyAnimation, Qt, QTimer, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMenu,
    QProgressBar,
    QPushButton,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from version import __app_name__
from ...managers.config_manager import ConfigData
from ...managers.status_manager import CheckInCardManager
from ...models.status_data import Status, TripStation
from ...utils.helpers import (
    TimeDisplay,
    calculate_progress,
    format_distance,
    format_duration,
    format_local_datetime,
    format_local_time,
    progress_for_display,
    resolve_time_display,
)
from .base_widget import BaseThemedWidget

# Progress bar resolution
PROGRESS_STEPS = 1000
PROGRESS_ANIMATION_MS = 500


class ClickableLabel(QLabel):
    """Label emitting clicked on a left mouse press."""

    clicked = Signal()

    def __init__(self, text: str = "", parent: Optional[QWidget] = None):
        super().__init__(text, parent)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mousePressEvent(event)


class StationRowWidget(BaseThemedWidget):
    """
    Station name with its departure or arrival time.

    A delayed time is shown as the real time with the planned time struck
    through below it.
    """

    # station id, selected time (None when the name was clicked)
    station_selected = Signal(int, object)

    def __init__(
        self,
        station: TripStation,
        time_planned: Optional[datetime],
        time_real: Optional[datetime],
        align_bottom: bool = False,
        theme: str = "dark",
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.current_theme = theme
        self.station = station
        self.time_display: Optional[TimeDisplay] = None

        planned = time_planned if time_planned is not None else time_real
        if planned is not None:
            self.time_display = resolve_time_display(planned, time_real)

        self._setup_ui(align_bottom)
        self._apply_theme_styles()

    @property
    def has_delay(self) -> bool:
        return self.time_display is not None and self.time_display.has_delay

    @property
    def displayed_time(self) -> Optional[datetime]:
        return self.time_display.primary if self.time_display else None

    def _setup_ui(self, align_bottom: bool) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        vertical = (
            Qt.AlignmentFlag.AlignBottom if align_bottom else Qt.AlignmentFlag.AlignTop
        )

        self.name_label = ClickableLabel(self.station.name)
        self.name_label.setWordWrap(True)
        name_font = QFont()
        name_font.setPointSize(15)
        name_font.setBold(True)
        self.name_label.setFont(name_font)
        self.name_label.clicked.connect(
            lambda: self.station_selected.emit(self.station.id, None)
        )
        layout.addWidget(self.name_label, 1, vertical)

        time_layout = QVBoxLayout()
        time_layout.setSpacing(0)

        primary_text = (
            format_local_time(self.time_display.primary) if self.time_display else "--:--"
        )
        self.time_label = ClickableLabel(primary_text)
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.time_label.setFont(name_font)
        self.time_label.clicked.connect(
            lambda: self.station_selected.emit(self.station.id, self.displayed_time)
        )
        time_layout.addWidget(self.time_label)

        self.planned_label = QLabel("")
        self.planned_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        planned_font = QFont()
        planned_font.setPointSize(11)
        planned_font.setStrikeOut(True)
        self.planned_label.setFont(planned_font)
        if self.has_delay:
            self.planned_label.setText(format_local_time(self.time_display.planned))
        self.planned_label.setVisible(self.has_delay)
        time_layout.addWidget(self.planned_label)

        layout.addLayout(time_layout)

    def _apply_theme_styles(self) -> None:
        colors = self.get_theme_colors()
        self.name_label.setStyleSheet(f"color: {colors['primary_accent']};")
        self.time_label.setStyleSheet(f"color: {colors['primary_accent']};")
        self.planned_label.setStyleSheet(f"color: {colors['text_secondary']};")


class CheckInCardWidget(BaseThemedWidget):
    """
    Card displaying a single check-in.

    The progress bar is re-sampled on a timer that only runs while the card
    is visible. Like and delete results arrive from the card manager; local
    state changes only after the server confirmed them.
    """

    status_selected = Signal(int)
    user_selected = Signal(str)
    station_selected = Signal(int, object)
    join_connection_requested = Signal(object)  # Status
    edit_requested = Signal(object)  # Status
    share_requested = Signal(object)  # Status
    report_requested = Signal(object)  # Status
    deleted = Signal(object)  # Status

    def __init__(
        self,
        status: Status,
        card_manager: Optional[CheckInCardManager] = None,
        config: Optional[ConfigData] = None,
        theme: str = "dark",
        parent: Optional[QWidget] = None,
    ):
        """
        Initialize check-in card.

        Args:
            status: Check-in to display
            card_manager: Performs like and delete requests
            config: Application configuration
            theme: Current theme ("dark" or "light")
            parent: Parent widget
        """
        super().__init__(parent)
        self.current_theme = theme
        self.status = status
        self.card_manager = card_manager
        self.config = config or ConfigData()

        self.liked = status.is_liked
        self.like_count = status.like_count
        self.progress = 0.0
        self.is_own_status = status.is_own_status(self.config.logged_in_user_id)

        self.edit_action = None
        self.delete_action = None
        self.join_action = None
        self.share_action = None
        self.report_action = None

        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Maximum)

        self._setup_ui()
        self._setup_progress_timer()
        self._subscribe()
        self._apply_theme_styles()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(12)

        journey = self.status.journey

        self.destination_row = StationRowWidget(
            journey.destination,
            journey.destination.arrival_planned,
            journey.displayed_arrival_real,
            theme=self.current_theme,
        )
        self.destination_row.station_selected.connect(self.station_selected)
        layout.addWidget(self.destination_row)

        self._create_content(layout)

        self.origin_row = StationRowWidget(
            journey.origin,
            journey.origin.departure_planned,
            journey.displayed_departure_real,
            align_bottom=True,
            theme=self.current_theme,
        )
        self.origin_row.station_selected.connect(self.station_selected)
        layout.addWidget(self.origin_row)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, PROGRESS_STEPS)
        self.progress_bar.setValue(0)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedHeight(6)
        layout.addWidget(self.progress_bar)

        self._progress_animation = QPropertyAnimation(self.progress_bar, b"value", self)
        self._progress_animation.setDuration(PROGRESS_ANIMATION_MS)
        self._progress_animation.setEasingCurve(QEasingCurve.Type.OutCubic)

        self._create_footer(layout)

    def _create_content(self, layout: QVBoxLayout) -> None:
        """Create journey details and the status message."""
        journey = self.status.journey
        content_layout = QVBoxLayout()
        content_layout.setContentsMargins(0, 8, 0, 8)
        content_layout.setSpacing(8)

        details_layout = QHBoxLayout()
        details_layout.setSpacing(8)

        self.product_label = QLabel(journey.product_type.icon)
        self.product_label.setToolTip(journey.product_type.display_name)
        details_layout.addWidget(self.product_label)

        self.line_label = QLabel(journey.format_line())
        line_font = QFont()
        line_font.setBold(True)
        self.line_label.setFont(line_font)
        details_layout.addWidget(self.line_label)

        self.distance_label = QLabel(format_distance(journey.distance))
        details_layout.addWidget(self.distance_label)

        self.duration_label = QLabel(format_duration(journey.duration))
        details_layout.addWidget(self.duration_label)

        self.business_label = QLabel(self.status.business.icon)
        self.business_label.setToolTip(self.status.business.name.title())
        details_layout.addWidget(self.business_label)

        details_layout.addStretch()
        content_layout.addLayout(details_layout)

        self.body_label = None
        if self.status.body:
            self.body_label = QLabel(f"❝ {self.status.body}")
            self.body_label.setWordWrap(True)
            content_layout.addWidget(self.body_label)

        layout.addLayout(content_layout)

    def _create_footer(self, layout: QVBoxLayout) -> None:
        """Create tags, like toggle, author line, menu and event row."""
        self.tag_labels: List[QLabel] = []
        if self.config.display.display_tags_in_card and self.status.tags:
            tags_layout = QHBoxLayout()
            tags_layout.setSpacing(6)
            for tag in self.status.tags:
                tag_label = QLabel(f"🏷 {tag.format()}")
                tags_layout.addWidget(tag_label)
                self.tag_labels.append(tag_label)
            tags_layout.addStretch()
            layout.addLayout(tags_layout)

        footer_layout = QHBoxLayout()

        self.like_button = QPushButton()
        self.like_button.setFlat(True)
        self.like_button.clicked.connect(self.toggle_like)
        self.like_button.setVisible(self.status.can_be_liked)
        self._update_like_button()
        footer_layout.addWidget(self.like_button)

        footer_layout.addStretch()

        if self.config.display.display_long_date:
            date_text = format_local_datetime(self.status.created_at)
        else:
            date_text = format_local_time(self.status.created_at)
        self.user_label = ClickableLabel(f"{self.status.user.username}, {date_text}")
        self.user_label.clicked.connect(
            lambda: self.user_selected.emit(self.status.user.username)
        )
        footer_layout.addWidget(self.user_label)

        self.visibility_label = QLabel(self.status.visibility.icon)
        self.visibility_label.setToolTip(self.status.visibility.name.title())
        footer_layout.addWidget(self.visibility_label)

        self.menu_button = QToolButton()
        self.menu_button.setText("⋮")
        self.menu_button.setPopupMode(QToolButton.ToolButtonPopupMode.InstantPopup)
        self.menu_button.setMenu(self._create_menu())
        footer_layout.addWidget(self.menu_button)

        layout.addLayout(footer_layout)

        self.event_label = None
        if self.status.has_event:
            self.event_label = QLabel(f"📅 {self.status.event.name}")
            layout.addWidget(self.event_label)

    def _create_menu(self) -> QMenu:
        menu = QMenu(self)
        if self.is_own_status:
            self.edit_action = menu.addAction("✏️ Edit")
            self.edit_action.triggered.connect(
                lambda: self.edit_requested.emit(self.status)
            )
            self.delete_action = menu.addAction("🗑️ Delete")
            self.delete_action.triggered.connect(self.request_delete)
            self.share_action = menu.addAction("🔗 Share")
            self.share_action.triggered.connect(
                lambda: self.share_requested.emit(self.status)
            )
        else:
            self.join_action = menu.addAction("➕ Also check in")
            self.join_action.triggered.connect(
                lambda: self.join_connection_requested.emit(self.status)
            )
            self.report_action = menu.addAction("⚠️ Report")
            self.report_action.triggered.connect(
                lambda: self.report_requested.emit(self.status)
            )
        return menu

    def _setup_progress_timer(self) -> None:
        self._progress_timer = QTimer(self)
        self._progress_timer.setInterval(
            self.config.refresh.progress_interval_seconds * 1000
        )
        self._progress_timer.timeout.connect(self.update_progress)

    def _subscribe(self) -> None:
        self._subscribed = False
        if self.card_manager is not None:
            self.card_manager.favorite_changed.connect(self._on_favorite_changed)
            self.card_manager.status_deleted.connect(self._on_status_deleted)
            self._subscribed = True

    def release_subscriptions(self) -> None:
        """Stop the progress timer and disconnect from the card manager."""
        self._progress_timer.stop()
        self._progress_animation.stop()
        if self._subscribed:
            self.card_manager.favorite_changed.disconnect(self._on_favorite_changed)
            self.card_manager.status_deleted.disconnect(self._on_status_deleted)
            self._subscribed = False

    def is_progress_timer_active(self) -> bool:
        return self._progress_timer.isActive()

    def update_progress(self, now: Optional[datetime] = None) -> float:
        """
        Re-sample the travel progress.

        Args:
            now: Instant to evaluate at (defaults to the current instant)

        Returns:
            float: Progress shown, between 0 and 1
        """
        journey = self.status.journey
        from_time = journey.effective_departure
        to_time = journey.effective_arrival
        if from_time is None or to_time is None:
            self.logger.debug(f"Status {self.status.id} has no timetable, progress unchanged")
            return self.progress

        self.progress = progress_for_display(calculate_progress(from_time, to_time, now))
        target = round(self.progress * PROGRESS_STEPS)

        if self.isVisible():
            self._progress_animation.stop()
            self._progress_animation.setStartValue(self.progress_bar.value())
            self._progress_animation.setEndValue(target)
            self._progress_animation.start()
        else:
            self.progress_bar.setValue(target)

        return self.progress

    def toggle_like(self) -> None:
        """Ask the card manager to like or unlike the status."""
        if self.card_manager is None:
            return
        if self.liked:
            self.card_manager.delete_favorite(self.status.id)
        else:
            self.card_manager.create_favorite(self.status.id)

    def request_delete(self) -> None:
        """Ask the card manager to delete the status."""
        if self.card_manager is not None:
            self.card_manager.delete_status(self.status.id)

    def _on_favorite_changed(self, status_id: int, liked: bool, like_count: int) -> None:
        if status_id != self.status.id or liked == self.liked:
            return

        self.liked = liked
        if like_count >= 0:
            self.like_count = like_count
        else:
            self.like_count = self.like_count + 1 if liked else max(self.like_count - 1, 0)
        self._update_like_button()

    def _on_status_deleted(self, status_id: int) -> None:
        if status_id == self.status.id:
            self.logger.info(f"Status {self.status.id} deleted")
            self.deleted.emit(self.status)

    def _update_like_button(self) -> None:
        if self.status.is_checked_in_with(__app_name__):
            icon = "♥" if self.liked else "♡"
        else:
            icon = "★" if self.liked else "☆"
        self.like_button.setText(f"{icon} {self.like_count}")
        self._style_like_button()

    def _style_like_button(self) -> None:
        colors = self.get_theme_colors()
        color_key = "heart" if self.status.is_checked_in_with(__app_name__) else "star"
        self.like_button.setStyleSheet(
            f"QPushButton {{ color: {colors[color_key]}; border: none; font-size: 14px; }}"
        )

    def _apply_theme_styles(self) -> None:
        colors = self.get_theme_colors()
        self.setStyleSheet(
            f"""
            CheckInCardWidget {{
                background-color: {colors['background_secondary']};
                border: 1px solid {colors['border_primary']};
                border-radius: 12px;
            }}
            QLabel {{
                color: {colors['text_primary']};
                background-color: transparent;
            }}
            QProgressBar {{
                background-color: {colors['background_hover']};
                border: none;
                border-radius: 3px;
            }}
            QProgressBar::chunk {{
                background-color: {colors['primary_accent']};
                border-radius: 3px;
            }}
            """
        )
        self.destination_row.update_theme(self.current_theme)
        self.origin_row.update_theme(self.current_theme)
        self._style_like_button()

    def mousePressEvent(self, event) -> None:
        """Select the status on a left click anywhere on the card."""
        if event.button() == Qt.MouseButton.LeftButton:
            self.status_selected.emit(self.status.id)
        super().mousePressEvent(event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self.update_progress()
        self._progress_timer.start()

    def hideEvent(self, event) -> None:
        self._progress_timer.stop()
        super().hideEvent(event)
