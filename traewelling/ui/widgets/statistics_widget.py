"""
Statistics widget.

This module provides the personal statistics screen: the selected date range,
a dialog for changing it, and bar charts of check-ins per operator and per
product type.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence, Tuple

from PySide6.QtCharts import QBarSeries, QBarSet, QChart, QChartView, QValueAxis
from PySide6.QtCore import QDate, Qt
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import (
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...managers.statistics_manager import StatisticsManager
from ...models.statistics_data import PersonalStatistics
from .base_widget import BaseThemedWidget

logger = logging.getLogger(__name__)

# Bar colors, cycled by data set index
DATASET_COLORS = [
    # Material
    "#2ecc71", "#f1c40f", "#e74c3c", "#3498db",
    # Vordiplom
    "#c0ff8c", "#fff78c", "#ffd08c", "#8ceaff", "#ff8c9d",
    # Colorful
    "#c12552", "#ff6600", "#f5c700", "#6a961f", "#b36435",
]

CHART_ANIMATION_MS = 500


def dataset_color(index: int) -> str:
    return DATASET_COLORS[index % len(DATASET_COLORS)]


class DateRangeDialog(QDialog):
    """Dialog for picking the first and last day of the statistics range."""

    def __init__(self, start: date, end: date, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setWindowTitle("Select date range")
        self.setModal(True)

        layout = QVBoxLayout(self)
        form = QFormLayout()

        self.start_edit = QDateEdit(QDate(start.year, start.month, start.day))
        self.start_edit.setCalendarPopup(True)
        self.start_edit.setDisplayFormat("dd.MM.yyyy")
        form.addRow("From:", self.start_edit)

        self.end_edit = QDateEdit(QDate(end.year, end.month, end.day))
        self.end_edit.setCalendarPopup(True)
        self.end_edit.setDisplayFormat("dd.MM.yyyy")
        form.addRow("Until:", self.end_edit)

        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def selected_range(self) -> Tuple[date, date]:
        """Get the picked days as (start, end)."""
        return self.start_edit.date().toPython(), self.end_edit.date().toPython()


class StatisticsWidget(BaseThemedWidget):
    """
    Personal statistics screen.

    Each operator and each product type is drawn as its own bar data set so
    the legend names every bar.
    """

    def __init__(
        self,
        statistics_manager: StatisticsManager,
        theme: str = "dark",
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.current_theme = theme
        self.statistics_manager = statistics_manager

        self._setup_ui()
        self._connect_signals()
        self._apply_theme_styles()

        self._update_range_label(*statistics_manager.date_range)
        if statistics_manager.current_statistics is not None:
            self.update_statistics(statistics_manager.current_statistics)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)

        header_layout = QHBoxLayout()
        self.range_label = QLabel()
        range_font = QFont()
        range_font.setPointSize(14)
        range_font.setBold(True)
        self.range_label.setFont(range_font)
        header_layout.addWidget(self.range_label)
        header_layout.addStretch()

        self.range_button = QPushButton("📅 Change range")
        self.range_button.clicked.connect(self.open_date_range_dialog)
        header_layout.addWidget(self.range_button)
        layout.addLayout(header_layout)

        self.total_label = QLabel("")
        layout.addWidget(self.total_label)

        self.operators_chart = self._create_chart("Operators")
        self.operators_view = QChartView(self.operators_chart)
        self.operators_view.setRenderHint(QPainter.RenderHint.Antialiasing)
        layout.addWidget(self.operators_view, 1)

        self.categories_chart = self._create_chart("Transport types")
        self.categories_view = QChartView(self.categories_chart)
        self.categories_view.setRenderHint(QPainter.RenderHint.Antialiasing)
        layout.addWidget(self.categories_view, 1)

    def _create_chart(self, title: str) -> QChart:
        chart = QChart()
        chart.setTitle(title)
        chart.setAnimationOptions(QChart.AnimationOption.SeriesAnimations)
        chart.setAnimationDuration(CHART_ANIMATION_MS)
        chart.legend().setVisible(True)
        chart.legend().setAlignment(Qt.AlignmentFlag.AlignBottom)
        return chart

    def _connect_signals(self) -> None:
        self.statistics_manager.date_range_changed.connect(self._update_range_label)
        self.statistics_manager.statistics_updated.connect(self.update_statistics)

    def open_date_range_dialog(self) -> None:
        start, end = self.statistics_manager.date_range
        dialog = DateRangeDialog(start.date(), end.date(), self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.statistics_manager.set_date_range(*dialog.selected_range())

    def _update_range_label(self, start, end) -> None:
        self.range_label.setText(f"{start:%d.%m.%Y} - {end:%d.%m.%Y}")

    def update_statistics(self, statistics: PersonalStatistics) -> None:
        """
        Redraw both charts.

        Args:
            statistics: Statistics for the selected range
        """
        self._populate_chart(
            self.operators_chart,
            [(entry.operator_name, entry.check_in_count) for entry in statistics.operators],
        )
        self._populate_chart(
            self.categories_chart,
            [
                (entry.product_type.display_name, entry.check_in_count)
                for entry in statistics.categories
            ],
        )
        self.total_label.setText(f"{statistics.total_check_ins} check-ins")
        logger.debug(
            f"Drew {len(statistics.operators)} operators and "
            f"{len(statistics.categories)} categories"
        )

    def _populate_chart(self, chart: QChart, entries: Sequence[Tuple[str, int]]) -> None:
        chart.removeAllSeries()
        for axis in chart.axes():
            chart.removeAxis(axis)

        series = QBarSeries()
        for index, (label, count) in enumerate(entries):
            bar_set = QBarSet(label)
            bar_set.append(count)
            bar_set.setColor(QColor(dataset_color(index)))
            series.append(bar_set)
        chart.addSeries(series)

        axis_y = QValueAxis()
        axis_y.setMin(0)
        axis_y.setMax(max([count for _, count in entries], default=0) or 1)
        axis_y.setLabelFormat("%d")
        axis_y.setGridLineVisible(False)
        chart.addAxis(axis_y, Qt.AlignmentFlag.AlignLeft)
        series.attachAxis(axis_y)

        self._style_chart(chart)

    def chart_labels(self, chart: QChart) -> List[str]:
        """Get the data set labels drawn in a chart, in order."""
        labels = []
        for series in chart.series():
            labels.extend(bar_set.label() for bar_set in series.barSets())
        return labels

    def _style_chart(self, chart: QChart) -> None:
        colors = self.get_theme_colors()
        text_color = QColor(colors["text_primary"])
        chart.setBackgroundBrush(QColor(colors["background_secondary"]))
        chart.setTitleBrush(text_color)
        chart.legend().setLabelColor(text_color)
        for axis in chart.axes():
            axis.setLabelsColor(text_color)

    def _apply_theme_styles(self) -> None:
        colors = self.get_theme_colors()
        self.setStyleSheet(
            f"""
            StatisticsWidget {{
                background-color: {colors['background_primary']};
                border: none;
            }}
            QLabel {{
                color: {colors['text_primary']};
                background-color: transparent;
            }}
            QPushButton {{
                background-color: {colors['background_secondary']};
                color: {colors['text_primary']};
                border: 1px solid {colors['border_primary']};
                border-radius: 6px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {colors['background_hover']};
            }}
            """
        )
        self._style_chart(self.operators_chart)
        self._style_chart(self.categories_chart)
