"""
Main entry point for the Träwelling desktop client.

This module sets up logging, creates the application, loads the
configuration and starts the main window.
"""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QIcon, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QMessageBox

from traewelling.managers.config_manager import ConfigManager, ConfigurationError
from traewelling.ui.main_window import MainWindow
from version import __app_display_name__, __app_name__, __company__, __version__


def get_log_dir() -> Path:
    """Get the platform log directory."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Logs" / "Traewelling"
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home())) / "Traewelling" / "logs"
    return Path.home() / ".local" / "share" / "traewelling" / "logs"


def setup_logging(level: int = logging.WARNING) -> Path:
    """
    Setup application logging with file and console output.

    Returns:
        Path: Log file in use
    """
    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "traewelling.log"

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(str(log_file)), logging.StreamHandler()],
    )

    logging.getLogger("traewelling.api").setLevel(logging.WARNING)
    logging.getLogger("traewelling.managers").setLevel(logging.INFO)
    logging.getLogger("traewelling.ui").setLevel(logging.WARNING)
    return log_file


def setup_application_icon(app: QApplication) -> None:
    """Use the train emoji as the application icon."""
    pixmap = QPixmap(64, 64)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    font = QFont()
    font.setPointSize(48)
    painter.setFont(font)
    painter.drawText(pixmap.rect(), Qt.AlignmentFlag.AlignCenter, "🚆")
    painter.end()

    app.setWindowIcon(QIcon(pixmap))


def main():
    """Main application entry point."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.warning(f"Starting {__app_display_name__} {__version__}")

    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setApplicationDisplayName(__app_display_name__)
    app.setApplicationVersion(__version__)
    app.setOrganizationName(__company__)
    setup_application_icon(app)

    try:
        config_manager = ConfigManager()
        config_manager.load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        msg_box = QMessageBox()
        msg_box.setIcon(QMessageBox.Icon.Critical)
        msg_box.setWindowTitle("Configuration Error")
        msg_box.setText(str(e))
        msg_box.exec()
        sys.exit(1)

    window = MainWindow(config_manager)
    window.show()

    exit_code = app.exec()
    logger.info(f"Application exiting with code {exit_code}")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
