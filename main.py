"""
Main entry point for the FlightMap application.

This module initializes the application, sets up logging, loads the
configuration, and starts the main window.
"""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox
from flightmap.managers.config_manager import ConfigManager, ConfigurationError
from flightmap.ui.main_window import MainWindow
from version import __version__, __app_name__, __app_display_name__, __company__, get_version_string


def setup_logging():
    """Setup application logging with file and console output."""
    if sys.platform == "darwin":  # macOS
        log_dir = Path.home() / "Library" / "Logs" / "FlightMap"
    elif sys.platform == "win32":  # Windows
        log_dir = Path(os.environ.get("APPDATA", Path.home())) / "FlightMap" / "logs"
    else:  # Linux and others
        log_dir = Path.home() / ".local" / "share" / "flightmap" / "logs"

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "flightmap.log"

    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(str(log_file)), logging.StreamHandler()],
    )

    # Set specific log levels for different modules
    logging.getLogger("flightmap.api").setLevel(logging.INFO)
    logging.getLogger("flightmap.ui").setLevel(logging.WARNING)
    logging.getLogger("flightmap.managers").setLevel(logging.INFO)


def main():
    """Main application entry point."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.warning(f"Starting {get_version_string()}")

    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setApplicationDisplayName(__app_display_name__)
    app.setApplicationVersion(__version__)
    app.setOrganizationName(__company__)

    try:
        config = ConfigManager().load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        QMessageBox.critical(None, "Configuration Error", f"Failed to load configuration:\n{e}")
        return 1

    window = MainWindow(config)
    window.show()

    # Search the configured airports right away so the map is not empty
    window.on_search_clicked()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
