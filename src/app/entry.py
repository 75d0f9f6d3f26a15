"""
Application Entry Point.

This module contains the main() function and cleanup logic for the application.
"""

import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Imports after load_dotenv() to allow modules to access environment variables
from PySide6.QtWidgets import QApplication  # noqa: E402

from src.app.constants import (  # noqa: E402
    ENV_MAP_IMAGE,
    ENV_OVERLAYS,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
)
from src.core.logging_config import (  # noqa: E402
    get_logger,
    setup_logging,
    shutdown_logging,
)
from src.core.map_config import MapConfigError, load_map_config  # noqa: E402

logger = get_logger(__name__)


def main() -> None:
    """Application entry point."""
    from src.app.main_window import MainWindow, load_overlays

    setup_logging(debug_mode="--debug" in sys.argv)

    try:
        config = load_map_config()
    except MapConfigError:
        logger.exception("CRITICAL: Invalid map configuration")
        shutdown_logging()
        sys.exit(1)

    try:
        logger.info("Starting Application...")
        app = QApplication(sys.argv)
        app.setOrganizationName(WINDOW_SETTINGS_KEY)
        app.setApplicationName(WINDOW_SETTINGS_APP)

        overlays_path = os.environ.get(ENV_OVERLAYS)
        overlays = load_overlays(overlays_path) if overlays_path else None

        window = MainWindow(config, overlays)
        image_path = os.environ.get(ENV_MAP_IMAGE)
        if image_path:
            window.map_widget.load_map(image_path)
        window.show()

        logger.info("Entering Event Loop...")
        exit_code = app.exec()
        cleanup_app()
        sys.exit(exit_code)
    except Exception:
        logger.exception("CRITICAL: Unhandled exception in main application loop")
        sys.exit(1)


def cleanup_app() -> None:
    """Performs global cleanup operations before exit."""
    logger.info("Shutting down logging.")
    shutdown_logging()
