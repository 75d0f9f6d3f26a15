"""
Clipboard Sink Module.

Places text on the system clipboard through Qt.
"""

import logging

from PySide6.QtGui import QGuiApplication

logger = logging.getLogger(__name__)


class QtClipboardSink:
    """Clipboard sink backed by QGuiApplication.clipboard()."""

    def copy(self, text: str) -> None:
        """
        Sets the clipboard text.

        Raises:
            RuntimeError: If no Qt application is running.
        """
        if QGuiApplication.instance() is None:
            raise RuntimeError("No Qt application instance for clipboard access")
        QGuiApplication.clipboard().setText(text)
        logger.debug(f"Copied {len(text)} characters to clipboard")
