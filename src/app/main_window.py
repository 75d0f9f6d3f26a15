"""
Main Window Module.

Hosts the map widget and the layer filter dock, and owns the
InteractionController binding them together.
"""

import json
from typing import Any, Dict, Optional

from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QDockWidget, QMainWindow, QWidget

from src.app.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    DOCK_OBJ_LAYERS,
    DOCK_TITLE_LAYERS,
    STATUS_COPIED_PREFIX,
    STATUS_MESSAGE_TIMEOUT_MS,
    WINDOW_SETTINGS_APP,
    WINDOW_SETTINGS_KEY,
    WINDOW_TITLE,
)
from src.app.interaction_controller import InteractionController
from src.app.overlay_factory import SceneOverlayFactory
from src.core.logging_config import get_logger
from src.core.map_config import MapConfig
from src.core.protocols import ClipboardSink
from src.gui.widgets.filter_widget import LayerFilterWidget
from src.gui.widgets.map_widget import MapWidget
from src.services.clipboard import QtClipboardSink
from src.services.draw_capture import CaptureResult
from src.services.marker_registry import MarkerRegistry

logger = get_logger(__name__)


def load_overlays(path: str) -> Dict[str, Any]:
    """
    Reads overlay definitions from a JSON file.

    Returns:
        Dict[str, Any]: The definitions, or an empty dict if unreadable.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load overlays from {path}: {e}")
        return {}


class MainWindow(QMainWindow):
    """
    Application main window.
    """

    def __init__(
        self,
        config: MapConfig,
        overlays: Optional[Dict[str, Any]] = None,
        clipboard: Optional[ClipboardSink] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        """
        Initializes the MainWindow.

        Args:
            config: Map configuration.
            overlays: Optional overlay definitions for the registry.
            clipboard: Clipboard sink; defaults to the system clipboard.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.config = config
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.map_widget = MapWidget(config, self)
        self.setCentralWidget(self.map_widget)

        self.registry = MarkerRegistry(self)
        self.controller = InteractionController(
            self.map_widget.view,
            self.registry,
            clipboard or QtClipboardSink(),
            self,
        )

        self.filter_widget = LayerFilterWidget()
        dock = QDockWidget(DOCK_TITLE_LAYERS, self)
        dock.setObjectName(DOCK_OBJ_LAYERS)
        dock.setWidget(self.filter_widget)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)

        self._connect_signals()
        if overlays:
            self.load_overlays(overlays)

        self.statusBar()
        self._restore_geometry()

    def _connect_signals(self) -> None:
        self.controller.coords_changed.connect(self.map_widget.set_coordinates)
        self.controller.zoom_changed.connect(self.map_widget.set_zoom_label)
        self.controller.coordinate_copied.connect(self._on_coordinate_copied)
        self.controller.polygon_captured.connect(self._on_polygon_captured)
        self.filter_widget.marker_group_toggled.connect(self._on_marker_group_toggled)
        self.filter_widget.polygon_group_toggled.connect(
            self._on_polygon_group_toggled
        )

    def load_overlays(self, overlays: Dict[str, Any]) -> None:
        """
        Registers overlay groups and shows all of them.

        Args:
            overlays: Overlay definitions, see MarkerRegistry.load_from_dict.
        """
        self.registry.load_from_dict(
            overlays, SceneOverlayFactory(self.map_widget.view.coord_system)
        )
        self.filter_widget.set_groups(
            [(g.id, g.name) for g in self.registry.marker_groups.values()],
            [(g.id, g.name) for g in self.registry.polygon_groups.values()],
        )
        self.registry.enable_markers(list(self.registry.marker_groups))
        self.registry.enable_polygons(list(self.registry.polygon_groups))

    def _on_marker_group_toggled(self, group_id: str, visible: bool) -> None:
        if visible:
            self.registry.enable_markers([group_id])
        else:
            self.registry.disable_markers([group_id])

    def _on_polygon_group_toggled(self, group_id: str, visible: bool) -> None:
        if visible:
            self.registry.enable_polygons([group_id])
        else:
            self.registry.disable_polygons([group_id])

    def _on_coordinate_copied(self, text: str) -> None:
        self.statusBar().showMessage(
            f"{STATUS_COPIED_PREFIX}{text}", STATUS_MESSAGE_TIMEOUT_MS
        )

    def _on_polygon_captured(self, result: CaptureResult) -> None:
        self.statusBar().showMessage(
            f"{STATUS_COPIED_PREFIX}{len(result.coordinates)} vertices "
            f"(area {result.area:.2f})",
            STATUS_MESSAGE_TIMEOUT_MS,
        )

    def _restore_geometry(self) -> None:
        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        geometry = settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

    def closeEvent(self, event: QCloseEvent) -> None:
        """
        Handles application close event.
        Saves window geometry and releases the controller's subscriptions
        before the map view goes away.
        """
        settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
        settings.setValue("geometry", self.saveGeometry())

        self.controller.teardown()
        logger.info("Main window closed")
        super().closeEvent(event)
