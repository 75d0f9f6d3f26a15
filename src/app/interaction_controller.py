"""
InteractionController - Binds map surface events to the map services.

Translates pointer movement into the live grid reference, secondary clicks
into clipboard coordinates, registry filter requests into visibility
changes and finished drawings into captured polygons.
"""

from typing import Any, List, Optional, Tuple

from PySide6.QtCore import QObject, QPointF, Qt, Signal, Slot

from src.core.logging_config import get_logger
from src.core.protocols import ClipboardSink
from src.core.world_coords import CoordinateTransformer, format_coordinate_pair
from src.gui.widgets.map.map_graphics_view import MapGraphicsView
from src.services.draw_capture import CaptureResult, DrawCapture, copy_to_clipboard
from src.services.marker_registry import MarkerRegistry
from src.services.visibility_controller import VisibilityController

logger = get_logger(__name__)

SECONDARY_BUTTON = Qt.MouseButton.RightButton


class InteractionController(QObject):
    """
    Orchestrates map interaction for one MapGraphicsView.

    Subscriptions are made in the constructor and released exactly once
    by teardown(); no handler runs against the view afterwards.

    Signals:
        coords_changed: Live grid reference string. Args: (coords: str)
        zoom_changed: Current zoom level. Args: (zoom: int)
        coordinate_copied: Compact pair sent to the clipboard. Args: (text: str)
        polygon_captured: Result of a captured polygon. Args: (result)
    """

    coords_changed = Signal(str)
    zoom_changed = Signal(int)
    coordinate_copied = Signal(str)
    polygon_captured = Signal(object)

    def __init__(
        self,
        view: MapGraphicsView,
        registry: MarkerRegistry,
        clipboard: ClipboardSink,
        parent: Optional[QObject] = None,
    ) -> None:
        """
        Initialize the InteractionController.

        Args:
            view: The map surface.
            registry: Source of visibility filter requests.
            clipboard: Receives copied coordinates.
            parent: Optional parent QObject.
        """
        super().__init__(parent)
        self.view = view
        self.registry = registry
        self.clipboard = clipboard

        self.transformer = CoordinateTransformer(view.config)
        self.visibility = VisibilityController(view.surface)
        self.draw_capture = DrawCapture(self.transformer, clipboard, view.drawn_items)

        self.zoom = view.get_zoom()
        self.coords = self.transformer.empty_grid_reference()

        self.view.setContextMenuPolicy(Qt.ContextMenuPolicy.PreventContextMenu)

        self._connections: List[Tuple[Any, Any]] = [
            (registry.disable_filter, self.on_disable_markers),
            (registry.enable_filter, self.on_enable_markers),
            (registry.enable_poly_filter, self.on_enable_polygons),
            (registry.disable_poly_filter, self.on_disable_polygons),
            (view.pointer_moved, self.on_pointer_moved),
            (view.pointer_pressed, self.on_pointer_pressed),
            (view.zoom_changed, self.on_zoom_changed),
            (view.shape_completed, self.on_shape_completed),
        ]
        for signal, slot in self._connections:
            signal.connect(slot)
        logger.debug(f"InteractionController bound {len(self._connections)} signals")

    def teardown(self) -> None:
        """Releases every subscription. Further calls do nothing."""
        connections, self._connections = self._connections, []
        for signal, slot in connections:
            signal.disconnect(slot)
        if connections:
            logger.info("InteractionController torn down")

    @Slot(QPointF)
    def on_pointer_moved(self, scene_pos: QPointF) -> None:
        """Updates the live grid reference."""
        point = self.view.coord_system.to_map_point(scene_pos)
        self.coords = self.transformer.grid_reference(point)
        self.coords_changed.emit(self.coords)

    @Slot(QPointF, object)
    def on_pointer_pressed(self, scene_pos: QPointF, button: Any) -> Optional[str]:
        """
        Copies the world coordinate under a secondary click as "[x, y]".

        Returns:
            Optional[str]: The copied text, or None for other buttons.
        """
        if button != SECONDARY_BUTTON:
            return None
        point = self.view.coord_system.to_map_point(scene_pos)
        coords = self.transformer.to_world_rounded(point)
        text = format_coordinate_pair(coords)
        copy_to_clipboard(self.clipboard, text)
        logger.info(text)
        self.coordinate_copied.emit(text)
        return text

    @Slot(int)
    def on_zoom_changed(self, zoom: int) -> None:
        self.zoom = zoom
        self.zoom_changed.emit(zoom)

    @Slot(object)
    def on_enable_markers(self, markers: list) -> None:
        self.visibility.set_marker_visibility(markers, True)

    @Slot(object)
    def on_disable_markers(self, markers: list) -> None:
        self.visibility.set_marker_visibility(markers, False)

    @Slot(object)
    def on_enable_polygons(self, polygons: list) -> None:
        self.visibility.set_polygon_visibility(polygons, True)

    @Slot(object)
    def on_disable_polygons(self, polygons: list) -> None:
        self.visibility.set_polygon_visibility(polygons, False)

    @Slot(str, object)
    def on_shape_completed(
        self, shape_type: str, item: Any
    ) -> Optional[CaptureResult]:
        """
        Hands a finished drawing to DrawCapture.

        Args:
            shape_type: Kind of drawn shape.
            item: The drawn graphics item; polygons expose polygon().
        """
        vertices = []
        if hasattr(item, "polygon"):
            polygon = item.polygon()
            vertices = self.view.coord_system.polygon_to_map_points(
                [polygon.at(i) for i in range(polygon.count())]
            )
        result = self.draw_capture.on_shape_completed(shape_type, vertices, item)
        if result is not None:
            self.polygon_captured.emit(result)
        return result

