"""
Map Graphics View Module.

Provides the MapGraphicsView class, the map surface the interaction layer
binds to, and SceneSurface, which exposes scene membership as layer
add/remove/has operations.
"""

import logging
from typing import Any, List, Optional

from PySide6.QtCore import QPointF, QSize, Qt, Signal
from PySide6.QtGui import (
    QBrush,
    QColor,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPainterPath,
    QPen,
    QPixmap,
    QTransform,
    QWheelEvent,
)
from PySide6.QtWidgets import (
    QGraphicsItem,
    QGraphicsPathItem,
    QGraphicsPixmapItem,
    QGraphicsScene,
    QGraphicsView,
    QWidget,
)

from src.core.map_config import MapConfig
from src.core.world_coords import CoordinateTransformer
from src.gui.widgets.map.coordinate_system import MapCoordinateSystem
from src.gui.widgets.map.marker_item import DRAWN_POLYGON_COLOR, make_polygon_item

logger = logging.getLogger(__name__)

SHAPE_POLYGON = "polygon"
MIN_POLYGON_VERTICES = 3


class SceneSurface:
    """
    Layer membership over a QGraphicsScene.

    An item is a layer of the surface exactly when it belongs to the scene.
    """

    def __init__(self, scene: QGraphicsScene) -> None:
        self.scene = scene

    def add_layer(self, layer: QGraphicsItem) -> None:
        self.scene.addItem(layer)

    def remove_layer(self, layer: QGraphicsItem) -> None:
        self.scene.removeItem(layer)

    def has_layer(self, layer: QGraphicsItem) -> bool:
        return layer.scene() is self.scene


class DrawnItemsGroup(SceneSurface):
    """Retains shapes drawn by the user so they stay on the map."""

    def __init__(self, scene: QGraphicsScene) -> None:
        super().__init__(scene)
        self.items: List[QGraphicsItem] = []

    def add_layer(self, layer: QGraphicsItem) -> None:
        if layer not in self.items:
            self.items.append(layer)
        if not self.has_layer(layer):
            super().add_layer(layer)

    def clear(self) -> None:
        """Removes every retained shape from the map."""
        for item in self.items:
            if self.has_layer(item):
                self.remove_layer(item)
        self.items.clear()


class MapGraphicsView(QGraphicsView):
    """
    Graphics view displaying the map image and its overlays.

    Zoom is an integer level; each level doubles the scale.

    Signals:
        pointer_moved: Emitted on every mouse move over the view.
                       Args: (scene_pos: QPointF)
        pointer_pressed: Emitted on every mouse press.
                         Args: (scene_pos: QPointF, button: Qt.MouseButton)
        zoom_changed: Emitted after the zoom level changed. Args: (zoom: int)
        shape_completed: Emitted when a drawing is finished.
                         Args: (shape_type: str, item: QGraphicsItem)
    """

    pointer_moved = Signal(QPointF)
    pointer_pressed = Signal(QPointF, object)
    zoom_changed = Signal(int)
    shape_completed = Signal(str, object)
    draw_mode_changed = Signal(bool)

    def __init__(self, config: MapConfig, parent: Optional[QWidget] = None) -> None:
        """
        Initializes the MapGraphicsView.

        Args:
            config: Map configuration (size and zoom limits).
            parent: Parent widget.
        """
        super().__init__(parent)
        self.config = config
        self.coord_system = MapCoordinateSystem(CoordinateTransformer(config))

        self.scene = QGraphicsScene(self)
        self.scene.setSceneRect(self.coord_system.scene_rect)
        self.setScene(self.scene)
        self.scene.setBackgroundBrush(QBrush(QColor("#1E1E1E")))

        self.surface = SceneSurface(self.scene)
        self.drawn_items = DrawnItemsGroup(self.scene)

        # View settings
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setMouseTracking(True)

        # Map image
        self.pixmap_item: Optional[QGraphicsPixmapItem] = None
        self.current_map_path: Optional[str] = None

        # Drawing state
        self.draw_mode = False
        self._draw_vertices: List[QPointF] = []
        self._draw_preview: Optional[QGraphicsPathItem] = None

        self.zoom = config.init_zoom
        self._apply_zoom()

    def minimumSizeHint(self) -> QSize:
        """Allows the view to shrink below the map image size."""
        return QSize(200, 150)

    def load_map(self, image_path: str) -> bool:
        """
        Loads a map image into the view, scaled to the configured map size.

        Args:
            image_path: Path to the image file.

        Returns:
            bool: True if successful, False otherwise.
        """
        pixmap = QPixmap(image_path)
        if pixmap.isNull():
            logger.error(f"Failed to load map image: {image_path}")
            return False

        if self.pixmap_item:
            self.scene.removeItem(self.pixmap_item)

        size = int(self.config.map_size)
        if pixmap.width() != size or pixmap.height() != size:
            pixmap = pixmap.scaled(
                size,
                size,
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )

        self.pixmap_item = QGraphicsPixmapItem(pixmap)
        self.pixmap_item.setZValue(0)
        self.scene.addItem(self.pixmap_item)
        self.current_map_path = image_path

        logger.info(f"Loaded map: {image_path}")
        return True

    def get_zoom(self) -> int:
        """Returns the current zoom level."""
        return self.zoom

    def set_zoom(self, level: int) -> None:
        """
        Sets the zoom level, clamped to the configured range.

        Emits zoom_changed only when the level actually changes.
        """
        level = max(self.config.min_zoom, min(self.config.max_zoom, int(level)))
        if level == self.zoom:
            return
        self.zoom = level
        self._apply_zoom()
        logger.debug(f"Zoom level -> {level}")
        self.zoom_changed.emit(level)

    def _apply_zoom(self) -> None:
        factor = 2.0**self.zoom
        self.setTransform(QTransform.fromScale(factor, factor))

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Handle mouse wheel for zooming one level per notch."""
        if event.angleDelta().y() > 0:
            self.set_zoom(self.zoom + 1)
        elif event.angleDelta().y() < 0:
            self.set_zoom(self.zoom - 1)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        scene_pos = self.mapToScene(event.position().toPoint())
        self.pointer_moved.emit(scene_pos)
        if self.draw_mode and self._draw_vertices:
            self._update_preview(scene_pos)
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """
        Emit pointer_pressed; in draw mode, left clicks add polygon vertices
        instead of panning.
        """
        scene_pos = self.mapToScene(event.position().toPoint())
        self.pointer_pressed.emit(scene_pos, event.button())

        if self.draw_mode and event.button() == Qt.MouseButton.LeftButton:
            self.add_draw_vertex(scene_pos)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        """Double click finishes the polygon being drawn."""
        if self.draw_mode and event.button() == Qt.MouseButton.LeftButton:
            self.finish_polygon()
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Enter finishes, Escape cancels the polygon being drawn."""
        if self.draw_mode:
            if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
                self.finish_polygon()
                return
            if event.key() == Qt.Key.Key_Escape:
                self.cancel_drawing()
                return
        super().keyPressEvent(event)

    def set_draw_mode(self, enabled: bool) -> None:
        """
        Enables or disables polygon drawing.

        Leaving draw mode discards an unfinished polygon.
        """
        if enabled == self.draw_mode:
            return
        self.draw_mode = enabled
        if enabled:
            self.setDragMode(QGraphicsView.DragMode.NoDrag)
            self.setCursor(Qt.CursorShape.CrossCursor)
        else:
            self.cancel_drawing()
            self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
            self.unsetCursor()
        logger.info(f"Polygon draw mode: {enabled}")
        self.draw_mode_changed.emit(enabled)

    def add_draw_vertex(self, scene_pos: QPointF) -> None:
        """Appends a vertex to the polygon being drawn."""
        self._draw_vertices.append(QPointF(scene_pos))
        self._update_preview()

    def _update_preview(self, cursor: Optional[QPointF] = None) -> None:
        if not self._draw_vertices:
            return
        path = QPainterPath(self._draw_vertices[0])
        for vertex in self._draw_vertices[1:]:
            path.lineTo(vertex)
        if cursor is not None:
            path.lineTo(cursor)

        if self._draw_preview is None:
            pen = QPen(QColor(DRAWN_POLYGON_COLOR), 2, Qt.PenStyle.DashLine)
            pen.setCosmetic(True)
            self._draw_preview = QGraphicsPathItem()
            self._draw_preview.setPen(pen)
            self._draw_preview.setZValue(20)
            self.scene.addItem(self._draw_preview)
        self._draw_preview.setPath(path)

    def _clear_preview(self) -> None:
        if self._draw_preview is not None:
            self.scene.removeItem(self._draw_preview)
            self._draw_preview = None

    def cancel_drawing(self) -> None:
        """Discards the polygon being drawn."""
        if self._draw_vertices:
            logger.debug(f"Discarding {len(self._draw_vertices)} draft vertices")
        self._draw_vertices = []
        self._clear_preview()

    def finish_polygon(self) -> Optional[Any]:
        """
        Completes the polygon being drawn and emits shape_completed.

        Consecutive duplicate vertices (from the double click) are merged.

        Returns:
            The polygon item, or None if fewer than three vertices exist.
        """
        vertices: List[QPointF] = []
        for vertex in self._draw_vertices:
            if not vertices or vertices[-1] != vertex:
                vertices.append(vertex)

        if len(vertices) < MIN_POLYGON_VERTICES:
            logger.warning(
                f"Polygon needs at least {MIN_POLYGON_VERTICES} vertices, "
                f"got {len(vertices)}"
            )
            return None

        self._draw_vertices = []
        self._clear_preview()

        item = make_polygon_item(vertices, DRAWN_POLYGON_COLOR)
        logger.debug(f"Polygon drawn with {len(vertices)} vertices")
        self.shape_completed.emit(SHAPE_POLYGON, item)
        return item

    def fit_to_view(self) -> None:
        """Centers the map in the view without changing the zoom level."""
        self.centerOn(self.coord_system.scene_rect.center())

