"""
Map Overlay Items Module.

Provides the graphics items placed on the map: markers (an icon plus a
label, toggled together) and polygons.
"""

import logging
from typing import List, Optional, Sequence

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QBrush, QColor, QPen, QPolygonF, QTransform
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPolygonItem,
    QGraphicsSimpleTextItem,
)

logger = logging.getLogger(__name__)

DEFAULT_MARKER_COLOR = "#3498DB"
DEFAULT_POLYGON_COLOR = "#E74C3C"
DRAWN_POLYGON_COLOR = "#F39C12"


class MarkerIconItem(QGraphicsEllipseItem):
    """Circular marker icon that keeps its size at every zoom level."""

    MARKER_RADIUS = 6

    def __init__(self, color: str = DEFAULT_MARKER_COLOR) -> None:
        super().__init__(
            -self.MARKER_RADIUS,
            -self.MARKER_RADIUS,
            self.MARKER_RADIUS * 2,
            self.MARKER_RADIUS * 2,
        )
        self.setBrush(QBrush(QColor(color)))
        self.setPen(QPen(QColor(255, 255, 255), 2))
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIgnoresTransformations, True)
        self.setZValue(10)


class MarkerLabelItem(QGraphicsSimpleTextItem):
    """Text label drawn next to a marker icon."""

    OFFSET = QPointF(8, -8)

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.setBrush(QBrush(QColor("#FFFFFF")))
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIgnoresTransformations, True)
        self.setZValue(11)
        # Pixel offset from the anchor; the item ignores view zoom
        self.setTransform(QTransform.fromTranslate(self.OFFSET.x(), self.OFFSET.y()))


class MarkerItem:
    """
    A logical marker owning several overlay objects.

    The icon and label are separate scene items listed in ``layers`` so
    that visibility filtering adds and removes them together.
    """

    def __init__(
        self,
        marker_id: str,
        label: str,
        scene_pos: QPointF,
        color: Optional[str] = None,
    ) -> None:
        """
        Initializes a MarkerItem.

        Args:
            marker_id: Unique identifier for the marker.
            label: Label text, also used as tooltip.
            scene_pos: Position in scene coordinates.
            color: Optional icon color hex.
        """
        self.marker_id = marker_id
        self.label = label

        self.icon = MarkerIconItem(color or DEFAULT_MARKER_COLOR)
        self.icon.setPos(scene_pos)
        self.icon.setToolTip(label)

        self.label_item = MarkerLabelItem(label)
        self.label_item.setPos(scene_pos)

        self.layers: List[QGraphicsItem] = [self.icon, self.label_item]
        logger.debug(f"Created MarkerItem {marker_id} ({label}) at {scene_pos}")

    def pos(self) -> QPointF:
        """Returns the marker position in scene coordinates."""
        return self.icon.pos()


def make_polygon_item(
    points: Sequence[QPointF], color: str = DEFAULT_POLYGON_COLOR
) -> QGraphicsPolygonItem:
    """
    Creates a translucent polygon item from scene points.

    Args:
        points: Vertices in scene coordinates.
        color: Outline color hex; the fill uses the same color, translucent.

    Returns:
        QGraphicsPolygonItem: The new polygon item.
    """
    item = QGraphicsPolygonItem(QPolygonF(list(points)))
    outline = QColor(color)
    fill = QColor(color)
    fill.setAlpha(60)
    pen = QPen(outline, 2)
    pen.setCosmetic(True)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    item.setPen(pen)
    item.setBrush(QBrush(fill))
    item.setZValue(5)
    return item
