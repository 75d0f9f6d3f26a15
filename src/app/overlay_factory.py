"""
Scene Overlay Factory Module.

Turns world-coordinate overlay definitions into scene items for the
MarkerRegistry, converting positions through the view's coordinate system.
"""

from typing import Optional, Sequence

from PySide6.QtWidgets import QGraphicsPolygonItem

from src.core.world_coords import WorldCoordinate
from src.gui.widgets.map.coordinate_system import MapCoordinateSystem
from src.gui.widgets.map.marker_item import (
    DEFAULT_POLYGON_COLOR,
    MarkerItem,
    make_polygon_item,
)


class SceneOverlayFactory:
    """
    Builds MarkerItems and polygon items positioned on the map scene.
    """

    def __init__(self, coord_system: MapCoordinateSystem) -> None:
        """
        Args:
            coord_system: Converts world positions into scene positions.
        """
        self.coord_system = coord_system

    def make_marker(
        self,
        marker_id: str,
        label: str,
        position: WorldCoordinate,
        color: Optional[str] = None,
    ) -> MarkerItem:
        scene_pos = self.coord_system.world_to_scene(WorldCoordinate(*position))
        return MarkerItem(marker_id, label, scene_pos, color)

    def make_polygon(
        self, ring: Sequence[WorldCoordinate], color: Optional[str] = None
    ) -> QGraphicsPolygonItem:
        points = [
            self.coord_system.world_to_scene(WorldCoordinate(x, y)) for x, y in ring
        ]
        return make_polygon_item(points, color or DEFAULT_POLYGON_COLOR)
