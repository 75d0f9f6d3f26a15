"""
Map Widget Package.

Provides the map scene, its coordinate system and overlay items.
"""

from src.gui.widgets.map.coordinate_system import MapCoordinateSystem
from src.gui.widgets.map.map_graphics_view import MapGraphicsView, SceneSurface
from src.gui.widgets.map.marker_item import MarkerItem, make_polygon_item

__all__ = [
    "MapCoordinateSystem",
    "MapGraphicsView",
    "SceneSurface",
    "MarkerItem",
    "make_polygon_item",
]
