"""
Map Coordinate System Module.

Handles translation between the coordinate spaces of the map view:
1. Scene Coordinates: QPointF pixel coordinates on the map image.
2. Map Points: (row, col) pairs, row = scene y and col = scene x.
3. World Coordinates: game units, see src.core.world_coords.

Strictly Cartesian. No spherical projections or geodetic logic.
"""

from typing import List, Sequence

from PySide6.QtCore import QPointF, QRectF

from src.core.world_coords import CoordinateTransformer, MapPoint, WorldCoordinate


class MapCoordinateSystem:
    """
    Manages coordinate transformations for the map view.
    """

    def __init__(self, transformer: CoordinateTransformer) -> None:
        """
        Initializes the MapCoordinateSystem.

        Args:
            transformer: World coordinate transformer bound to the map config.
        """
        self.transformer = transformer
        size = transformer.config.map_size
        self._scene_rect = QRectF(0.0, 0.0, size, size)

    @property
    def scene_rect(self) -> QRectF:
        """The map image extent in scene coordinates."""
        return QRectF(self._scene_rect)

    def contains(self, scene_pos: QPointF) -> bool:
        """Returns True if the scene point lies on the map image."""
        return self._scene_rect.contains(scene_pos)

    @staticmethod
    def to_map_point(scene_pos: QPointF) -> MapPoint:
        """
        Converts a scene point to a map point.

        Args:
            scene_pos: Point in scene coordinates.

        Returns:
            MapPoint: (row, col) pair.
        """
        return MapPoint(scene_pos.y(), scene_pos.x())

    @staticmethod
    def to_scene(point: MapPoint) -> QPointF:
        """Converts a map point to a scene point."""
        return QPointF(point.col, point.row)

    def scene_to_world(self, scene_pos: QPointF) -> WorldCoordinate:
        """
        Converts scene coordinates to world coordinates.

        Does not clamp; positions off the map produce out-of-range values.
        """
        return self.transformer.to_world(self.to_map_point(scene_pos))

    def world_to_scene(self, coord: WorldCoordinate) -> QPointF:
        """Converts world coordinates to scene coordinates."""
        return self.to_scene(self.transformer.to_map_point(coord))

    def polygon_to_map_points(self, points: Sequence[QPointF]) -> List[MapPoint]:
        """Converts polygon vertices in order."""
        return [self.to_map_point(p) for p in points]
