"""
World Coordinate Utilities.

Converts between map-projection points and game world coordinates:
1. Map points: (row, col) in scene pixels of the rendered map image,
   origin top-left, row increasing downward.
2. World coordinates: (x, y) in game units, origin bottom-left,
   x increasing east and y increasing north.

With k = max_bounds / map_size:
    world_x = col * k
    world_y = max_bounds - row * k

Also provides the rounding and string formats used for display and for
clipboard payloads. No clamping is performed anywhere in this module.
"""

import json
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, NamedTuple, Sequence, Union

from src.core.map_config import MapConfig

Number = Union[int, float]

DEFAULT_PRECISION = 2
GRID_SEPARATOR = " | "
MIN_GRID_DIGITS = 3


class MapPoint(NamedTuple):
    """A position in the rendering surface's (row, col) space."""

    row: float
    col: float


class WorldCoordinate(NamedTuple):
    """A position in the game world's coordinate system."""

    x: Number
    y: Number


def _check_sizes(map_size: float, max_bounds: float) -> None:
    if map_size <= 0:
        raise ValueError(f"map_size must be positive, got {map_size}")
    if max_bounds <= 0:
        raise ValueError(f"max_bounds must be positive, got {max_bounds}")


def to_world(point: MapPoint, map_size: float, max_bounds: float) -> WorldCoordinate:
    """
    Converts a map-projection point to world coordinates.

    Args:
        point: (row, col) in map scene pixels.
        map_size: Span of the rendered map image in pixels.
        max_bounds: Span of the world coordinate system.

    Returns:
        WorldCoordinate: (x, y) in world units.

    Raises:
        ValueError: If map_size or max_bounds is not positive.
    """
    _check_sizes(map_size, max_bounds)
    scale = max_bounds / map_size
    row, col = point
    return WorldCoordinate(col * scale, max_bounds - row * scale)


def to_map_point(
    coord: WorldCoordinate, map_size: float, max_bounds: float
) -> MapPoint:
    """
    Converts world coordinates back to a map-projection point.

    Exact inverse of to_world up to floating point error.

    Raises:
        ValueError: If map_size or max_bounds is not positive.
    """
    _check_sizes(map_size, max_bounds)
    scale = map_size / max_bounds
    x, y = coord
    return MapPoint((max_bounds - y) * scale, x * scale)


def round_value(value: Number, precision: int = DEFAULT_PRECISION) -> Number:
    """
    Rounds a single value half away from zero.

    The value is rounded on its shortest decimal representation, so binary
    artifacts do not leak into the result: 1.005 -> 1.01, 2.675 -> 2.68,
    -1.005 -> -1.01. Integral results are returned as int.
    """
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return int(rounded)
    return float(rounded)


def round_coordinate(
    coord: WorldCoordinate, precision: int = DEFAULT_PRECISION
) -> WorldCoordinate:
    """Rounds both components of a coordinate with round_value."""
    return WorldCoordinate(
        round_value(coord[0], precision), round_value(coord[1], precision)
    )


def grid_digits(max_bounds: float, grid_size: int = 100) -> int:
    """Returns the zero-padded width of one grid reference group."""
    if grid_size <= 0:
        raise ValueError(f"grid_size must be positive, got {grid_size}")
    # to_world reaches y == max_bounds on the top pixel row
    largest = max(int(max_bounds // grid_size), 0)
    return max(MIN_GRID_DIGITS, len(str(largest)))


def format_grid_reference(
    coord: WorldCoordinate, max_bounds: float, grid_size: int = 100
) -> str:
    """
    Formats a coordinate as a fixed-width grid reference, e.g. "012 | 345".

    Each axis is floor(value / grid_size) zero-padded to grid_digits().
    The width is stable for every coordinate in [0, max_bounds].

    Args:
        coord: World coordinate.
        max_bounds: Span of the world coordinate system.
        grid_size: World units per grid square.

    Returns:
        str: The grid reference.
    """
    width = grid_digits(max_bounds, grid_size)
    x, y = coord
    gx = math.floor(x / grid_size)
    gy = math.floor(y / grid_size)
    return f"{gx:0{width}d}{GRID_SEPARATOR}{gy:0{width}d}"


def empty_grid_reference(max_bounds: float, grid_size: int = 100) -> str:
    """Grid reference shown before the pointer has moved."""
    return format_grid_reference(WorldCoordinate(0, 0), max_bounds, grid_size)


def format_coordinate_pair(coord: WorldCoordinate) -> str:
    """Formats a coordinate as a compact "[x, y]" string."""
    return json.dumps([coord[0], coord[1]])


def format_coordinate_list(coords: Sequence[WorldCoordinate]) -> str:
    """Formats coordinates as a pretty-printed JSON array of [x, y] pairs."""
    return json.dumps([[c[0], c[1]] for c in coords], indent=2)


def polygon_area(coords: Sequence[WorldCoordinate]) -> float:
    """
    Calculates the area of a polygon in world units squared.

    Uses the shoelace formula. A closing vertex equal to the first one
    does not change the result.

    Returns:
        float: Area, or 0.0 for fewer than 3 vertices.
    """
    n = len(coords)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        x1, y1 = coords[i]
        x2, y2 = coords[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return abs(area) / 2.0


class CoordinateTransformer:
    """
    Binds the transform functions to one MapConfig.

    The config is immutable, so a transformer can be shared freely.
    """

    def __init__(self, config: MapConfig) -> None:
        """
        Initializes the transformer.

        Args:
            config: Map configuration providing map_size, max_bounds
                and grid_size.
        """
        self.config = config

    def to_world(self, point: MapPoint) -> WorldCoordinate:
        return to_world(point, self.config.map_size, self.config.max_bounds)

    def to_map_point(self, coord: WorldCoordinate) -> MapPoint:
        return to_map_point(coord, self.config.map_size, self.config.max_bounds)

    def to_world_rounded(
        self, point: MapPoint, precision: int = DEFAULT_PRECISION
    ) -> WorldCoordinate:
        """Converts and rounds in one step."""
        return round_coordinate(self.to_world(point), precision)

    def grid_reference(self, point: MapPoint) -> str:
        """Grid reference string for a map point."""
        return format_grid_reference(
            self.to_world(point), self.config.max_bounds, self.config.grid_size
        )

    def empty_grid_reference(self) -> str:
        return empty_grid_reference(self.config.max_bounds, self.config.grid_size)

    def convert_polygon(
        self, vertices: Sequence[MapPoint], precision: int = DEFAULT_PRECISION
    ) -> List[WorldCoordinate]:
        """Converts vertices in order, rounding each resulting pair."""
        return [self.to_world_rounded(v, precision) for v in vertices]
