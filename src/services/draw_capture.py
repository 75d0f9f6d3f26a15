"""
Draw Capture Module.

Turns a just-completed drawing into world coordinates and hands the result
to the clipboard as pretty-printed JSON.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from src.core.protocols import ClipboardSink, MapSurface
from src.core.world_coords import (
    CoordinateTransformer,
    MapPoint,
    WorldCoordinate,
    format_coordinate_list,
    polygon_area,
)

logger = logging.getLogger(__name__)

SHAPE_POLYGON = "polygon"


@dataclass(frozen=True)
class CaptureResult:
    """
    Outcome of capturing a polygon.

    Attributes:
        coordinates: Rounded world coordinates in vertex order.
        payload: The text sent to the clipboard.
        area: Polygon area in world units squared.
    """

    coordinates: List[WorldCoordinate]
    payload: str
    area: float


def copy_to_clipboard(clipboard: ClipboardSink, text: str) -> bool:
    """
    Writes text to the clipboard sink, logging instead of raising on failure.

    Returns:
        bool: True if the sink accepted the text.
    """
    try:
        clipboard.copy(text)
    except Exception:
        logger.exception("Clipboard write failed")
        return False
    return True


class DrawCapture:
    """
    Handles draw-completed events.

    Retains the drawn shape on the map surface and, for polygons, copies
    the outer ring's vertices as rounded world coordinates.
    """

    def __init__(
        self,
        transformer: CoordinateTransformer,
        clipboard: ClipboardSink,
        drawn_items: Optional[MapSurface] = None,
    ) -> None:
        """
        Initializes the DrawCapture.

        Args:
            transformer: Converts map points to world coordinates.
            clipboard: Receives the serialized coordinates.
            drawn_items: Group that retains drawn shapes on the surface.
        """
        self.transformer = transformer
        self.clipboard = clipboard
        self.drawn_items = drawn_items

    def on_shape_completed(
        self,
        shape_type: str,
        vertices: Sequence[MapPoint],
        layer: Any = None,
    ) -> Optional[CaptureResult]:
        """
        Processes a completed drawing.

        Vertices keep their original order; a closing vertex is only
        present if the source list already had one. Shape types other than
        polygon are retained but otherwise ignored.

        Args:
            shape_type: Kind of drawn shape, e.g. "polygon".
            vertices: Outer ring of the shape in map points.
            layer: The drawn overlay object to retain, if any.

        Returns:
            Optional[CaptureResult]: The capture for polygons, else None.
        """
        if layer is not None and self.drawn_items is not None:
            self.drawn_items.add_layer(layer)

        if shape_type != SHAPE_POLYGON:
            logger.debug(f"Ignoring drawn shape of type '{shape_type}'")
            return None

        coords = self.transformer.convert_polygon(vertices)
        payload = format_coordinate_list(coords)
        area = polygon_area(coords)

        copy_to_clipboard(self.clipboard, payload)
        logger.info(f"Captured polygon with {len(coords)} vertices, area {area:.2f}")
        logger.info(payload)

        return CaptureResult(coordinates=coords, payload=payload, area=area)
