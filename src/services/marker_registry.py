"""
Marker Registry Module.

Owns the marker and polygon groups shown on the map and publishes filter
requests as Qt signals. The registry never touches the map surface; the
interaction layer reacts to its signals.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from PySide6.QtCore import QObject, Signal

from src.core.overlays import MarkerGroup, PolygonGroup
from src.core.protocols import OverlayFactory
from src.core.world_coords import WorldCoordinate

logger = logging.getLogger(__name__)


class MarkerRegistry(QObject):
    """
    Registry of overlay groups with enable/disable filter signals.

    Signals:
        enable_filter: Markers to show. Args: (markers: list)
        disable_filter: Markers to hide. Args: (markers: list)
        enable_poly_filter: Polygons to show. Args: (polygons: list)
        disable_poly_filter: Polygons to hide. Args: (polygons: list)
    """

    enable_filter = Signal(object)
    disable_filter = Signal(object)
    enable_poly_filter = Signal(object)
    disable_poly_filter = Signal(object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.marker_groups: Dict[str, MarkerGroup] = {}
        self.polygon_groups: Dict[str, PolygonGroup] = {}

    def add_marker_group(self, group: MarkerGroup) -> None:
        """Registers a marker group, replacing one with the same id."""
        if group.id in self.marker_groups:
            logger.warning(f"Replacing marker group '{group.id}'")
        self.marker_groups[group.id] = group

    def add_polygon_group(self, group: PolygonGroup) -> None:
        """Registers a polygon group, replacing one with the same id."""
        if group.id in self.polygon_groups:
            logger.warning(f"Replacing polygon group '{group.id}'")
        self.polygon_groups[group.id] = group

    def _resolve(self, groups: Dict[str, Any], group_ids: Iterable[str], attr: str):
        resolved: List[Any] = []
        for group_id in group_ids:
            group = groups.get(group_id)
            if group is None:
                logger.warning(f"Unknown overlay group '{group_id}', skipping")
                continue
            resolved.extend(getattr(group, attr))
        return resolved

    def enable_markers(self, group_ids: Iterable[str]) -> None:
        """Requests the markers of the given groups to be shown."""
        self.enable_filter.emit(
            self._resolve(self.marker_groups, group_ids, "markers")
        )

    def disable_markers(self, group_ids: Iterable[str]) -> None:
        """Requests the markers of the given groups to be hidden."""
        self.disable_filter.emit(
            self._resolve(self.marker_groups, group_ids, "markers")
        )

    def enable_polygons(self, group_ids: Iterable[str]) -> None:
        """Requests the polygons of the given groups to be shown."""
        self.enable_poly_filter.emit(
            self._resolve(self.polygon_groups, group_ids, "polygons")
        )

    def disable_polygons(self, group_ids: Iterable[str]) -> None:
        """Requests the polygons of the given groups to be hidden."""
        self.disable_poly_filter.emit(
            self._resolve(self.polygon_groups, group_ids, "polygons")
        )

    def load_from_dict(self, data: Dict[str, Any], factory: OverlayFactory) -> None:
        """
        Builds groups from world-coordinate data.

        Expected layout::

            {
              "markers": [{"id": "towns", "name": "Towns",
                           "markers": [{"label": "Kavala",
                                        "position": [3500, 13000]}]}],
              "polygons": [{"id": "zones", "name": "Zones",
                            "color": "#E74C3C",
                            "polygons": [[[0, 0], [100, 0], [100, 100]]]}]
            }

        Args:
            data: Overlay definitions.
            factory: Creates the overlay objects from world coordinates.

        Raises:
            ValueError: If an entry lacks its id or a position is malformed.
        """
        for group_data in data.get("markers", []):
            group_id = group_data.get("id")
            if not group_id:
                raise ValueError("Marker group without 'id'")
            markers = []
            for index, entry in enumerate(group_data.get("markers", [])):
                x, y = entry["position"]
                markers.append(
                    factory.make_marker(
                        f"{group_id}:{index}",
                        entry.get("label", ""),
                        WorldCoordinate(x, y),
                        entry.get("color"),
                    )
                )
            self.add_marker_group(
                MarkerGroup(group_id, group_data.get("name", group_id), markers)
            )

        for group_data in data.get("polygons", []):
            group_id = group_data.get("id")
            if not group_id:
                raise ValueError("Polygon group without 'id'")
            color = group_data.get("color")
            polygons = [
                factory.make_polygon([WorldCoordinate(x, y) for x, y in ring], color)
                for ring in group_data.get("polygons", [])
            ]
            self.add_polygon_group(
                PolygonGroup(group_id, group_data.get("name", group_id), polygons)
            )

        logger.info(
            f"Registry holds {len(self.marker_groups)} marker group(s) and "
            f"{len(self.polygon_groups)} polygon group(s)"
        )
