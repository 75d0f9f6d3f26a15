"""
Visibility Controller Module.

Synchronizes requested visibility for batches of overlay objects with the
map surface's layer membership. Membership on the surface is the visibility
state: an object is shown if and only if the surface holds it.
"""

import logging
from typing import Any, Iterable

from src.core.protocols import MapSurface

logger = logging.getLogger(__name__)


class VisibilityController:
    """
    Adds or removes overlay objects so that surface membership matches a
    requested visibility, issuing only the calls that change something.
    """

    def __init__(self, surface: MapSurface) -> None:
        """
        Initializes the VisibilityController.

        Args:
            surface: Map surface providing add_layer/remove_layer/has_layer.
        """
        self.surface = surface

    def set_visibility(self, layers: Iterable[Any], visible: bool) -> int:
        """
        Shows or hides each overlay object.

        Present objects are removed when hiding, absent objects are added
        when showing, everything else is left alone. Repeating a call with
        the same arguments issues no surface calls.

        Args:
            layers: Overlay objects to toggle.
            visible: Target state.

        Returns:
            int: Number of add/remove calls issued.
        """
        changed = 0
        for layer in layers:
            present = self.surface.has_layer(layer)
            if present and not visible:
                self.surface.remove_layer(layer)
                changed += 1
            elif not present and visible:
                self.surface.add_layer(layer)
                changed += 1
        return changed

    def set_marker_visibility(self, markers: Iterable[Any], visible: bool) -> int:
        """
        Toggles every overlay object owned by each logical marker.

        Args:
            markers: Logical markers exposing a ``layers`` list.
            visible: Target state.

        Returns:
            int: Number of add/remove calls issued.
        """
        changed = 0
        for marker in markers:
            changed += self.set_visibility(marker.layers, visible)
        logger.debug(f"Marker visibility -> {visible}: {changed} layer change(s)")
        return changed

    def set_polygon_visibility(self, polygons: Iterable[Any], visible: bool) -> int:
        """
        Toggles polygon overlay objects, one object per polygon.

        Args:
            polygons: Polygon overlay objects.
            visible: Target state.

        Returns:
            int: Number of add/remove calls issued.
        """
        changed = self.set_visibility(polygons, visible)
        logger.debug(f"Polygon visibility -> {visible}: {changed} layer change(s)")
        return changed
