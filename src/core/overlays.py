"""
Overlay Groups Module.

Defines the identified collections of overlay objects supplied by the
marker registry. Groups only reference overlay objects; whether an object
is shown is decided by map surface membership, never stored here.
"""

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class MarkerGroup:
    """
    A named collection of logical markers.

    Each marker exposes a ``layers`` list of the overlay objects it owns
    (e.g. an icon and a label), all toggled together.

    Attributes:
        id: Group identifier used by filter requests.
        name: Display name.
        markers: Logical markers in this group.
    """

    id: str
    name: str
    markers: List[Any] = field(default_factory=list)

    def layers(self) -> List[Any]:
        """Returns every overlay object owned by the group's markers."""
        return [layer for marker in self.markers for layer in marker.layers]


@dataclass
class PolygonGroup:
    """
    A named collection of polygons, one overlay object per polygon.

    Attributes:
        id: Group identifier used by filter requests.
        name: Display name.
        polygons: Polygon overlay objects.
    """

    id: str
    name: str
    polygons: List[Any] = field(default_factory=list)
