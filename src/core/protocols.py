"""
Protocol Interfaces for Loose Coupling.

This module defines Protocol interfaces (PEP 544) for the collaborators the
map interaction layer talks to, so the services can be driven by the Qt
scene in the application and by plain fakes in tests.

Protocols allow structural subtyping where any class that implements the required
methods automatically satisfies the protocol without explicit inheritance.
"""

from typing import Any, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class MapSurface(Protocol):
    """
    Layer membership contract of the map surface.

    An overlay object is visible if and only if it is a member of the
    surface. No separate visibility flag exists.
    """

    def add_layer(self, layer: Any) -> None:
        """Adds an overlay object to the surface."""
        ...

    def remove_layer(self, layer: Any) -> None:
        """Removes an overlay object from the surface."""
        ...

    def has_layer(self, layer: Any) -> bool:
        """Returns True if the overlay object is currently on the surface."""
        ...


@runtime_checkable
class ClipboardSink(Protocol):
    """Accepts text destined for the system clipboard."""

    def copy(self, text: str) -> None:
        """Places text on the clipboard."""
        ...


@runtime_checkable
class OverlayFactory(Protocol):
    """
    Builds overlay objects from world-coordinate definitions.

    Keeps the registry independent of how overlays are drawn.
    """

    def make_marker(
        self, marker_id: str, label: str, position: Any, color: Optional[str] = None
    ) -> Any:
        """Creates a marker owner at a world position."""
        ...

    def make_polygon(self, ring: Sequence[Any], color: Optional[str] = None) -> Any:
        """Creates a polygon overlay from world-coordinate vertices."""
        ...
