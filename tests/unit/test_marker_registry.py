"""Unit tests for the MarkerRegistry."""

import pytest

from src.app.overlay_factory import SceneOverlayFactory
from src.core.map_config import MapConfig
from src.core.overlays import MarkerGroup
from src.core.protocols import OverlayFactory
from src.core.world_coords import CoordinateTransformer, WorldCoordinate
from src.gui.widgets.map.coordinate_system import MapCoordinateSystem
from src.services.marker_registry import MarkerRegistry

OVERLAYS = {
    "markers": [
        {
            "id": "towns",
            "name": "Towns",
            "markers": [
                {"label": "North", "position": [50, 150]},
                {"label": "South", "position": [150, 20], "color": "#00FF00"},
            ],
        },
        {"id": "camps", "name": "Camps", "markers": [{"label": "C", "position": [1, 1]}]},
    ],
    "polygons": [
        {
            "id": "zones",
            "name": "Zones",
            "color": "#FF0000",
            "polygons": [[[0, 0], [100, 0], [100, 100]], [[10, 10], [20, 10], [20, 20]]],
        }
    ],
}


@pytest.fixture
def factory():
    return SceneOverlayFactory(
        MapCoordinateSystem(
            CoordinateTransformer(MapConfig(map_size=100, max_bounds=200))
        )
    )


@pytest.fixture
def registry(qapp, factory):
    registry = MarkerRegistry()
    registry.load_from_dict(OVERLAYS, factory)
    return registry


def test_groups_loaded(registry):
    assert set(registry.marker_groups) == {"towns", "camps"}
    assert set(registry.polygon_groups) == {"zones"}
    assert len(registry.marker_groups["towns"].markers) == 2
    assert len(registry.polygon_groups["zones"].polygons) == 2


def test_marker_positions_use_world_inverse(registry):
    north = registry.marker_groups["towns"].markers[0]
    # world (50, 150) on a 100 px map over 200 units -> scene (25, 25)
    assert north.pos().x() == pytest.approx(25.0)
    assert north.pos().y() == pytest.approx(25.0)


def test_marker_owns_icon_and_label(registry):
    marker = registry.marker_groups["towns"].markers[0]
    assert marker.layers == [marker.icon, marker.label_item]
    assert marker.label == "North"


def test_group_layers(registry):
    assert len(registry.marker_groups["towns"].layers()) == 4


def test_enable_markers_emits_resolved_markers(registry, qtbot):
    with qtbot.waitSignal(registry.enable_filter) as blocker:
        registry.enable_markers(["towns", "camps"])
    (markers,) = blocker.args
    assert len(markers) == 3


def test_disable_markers(registry, qtbot):
    with qtbot.waitSignal(registry.disable_filter) as blocker:
        registry.disable_markers(["camps"])
    assert blocker.args[0] == registry.marker_groups["camps"].markers


def test_polygon_signals(registry, qtbot):
    with qtbot.waitSignal(registry.enable_poly_filter) as blocker:
        registry.enable_polygons(["zones"])
    assert len(blocker.args[0]) == 2

    with qtbot.waitSignal(registry.disable_poly_filter) as blocker:
        registry.disable_polygons(["zones"])
    assert len(blocker.args[0]) == 2


def test_unknown_group_is_skipped(registry, qtbot, caplog):
    with qtbot.waitSignal(registry.enable_filter) as blocker:
        registry.enable_markers(["nope", "camps"])
    assert len(blocker.args[0]) == 1
    assert "nope" in caplog.text


def test_replacing_group_warns(registry, caplog):
    registry.add_marker_group(MarkerGroup("camps", "Camps v2"))
    assert registry.marker_groups["camps"].name == "Camps v2"
    assert "Replacing marker group" in caplog.text


def test_group_without_id_raises(qapp, factory):
    registry = MarkerRegistry()
    with pytest.raises(ValueError):
        registry.load_from_dict({"markers": [{"name": "x"}]}, factory)


class RecordingFactory:
    """Overlay factory returning plain tuples of what it was asked to build."""

    def make_marker(self, marker_id, label, position, color=None):
        return ("marker", marker_id, label, position, color)

    def make_polygon(self, ring, color=None):
        return ("polygon", list(ring), color)


def test_loading_needs_only_a_factory(qapp):
    factory = RecordingFactory()
    assert isinstance(factory, OverlayFactory)

    registry = MarkerRegistry()
    registry.load_from_dict(OVERLAYS, factory)

    assert registry.marker_groups["towns"].markers[1] == (
        "marker",
        "towns:1",
        "South",
        WorldCoordinate(150, 20),
        "#00FF00",
    )
    assert registry.polygon_groups["zones"].polygons[0] == (
        "polygon",
        [WorldCoordinate(0, 0), WorldCoordinate(100, 0), WorldCoordinate(100, 100)],
        "#FF0000",
    )


def test_scene_factory_default_polygon_color(qapp, factory):
    polygon = factory.make_polygon([(0, 0), (10, 0), (10, 10)])
    assert polygon.polygon().count() == 3
