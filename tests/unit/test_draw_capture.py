"""Unit tests for DrawCapture."""

import json
import logging

import pytest

from src.core.map_config import MapConfig
from src.core.world_coords import CoordinateTransformer, MapPoint
from src.services.draw_capture import CaptureResult, DrawCapture, copy_to_clipboard

SQUARE = [MapPoint(0, 0), MapPoint(100, 0), MapPoint(100, 100), MapPoint(0, 100)]


@pytest.fixture
def transformer():
    return CoordinateTransformer(MapConfig(map_size=200, max_bounds=200))


@pytest.fixture
def capture(transformer, fake_clipboard, fake_surface):
    return DrawCapture(transformer, fake_clipboard, fake_surface)


def test_polygon_payload_has_all_vertices_in_order(capture, fake_clipboard):
    """Four vertices in, four rounded pairs out, same order, no dedup."""
    result = capture.on_shape_completed("polygon", SQUARE)

    assert isinstance(result, CaptureResult)
    assert json.loads(fake_clipboard.last) == [[0, 200], [0, 100], [100, 100], [100, 200]]
    assert result.coordinates == [(0, 200), (0, 100), (100, 100), (100, 200)]


def test_payload_is_pretty_printed_with_two_spaces(capture, fake_clipboard):
    capture.on_shape_completed("polygon", SQUARE)
    expected = json.dumps([[0, 200], [0, 100], [100, 100], [100, 200]], indent=2)
    assert fake_clipboard.last == expected
    assert fake_clipboard.last.startswith("[\n  [\n    0,\n    200\n  ],")


def test_closing_vertex_is_kept(capture, fake_clipboard):
    closed = SQUARE + [MapPoint(0, 0)]
    capture.on_shape_completed("polygon", closed)
    pairs = json.loads(fake_clipboard.last)
    assert len(pairs) == 5
    assert pairs[0] == pairs[-1]


def test_coordinates_rounded_to_two_decimals(fake_clipboard):
    transformer = CoordinateTransformer(MapConfig(map_size=3, max_bounds=10))
    capture = DrawCapture(transformer, fake_clipboard)

    result = capture.on_shape_completed(
        "polygon", [MapPoint(1, 1), MapPoint(1, 2), MapPoint(2, 2)]
    )

    # 10 / 3 = 3.333..., 10 - 3.333... = 6.666...
    assert result.coordinates == [(3.33, 6.67), (6.67, 6.67), (6.67, 3.33)]


def test_area_in_world_units(capture):
    result = capture.on_shape_completed("polygon", SQUARE)
    assert result.area == pytest.approx(10000.0)


def test_drawn_layer_is_retained(capture, fake_surface):
    layer = object()
    capture.on_shape_completed("polygon", SQUARE, layer)
    assert fake_surface.has_layer(layer)


@pytest.mark.parametrize("shape_type", ["marker", "circle", "rectangle", "circlemarker"])
def test_other_shapes_are_ignored(capture, fake_clipboard, fake_surface, shape_type):
    layer = object()
    result = capture.on_shape_completed(shape_type, SQUARE, layer)

    assert result is None
    assert fake_clipboard.copied == []
    assert fake_surface.has_layer(layer)


def test_clipboard_failure_is_logged_not_raised(transformer, failing_clipboard, caplog):
    capture = DrawCapture(transformer, failing_clipboard)

    with caplog.at_level(logging.ERROR):
        result = capture.on_shape_completed("polygon", SQUARE)

    assert result is not None
    assert "Clipboard write failed" in caplog.text


def test_copy_to_clipboard_reports_success(fake_clipboard, failing_clipboard):
    assert copy_to_clipboard(fake_clipboard, "[1, 2]") is True
    assert fake_clipboard.last == "[1, 2]"
    assert copy_to_clipboard(failing_clipboard, "[1, 2]") is False
