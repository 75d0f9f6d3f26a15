"""
Tests that the concrete surface and clipboard classes satisfy their protocols.
"""

from PySide6.QtWidgets import QGraphicsScene

from src.core.protocols import ClipboardSink, MapSurface
from src.gui.widgets.map.map_graphics_view import DrawnItemsGroup, SceneSurface
from src.services.clipboard import QtClipboardSink


def test_scene_surface_is_map_surface(qapp):
    assert isinstance(SceneSurface(QGraphicsScene()), MapSurface)
    assert isinstance(DrawnItemsGroup(QGraphicsScene()), MapSurface)


def test_qt_clipboard_is_sink(qapp):
    assert isinstance(QtClipboardSink(), ClipboardSink)


def test_fakes_satisfy_protocols(fake_surface, fake_clipboard):
    assert isinstance(fake_surface, MapSurface)
    assert isinstance(fake_clipboard, ClipboardSink)


def test_unrelated_object_is_not_surface():
    assert not isinstance(object(), MapSurface)
