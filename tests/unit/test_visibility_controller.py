"""Unit tests for the VisibilityController."""

from types import SimpleNamespace

from src.services.visibility_controller import VisibilityController


def make_marker(*layers):
    """A logical marker owning the given overlay objects."""
    return SimpleNamespace(layers=list(layers))


def test_only_absent_layers_are_added(surface_factory):
    m1, m2 = object(), object()
    surface = surface_factory(initial=[m1])
    controller = VisibilityController(surface)

    changed = controller.set_visibility([m1, m2], True)

    assert changed == 1
    assert surface.calls == [("add", m2)]


def test_only_present_layers_are_removed(surface_factory):
    m1, m2 = object(), object()
    surface = surface_factory(initial=[m1])
    controller = VisibilityController(surface)

    controller.set_visibility([m1, m2], False)

    assert surface.calls == [("remove", m1)]
    assert surface.layers == []


def test_hide_twice_is_idempotent(surface_factory):
    layers = [object(), object(), object()]
    surface = surface_factory(initial=layers[:2])
    controller = VisibilityController(surface)

    controller.set_visibility(layers, False)
    membership = list(surface.layers)
    calls = len(surface.calls)

    assert controller.set_visibility(layers, False) == 0
    assert surface.layers == membership
    assert len(surface.calls) == calls


def test_show_twice_is_idempotent(surface_factory):
    layers = [object(), object()]
    surface = surface_factory()
    controller = VisibilityController(surface)

    controller.set_visibility(layers, True)
    assert controller.set_visibility(layers, True) == 0
    assert len(surface.calls) == 2


def test_show_then_hide_restores_membership(surface_factory):
    a, b, c = object(), object(), object()
    surface = surface_factory(initial=[c])
    controller = VisibilityController(surface)

    controller.set_visibility([a, b], True)
    controller.set_visibility([a, b], False)

    assert surface.layers == [c]


def test_marker_layers_toggle_together(surface_factory):
    icon, label = object(), object()
    other_icon = object()
    surface = surface_factory(initial=[label])
    controller = VisibilityController(surface)

    changed = controller.set_marker_visibility(
        [make_marker(icon, label), make_marker(other_icon)], True
    )

    assert changed == 2
    assert surface.calls == [("add", icon), ("add", other_icon)]
    assert all(surface.has_layer(layer) for layer in (icon, label, other_icon))


def test_marker_hide(surface_factory):
    icon, label = object(), object()
    surface = surface_factory(initial=[icon, label])
    controller = VisibilityController(surface)

    controller.set_marker_visibility([make_marker(icon, label)], False)

    assert surface.layers == []


def test_polygons_toggle(surface_factory):
    p1, p2 = object(), object()
    surface = surface_factory(initial=[p2])
    controller = VisibilityController(surface)

    assert controller.set_polygon_visibility([p1, p2], True) == 1
    assert controller.set_polygon_visibility([p1, p2], False) == 2
    assert surface.layers == []


def test_empty_batch_is_noop(surface_factory):
    surface = surface_factory()
    controller = VisibilityController(surface)
    assert controller.set_visibility([], True) == 0
    assert surface.calls == []
