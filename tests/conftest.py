import logging
import pathlib
import sys

import pytest

# Ensure project root is in sys.path
repo_root = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))

try:
    from PySide6.QtWidgets import QApplication
except ImportError:
    QApplication = None


@pytest.fixture(scope="session")
def qapp():
    """
    Ensure QApplication is instantiated only once.
    """
    if QApplication is None:
        yield None
        return

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class FakeSurface:
    """
    In-memory map surface recording every add/remove call.
    """

    def __init__(self, initial=()):
        self.layers = list(initial)
        self.calls = []

    def add_layer(self, layer):
        self.calls.append(("add", layer))
        self.layers.append(layer)

    def remove_layer(self, layer):
        self.calls.append(("remove", layer))
        self.layers.remove(layer)

    def has_layer(self, layer):
        return any(existing is layer for existing in self.layers)


class FakeClipboard:
    """
    Clipboard sink keeping every copied string.
    """

    def __init__(self):
        self.copied = []

    def copy(self, text):
        self.copied.append(text)

    @property
    def last(self):
        return self.copied[-1] if self.copied else None


class FailingClipboard:
    """Clipboard sink that always fails."""

    def copy(self, text):
        raise RuntimeError("clipboard unavailable")


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def fake_clipboard():
    return FakeClipboard()


class MockQSettings:
    """
    In-memory mock for QSettings to prevent tests from overwriting real config.
    """

    _storage = {}

    def __init__(self, *args, **kwargs):
        self.organization = args[0] if len(args) > 0 else "MockOrg"
        self.application = args[1] if len(args) > 1 else "MockApp"

    def setValue(self, key, value):
        self._storage[f"{self.organization}/{self.application}/{key}"] = value

    def value(self, key, default=None, type=None):
        return self._storage.get(
            f"{self.organization}/{self.application}/{key}", default
        )

    def sync(self):
        pass


@pytest.fixture
def mock_qsettings(monkeypatch):
    """Patches QSettings where the main window uses it."""
    monkeypatch.setattr("src.app.main_window.QSettings", MockQSettings)
    MockQSettings._storage = {}
    return MockQSettings


@pytest.fixture
def preserve_root_logger():
    """Restores root logger handlers and level after a logging test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def surface_factory():
    """Returns the FakeSurface class for surfaces with initial layers."""
    return FakeSurface


@pytest.fixture
def failing_clipboard():
    return FailingClipboard()
