"""
Map Widget Module.

Wraps the MapGraphicsView with a toolbar for polygon drawing and a status
strip showing the grid reference under the pointer and the zoom level.
"""

import logging
from typing import Optional

from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from src.core.map_config import MapConfig
from src.core.world_coords import empty_grid_reference
from src.gui.widgets.map.map_graphics_view import MapGraphicsView

logger = logging.getLogger(__name__)


class MapWidget(QWidget):
    """
    Map panel: toolbar, map view and coordinate/zoom readout.
    """

    def __init__(self, config: MapConfig, parent: Optional[QWidget] = None) -> None:
        """
        Initializes the MapWidget.

        Args:
            config: Map configuration.
            parent: Parent widget.
        """
        super().__init__(parent)
        self.config = config

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.toolbar = QToolBar()
        layout.addWidget(self.toolbar)

        self.view = MapGraphicsView(config, self)
        layout.addWidget(self.view)

        status = QHBoxLayout()
        status.setContentsMargins(6, 2, 6, 2)
        self.coords_label = QLabel(
            empty_grid_reference(config.max_bounds, config.grid_size)
        )
        self.zoom_label = QLabel()
        status.addWidget(self.coords_label)
        status.addStretch()
        status.addWidget(self.zoom_label)
        layout.addLayout(status)

        self._setup_actions()
        self.set_zoom_label(self.view.get_zoom())

    def _setup_actions(self) -> None:
        self.draw_action = QAction("Draw Polygon", self)
        self.draw_action.setCheckable(True)
        self.draw_action.setToolTip(
            "Click to add vertices, double-click or Enter to finish, Esc to cancel"
        )
        self.draw_action.toggled.connect(self.view.set_draw_mode)
        self.view.draw_mode_changed.connect(self.draw_action.setChecked)
        self.toolbar.addAction(self.draw_action)

        clear_action = QAction("Clear Drawings", self)
        clear_action.triggered.connect(self.view.drawn_items.clear)
        self.toolbar.addAction(clear_action)

        self.toolbar.addSeparator()

        zoom_in = QAction("Zoom In", self)
        zoom_in.triggered.connect(lambda: self.view.set_zoom(self.view.get_zoom() + 1))
        self.toolbar.addAction(zoom_in)

        zoom_out = QAction("Zoom Out", self)
        zoom_out.triggered.connect(lambda: self.view.set_zoom(self.view.get_zoom() - 1))
        self.toolbar.addAction(zoom_out)

        center = QAction("Center", self)
        center.triggered.connect(self.view.fit_to_view)
        self.toolbar.addAction(center)

    def load_map(self, image_path: str) -> bool:
        """Loads the background map image."""
        loaded = self.view.load_map(image_path)
        if not loaded:
            logger.warning(f"Map image not shown: {image_path}")
        return loaded

    def set_coordinates(self, text: str) -> None:
        """Shows the grid reference under the pointer."""
        self.coords_label.setText(text)

    def set_zoom_label(self, zoom: int) -> None:
        """Shows the current zoom level."""
        self.zoom_label.setText(f"Zoom: {zoom}")
