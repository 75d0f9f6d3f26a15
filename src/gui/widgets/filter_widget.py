"""
Layer Filter Widget Module.

Lists the registry's marker and polygon groups with checkboxes; toggling a
box requests the group to be shown or hidden.
"""

from typing import Dict, Iterable, Optional, Tuple

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

GroupEntry = Tuple[str, str]  # (group_id, display name)


class LayerFilterWidget(QWidget):
    """
    Checkbox lists for marker and polygon groups.

    Signals:
        marker_group_toggled: Args: (group_id: str, visible: bool)
        polygon_group_toggled: Args: (group_id: str, visible: bool)
    """

    marker_group_toggled = Signal(str, bool)
    polygon_group_toggled = Signal(str, bool)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Sets up the widget UI."""
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(4, 4, 4, 4)

        main_layout.addWidget(QLabel("<b>Markers</b>"))
        self.list_markers = QListWidget()
        self.list_markers.itemChanged.connect(self._on_marker_item_changed)
        main_layout.addWidget(self.list_markers)

        main_layout.addWidget(QLabel("<b>Areas</b>"))
        self.list_polygons = QListWidget()
        self.list_polygons.itemChanged.connect(self._on_polygon_item_changed)
        main_layout.addWidget(self.list_polygons)

    @staticmethod
    def _populate(list_widget: QListWidget, groups: Iterable[GroupEntry]) -> None:
        list_widget.blockSignals(True)
        list_widget.clear()
        for group_id, name in groups:
            item = QListWidgetItem(name)
            item.setData(Qt.ItemDataRole.UserRole, group_id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked)
            list_widget.addItem(item)
        list_widget.blockSignals(False)

    def set_groups(
        self, marker_groups: Iterable[GroupEntry], polygon_groups: Iterable[GroupEntry]
    ) -> None:
        """
        Fills both lists; every group starts checked.

        Args:
            marker_groups: (id, name) pairs for marker groups.
            polygon_groups: (id, name) pairs for polygon groups.
        """
        self._populate(self.list_markers, marker_groups)
        self._populate(self.list_polygons, polygon_groups)

    @staticmethod
    def _checked_state(list_widget: QListWidget) -> Dict[str, bool]:
        return {
            list_widget.item(i).data(Qt.ItemDataRole.UserRole): (
                list_widget.item(i).checkState() == Qt.CheckState.Checked
            )
            for i in range(list_widget.count())
        }

    def marker_state(self) -> Dict[str, bool]:
        """Returns group id -> checked for marker groups."""
        return self._checked_state(self.list_markers)

    def polygon_state(self) -> Dict[str, bool]:
        """Returns group id -> checked for polygon groups."""
        return self._checked_state(self.list_polygons)

    def _on_marker_item_changed(self, item: QListWidgetItem) -> None:
        self.marker_group_toggled.emit(
            item.data(Qt.ItemDataRole.UserRole),
            item.checkState() == Qt.CheckState.Checked,
        )

    def _on_polygon_item_changed(self, item: QListWidgetItem) -> None:
        self.polygon_group_toggled.emit(
            item.data(Qt.ItemDataRole.UserRole),
            item.checkState() == Qt.CheckState.Checked,
        )
