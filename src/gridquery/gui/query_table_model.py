"""QueryTableModel

Qt item model serving the presentation table of a ``QueryingController``.
Header sort requests coming from a ``QTableView`` (``setSortingEnabled``)
are routed to the sorting controller instead of Qt's own proxy sorting,
so the querying pipeline stays the single source of row order.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt

from gridquery.data.data_table import DataTable
from gridquery.querying.options import ColumnSortingOrder
from gridquery.querying.querying_controller import QueryingController

__all__ = ["QueryTableModel"]

_QT_TO_ORDER = {
    Qt.SortOrder.AscendingOrder: ColumnSortingOrder.ASCENDING,
    Qt.SortOrder.DescendingOrder: ColumnSortingOrder.DESCENDING,
}


class QueryTableModel(QAbstractTableModel):
    def __init__(self, querying: QueryingController, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._querying = querying
        self._view: DataTable = querying.proceed()

    @property
    def view(self) -> DataTable:
        return self._view

    # Refresh ------------------------------------------------------
    def refresh(self, force: bool = False) -> bool:
        """Pull a new presentation table if the querying state is stale.

        Returns True when the model was reset.
        """
        if not (force or self._querying.should_be_updated):
            return False
        view = self._querying.proceed(force=force)
        self.beginResetModel()
        self._view = view
        self.endResetModel()
        return True

    # Qt model API -------------------------------------------------
    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return self._view.get_row_count()

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._view.get_column_ids())

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid():
            return None
        column_id = self._view.get_column_ids()[index.column()]
        value = self._view.get_cell(column_id, index.row())
        if role == Qt.ItemDataRole.DisplayRole:
            return "" if value is None else str(value)
        if role == Qt.ItemDataRole.UserRole:
            return value
        return None

    def headerData(  # type: ignore[override]
        self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole
    ) -> Any:
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal:
            return self._view.get_column_ids()[section]
        return str(section + 1)

    def sort(self, column: int, order: Qt.SortOrder = Qt.SortOrder.AscendingOrder) -> None:  # type: ignore[override]
        # Qt passes a negative column to restore the unsorted order
        if column < 0:
            self._querying.sorting.set_sorting(ColumnSortingOrder.NONE)
        else:
            column_id = self._view.get_column_ids()[column]
            self._querying.sorting.set_sorting(_QT_TO_ORDER[order], column_id)
        self.refresh()

    # Header indicator ---------------------------------------------
    def sort_indicator(self) -> Optional[Tuple[int, Qt.SortOrder]]:
        state = self._querying.sorting.current_sorting
        if state is None or not state.is_active:
            return None
        column_ids = self._view.get_column_ids()
        if state.column_id not in column_ids:
            return None
        qt_order = (
            Qt.SortOrder.AscendingOrder
            if state.order is ColumnSortingOrder.ASCENDING
            else Qt.SortOrder.DescendingOrder
        )
        return column_ids.index(state.column_id), qt_order
