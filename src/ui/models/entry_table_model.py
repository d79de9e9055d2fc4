# ui/models/entry_table_model.py
from __future__ import annotations

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PySide6.QtGui import QBrush, QColor

from core.lrc_export import format_timestamp
from core.models import LyricEntry

COL_TIME = 0
COL_TEXT = 1

_ACTIVE_BG = QBrush(QColor(46, 143, 255, 77))
_UNSYNCED_FG = QBrush(QColor("#6b7280"))


class EntryTableModel(QAbstractTableModel):
    """Visible (filtered) entries of a SyncSession, Time | Text."""

    def __init__(self, session):
        super().__init__()
        self.session = session
        self._rows: list[LyricEntry] = []
        self._active: int | None = None

        session.store.entriesChanged.connect(self.refresh)
        session.filterModeChanged.connect(self.refresh)
        session.activeIndexChanged.connect(self._on_active_changed)
        self.refresh()

    def refresh(self, *_args):
        self.beginResetModel()
        self._rows = self.session.visible_entries()
        self._active = self.session.active_index
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:
        return len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:
        return 2

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return ["Time", "Text"][section]

    def flags(self, index: QModelIndex):
        base = super().flags(index)
        if index.isValid() and index.column() == COL_TEXT:
            return base | Qt.ItemIsEditable
        return base

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        entry = self._rows[index.row()]
        col = index.column()

        if role in (Qt.DisplayRole, Qt.EditRole):
            if col == COL_TIME:
                return format_timestamp(entry.seconds) if entry.is_synced else ""
            return entry.text
        if role == Qt.BackgroundRole and index.row() == self._active:
            return _ACTIVE_BG
        if role == Qt.ForegroundRole and not entry.is_synced:
            return _UNSYNCED_FG
        if role == Qt.UserRole:
            return entry
        return None

    def setData(self, index: QModelIndex, value, role=Qt.EditRole) -> bool:
        if not index.isValid() or index.column() != COL_TEXT or role != Qt.EditRole:
            return False
        text = str(value or "").strip()
        if not text:
            return False
        self.session.edit_line(self._rows[index.row()].id, text)
        return True

    def entry_at(self, row: int) -> LyricEntry | None:
        if row < 0 or row >= len(self._rows):
            return None
        return self._rows[row]

    def _on_active_changed(self, idx):
        old, self._active = self._active, idx
        for row in (old, idx):
            if row is not None and 0 <= row < len(self._rows):
                self.dataChanged.emit(self.index(row, 0), self.index(row, 1), [Qt.BackgroundRole])
