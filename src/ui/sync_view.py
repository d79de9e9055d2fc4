# ui/sync_view.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QTableView, QMenu, QButtonGroup, QStackedWidget
)

from core.entry_store import NUDGE_COARSE, NUDGE_FINE
from core.models import FilterMode
from ui.models.entry_table_model import COL_TEXT, EntryTableModel

_EMPTY_MESSAGES = {
    FilterMode.ALL: "No lyrics to sync yet.\nGo to the \"Lyrics\" tab to add lyrics.",
    FilterMode.UNSYNCED: "No unsynced lyrics.",
    FilterMode.SYNCED: "No synced lyrics yet.",
}


class SyncView(QWidget):
    """
    Sync tab:
      - filter buttons with counts + reset all
      - table of visible lines, active line highlighted while playing
      - right click a line: sync / remove / nudge / play from here
      - bottom: remove last timestamp, sync next line
    """

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(8)

        # --- filters ---
        header = QHBoxLayout()
        header.setSpacing(8)

        self._filter_group = QButtonGroup(self)
        self._filter_group.setExclusive(True)
        self._filter_buttons: dict[FilterMode, QPushButton] = {}
        for mode in FilterMode:
            btn = QPushButton()
            btn.setCheckable(True)
            btn.setObjectName("FilterButton")
            btn.clicked.connect(lambda _checked=False, m=mode: self.session.set_filter_mode(m))
            self._filter_group.addButton(btn)
            self._filter_buttons[mode] = btn
            header.addWidget(btn)
        self._filter_buttons[self.session.filter_mode].setChecked(True)

        header.addStretch(1)
        self.btn_reset = QPushButton("Reset all")
        self.btn_reset.setToolTip("Remove every timestamp")
        self.btn_reset.clicked.connect(self.session.reset_all_timestamps)
        header.addWidget(self.btn_reset)
        root.addLayout(header)

        # --- table / empty message ---
        self.stack = QStackedWidget()
        root.addWidget(self.stack, 1)

        self.msg = QLabel()
        self.msg.setAlignment(Qt.AlignCenter)
        self.msg.setWordWrap(True)
        self.stack.addWidget(self.msg)

        self.model = EntryTableModel(session)
        self.table = QTableView()
        self.table.setModel(self.model)
        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QTableView.EditTrigger.DoubleClicked | QTableView.EditTrigger.EditKeyPressed)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setColumnWidth(0, 95)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)
        self.stack.addWidget(self.table)

        # --- bottom actions ---
        actions = QHBoxLayout()
        actions.addStretch(1)
        self.btn_unsync_last = QPushButton("Remove last")
        self.btn_unsync_last.setToolTip("Remove timestamp from last synced lyric (Ctrl+Backspace)")
        self.btn_unsync_last.clicked.connect(self.session.unsync_last)
        self.btn_sync_next = QPushButton("Sync")
        self.btn_sync_next.setToolTip("Sync next lyric at the current position (Ctrl+Enter)")
        self.btn_sync_next.clicked.connect(self.session.sync_next)
        actions.addWidget(self.btn_unsync_last)
        actions.addWidget(self.btn_sync_next)
        actions.addStretch(1)
        root.addLayout(actions)

        self.session.store.entriesChanged.connect(self._refresh)
        self.session.filterModeChanged.connect(self._refresh)
        self.session.activeIndexChanged.connect(self._scroll_to_active)
        self._refresh()

    # --- state ---
    def _refresh(self, *_args):
        counts = self.session.counts()
        labels = {
            FilterMode.ALL: f"All ({counts.all})",
            FilterMode.UNSYNCED: f"Unsynced ({counts.unsynced})",
            FilterMode.SYNCED: f"Synced ({counts.synced})",
        }
        for mode, btn in self._filter_buttons.items():
            btn.setText(labels[mode])
            btn.setChecked(mode is self.session.filter_mode)

        has_entries = counts.all > 0
        self.btn_sync_next.setEnabled(counts.unsynced > 0)
        self.btn_unsync_last.setEnabled(counts.synced > 0)
        self.btn_reset.setEnabled(has_entries)

        if self.model.rowCount() == 0:
            self.msg.setText(_EMPTY_MESSAGES[self.session.filter_mode])
            self.stack.setCurrentWidget(self.msg)
        else:
            self.stack.setCurrentWidget(self.table)

    def _scroll_to_active(self, idx):
        if idx is None or self.stack.currentWidget() is not self.table:
            return
        if self.table.state() == QTableView.State.EditingState:
            return
        self.table.scrollTo(self.model.index(idx, COL_TEXT), QTableView.ScrollHint.PositionAtCenter)

    # --- context menu ---
    def _on_context_menu(self, pos):
        entry = self.model.entry_at(self.table.indexAt(pos).row())
        if entry is None:
            return

        menu = QMenu(self)
        menu.addAction("Sync at current time", lambda: self.session.sync_line(entry.id))
        menu.addAction("Edit text", lambda: self.table.edit(self.table.indexAt(pos).siblingAtColumn(COL_TEXT)))
        if entry.is_synced:
            menu.addAction("Remove timestamp", lambda: self.session.unsync_line(entry.id))
            menu.addSeparator()
            for label, delta in (
                ("Move -30ms", -NUDGE_COARSE),
                ("Move -10ms", -NUDGE_FINE),
                ("Move +10ms", NUDGE_FINE),
                ("Move +30ms", NUDGE_COARSE),
            ):
                menu.addAction(label, lambda d=delta: self.session.nudge(entry.id, d))
            menu.addSeparator()
            menu.addAction("Play from this timestamp", lambda: self.session.play_from(entry.id))
        menu.addSeparator()
        menu.addAction("Remove line", lambda: self.session.remove_line(entry.id))
        menu.exec(self.table.viewport().mapToGlobal(pos))
