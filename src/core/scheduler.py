# core/scheduler.py
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .entry_store import EntryStore

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 500


class ReconcileScheduler(QObject):
    """
    Debounced text -> entries reconciliation.

    A single single-shot timer backs the scheduler: every ``schedule`` call
    replaces the pending text and restarts the timer, so only the run after
    the last edit of a burst happens. The run reads the store as it is at
    that moment.
    """
    reconciled = Signal()

    def __init__(self, store: EntryStore, delay_ms: int = DEFAULT_DEBOUNCE_MS, parent=None):
        super().__init__(parent)
        self.store = store
        self._pending: Optional[str] = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(delay_ms)))
        self._timer.timeout.connect(self._run)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    def is_pending(self) -> bool:
        return self._pending is not None

    def schedule(self, text: str) -> None:
        self._pending = text or ""
        self._timer.start()   # restarting cancels the previous run

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = None

    def flush(self) -> bool:
        """Run a pending reconciliation now. Returns False if none was pending."""
        if self._pending is None:
            return False
        self._timer.stop()
        self._run()
        return True

    def _run(self) -> None:
        text = self._pending
        self._pending = None
        if text is None:
            return
        self.store.replace_from_text(text)
        logger.debug("Reconciled lyrics text into %s entries", len(self.store))
        self.reconciled.emit()
