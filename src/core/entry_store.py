# core/entry_store.py
from __future__ import annotations

import itertools
import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from .clock import PlaybackClock
from .errors import UnknownEntryId
from .models import UNSET, LyricEntry, Synced, Timestamp, timestamp_from_seconds
from .reconcile import reconcile_entries

logger = logging.getLogger(__name__)

NUDGE_FINE = 0.01
NUDGE_COARSE = 0.03


class EntryStore(QObject):
    """
    Ordered lyric entries for one editing session.

    All writes go through the methods below. Each one computes the new tuple,
    swaps it in with a single assignment and then emits ``entriesChanged``.
    """
    entriesChanged = Signal(object)   # tuple[LyricEntry, ...]

    def __init__(self, clock: PlaybackClock | None = None, strict_ids: bool = False, parent=None):
        super().__init__(parent)
        self.clock = clock
        self.strict_ids = strict_ids
        self._entries: Tuple[LyricEntry, ...] = ()
        self._ids = itertools.count(1)

    # ----------------------------
    # Queries
    # ----------------------------

    def entries(self) -> Tuple[LyricEntry, ...]:
        return self._entries

    def entry(self, entry_id: int) -> Optional[LyricEntry]:
        for e in self._entries:
            if e.id == entry_id:
                return e
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id) -> bool:
        return self.entry(entry_id) is not None

    def as_text(self) -> str:
        return "\n".join(e.text for e in self._entries)

    def next_id(self) -> int:
        return next(self._ids)

    # ----------------------------
    # Appending
    # ----------------------------

    def add_entry(self, text: str, timestamp: Timestamp = UNSET) -> int:
        entry = LyricEntry(id=self.next_id(), text=text, timestamp=timestamp)
        self._commit(self._entries + (entry,))
        return entry.id

    def capture_entry(self, text: str) -> int:
        """Append a line stamped with the clock's current position."""
        seconds = self.clock.current_time if self.clock else 0.0
        return self.add_entry(text, Synced(seconds))

    # ----------------------------
    # Per-entry mutations
    # ----------------------------

    def set_timestamp(self, entry_id: int, seconds: float | None) -> None:
        ts = timestamp_from_seconds(seconds)
        self._update(entry_id, lambda e: replace(e, timestamp=ts))

    def edit_text(self, entry_id: int, new_text: str) -> None:
        """Blank text is refused: every entry holds a non-empty line."""
        if not (new_text or "").strip():
            logger.debug("Ignoring blank text for entry %s", entry_id)
            return
        self._update(entry_id, lambda e: replace(e, text=new_text))

    def adjust_timestamp(self, entry_id: int, delta: float) -> None:
        def nudge(e: LyricEntry) -> LyricEntry:
            if not isinstance(e.timestamp, Synced):
                return e
            return replace(e, timestamp=Synced(max(0.0, e.timestamp.seconds + float(delta))))

        self._update(entry_id, nudge)

    def remove_entry(self, entry_id: int) -> None:
        if entry_id not in self:
            self._unknown(entry_id)
            return
        self._commit(tuple(e for e in self._entries if e.id != entry_id))

    # ----------------------------
    # Bulk mutations
    # ----------------------------

    def reset_all_timestamps(self) -> None:
        self._commit(tuple(replace(e, timestamp=UNSET) if e.is_synced else e for e in self._entries))

    def clear_all(self) -> None:
        # the id counter keeps running so ids are never handed out twice
        self._commit(())

    def replace_from_text(self, text: str) -> None:
        self._commit(tuple(reconcile_entries(text, self._entries, self.next_id)))

    def sync_next_unsynced(self, seconds: float) -> Optional[int]:
        for e in self._entries:
            if not e.is_synced:
                self.set_timestamp(e.id, seconds)
                return e.id
        return None

    def unsync_last_synced(self) -> Optional[int]:
        for e in reversed(self._entries):
            if e.is_synced:
                self.set_timestamp(e.id, None)
                return e.id
        return None

    # ----------------------------
    # Internals
    # ----------------------------

    def _update(self, entry_id: int, fn: Callable[[LyricEntry], LyricEntry]) -> None:
        found = False
        out = []
        for e in self._entries:
            if e.id == entry_id:
                found = True
                e = fn(e)
            out.append(e)
        if not found:
            self._unknown(entry_id)
            return
        self._commit(tuple(out))

    def _unknown(self, entry_id: int) -> None:
        if self.strict_ids:
            raise UnknownEntryId(entry_id)
        logger.debug("Ignoring mutation for unknown entry id %s", entry_id)

    def _commit(self, entries: Tuple[LyricEntry, ...]) -> None:
        if entries == self._entries:
            return
        self._entries = entries
        self.entriesChanged.emit(entries)
