# core/session.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from .active_line import resolve_active_index
from .clock import PlaybackClock
from .config import AppConfig
from .entry_store import EntryStore
from .filters import SyncCounts, count_entries, filter_entries
from .lrc_export import export_lrc, save_lrc, suggest_filename
from .models import FilterMode, LyricEntry, TrackMeta
from .scheduler import ReconcileScheduler

logger = logging.getLogger(__name__)


class SyncSession(QObject):
    """
    One lyric-sync editing session.

    Owns the entry store, the playback clock mirror and the debounced
    reconciliation. The UI holds a reference to it and never writes entries
    any other way. ``player`` is the playback collaborator (see
    player.Player); it may be None when no audio is loaded.
    """
    filterModeChanged = Signal(object)     # FilterMode
    activeIndexChanged = Signal(object)    # int | None, index into visible_entries()
    lyricsTextChanged = Signal(str)        # editor text rewritten by the engine
    trackChanged = Signal(object)          # TrackMeta | None

    def __init__(self, config: AppConfig | None = None, player=None, parent=None):
        super().__init__(parent)
        self.config = config or AppConfig()
        self.player = player

        self.clock = PlaybackClock(self)
        self.store = EntryStore(self.clock, strict_ids=self.config.strict_ids, parent=self)
        self.scheduler = ReconcileScheduler(self.store, self.config.debounce_ms, self)

        self.track: Optional[TrackMeta] = None
        self._lyrics_text = ""
        self._filter_mode = FilterMode.ALL
        self._active_index: Optional[int] = None

        self.clock.cursorChanged.connect(self._refresh_active)
        self.store.entriesChanged.connect(self._refresh_active)

    # ----------------------------
    # Track
    # ----------------------------

    def set_track(self, meta: TrackMeta | None) -> None:
        self.track = meta
        self.trackChanged.emit(meta)

    # ----------------------------
    # Free-text lyrics
    # ----------------------------

    @property
    def lyrics_text(self) -> str:
        return self._lyrics_text

    def set_lyrics_text(self, text: str) -> None:
        self._lyrics_text = text or ""
        self.scheduler.schedule(self._lyrics_text)

    def edit_line(self, entry_id: int, new_text: str) -> None:
        if not (new_text or "").strip():
            return
        # apply any pending free-text edit first, otherwise it would overwrite this one
        self.scheduler.flush()
        self.store.edit_text(entry_id, new_text)
        self._lyrics_text = self.store.as_text()
        self.lyricsTextChanged.emit(self._lyrics_text)

    def remove_line(self, entry_id: int) -> None:
        self.scheduler.flush()
        self.store.remove_entry(entry_id)
        self._lyrics_text = self.store.as_text()
        self.lyricsTextChanged.emit(self._lyrics_text)

    def clear_lyrics(self) -> None:
        self.scheduler.cancel()
        self.store.clear_all()
        self._lyrics_text = ""
        self.lyricsTextChanged.emit("")

    # ----------------------------
    # Sync actions
    # ----------------------------

    def sync_next(self) -> Optional[int]:
        """Stamp the first unsynced line with the current cursor."""
        self.scheduler.flush()
        entry_id = self.store.sync_next_unsynced(self.clock.current_time)
        if entry_id is None:
            logger.debug("Nothing left to sync")
        return entry_id

    def unsync_last(self) -> Optional[int]:
        self.scheduler.flush()
        return self.store.unsync_last_synced()

    def sync_line(self, entry_id: int) -> None:
        self.store.set_timestamp(entry_id, self.clock.current_time)

    def unsync_line(self, entry_id: int) -> None:
        self.store.set_timestamp(entry_id, None)

    def nudge(self, entry_id: int, delta: float) -> None:
        self.store.adjust_timestamp(entry_id, delta)

    def reset_all_timestamps(self) -> None:
        self.store.reset_all_timestamps()

    # ----------------------------
    # Views
    # ----------------------------

    @property
    def filter_mode(self) -> FilterMode:
        return self._filter_mode

    def set_filter_mode(self, mode: FilterMode) -> None:
        if mode is self._filter_mode:
            return
        self._filter_mode = mode
        self.filterModeChanged.emit(mode)
        self._refresh_active()

    def visible_entries(self) -> List[LyricEntry]:
        return filter_entries(self.store.entries(), self._filter_mode)

    def counts(self) -> SyncCounts:
        return count_entries(self.store.entries())

    @property
    def active_index(self) -> Optional[int]:
        return self._active_index

    def _refresh_active(self, *_args) -> None:
        idx = resolve_active_index(self.visible_entries(), self.clock.current_time)
        if idx == self._active_index:
            return
        self._active_index = idx
        self.activeIndexChanged.emit(idx)

    # ----------------------------
    # Playback
    # ----------------------------

    def seek_to(self, seconds: float) -> None:
        target = self.clock.clamp(seconds)
        if self.player:
            self.player.seek_ms(int(round(target * 1000)))
        self.clock.set_current_time(target)

    def skip(self, delta_s: float) -> None:
        """Jump relative to the cursor, clamped like any other seek."""
        self.seek_to(self.clock.current_time + float(delta_s))

    def play_from(self, entry_id: int) -> bool:
        entry = self.store.entry(entry_id)
        if entry is None or entry.seconds is None:
            return False
        self.seek_to(entry.seconds)
        if self.player and not self.clock.is_playing:
            self.player.play()
        return True

    # ----------------------------
    # Export
    # ----------------------------

    def export(self) -> str:
        """LRC text of the session; raises IncompleteSync."""
        self.scheduler.flush()
        return export_lrc(self.store.entries())

    def suggested_filename(self) -> str:
        return suggest_filename(self.track.title if self.track else "")

    def save(self, output_path: str | Path) -> Path:
        content = self.export()
        path = save_lrc(output_path, content)
        logger.info("Saved %s synced lines to %s", len(self.store), path)
        return path
