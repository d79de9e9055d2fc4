# core/errors.py
from __future__ import annotations


class LyricSyncError(Exception):
    """Base class for errors raised by the sync engine and its collaborators."""


class IncompleteSync(LyricSyncError):
    def __init__(self, unsynced_count: int):
        self.unsynced_count = int(unsynced_count)
        noun = "line" if self.unsynced_count == 1 else "lines"
        super().__init__(f"Please sync all lyrics before finishing ({self.unsynced_count} {noun} left).")


class UnknownEntryId(LyricSyncError):
    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(f"No lyric entry with id {entry_id!r}")


class MetadataIdentificationFailure(LyricSyncError):
    pass


class PlaybackFailure(LyricSyncError):
    """The player refused or stopped playing the loaded file; carried by Player.playbackFailed."""
