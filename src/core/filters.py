# core/filters.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .models import FilterMode, LyricEntry


@dataclass(frozen=True)
class SyncCounts:
    all: int
    unsynced: int
    synced: int


def matches_mode(entry: LyricEntry, mode: FilterMode) -> bool:
    if mode is FilterMode.UNSYNCED:
        return not entry.is_synced
    if mode is FilterMode.SYNCED:
        return entry.is_synced
    return True


def filter_entries(entries: Iterable[LyricEntry], mode: FilterMode) -> List[LyricEntry]:
    return [e for e in entries if matches_mode(e, mode)]


def count_entries(entries: Iterable[LyricEntry]) -> SyncCounts:
    total = 0
    synced = 0
    for e in entries:
        total += 1
        if matches_mode(e, FilterMode.SYNCED):
            synced += 1
    return SyncCounts(all=total, unsynced=total - synced, synced=synced)
