# core/models.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


@dataclass(frozen=True)
class Unset:
    """Timestamp variant for a line that has not been synced yet."""

    def __repr__(self) -> str:
        return "UNSET"


@dataclass(frozen=True)
class Synced:
    seconds: float

    def __post_init__(self):
        value = float(self.seconds)
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"timestamp must be a finite value >= 0, got {self.seconds!r}")
        object.__setattr__(self, "seconds", value)


Timestamp = Union[Unset, Synced]

UNSET = Unset()


def timestamp_from_seconds(seconds: float | None) -> Timestamp:
    if seconds is None:
        return UNSET
    return Synced(seconds)


@dataclass(frozen=True)
class LyricEntry:
    id: int
    text: str
    timestamp: Timestamp = UNSET

    def __post_init__(self):
        object.__setattr__(self, "text", (self.text or "").strip())

    @property
    def is_synced(self) -> bool:
        return isinstance(self.timestamp, Synced)

    @property
    def seconds(self) -> Optional[float]:
        ts = self.timestamp
        return ts.seconds if isinstance(ts, Synced) else None


class FilterMode(Enum):
    ALL = "all"
    UNSYNCED = "unsynced"
    SYNCED = "synced"


@dataclass(frozen=True)
class TrackMeta:
    title: str
    artist: str
    cover_url: str = ""                  # "" -> UI shows the placeholder cover
    cover_data: bytes | None = field(default=None, repr=False)
    source: str = "fallback"             # "tags" | "audd" | "fallback"
