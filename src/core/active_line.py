# core/active_line.py
from __future__ import annotations

from typing import Optional, Sequence

from .models import LyricEntry, Synced


def resolve_active_index(entries: Sequence[LyricEntry], cursor: float) -> Optional[int]:
    """
    Index of the line to highlight at ``cursor`` seconds, or None.

    The running threshold never decreases, so a line whose timestamp is lower
    than an earlier accepted one is skipped even if it is <= cursor. Equal
    timestamps resolve to the later line.
    """
    idx: Optional[int] = None
    threshold = -1.0
    for i, entry in enumerate(entries):
        ts = entry.timestamp
        if not isinstance(ts, Synced):
            continue
        if ts.seconds <= cursor and ts.seconds >= threshold:
            idx = i
            threshold = ts.seconds
    return idx
