# core/reconcile.py
from __future__ import annotations

from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable, List

from .models import UNSET, LyricEntry


def split_lyric_lines(text: str) -> List[str]:
    """Trimmed, non-empty lines of a free-text lyric block."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def reconcile_entries(
    text: str,
    previous: Iterable[LyricEntry],
    new_id: Callable[[], int],
) -> List[LyricEntry]:
    """
    Map an edited lyric block back onto the previous entries.

    Each line claims the first unclaimed previous entry with identical text and
    inherits its id and timestamp; lines without such an entry get a fresh id
    and no timestamp. Output order is the line order of ``text``.
    """
    pool: Dict[str, Deque[LyricEntry]] = defaultdict(deque)
    for entry in previous:
        pool[entry.text].append(entry)

    out: List[LyricEntry] = []
    for line in split_lyric_lines(text):
        candidates = pool.get(line)
        if candidates:
            matched = candidates.popleft()
            out.append(LyricEntry(id=matched.id, text=line, timestamp=matched.timestamp))
        else:
            out.append(LyricEntry(id=new_id(), text=line, timestamp=UNSET))
    return out
