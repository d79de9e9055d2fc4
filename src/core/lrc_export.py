# core/lrc_export.py
from __future__ import annotations

import math
import os
import re
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from .errors import IncompleteSync
from .models import LyricEntry

_UNSAFE_FILENAME_RE = re.compile(r"[\\/\x00]")


def format_timestamp(seconds: Optional[float]) -> str:
    """Format seconds as MM:SS.CC (hundredths truncated, minutes unbounded)."""
    if seconds is None:
        return "00:00.00"
    # round first so 0.29 * 100 == 28.999999999999996 still gives 29
    total_cs = int(math.floor(round(max(0.0, float(seconds)) * 100, 6)))
    minutes = total_cs // 6000
    secs = (total_cs // 100) % 60
    cs = total_cs % 100
    return f"{minutes:02d}:{secs:02d}.{cs:02d}"


def export_lrc(entries: Iterable[LyricEntry]) -> str:
    """
    Render entries as LRC lines, sorted by timestamp.

    Raises IncompleteSync when any entry has no timestamp; nothing is rendered
    in that case.
    """
    items = list(entries)
    unsynced = sum(1 for e in items if not e.is_synced)
    if unsynced:
        raise IncompleteSync(unsynced)

    # sorted() is stable: equal timestamps keep collection order
    ordered = sorted(items, key=lambda e: e.seconds)
    return "\n".join(f"[{format_timestamp(e.seconds)}]{e.text}" for e in ordered)


def suggest_filename(title: str | None) -> str:
    name = _UNSAFE_FILENAME_RE.sub("_", (title or "").strip())
    return f"{name or 'lyrics'}.lrc"


def save_lrc(output_path: str | Path, content: str) -> Path:
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            delete=False,
            encoding="utf-8",
            newline="\n",
            dir=str(path.parent),
        ) as handle:
            temp_name = handle.name
            handle.write(content)
        os.replace(temp_name, path)
    except OSError:
        # leave no half-written temp file next to the target
        if temp_name and os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
    return path
