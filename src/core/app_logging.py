# core/app_logging.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path


def _parse_level(level_name: str, default: int) -> int:
    level = getattr(logging, (level_name or "").upper(), None)
    return level if isinstance(level, int) else default


def _apply_module_levels(root_logger: logging.Logger, default_level: int) -> None:
    """LYRICSYNC_LOG_MODULE_LEVELS="core.entry_store=DEBUG,core.metadata=INFO" """
    raw = os.getenv("LYRICSYNC_LOG_MODULE_LEVELS", "").strip()
    if not raw:
        return

    for item in raw.split(","):
        entry = item.strip()
        module_name, sep, level_name = entry.partition("=")
        if not sep or not module_name.strip() or not level_name.strip():
            root_logger.warning("Invalid module-level logging entry: %s", entry)
            continue
        level = _parse_level(level_name.strip(), default_level)
        logging.getLogger(module_name.strip()).setLevel(level)


def setup_logging() -> None:
    """
    Configure application-wide logging once.

    Env vars:
    - LYRICSYNC_LOG_LEVEL: DEBUG/INFO/WARNING/ERROR (default: INFO)
    - LYRICSYNC_LOG_FILE: optional path to a rotating log file
    - LYRICSYNC_LOG_MODULE_LEVELS: comma-separated module overrides
    """
    level = _parse_level(os.getenv("LYRICSYNC_LOG_LEVEL", "INFO"), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    log_file = os.getenv("LYRICSYNC_LOG_FILE")
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(path, maxBytes=2 * 1024 * 1024, backupCount=2, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    _apply_module_levels(root, level)
