# core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_AUDD_URL = "https://api.audd.io/"


@dataclass(frozen=True)
class AppConfig:
    debounce_ms: int = 500
    strict_ids: bool = False
    audd_token: str = ""
    audd_url: str = DEFAULT_AUDD_URL
    http_timeout_s: float = 15.0

    @property
    def remote_identification(self) -> bool:
        return bool(self.audd_token)


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val >= minimum else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def load_config() -> AppConfig:
    """
    Env vars:
    - LYRICSYNC_DEBOUNCE_MS: delay before free text is reconciled (default: 500)
    - LYRICSYNC_STRICT_IDS: "1" raises on stale entry ids instead of ignoring them
    - LYRICSYNC_AUDD_TOKEN: AudD api token; empty disables remote identification
    - LYRICSYNC_AUDD_URL: AudD endpoint
    - LYRICSYNC_HTTP_TIMEOUT: request timeout in seconds (default: 15)
    """
    return AppConfig(
        debounce_ms=_env_int("LYRICSYNC_DEBOUNCE_MS", 500),
        strict_ids=os.getenv("LYRICSYNC_STRICT_IDS") == "1",
        audd_token=(os.getenv("LYRICSYNC_AUDD_TOKEN") or "").strip(),
        audd_url=(os.getenv("LYRICSYNC_AUDD_URL") or "").strip() or DEFAULT_AUDD_URL,
        http_timeout_s=_env_float("LYRICSYNC_HTTP_TIMEOUT", 15.0),
    )
