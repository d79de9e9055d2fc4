# ui/workers/identify_worker.py
from __future__ import annotations

from dataclasses import replace

from PySide6.QtCore import QThread, Signal

from core.config import AppConfig
from core.metadata import AuddClient, fetch_cover, identify_track


class IdentifyWorker(QThread):
    """Reads tags and (when a token is configured) asks AudD, off the UI thread."""
    progress = Signal(str)
    identified = Signal(object, str)   # TrackMeta, audio path

    def __init__(self, path: str, config: AppConfig, parent=None):
        super().__init__(parent)
        self.path = path
        self.config = config

    def run(self):
        client = None
        if self.config.remote_identification:
            self.progress.emit("Identifying track…")
            client = AuddClient(
                self.config.audd_token,
                base_url=self.config.audd_url,
                timeout_s=self.config.http_timeout_s,
            )
        else:
            self.progress.emit("Reading tags…")

        # identify_track falls back to tags / file name and never raises
        meta = identify_track(self.path, client)
        if meta.cover_url and meta.cover_data is None:
            self.progress.emit("Fetching cover…")
            meta = replace(meta, cover_data=fetch_cover(meta.cover_url, self.config.http_timeout_s))
        self.identified.emit(meta, self.path)
