# core/state.py
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QObject, Signal, Slot

from .config import AppConfig
from .session import SyncSession


@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warning/error


class AppState(QObject):
    notification = Signal(object)   # emits Notify

    def __init__(self, config: AppConfig | None = None, player=None):
        super().__init__()
        self.config = config or AppConfig()
        self.player = player
        self.session = SyncSession(self.config, player=player, parent=self)
        self.audio_path: str | None = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))
