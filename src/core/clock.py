# core/clock.py
from __future__ import annotations

from PySide6.QtCore import QObject, Signal, Slot


class PlaybackClock(QObject):
    """
    Read-only mirror of the player's position, used as the sync cursor.

    The player pushes updates at its own cadence (Qt positionChanged, ~every
    30-100 ms); only the latest value is kept and signals fire only on change.
    """
    cursorChanged = Signal(float)     # seconds
    durationChanged = Signal(float)   # seconds
    playingChanged = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._current_time: float = 0.0
        self._duration: float = 0.0
        self._is_playing: bool = False

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @Slot(int)
    def on_position_ms(self, ms: int) -> None:
        self.set_current_time(int(ms) / 1000.0)

    @Slot(int)
    def on_duration_ms(self, ms: int) -> None:
        value = max(0.0, int(ms) / 1000.0)
        if value == self._duration:
            return
        self._duration = value
        self.durationChanged.emit(value)

    @Slot(bool)
    def on_playing_changed(self, playing: bool) -> None:
        playing = bool(playing)
        if playing == self._is_playing:
            return
        self._is_playing = playing
        self.playingChanged.emit(playing)

    def set_current_time(self, seconds: float) -> None:
        value = max(0.0, float(seconds))
        if value == self._current_time:
            return
        self._current_time = value
        self.cursorChanged.emit(value)

    def clamp(self, seconds: float) -> float:
        """Clamp a seek target to [0, duration] (duration 0 = not loaded yet)."""
        value = max(0.0, float(seconds))
        if self._duration > 0:
            value = min(value, self._duration)
        return value
