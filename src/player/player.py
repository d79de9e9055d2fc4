# src/player/player.py
from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QUrl, Signal
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

from core.errors import PlaybackFailure

logger = logging.getLogger(__name__)


class Player(QObject):
    """Audio playback for the sync session (Qt Multimedia backend)."""
    playingChanged = Signal(bool)
    positionChanged = Signal(int)       # ms
    durationChanged = Signal(int)       # ms
    playbackFailed = Signal(object)     # PlaybackFailure

    def __init__(self):
        super().__init__()
        self._playing = False

        self.audio = QAudioOutput()
        self.audio.setVolume(0.7)
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        self.media.positionChanged.connect(self.positionChanged.emit)
        self.media.durationChanged.connect(self.durationChanged.emit)
        self.media.playbackStateChanged.connect(self._on_state_changed)
        self.media.errorOccurred.connect(self._on_error)

    @property
    def playing(self) -> bool:
        return self._playing

    # ----------------------------
    # Qt handlers
    # ----------------------------

    def _on_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        self._set_playing(state == QMediaPlayer.PlaybackState.PlayingState)

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        # playback refused or broken: fall back to paused, never fatal
        logger.warning("Playback failed: %s", message)
        self.media.pause()
        self._set_playing(False)
        self.playbackFailed.emit(PlaybackFailure(message or "Playback failed."))

    def _set_playing(self, playing: bool) -> None:
        if playing == self._playing:
            return
        self._playing = playing
        self.playingChanged.emit(playing)

    # ----------------------------
    # Public API
    # ----------------------------

    def load_file(self, path: str) -> None:
        self.media.stop()
        self.media.setSource(QUrl.fromLocalFile(path))

    def play(self) -> None:
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    def toggle_play_pause(self) -> None:
        if self._playing:
            self.pause()
        else:
            self.play()

    def seek_ms(self, ms: int) -> None:
        self.media.setPosition(max(0, int(ms)))
