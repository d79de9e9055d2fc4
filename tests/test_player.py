from PySide6.QtMultimedia import QMediaPlayer

from core.config import AppConfig
from core.errors import PlaybackFailure
from core.state import AppState
from main import wire_player
from player.player import Player


def _wired_state():
    app_state = AppState(AppConfig(), player=Player())
    wire_player(app_state)
    return app_state


def test_error_reverts_to_paused_and_reports():
    player = Player()
    playing, failures = [], []
    player.playingChanged.connect(playing.append)
    player.playbackFailed.connect(failures.append)

    player._on_state_changed(QMediaPlayer.PlaybackState.PlayingState)
    player._on_error(QMediaPlayer.Error.ResourceError, "denied")

    assert player.playing is False
    assert playing == [True, False]
    assert len(failures) == 1
    assert isinstance(failures[0], PlaybackFailure)
    assert str(failures[0]) == "denied"


def test_no_error_is_ignored():
    player = Player()
    failures = []
    player.playbackFailed.connect(failures.append)
    player._on_error(QMediaPlayer.Error.NoError, "")
    assert failures == []


def test_failure_reaches_clock_and_notification():
    app_state = _wired_state()
    notes = []
    app_state.notification.connect(notes.append)
    clock = app_state.session.clock

    app_state.player._on_state_changed(QMediaPlayer.PlaybackState.PlayingState)
    assert clock.is_playing is True

    app_state.player._on_error(QMediaPlayer.Error.ResourceError, "denied")
    assert clock.is_playing is False
    assert [(n.message, n.notify_type) for n in notes] == [("Playback failed: denied", "warning")]


def test_position_and_duration_reach_clock():
    app_state = _wired_state()
    clock = app_state.session.clock
    app_state.player.durationChanged.emit(90000)
    app_state.player.positionChanged.emit(1500)
    assert clock.duration == 90.0
    assert clock.current_time == 1.5
