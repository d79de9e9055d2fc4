import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.app_logging import setup_logging
from core.config import load_config
from core.state import AppState, Notify
from player.player import Player
from ui.main_window import MainWindow


def wire_player(app_state: AppState) -> None:
    """Mirror the player into the session clock and surface playback failures."""
    player = app_state.player
    clock = app_state.session.clock
    player.positionChanged.connect(clock.on_position_ms)
    player.durationChanged.connect(clock.on_duration_ms)
    player.playingChanged.connect(clock.on_playing_changed)
    player.playbackFailed.connect(lambda failure: app_state.notify(f"Playback failed: {failure}", "warning"))


def init_app_state() -> AppState:
    config = load_config()

    try:
        player = Player()
    except Exception as e:
        player = None
        queued = [Notify(message=f"Failed to initialize audio player: {e}", notify_type="error")]
    else:
        queued = []

    app_state = AppState(config, player=player)
    app_state.queued_notifications.extend(queued)
    if player:
        wire_player(app_state)
    return app_state


def main() -> int:
    setup_logging()
    qt_app = QApplication(sys.argv)

    app_state = init_app_state()
    main_window = MainWindow(app_state)
    main_window.show()

    if len(sys.argv) > 1:
        main_window.load_audio(sys.argv[1])

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
