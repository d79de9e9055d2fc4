import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QTabWidget, QPushButton, QFileDialog, QStyle
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence, QPixmap

from core.errors import IncompleteSync
from core.metadata import fallback_meta
from ui.lyrics_editor import LyricsEditor
from ui.player_bar import PlayerBar
from ui.sync_view import SyncView
from ui.widgets.toast import ToastManager
from ui.workers.identify_worker import IdentifyWorker

logger = logging.getLogger(__name__)

AUDIO_FILTER = "Audio files (*.mp3 *.m4a *.flac *.ogg *.opus *.wav);;All files (*)"
COVER_SIZE = 50


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("LyricSync")
        self.resize(900, 640)
        self.app_state = app_state
        self.session = app_state.session
        self._identify_worker = None

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.toasts = ToastManager(self)
        self.app_state.notification.connect(self._on_notify)

        # --- Header: cover, title/artist, open + finish ---
        header = QHBoxLayout()

        self.lbl_cover = QLabel()
        self.lbl_cover.setFixedSize(COVER_SIZE, COVER_SIZE)
        self.lbl_cover.setObjectName("Cover")
        header.addWidget(self.lbl_cover)

        titles = QVBoxLayout()
        self.lbl_title = QLabel("No file selected")
        self.lbl_title.setObjectName("TrackTitle")
        self.lbl_artist = QLabel("Upload an audio file to begin")
        self.lbl_artist.setObjectName("TrackArtist")
        titles.addWidget(self.lbl_title)
        titles.addWidget(self.lbl_artist)
        header.addLayout(titles, 1)

        self.btn_open = QPushButton("Open audio…")
        self.btn_open.clicked.connect(self.open_audio)
        self.btn_finish = QPushButton("Finish")
        self.btn_finish.setObjectName("BtnFinish")
        self.btn_finish.setToolTip("Export synced lyrics as .lrc")
        self.btn_finish.clicked.connect(self.finish)
        header.addWidget(self.btn_open)
        header.addWidget(self.btn_finish)
        self.layout.addLayout(header)

        # --- Tabs ---
        self.tabs = QTabWidget()
        self.lyrics_tab = LyricsEditor(self.session)
        self.sync_tab = SyncView(self.session)
        self.tabs.addTab(self.lyrics_tab, "Lyrics")
        self.tabs.addTab(self.sync_tab, "Sync")
        self.tabs.setCurrentWidget(self.sync_tab)
        self.layout.addWidget(self.tabs, 1)

        # --- PlayerBar ---
        self.player_bar = PlayerBar(self.session, self)
        self.layout.addWidget(self.player_bar)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Ctrl+Space"), self, activated=self._toggle_play)
        QShortcut(QKeySequence("Ctrl+Return"), self, activated=self.session.sync_next)
        QShortcut(QKeySequence("Ctrl+Backspace"), self, activated=self.session.unsync_last)
        QShortcut(QKeySequence("Ctrl+O"), self, activated=self.open_audio)
        QShortcut(QKeySequence("Ctrl+S"), self, activated=self.finish)

        self.session.trackChanged.connect(self._on_track_changed)
        self.show_queued_notifications()

        self.setStyleSheet(self.styleSheet() + """
            QLabel#TrackTitle { font-weight: 600; font-size: 15px; }
            QLabel#TrackArtist { color: #9ca3af; font-size: 13px; }
            QPushButton#BtnFinish { padding: 6px 18px; font-weight: 600; }
            """)

    # ------------------ audio ------------------
    def open_audio(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open audio", "", AUDIO_FILTER)
        if not path:
            return
        self.load_audio(path)

    def load_audio(self, path: str):
        self.app_state.audio_path = path
        fallback = fallback_meta(path)
        self.session.set_track(fallback)

        if self.app_state.player:
            self.app_state.player.load_file(path)

        self._identify_worker = IdentifyWorker(path, self.app_state.config, parent=self)
        self._identify_worker.progress.connect(lambda s: self.statusBar().showMessage(s))
        self._identify_worker.identified.connect(self._on_identified)
        self._identify_worker.start()

    def _on_identified(self, meta, path: str):
        if path != self.app_state.audio_path:
            # a newer file was opened meanwhile
            return
        self.session.set_track(meta)
        self.statusBar().showMessage(f"{meta.artist} - {meta.title}", 4000)

    def _on_track_changed(self, meta):
        if meta is None:
            self.lbl_title.setText("No file selected")
            self.lbl_artist.setText("Upload an audio file to begin")
            self.lbl_cover.clear()
            return

        self.lbl_title.setText(meta.title or "Unknown")
        self.lbl_artist.setText(meta.artist)

        pm = QPixmap()
        if meta.cover_data and pm.loadFromData(meta.cover_data):
            self.lbl_cover.setPixmap(
                pm.scaled(COVER_SIZE, COVER_SIZE, Qt.KeepAspectRatioByExpanding, Qt.SmoothTransformation)
            )
        else:
            self.lbl_cover.setPixmap(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaVolume).pixmap(COVER_SIZE))

    def _toggle_play(self):
        if self.app_state.player:
            self.app_state.player.toggle_play_pause()

    # ------------------ export ------------------
    def finish(self):
        try:
            self.session.export()
        except IncompleteSync as e:
            self.app_state.notify(str(e), "error")
            return

        start_dir = os.path.dirname(self.app_state.audio_path) if self.app_state.audio_path else ""
        suggested = os.path.join(start_dir, self.session.suggested_filename())
        path, _ = QFileDialog.getSaveFileName(self, "Save LRC", suggested, "LRC files (*.lrc)")
        if not path:
            return

        try:
            self.session.save(path)
        except OSError as e:
            logger.error("Saving %s failed: %s", path, e)
            self.app_state.notify(f"Failed to save lyrics: {e}", "error")
            return
        self.app_state.notify(f"Saved {os.path.basename(path)}", "success")

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        if kind == "warn":
            kind = "warning"

        msg = getattr(n, "message", "") or ""
        if not msg:
            return

        self.toasts.show_toast(msg, notify_type=kind, timeout_ms=3000)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()
