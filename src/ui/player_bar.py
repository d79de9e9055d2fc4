# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, QByteArray
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider

from core.lrc_export import format_timestamp


def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">'
        f'<path d="{path_d}" fill="{color}"/></svg>'
    )
    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    p = QPainter(pm)
    renderer.render(p)
    p.end()
    return QIcon(pm)


SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"
SVG_BACK = "M11 18V6l-8.5 6 8.5 6zm.5-6l8.5 6V6l-8.5 6z"
SVG_FORWARD = "M4 18l8.5-6L4 6v12zm9-12v12l8.5-6L13 6z"

SKIP_SECONDS = 3.0


class PlayerBar(QWidget):
    """Skip back/forward, play/pause, position (MM:SS.CC, the precision lines are synced at) and seek slider."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.player = session.player
        self._dragging = False

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        self._icon_play = _svg_icon(SVG_PLAY, 22)
        self._icon_pause = _svg_icon(SVG_PAUSE, 22)

        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setIcon(self._icon_play)
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play (Ctrl+Space)")

        self.btn_back = QToolButton()
        self.btn_back.setObjectName("BtnSkip")
        self.btn_back.setIcon(_svg_icon(SVG_BACK, 18))
        self.btn_back.setToolTip(f"Back {SKIP_SECONDS:g}s")
        self.btn_back.clicked.connect(lambda: self.session.skip(-SKIP_SECONDS))

        self.btn_forward = QToolButton()
        self.btn_forward.setObjectName("BtnSkip")
        self.btn_forward.setIcon(_svg_icon(SVG_FORWARD, 18))
        self.btn_forward.setToolTip(f"Forward {SKIP_SECONDS:g}s")
        self.btn_forward.clicked.connect(lambda: self.session.skip(SKIP_SECONDS))

        self.lbl_time = QLabel(format_timestamp(0))
        self.lbl_dur = QLabel(format_timestamp(0))

        # slider works in ms, the clock in seconds
        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setRange(0, 0)
        self.slider.setSingleStep(1000)
        self.slider.setPageStep(5000)

        root.addWidget(self.btn_back)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_forward)
        root.addWidget(self.lbl_time)
        root.addWidget(self.slider, 1)
        root.addWidget(self.lbl_dur)

        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.sliderMoved.connect(lambda v: self.lbl_time.setText(format_timestamp(v / 1000.0)))

        clock = self.session.clock
        clock.cursorChanged.connect(self._on_cursor)
        clock.durationChanged.connect(self._on_duration)
        clock.playingChanged.connect(self._set_playing)

        if self.player:
            self.btn_play.clicked.connect(self.player.toggle_play_pause)
        else:
            self.btn_play.setEnabled(False)

        self.setObjectName("PlayerBar")
        self.setStyleSheet("""
        QWidget#PlayerBar { background-color: #020617; border-top: 1px solid #111827; }
        QToolButton#BtnPlay {
            background: #111827; border: 1px solid #1f2937;
            border-radius: 999px; padding: 8px;
        }
        QToolButton#BtnPlay:hover { border-color: #38bdf8; background: #020617; }
        QToolButton#BtnSkip { background: transparent; border: none; padding: 4px; }
        QToolButton#BtnSkip:hover { background: #111827; border-radius: 999px; }
        QSlider::groove:horizontal { height: 4px; background: #0f172a; border-radius: 2px; }
        QSlider::handle:horizontal { width: 12px; height: 12px; margin: -4px 0; border-radius: 6px; background: #38bdf8; }
        QSlider::sub-page:horizontal { background: #38bdf8; border-radius: 2px; }
        QLabel { color: #9ca3af; font-size: 11px; }
        """)

    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_released(self):
        self._dragging = False
        self.session.seek_to(self.slider.value() / 1000.0)

    def _set_playing(self, playing: bool):
        self.btn_play.setIcon(self._icon_pause if playing else self._icon_play)
        self.btn_play.setToolTip("Pause (Ctrl+Space)" if playing else "Play (Ctrl+Space)")

    def _on_duration(self, seconds: float):
        self.slider.setRange(0, int(seconds * 1000))
        self.lbl_dur.setText(format_timestamp(seconds))

    def _on_cursor(self, seconds: float):
        if self._dragging:
            return
        self.lbl_time.setText(format_timestamp(seconds))
        self.slider.setValue(int(seconds * 1000))
