# ui/lyrics_editor.py
from __future__ import annotations

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton


class LyricsEditor(QWidget):
    """Lyrics tab: free text, one line per lyric. Edits reach the session debounced."""

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(8)

        header = QHBoxLayout()
        self.hint = QLabel("Paste or type the lyrics, one line per lyric line.")
        self.hint.setObjectName("EditorHint")
        header.addWidget(self.hint, 1)

        self.btn_clear = QPushButton("Clear")
        self.btn_clear.setToolTip("Remove all lyrics")
        self.btn_clear.clicked.connect(self.session.clear_lyrics)
        header.addWidget(self.btn_clear)
        root.addLayout(header)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText("Lyrics…")
        self.editor.textChanged.connect(self._on_text_changed)
        root.addWidget(self.editor, 1)

        self.session.lyricsTextChanged.connect(self._set_text)

    def _on_text_changed(self):
        self.session.set_lyrics_text(self.editor.toPlainText())

    def _set_text(self, text: str):
        if text == self.editor.toPlainText():
            return
        self.editor.blockSignals(True)
        self.editor.setPlainText(text)
        self.editor.blockSignals(False)
