# ui/widgets/toast.py
from __future__ import annotations

from PySide6.QtCore import Qt, QTimer, QPoint
from PySide6.QtWidgets import QWidget, QFrame, QLabel, QHBoxLayout

_COLORS = {
    # kind -> (bg, border)
    "success": ("#052e1a", "#16a34a"),
    "warning": ("#2a1a05", "#f59e0b"),
    "error": ("#2a0a0a", "#ef4444"),
    "info": ("#0b1222", "#38bdf8"),
}


class ToastWidget(QFrame):
    def __init__(self, message: str, kind: str, parent: QWidget):
        super().__init__(parent)
        bg, border = _COLORS.get(kind, _COLORS["info"])
        self.setObjectName("Toast")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"""
        QFrame#Toast {{ background: {bg}; border: 1px solid {border}; border-radius: 14px; }}
        QLabel {{ color: #e5e7eb; font-size: 12px; }}
        """)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        self.label = QLabel(message)
        self.label.setWordWrap(True)
        layout.addWidget(self.label)


class ToastManager(QWidget):
    """Overlay stacking toasts in the top-right corner of ``host``."""

    def __init__(self, host: QWidget, max_visible: int = 4):
        super().__init__(host)
        self.host = host
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_NoSystemBackground, True)
        self._toasts: list[ToastWidget] = []
        self._margin = 14
        self._spacing = 10
        self._max_visible = max_visible
        self.show()

    def show_toast(self, message: str, notify_type: str = "info", timeout_ms: int = 3000):
        toast = ToastWidget(message, (notify_type or "info").lower(), parent=self)
        toast.setFixedWidth(min(420, max(260, self.host.width() // 2)))
        self._toasts.insert(0, toast)

        while len(self._toasts) > self._max_visible:
            self._remove(self._toasts[-1])

        self._layout_toasts()
        toast.show()
        QTimer.singleShot(max(500, int(timeout_ms)), lambda: self._remove(toast))

    def _remove(self, toast: ToastWidget):
        if toast not in self._toasts:
            return
        self._toasts.remove(toast)
        toast.hide()
        toast.deleteLater()
        self._layout_toasts()

    def _layout_toasts(self):
        self.setGeometry(self.host.rect())
        self.raise_()
        y = self._margin
        for t in self._toasts:
            t.adjustSize()
            t.move(QPoint(self.width() - self._margin - t.width(), y))
            y += t.height() + self._spacing
