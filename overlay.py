"""Answer overlay: a tiny click-through window in the bottom-right corner."""

from __future__ import annotations

from typing import Callable, Optional

from clipboard import copy_best_effort
from errors import WindowingError
from interfaces import ClipboardWriter, OverlayView
from logger import log
from models import AnswerState

try:
    from PySide6.QtCore import Qt
    from PySide6.QtWidgets import QApplication, QLabel, QWidget, QVBoxLayout
except Exception:  # pragma: no cover
    Qt = None  # type: ignore
    QApplication = None  # type: ignore
    QLabel = object  # type: ignore
    QWidget = object  # type: ignore
    QVBoxLayout = object  # type: ignore

OVERLAY_WIDTH = 80
OVERLAY_HEIGHT = 50
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 60
SCANNING_PREFIX = "Scanning"

LABEL_STYLE = (
    "background: white; color: #404040; font-family: Arial, sans-serif;"
    "font-size: 10px; padding: 5px;"
)


class OverlayWindow(QWidget):
    def __init__(self) -> None:
        if Qt is None:
            raise RuntimeError("PySide6 is not installed")
        super().__init__()
        self.setWindowFlags(
            Qt.WindowStaysOnTopHint
            | Qt.FramelessWindowHint
            | Qt.Tool
            | Qt.WindowTransparentForInput
            | Qt.WindowDoesNotAcceptFocus
        )
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)
        self.setFixedSize(OVERLAY_WIDTH, OVERLAY_HEIGHT)

        self._label = QLabel("")
        self._label.setAlignment(Qt.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setStyleSheet(LABEL_STYLE)

        layout = QVBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._label)
        self.setLayout(layout)

        self._alive = True
        self._anchor_bottom_right()

    def _anchor_bottom_right(self) -> None:
        """Position the window above the taskbar at the bottom-right corner."""
        if QApplication is None:
            return
        screen = QApplication.primaryScreen()
        if screen is None:
            return
        geom = screen.availableGeometry()
        x = geom.x() + geom.width() - OVERLAY_WIDTH - MARGIN_RIGHT
        y = geom.y() + geom.height() - OVERLAY_HEIGHT - MARGIN_BOTTOM
        self.move(x, y)

    def set_text(self, text: str) -> None:
        self._label.setText(text)

    def show_on_top(self) -> None:
        self.show()
        self.raise_()

    def is_alive(self) -> bool:
        return self._alive

    def closeEvent(self, event) -> None:  # noqa: ANN001, N802
        self._alive = False
        super().closeEvent(event)


class OverlayController:
    def __init__(
        self,
        state: AnswerState,
        clipboard: ClipboardWriter,
        window_factory: Callable[[], OverlayView] = OverlayWindow,
    ) -> None:
        self._state = state
        self._clipboard = clipboard
        self._window_factory = window_factory
        self._window: Optional[OverlayView] = None

    @property
    def window(self) -> Optional[OverlayView]:
        return self._window

    def request_show(self) -> None:
        text, busy = self._state.snapshot()
        if busy or not text or text.startswith(SCANNING_PREFIX):
            return
        copy_best_effort(self._clipboard, text)
        try:
            window = self._live_window()
            if window is None:
                window = self._window_factory()
                self._window = window
            window.set_text(text)
            window.show_on_top()
        except Exception as exc:
            log.error("%s", WindowingError(f"Overlay show failed: {exc}"))

    def request_hide(self) -> None:
        window = self._live_window()
        if window is None:
            return
        try:
            window.hide()
        except Exception as exc:
            log.error("%s", WindowingError(f"Overlay hide failed: {exc}"))

    def close(self) -> None:
        window = self._live_window()
        self._window = None
        if window is None:
            return
        try:
            window.close()
        except Exception as exc:
            log.error("%s", WindowingError(f"Overlay close failed: {exc}"))

    def _live_window(self) -> Optional[OverlayView]:
        window = self._window
        if window is not None and window.is_alive():
            return window
        return None
