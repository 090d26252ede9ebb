"""Application entrypoint."""

from __future__ import annotations

import sys

from capture import MssScreenCapturer
from clipboard import PyperclipClipboard
from config import JsonConfigStore
from credentials import CredentialPool, ModelPriorityList
from cycle_controller import CycleController
from errors import ConfigError
from hotkey import GlobalHotkeyAdapter, HotkeyRouter
from inference import DashscopeVisionBackend, InferenceClient
from lifecycle import Lifecycle
from logger import configure_logging, log
from models import AnswerState, KeyAction
from overlay import OverlayController

try:
    from PySide6.QtCore import QObject, Signal, QSize
    from PySide6.QtGui import QAction, QIcon, QPixmap, QPainter, QColor, QBrush
    from PySide6.QtWidgets import QApplication, QInputDialog, QMenu, QMessageBox, QSystemTrayIcon
except Exception as exc:  # pragma: no cover
    raise SystemExit(f"PySide6 is required to run the desktop app: {exc}")


def _create_icon(color: str = "#888888", size: int = 22) -> QIcon:
    """Generate a simple circular tray icon with the given color."""
    pixmap = QPixmap(QSize(size, size))
    pixmap.fill(QColor(0, 0, 0, 0))  # transparent background
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setBrush(QBrush(QColor(color)))
    painter.setPen(QColor(color))
    painter.drawEllipse(2, 2, size - 4, size - 4)
    painter.end()
    return QIcon(pixmap)


ICON_IDLE = "#888888"   # grey
ICON_BUSY = "#FFB000"   # amber
ICON_ERROR = "#FF4444"  # red


class UIBridge(QObject):
    show_signal = Signal()
    hide_signal = Signal()
    busy_signal = Signal(bool)
    quit_signal = Signal()


class App:
    def __init__(self) -> None:
        self.app = QApplication(sys.argv)
        self.app.setQuitOnLastWindowClosed(False)
        self.config_store = JsonConfigStore()
        log_path = configure_logging(self.config_store.get_log_level(), self.config_store.get_log_path())
        log.info("Application starting. Log file: %s", log_path)

        try:
            credentials = CredentialPool(self.config_store.get_api_keys())
            models = ModelPriorityList(self.config_store.get_models())
        except ConfigError as exc:
            log.critical("Fatal error configuring inference: %s", exc)
            raise SystemExit(f"Fatal error configuring inference: {exc}") from exc

        self.ui = UIBridge()
        self.state = AnswerState()
        self.clipboard = PyperclipClipboard()
        self.inference = InferenceClient(DashscopeVisionBackend(), credentials, models)
        self.overlay = OverlayController(self.state, self.clipboard)
        self.controller = CycleController(
            state=self.state,
            capturer=MssScreenCapturer(debug_path=self.config_store.get_capture_path()),
            inferencer=self.inference,
            clipboard=self.clipboard,
            on_show_requested=self.ui.show_signal.emit,
            on_hide_requested=self.ui.hide_signal.emit,
            on_busy_change=self.ui.busy_signal.emit,
        )
        self.router = HotkeyRouter(
            on_action=self._on_key_action,
            trigger_key=self.config_store.get_trigger_key(),
            clear_key=self.config_store.get_clear_key(),
            quit_key=self.config_store.get_quit_key(),
            copy_modifier=self.config_store.get_copy_modifier(),
        )
        self.hotkey = GlobalHotkeyAdapter(
            trigger_key=self.router.trigger_key,
            quit_chord=self.config_store.get_quit_chord(),
        )
        self.lifecycle = Lifecycle(
            steps=[
                ("hotkey", self.hotkey.stop),
                ("overlay", self.overlay.close),
                ("cycle worker", self.controller.shutdown),
                ("tray", self._hide_tray),
            ],
            on_exit=self.app.quit,
        )

        self.ui.show_signal.connect(self.overlay.request_show)
        self.ui.hide_signal.connect(self.overlay.request_hide)
        self.ui.busy_signal.connect(self._on_busy_ui)
        self.ui.quit_signal.connect(self.quit)
        self.app.aboutToQuit.connect(self.lifecycle.shutdown)

        self.tray = QSystemTrayIcon()
        self.tray.setIcon(_create_icon(ICON_IDLE))
        self.tray.setToolTip("Screen Answer — Ready")
        self._setup_menu()
        self.tray.show()

    def _setup_menu(self) -> None:
        menu = QMenu()

        api_action = QAction("Set API Keys", menu)
        api_action.triggered.connect(self._set_api_keys)
        menu.addAction(api_action)

        clear_action = QAction("Clear Answer", menu)
        clear_action.triggered.connect(self.controller.clear_answer)
        menu.addAction(clear_action)

        menu.addSeparator()
        quit_action = QAction("Quit", menu)
        quit_action.triggered.connect(self.quit)
        menu.addAction(quit_action)

        self.tray.setContextMenu(menu)

    def _set_api_keys(self) -> None:
        value, ok = QInputDialog.getText(None, "API Keys", "DashScope API keys, comma separated")
        if not ok or not value.strip():
            return
        self.config_store.set_api_keys(value.split(","))
        QMessageBox.information(None, "Saved", "API keys saved. Restart app to apply.")

    # ------------------------------------------------------------------
    # Hotkey handlers (pynput thread → signals for UI thread)
    # ------------------------------------------------------------------

    def _on_key_action(self, action: KeyAction) -> None:
        if action == KeyAction.TRIGGER_PRESS:
            self.controller.on_trigger_press()
        elif action == KeyAction.TRIGGER_RELEASE:
            self.controller.on_trigger_release()
        elif action == KeyAction.COPY:
            self.controller.copy_answer()
        elif action == KeyAction.CLEAR:
            self.controller.clear_answer()
        elif action == KeyAction.QUIT:
            self.ui.quit_signal.emit()

    # ------------------------------------------------------------------
    # UI thread handlers (safe for Qt)
    # ------------------------------------------------------------------

    def _on_busy_ui(self, busy: bool) -> None:
        if busy:
            self.tray.setIcon(_create_icon(ICON_BUSY))
            self.tray.setToolTip("Screen Answer — Scanning...")
            return
        text = self.state.text or ""
        self.tray.setIcon(_create_icon(ICON_ERROR if text.startswith("Error:") else ICON_IDLE))
        self.tray.setToolTip("Screen Answer — Ready")

    def _hide_tray(self) -> None:
        self.tray.hide()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> int:
        try:
            self.hotkey.start(on_event=self.router.handle, on_quit_chord=self.ui.quit_signal.emit)
        except Exception as exc:
            log.error("Hotkey disabled: %s", exc)
            self.tray.showMessage("Screen Answer", f"Hotkey disabled: {exc}")

        router = self.router
        log.info("Hold %s: screenshot + show answer", router.trigger_key)
        log.info("Press %s: clear current answer", router.clear_key)
        log.info("Press %s+%s: copy answer", router.copy_modifier, router.trigger_key)
        log.info("Press %s or %s: quit", router.quit_key, self.config_store.get_quit_chord())
        self.app.exec()
        return 0

    def quit(self) -> None:
        self.lifecycle.shutdown()


def main() -> int:
    app = App()
    return app.run()


if __name__ == "__main__":
    raise SystemExit(main())
