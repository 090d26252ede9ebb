"""Global hotkey handling based on pynput.

``HotkeyRouter`` turns raw key events into app actions (hold, copy, clear,
quit) and knows nothing about the OS hook.  ``GlobalHotkeyAdapter`` feeds it
from a pynput listener, registers the quit chord and, on Windows, swallows
the trigger key so the system never sees it.
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, Dict, FrozenSet, Optional, Set

from logger import log
from models import KeyAction, KeyEvent

try:
    from pynput import keyboard
except Exception:  # pragma: no cover
    keyboard = None  # type: ignore

MODIFIER_NAMES = ("ctrl", "alt", "shift", "cmd")

WM_KEYDOWN = 0x0100
WM_SYSKEYDOWN = 0x0104

VIRTUAL_KEY_CODES = {
    "Key.insert": 0x2D,
    "Key.delete": 0x2E,
    "Key.home": 0x24,
    "Key.end": 0x23,
    "Key.pause": 0x13,
    "Key.scroll_lock": 0x91,
    "Key.f8": 0x77,
    "Key.f9": 0x78,
    "Key.f10": 0x79,
}

ActionCallback = Callable[[KeyAction], None]


def key_name(key: object) -> str:
    """pynput key -> config name, e.g. ``Key.insert`` or ``'a'``."""
    return str(key)


def modifier_name(name: str) -> Optional[str]:
    """``Key.ctrl_l`` -> ``ctrl``; None for non-modifier keys."""
    if not name.startswith("Key."):
        return None
    base = name[4:].split("_")[0]
    return base if base in MODIFIER_NAMES else None


class HotkeyRouter:
    def __init__(
        self,
        on_action: ActionCallback,
        trigger_key: str = "Key.insert",
        clear_key: str = "Key.delete",
        quit_key: str = "Key.f8",
        copy_modifier: str = "ctrl",
    ) -> None:
        self._on_action = on_action
        self.trigger_key = trigger_key
        self.clear_key = clear_key
        self.quit_key = quit_key
        self.copy_modifier = copy_modifier
        self._held = False
        self._lock = threading.Lock()

    @property
    def held(self) -> bool:
        return self._held

    def handle(self, event: KeyEvent) -> None:
        action = self._route(event)
        if action is not None:
            self._on_action(action)

    def _route(self, event: KeyEvent) -> Optional[KeyAction]:
        if event.key == self.trigger_key:
            if not event.pressed:
                with self._lock:
                    self._held = False
                return KeyAction.TRIGGER_RELEASE
            if self.copy_modifier in event.modifiers:
                return KeyAction.COPY
            with self._lock:
                # OS auto-repeat sends more key-downs while the key stays held
                if self._held:
                    return None
                self._held = True
            return KeyAction.TRIGGER_PRESS

        if not event.pressed:
            return None
        if event.key == self.clear_key:
            return KeyAction.CLEAR
        if event.key == self.quit_key:
            return KeyAction.QUIT
        return None


class GlobalHotkeyAdapter:
    def __init__(self, trigger_key: str = "Key.insert", quit_chord: str = "<ctrl>+<alt>+q") -> None:
        self._trigger_key = trigger_key
        self._quit_chord = quit_chord
        self._listener: Optional[object] = None
        self._chords: Optional[object] = None
        self._modifiers: Set[str] = set()
        self._lock = threading.Lock()
        self._on_event: Optional[Callable[[KeyEvent], None]] = None

    @property
    def modifiers(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._modifiers)

    def start(self, on_event: Callable[[KeyEvent], None], on_quit_chord: Callable[[], None]) -> None:
        if keyboard is None:
            raise RuntimeError("pynput is not installed")
        self._on_event = on_event

        def _on_press(key: object) -> None:
            self.feed(key_name(key), pressed=True)

        def _on_release(key: object) -> None:
            self.feed(key_name(key), pressed=False)

        listener_kwargs: Dict[str, object] = {"on_press": _on_press, "on_release": _on_release}
        trigger_vk = VIRTUAL_KEY_CODES.get(self._trigger_key)
        if sys.platform == "win32" and trigger_vk is not None:
            listener_kwargs["win32_event_filter"] = self._make_win32_filter(trigger_vk)
        else:
            log.warning("Native suppression of %s is not available on %s", self._trigger_key, sys.platform)

        self._listener = keyboard.Listener(**listener_kwargs)
        self._listener.start()

        self._chords = keyboard.GlobalHotKeys({self._quit_chord: on_quit_chord})
        self._chords.start()
        log.info("Hotkey listeners started (trigger %s, quit chord %s)", self._trigger_key, self._quit_chord)

    def feed(self, name: str, pressed: bool) -> None:
        """Track modifiers and forward one key event."""
        modifier = modifier_name(name)
        with self._lock:
            if modifier is not None:
                if pressed:
                    self._modifiers.add(modifier)
                else:
                    self._modifiers.discard(modifier)
            modifiers = frozenset(self._modifiers)
        if self._on_event is not None:
            self._on_event(KeyEvent(key=name, pressed=pressed, modifiers=modifiers))

    def _make_win32_filter(self, trigger_vk: int) -> Callable[[int, object], object]:
        def _filter(msg: int, data: object) -> object:
            if getattr(data, "vkCode", None) != trigger_vk:
                return True
            # Suppressed events never reach on_press/on_release, so forward here.
            self.feed(self._trigger_key, pressed=msg in (WM_KEYDOWN, WM_SYSKEYDOWN))
            listener = self._listener
            if listener is not None:
                listener.suppress_event()
            return False

        return _filter

    def stop(self) -> None:
        for attr in ("_listener", "_chords"):
            listener = getattr(self, attr)
            if listener is not None:
                listener.stop()
                setattr(self, attr, None)
        with self._lock:
            self._modifiers.clear()
        log.info("Hotkey listeners stopped")
