"""Core data models for the app."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

SCANNING_TEXT = "Scanning..."


class FailureKind(str, Enum):
    QUOTA_EXCEEDED = "quota_exceeded"
    NOT_FOUND = "not_found"
    OTHER = "other"


class KeyAction(str, Enum):
    TRIGGER_PRESS = "trigger_press"
    TRIGGER_RELEASE = "trigger_release"
    COPY = "copy"
    CLEAR = "clear"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    pressed: bool
    modifiers: FrozenSet[str] = field(default_factory=frozenset)


@dataclass
class ClipboardResult:
    success: bool
    reason: str


class AnswerState:
    """Single-slot answer text plus the busy flag of the capture cycle.

    The hook thread, the Qt thread and the cycle worker all read or write
    this object, so every access goes through one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._text: Optional[str] = None
        self._busy = False

    @property
    def text(self) -> Optional[str]:
        with self._lock:
            return self._text

    def snapshot(self) -> Tuple[Optional[str], bool]:
        with self._lock:
            return self._text, self._busy

    def is_idle_and_empty(self) -> bool:
        with self._lock:
            return not self._text and not self._busy

    def try_begin(self, placeholder: str = SCANNING_TEXT) -> bool:
        """Claim the busy flag. Returns False if a cycle is already running."""
        with self._lock:
            if self._busy:
                return False
            self._busy = True
            self._text = placeholder
            return True

    def set_progress(self, text: str) -> None:
        with self._lock:
            if self._busy:
                self._text = text

    def finish(self, text: str) -> None:
        with self._lock:
            self._text = text
            self._busy = False

    def clear(self) -> None:
        with self._lock:
            self._text = None
