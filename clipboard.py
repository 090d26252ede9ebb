"""Clipboard writer for answer text."""

from __future__ import annotations

from errors import CLIPBOARD_FAILED, ERROR_MESSAGES
from interfaces import ClipboardWriter
from logger import log
from models import ClipboardResult

try:
    import pyperclip
except Exception:  # pragma: no cover
    pyperclip = None  # type: ignore


class PyperclipClipboard:
    def write_text(self, text: str) -> ClipboardResult:
        if pyperclip is None:
            return ClipboardResult(success=False, reason=ERROR_MESSAGES[CLIPBOARD_FAILED])
        try:
            pyperclip.copy(text)
        except Exception as exc:
            log.error("Clipboard error: %s", exc)
            return ClipboardResult(success=False, reason=f"{CLIPBOARD_FAILED}: {exc}")
        return ClipboardResult(success=True, reason="ok")


def copy_best_effort(clipboard: ClipboardWriter, text: str) -> bool:
    """Write ``text`` to the clipboard, logging instead of raising on failure."""
    try:
        result = clipboard.write_text(text)
    except Exception as exc:
        log.error("Clipboard error: %s", exc)
        return False
    if not result.success:
        log.warning("Clipboard write skipped: %s", result.reason)
        return False
    return True
