from __future__ import annotations

from unittest.mock import MagicMock

import clipboard
from clipboard import PyperclipClipboard, copy_best_effort
from errors import ClipboardError


def test_write_returns_failure_when_dependency_missing(monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setattr(clipboard, "pyperclip", None)

    result = PyperclipClipboard().write_text("hello")

    assert result.success is False


def test_write_copies_text(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    monkeypatch.setattr(clipboard, "pyperclip", fake)

    result = PyperclipClipboard().write_text("hello")

    assert result.success is True
    fake.copy.assert_called_once_with("hello")


def test_write_reports_backend_error(monkeypatch) -> None:  # noqa: ANN001
    fake = MagicMock()
    fake.copy.side_effect = RuntimeError("no xclip")
    monkeypatch.setattr(clipboard, "pyperclip", fake)

    result = PyperclipClipboard().write_text("hello")

    assert result.success is False
    assert "no xclip" in result.reason


def test_copy_best_effort_swallows_clipboard_error() -> None:
    writer = MagicMock()
    writer.write_text.side_effect = ClipboardError("locked")

    assert copy_best_effort(writer, "x") is False


def test_copy_best_effort_swallows_any_writer_error() -> None:
    writer = MagicMock()
    writer.write_text.side_effect = RuntimeError("display closed")

    assert copy_best_effort(writer, "x") is False
