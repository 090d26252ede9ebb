from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from capture import MssScreenCapturer
from errors import CaptureError


def _fake_mss(png: bytes = b"\x89PNG data") -> MagicMock:
    fake = MagicMock()
    sct = fake.mss.return_value.__enter__.return_value
    sct.monitors = [{"left": 0}, {"left": 0, "top": 0, "width": 10, "height": 10}]
    fake.tools.to_png.return_value = png
    return fake


def test_capture_returns_png_and_persists(tmp_path: Path) -> None:
    debug_path = tmp_path / "debug" / "last.png"
    fake = _fake_mss()

    with patch("capture.mss", fake):
        data = MssScreenCapturer(debug_path=debug_path).capture_screen()

    assert data == b"\x89PNG data"
    assert debug_path.read_bytes() == data
    sct = fake.mss.return_value.__enter__.return_value
    sct.grab.assert_called_once_with(sct.monitors[1])


def test_capture_error_is_wrapped() -> None:
    fake = _fake_mss()
    fake.mss.side_effect = OSError("XGetImage failed")

    with patch("capture.mss", fake), pytest.raises(CaptureError) as excinfo:
        MssScreenCapturer().capture_screen()

    assert "XGetImage failed" in str(excinfo.value)


def test_persist_failure_is_not_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    fake = _fake_mss()

    with patch("capture.mss", fake):
        data = MssScreenCapturer(debug_path=blocker / "last.png").capture_screen()

    assert data == b"\x89PNG data"


@patch("capture.mss", None)
def test_capture_without_mss_raises() -> None:
    with pytest.raises(CaptureError):
        MssScreenCapturer().capture_screen()
