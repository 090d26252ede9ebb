"""Screen capture adapter based on mss."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from errors import CaptureError
from logger import log

try:
    import mss
    import mss.tools
except Exception:  # pragma: no cover
    mss = None  # type: ignore


class MssScreenCapturer:
    def __init__(self, debug_path: Optional[Path] = None, monitor_index: int = 1) -> None:
        self._debug_path = debug_path
        self._monitor_index = monitor_index

    def capture_screen(self) -> bytes:
        """Grab the primary monitor and return PNG bytes."""
        if mss is None:
            raise CaptureError("mss is not installed")
        try:
            with mss.mss() as sct:
                monitors = sct.monitors
                index = self._monitor_index if len(monitors) > self._monitor_index else 0
                shot = sct.grab(monitors[index])
                png = mss.tools.to_png(shot.rgb, shot.size)
        except Exception as exc:
            raise CaptureError(f"Capture failed: {exc}") from exc
        if not png:
            raise CaptureError("Capture returned no image data")

        self._persist(png)
        return png

    def _persist(self, png: bytes) -> None:
        if self._debug_path is None:
            return
        try:
            self._debug_path.parent.mkdir(parents=True, exist_ok=True)
            self._debug_path.write_bytes(png)
            log.debug("Screenshot saved to %s", self._debug_path)
        except OSError as exc:
            log.warning("Could not save debug capture: %s", exc)
