"""Protocol interfaces used by CycleController and OverlayController."""

from __future__ import annotations

from typing import Callable, Protocol

from models import ClipboardResult


class ScreenCapturer(Protocol):
    def capture_screen(self) -> bytes: ...


class VisionBackend(Protocol):
    def generate(self, api_key: str, model: str, prompt: str, image_bytes: bytes) -> str: ...


class Inferencer(Protocol):
    def infer(
        self,
        image_bytes: bytes,
        prompt: str,
        on_attempt: Callable[[str], None] | None = None,
    ) -> str: ...


class ClipboardWriter(Protocol):
    def write_text(self, text: str) -> ClipboardResult: ...


class OverlayView(Protocol):
    def set_text(self, text: str) -> None: ...

    def show_on_top(self) -> None: ...

    def hide(self) -> None: ...

    def close(self) -> bool: ...

    def is_alive(self) -> bool: ...

