"""Shared error codes, user-facing messages and exception types."""

from __future__ import annotations

from models import FailureKind

CAPTURE_FAILED = "CAPTURE_FAILED"
INFERENCE_FAILED = "INFERENCE_FAILED"
CLIPBOARD_FAILED = "CLIPBOARD_FAILED"
WINDOWING_FAILED = "WINDOWING_FAILED"
CONFIG_INVALID = "CONFIG_INVALID"

ERROR_MESSAGES = {
    CAPTURE_FAILED: "Screen capture failed.",
    INFERENCE_FAILED: "All models failed",
    CLIPBOARD_FAILED: "Clipboard is not available.",
    WINDOWING_FAILED: "Overlay window could not be updated.",
    CONFIG_INVALID: "No API keys configured.",
}

QUOTA_EXHAUSTED_MESSAGE = "All API keys quota exceeded"


class AssistantError(Exception):
    code = ""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or ERROR_MESSAGES.get(self.code, ""))

    @property
    def message(self) -> str:
        return str(self)


class CaptureError(AssistantError):
    code = CAPTURE_FAILED


class InferenceError(AssistantError):
    code = INFERENCE_FAILED

    def __init__(self, message: str = "", kind: FailureKind = FailureKind.OTHER) -> None:
        super().__init__(message)
        self.kind = kind


class ClipboardError(AssistantError):
    code = CLIPBOARD_FAILED


class WindowingError(AssistantError):
    code = WINDOWING_FAILED


class ConfigError(AssistantError):
    code = CONFIG_INVALID
