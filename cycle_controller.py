"""Capture -> inference -> answer cycle and the trigger-key actions around it."""

from __future__ import annotations

import threading
from typing import Callable, Optional, Tuple

from clipboard import copy_best_effort
from errors import CaptureError, InferenceError
from inference import ANSWER_PROMPT
from interfaces import ClipboardWriter, Inferencer, ScreenCapturer
from logger import log
from models import SCANNING_TEXT, AnswerState

# Longest first so "**Answer:**" is not left half-stripped by "Answer:".
ANSWER_PREFIXES = ("**Answer:**", "Answer:", "answer:")

RequestCallback = Callable[[], None]
BusyCallback = Callable[[bool], None]


def clean_answer(text: str) -> str:
    cleaned = text
    for prefix in ANSWER_PREFIXES:
        if prefix in cleaned:
            cleaned = cleaned.rsplit(prefix, 1)[-1].strip()
    return cleaned


class CycleController:
    def __init__(
        self,
        state: AnswerState,
        capturer: ScreenCapturer,
        inferencer: Inferencer,
        clipboard: ClipboardWriter,
        prompt: str = ANSWER_PROMPT,
        on_show_requested: Optional[RequestCallback] = None,
        on_hide_requested: Optional[RequestCallback] = None,
        on_busy_change: Optional[BusyCallback] = None,
    ) -> None:
        self._state = state
        self._capturer = capturer
        self._inferencer = inferencer
        self._clipboard = clipboard
        self._prompt = prompt
        self._on_show_requested = on_show_requested
        self._on_hide_requested = on_hide_requested
        self._on_busy_change = on_busy_change
        self._closed = False

    @property
    def state(self) -> AnswerState:
        return self._state

    # ------------------------------------------------------------------
    # Key actions
    # ------------------------------------------------------------------

    def on_trigger_press(self) -> Optional[threading.Thread]:
        worker = None
        if self._state.is_idle_and_empty():
            log.info("Trigger pressed - starting new scan")
            worker = self.start_cycle()
        if self._on_show_requested:
            self._on_show_requested()
        return worker

    def on_trigger_release(self) -> None:
        if self._on_hide_requested:
            self._on_hide_requested()

    def clear_answer(self) -> None:
        self._state.clear()
        log.info("Answer cleared. Next trigger will capture.")

    def copy_answer(self) -> bool:
        log.info("Copying answer to clipboard")
        return copy_best_effort(self._clipboard, self._state.text or "")

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def start_cycle(self) -> Optional[threading.Thread]:
        """Run a cycle on a daemon thread. Returns None when one is already running."""
        if self._closed or not self._begin():
            return None
        # Daemon so a quit during a slow capture or model call ends the process
        worker = threading.Thread(target=self._execute, name="cycle", daemon=True)
        worker.start()
        return worker

    def run_cycle(self) -> None:
        if self._closed or not self._begin():
            return
        self._execute()

    def shutdown(self) -> None:
        self._closed = True

    def _begin(self) -> bool:
        if not self._state.try_begin(SCANNING_TEXT):
            log.debug("Cycle already in flight, ignoring")
            return False
        self._emit_busy(True)
        return True

    def _execute(self) -> None:
        try:
            answer, copy = self._produce_answer()
        except Exception as exc:
            log.exception("Cycle failed unexpectedly")
            answer, copy = f"Error: {exc}", False
        self._finish(answer)
        if copy:
            copy_best_effort(self._clipboard, answer)

    def _produce_answer(self) -> Tuple[str, bool]:
        """Returns the text to store and whether it goes to the clipboard."""
        log.info("Capturing screen...")
        try:
            image = self._capturer.capture_screen()
        except CaptureError as exc:
            log.error("Capture error: %s", exc)
            return f"Error: {exc}", False

        log.info("Analyzing...")
        try:
            raw = self._inferencer.infer(image, self._prompt, on_attempt=self._on_attempt)
        except InferenceError as exc:
            log.error("Inference failed: %s", exc)
            raw = f"Error: {exc}"

        answer = clean_answer(raw)
        log.info("Stored answer (%d chars)", len(answer))
        return answer, True

    def _on_attempt(self, model: str) -> None:
        self._state.set_progress(f"{SCANNING_TEXT}\n(Trying {model})")

    def _finish(self, text: str) -> None:
        self._state.finish(text)
        self._emit_busy(False)

    def _emit_busy(self, busy: bool) -> None:
        if self._on_busy_change:
            self._on_busy_change(busy)
