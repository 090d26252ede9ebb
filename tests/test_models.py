from __future__ import annotations

from models import SCANNING_TEXT, AnswerState


def test_answer_state_lifecycle() -> None:
    state = AnswerState()
    assert state.snapshot() == (None, False)
    assert state.is_idle_and_empty() is True

    assert state.try_begin() is True
    assert state.snapshot() == (SCANNING_TEXT, True)
    assert state.try_begin() is False

    state.set_progress("Scanning...\n(Trying m1)")
    state.finish("42")
    assert state.snapshot() == ("42", False)
    assert state.is_idle_and_empty() is False


def test_progress_ignored_when_not_busy() -> None:
    state = AnswerState()
    state.finish("done")
    state.set_progress("Scanning...")
    assert state.text == "done"


def test_clear_keeps_busy_flag() -> None:
    state = AnswerState()
    state.try_begin()
    state.clear()
    assert state.snapshot() == (None, True)
    assert state.is_idle_and_empty() is False
