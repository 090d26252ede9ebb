from __future__ import annotations

import threading

from lifecycle import Lifecycle


def test_shutdown_runs_steps_once() -> None:
    calls: list[str] = []
    lifecycle = Lifecycle(
        steps=[("hotkey", lambda: calls.append("hotkey")), ("overlay", lambda: calls.append("overlay"))],
        on_exit=lambda: calls.append("exit"),
    )

    assert lifecycle.shutdown() is True
    assert lifecycle.shutdown() is False

    assert calls == ["hotkey", "overlay", "exit"]
    assert lifecycle.done is True


def test_failing_step_does_not_block_the_rest() -> None:
    calls: list[str] = []

    def broken() -> None:
        raise RuntimeError("hook already gone")

    lifecycle = Lifecycle(
        steps=[("hotkey", broken), ("overlay", lambda: calls.append("overlay"))],
        on_exit=lambda: calls.append("exit"),
    )
    lifecycle.shutdown()

    assert calls == ["overlay", "exit"]


def test_concurrent_quit_paths_exit_once() -> None:
    exits: list[int] = []
    lifecycle = Lifecycle(steps=[], on_exit=lambda: exits.append(1))

    threads = [threading.Thread(target=lifecycle.shutdown) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert exits == [1]
