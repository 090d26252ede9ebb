"""Process teardown shared by every quit path."""

from __future__ import annotations

import threading
from typing import Callable, List, Tuple

from logger import log

Step = Tuple[str, Callable[[], None]]


class Lifecycle:
    """Runs shutdown steps once, no matter how many quit paths fire."""

    def __init__(self, steps: List[Step], on_exit: Callable[[], None]) -> None:
        self._steps = steps
        self._on_exit = on_exit
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def shutdown(self) -> bool:
        with self._lock:
            if self._done:
                return False
            self._done = True

        log.info("Exiting application...")
        for name, step in self._steps:
            try:
                step()
            except Exception as exc:
                log.error("Shutdown step %s failed: %s", name, exc)
        self._on_exit()
        return True
