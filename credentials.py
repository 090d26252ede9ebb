"""API key pool and model priority list."""

from __future__ import annotations

import threading
from typing import Iterable, Tuple

from errors import ConfigError
from logger import log


class CredentialPool:
    """Ordered API keys with a cursor that only ever moves forward."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys: Tuple[str, ...] = tuple(k for k in keys if k)
        if not self._keys:
            raise ConfigError("No API keys configured")
        self._cursor = 0
        self._lock = threading.Lock()

    @property
    def cursor(self) -> int:
        return self._cursor

    def current(self) -> str:
        return self._keys[self._cursor]

    def advance(self) -> bool:
        """Switch to the next key. Returns False if already on the last one."""
        with self._lock:
            if self._cursor >= len(self._keys) - 1:
                return False
            self._cursor += 1
            log.info("Switched to API key #%d of %d", self._cursor + 1, len(self._keys))
            return True


class ModelPriorityList:
    def __init__(self, models: Iterable[str]) -> None:
        self._models: Tuple[str, ...] = tuple(m for m in models if m)
        if not self._models:
            raise ConfigError("No models configured")

    def in_priority_order(self) -> Tuple[str, ...]:
        return self._models
