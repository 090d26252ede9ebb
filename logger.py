"""Application logger."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "screen_answer"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(message)s"

log = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = "INFO", log_path: Optional[Path] = None) -> Optional[Path]:
    """Attach console and file handlers. Returns the file path actually used."""
    log.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    log.addHandler(console)

    if log_path is None:
        return None
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as exc:
        log.warning("File logging disabled (%s): %s", log_path, exc)
        return None
    file_handler.setFormatter(formatter)
    log.addHandler(file_handler)
    return log_path
