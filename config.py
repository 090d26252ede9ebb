"""Simple JSON-based config store."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List

DEFAULT_MODELS = ["qwen-vl-max", "qwen-vl-plus"]

DEFAULTS = {
    "trigger_key": "Key.insert",
    "clear_key": "Key.delete",
    "quit_key": "Key.f8",
    "copy_modifier": "ctrl",
    "quit_chord": "<ctrl>+<alt>+q",
    "log_level": "INFO",
}


class JsonConfigStore:
    def __init__(self, path: Path | None = None) -> None:
        self._path = path or Path.home() / ".config" / "screen_answer" / "config.json"
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._path.parent

    def get_api_keys(self) -> List[str]:
        data = self._read_all()
        keys = data.get("api_keys")
        if isinstance(keys, list):
            return [str(k).strip() for k in keys if str(k).strip()]
        env_keys = os.getenv("DASHSCOPE_API_KEYS", "") or os.getenv("DASHSCOPE_API_KEY", "")
        return [k.strip() for k in env_keys.split(",") if k.strip()]

    def set_api_keys(self, keys: List[str]) -> None:
        data = self._read_all()
        data["api_keys"] = [k.strip() for k in keys if k.strip()]
        self._write_all(data)

    def get_models(self) -> List[str]:
        data = self._read_all()
        models = data.get("models")
        if isinstance(models, list) and models:
            return [str(m) for m in models]
        return list(DEFAULT_MODELS)

    def get_trigger_key(self) -> str:
        return self._get_str("trigger_key")

    def get_clear_key(self) -> str:
        return self._get_str("clear_key")

    def get_quit_key(self) -> str:
        return self._get_str("quit_key")

    def get_copy_modifier(self) -> str:
        return self._get_str("copy_modifier")

    def get_quit_chord(self) -> str:
        return self._get_str("quit_chord")

    def get_log_level(self) -> str:
        return self._get_str("log_level")

    def get_capture_path(self) -> Path:
        value = self._read_all().get("capture_path")
        if value:
            return Path(str(value))
        return self.directory / "debug_last_capture.png"

    def get_log_path(self) -> Path:
        return self.directory / "screen_answer.log"

    def _get_str(self, name: str) -> str:
        data = self._read_all()
        return str(data.get(name, DEFAULTS[name]))

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict) -> None:
        self._path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
