from __future__ import annotations

import json
from pathlib import Path

from config import DEFAULT_MODELS, JsonConfigStore


def test_config_read_write(tmp_path: Path, monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.delenv("DASHSCOPE_API_KEYS", raising=False)
    monkeypatch.delenv("DASHSCOPE_API_KEY", raising=False)
    path = tmp_path / "config.json"
    store = JsonConfigStore(path=path)

    assert store.get_api_keys() == []
    assert store.get_models() == DEFAULT_MODELS
    assert store.get_trigger_key() == "Key.insert"

    store.set_api_keys(["abc", " def ", ""])
    reloaded = JsonConfigStore(path=path)
    assert reloaded.get_api_keys() == ["abc", "def"]
    assert reloaded.get_models() == DEFAULT_MODELS


def test_models_read_from_file(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"models": ["m1", "m2"]}), encoding="utf-8")

    assert JsonConfigStore(path=path).get_models() == ["m1", "m2"]


def test_config_invalid_json_fallback(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{invalid", encoding="utf-8")

    store = JsonConfigStore(path=path)
    assert store.get_models() == DEFAULT_MODELS
    assert store.get_clear_key() == "Key.delete"
    assert store.get_quit_key() == "Key.f8"
    assert store.get_quit_chord() == "<ctrl>+<alt>+q"
    assert store.get_copy_modifier() == "ctrl"


def test_api_keys_fall_back_to_environment(tmp_path: Path, monkeypatch) -> None:  # noqa: ANN001
    monkeypatch.setenv("DASHSCOPE_API_KEYS", "k1, k2,,")
    store = JsonConfigStore(path=tmp_path / "config.json")
    assert store.get_api_keys() == ["k1", "k2"]


def test_capture_path_defaults_to_config_dir(tmp_path: Path) -> None:
    store = JsonConfigStore(path=tmp_path / "config.json")
    assert store.get_capture_path() == tmp_path / "debug_last_capture.png"
