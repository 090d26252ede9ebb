from __future__ import annotations

import pytest

from credentials import CredentialPool, ModelPriorityList
from errors import ConfigError


def test_advance_is_monotonic_and_stops_at_last_key() -> None:
    pool = CredentialPool(["A", "B", "C"])
    seen = [pool.cursor]

    while pool.advance():
        seen.append(pool.cursor)

    assert seen == [0, 1, 2]
    assert pool.current() == "C"
    assert pool.advance() is False
    assert pool.cursor == 2


def test_single_key_pool_is_immediately_exhausted() -> None:
    pool = CredentialPool(["only"])
    assert pool.advance() is False
    assert pool.current() == "only"


def test_empty_pool_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        CredentialPool([])
    with pytest.raises(ConfigError):
        CredentialPool(["", ""])


def test_model_list_keeps_order() -> None:
    models = ModelPriorityList(["m1", "m2", "m3"])
    assert models.in_priority_order() == ("m1", "m2", "m3")


def test_empty_model_list_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        ModelPriorityList([])
