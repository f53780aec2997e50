from __future__ import annotations

import pytest

from scopewatch.config.env import get_env, get_env_flag, require_values
from scopewatch.config.errors import MissingConfigurationError


def test_get_env_strips_and_treats_blank_as_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")
    monkeypatch.setenv("BLANK_VAR", "   ")

    assert get_env("EXAMPLE_VAR") == "value"
    assert get_env("BLANK_VAR") is None
    assert get_env("MISSING_VAR_FOR_TEST") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("TRUE", True), ("false", False), ("1", False), ("yes", False)],
)
def test_get_env_flag_only_accepts_true(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
) -> None:
    monkeypatch.setenv("FLAG_VAR", raw)

    assert get_env_flag("FLAG_VAR") is expected


def test_get_env_flag_unset_is_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLAG_VAR", raising=False)

    assert get_env_flag("FLAG_VAR") is None


def test_require_values_lists_every_missing_name() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        require_values({"B_NAME": None, "A_NAME": " ", "C_NAME": "ok"})

    assert "A_NAME, B_NAME" in str(exc.value)
    assert "C_NAME" not in str(exc.value)


def test_require_values_returns_present_values() -> None:
    assert require_values({"A": "1", "B": "2"}) == {"A": "1", "B": "2"}
