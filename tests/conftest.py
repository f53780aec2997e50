from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

_ENV_VARS = (
    "H1_USERNAME",
    "H1_TOKEN",
    "SLACK_WEBHOOK_URL",
    "SEND_NOTIFICATIONS",
    "SCOPEWATCH_DATA_DIR",
    "SCOPEWATCH_CONFIG",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_config(tmp_path: Path):
    def write(text: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return write
