"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping


def get_env(name: str) -> str | None:
    """Return the stripped value of ``name``, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def get_env_flag(name: str) -> bool | None:
    """Return ``True`` only for the literal ``"true"``; ``None`` when unset."""

    value = get_env(name)
    if value is None:
        return None
    return value.lower() == "true"


def require_values(values: Mapping[str, str | None]) -> dict[str, str]:
    """Return the given values or raise if any are missing/blank.

    Keys are the names reported to the user, typically the environment variable
    that can supply the value.
    """

    missing: list[str] = []
    present: dict[str, str] = {}
    for name, value in values.items():
        if value is None or not value.strip():
            missing.append(name)
            continue
        present[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return present
