"""Port for announcing newly discovered scope entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scopewatch.domain.model import Entry


@runtime_checkable
class Notifier(Protocol):
    """Deliver a message about ``entries``; a no-op for an empty sequence."""

    def __call__(self, entries: Sequence[Entry]) -> None: ...


__all__ = ["Notifier"]
