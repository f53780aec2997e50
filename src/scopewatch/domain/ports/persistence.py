"""Ports for persisting the scope snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from scopewatch.domain.model import Entry, Snapshot


@runtime_checkable
class SnapshotStore(Protocol):
    """Durable storage for the snapshot and the last-run additions export."""

    def load(self) -> Snapshot:
        """Return the stored snapshot, or an empty one if nothing usable is stored.

        Never raises.
        """
        ...

    def save(self, snapshot: Snapshot) -> None:
        """Persist ``snapshot`` completely or not at all; raises ``OSError``."""
        ...

    def save_additions(self, entries: Sequence[Entry], *, now: datetime) -> None:
        """Overwrite the additions export with ``entries`` (possibly empty)."""
        ...


__all__ = ["SnapshotStore"]
