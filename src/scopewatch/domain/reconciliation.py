"""Diff a freshly fetched scope listing against the persisted snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .model import Entry, EntryKey, ScopeRecord, is_sentinel, sort_entries

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime
    from logging import Logger

    from .model import Snapshot

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    """Classification of every identity key seen in either input.

    ``carry_forward`` becomes the next snapshot: entries still present (with
    their original ``first_seen``) plus the newly ``added`` ones.
    """

    carry_forward: tuple[Entry, ...]
    added: tuple[Entry, ...]
    removed: tuple[Entry, ...]
    filtered_sentinels: int = 0

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def reconcile(
    fetched: Iterable[ScopeRecord],
    snapshot: Snapshot,
    *,
    now: datetime,
    logger: Logger | None = None,
) -> ReconciliationResult:
    """Classify fetched records against ``snapshot`` as carried, added or removed."""

    logger = logger or log

    fresh: dict[EntryKey, ScopeRecord] = {}
    sentinels = 0
    for record in fetched:
        if is_sentinel(record):
            sentinels += 1
            continue
        fresh[record.key] = record
    if sentinels:
        logger.debug("Ignored %d placeholder records without in-scope assets", sentinels)

    stored = snapshot.by_key()
    carried: list[Entry] = []
    added: list[Entry] = []

    for key, record in fresh.items():
        existing = stored.get(key)
        if existing is None:
            entry = Entry.discovered(record, at=now)
            added.append(entry)
            carried.append(entry)
            continue
        if existing.category != record.category:
            logger.debug(
                "Category of %s changed: %r -> %r", key, existing.category, record.category
            )
        carried.append(existing.with_category(record.category))

    removed = [entry for key, entry in stored.items() if key not in fresh]

    return ReconciliationResult(
        carry_forward=sort_entries(carried),
        added=sort_entries(added),
        removed=sort_entries(removed),
        filtered_sentinels=sentinels,
    )


__all__ = ["ReconciliationResult", "reconcile"]
