"""Application service that reconciles a fresh scope listing with the snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .model import Snapshot, utcnow
from .ports.fetching import FetchOptions
from .reconciliation import reconcile

if TYPE_CHECKING:
    from datetime import datetime
    from logging import Logger

    from .model import Clock, Entry
    from .ports.fetching import ScopeFetcher
    from .ports.persistence import SnapshotStore

log = getLogger(__name__)


class SyncStage(StrEnum):
    """Stages of a sync run, in execution order."""

    FETCHED = "fetched"
    LOADED = "loaded"
    RECONCILED = "reconciled"
    PERSISTED = "persisted"
    EXPORTED = "exported"


class ScopeSyncError(RuntimeError):
    """Raised when a sync run aborts; no snapshot change has been persisted."""

    def __init__(self, message: str, *, stage: SyncStage) -> None:
        super().__init__(message)
        self.stage = stage


class ScopeFetchError(ScopeSyncError):
    """Raised when the scope provider fails."""


class SnapshotPersistError(ScopeSyncError):
    """Raised when the new snapshot cannot be written."""


@dataclass(slots=True)
class SyncScopeResult:
    """Outcome of a scope sync run."""

    added: tuple[Entry, ...]
    removed: tuple[Entry, ...]
    fetched: int
    total: int
    started_at: datetime
    stage: SyncStage
    filtered_sentinels: int = 0
    export_failed: bool = False

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


def sync_scope(
    *,
    fetcher: ScopeFetcher,
    store: SnapshotStore,
    options: FetchOptions | None = None,
    clock: Clock = utcnow,
    logger: Logger | None = None,
) -> SyncScopeResult:
    """Fetch the scope listing, reconcile it and persist the new snapshot.

    The stages run in order with no retries. A fetch or save failure aborts the
    run with a :class:`ScopeSyncError` subclass; the on-disk snapshot is left as
    it was. Failing to write the additions export only logs a warning.
    """

    logger = logger or log
    effective_options = options or FetchOptions()
    started_at = clock()

    try:
        records = list(fetcher(effective_options))
    except Exception as exc:  # noqa: BLE001
        raise ScopeFetchError(
            f"Failed to fetch scope listing: {exc}", stage=SyncStage.FETCHED
        ) from exc
    logger.info("Fetched %d scope records", len(records))

    current = store.load()
    logger.info("Loaded snapshot with %d entries", len(current.entries))

    now = clock()
    result = reconcile(records, current, now=now, logger=logger)
    logger.info(
        "Reconciled scope: %d added, %d removed, %d placeholders ignored",
        len(result.added),
        len(result.removed),
        result.filtered_sentinels,
    )

    updated = Snapshot(last_updated=now, entries=result.carry_forward)
    try:
        store.save(updated)
    except OSError as exc:
        raise SnapshotPersistError(
            f"Failed to save updated snapshot: {exc}", stage=SyncStage.PERSISTED
        ) from exc

    stage = SyncStage.PERSISTED
    export_failed = False
    try:
        store.save_additions(result.added, now=now)
    except OSError as exc:
        export_failed = True
        logger.warning("Failed to write additions export: %s", exc)
    else:
        stage = SyncStage.EXPORTED

    return SyncScopeResult(
        added=result.added,
        removed=result.removed,
        fetched=len(records),
        total=len(updated.entries),
        started_at=started_at,
        stage=stage,
        filtered_sentinels=result.filtered_sentinels,
        export_failed=export_failed,
    )


__all__ = [
    "ScopeFetchError",
    "ScopeSyncError",
    "SnapshotPersistError",
    "SyncScopeResult",
    "SyncStage",
    "sync_scope",
]
