"""Scope entries, reconciliation and the sync service."""

from __future__ import annotations

from .model import (
    NO_IN_SCOPE_TABLE,
    Clock,
    Entry,
    EntryKey,
    ScopeRecord,
    Snapshot,
    is_sentinel,
    utcnow,
)
from .reconciliation import ReconciliationResult, reconcile
from .scope_sync import (
    ScopeFetchError,
    ScopeSyncError,
    SnapshotPersistError,
    SyncScopeResult,
    SyncStage,
    sync_scope,
)

__all__ = [
    "NO_IN_SCOPE_TABLE",
    "Clock",
    "Entry",
    "EntryKey",
    "ReconciliationResult",
    "ScopeFetchError",
    "ScopeRecord",
    "ScopeSyncError",
    "Snapshot",
    "SnapshotPersistError",
    "SyncScopeResult",
    "SyncStage",
    "is_sentinel",
    "reconcile",
    "sync_scope",
    "utcnow",
]
