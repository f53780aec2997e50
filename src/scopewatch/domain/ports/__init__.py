"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import DEFAULT_FETCH_CONCURRENCY, SCOPE_CATEGORIES, FetchOptions, ScopeFetcher
from .notification import Notifier
from .persistence import SnapshotStore

__all__ = [
    "DEFAULT_FETCH_CONCURRENCY",
    "FetchOptions",
    "Notifier",
    "SCOPE_CATEGORIES",
    "ScopeFetcher",
    "SnapshotStore",
]
