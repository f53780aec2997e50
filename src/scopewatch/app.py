"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from scopewatch.adapters.hackerone import HackerOneFetcher
from scopewatch.adapters.json_store import JsonSnapshotStore
from scopewatch.adapters.slack import SlackNotificationError, SlackNotifier
from scopewatch.domain.model import utcnow
from scopewatch.domain.scope_sync import SyncScopeResult, sync_scope

if TYPE_CHECKING:
    from collections.abc import Sequence

    from scopewatch.config.settings import Settings
    from scopewatch.domain.model import Clock, Entry
    from scopewatch.domain.ports import Notifier, ScopeFetcher, SnapshotStore


log = getLogger(__name__)


def run_scope_watch(
    settings: Settings,
    *,
    fetcher: ScopeFetcher | None = None,
    store: SnapshotStore | None = None,
    notifier: Notifier | None = None,
    clock: Clock = utcnow,
) -> SyncScopeResult:
    """Run one scope sync with the configured adapters and notify on additions."""

    effective_fetcher = fetcher or HackerOneFetcher(config=settings.hackerone)
    effective_store = store or JsonSnapshotStore.from_config(settings.storage)
    log.info(
        "Starting scope sync: data_dir=%s, concurrency=%s, categories=%s",
        settings.storage.resolve_data_dir(),
        settings.fetch.concurrency,
        settings.fetch.categories,
    )

    result = sync_scope(
        fetcher=effective_fetcher,
        store=effective_store,
        options=settings.fetch,
        clock=clock,
    )

    if result.has_changes:
        _log_entries("new", result.added)
        _log_entries("removed", result.removed)
    else:
        log.info("Scope unchanged since the last run")
    log.info(
        f"Finished scope sync: fetched={result.fetched}, total={result.total}, "
        f"added={len(result.added)}, removed={len(result.removed)}, stage={result.stage}"
    )

    if result.added and settings.notifications_enabled:
        _notify(settings, result.added, notifier)

    return result


def _log_entries(label: str, entries: Sequence[Entry]) -> None:
    if not entries:
        log.info("No %s targets found", label)
        return
    log.info("Found %d %s targets:", len(entries), label)
    for entry in entries:
        log.info("  - [%s] %s (%s)", entry.program_identifier, entry.target, entry.category)


def _notify(settings: Settings, entries: Sequence[Entry], notifier: Notifier | None) -> None:
    if notifier is None:
        if settings.slack is None:
            log.warning("Slack webhook URL not configured, skipping notification")
            return
        notifier = SlackNotifier(config=settings.slack)

    try:
        notifier(entries)
    except (SlackNotificationError, httpx.HTTPError, httpx.InvalidURL) as exc:
        # The snapshot is already durable; a failed notification does not fail the run.
        log.error("Failed to send Slack notification: %s", exc)
