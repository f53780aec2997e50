"""Slack incoming-webhook notifier."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from scopewatch.adapters.http_resilience import ResilientClient

from .blocks import build_blocks, chunk_messages

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from scopewatch.config.http_resilience import ResilienceConfig
    from scopewatch.config.slack import SlackConfig
    from scopewatch.domain.model import Entry
    from scopewatch.domain.ports.notification import Notifier

    from .blocks import SlackMessage

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class SlackNotificationError(RuntimeError):
    """Raised when Slack rejects a webhook message."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class SlackNotifier:
    """Post new scope entries to a Slack incoming webhook."""

    config: SlackConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, entries: Sequence[Entry]) -> None:
        if not entries:
            log.info("No new targets to notify")
            return
        messages = chunk_messages(
            build_blocks(entries, timezone=self.config.display_timezone),
            max_blocks=self.config.max_blocks_per_message,
        )
        asyncio.run(self._send_all(messages))
        log.info("Notified Slack about %d new targets in %d messages", len(entries), len(messages))

    async def _send_all(self, messages: Sequence[SlackMessage]) -> None:
        async with self.client_factory(self.config.resilience) as client:
            for index, message in enumerate(messages, start=1):
                response = await client.post(self.config.webhook_url, json=message.payload())
                if response.status_code != 200:  # noqa: PLR2004
                    raise SlackNotificationError(
                        f"Slack webhook returned status {response.status_code} for message "
                        f"{index}/{len(messages)}: {response.text}",
                        status_code=response.status_code,
                    )


if TYPE_CHECKING:
    _notifier_check: Notifier = SlackNotifier(config=SlackConfig(webhook_url=""))
