"""Slack notification configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .http_resilience import ResilienceConfig, RetryPolicy

SLACK_TIMEOUT_SECONDS = 10.0
SLACK_MAX_BLOCKS_PER_MESSAGE = 50
DEFAULT_DISPLAY_TIMEZONE = "UTC"


def default_slack_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="slack",
        timeout_seconds=SLACK_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3, status_forcelist=frozenset({429, 503})),
    )


@dataclass(frozen=True)
class SlackConfig:
    """Incoming-webhook settings for Slack notifications."""

    webhook_url: str = field(repr=False)
    display_timezone: str = DEFAULT_DISPLAY_TIMEZONE
    max_blocks_per_message: int = SLACK_MAX_BLOCKS_PER_MESSAGE
    resilience: ResilienceConfig = field(default_factory=default_slack_resilience)
