"""Public interface for the Slack adapter."""

from __future__ import annotations

from .blocks import Block, SlackMessage, build_blocks, chunk_messages, format_found
from .client import SlackNotificationError, SlackNotifier

__all__ = [
    "Block",
    "SlackMessage",
    "SlackNotificationError",
    "SlackNotifier",
    "build_blocks",
    "chunk_messages",
    "format_found",
]
