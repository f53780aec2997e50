"""Block Kit message rendering for new scope entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from scopewatch.domain.model import Entry

HEADER_TEXT = "🎯 New Bug Bounty Targets Found"
RFC1123_FORMAT = "%a, %d %b %Y %H:%M:%S %Z"


class TextObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["plain_text", "mrkdwn"]
    text: str


class Block(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["header", "section", "divider"]
    text: TextObject | None = None
    section_fields: list[TextObject] | None = Field(default=None, alias="fields")


class SlackMessage(BaseModel):
    blocks: list[Block]

    def payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


def format_found(value: datetime, timezone: str) -> str:
    return value.astimezone(ZoneInfo(timezone)).strftime(RFC1123_FORMAT)


def entry_block(entry: Entry, *, timezone: str) -> Block:
    return Block(
        type="section",
        section_fields=[
            TextObject(type="mrkdwn", text=f"*Program Name*\n{entry.program_identifier}"),
            TextObject(type="mrkdwn", text=f"*Target*\n`{entry.target}`"),
            TextObject(type="mrkdwn", text=f"*Found*\n{format_found(entry.first_seen, timezone)}"),
            TextObject(type="mrkdwn", text=f"*Category*\n`{entry.category}`"),
        ],
    )


def build_blocks(entries: Sequence[Entry], *, timezone: str) -> list[Block]:
    """Header, then one section per entry with dividers in between."""

    blocks = [Block(type="header", text=TextObject(type="plain_text", text=HEADER_TEXT))]
    for index, entry in enumerate(entries):
        blocks.append(entry_block(entry, timezone=timezone))
        if index < len(entries) - 1:
            blocks.append(Block(type="divider"))
    return blocks


def chunk_messages(blocks: Sequence[Block], *, max_blocks: int) -> list[SlackMessage]:
    if max_blocks < 1:
        raise ValueError("max_blocks must be positive")
    return [
        SlackMessage(blocks=list(blocks[start : start + max_blocks]))
        for start in range(0, len(blocks), max_blocks)
    ]
