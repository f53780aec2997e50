"""Scope entries, snapshots and identity keys.

An entry's identity is the ``(program_identifier, target)`` pair. ``category``
is informational and may drift between fetches without changing identity.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final, NamedTuple, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

NO_IN_SCOPE_TABLE: Final[str] = "NO_IN_SCOPE_TABLE"


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime; naive values are taken as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class EntryKey(NamedTuple):
    """Composite identity of a scope entry."""

    program_identifier: str
    target: str

    def __str__(self) -> str:
        return f"[{self.program_identifier}] {self.target}"


@dataclass(frozen=True, slots=True)
class ScopeRecord:
    """A raw ``(program, target, category)`` tuple as produced by a fetcher."""

    program: str
    target: str
    category: str = ""

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.program, self.target)


def is_sentinel(record: ScopeRecord) -> bool:
    """Whether ``record`` marks a program without any in-scope assets."""

    return record.target == NO_IN_SCOPE_TABLE


@dataclass(frozen=True, slots=True)
class Entry:
    """A known scope target and the instant it was first observed."""

    program_identifier: str
    target: str
    category: str
    first_seen: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "first_seen", ensure_utc(self.first_seen))

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.program_identifier, self.target)

    @classmethod
    def discovered(cls, record: ScopeRecord, *, at: datetime) -> Entry:
        return cls(
            program_identifier=record.program,
            target=record.target,
            category=record.category,
            first_seen=at,
        )

    def with_category(self, category: str) -> Entry:
        if category == self.category:
            return self
        return replace(self, category=category)


def sort_entries(entries: Iterable[Entry]) -> tuple[Entry, ...]:
    return tuple(sorted(entries, key=lambda entry: entry.key))


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Full set of currently known entries plus the time of the last update."""

    last_updated: datetime
    entries: tuple[Entry, ...] = ()

    @classmethod
    def empty(cls, now: datetime) -> Snapshot:
        return cls(last_updated=ensure_utc(now))

    @classmethod
    def from_entries(cls, entries: Iterable[Entry], *, last_updated: datetime) -> Snapshot:
        """Build a snapshot that is unique by key, keeping the earliest ``first_seen``."""

        by_key: dict[EntryKey, Entry] = {}
        for entry in entries:
            existing = by_key.get(entry.key)
            if existing is None or entry.first_seen < existing.first_seen:
                by_key[entry.key] = entry
        return cls(last_updated=ensure_utc(last_updated), entries=sort_entries(by_key.values()))

    def by_key(self) -> dict[EntryKey, Entry]:
        return {entry.key: entry for entry in self.entries}
