"""JSON file persistence for the scope snapshot.

The snapshot lives in a single human-readable document::

    {
      "last_updated": "2025-01-01T00:00:00Z",
      "entries": [
        {"program_identifier": "...", "target": "...", "category": "...",
         "first_seen": "..."}
      ]
    }

Writes go to a temporary file in the same directory which is then renamed onto
the canonical path, so a crash never leaves a half-written snapshot behind.
Documents written by the earlier Go notifier (``targets``/``program_name``) are
still accepted on load.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime
from logging import Logger, getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from scopewatch.domain.model import Entry, Snapshot, ensure_utc, utcnow

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from scopewatch.config.storage import StorageConfig
    from scopewatch.domain.model import Clock
    from scopewatch.domain.ports.persistence import SnapshotStore

log = getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


class _DocumentModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EntryDocument(_DocumentModel):
    program_identifier: str = Field(
        validation_alias=AliasChoices("program_identifier", "program_name")
    )
    target: str
    category: str = ""
    first_seen: datetime

    @classmethod
    def from_entry(cls, entry: Entry) -> EntryDocument:
        return cls(
            program_identifier=entry.program_identifier,
            target=entry.target,
            category=entry.category,
            first_seen=entry.first_seen,
        )

    def to_entry(self) -> Entry:
        return Entry(
            program_identifier=self.program_identifier,
            target=self.target,
            category=self.category,
            first_seen=ensure_utc(self.first_seen),
        )


class SnapshotDocument(_DocumentModel):
    last_updated: datetime
    entries: list[EntryDocument] = Field(
        default_factory=list["EntryDocument"],
        validation_alias=AliasChoices("entries", "targets"),
    )

    @field_validator("entries", mode="before")
    @classmethod
    def _null_entries(cls, value: object) -> object:
        # The Go notifier marshals an empty target list as ``null``.
        return [] if value is None else value

    @classmethod
    def from_entries(cls, entries: Iterable[Entry], *, last_updated: datetime) -> SnapshotDocument:
        ordered = sorted(entries, key=lambda entry: entry.key)
        return cls(
            last_updated=ensure_utc(last_updated),
            entries=[EntryDocument.from_entry(entry) for entry in ordered],
        )

    def to_snapshot(self) -> Snapshot:
        return Snapshot.from_entries(
            (item.to_entry() for item in self.entries),
            last_updated=self.last_updated,
        )


def dump_document(document: SnapshotDocument) -> str:
    return document.model_dump_json(indent=2) + "\n"


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` in one rename, creating parents as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        tmp_path.chmod(0o644)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class JsonSnapshotStore:
    """Snapshot store backed by ``targets.json`` and ``new-targets.json``."""

    def __init__(
        self,
        path: Path,
        *,
        additions_path: Path | None = None,
        clock: Clock = utcnow,
        logger: Logger | None = None,
    ) -> None:
        self.path = path
        self.additions_path = additions_path or path.with_name("new-targets.json")
        self._clock = clock
        self._log = logger or log

    @classmethod
    def from_config(cls, config: StorageConfig, *, logger: Logger | None = None) -> JsonSnapshotStore:
        return cls(config.snapshot_path(), additions_path=config.additions_path(), logger=logger)

    def load(self) -> Snapshot:
        self._log.debug("Loading snapshot from %s", self.path)
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            self._log.info("No snapshot at %s, starting with empty history", self.path)
            return Snapshot.empty(self._clock())
        except OSError as exc:
            self._log.error("Cannot read snapshot %s, starting fresh: %s", self.path, exc)
            return Snapshot.empty(self._clock())

        if not data.strip():
            self._log.info("Snapshot %s is empty, starting with empty history", self.path)
            return Snapshot.empty(self._clock())

        try:
            snapshot = SnapshotDocument.model_validate_json(data).to_snapshot()
        except ValidationError as exc:
            self._log.warning(
                "Failed to parse snapshot %s, starting fresh: %s",
                self.path,
                exc.errors(include_url=False)[:3],
            )
            self._preserve_corrupt()
            return Snapshot.empty(self._clock())

        self._log.info("Loaded %d entries from %s", len(snapshot.entries), self.path)
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        document = SnapshotDocument.from_entries(snapshot.entries, last_updated=snapshot.last_updated)
        write_atomic(self.path, dump_document(document))
        self._log.info("Saved %d entries to %s", len(document.entries), self.path)

    def save_additions(self, entries: Sequence[Entry], *, now: datetime) -> None:
        document = SnapshotDocument.from_entries(entries, last_updated=now)
        write_atomic(self.additions_path, dump_document(document))
        if entries:
            self._log.info("Wrote %d new entries to %s", len(entries), self.additions_path)
        else:
            self._log.info("Cleared %s, no new entries this run", self.additions_path)

    def _preserve_corrupt(self) -> None:
        backup = self.path.with_name(self.path.name + CORRUPT_SUFFIX)
        try:
            backup.write_bytes(self.path.read_bytes())
        except OSError as exc:
            self._log.warning("Could not preserve corrupt snapshot as %s: %s", backup, exc)
        else:
            self._log.warning("Preserved unreadable snapshot as %s", backup)


if TYPE_CHECKING:
    _store_check: SnapshotStore = JsonSnapshotStore(Path("targets.json"))
