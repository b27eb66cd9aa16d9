"""Grouping of dictionary rows into registry entries."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from .column_layout import SheetLayout
from .dictionary_reader import DictionaryRow, read_dictionary_rows
from .field_models import Entry, EntryKey, EntryValidationError, FieldRecord

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupFailure:
    """A (model, version, mechanism) group that could not become an entry."""

    model: str
    version: str
    mechanism: str
    field_count: int
    message: str

    @property
    def label(self) -> str:
        return f"{self.model}-{self.version}-{self.mechanism}"


@dataclass(frozen=True)
class GroupingResult:
    """Entries built from the dictionary plus the groups that failed validation."""

    entries: tuple[Entry, ...]
    failures: tuple[GroupFailure, ...]


def group_entries(rows: Iterable[DictionaryRow]) -> GroupingResult:
    """Bucket rows by key in first-seen order and validate each bucket separately."""
    buckets: dict[tuple[str, str, str], list[FieldRecord]] = {}
    for row in rows:
        # Case differences in model or mechanism must not split one registry key.
        bucket_key = (row.model.strip().upper(), row.version.strip(), row.mechanism.strip().upper())
        buckets.setdefault(bucket_key, []).append(row.field)
    LOGGER.info("Found %d unique model/version/mechanism combinations", len(buckets))

    entries: list[Entry] = []
    failures: list[GroupFailure] = []
    for (model, version, mechanism), fields in buckets.items():
        try:
            entry = Entry(key=EntryKey.parse(model, version, mechanism), fields=tuple(fields))
            entry.validate()
        except EntryValidationError as exc:
            LOGGER.error("Error creating entry for %s-%s-%s: %s", model, version, mechanism, exc)
            failures.append(
                GroupFailure(
                    model=model,
                    version=version,
                    mechanism=mechanism,
                    field_count=len(fields),
                    message=str(exc),
                )
            )
            continue
        LOGGER.info("Created entry for %s with %d fields", entry.key.label, len(fields))
        entries.append(entry)
    return GroupingResult(entries=tuple(entries), failures=tuple(failures))


def parse_dictionary(
    source: Path | str | BinaryIO,
    layout: SheetLayout | None = None,
    *,
    abort: threading.Event | None = None,
) -> GroupingResult:
    """Read the dictionary workbook and group its rows into entries."""
    return group_entries(read_dictionary_rows(source, layout, abort=abort).rows)
