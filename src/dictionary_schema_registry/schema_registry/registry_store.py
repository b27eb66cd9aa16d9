"""Registry repositories."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from dictionary_schema_registry.dictionary_ingestion.field_models import EntryKey

from .registry_models import (
    DEFAULT_CREATED_BY,
    SCHEMA_STANDARD,
    RegistryEntry,
    StateInvariantError,
)

LOGGER = logging.getLogger(__name__)

REGISTRY_FORMAT_VERSION = 1


class RegistryStoreError(Exception):
    """Raised when the registry file cannot be read or written."""


class RegistryRepository(Protocol):
    """Persistence boundary for registry entries."""

    def find_active(self, key: EntryKey) -> RegistryEntry | None: ...

    def history(self, key: EntryKey) -> list[RegistryEntry]: ...

    def find_all_active(self) -> list[RegistryEntry]: ...

    def save(self, entry: RegistryEntry) -> RegistryEntry: ...

    def save_all(self, entries: list[RegistryEntry]) -> list[RegistryEntry]: ...


class InMemoryRegistryRepository:
    """Registry repository held in process memory.

    ``save_all`` is all-or-nothing: entries are staged on a copy and only become
    visible once ``_persist`` returns.
    """

    def __init__(self, entries: list[RegistryEntry] | None = None) -> None:
        self._lock = threading.RLock()
        self._entries: dict[int, RegistryEntry] = {}
        self._next_id = 1
        self._entries, self._next_id, _ = self._stage(entries or [])

    def find_active(self, key: EntryKey) -> RegistryEntry | None:
        with self._lock:
            return next(
                (entry for entry in self._entries.values() if entry.key == key and entry.active),
                None,
            )

    def history(self, key: EntryKey) -> list[RegistryEntry]:
        with self._lock:
            matching = [entry for entry in self._entries.values() if entry.key == key]
        return sorted(matching, key=lambda entry: entry.generation, reverse=True)

    def find_all_active(self) -> list[RegistryEntry]:
        with self._lock:
            return [entry for entry in self._entries.values() if entry.active]

    def save(self, entry: RegistryEntry) -> RegistryEntry:
        return self.save_all([entry])[0]

    def save_all(self, entries: list[RegistryEntry]) -> list[RegistryEntry]:
        with self._lock:
            staged, next_id, stored = self._stage(entries)
            self._persist(staged)
            self._entries = staged
            self._next_id = next_id
        return stored

    def entries(self) -> list[RegistryEntry]:
        with self._lock:
            return list(self._entries.values())

    def _stage(
        self, entries: list[RegistryEntry]
    ) -> tuple[dict[int, RegistryEntry], int, list[RegistryEntry]]:
        staged = dict(self._entries)
        next_id = self._next_id
        stored = []
        for entry in entries:
            registry_id = entry.registry_id if entry.registry_id is not None else next_id
            staged[registry_id] = entry.with_registry_id(registry_id)
            stored.append(staged[registry_id])
            next_id = max(next_id, registry_id + 1)
        return staged, next_id, stored

    def _persist(self, entries: dict[int, RegistryEntry]) -> None:
        """Hook for durable repositories; raising here leaves memory untouched."""


class JsonFileRegistryRepository(InMemoryRegistryRepository):
    """Registry repository persisted as one JSON file, rewritten on every save."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        super().__init__(_load_entries(self._path))

    @property
    def path(self) -> Path:
        return self._path

    def _persist(self, entries: dict[int, RegistryEntry]) -> None:
        payload = {
            "format_version": REGISTRY_FORMAT_VERSION,
            "entries": [
                entry_to_record(entry)
                for entry in sorted(entries.values(), key=lambda e: e.registry_id or 0)
            ],
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        handle, temp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as stream:
                json.dump(payload, stream, indent=2, ensure_ascii=False)
                stream.write("\n")
            os.replace(temp_name, self._path)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise RegistryStoreError(f"Unable to write registry file {self._path}: {exc}") from exc
        LOGGER.debug("Wrote %d registry entries to %s", len(entries), self._path)


def entry_to_record(entry: RegistryEntry) -> dict[str, Any]:
    """Return the JSON-compatible record for one registry entry."""
    return {
        "registry_id": entry.registry_id,
        "rating_model": entry.key.model,
        "rating_model_version": entry.key.version,
        "rating_model_mechanism": entry.key.mechanism.value,
        "schema_version": entry.generation,
        "json_schema": entry.schema,
        "json_schema_standard": entry.schema_standard,
        "active": entry.active,
        "effective_from": entry.effective_from.isoformat(),
        "effective_to": entry.effective_to.isoformat() if entry.effective_to else None,
        "description": entry.description,
        "change_notes": entry.change_notes,
        "created_by": entry.created_by,
    }


def entry_from_record(record: dict[str, Any]) -> RegistryEntry:
    """Rebuild a registry entry from its JSON record."""
    effective_to = record.get("effective_to")
    return RegistryEntry(
        key=EntryKey.parse(
            record["rating_model"],
            record["rating_model_version"],
            record["rating_model_mechanism"],
        ),
        generation=int(record["schema_version"]),
        schema=record["json_schema"],
        effective_from=datetime.fromisoformat(record["effective_from"]),
        schema_standard=record.get("json_schema_standard") or SCHEMA_STANDARD,
        active=bool(record["active"]),
        effective_to=datetime.fromisoformat(effective_to) if effective_to else None,
        description=record.get("description"),
        change_notes=record.get("change_notes"),
        created_by=record.get("created_by") or DEFAULT_CREATED_BY,
        registry_id=record.get("registry_id"),
    )


def _load_entries(path: Path) -> list[RegistryEntry]:
    if not path.exists():
        return []
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise RegistryStoreError(f"Unable to read registry file {path}: {exc}") from exc
    if not isinstance(payload, dict) or not isinstance(payload.get("entries"), list):
        raise RegistryStoreError(f"Registry file {path} must contain an 'entries' list.")
    try:
        return [entry_from_record(record) for record in payload["entries"]]
    except (KeyError, TypeError, ValueError, StateInvariantError) as exc:
        raise RegistryStoreError(f"Invalid registry record in {path}: {exc}") from exc
