"""Schema registration with generation versioning."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from dictionary_schema_registry.dictionary_ingestion.field_models import EntryKey
from dictionary_schema_registry.schema_synthesis import SchemaError, diff_schemas

from .registry_models import RegistryEntry, RegistryTransition, VersioningOutcome
from .registry_store import RegistryRepository

LOGGER = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class SchemaRegistry:
    """Registers entry schemas, keeping at most one active generation per key."""

    def __init__(self, repository: RegistryRepository, clock: Clock | None = None) -> None:
        self._repository = repository
        self._clock = clock or _utc_now
        self._locks: dict[EntryKey, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @property
    def repository(self) -> RegistryRepository:
        return self._repository

    def register(
        self,
        key: EntryKey,
        schema: dict[str, Any],
        *,
        description: str | None = None,
        change_notes: str | None = None,
        created_by: str | None = None,
    ) -> VersioningOutcome:
        """Store ``schema`` as the active generation for ``key`` unless it is unchanged."""
        with self._lock_for(key):
            active = self._repository.find_active(key)
            if active is None:
                return self._create(key, schema, description=description, created_by=created_by)

            if _canonical(active.schema) == _canonical(schema):
                LOGGER.info(
                    "Schema for %s unchanged at generation %d", key.label, active.generation
                )
                return VersioningOutcome(transition=RegistryTransition.UNCHANGED, entry=active)

            now = self._clock()
            if now <= active.effective_from:
                now = active.effective_from + timedelta(microseconds=1)
            summary = _change_summary(active.schema, schema)
            notes = f"{change_notes} ({summary})" if change_notes else summary
            deprecated, successor = self._repository.save_all(
                [
                    active.deprecate(now),
                    active.successor(
                        schema,
                        now=now,
                        change_notes=notes,
                        description=description,
                        created_by=created_by,
                    ),
                ]
            )
            LOGGER.info(
                "Created new schema generation %d for %s", successor.generation, key.label
            )
            return VersioningOutcome(
                transition=RegistryTransition.SUPERSEDED, entry=successor, deprecated=deprecated
            )

    def active_schema(self, key: EntryKey) -> RegistryEntry | None:
        return self._repository.find_active(key)

    def history(self, key: EntryKey) -> list[RegistryEntry]:
        return self._repository.history(key)

    def _create(
        self,
        key: EntryKey,
        schema: dict[str, Any],
        *,
        description: str | None,
        created_by: str | None,
    ) -> VersioningOutcome:
        now = self._clock()
        history = self._repository.history(key)
        if not history:
            created = self._repository.save(
                RegistryEntry.create_initial(
                    key, schema, now=now, description=description, created_by=created_by
                )
            )
            LOGGER.info("Created schema for %s (generation 1)", key.label)
            return VersioningOutcome(transition=RegistryTransition.CREATED, entry=created)

        # Deprecated history without an active entry: continue the numbering.
        latest = history[0]
        closed_at = max(entry.effective_to or entry.effective_from for entry in history)
        if now <= closed_at:
            now = closed_at + timedelta(microseconds=1)
        created = self._repository.save(
            latest.successor(
                schema,
                now=now,
                change_notes=f"reactivated after generation {latest.generation}",
                description=description,
                created_by=created_by,
            )
        )
        LOGGER.warning(
            "No active schema for %s; resuming at generation %d",
            key.label,
            created.generation,
        )
        return VersioningOutcome(transition=RegistryTransition.CREATED, entry=created)

    def _lock_for(self, key: EntryKey) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _change_summary(previous: dict[str, Any], current: dict[str, Any]) -> str:
    try:
        return diff_schemas(previous, current).summary()
    except SchemaError as exc:
        LOGGER.debug("Field-level comparison unavailable: %s", exc)
        return "schema replaced"


def _canonical(schema: dict[str, Any]) -> str:
    # json.dumps keeps 1, 1.0 and true distinct where == does not.
    return json.dumps(schema, sort_keys=True, ensure_ascii=False)
