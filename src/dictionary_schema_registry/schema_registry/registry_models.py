"""Registry entities for versioned entry schemas."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from dictionary_schema_registry.dictionary_ingestion.field_models import EntryKey

SCHEMA_STANDARD = "2020-12"
DEFAULT_CREATED_BY = "SYSTEM"


class StateInvariantError(Exception):
    """Raised when a registry entry would leave a valid lifecycle state."""


class RegistryTransition(str, Enum):
    """What a registration did to the key's history."""

    CREATED = "CREATED"
    UNCHANGED = "UNCHANGED"
    SUPERSEDED = "SUPERSEDED"


@dataclass(frozen=True)
class RegistryEntry:  # pylint: disable=too-many-instance-attributes
    """One generation of a key's schema."""

    key: EntryKey
    generation: int
    schema: dict[str, Any]
    effective_from: datetime
    schema_standard: str = SCHEMA_STANDARD
    active: bool = True
    effective_to: datetime | None = None
    description: str | None = None
    change_notes: str | None = None
    created_by: str = DEFAULT_CREATED_BY
    registry_id: int | None = None

    def __post_init__(self) -> None:
        if self.generation < 1:
            raise StateInvariantError(
                f"Generation must be positive for {self.key.label}: {self.generation}"
            )
        if self.effective_to is not None and self.effective_to <= self.effective_from:
            raise StateInvariantError("Effective to date must be after effective from date")
        if self.active and self.effective_to is not None:
            raise StateInvariantError("Active schema cannot have an effective to date")

    @classmethod
    def create_initial(
        cls,
        key: EntryKey,
        schema: dict[str, Any],
        *,
        now: datetime,
        description: str | None = None,
        created_by: str | None = None,
    ) -> RegistryEntry:
        return cls(
            key=key,
            generation=1,
            schema=schema,
            effective_from=now,
            description=description,
            created_by=created_by or DEFAULT_CREATED_BY,
        )

    def successor(
        self,
        schema: dict[str, Any],
        *,
        now: datetime,
        change_notes: str | None = None,
        description: str | None = None,
        created_by: str | None = None,
    ) -> RegistryEntry:
        """Return generation ``g + 1`` carrying the description forward unless overridden."""
        return RegistryEntry(
            key=self.key,
            generation=self.generation + 1,
            schema=schema,
            effective_from=now,
            schema_standard=self.schema_standard,
            description=description if description is not None else self.description,
            change_notes=change_notes,
            created_by=created_by or DEFAULT_CREATED_BY,
        )

    def deprecate(self, now: datetime) -> RegistryEntry:
        """Return this entry closed at ``now``.

        Raises:
          StateInvariantError: If the entry is already deprecated or ``now`` is
            not after ``effective_from``.
        """
        if not self.active:
            raise StateInvariantError(
                f"Schema {self.key.label} generation {self.generation} is already deprecated"
            )
        return replace(self, active=False, effective_to=now)

    def with_registry_id(self, registry_id: int) -> RegistryEntry:
        return replace(self, registry_id=registry_id)


@dataclass(frozen=True)
class VersioningOutcome:
    """Result of registering one schema."""

    transition: RegistryTransition
    entry: RegistryEntry
    deprecated: RegistryEntry | None = None
