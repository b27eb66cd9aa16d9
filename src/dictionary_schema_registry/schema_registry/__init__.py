"""Schema registry exports."""

from .registry_models import (
    SCHEMA_STANDARD,
    RegistryEntry,
    RegistryTransition,
    StateInvariantError,
    VersioningOutcome,
)
from .registry_store import (
    InMemoryRegistryRepository,
    JsonFileRegistryRepository,
    RegistryRepository,
    RegistryStoreError,
    entry_from_record,
    entry_to_record,
)
from .registry_versioning import Clock, SchemaRegistry

__all__ = [
    "SCHEMA_STANDARD",
    "Clock",
    "InMemoryRegistryRepository",
    "JsonFileRegistryRepository",
    "RegistryEntry",
    "RegistryRepository",
    "RegistryStoreError",
    "RegistryTransition",
    "SchemaRegistry",
    "StateInvariantError",
    "VersioningOutcome",
    "entry_from_record",
    "entry_to_record",
]
