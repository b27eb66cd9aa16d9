"""Import execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from dictionary_schema_registry.schema_registry import RegistryTransition


class EntryImportStatus(str, Enum):
    """Per-entry import status."""

    SUCCESS = "SUCCESS"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"
    VALIDATED = "VALIDATED"


@dataclass(frozen=True)
class ImportRequest:
    """Input contract for importing one dictionary workbook."""

    workbook_path: Path | str
    description: str | None = None
    imported_by: str | None = None
    validate_only: bool = False
    overwrite_existing: bool = False


@dataclass(frozen=True)
class EntryImportResult:  # pylint: disable=too-many-instance-attributes
    """Outcome for one (model, version, mechanism) entry."""

    model: str
    version: str
    mechanism: str
    field_count: int
    status: EntryImportStatus
    generation: int = 0
    registry_id: int | None = None
    transition: RegistryTransition | None = None
    warnings: tuple[str, ...] = ()
    error_message: str | None = None

    @property
    def label(self) -> str:
        return f"{self.model}-{self.version}-{self.mechanism}"


@dataclass(frozen=True)
class ImportOutcome:
    """Output contract for one completed import."""

    processed_at: datetime
    results: tuple[EntryImportResult, ...]

    @property
    def total_entries(self) -> int:
        return len(self.results)

    @property
    def successful_entries(self) -> int:
        return self._count(EntryImportStatus.SUCCESS, EntryImportStatus.VALIDATED)

    @property
    def failed_entries(self) -> int:
        return self._count(EntryImportStatus.FAILED)

    @property
    def skipped_entries(self) -> int:
        return self._count(EntryImportStatus.SKIPPED)

    @property
    def success(self) -> bool:
        return self.failed_entries == 0

    def _count(self, *statuses: EntryImportStatus) -> int:
        return sum(1 for result in self.results if result.status in statuses)
