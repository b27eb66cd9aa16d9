"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dictionary_schema_registry.dictionary_ingestion import SheetLayout
from dictionary_schema_registry.schema_synthesis import SynthesisSettings

DEFAULT_REGISTRY_FILENAME = "schema-registry.json"


@dataclass(frozen=True)
class WorkbookSettings:
    """Where the dictionary lives inside the workbook (1-based rows)."""

    sheet_name: str = "Raw Data"
    header_row: int = 3
    data_start_row: int = 4

    def to_layout(self) -> SheetLayout:
        return SheetLayout(
            sheet_name=self.sheet_name,
            header_row_index=self.header_row - 1,
            data_start_row_index=self.data_start_row - 1,
        )


@dataclass(frozen=True)
class RegistrySettings:
    """Registry file location."""

    path: Path = Path(DEFAULT_REGISTRY_FILENAME)


@dataclass(frozen=True)
class ImportSettings:
    """Entry processing parallelism."""

    max_workers: int = 1


@dataclass(frozen=True)
class LoggingSettings:
    """Log level applied by the CLI."""

    level: str = "INFO"


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None = None
    workbook: WorkbookSettings = field(default_factory=WorkbookSettings)
    schema: SynthesisSettings = field(default_factory=SynthesisSettings)
    registry: RegistrySettings = field(default_factory=RegistrySettings)
    imports: ImportSettings = field(default_factory=ImportSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
