"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from dictionary_schema_registry.dictionary_ingestion import DEFAULT_DOCUMENT_PREFIX
from dictionary_schema_registry.schema_synthesis import DEFAULT_ID_BASE_URL, SynthesisSettings

from .runtime_settings import (
    DEFAULT_REGISTRY_FILENAME,
    Configuration,
    ImportSettings,
    LoggingSettings,
    RegistrySettings,
    WorkbookSettings,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_KNOWN_SECTIONS = {"workbook", "schema", "registry", "import", "logging"}

LOGGER = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None = None) -> Configuration:
    """Load and validate the configuration file.

    Without a path every section takes its default and the registry path is
    resolved against the working directory. JSON files load too since JSON is
    valid YAML.
    """
    if config_path is None:
        return Configuration(
            registry=RegistrySettings(path=Path(DEFAULT_REGISTRY_FILENAME).resolve())
        )

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in _KNOWN_SECTIONS)
    if unknown:
        LOGGER.warning("Ignoring unknown configuration sections: %s", ", ".join(unknown))

    return Configuration(
        path=path,
        workbook=_parse_workbook_section(parsed.get("workbook")),
        schema=_parse_schema_section(parsed.get("schema")),
        registry=_parse_registry_section(parsed.get("registry"), path.resolve().parent),
        imports=_parse_import_section(parsed.get("import")),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_workbook_section(value: Any) -> WorkbookSettings:
    section = _optional_mapping(value, "workbook")
    sheet_name = _require_non_empty_string(
        section.get("sheet_name", "Raw Data"), "workbook.sheet_name"
    )
    header_row = _require_positive_int(section.get("header_row", 3), "workbook.header_row")
    data_start_row = _require_positive_int(
        section.get("data_start_row", header_row + 1), "workbook.data_start_row"
    )
    if data_start_row <= header_row:
        raise ConfigurationError("workbook.data_start_row must be after workbook.header_row.")
    return WorkbookSettings(
        sheet_name=sheet_name, header_row=header_row, data_start_row=data_start_row
    )


def _parse_schema_section(value: Any) -> SynthesisSettings:
    section = _optional_mapping(value, "schema")
    prefix = _require_non_empty_string(
        section.get("document_prefix", DEFAULT_DOCUMENT_PREFIX), "schema.document_prefix"
    ).rstrip(".")
    if not prefix or any(not segment for segment in prefix.split(".")):
        raise ConfigurationError("schema.document_prefix must be a dotted path.")
    id_base_url = _require_non_empty_string(
        section.get("id_base_url", DEFAULT_ID_BASE_URL), "schema.id_base_url"
    )
    return SynthesisSettings(document_prefix=prefix, id_base_url=id_base_url)


def _parse_registry_section(value: Any, base_path: Path) -> RegistrySettings:
    section = _optional_mapping(value, "registry")
    raw_path = _require_non_empty_string(
        section.get("path", DEFAULT_REGISTRY_FILENAME), "registry.path"
    )
    return RegistrySettings(path=_resolve_path(base_path, raw_path))


def _parse_import_section(value: Any) -> ImportSettings:
    section = _optional_mapping(value, "import")
    return ImportSettings(
        max_workers=_require_positive_int(section.get("max_workers", 1), "import.max_workers")
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "INFO"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"logging.level must be one of {', '.join(_LOG_LEVELS)}; got '{level}'."
        )
    return LoggingSettings(level=level)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
