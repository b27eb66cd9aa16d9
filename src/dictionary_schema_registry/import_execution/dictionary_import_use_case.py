"""Dictionary import use-case service."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, datetime

from dictionary_schema_registry.configuration import Configuration
from dictionary_schema_registry.dictionary_ingestion import (
    Entry,
    GroupFailure,
    GroupingResult,
    parse_dictionary,
)
from dictionary_schema_registry.schema_registry import (
    Clock,
    RegistryRepository,
    SchemaRegistry,
)
from dictionary_schema_registry.schema_synthesis import synthesize_schema
from dictionary_schema_registry.workbook_streaming import WorkbookParseError

from .import_contracts import (
    EntryImportResult,
    EntryImportStatus,
    ImportOutcome,
    ImportRequest,
)

LOGGER = logging.getLogger(__name__)


class DictionaryImportError(Exception):
    """Raised when the dictionary workbook cannot be imported at all."""


@dataclass(frozen=True)
class _ImportContext:
    request: ImportRequest
    registry: SchemaRegistry
    settings: Configuration


def execute_dictionary_import(
    request: ImportRequest,
    *,
    repository: RegistryRepository,
    settings: Configuration | None = None,
    clock: Clock | None = None,
    abort: threading.Event | None = None,
) -> ImportOutcome:
    """Parse the workbook, synthesize one schema per entry and register each one.

    Raises:
      DictionaryImportError: If the workbook cannot be read or a row is malformed.
    """
    resolved_settings = settings or Configuration()
    resolved_clock = clock or _utc_now
    processed_at = resolved_clock()
    LOGGER.info(
        "Starting data dictionary import. validate_only=%s, overwrite_existing=%s, imported_by=%s",
        request.validate_only,
        request.overwrite_existing,
        request.imported_by,
    )

    grouping = _parse_workbook(request, resolved_settings, abort)
    LOGGER.info("Parsed %d entries from workbook", len(grouping.entries))

    context = _ImportContext(
        request=request,
        registry=SchemaRegistry(repository, clock=resolved_clock),
        settings=resolved_settings,
    )
    entry_results = _process_entries(context, grouping.entries)
    results = tuple(_failed_group_result(failure) for failure in grouping.failures) + entry_results

    outcome = ImportOutcome(processed_at=processed_at, results=results)
    LOGGER.info(
        "Import completed. success=%s, total=%d, successful=%d, failed=%d, skipped=%d",
        outcome.success,
        outcome.total_entries,
        outcome.successful_entries,
        outcome.failed_entries,
        outcome.skipped_entries,
    )
    return outcome


def build_description(entry: Entry, request: ImportRequest) -> str:
    if request.description and request.description.strip():
        return request.description
    key = entry.key
    return (
        f"Schema for {key.model} {key.version} {key.mechanism.value} "
        "- imported from data dictionary"
    )


def build_change_notes(entry: Entry, request: ImportRequest) -> str:
    if request.description and request.description.strip():
        return f"Updated from data dictionary: {request.description}"
    return f"Schema updated from data dictionary import - {len(entry.fields)} fields processed"


def _parse_workbook(
    request: ImportRequest, settings: Configuration, abort: threading.Event | None
) -> GroupingResult:
    try:
        return parse_dictionary(
            request.workbook_path, settings.workbook.to_layout(), abort=abort
        )
    except WorkbookParseError as exc:
        LOGGER.error("Failed to parse workbook %s: %s", request.workbook_path, exc)
        raise DictionaryImportError(f"Failed to parse Excel file: {exc}") from exc


def _process_entries(
    context: _ImportContext, entries: tuple[Entry, ...]
) -> tuple[EntryImportResult, ...]:
    max_workers = context.settings.imports.max_workers
    if max_workers <= 1 or len(entries) <= 1:
        return tuple(_process_entry(context, entry) for entry in entries)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return tuple(executor.map(lambda entry: _process_entry(context, entry), entries))


def _process_entry(context: _ImportContext, entry: Entry) -> EntryImportResult:
    request = context.request
    label = entry.key.label
    LOGGER.debug("Processing entry: %s", label)
    try:
        synthesis = synthesize_schema(entry, context.settings.schema)
        if request.validate_only:
            LOGGER.info("Validate-only mode: schema generated successfully for %s", label)
            return _entry_result(
                entry, EntryImportStatus.VALIDATED, warnings=synthesis.warnings
            )

        existing = context.registry.active_schema(entry.key)
        if existing is not None and not request.overwrite_existing:
            LOGGER.info("Schema already exists for %s, skipping (overwrite=false)", label)
            return _entry_result(
                entry,
                EntryImportStatus.SKIPPED,
                generation=existing.generation,
                registry_id=existing.registry_id,
                warnings=synthesis.warnings,
            )

        # An existing entry keeps its description unless the request overrides it.
        description = build_description(entry, request) if existing is None else request.description
        outcome = context.registry.register(
            entry.key,
            synthesis.schema,
            description=description,
            change_notes=build_change_notes(entry, request),
            created_by=request.imported_by,
        )
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOGGER.error("Failed to process entry %s: %s", label, exc)
        return _entry_result(entry, EntryImportStatus.FAILED, error_message=str(exc))

    LOGGER.info(
        "Saved schema for %s, registry_id=%s, generation=%d",
        label,
        outcome.entry.registry_id,
        outcome.entry.generation,
    )
    return _entry_result(
        entry,
        EntryImportStatus.SUCCESS,
        generation=outcome.entry.generation,
        registry_id=outcome.entry.registry_id,
        transition=outcome.transition,
        warnings=synthesis.warnings,
    )


def _entry_result(entry: Entry, status: EntryImportStatus, **details) -> EntryImportResult:
    return EntryImportResult(
        model=entry.key.model,
        version=entry.key.version,
        mechanism=entry.key.mechanism.value,
        field_count=len(entry.fields),
        status=status,
        **details,
    )


def _failed_group_result(failure: GroupFailure) -> EntryImportResult:
    return EntryImportResult(
        model=failure.model,
        version=failure.version,
        mechanism=failure.mechanism,
        field_count=failure.field_count,
        status=EntryImportStatus.FAILED,
        error_message=failure.message,
    )


def _utc_now() -> datetime:
    return datetime.now(UTC)
