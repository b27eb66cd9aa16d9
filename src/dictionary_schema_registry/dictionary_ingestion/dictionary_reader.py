"""Data dictionary row parsing service."""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from dictionary_schema_registry.workbook_streaming import (
    CellText,
    WorkbookParseError,
    stream_sheet_rows,
)

from .column_layout import LAYOUT_WIDTH, REQUIRED_HEADER_COLUMNS, DictionaryColumn, SheetLayout
from .field_models import FieldRecord, FieldValidationError

LOGGER = logging.getLogger(__name__)

_TRUE_FLAGS = frozenset({"y", "yes", "true", "1"})
_PROGRESS_INTERVAL = 100
_LENGTH_TEXT = re.compile(r"[0-9]+")


class DictionaryParseError(WorkbookParseError):
    """Raised when the dictionary sheet is malformed; fatal to the whole import."""


class HeaderValidationError(DictionaryParseError):
    """Raised when the header row does not carry the required labels."""


class RowError(DictionaryParseError):
    """Raised when a data row with a field path cannot be turned into a field record."""

    def __init__(self, row_number: int, detail: str) -> None:
        super().__init__(f"Error parsing row {row_number}: {detail}")
        self.row_number = row_number


@dataclass(frozen=True)
class DictionaryRow:
    """Field record together with its raw grouping key and source row number."""

    row_number: int
    model: str
    version: str
    mechanism: str
    field: FieldRecord


@dataclass(frozen=True)
class DictionaryReadResult:
    """Result of reading the dictionary sheet."""

    rows: tuple[DictionaryRow, ...]
    skipped_row_numbers: tuple[int, ...]

    @property
    def fields(self) -> tuple[FieldRecord, ...]:
        return tuple(row.field for row in self.rows)


def read_dictionary_rows(
    source: Path | str | BinaryIO,
    layout: SheetLayout | None = None,
    *,
    abort: threading.Event | None = None,
) -> DictionaryReadResult:
    """Stream the dictionary sheet and return one record per populated data row.

    Raises:
      HeaderValidationError: If the header row is missing or mislabeled.
      RowError: If a row with a field path is incomplete or invalid.
      WorkbookParseError: For workbook-level failures.
    """
    resolved_layout = layout or SheetLayout()
    LOGGER.info("Starting data dictionary parsing of sheet %s", resolved_layout.sheet_name)
    collector = _DictionaryRowCollector(resolved_layout)
    stream_sheet_rows(
        source,
        resolved_layout.sheet_name,
        collector.process_row,
        min_columns=LAYOUT_WIDTH,
        abort=abort,
    )
    result = collector.result()
    LOGGER.info("Successfully parsed %d fields from the dictionary", len(result.rows))
    return result


def validate_header_row(cells: Sequence[CellText]) -> None:
    """Check the required labels at their fixed columns (case-insensitive)."""
    for column in REQUIRED_HEADER_COLUMNS:
        found = _cell(cells, column)
        if found is None or found.strip().lower() != column.label.lower():
            raise HeaderValidationError(
                f"{column.label} header is required. Expected '{column.label}' at column "
                f"{column.letter} but found '{found}'"
            )


def parse_flag(value: CellText) -> bool | None:
    """Interpret a Y/N style cell; blank is ``None``, unknown text is ``False``."""
    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUE_FLAGS


class _DictionaryRowCollector:
    """Row callback state for one streaming pass."""

    def __init__(self, layout: SheetLayout) -> None:
        self._layout = layout
        self._header_validated = False
        self._rows: list[DictionaryRow] = []
        self._skipped: list[int] = []

    def process_row(self, row_index: int, cells: list[CellText]) -> None:
        if row_index == self._layout.header_row_index:
            validate_header_row(cells)
            self._header_validated = True
            LOGGER.debug("Headers validated at row %d", row_index + 1)
            return
        if row_index < self._layout.data_start_row_index:
            return
        row = build_dictionary_row(row_index + 1, cells)
        if row is None:
            self._skipped.append(row_index + 1)
            return
        self._rows.append(row)
        if len(self._rows) % _PROGRESS_INTERVAL == 0:
            LOGGER.info("Parsed %d fields so far...", len(self._rows))

    def result(self) -> DictionaryReadResult:
        if not self._header_validated:
            raise HeaderValidationError(
                "Headers not found. Expected header row at row "
                f"{self._layout.header_row_index + 1}"
            )
        return DictionaryReadResult(
            rows=tuple(self._rows), skipped_row_numbers=tuple(self._skipped)
        )


def build_dictionary_row(row_number: int, cells: Sequence[CellText]) -> DictionaryRow | None:
    """Build the record for one data row, or return ``None`` when the row is skipped."""
    if all(_text(value) is None for value in cells):
        LOGGER.debug("Skipping empty row %d", row_number)
        return None
    field_path = _text(_cell(cells, DictionaryColumn.FIELD_PATH))
    if field_path is None:
        LOGGER.debug("Skipping row %d - no field path", row_number)
        return None

    model = _text(_cell(cells, DictionaryColumn.MODEL))
    version = _text(_cell(cells, DictionaryColumn.MODEL_VERSION))
    mechanism = _text(_cell(cells, DictionaryColumn.MECHANISM))
    missing = [
        column.label
        for column, value in (
            (DictionaryColumn.MODEL, model),
            (DictionaryColumn.MODEL_VERSION, version),
            (DictionaryColumn.MECHANISM, mechanism),
        )
        if value is None
    ]
    if missing:
        raise RowError(
            row_number, f"field path '{field_path}' has no value for {', '.join(missing)}"
        )
    assert model is not None and version is not None and mechanism is not None

    field = FieldRecord(
        field_path=field_path,
        data_type=_text(_cell(cells, DictionaryColumn.DATA_TYPE)),
        data_name=_text(_cell(cells, DictionaryColumn.DATA_NAME)),
        data_definition=_text(_cell(cells, DictionaryColumn.DATA_DEFINITION)),
        is_foreign_key=parse_flag(_cell(cells, DictionaryColumn.IS_FOREIGN_KEY)),
        foreign_key_table=_text(_cell(cells, DictionaryColumn.FK_TABLE_NAME)),
        foreign_key_column=_text(_cell(cells, DictionaryColumn.FK_COLUMN_NAME)),
        is_mandatory=parse_flag(_cell(cells, DictionaryColumn.IS_MANDATORY)),
        length=_parse_length(_cell(cells, DictionaryColumn.LENGTH), row_number),
        min_value=_text(_cell(cells, DictionaryColumn.MIN_VALUE)),
        max_value=_text(_cell(cells, DictionaryColumn.MAX_VALUE)),
        default_value=_text(_cell(cells, DictionaryColumn.DEFAULT_VALUES)),
        allowed_values=_text(_cell(cells, DictionaryColumn.ALLOWED_VALUES)),
        field_description=_text(_cell(cells, DictionaryColumn.FIELD_DESCRIPTION)),
    )
    try:
        field.validate()
    except FieldValidationError as exc:
        LOGGER.error("Field validation failed for row %d: %s", row_number, exc)
        raise RowError(row_number, f"Invalid field: {exc}") from exc

    LOGGER.debug("Parsed field %s from row %d", field.field_path, row_number)
    return DictionaryRow(
        row_number=row_number,
        model=model,
        version=version,
        mechanism=mechanism,
        field=field,
    )


def _cell(cells: Sequence[CellText], column: DictionaryColumn) -> CellText:
    index = column.index
    if index >= len(cells):
        return None
    return cells[index]


def _text(value: CellText) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_length(value: CellText, row_number: int) -> int | None:
    text = _text(value)
    if text is None:
        return None
    if not _LENGTH_TEXT.fullmatch(text):
        LOGGER.warning("Row %d: invalid length value '%s', ignoring", row_number, text)
        return None
    return int(text)
