"""Single-pass streaming reader for one worksheet of an xlsx package."""

from __future__ import annotations

import logging
import threading
import zipfile
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import BinaryIO

from openpyxl import load_workbook
from openpyxl.cell.read_only import EmptyCell
from openpyxl.utils.exceptions import InvalidFileException

from .cell_references import column_index

LOGGER = logging.getLogger(__name__)

CellText = str | None
RowCallback = Callable[[int, list[CellText]], None]


class WorkbookParseError(Exception):
    """Raised when a workbook cannot be read or its content is malformed."""


class SheetNotFoundError(WorkbookParseError):
    """Raised when the requested sheet is absent from the workbook."""

    def __init__(self, sheet_name: str, available: tuple[str, ...]) -> None:
        super().__init__(
            f"Sheet not found: {sheet_name!r}. Available sheets: {', '.join(available) or '-'}"
        )
        self.sheet_name = sheet_name


class RowProcessingError(WorkbookParseError):
    """Raised when the row callback fails; aborts the whole stream."""

    def __init__(self, row_index: int, cause: BaseException) -> None:
        super().__init__(f"Row processing failed at row index {row_index}: {cause}")
        self.row_index = row_index


class StreamAbortedError(WorkbookParseError):
    """Raised when the caller signals abort while rows are still being streamed."""

    def __init__(self, row_index: int) -> None:
        super().__init__(f"Streaming aborted before row index {row_index}.")
        self.row_index = row_index


class _RowAccumulator:
    """Buffer for the single row currently being streamed."""

    def __init__(self, min_columns: int) -> None:
        self._min_columns = min_columns
        self._cells: list[CellText] = []

    def start(self) -> None:
        self._cells = [None] * self._min_columns

    def place(self, reference: str, value: CellText) -> None:
        index = column_index(reference)
        if index >= len(self._cells):
            self._cells.extend([None] * (index + 1 - len(self._cells)))
        self._cells[index] = value

    def finish(self) -> list[CellText]:
        cells, self._cells = self._cells, []
        return cells


def stream_sheet_rows(
    source: Path | str | BinaryIO,
    sheet_name: str,
    on_row: RowCallback,
    *,
    min_columns: int = 0,
    abort: threading.Event | None = None,
) -> int:
    """Stream one sheet row by row and return the number of rows delivered.

    Args:
      source: Path or binary stream of the xlsx package.
      sheet_name: Exact name of the sheet to read.
      on_row: Called with the 0-based row index and the row's cell texts.
      min_columns: Rows are padded with ``None`` to at least this width.
      abort: Optional event; when set, streaming stops before the next row.

    Raises:
      SheetNotFoundError: If the sheet does not exist.
      RowProcessingError: If ``on_row`` raises a non-parse exception.
      StreamAbortedError: If ``abort`` is set during streaming.
      WorkbookParseError: If the package cannot be opened.
    """
    workbook = _open_workbook(source)
    try:
        if sheet_name not in workbook.sheetnames:
            raise SheetNotFoundError(sheet_name, tuple(workbook.sheetnames))
        sheet = workbook[sheet_name]
        # Stale <dimension> elements would otherwise truncate rows.
        sheet.reset_dimensions()
        LOGGER.info("Starting streaming read of sheet: %s", sheet_name)
        delivered = _stream_rows(sheet, on_row, min_columns=min_columns, abort=abort)
        LOGGER.info("Completed streaming read of sheet %s (%d rows)", sheet_name, delivered)
        return delivered
    finally:
        workbook.close()


def _open_workbook(source: Path | str | BinaryIO):
    try:
        return load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
        raise WorkbookParseError(f"Unable to open workbook: {exc}") from exc
    except OSError as exc:
        raise WorkbookParseError(f"Unable to read workbook: {exc}") from exc


def _stream_rows(
    sheet,
    on_row: RowCallback,
    *,
    min_columns: int,
    abort: threading.Event | None,
) -> int:
    accumulator = _RowAccumulator(min_columns)
    row_index = -1
    for row_index, row in enumerate(sheet.iter_rows()):
        if abort is not None and abort.is_set():
            raise StreamAbortedError(row_index)
        accumulator.start()
        for cell in row:
            if isinstance(cell, EmptyCell):
                continue
            accumulator.place(cell.coordinate, render_cell_value(cell.value))
        cells = accumulator.finish()
        try:
            on_row(row_index, cells)
        except WorkbookParseError:
            raise
        except Exception as exc:
            LOGGER.error("Error processing row %d: %s", row_index, exc)
            raise RowProcessingError(row_index, exc) from exc
    return row_index + 1


def render_cell_value(value: object) -> CellText:
    """Render a decoded cell value as the text a dictionary author typed."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    text = str(value)
    return text or None
