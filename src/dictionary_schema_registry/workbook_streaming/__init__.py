"""Workbook streaming exports."""

from .cell_references import column_index, column_letters
from .sheet_row_reader import (
    CellText,
    RowCallback,
    RowProcessingError,
    SheetNotFoundError,
    StreamAbortedError,
    WorkbookParseError,
    render_cell_value,
    stream_sheet_rows,
)

__all__ = [
    "CellText",
    "RowCallback",
    "RowProcessingError",
    "SheetNotFoundError",
    "StreamAbortedError",
    "WorkbookParseError",
    "column_index",
    "column_letters",
    "render_cell_value",
    "stream_sheet_rows",
]
