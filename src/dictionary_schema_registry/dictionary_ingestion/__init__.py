"""Data dictionary ingestion exports."""

from .column_layout import (
    DATA_START_ROW_INDEX,
    HEADER_ROW_INDEX,
    LAYOUT_WIDTH,
    RAW_DATA_SHEET_NAME,
    REQUIRED_HEADER_COLUMNS,
    DictionaryColumn,
    SheetLayout,
)
from .dictionary_reader import (
    DictionaryParseError,
    DictionaryReadResult,
    DictionaryRow,
    HeaderValidationError,
    RowError,
    read_dictionary_rows,
)
from .entry_grouping import GroupFailure, GroupingResult, group_entries, parse_dictionary
from .field_models import (
    DEFAULT_DOCUMENT_PREFIX,
    Entry,
    EntryKey,
    EntryValidationError,
    FieldRecord,
    FieldValidationError,
    Mechanism,
)

__all__ = [
    "DATA_START_ROW_INDEX",
    "DEFAULT_DOCUMENT_PREFIX",
    "HEADER_ROW_INDEX",
    "LAYOUT_WIDTH",
    "RAW_DATA_SHEET_NAME",
    "REQUIRED_HEADER_COLUMNS",
    "DictionaryColumn",
    "DictionaryParseError",
    "DictionaryReadResult",
    "DictionaryRow",
    "Entry",
    "EntryKey",
    "EntryValidationError",
    "FieldRecord",
    "FieldValidationError",
    "GroupFailure",
    "GroupingResult",
    "HeaderValidationError",
    "Mechanism",
    "RowError",
    "SheetLayout",
    "group_entries",
    "parse_dictionary",
    "read_dictionary_rows",
]
