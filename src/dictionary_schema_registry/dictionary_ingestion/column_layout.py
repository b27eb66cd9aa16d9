"""Fixed sheet layout of the data dictionary workbook."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dictionary_schema_registry.workbook_streaming import column_index

RAW_DATA_SHEET_NAME = "Raw Data"
HEADER_ROW_INDEX = 2
DATA_START_ROW_INDEX = 3


class DictionaryColumn(Enum):
    """Dictionary attribute, its column letter and its header label."""

    DATA_NAME = ("B", "Data Name")
    DATA_DEFINITION = ("D", "Data Definition")
    MODEL = ("AA", "Rating/GRR Model")
    MODEL_VERSION = ("AB", "Rating/GRR Model Version")
    MECHANISM = ("AC", "Rating/GRR Mechanism")
    FIELD_PATH = ("AD", "Field Path")
    DATA_TABLE = ("AE", "Data Table")
    TABLE_DESCRIPTION = ("AF", "Table Description")
    TABLE_TYPE = ("AG", "Table Type")
    TABLE_COMMENT = ("AH", "Table Comment")
    DATA_TYPE = ("AI", "Data Type")
    IS_FOREIGN_KEY = ("AJ", "Is Foreign Key")
    FK_TABLE_NAME = ("AK", "FK Table Name")
    FK_COLUMN_NAME = ("AL", "FK Column Name")
    IS_MANDATORY = ("AM", "Is Mandatory")
    LENGTH = ("AN", "Length")
    MIN_VALUE = ("AO", "Min Value")
    MAX_VALUE = ("AP", "Max Value")
    DEFAULT_VALUES = ("AQ", "Default Values")
    ALLOWED_VALUES = ("AR", "Allowed Values")
    FIELD_DESCRIPTION = ("AS", "Field Description")

    def __init__(self, letter: str, label: str) -> None:
        self.letter = letter
        self.label = label

    @property
    def index(self) -> int:
        """0-based column index."""
        return column_index(self.letter)

    @classmethod
    def find_by_label(cls, label: str | None) -> DictionaryColumn | None:
        if label is None or not label.strip():
            return None
        normalized = label.strip().lower()
        for column in cls:
            if column.label.lower() == normalized:
                return column
        return None


REQUIRED_HEADER_COLUMNS: tuple[DictionaryColumn, ...] = (
    DictionaryColumn.FIELD_PATH,
    DictionaryColumn.DATA_TYPE,
    DictionaryColumn.MODEL,
    DictionaryColumn.MODEL_VERSION,
    DictionaryColumn.MECHANISM,
)

LAYOUT_WIDTH = max(column.index for column in DictionaryColumn) + 1


@dataclass(frozen=True)
class SheetLayout:
    """Where the header and data rows sit (0-based row indices)."""

    sheet_name: str = RAW_DATA_SHEET_NAME
    header_row_index: int = HEADER_ROW_INDEX
    data_start_row_index: int = DATA_START_ROW_INDEX

    def __post_init__(self) -> None:
        if self.header_row_index < 0:
            raise ValueError("Header row index must not be negative.")
        if self.data_start_row_index <= self.header_row_index:
            raise ValueError("Data rows must start after the header row.")
