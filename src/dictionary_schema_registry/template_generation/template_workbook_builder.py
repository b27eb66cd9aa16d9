"""Excel dictionary template generation service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from dictionary_schema_registry.dictionary_ingestion import (
    DictionaryColumn,
    Mechanism,
    SheetLayout,
)
from dictionary_schema_registry.type_descriptors import catalog_keywords

from .constants import FLAG_VALUES, LISTS_SHEET_NAME, TEMPLATE_TITLE, VALIDATED_ROW_LIMIT

_FLAG_COLUMNS = (DictionaryColumn.IS_FOREIGN_KEY, DictionaryColumn.IS_MANDATORY)


def generate_dictionary_template(
    output_path: Path | str, layout: SheetLayout | None = None
) -> Path:
    """Create an empty dictionary workbook with headers and dropdown lists.

    Returns:
      The resolved path of the written workbook.
    """
    resolved_layout = layout or SheetLayout()
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = resolved_layout.sheet_name

    header_row = resolved_layout.header_row_index + 1
    first_data_row = resolved_layout.data_start_row_index + 1
    if header_row > 1:
        sheet.cell(row=1, column=1, value=TEMPLATE_TITLE).style = "Headline 1"
    for column in DictionaryColumn:
        column_number = column.index + 1
        sheet.cell(row=header_row, column=column_number, value=column.label)
        sheet.column_dimensions[get_column_letter(column_number)].width = max(
            12, min(len(column.label) + 6, 40)
        )

    type_range, mechanism_range = _write_lists_sheet(workbook)
    last_row = first_data_row + VALIDATED_ROW_LIMIT - 1
    _add_list_validation(sheet, DictionaryColumn.DATA_TYPE, type_range, first_data_row, last_row)
    _add_list_validation(
        sheet, DictionaryColumn.MECHANISM, mechanism_range, first_data_row, last_row
    )
    flag_formula = '"' + ",".join(FLAG_VALUES) + '"'
    for column in _FLAG_COLUMNS:
        _add_list_validation(sheet, column, flag_formula, first_data_row, last_row)
    sheet.freeze_panes = f"A{first_data_row}"

    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(destination)
    return destination.resolve()


def _write_lists_sheet(workbook: Workbook) -> tuple[str, str]:
    sheet = workbook.create_sheet(LISTS_SHEET_NAME)
    type_range = _write_list(sheet, 1, "Data Types", catalog_keywords())
    mechanism_range = _write_list(
        sheet, 2, "Mechanisms", tuple(mechanism.value for mechanism in Mechanism)
    )
    sheet.sheet_state = "hidden"
    return type_range, mechanism_range


def _write_list(sheet: Worksheet, column: int, title: str, values: Sequence[str]) -> str:
    sheet.cell(row=1, column=column, value=title)
    for row_index, value in enumerate(values, start=2):
        sheet.cell(row=row_index, column=column, value=value)
    letter = get_column_letter(column)
    return f"'{LISTS_SHEET_NAME}'!${letter}$2:${letter}${len(values) + 1}"


def _add_list_validation(
    sheet: Worksheet, column: DictionaryColumn, formula: str, first_row: int, last_row: int
) -> None:
    validation = DataValidation(type="list", formula1=formula, allow_blank=True)
    validation.error = f"Choose a value from the {column.label} list."
    validation.errorTitle = column.label
    sheet.add_data_validation(validation)
    validation.add(f"{column.letter}{first_row}:{column.letter}{last_row}")
