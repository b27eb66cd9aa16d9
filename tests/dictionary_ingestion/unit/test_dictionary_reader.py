"""Dictionary row reader tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from dictionary_schema_registry.dictionary_ingestion import (
    REQUIRED_HEADER_COLUMNS,
    DictionaryColumn,
    FieldValidationError,
    HeaderValidationError,
    RowError,
    SheetLayout,
    read_dictionary_rows,
)
from dictionary_schema_registry.dictionary_ingestion.dictionary_reader import parse_flag
from dictionary_schema_registry.workbook_streaming import SheetNotFoundError
from openpyxl import Workbook

Row = dict[DictionaryColumn, object]


def _write_dictionary(
    path: Path,
    rows: list[Row],
    *,
    sheet_name: str = "Raw Data",
    header_row: int = 3,
    header_overrides: dict[DictionaryColumn, object] | None = None,
) -> Path:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    sheet.cell(row=1, column=1, value="Data Dictionary")
    labels: dict[DictionaryColumn, object] = {column: column.label for column in DictionaryColumn}
    labels.update(header_overrides or {})
    for column, label in labels.items():
        sheet.cell(row=header_row, column=column.index + 1, value=label)
    for offset, row in enumerate(rows, start=header_row + 1):
        for column, value in row.items():
            sheet.cell(row=offset, column=column.index + 1, value=value)
    workbook.save(path)
    return path


def _field_row(path: str, data_type: str = "varchar(20)", **extra: object) -> Row:
    row: Row = {
        DictionaryColumn.MODEL: "placm",
        DictionaryColumn.MODEL_VERSION: "010",
        DictionaryColumn.MECHANISM: "standalone",
        DictionaryColumn.FIELD_PATH: path,
        DictionaryColumn.DATA_TYPE: data_type,
    }
    for name, value in extra.items():
        row[DictionaryColumn[name.upper()]] = value
    return row


def test_reads_field_records_from_fixed_columns(tmp_path: Path) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [
            _field_row(
                "model_specific_overrides.financial_drivers.leverage",
                "numeric(14,10)",
                data_name="Leverage",
                data_definition="Debt to equity.",
                is_mandatory="Y",
                is_foreign_key="N",
                min_value=0,
                max_value="100",
                default_values="1.5",
                field_description="  Ratio used in rating.  ",
            ),
            _field_row(
                "model_specific_overrides.sector",
                is_foreign_key="yes",
                fk_table_name="sector",
                fk_column_name="code",
                length=12,
                allowed_values="A,B",
            ),
        ],
    )

    result = read_dictionary_rows(path)

    assert [row.row_number for row in result.rows] == [4, 5]
    first = result.rows[0]
    assert (first.model, first.version, first.mechanism) == ("placm", "010", "standalone")
    assert first.field.data_type == "numeric(14,10)"
    assert first.field.data_name == "Leverage"
    assert first.field.data_definition == "Debt to equity."
    assert first.field.is_mandatory is True
    assert first.field.is_foreign_key is False
    assert first.field.min_value == "0"
    assert first.field.max_value == "100"
    assert first.field.default_value == "1.5"
    assert first.field.field_description == "Ratio used in rating."
    second = result.rows[1].field
    assert second.is_foreign_key is True
    assert (second.foreign_key_table, second.foreign_key_column) == ("sector", "code")
    assert second.length == 12
    assert second.allowed_values == "A,B"
    assert second.is_mandatory is None
    assert result.fields == (first.field, second)


def test_skips_blank_rows_and_rows_without_field_path(tmp_path: Path) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [
            _field_row("model_specific_overrides.a"),
            {},
            {DictionaryColumn.DATA_NAME: "Orphan name"},
            _field_row("model_specific_overrides.b"),
        ],
    )

    result = read_dictionary_rows(path)

    assert [row.field.field_path for row in result.rows] == [
        "model_specific_overrides.a",
        "model_specific_overrides.b",
    ]
    assert result.skipped_row_numbers == (5, 6)


@pytest.mark.parametrize("column", REQUIRED_HEADER_COLUMNS)
def test_mutated_required_header_names_the_column(tmp_path: Path, column: DictionaryColumn) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [_field_row("model_specific_overrides.a")],
        header_overrides={column: "Something Else"},
    )

    with pytest.raises(HeaderValidationError) as excinfo:
        read_dictionary_rows(path)

    assert column.label in str(excinfo.value)
    assert column.letter in str(excinfo.value)


def test_header_labels_match_case_insensitively(tmp_path: Path) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [_field_row("model_specific_overrides.a")],
        header_overrides={DictionaryColumn.FIELD_PATH: "  FIELD PATH "},
    )

    assert len(read_dictionary_rows(path).rows) == 1


def test_sheet_shorter_than_header_row_fails(tmp_path: Path) -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Raw Data"
    sheet["A1"] = "title only"
    path = tmp_path / "dictionary.xlsx"
    workbook.save(path)

    with pytest.raises(HeaderValidationError, match="Headers not found"):
        read_dictionary_rows(path)


def test_foreign_key_without_column_fails_at_its_row(tmp_path: Path) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [
            _field_row("model_specific_overrides.a"),
            _field_row(
                "model_specific_overrides.sector", is_foreign_key="Y", fk_table_name="sector"
            ),
        ],
    )

    with pytest.raises(RowError, match="Error parsing row 5") as excinfo:
        read_dictionary_rows(path)

    assert excinfo.value.row_number == 5
    assert isinstance(excinfo.value.__cause__, FieldValidationError)
    assert "Foreign key column is required" in str(excinfo.value)


def test_missing_key_component_is_a_row_error(tmp_path: Path) -> None:
    row = _field_row("model_specific_overrides.a")
    del row[DictionaryColumn.MECHANISM]
    path = _write_dictionary(tmp_path / "dictionary.xlsx", [row])

    with pytest.raises(RowError, match="Rating/GRR Mechanism"):
        read_dictionary_rows(path)


def test_missing_data_type_is_a_row_error(tmp_path: Path) -> None:
    row = _field_row("model_specific_overrides.a")
    del row[DictionaryColumn.DATA_TYPE]
    path = _write_dictionary(tmp_path / "dictionary.xlsx", [row])

    with pytest.raises(RowError, match="Data type is required"):
        read_dictionary_rows(path)


@pytest.mark.parametrize("length", ["wide", "1_000", "\u0663\u0662"])
def test_invalid_length_is_ignored_with_warning(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, length: str
) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx", [_field_row("model_specific_overrides.a", length=length)]
    )

    result = read_dictionary_rows(path)

    assert result.rows[0].field.length is None
    assert f"invalid length value '{length}'" in caplog.text


def test_custom_layout_reads_other_sheet_and_rows(tmp_path: Path) -> None:
    path = _write_dictionary(
        tmp_path / "dictionary.xlsx",
        [_field_row("model_specific_overrides.a")],
        sheet_name="Dictionary",
        header_row=1,
    )
    layout = SheetLayout(sheet_name="Dictionary", header_row_index=0, data_start_row_index=1)

    result = read_dictionary_rows(path, layout)

    assert [row.row_number for row in result.rows] == [2]


def test_missing_sheet_is_reported(tmp_path: Path) -> None:
    path = _write_dictionary(tmp_path / "dictionary.xlsx", [], sheet_name="Other")

    with pytest.raises(SheetNotFoundError, match="Raw Data"):
        read_dictionary_rows(path)


def test_layout_rejects_data_rows_before_header() -> None:
    with pytest.raises(ValueError):
        SheetLayout(header_row_index=3, data_start_row_index=3)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("  ", None),
        ("Y", True),
        ("yes", True),
        ("TRUE", True),
        ("1", True),
        ("N", False),
        ("maybe", False),
    ],
)
def test_parse_flag(value: str | None, expected: bool | None) -> None:
    assert parse_flag(value) is expected
