"""Streaming sheet reader tests."""

from __future__ import annotations

import threading
from datetime import date, datetime
from pathlib import Path

import pytest
from dictionary_schema_registry.workbook_streaming import (
    RowProcessingError,
    SheetNotFoundError,
    StreamAbortedError,
    WorkbookParseError,
    render_cell_value,
    stream_sheet_rows,
)
from openpyxl import Workbook


def _write_workbook(path: Path, cells: dict[str, object], sheet_name: str = "Data") -> Path:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name
    for reference, value in cells.items():
        sheet[reference] = value
    workbook.create_sheet("Other")
    workbook.save(path)
    return path


def _collect(path: Path, sheet_name: str = "Data", **kwargs) -> list[tuple[int, list]]:
    rows: list[tuple[int, list]] = []
    stream_sheet_rows(path, sheet_name, lambda index, cells: rows.append((index, cells)), **kwargs)
    return rows


def test_streams_rows_with_cells_at_their_column_positions(tmp_path: Path) -> None:
    path = _write_workbook(
        tmp_path / "book.xlsx",
        {"A1": "alpha", "C1": 3, "B3": True, "AD3": "leverage"},
    )

    rows = _collect(path)

    assert [index for index, _ in rows] == [0, 1, 2]
    assert rows[0][1] == ["alpha", None, "3"]
    assert rows[1][1] == []
    assert rows[2][1][1] == "true"
    assert rows[2][1][29] == "leverage"
    assert len(rows[2][1]) == 30


def test_pads_rows_to_minimum_width(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x", "A2": "y"})

    rows = _collect(path, min_columns=5)

    assert rows[0][1] == ["x", None, None, None, None]
    assert rows[1][1] == ["y", None, None, None, None]


def test_returns_number_of_rows_delivered(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x", "A4": "y"})

    delivered = stream_sheet_rows(path, "Data", lambda index, cells: None)

    assert delivered == 4


def test_missing_sheet_lists_available_sheets(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x"})

    with pytest.raises(SheetNotFoundError, match="Raw Data") as excinfo:
        _collect(path, sheet_name="Raw Data")

    assert "Data, Other" in str(excinfo.value)
    assert excinfo.value.sheet_name == "Raw Data"


def test_callback_failure_aborts_stream_with_row_index(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x", "A2": "boom", "A3": "never"})
    seen: list[int] = []

    def on_row(index: int, cells: list) -> None:
        seen.append(index)
        if cells and cells[0] == "boom":
            raise ValueError("bad cell")

    with pytest.raises(RowProcessingError) as excinfo:
        stream_sheet_rows(path, "Data", on_row)

    assert excinfo.value.row_index == 1
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert seen == [0, 1]


def test_parse_errors_from_callback_propagate_unwrapped(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x"})

    def on_row(index: int, cells: list) -> None:
        raise WorkbookParseError("header mismatch")

    with pytest.raises(WorkbookParseError, match="header mismatch") as excinfo:
        stream_sheet_rows(path, "Data", on_row)

    assert not isinstance(excinfo.value, RowProcessingError)


def test_abort_event_stops_stream(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"A1": "x", "A2": "y"})
    abort = threading.Event()
    seen: list[int] = []

    def on_row(index: int, cells: list) -> None:
        seen.append(index)
        abort.set()

    with pytest.raises(StreamAbortedError) as excinfo:
        stream_sheet_rows(path, "Data", on_row, abort=abort)

    assert seen == [0]
    assert excinfo.value.row_index == 1


def test_invalid_package_raises_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_text("not a zip archive", encoding="utf-8")

    with pytest.raises(WorkbookParseError, match="Unable to open workbook"):
        _collect(path)


def test_missing_file_raises_parse_error(tmp_path: Path) -> None:
    with pytest.raises(WorkbookParseError):
        _collect(tmp_path / "missing.xlsx")


def test_reads_from_binary_stream(tmp_path: Path) -> None:
    path = _write_workbook(tmp_path / "book.xlsx", {"B1": "from stream"})

    rows: list[list] = []
    with path.open("rb") as handle:
        stream_sheet_rows(handle, "Data", lambda index, cells: rows.append(cells))

    assert rows == [[None, "from stream"]]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ("  text ", "  text "),
        (True, "true"),
        (False, "false"),
        (10, "10"),
        (4.0, "4"),
        (2.5, "2.5"),
        (date(2024, 1, 2), "2024-01-02"),
        (datetime(2024, 1, 2, 3, 4, 5), "2024-01-02T03:04:05"),
    ],
)
def test_render_cell_value(value: object, expected: str | None) -> None:
    assert render_cell_value(value) == expected
