"""Cell reference decoding tests."""

from __future__ import annotations

import pytest
from dictionary_schema_registry.workbook_streaming import column_index, column_letters


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("A1", 0),
        ("Z7", 25),
        ("AA3", 26),
        ("AD", 29),
        ("ad12", 29),
        ("AS4", 44),
        ("XFD1048576", 16383),
    ],
)
def test_column_index_decodes_letter_prefix(reference: str, expected: int) -> None:
    assert column_index(reference) == expected


def test_column_index_rejects_reference_without_letters() -> None:
    with pytest.raises(ValueError, match="no column letters"):
        column_index("42")


def test_column_letters_is_inverse_of_column_index() -> None:
    for index in (0, 25, 26, 29, 701, 702, 16383):
        assert column_index(column_letters(index)) == index
    assert column_letters(29) == "AD"


def test_column_letters_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        column_letters(-1)
