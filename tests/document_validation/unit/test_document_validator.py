"""Document validation tests."""

from __future__ import annotations

import pytest
from dictionary_schema_registry.dictionary_ingestion import Entry, EntryKey, FieldRecord
from dictionary_schema_registry.document_validation import (
    DocumentValidationError,
    ValidationSeverity,
    ensure_valid_document,
    render_document_path,
    validate_document,
)
from dictionary_schema_registry.schema_synthesis import synthesize_schema


def _overrides_schema() -> dict:
    entry = Entry(
        key=EntryKey.parse("PLACM", "010", "STANDALONE"),
        fields=(
            FieldRecord(
                field_path="model_specific_overrides.financial_drivers.leverage",
                data_type="numeric(5,2)",
                is_mandatory=True,
            ),
            FieldRecord(
                field_path="model_specific_overrides.sectors",
                data_type="varchar(10)[]",
                allowed_values="ENERGY,BANKING",
            ),
            FieldRecord(
                field_path="model_specific_overrides.reference",
                data_type="uuid",
            ),
        ),
    )
    return synthesize_schema(entry).schema


def test_valid_document_passes() -> None:
    schema = _overrides_schema()

    result = validate_document(
        schema,
        {
            "financial_drivers": {"leverage": 12.5},
            "sectors": ["ENERGY"],
            "reference": "123e4567-e89b-12d3-a456-426614174000",
        },
    )

    assert result.valid
    assert result.issues == ()
    assert result.message == "Validation passed"
    assert result.schema_id == schema["$id"]
    assert result.format_issues() == "No validation errors"


def test_out_of_range_value_reports_nested_path() -> None:
    result = validate_document(_overrides_schema(), {"financial_drivers": {"leverage": 1000}})

    assert not result.valid
    assert result.message == "Validation failed with 1 error(s)"
    (issue,) = result.errors
    assert issue.path == "$.financial_drivers.leverage"
    assert issue.keyword == "maximum"
    assert issue.severity is ValidationSeverity.ERROR
    assert issue.schema_path is not None
    assert issue.schema_path.endswith("/leverage/maximum")


def test_array_item_errors_use_index_notation() -> None:
    result = validate_document(
        _overrides_schema(),
        {"financial_drivers": {"leverage": 1}, "sectors": ["ENERGY", "RETAIL"]},
    )

    assert [issue.path for issue in result.issues] == ["$.sectors[1]"]
    assert result.issues[0].keyword == "enum"


def test_missing_required_and_unknown_properties_are_all_reported() -> None:
    result = validate_document(_overrides_schema(), {"unexpected": True})

    keywords = sorted(issue.keyword or "" for issue in result.issues)
    assert keywords == ["additionalProperties", "required"]
    assert result.format_issues().startswith("Validation failed with 2 error(s):\n  1. [ERROR] $:")


def test_invalid_schema_is_reported_as_internal_error() -> None:
    result = validate_document({"$id": "urn:broken", "type": "nonsense"}, {})

    assert not result.valid
    assert result.schema_id == "urn:broken"
    assert result.message == "Internal validation error"
    assert result.issues[0].keyword == "internal-error"


def test_schema_without_identifier_is_unknown() -> None:
    assert validate_document({"type": "object"}, {}).schema_id == "unknown"


def test_ensure_valid_document_raises_with_result() -> None:
    with pytest.raises(DocumentValidationError) as excinfo:
        ensure_valid_document(_overrides_schema(), {})

    assert excinfo.value.result.errors[0].keyword == "required"
    assert str(excinfo.value) == "Validation failed with 1 error(s)"


def test_render_document_path() -> None:
    assert render_document_path([]) == "$"
    assert render_document_path(["a", "b", 0, "c"]) == "$.a.b[0].c"
