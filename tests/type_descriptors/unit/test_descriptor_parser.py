"""Type expression parser tests."""

from __future__ import annotations

import logging

import pytest
from dictionary_schema_registry.type_descriptors import (
    InvalidTypeError,
    SchemaType,
    TypeDescriptor,
    advisory_warnings,
    catalog_keywords,
    find_kind,
    parse_type_descriptor,
)


@pytest.mark.parametrize(
    ("expression", "schema_type", "schema_format"),
    [
        ("integer", SchemaType.INTEGER, None),
        ("BIGINT", SchemaType.INTEGER, None),
        ("double   precision", SchemaType.NUMBER, None),
        ("text", SchemaType.STRING, None),
        ("bool", SchemaType.BOOLEAN, None),
        ("date", SchemaType.STRING, "date"),
        ("timestamptz", SchemaType.STRING, "date-time"),
        ("timestamp with time zone", SchemaType.STRING, "date-time"),
        ("uuid", SchemaType.STRING, "uuid"),
        ("inet", SchemaType.STRING, "ipv4"),
        ("bytea", SchemaType.STRING, "byte"),
        ("jsonb", SchemaType.OBJECT, None),
        ("point", SchemaType.OBJECT, None),
    ],
)
def test_parses_bare_keywords(
    expression: str, schema_type: SchemaType, schema_format: str | None
) -> None:
    descriptor = parse_type_descriptor(expression)

    assert descriptor.schema_type is schema_type
    assert descriptor.schema_format == schema_format
    assert not descriptor.is_array


def test_parses_precision_and_scale() -> None:
    descriptor = parse_type_descriptor(" numeric( 14 , 10 ) ")

    assert descriptor.keyword == "numeric"
    assert descriptor.precision == 14
    assert descriptor.scale == 10
    assert descriptor.has_precision
    assert descriptor.length is None


def test_parses_length() -> None:
    descriptor = parse_type_descriptor("VARCHAR(50)")

    assert descriptor.keyword == "varchar"
    assert descriptor.length == 50
    assert descriptor.precision is None


def test_length_suffix_on_unparameterized_kind_falls_back_to_bare_keyword() -> None:
    descriptor = parse_type_descriptor("text(20)")

    assert descriptor.keyword == "text"
    assert descriptor.length is None


def test_array_element_matches_bare_parse() -> None:
    array = parse_type_descriptor("string[]")

    assert array.is_array
    assert array.schema_type is SchemaType.ARRAY
    assert array.kind is None
    assert array.element == parse_type_descriptor("string")


def test_nested_arrays_and_parameterized_elements() -> None:
    descriptor = parse_type_descriptor("numeric(5,2)[][]")

    assert descriptor.is_array
    assert descriptor.element is not None and descriptor.element.is_array
    inner = descriptor.element.element
    assert inner is not None
    assert (inner.precision, inner.scale) == (5, 2)


@pytest.mark.parametrize(
    ("expression", "message"),
    [
        ("", "cannot be null or empty"),
        ("   ", "cannot be null or empty"),
        ("numeric(5,6)", "Scale \\(6\\) cannot be greater than precision \\(5\\)"),
        ("numeric(0,0)", "Precision must be positive"),
        ("varchar(0)", "Length must be positive"),
        ("geometry", "Unknown SQL data type: geometry"),
        ("[]", "Unknown SQL data type"),
        ("varchar(\u0665)", "Unknown SQL data type"),
    ],
)
def test_rejects_invalid_expressions(expression: str, message: str) -> None:
    with pytest.raises(InvalidTypeError, match=message):
        parse_type_descriptor(expression)


def test_unknown_type_message_lists_valid_types() -> None:
    with pytest.raises(InvalidTypeError) as excinfo:
        parse_type_descriptor("geometry")

    assert "varchar" in str(excinfo.value)
    assert "numeric" in str(excinfo.value)


def test_large_parameters_are_advisory(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        descriptor = parse_type_descriptor("numeric(1500,2)")
        text = parse_type_descriptor("varchar(20000000)")

    assert descriptor.precision == 1500
    assert text.length == 20000000
    assert any("Precision 1500" in record.getMessage() for record in caplog.records)
    assert advisory_warnings(descriptor)
    assert advisory_warnings(parse_type_descriptor("varchar(20000000)[]"))
    assert advisory_warnings(parse_type_descriptor("numeric(10,2)")) == ()


def test_descriptor_enforces_single_shape() -> None:
    kind = find_kind("numeric")
    assert kind is not None

    with pytest.raises(ValueError):
        TypeDescriptor(kind=kind, precision=5, scale=2, length=10)
    with pytest.raises(ValueError):
        TypeDescriptor(kind=kind, precision=5)
    with pytest.raises(ValueError):
        TypeDescriptor(kind=None)


def test_catalog_keywords_include_dropdown_examples() -> None:
    keywords = catalog_keywords()

    assert "varchar" in keywords
    assert "numeric(p,s)" in keywords
    assert "string[]" in keywords
    assert len(keywords) == len(set(keywords))
