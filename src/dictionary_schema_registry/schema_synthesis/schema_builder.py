"""JSON Schema synthesis from grouped dictionary entries."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dictionary_schema_registry.dictionary_ingestion.field_models import (
    DEFAULT_DOCUMENT_PREFIX,
    Entry,
    EntryKey,
    FieldRecord,
)
from dictionary_schema_registry.type_descriptors import (
    InvalidTypeError,
    SchemaType,
    TypeDescriptor,
    advisory_warnings,
    parse_type_descriptor,
)

from .numeric_bounds import compute_numeric_bounds

LOGGER = logging.getLogger(__name__)

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
DEFAULT_ID_BASE_URL = "https://schemas.example.com/rating-models"

UUID_PATTERN = (
    "^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)
INET_PATTERN = (
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
    r"|^([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}$"
)
MAC_ADDRESS_PATTERN = "^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$"

_KEYWORD_PATTERNS = {
    "uuid": UUID_PATTERN,
    "inet": INET_PATTERN,
    "macaddr": MAC_ADDRESS_PATTERN,
    "macaddr8": MAC_ADDRESS_PATTERN,
}

# Plain ASCII numerals: no digit separators, no non-Latin digits.
_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")
_DECIMAL_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

JsonSchema = dict[str, Any]


@dataclass(frozen=True)
class SynthesisSettings:
    """Knobs for schema synthesis."""

    document_prefix: str = DEFAULT_DOCUMENT_PREFIX
    id_base_url: str = DEFAULT_ID_BASE_URL


@dataclass(frozen=True)
class SynthesisResult:
    """Synthesized schema for one entry."""

    key: EntryKey
    schema: JsonSchema
    placed_fields: int
    warnings: tuple[str, ...]


def synthesize_schema(entry: Entry, settings: SynthesisSettings | None = None) -> SynthesisResult:
    """Build the JSON Schema 2020-12 document for an entry's nested-document fields.

    Raises:
      EntryValidationError: If the entry violates its invariants.
      InvalidTypeError: If a field's type expression cannot be decoded.
    """
    resolved = settings or SynthesisSettings()
    entry.validate()
    LOGGER.info("Generating JSON Schema 2020-12 for %s", entry.key.label)

    warnings: list[str] = []
    properties: JsonSchema = {}
    required: set[str] = set()
    placed = 0
    for field in entry.document_fields(resolved.document_prefix):
        path = field.document_path(resolved.document_prefix) or ""
        segments = path.split(".")
        if any(not segment for segment in segments):
            _warn(warnings, f"Field path '{field.field_path}' has an empty segment; skipped")
            continue
        definition = build_field_definition(field, warnings)
        if _place_definition(properties, segments, definition, path, warnings):
            placed += 1
        if field.is_mandatory:
            required.add(segments[0])

    schema: JsonSchema = {
        "$schema": JSON_SCHEMA_DIALECT,
        "$id": build_schema_id(entry.key, resolved),
        "type": "object",
        "title": _schema_title(entry.key, resolved.document_prefix),
        "description": _schema_description(entry.key, resolved.document_prefix),
        "properties": properties,
    }
    if required:
        schema["required"] = sorted(required)
    schema["additionalProperties"] = False
    return SynthesisResult(
        key=entry.key, schema=schema, placed_fields=placed, warnings=tuple(warnings)
    )


def build_schema_id(key: EntryKey, settings: SynthesisSettings) -> str:
    base = settings.id_base_url.rstrip("/")
    document = settings.document_prefix.replace("_", "-")
    return (
        f"{base}/{key.model.lower()}/{key.version}/{key.mechanism.value.lower()}/{document}.json"
    )


def build_field_definition(field: FieldRecord, warnings: list[str] | None = None) -> JsonSchema:
    """Return the property schema for one dictionary field."""
    try:
        descriptor = parse_type_descriptor(field.data_type)
    except InvalidTypeError as exc:
        raise InvalidTypeError(f"Field '{field.field_path}': {exc}") from exc
    if warnings is not None:
        for note in advisory_warnings(descriptor):
            warnings.append(f"{field.field_path}: {note}")

    definition = build_type_schema(descriptor)
    if field.data_name:
        definition["title"] = field.data_name
    description = _field_description(field)
    if description:
        definition["description"] = description

    _FIELD_CONSTRAINTS[descriptor.schema_type](definition, field, descriptor)

    if field.allowed_values and not descriptor.is_array:
        values = _split_allowed_values(field.allowed_values, descriptor.schema_type)
        if values:
            definition["enum"] = values
    if field.default_value is not None:
        _apply_default(definition, field, descriptor)
    if field.is_foreign_key:
        definition["x-foreign-key"] = {
            "table": field.foreign_key_table,
            "column": field.foreign_key_column,
        }
    definition["x-sql-type"] = (field.data_type or "").strip()
    return definition


def build_type_schema(descriptor: TypeDescriptor) -> JsonSchema:
    """Constraints implied by the type expression alone; used for leaves and array items."""
    schema: JsonSchema = {"type": descriptor.schema_type.value}
    if descriptor.element is not None:
        schema["items"] = build_type_schema(descriptor.element)
        return schema
    if descriptor.schema_format:
        schema["format"] = descriptor.schema_format
    if descriptor.length is not None:
        schema["maxLength"] = descriptor.length
    pattern = _KEYWORD_PATTERNS.get(descriptor.keyword or "")
    if pattern:
        schema["pattern"] = pattern
    if descriptor.precision is not None and descriptor.scale is not None:
        bounds = compute_numeric_bounds(descriptor.precision, descriptor.scale)
        schema["minimum"] = bounds.minimum_json()
        schema["maximum"] = bounds.maximum_json()
        schema["x-numeric-precision"] = descriptor.precision
        schema["x-numeric-scale"] = descriptor.scale
    if descriptor.schema_type is SchemaType.OBJECT:
        schema["additionalProperties"] = True
    return schema


def _apply_string_constraints(
    definition: JsonSchema, field: FieldRecord, descriptor: TypeDescriptor
) -> None:
    if field.length is not None and field.length > 0:
        definition["maxLength"] = field.length
    min_length = _parse_int(field.min_value)
    if min_length is not None and min_length > 0:
        definition["minLength"] = min_length


def _apply_numeric_constraints(
    definition: JsonSchema, field: FieldRecord, descriptor: TypeDescriptor
) -> None:
    for raw, keyword in ((field.min_value, "minimum"), (field.max_value, "maximum")):
        if raw is None:
            continue
        value = _parse_number(raw)
        if value is None:
            LOGGER.warning("Invalid %s value for field %s: %s", keyword, field.field_path, raw)
            continue
        definition[keyword] = value


def _apply_array_constraints(
    definition: JsonSchema, field: FieldRecord, descriptor: TypeDescriptor
) -> None:
    element = descriptor.element
    assert element is not None
    if field.allowed_values:
        values = _split_allowed_values(field.allowed_values, element.schema_type)
        if values:
            definition["items"]["enum"] = values
    definition["uniqueItems"] = True
    min_items = _parse_int(field.min_value)
    if min_items is not None and min_items >= 0:
        definition["minItems"] = min_items
    max_items = _parse_int(field.max_value)
    if max_items is not None and max_items >= 0:
        definition["maxItems"] = max_items


def _apply_no_constraints(
    definition: JsonSchema, field: FieldRecord, descriptor: TypeDescriptor
) -> None:
    return None


_FieldConstraintHandler = Callable[[JsonSchema, FieldRecord, TypeDescriptor], None]

_FIELD_CONSTRAINTS: dict[SchemaType, _FieldConstraintHandler] = {
    SchemaType.STRING: _apply_string_constraints,
    SchemaType.NUMBER: _apply_numeric_constraints,
    SchemaType.INTEGER: _apply_numeric_constraints,
    SchemaType.ARRAY: _apply_array_constraints,
    SchemaType.OBJECT: _apply_no_constraints,
    SchemaType.BOOLEAN: _apply_no_constraints,
}


def _place_definition(
    properties: JsonSchema,
    segments: list[str],
    definition: JsonSchema,
    path: str,
    warnings: list[str],
) -> bool:
    container = properties
    for segment in segments[:-1]:
        node = container.get(segment)
        if node is None:
            node = {"type": "object", "properties": {}}
            container[segment] = node
        elif not _is_container(node):
            _warn(warnings, f"Path conflict at '{segment}' in path {path}; field skipped")
            return False
        container = node["properties"]
    leaf = segments[-1]
    if _is_container(container.get(leaf)):
        _warn(warnings, f"Path conflict at '{leaf}' in path {path}; field skipped")
        return False
    container[leaf] = definition
    return True


def _is_container(node: object) -> bool:
    return isinstance(node, dict) and isinstance(node.get("properties"), dict)


def _apply_default(definition: JsonSchema, field: FieldRecord, descriptor: TypeDescriptor) -> None:
    raw = field.default_value or ""
    if descriptor.schema_type in (SchemaType.ARRAY, SchemaType.OBJECT):
        expected = list if descriptor.schema_type is SchemaType.ARRAY else dict
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        if isinstance(parsed, expected):
            definition["default"] = parsed
        else:
            LOGGER.warning(
                "Ignoring default value '%s' for %s field %s",
                raw,
                descriptor.schema_type.value,
                field.field_path,
            )
        return
    definition["default"] = coerce_value(raw, descriptor.schema_type)


def coerce_value(raw: str, schema_type: SchemaType) -> Any:
    """Convert dictionary text to the JSON value of ``schema_type``, falling back to text."""
    text = raw.strip()
    if schema_type is SchemaType.INTEGER:
        if _INTEGER_TEXT.fullmatch(text):
            return int(text)
    elif schema_type is SchemaType.NUMBER:
        number = _parse_number(text)
        if number is not None:
            return number
    elif schema_type is SchemaType.BOOLEAN:
        lowered = text.lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    else:
        return text
    LOGGER.warning("Invalid %s value '%s', using it as a string", schema_type.value, text)
    return text


def _split_allowed_values(raw: str, schema_type: SchemaType) -> list[Any]:
    return [coerce_value(value, schema_type) for value in raw.split(",") if value.strip()]


def _parse_int(raw: str | None) -> int | None:
    if raw is None or not _INTEGER_TEXT.fullmatch(raw.strip()):
        return None
    return int(raw.strip())


def _parse_number(raw: str) -> int | float | None:
    text = raw.strip()
    if _INTEGER_TEXT.fullmatch(text):
        return int(text)
    if not _DECIMAL_TEXT.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def _field_description(field: FieldRecord) -> str | None:
    parts = [part for part in (field.data_definition, field.field_description) if part]
    return " ".join(parts) if parts else None


def _schema_title(key: EntryKey, prefix: str) -> str:
    document = prefix.replace("_", " ").title()
    return f"{key.model} {key.version} {key.mechanism.value} {document} Schema"


def _schema_description(key: EntryKey, prefix: str) -> str:
    return (
        f"JSON Schema (2020-12) for the {prefix} document column. Defines the structure "
        f"and validation rules for rating model {key.model} version {key.version} "
        f"using {key.mechanism.value} mechanism."
    )


def _warn(warnings: list[str], message: str) -> None:
    LOGGER.warning("%s", message)
    warnings.append(message)
