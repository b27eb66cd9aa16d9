"""Parser for data dictionary type expressions."""

from __future__ import annotations

import logging
import re

from .descriptor_models import TypeDescriptor
from .type_catalog import TYPE_CATALOG, CatalogKind, TypeParameters, find_kind

LOGGER = logging.getLogger(__name__)

MAX_PRACTICAL_PRECISION = 1000
MAX_PRACTICAL_LENGTH = 10_485_760

_ARRAY_PATTERN = re.compile(r"^(?P<element>.+?)\s*\[\s*\]$")
_PRECISION_SCALE_PATTERN = re.compile(
    r"^(?P<name>[^()]+?)\s*\(\s*(?P<precision>[0-9]+)\s*,\s*(?P<scale>[0-9]+)\s*\)$"
)
_LENGTH_PATTERN = re.compile(r"^(?P<name>[^()]+?)\s*\(\s*(?P<length>[0-9]+)\s*\)$")


class InvalidTypeError(ValueError):
    """Raised when a type expression cannot be decoded."""


def parse_type_descriptor(type_expression: str | None) -> TypeDescriptor:
    """Decode a type expression such as ``varchar(50)``, ``numeric(14,10)`` or ``date[]``.

    Forms are tried in order: trailing ``[]``, ``name(p,s)``, ``name(n)``,
    then the bare keyword (also with any parenthesized suffix removed).
    """
    if type_expression is None or not type_expression.strip():
        raise InvalidTypeError("Data type cannot be null or empty.")
    text = type_expression.strip()

    array_match = _ARRAY_PATTERN.fullmatch(text)
    if array_match:
        return TypeDescriptor.array_of(parse_type_descriptor(array_match.group("element")))

    decimal_match = _PRECISION_SCALE_PATTERN.fullmatch(text)
    if decimal_match:
        kind = find_kind(decimal_match.group("name"))
        if kind is not None and kind.parameters is TypeParameters.PRECISION_SCALE:
            return _decimal_descriptor(
                kind,
                int(decimal_match.group("precision")),
                int(decimal_match.group("scale")),
                text,
            )

    length_match = _LENGTH_PATTERN.fullmatch(text)
    if length_match:
        kind = find_kind(length_match.group("name"))
        if kind is not None and kind.parameters is TypeParameters.LENGTH:
            return _bounded_text_descriptor(kind, int(length_match.group("length")), text)

    return TypeDescriptor.simple(_lookup_kind(text))


def advisory_warnings(descriptor: TypeDescriptor) -> tuple[str, ...]:
    """Return non-blocking notes about parameters beyond practical storage limits."""
    if descriptor.element is not None:
        return advisory_warnings(descriptor.element)
    notes: list[str] = []
    if descriptor.precision is not None and descriptor.precision > MAX_PRACTICAL_PRECISION:
        notes.append(
            f"Precision {descriptor.precision} exceeds the practical limit of "
            f"{MAX_PRACTICAL_PRECISION} for type {descriptor.keyword}."
        )
    if descriptor.length is not None and descriptor.length > MAX_PRACTICAL_LENGTH:
        notes.append(
            f"Length {descriptor.length} exceeds the practical limit of "
            f"{MAX_PRACTICAL_LENGTH} for type {descriptor.keyword}."
        )
    return tuple(notes)


def valid_type_names() -> str:
    return ", ".join(kind.keyword for kind in TYPE_CATALOG)


def _decimal_descriptor(
    kind: CatalogKind, precision: int, scale: int, original: str
) -> TypeDescriptor:
    if precision <= 0:
        raise InvalidTypeError(f"Precision must be positive for type: {original}")
    if scale > precision:
        raise InvalidTypeError(
            f"Scale ({scale}) cannot be greater than precision ({precision}) for type: {original}"
        )
    if precision > MAX_PRACTICAL_PRECISION:
        LOGGER.warning(
            "Precision %d exceeds typical limit of %d for type: %s",
            precision,
            MAX_PRACTICAL_PRECISION,
            original,
        )
    return TypeDescriptor.decimal(kind, precision, scale)


def _bounded_text_descriptor(kind: CatalogKind, length: int, original: str) -> TypeDescriptor:
    if length <= 0:
        raise InvalidTypeError(f"Length must be positive for type: {original}")
    if length > MAX_PRACTICAL_LENGTH:
        LOGGER.warning("Length %d exceeds varchar storage limit for type: %s", length, original)
    return TypeDescriptor.bounded_text(kind, length)


def _lookup_kind(text: str) -> CatalogKind:
    kind = find_kind(text)
    if kind is None:
        kind = find_kind(text.split("(", 1)[0])
    if kind is None:
        raise InvalidTypeError(
            f"Unknown SQL data type: {text}. Valid types are: {valid_type_names()}"
        )
    return kind
