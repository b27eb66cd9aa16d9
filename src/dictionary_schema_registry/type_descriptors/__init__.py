"""Type descriptor exports."""

from .descriptor_models import TypeDescriptor
from .descriptor_parser import (
    MAX_PRACTICAL_LENGTH,
    MAX_PRACTICAL_PRECISION,
    InvalidTypeError,
    advisory_warnings,
    parse_type_descriptor,
)
from .type_catalog import (
    TYPE_CATALOG,
    CatalogKind,
    SchemaType,
    TypeParameters,
    catalog_keywords,
    find_kind,
)

__all__ = [
    "TYPE_CATALOG",
    "MAX_PRACTICAL_LENGTH",
    "MAX_PRACTICAL_PRECISION",
    "CatalogKind",
    "InvalidTypeError",
    "SchemaType",
    "TypeDescriptor",
    "TypeParameters",
    "advisory_warnings",
    "catalog_keywords",
    "find_kind",
    "parse_type_descriptor",
]
