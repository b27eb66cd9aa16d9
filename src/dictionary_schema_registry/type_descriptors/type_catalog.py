"""Catalog of SQL type keywords recognized in the data dictionary."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SchemaType(str, Enum):
    """JSON Schema primitive produced for a catalog kind."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"


class TypeParameters(str, Enum):
    """Parameter shape a catalog kind accepts in parentheses."""

    NONE = "none"
    PRECISION_SCALE = "precision_scale"
    LENGTH = "length"


@dataclass(frozen=True)
class CatalogKind:
    """One SQL keyword and the JSON Schema primitive it maps to."""

    keyword: str
    schema_type: SchemaType
    schema_format: str | None = None
    parameters: TypeParameters = TypeParameters.NONE


_S = SchemaType
_PS = TypeParameters.PRECISION_SCALE
_LEN = TypeParameters.LENGTH

TYPE_CATALOG: tuple[CatalogKind, ...] = (
    # integers
    CatalogKind("smallint", _S.INTEGER),
    CatalogKind("integer", _S.INTEGER),
    CatalogKind("int", _S.INTEGER),
    CatalogKind("bigint", _S.INTEGER),
    CatalogKind("serial", _S.INTEGER),
    CatalogKind("bigserial", _S.INTEGER),
    # decimals and floats
    CatalogKind("numeric", _S.NUMBER, parameters=_PS),
    CatalogKind("decimal", _S.NUMBER, parameters=_PS),
    CatalogKind("real", _S.NUMBER),
    CatalogKind("double precision", _S.NUMBER),
    CatalogKind("float", _S.NUMBER),
    CatalogKind("money", _S.NUMBER),
    # text
    CatalogKind("char", _S.STRING, parameters=_LEN),
    CatalogKind("varchar", _S.STRING, parameters=_LEN),
    CatalogKind("text", _S.STRING),
    CatalogKind("string", _S.STRING),
    # boolean
    CatalogKind("boolean", _S.BOOLEAN),
    CatalogKind("bool", _S.BOOLEAN),
    # date and time
    CatalogKind("date", _S.STRING, "date"),
    CatalogKind("time", _S.STRING, "time"),
    CatalogKind("timestamp", _S.STRING, "date-time"),
    CatalogKind("timestamptz", _S.STRING, "date-time"),
    CatalogKind("timestamp with time zone", _S.STRING, "date-time"),
    CatalogKind("interval", _S.STRING),
    CatalogKind("uuid", _S.STRING, "uuid"),
    # free-form documents
    CatalogKind("json", _S.OBJECT),
    CatalogKind("jsonb", _S.OBJECT),
    CatalogKind("bytea", _S.STRING, "byte"),
    # network addresses
    CatalogKind("inet", _S.STRING, "ipv4"),
    CatalogKind("cidr", _S.STRING),
    CatalogKind("macaddr", _S.STRING),
    CatalogKind("macaddr8", _S.STRING),
    # bit strings
    CatalogKind("bit", _S.STRING, parameters=_LEN),
    CatalogKind("bit varying", _S.STRING, parameters=_LEN),
    # text search and xml
    CatalogKind("tsvector", _S.STRING),
    CatalogKind("tsquery", _S.STRING),
    CatalogKind("xml", _S.STRING),
    # ranges
    CatalogKind("int4range", _S.OBJECT),
    CatalogKind("int8range", _S.OBJECT),
    CatalogKind("numrange", _S.OBJECT),
    CatalogKind("tsrange", _S.OBJECT),
    CatalogKind("tstzrange", _S.OBJECT),
    CatalogKind("daterange", _S.OBJECT),
    # geometry
    CatalogKind("point", _S.OBJECT),
    CatalogKind("line", _S.OBJECT),
    CatalogKind("lseg", _S.OBJECT),
    CatalogKind("box", _S.OBJECT),
    CatalogKind("path", _S.OBJECT),
    CatalogKind("polygon", _S.OBJECT),
    CatalogKind("circle", _S.OBJECT),
)

_KINDS_BY_KEYWORD = {kind.keyword: kind for kind in TYPE_CATALOG}

_DROPDOWN_EXAMPLES: tuple[str, ...] = (
    "numeric(p,s)",
    "decimal(p,s)",
    "char(n)",
    "varchar(n)",
    "string[]",
    "bigint[]",
    "integer[]",
    "numeric[]",
    "date[]",
    "timestamp[]",
    "boolean[]",
    "jsonb[]",
)


def find_kind(keyword: str) -> CatalogKind | None:
    """Return the catalog kind for a keyword, ignoring case and repeated whitespace."""
    normalized = " ".join(keyword.lower().split())
    return _KINDS_BY_KEYWORD.get(normalized)


def catalog_keywords() -> tuple[str, ...]:
    """Return catalog keywords plus parameterized examples for spreadsheet dropdowns."""
    return tuple(kind.keyword for kind in TYPE_CATALOG) + _DROPDOWN_EXAMPLES
