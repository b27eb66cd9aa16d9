"""Schema synthesis exports."""

from .numeric_bounds import NumericBounds, compute_numeric_bounds
from .schema_builder import (
    DEFAULT_ID_BASE_URL,
    JSON_SCHEMA_DIALECT,
    JsonSchema,
    SynthesisResult,
    SynthesisSettings,
    build_field_definition,
    build_type_schema,
    coerce_value,
    synthesize_schema,
)
from .schema_projection import (
    FlattenedField,
    SchemaDelta,
    SchemaError,
    diff_schemas,
    flatten_schema,
)

__all__ = [
    "DEFAULT_ID_BASE_URL",
    "JSON_SCHEMA_DIALECT",
    "FlattenedField",
    "JsonSchema",
    "NumericBounds",
    "SchemaDelta",
    "SchemaError",
    "SynthesisResult",
    "SynthesisSettings",
    "build_field_definition",
    "build_type_schema",
    "coerce_value",
    "compute_numeric_bounds",
    "diff_schemas",
    "flatten_schema",
    "synthesize_schema",
]
