"""Schema flattening and comparison service."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class SchemaError(Exception):
    """Raised for schema flattening failures."""


@dataclass(frozen=True)
class FlattenedField:
    """Flattened schema field definition."""

    path: str
    definition: Any


@dataclass(frozen=True)
class SchemaDelta:
    """Leaf-level differences between two schema generations."""

    added: tuple[str, ...]
    removed: tuple[str, ...]
    changed: tuple[str, ...]
    required_changed: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed or self.required_changed)

    def summary(self) -> str:
        parts = [
            f"{label}: {', '.join(paths)}"
            for label, paths in (
                ("added", self.added),
                ("removed", self.removed),
                ("changed", self.changed),
            )
            if paths
        ]
        if self.required_changed:
            parts.append("required fields changed")
        return "; ".join(parts) if parts else "no field-level changes"


def flatten_schema(root: Mapping[str, Any]) -> list[FlattenedField]:
    """Return leaf fields in document order with dotted paths."""
    fields: list[FlattenedField] = []
    _flatten_json_schema(root, prefix="", fields=fields, seen_paths=set())
    return fields


def diff_schemas(previous: Mapping[str, Any], current: Mapping[str, Any]) -> SchemaDelta:
    """Compare the leaf fields of two schemas."""
    before = {field.path: field.definition for field in flatten_schema(previous)}
    after = {field.path: field.definition for field in flatten_schema(current)}
    return SchemaDelta(
        added=tuple(path for path in after if path not in before),
        removed=tuple(path for path in before if path not in after),
        changed=tuple(path for path in after if path in before and before[path] != after[path]),
        required_changed=previous.get("required", []) != current.get("required", []),
    )


def _flatten_json_schema(
    node: Any, *, prefix: str, fields: list[FlattenedField], seen_paths: set[str]
) -> None:
    if not isinstance(node, Mapping):
        raise SchemaError("JSON schema nodes must be objects.")

    properties = node.get("properties")
    if isinstance(properties, Mapping):
        for key, child in properties.items():
            child_path = key if not prefix else f"{prefix}.{key}"
            _flatten_json_schema(child, prefix=child_path, fields=fields, seen_paths=seen_paths)
        return

    if prefix:
        _register_field(prefix, node, fields, seen_paths)
        return

    raise SchemaError("JSON schema root must define object properties.")


def _register_field(
    path: str, definition: Any, fields: list[FlattenedField], seen_paths: set[str]
) -> None:
    if path in seen_paths:
        raise SchemaError(f"Duplicate flattened field detected: {path}")
    seen_paths.add(path)
    fields.append(FlattenedField(path=path, definition=definition))
