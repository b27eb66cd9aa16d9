"""Type descriptor entities."""

from __future__ import annotations

from dataclasses import dataclass

from .type_catalog import CatalogKind, SchemaType


@dataclass(frozen=True)
class TypeDescriptor:
    """Structured decoding of one data dictionary type expression.

    Exactly one shape is populated: a plain ``kind``, a ``kind`` with
    ``precision``/``scale``, a ``kind`` with ``length``, or an ``element``
    descriptor for arrays (``kind`` is then ``None``).
    """

    kind: CatalogKind | None
    element: TypeDescriptor | None = None
    precision: int | None = None
    scale: int | None = None
    length: int | None = None

    def __post_init__(self) -> None:
        if self.element is not None:
            if self.kind is not None or self.has_precision or self.length is not None:
                raise ValueError("Array descriptors carry only an element type.")
            return
        if self.kind is None:
            raise ValueError("Non-array descriptors require a catalog kind.")
        if (self.precision is None) != (self.scale is None):
            raise ValueError("Precision and scale must be set together.")
        if self.has_precision and self.length is not None:
            raise ValueError("A descriptor cannot carry both precision/scale and length.")
        if self.has_precision:
            assert self.precision is not None and self.scale is not None
            if self.precision <= 0:
                raise ValueError("Precision must be positive.")
            if self.scale < 0 or self.scale > self.precision:
                raise ValueError("Scale must be between 0 and precision.")
        if self.length is not None and self.length <= 0:
            raise ValueError("Length must be positive.")

    @classmethod
    def simple(cls, kind: CatalogKind) -> TypeDescriptor:
        return cls(kind=kind)

    @classmethod
    def decimal(cls, kind: CatalogKind, precision: int, scale: int) -> TypeDescriptor:
        return cls(kind=kind, precision=precision, scale=scale)

    @classmethod
    def bounded_text(cls, kind: CatalogKind, length: int) -> TypeDescriptor:
        return cls(kind=kind, length=length)

    @classmethod
    def array_of(cls, element: TypeDescriptor) -> TypeDescriptor:
        return cls(kind=None, element=element)

    @property
    def is_array(self) -> bool:
        return self.element is not None

    @property
    def has_precision(self) -> bool:
        return self.precision is not None and self.scale is not None

    @property
    def schema_type(self) -> SchemaType:
        """JSON Schema primitive of this descriptor (``array`` for arrays)."""
        if self.kind is None:
            return SchemaType.ARRAY
        return self.kind.schema_type

    @property
    def schema_format(self) -> str | None:
        return self.kind.schema_format if self.kind is not None else None

    @property
    def keyword(self) -> str | None:
        return self.kind.keyword if self.kind is not None else None
