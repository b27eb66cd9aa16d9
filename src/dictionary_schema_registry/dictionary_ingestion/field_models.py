"""Data dictionary entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_DOCUMENT_PREFIX = "model_specific_overrides"
MAX_MODEL_LENGTH = 50
MAX_VERSION_LENGTH = 20


class FieldValidationError(ValueError):
    """Raised when a field record violates its own invariants."""


class EntryValidationError(ValueError):
    """Raised when a grouped entry violates its invariants."""


class Mechanism(str, Enum):
    """Rating mechanism forming part of the registry key."""

    STANDALONE = "STANDALONE"
    INHERITANCE = "INHERITANCE"
    PROPAGATION = "PROPAGATION"

    @classmethod
    def parse(cls, value: str | None) -> Mechanism:
        if value is None or not value.strip():
            raise EntryValidationError("Rating mechanism cannot be null or empty.")
        normalized = value.strip().upper()
        for mechanism in cls:
            if mechanism.value == normalized:
                return mechanism
        valid = ", ".join(mechanism.value for mechanism in cls)
        raise EntryValidationError(f"Invalid rating mechanism: {value}. Valid values are: {valid}")


@dataclass(frozen=True)
class FieldRecord:  # pylint: disable=too-many-instance-attributes
    """One data dictionary row describing a single document field."""

    field_path: str
    data_type: str | None = None
    data_name: str | None = None
    data_definition: str | None = None
    is_foreign_key: bool | None = None
    foreign_key_table: str | None = None
    foreign_key_column: str | None = None
    is_mandatory: bool | None = None
    length: int | None = None
    min_value: str | None = None
    max_value: str | None = None
    default_value: str | None = None
    allowed_values: str | None = None
    field_description: str | None = None

    def validate(self) -> None:
        if _is_blank(self.field_path):
            raise FieldValidationError("Field path is required.")
        if _is_blank(self.data_type):
            raise FieldValidationError(f"Data type is required for field: {self.field_path}")
        if self.is_foreign_key:
            if _is_blank(self.foreign_key_table):
                raise FieldValidationError(
                    "Foreign key table is required when is_foreign_key is true "
                    f"for field: {self.field_path}"
                )
            if _is_blank(self.foreign_key_column):
                raise FieldValidationError(
                    "Foreign key column is required when is_foreign_key is true "
                    f"for field: {self.field_path}"
                )

    def in_document(self, prefix: str = DEFAULT_DOCUMENT_PREFIX) -> bool:
        """Return True when the field lives inside the nested document column."""
        return self.field_path.startswith(f"{prefix}.")

    def document_path(self, prefix: str = DEFAULT_DOCUMENT_PREFIX) -> str | None:
        if not self.in_document(prefix):
            return None
        return self.field_path[len(prefix) + 1 :]


@dataclass(frozen=True)
class EntryKey:
    """Registry key: normalized model, version and mechanism."""

    model: str
    version: str
    mechanism: Mechanism

    @classmethod
    def parse(cls, model: str | None, version: str | None, mechanism: str | None) -> EntryKey:
        """Validate and normalize raw key components.

        Raises:
          EntryValidationError: If any component is blank, too long or unknown.
        """
        if _is_blank(model):
            raise EntryValidationError("Rating model cannot be null or empty.")
        assert model is not None
        if len(model.strip()) > MAX_MODEL_LENGTH:
            raise EntryValidationError(
                f"Rating model cannot be longer than {MAX_MODEL_LENGTH} characters."
            )
        if _is_blank(version):
            raise EntryValidationError("Rating model version cannot be null or empty.")
        assert version is not None
        if len(version.strip()) > MAX_VERSION_LENGTH:
            raise EntryValidationError(
                f"Rating model version cannot be longer than {MAX_VERSION_LENGTH} characters."
            )
        return cls(
            model=model.strip().upper(),
            version=version.strip(),
            mechanism=Mechanism.parse(mechanism),
        )

    @property
    def label(self) -> str:
        return f"{self.model}-{self.version}-{self.mechanism.value}"


@dataclass(frozen=True)
class Entry:
    """All field definitions for one registry key."""

    key: EntryKey
    fields: tuple[FieldRecord, ...]

    def validate(self) -> None:
        if not self.fields:
            raise EntryValidationError(f"At least one field is required for {self.key.label}.")
        for field in self.fields:
            try:
                field.validate()
            except FieldValidationError as exc:
                raise EntryValidationError(str(exc)) from exc

    def document_fields(self, prefix: str = DEFAULT_DOCUMENT_PREFIX) -> tuple[FieldRecord, ...]:
        """Fields that participate in schema synthesis, in dictionary order."""
        return tuple(field for field in self.fields if field.in_document(prefix))


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
