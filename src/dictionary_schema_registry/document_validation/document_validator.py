"""Validation of override documents against registered schemas."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError, ValidationError

LOGGER = logging.getLogger(__name__)

UNKNOWN_SCHEMA_ID = "unknown"


class ValidationSeverity(str, Enum):
    """Severity of a validation issue."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class ValidationIssue:
    """One violation reported by the validator."""

    path: str
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    keyword: str | None = None
    schema_path: str | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one document."""

    valid: bool
    schema_id: str
    issues: tuple[ValidationIssue, ...] = ()
    message: str | None = None

    @property
    def errors(self) -> tuple[ValidationIssue, ...]:
        return tuple(issue for issue in self.issues if issue.severity is ValidationSeverity.ERROR)

    @property
    def warnings(self) -> tuple[ValidationIssue, ...]:
        return tuple(
            issue for issue in self.issues if issue.severity is ValidationSeverity.WARNING
        )

    def format_issues(self) -> str:
        if not self.issues:
            return "No validation errors"
        lines = [f"Validation failed with {len(self.issues)} error(s):"]
        lines.extend(
            f"  {index}. [{issue.severity.value}] {issue.path}: {issue.message}"
            for index, issue in enumerate(self.issues, start=1)
        )
        return "\n".join(lines)


class DocumentValidationError(Exception):
    """Raised when a document does not satisfy its schema."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.message or result.format_issues())
        self.result = result


def validate_document(schema: Mapping[str, Any], document: Any) -> ValidationResult:
    """Validate ``document`` against a JSON Schema 2020-12 ``schema``.

    An unusable schema is reported as a failed result with an ``internal-error``
    issue rather than raised.
    """
    schema_id = str(schema.get("$id") or UNKNOWN_SCHEMA_ID)
    LOGGER.debug("Validating document against %s", schema_id)
    try:
        Draft202012Validator.check_schema(schema)
        validator = Draft202012Validator(
            schema, format_checker=Draft202012Validator.FORMAT_CHECKER
        )
        errors = sorted(validator.iter_errors(document), key=_error_sort_key)
    except SchemaError as exc:
        LOGGER.error("Schema %s is not a valid JSON Schema: %s", schema_id, exc.message)
        issue = ValidationIssue(
            path="$",
            message=f"Schema validation failed due to internal error: {exc.message}",
            keyword="internal-error",
        )
        return ValidationResult(
            valid=False,
            schema_id=schema_id,
            issues=(issue,),
            message="Internal validation error",
        )

    if not errors:
        return ValidationResult(valid=True, schema_id=schema_id, message="Validation passed")

    issues = tuple(_to_issue(error) for error in errors)
    LOGGER.warning("JSON Schema validation failed with %d error(s)", len(issues))
    return ValidationResult(
        valid=False,
        schema_id=schema_id,
        issues=issues,
        message=f"Validation failed with {len(issues)} error(s)",
    )


def ensure_valid_document(schema: Mapping[str, Any], document: Any) -> ValidationResult:
    """Validate and raise ``DocumentValidationError`` when the document is invalid."""
    result = validate_document(schema, document)
    if not result.valid:
        raise DocumentValidationError(result)
    return result


def render_document_path(parts: Any) -> str:
    """Render path parts as ``$.a.b[0]``."""
    rendered = "$"
    for part in parts:
        rendered += f"[{part}]" if isinstance(part, int) else f".{part}"
    return rendered


def _to_issue(error: ValidationError) -> ValidationIssue:
    schema_path = "/".join(str(part) for part in error.absolute_schema_path)
    return ValidationIssue(
        path=render_document_path(error.absolute_path),
        message=error.message,
        keyword=str(error.validator) if error.validator is not None else None,
        schema_path=f"#/{schema_path}" if schema_path else "#",
    )


def _error_sort_key(error: ValidationError) -> tuple[str, str]:
    return (render_document_path(error.absolute_path), error.message)
