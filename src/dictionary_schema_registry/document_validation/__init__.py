"""Document validation exports."""

from .document_validator import (
    DocumentValidationError,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
    ensure_valid_document,
    render_document_path,
    validate_document,
)

__all__ = [
    "DocumentValidationError",
    "ValidationIssue",
    "ValidationResult",
    "ValidationSeverity",
    "ensure_valid_document",
    "render_document_path",
    "validate_document",
]
