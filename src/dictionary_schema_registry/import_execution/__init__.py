"""Import execution domain exports."""

from .dictionary_import_use_case import (
    DictionaryImportError,
    build_change_notes,
    build_description,
    execute_dictionary_import,
)
from .import_contracts import (
    EntryImportResult,
    EntryImportStatus,
    ImportOutcome,
    ImportRequest,
)

__all__ = [
    "ImportRequest",
    "ImportOutcome",
    "EntryImportResult",
    "EntryImportStatus",
    "DictionaryImportError",
    "build_change_notes",
    "build_description",
    "execute_dictionary_import",
]
