"""Template generation exports."""

from .constants import FLAG_VALUES, LISTS_SHEET_NAME, TEMPLATE_TITLE
from .template_workbook_builder import generate_dictionary_template

__all__ = [
    "FLAG_VALUES",
    "LISTS_SHEET_NAME",
    "TEMPLATE_TITLE",
    "generate_dictionary_template",
]
