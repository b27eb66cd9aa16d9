"""Shared template generation constants."""

from __future__ import annotations

LISTS_SHEET_NAME = "Lists"
TEMPLATE_TITLE = "Data Dictionary"

FLAG_VALUES: tuple[str, ...] = ("Y", "N")
VALIDATED_ROW_LIMIT = 5000
