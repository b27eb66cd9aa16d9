"""Cell reference decoding helpers."""

from __future__ import annotations

import re

_REFERENCE_PREFIX = re.compile(r"^\s*([A-Za-z]+)")


def column_index(reference: str) -> int:
    """Return the 0-based column index encoded by a cell reference or column letters.

    The letter prefix is read as a bijective base-26 number: ``A`` -> 0,
    ``Z`` -> 25, ``AA`` -> 26, ``AD`` -> 29. Any row digits after the letters
    are ignored, so ``"AD12"`` and ``"AD"`` decode identically.

    Raises:
      ValueError: If the reference does not start with column letters.
    """
    match = _REFERENCE_PREFIX.match(reference or "")
    if match is None:
        raise ValueError(f"Cell reference has no column letters: {reference!r}")
    index = 0
    for letter in match.group(1).upper():
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def column_letters(index: int) -> str:
    """Return the column letters for a 0-based column index."""
    if index < 0:
        raise ValueError(f"Column index must not be negative: {index}")
    letters = ""
    remaining = index + 1
    while remaining:
        remaining, offset = divmod(remaining - 1, 26)
        letters = chr(ord("A") + offset) + letters
    return letters
