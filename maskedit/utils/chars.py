"""Unicode character category helpers."""

from __future__ import annotations

import unicodedata

SPACE = " "
_PRINTABLE_PREFIXES = ("L", "N", "P", "S")


def is_printable_char(ch: str) -> bool:
    """Letters, numbers, punctuation, symbols and space separators only."""

    category = unicodedata.category(ch)
    return category.startswith(_PRINTABLE_PREFIXES) or category == "Zs"


def is_ascii(ch: str) -> bool:
    return ord(ch) <= 0x7F


def is_digit(ch: str) -> bool:
    return unicodedata.category(ch) == "Nd"


def is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")
