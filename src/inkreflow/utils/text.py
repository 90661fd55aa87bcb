#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/utils/text.py
"""Display-width helpers for monospaced layout.

Wrapping, table layout and justification all measure text through
:func:`display_width` so their decisions agree for multi-byte content.

Functions
---------
char_width : Column width of a single character
display_width : Column width of a text run
pad_to_width : Right-pad text with spaces to a display width

Examples
--------
    >>> display_width("abc")
    3
    >>> display_width("日本")
    4
    >>> display_width("é")
    1

"""

from __future__ import annotations

import unicodedata
from functools import lru_cache

ZERO_WIDTH_JOINER = "\u200d"

_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf", "Cc"})


@lru_cache(maxsize=4096)
def char_width(char: str) -> int:
    """Return the number of terminal columns occupied by ``char``.

    Combining marks, format characters (zero-width space, joiners) and control
    characters take no columns; East Asian Wide and Fullwidth characters take
    two; everything else takes one.
    """
    if unicodedata.category(char) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the rendered column width of ``text``.

    Characters glued to the previous one by a zero-width joiner are part of
    the same user-perceived character and add no width of their own.

    Parameters
    ----------
    text : str
        Text to measure

    Returns
    -------
    int
        Number of display columns

    """
    if text.isascii():
        return sum(1 for char in text if char >= " " and char != "\x7f")

    width = 0
    joined = False
    for char in text:
        if joined:
            joined = False
            continue
        if char == ZERO_WIDTH_JOINER:
            joined = True
            continue
        width += char_width(char)
    return width


def pad_to_width(text: str, width: int) -> str:
    """Right-pad ``text`` with spaces until it is ``width`` columns wide."""
    text_width = display_width(text)
    if text_width >= width:
        return text
    return text + " " * (width - text_width)


__all__ = ["char_width", "display_width", "pad_to_width"]
