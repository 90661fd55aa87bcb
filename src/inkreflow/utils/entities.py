#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/utils/entities.py
"""Character reference decoding for text runs.

Only the five XML named references and numeric references are understood.
Anything else is passed through untouched, so that stray ampersands and
HTML-only names (``&nbsp;``) survive rendering verbatim.

Examples
--------
    >>> decode_entities("Fish &amp; chips &#8212; &#x263A;")
    'Fish & chips — ☺'
    >>> decode_entities("&copy; stays")
    '&copy; stays'

"""

from __future__ import annotations

import re

NAMED_ENTITIES: dict[str, str] = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

_ENTITY_PATTERN = re.compile(r"&(?:#(\d+)|#[xX]([0-9A-Fa-f]+)|(lt|gt|amp|quot|apos));")

_MAX_CODE_POINT = 0x10FFFF


def safe_char(code_point: int) -> str:
    """Return the character for ``code_point`` or an empty string if invalid.

    Values outside the Unicode range and surrogate code points have no
    character of their own and decode to nothing.
    """
    if code_point < 0 or code_point > _MAX_CODE_POINT:
        return ""
    if 0xD800 <= code_point <= 0xDFFF:
        return ""
    return chr(code_point)


def _replace(match: re.Match[str]) -> str:
    decimal, hexadecimal, name = match.groups()
    if name is not None:
        return NAMED_ENTITIES[name]
    # Cap the digit count so absurd references do not build huge integers.
    digits = decimal if decimal is not None else hexadecimal
    if len(digits) > 8:
        return ""
    return safe_char(int(digits, 10 if decimal is not None else 16))


def decode_entities(text: str) -> str:
    """Decode named and numeric character references in ``text``.

    The substitution is a single pass, so ``&amp;lt;`` decodes to ``&lt;``
    rather than ``<``.

    Parameters
    ----------
    text : str
        Raw text run taken from markup

    Returns
    -------
    str
        Text with recognized references replaced

    """
    if "&" not in text:
        return text
    return _ENTITY_PATTERN.sub(_replace, text)


__all__ = ["decode_entities", "safe_char", "NAMED_ENTITIES"]
