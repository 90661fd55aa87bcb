#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/notes.py
"""Wrapping for margin notes attached to user highlights."""

from __future__ import annotations

from typing import Optional

from inkreflow.constants import NOTE_JUSTIFY_THRESHOLD, NOTE_SHORT_FACTOR
from inkreflow.utils.text import char_width, display_width


def _hard_break(word: str, width: int) -> str:
    """Cut ``word`` to at most ``width`` display columns."""
    kept = []
    used = 0
    for char in word:
        char_cols = char_width(char)
        if used + char_cols > width:
            break
        kept.append(char)
        used += char_cols
    return "".join(kept)


def _justify_words(words: list[str], width: int) -> str:
    text = " ".join(words)
    text_width = display_width(text)
    extra = width - text_width
    if extra <= 0 or text_width < width * NOTE_JUSTIFY_THRESHOLD:
        return text

    per_gap, remainder = divmod(extra, len(words) - 1)
    parts = []
    for index, word in enumerate(words):
        parts.append(word)
        if index < len(words) - 1:
            parts.append(" " * (1 + per_gap + (1 if index < remainder else 0)))
    return "".join(parts)


def wrap_note_text(note: Optional[str], max_width: int) -> list[str]:
    """Wrap a note to ``max_width`` columns for display in the margin.

    Words wider than the margin are cut to fit. Notes longer than one and a
    half margin widths are justified: every line except the last, holding at
    least two words and at least 85% full, is padded out to ``max_width``.

    Examples
    --------
        >>> wrap_note_text("a short note", 20)
        ['a short note']
        >>> wrap_note_text("", 20)
        []

    """
    if not note:
        return []
    max_width = max(1, max_width)

    wrapped: list[list[str]] = []
    current: list[str] = []
    for word in note.split():
        candidate = " ".join([*current, word])
        if display_width(candidate) <= max_width:
            current.append(word)
        elif current:
            wrapped.append(current)
            current = [word] if display_width(word) <= max_width else [_hard_break(word, max_width)]
        else:
            wrapped.append([_hard_break(word, max_width)])
    if current:
        wrapped.append(current)

    is_short = len(note) < max_width * NOTE_SHORT_FACTOR
    lines = []
    for index, words in enumerate(wrapped):
        is_last = index == len(wrapped) - 1
        if is_short or is_last or len(words) == 1:
            lines.append(" ".join(words))
        else:
            lines.append(_justify_words(words, max_width))
    return lines


__all__ = ["wrap_note_text"]
