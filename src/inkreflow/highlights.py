#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/highlights.py
"""User highlights across re-renders.

User highlights are stored in canonical coordinates (the unjustified layout)
together with their text and a little surrounding context. When a chapter is
displayed justified, stored columns are forward-mapped onto the display with
:func:`project_highlight`; a selection made on the justified display is
reverse-mapped into storage coordinates with :func:`store_highlight`.

When the layout changed more substantially (a different width, say), stored
line numbers are meaningless and :func:`find_text_position` re-anchors the
highlight by searching for its whitespace-normalized text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, NamedTuple, Optional, Sequence

from inkreflow.constants import HIGHLIGHT_CONTEXT_CHARS
from inkreflow.justify import forward_map_column, reverse_map_column
from inkreflow.result import RenderResult

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass
class UserHighlight:
    """A highlight made by the reader, in canonical coordinates.

    Lines are 1-based; columns are 0-based with ``end_col`` exclusive.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    color: str = "yellow"
    text: str = ""
    note: str = ""
    context_before: str = ""
    context_after: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserHighlight":
        """Build a highlight from :meth:`to_dict` output."""
        return cls(
            start_line=int(data["start_line"]),
            start_col=int(data["start_col"]),
            end_line=int(data["end_line"]),
            end_col=int(data["end_col"]),
            color=str(data.get("color", "yellow")),
            text=str(data.get("text", "")),
            note=str(data.get("note", "")),
            context_before=str(data.get("context_before", "")),
            context_after=str(data.get("context_after", "")),
        )


class TextPosition(NamedTuple):
    """A located range: 1-based lines, 0-based columns, exclusive end."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space."""
    return _WHITESPACE_RUN.sub(" ", text)


def offset_to_line_col(lines: Sequence[str], offset: int) -> tuple[int, int]:
    """Convert an offset into ``"\\n".join(lines)`` to ``(line, col)``.

    Offsets past the end land at the end of the last line.
    """
    if not lines:
        return 1, 0
    current = 0
    for index, line in enumerate(lines, start=1):
        line_len = len(line) + 1
        if current + line_len > offset:
            return index, offset - current
        current += line_len
    return len(lines), len(lines[-1])


def line_col_to_offset(lines: Sequence[str], line: int, col: int) -> int:
    """Convert ``(line, col)`` to an offset into ``"\\n".join(lines)``."""
    if not lines:
        return 0
    offset = sum(len(text) + 1 for text in lines[: max(0, min(line - 1, len(lines)))])
    return offset + col


def _normalized_index(full_text: str) -> tuple[str, list[int]]:
    """Normalize whitespace and map each normalized index to its source index."""
    chars = []
    positions = []
    in_space = False
    for index, char in enumerate(full_text):
        if char.isspace():
            if in_space:
                continue
            in_space = True
            chars.append(" ")
        else:
            in_space = False
            chars.append(char)
        positions.append(index)
    return "".join(chars), positions


def find_text_position(
    lines: Sequence[str],
    text: str,
    context_before: str = "",
    context_after: str = "",
    allow_fallback: bool = True,
) -> Optional[TextPosition]:
    """Locate ``text`` in the rendered lines.

    The search runs on whitespace-normalized text, so a highlight still
    matches after the paragraph was re-wrapped or justified. The surrounding
    context disambiguates repeated phrases; with ``allow_fallback`` the text is
    searched alone when the context no longer matches.

    Returns
    -------
    TextPosition or None
        The located range, or None when the text is not found.

    """
    normalized_text = normalize_whitespace(text or "")
    if not normalized_text or not lines:
        return None

    full_text = "\n".join(lines)
    normalized_full, positions = _normalized_index(full_text)
    before = normalize_whitespace(context_before or "")
    after = normalize_whitespace(context_after or "")

    start: Optional[int] = None
    match = normalized_full.find(before + normalized_text + after)
    if match != -1:
        start = match + len(before)
    elif allow_fallback:
        match = normalized_full.find(normalized_text)
        if match != -1:
            start = match

    if start is None:
        return None

    end = start + len(normalized_text) - 1
    start_line, start_col = offset_to_line_col(lines, positions[start])
    end_line, end_col = offset_to_line_col(lines, positions[end] + 1)
    return TextPosition(start_line, start_col, end_line, end_col)


def project_highlight(highlight: UserHighlight, result: RenderResult) -> Optional[TextPosition]:
    """Map a stored highlight onto the displayed (possibly justified) lines.

    Columns are forward-mapped through the justify map of their line and
    clamped to the line length.

    Returns
    -------
    TextPosition or None
        Display range, or None when the stored lines no longer exist.

    """
    line_count = len(result.lines)
    if not (1 <= highlight.start_line <= line_count and 1 <= highlight.end_line <= line_count):
        logger.debug(f"Highlight lines {highlight.start_line}-{highlight.end_line} outside 1-{line_count}")
        return None

    start_col = forward_map_column(result.justify_map.get(highlight.start_line), highlight.start_col)
    end_col = forward_map_column(result.justify_map.get(highlight.end_line), highlight.end_col)
    start_col = min(start_col, len(result.lines[highlight.start_line - 1]))
    end_col = min(end_col, len(result.lines[highlight.end_line - 1]))
    return TextPosition(highlight.start_line, start_col, highlight.end_line, end_col)


def store_highlight(
    result: RenderResult,
    start_line: int,
    start_col: int,
    end_line: int,
    end_col: int,
    color: str = "yellow",
    note: str = "",
    context_chars: int = HIGHLIGHT_CONTEXT_CHARS,
) -> UserHighlight:
    """Turn a selection on the displayed lines into a storable highlight.

    Display columns are reverse-mapped into canonical coordinates. The
    selected text and ``context_chars`` characters on either side are captured
    from the displayed text for later re-anchoring.
    """
    display_lines = result.lines
    start_offset = line_col_to_offset(display_lines, start_line, start_col)
    end_offset = line_col_to_offset(display_lines, end_line, end_col)
    full_text = "\n".join(display_lines)

    return UserHighlight(
        start_line=start_line,
        start_col=reverse_map_column(result.justify_map.get(start_line), start_col),
        end_line=end_line,
        end_col=reverse_map_column(result.justify_map.get(end_line), end_col),
        color=color,
        text=full_text[start_offset:end_offset],
        note=note,
        context_before=full_text[max(0, start_offset - context_chars) : start_offset],
        context_after=full_text[end_offset : end_offset + context_chars],
    )


__all__ = [
    "UserHighlight",
    "TextPosition",
    "normalize_whitespace",
    "offset_to_line_col",
    "line_col_to_offset",
    "find_text_position",
    "project_highlight",
    "store_highlight",
]
