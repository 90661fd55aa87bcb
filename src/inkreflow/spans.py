#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/spans.py
"""Positional annotations over rendered lines.

A :class:`Span` marks the half-open column range ``[start, end)`` of a
1-based line. Its ``value`` is a style id for highlights, an href for links
and an image source for images. Columns are string indices into the rendered
line, in whichever coordinate space (canonical or justified) was current
when the span was produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass
class Span:
    """A column range on one rendered line carrying a payload."""

    line: int
    start: int
    end: int
    value: str

    def as_tuple(self) -> tuple[int, int, int, str]:
        """Return ``(line, start, end, value)``."""
        return (self.line, self.start, self.end, self.value)

    def to_dict(self) -> dict[str, int | str]:
        """Return a JSON-serializable mapping."""
        return {"line": self.line, "start": self.start, "end": self.end, "value": self.value}


def merge_spans(spans: Iterable[Span]) -> list[Span]:
    """Coalesce same-payload spans on the same line that touch or overlap.

    Two spans merge when they share line and payload and the earlier one ends
    no more than one column before the later one starts, i.e. they are
    separated by at most a single space. Different payloads never merge, even
    when adjacent.

    Parameters
    ----------
    spans : iterable of Span
        Raw spans in emission order

    Returns
    -------
    list of Span
        New span objects sorted by ``(line, start)``; the inputs are not mutated

    """
    ordered = sorted(spans, key=lambda span: (span.line, span.start, span.end))
    merged: list[Span] = []
    open_spans: dict[tuple[int, str], Span] = {}

    for span in ordered:
        key = (span.line, span.value)
        current = open_spans.get(key)
        if current is not None and current.end >= span.start - 1:
            current.end = max(current.end, span.end)
            continue
        fresh = Span(span.line, span.start, span.end, span.value)
        merged.append(fresh)
        open_spans[key] = fresh

    return merged


__all__ = ["Span", "merge_spans"]
