#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/result.py
"""Render result container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from inkreflow.justify import JustifyMap, forward_map_column, reverse_map_column
from inkreflow.spans import Span


@dataclass
class RenderResult:
    """Output of one render call.

    Parameters
    ----------
    lines : list of str
        Rendered text lines; line ``n`` of the spans is ``lines[n - 1]``
    highlights : list of Span
        Merged style spans, payload is a style id
    links : list of Span
        Merged link spans, payload is the href
    images : list of Span
        Image spans, payload is the image source
    anchors : dict of str to int
        Element id to the 1-based line on which its content begins
    justify_map : dict of int to list of WordInfo
        Word positions of every justified line; empty unless justification ran
    no_justify : set of int
        Structural lines that were exempt from justification
    centered_lines : set of int
        Title lines that were centered

    """

    lines: list[str] = field(default_factory=list)
    highlights: list[Span] = field(default_factory=list)
    links: list[Span] = field(default_factory=list)
    images: list[Span] = field(default_factory=list)
    anchors: dict[str, int] = field(default_factory=dict)
    justify_map: JustifyMap = field(default_factory=dict)
    no_justify: set[int] = field(default_factory=set)
    centered_lines: set[int] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """Whether nothing was rendered."""
        return not self.lines

    def to_text(self) -> str:
        """Join the rendered lines with newlines."""
        return "\n".join(self.lines)

    def forward_column(self, line: int, col: int) -> int:
        """Map a canonical column on ``line`` into the displayed text."""
        return forward_map_column(self.justify_map.get(line), col)

    def reverse_column(self, line: int, col: int) -> int:
        """Map a displayed column on ``line`` back to canonical coordinates."""
        return reverse_map_column(self.justify_map.get(line), col)

    def spans_on_line(self, line: int) -> list[Span]:
        """Return every highlight, link and image span on ``line``."""
        return [span for span in (*self.highlights, *self.links, *self.images) if span.line == line]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "lines": list(self.lines),
            "highlights": [span.to_dict() for span in self.highlights],
            "links": [span.to_dict() for span in self.links],
            "images": [span.to_dict() for span in self.images],
            "anchors": dict(self.anchors),
            "justify_map": {
                str(line): [info.to_dict() for info in words] for line, words in sorted(self.justify_map.items())
            },
            "no_justify": sorted(self.no_justify),
            "centered_lines": sorted(self.centered_lines),
        }


__all__ = ["RenderResult"]
