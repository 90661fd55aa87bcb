#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/justify.py
"""Full justification and the canonical/justified column map.

Justification widens the gaps between words of lines that nearly fill the
width so that they end exactly at ``max_width``. Every justified line gets a
list of :class:`WordInfo` entries recording where each word sat before
(canonical coordinates) and after (justified coordinates). That list is the
bidirectional map used to move columns between the two spaces:

* :func:`forward_map_column` translates a canonical column (as stored for a
  user highlight) into the justified display.
* :func:`reverse_map_column` translates a justified display column (a cursor
  or selection) back into canonical coordinates.

For every word, forward-mapping its canonical start and end yields its
justified start and end, and reverse-mapping those yields the canonical
values again. Columns strictly inside a word keep their offset within the
word, so highlights never drift onto neighbouring words.

Examples
--------
    >>> lines = ["aa bb cc"]
    >>> jmap = apply_justification(lines, [], [], [], set(), 10, threshold=0.8)
    >>> lines[0]
    'aa  bb  cc'
    >>> forward_map_column(jmap[1], 3)
    4

"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from inkreflow.constants import DEFAULT_JUSTIFY_THRESHOLD
from inkreflow.spans import Span
from inkreflow.utils.text import display_width

logger = logging.getLogger(__name__)


@dataclass
class WordInfo:
    """Position of one word of a justified line in both coordinate spaces.

    Ranges are half-open string-index ranges: ``[orig_start, orig_end)`` in
    the canonical line and ``[new_start, new_end)`` in the justified line.
    """

    word: str
    orig_start: int
    orig_end: int
    new_start: int = 0
    new_end: int = 0

    def to_dict(self) -> dict[str, int | str]:
        """Return a JSON-serializable mapping."""
        return {
            "word": self.word,
            "orig_start": self.orig_start,
            "orig_end": self.orig_end,
            "new_start": self.new_start,
            "new_end": self.new_end,
        }


JustifyMap = dict[int, list[WordInfo]]


def split_words(line: str) -> list[WordInfo]:
    """Split ``line`` on spaces into words with their canonical ranges."""
    words = []
    pos = 0
    length = len(line)
    while pos < length:
        while pos < length and line[pos] == " ":
            pos += 1
        if pos >= length:
            break
        start = pos
        while pos < length and line[pos] != " ":
            pos += 1
        words.append(WordInfo(line[start:pos], start, pos))
    return words


def justify_line(line: str, max_width: int) -> Optional[tuple[str, list[WordInfo]]]:
    """Spread the words of ``line`` so its display width becomes ``max_width``.

    Leading whitespace is kept verbatim. The spaces needed are divided evenly
    over the gaps between words; the remainder goes one space each to the
    leftmost gaps.

    Returns
    -------
    tuple of (str, list of WordInfo) or None
        The justified line and its word map, or None when the line has fewer
        than two words or is already at least ``max_width`` wide.

    """
    words = split_words(line)
    if len(words) < 2:
        return None

    leading = line[: words[0].orig_start]
    content_width = display_width(leading) + sum(display_width(info.word) for info in words)
    gaps = len(words) - 1
    total_spaces = max_width - content_width
    if total_spaces < gaps or display_width(line) >= max_width:
        return None

    base, remainder = divmod(total_spaces, gaps)

    parts = [leading]
    cursor = len(leading)
    for index, info in enumerate(words):
        if index > 0:
            gap = base + (1 if index <= remainder else 0)
            parts.append(" " * gap)
            cursor += gap
        info.new_start = cursor
        parts.append(info.word)
        cursor += len(info.word)
        info.new_end = cursor

    return "".join(parts), words


def forward_map_column(word_info: Optional[Sequence[WordInfo]], col: int) -> int:
    """Translate a canonical column into the justified line.

    A column inside a word keeps its offset from the word start; a column at a
    word's end maps to the word's justified end. A column in the space before a
    word maps to that word's justified start, except before the first word,
    where it is returned unchanged. Columns past the last word map to the end
    of the justified line. Without a map the column is returned as is.
    """
    if not word_info:
        return col

    for info in word_info:
        if info.orig_start <= col < info.orig_end:
            return info.new_start + (col - info.orig_start)
        if col == info.orig_end:
            return info.new_end

    for index, info in enumerate(word_info):
        if col < info.orig_start:
            return col if index == 0 else info.new_start

    return word_info[-1].new_end


def reverse_map_column(word_info: Optional[Sequence[WordInfo]], col: int) -> int:
    """Translate a justified column back into canonical coordinates.

    Mirrors :func:`forward_map_column`, except that a column in the widened
    space between two words snaps back to the end of the preceding word, so a
    cursor sitting in a gap never lands inside the next word.
    """
    if not word_info:
        return col

    for info in word_info:
        if info.new_start <= col < info.new_end:
            return info.orig_start + (col - info.new_start)
        if col == info.new_end:
            return info.orig_end

    for index, info in enumerate(word_info):
        if col < info.new_start:
            return col if index == 0 else word_info[index - 1].orig_end

    return word_info[-1].orig_end


def _group_by_line(spans: Iterable[Span]) -> dict[int, list[Span]]:
    grouped: dict[int, list[Span]] = defaultdict(list)
    for span in spans:
        grouped[span.line].append(span)
    return grouped


def is_justifiable(line: str, max_width: int, threshold: float = DEFAULT_JUSTIFY_THRESHOLD) -> bool:
    """Whether a line's width lies in ``[floor(threshold * max_width), max_width)``."""
    width = display_width(line)
    if width == 0:
        return False
    return math.floor(max_width * threshold) <= width < max_width


def apply_justification(
    lines: list[str],
    highlights: list[Span],
    links: list[Span],
    images: list[Span],
    no_justify: set[int],
    max_width: int,
    threshold: float = DEFAULT_JUSTIFY_THRESHOLD,
) -> JustifyMap:
    """Justify eligible lines in place and remap the spans that sit on them.

    A line is eligible when it is not listed in ``no_justify`` (structural
    lines: headings, lists, quotes, tables, preformatted text, titles) and its
    display width lies in ``[floor(threshold * max_width), max_width)``.
    Eligible lines with fewer than two words are left alone.

    Parameters
    ----------
    lines : list of str
        Rendered lines; eligible entries are replaced
    highlights, links, images : list of Span
        Spans whose columns are rewritten through :func:`forward_map_column`
    no_justify : set of int
        1-based indices of lines that must not be justified
    max_width : int
        Target width
    threshold : float, default 0.90
        Minimum fill ratio of an eligible line

    Returns
    -------
    dict of int to list of WordInfo
        Word map for every line that was justified, keyed by 1-based index

    """
    justify_map: JustifyMap = {}
    spans_by_line = _group_by_line([*highlights, *links, *images])

    for index, line in enumerate(lines, start=1):
        if index in no_justify or not is_justifiable(line, max_width, threshold):
            continue

        justified = justify_line(line, max_width)
        if justified is None:
            continue

        new_line, word_info = justified
        lines[index - 1] = new_line
        justify_map[index] = word_info

        for span in spans_by_line.get(index, ()):
            span.start = forward_map_column(word_info, span.start)
            span.end = forward_map_column(word_info, span.end)

    logger.debug("Justified %d of %d lines at width %d", len(justify_map), len(lines), max_width)
    return justify_map


__all__ = [
    "WordInfo",
    "JustifyMap",
    "split_words",
    "justify_line",
    "is_justifiable",
    "forward_map_column",
    "reverse_map_column",
    "apply_justification",
]
