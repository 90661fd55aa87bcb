#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/tokenizer.py
"""Lenient tag/text tokenizer for chapter markup.

The scanner walks the raw markup left to right and yields a flat stream of
text runs, opening tags and closing tags. It never validates nesting and never
fails: anything that does not look like a tag is treated as text, and
comments, doctypes and processing instructions are dropped.

Every token keeps its raw offsets so callers can slice verbatim content, which
is how ``<pre>`` blocks avoid having embedded ``<`` and ``>`` mistaken for
markup (see :meth:`MarkupScanner.consume_raw`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Literal, Optional

TokenKind = Literal["text", "open", "close"]

_TAG_PATTERN = re.compile(r"<[^>]+>")
_TAG_NAME_PATTERN = re.compile(r"^/?([A-Za-z][A-Za-z0-9]*)")

_attribute_patterns: dict[str, re.Pattern[str]] = {}


@dataclass(frozen=True)
class Token:
    """A single scanner event.

    Attributes
    ----------
    kind : {"text", "open", "close"}
        Event type
    name : str
        Lower-cased tag name; empty for text
    raw : str
        Text run, or the tag's inner content without the angle brackets
    start, end : int
        Offsets of the token in the markup (end exclusive)

    """

    kind: TokenKind
    name: str
    raw: str
    start: int
    end: int

    @property
    def self_closing(self) -> bool:
        """Whether the tag was written as ``<tag ... />``."""
        return self.kind == "open" and self.raw.rstrip().endswith("/")


def get_attribute(raw_tag: str, name: str) -> Optional[str]:
    """Return the quoted value of attribute ``name`` in a raw tag, if present.

    Only complete attribute names match, so ``id`` does not pick up
    ``data-id``. Both single and double quotes are accepted.

    Examples
    --------
        >>> get_attribute('a href="#n1" class="ref"', "href")
        '#n1'
        >>> get_attribute('div data-id="x"', "id") is None
        True

    """
    pattern = _attribute_patterns.get(name)
    if pattern is None:
        pattern = re.compile(
            r"(?:^|\s)" + re.escape(name) + r"""\s*=\s*(?:"([^"]*)"|'([^']*)')""",
            re.IGNORECASE,
        )
        _attribute_patterns[name] = pattern
    match = pattern.search(raw_tag)
    if match is None:
        return None
    value = match.group(1) if match.group(1) is not None else match.group(2)
    return value


class MarkupScanner:
    """Incremental scanner over a markup string.

    Parameters
    ----------
    markup : str
        Markup to scan

    Examples
    --------
        >>> [(t.kind, t.name) for t in MarkupScanner("<p>Hi</p>")]
        [('open', 'p'), ('text', ''), ('close', 'p')]

    """

    def __init__(self, markup: str):
        """Initialize the scanner at the start of ``markup``."""
        self.markup = markup
        self.pos = 0

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens until the markup is exhausted."""
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    def next_token(self) -> Optional[Token]:
        """Return the next token, or ``None`` at the end of input."""
        markup = self.markup
        while self.pos < len(markup):
            start = self.pos

            if markup.startswith("<!--", start):
                close = markup.find("-->", start + 4)
                self.pos = len(markup) if close == -1 else close + 3
                continue

            match = _TAG_PATTERN.search(markup, start)
            if match is None:
                self.pos = len(markup)
                return Token("text", "", markup[start:], start, len(markup))

            if match.start() > start:
                self.pos = match.start()
                return Token("text", "", markup[start : match.start()], start, match.start())

            self.pos = match.end()
            inner = markup[match.start() + 1 : match.end() - 1]
            name_match = _TAG_NAME_PATTERN.match(inner)
            if name_match is None:
                if inner.startswith(("!", "?")):
                    # <!DOCTYPE>, <![CDATA[ ]]>, <?xml ?>
                    continue
                # Not a tag at all ("a < b > c"); keep it as text
                return Token("text", "", markup[match.start() : match.end()], match.start(), match.end())
            kind: TokenKind = "close" if inner.startswith("/") else "open"
            return Token(kind, name_match.group(1).lower(), inner, match.start(), match.end())

        return None

    def consume_raw(self, tag: str) -> Optional[str]:
        """Slice raw content up to the closing ``</tag>`` and skip past it.

        The search for the closing tag is case-insensitive. When no closing
        tag exists the scanner position is left untouched and ``None`` is
        returned so the caller can fall back to ordinary tokenizing.
        """
        closing = re.compile(r"</\s*" + re.escape(tag) + r"\s*>", re.IGNORECASE)
        match = closing.search(self.markup, self.pos)
        if match is None:
            return None
        content = self.markup[self.pos : match.start()]
        self.pos = match.end()
        return content


def iter_tokens(markup: str) -> Iterator[Token]:
    """Tokenize ``markup`` in one go (convenience wrapper)."""
    return iter(MarkupScanner(markup))


__all__ = ["Token", "TokenKind", "MarkupScanner", "get_attribute", "iter_tokens"]
