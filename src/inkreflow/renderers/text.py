#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/renderers/text.py
"""Markup to wrapped text lines.

The :class:`TextRenderer` walks chapter markup once, left to right, and builds
word-wrapped lines with structural indentation for lists, blockquotes,
definition lists, tables, preformatted blocks, headings and titles. Style,
link and image spans are emitted in lockstep with word placement, so their
columns always refer to the line being built.

After the scan, spans are merged and, when requested, eligible lines are
justified (see :mod:`inkreflow.justify`).

Examples
--------
    >>> renderer = TextRenderer(RenderOptions(max_width=40))
    >>> result = renderer.render("<p>Hello <b>world</b></p>")
    >>> result.lines
    ['Hello world']
    >>> result.highlights[0].as_tuple()
    (1, 6, 11, 'bold')

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from inkreflow.constants import (
    BLOCK_TAGS,
    BULLET,
    INLINE_CODE_MARK,
    HEADING_TAGS,
    QUOTE_BAR,
    RAW_TEXT_TAGS,
    RULE_CHAR,
    STYLE_CODE,
    STYLE_HORIZONTAL_RULE,
    STYLE_IMAGE,
    STYLE_LINK,
    STYLE_LIST_ITEM,
    STYLE_TITLE,
    TABLE_TAGS,
    TAG_STYLES,
    VOID_TAGS,
    ListKind,
)
from inkreflow.justify import JustifyMap, apply_justification
from inkreflow.options import RenderOptions
from inkreflow.renderers.table import TableState, render_table
from inkreflow.result import RenderResult
from inkreflow.spans import Span, merge_spans
from inkreflow.styles import (
    ClassStyle,
    ClassStyleLookup,
    StyleFrame,
    TagStyle,
    lookup_class_style,
    pop_tag_style,
)
from inkreflow.tokenizer import MarkupScanner, Token, get_attribute
from inkreflow.utils.entities import decode_entities
from inkreflow.utils.text import display_width

logger = logging.getLogger(__name__)

_INNER_TAG_PATTERN = re.compile(r"</?[A-Za-z][^>]*>")
# ASCII whitespace only; U+00A0 keeps words together
_WHITESPACE_PATTERN = re.compile(r"[ \t\n\r\f\v]+")


@dataclass
class ListFrame:
    """One level of the list stack."""

    kind: ListKind
    counter: int = 0

    def next_marker(self) -> str:
        """Advance the counter and return the marker for the next item."""
        self.counter += 1
        return BULLET if self.kind == "unordered" else f"{self.counter}."


@dataclass
class RenderState:
    """Mutable context of a single render call.

    Created fresh by :meth:`TextRenderer.render` and discarded once the result
    has been assembled.
    """

    max_width: int
    class_styles: Optional[ClassStyleLookup] = None
    lines: list[str] = field(default_factory=list)
    current_line: str = ""
    line_start_indent: Optional[str] = None
    has_words: bool = False
    pending_space: bool = False
    prefix_pending: bool = False
    style_stack: list[StyleFrame] = field(default_factory=list)
    list_stack: list[ListFrame] = field(default_factory=list)
    blockquote_depth: int = 0
    in_pre: bool = False
    in_dd: bool = False
    in_heading: bool = False
    in_title: bool = False
    in_head: bool = False
    table: TableState = field(default_factory=TableState)
    highlights: list[Span] = field(default_factory=list)
    links: list[Span] = field(default_factory=list)
    images: list[Span] = field(default_factory=list)
    anchors: dict[str, int] = field(default_factory=dict)
    no_justify: set[int] = field(default_factory=set)
    centered_lines: set[int] = field(default_factory=set)

    @property
    def next_line_number(self) -> int:
        """1-based index the line being built will receive."""
        return len(self.lines) + 1

    @property
    def is_structural(self) -> bool:
        """Whether lines flushed now are exempt from justification."""
        return (
            self.in_heading
            or self.in_pre
            or bool(self.list_stack)
            or self.in_dd
            or self.blockquote_depth > 0
            or self.in_title
            or self.table.in_table
        )


class TextRenderer:
    """Render markup into wrapped lines plus positional annotations.

    Parameters
    ----------
    options : RenderOptions, optional
        Layout configuration; defaults to ``RenderOptions()``
    class_styles : mapping, optional
        Resolved ``class name -> StyleDescriptor`` lookup

    """

    def __init__(self, options: Optional[RenderOptions] = None, class_styles: Optional[ClassStyleLookup] = None):
        """Store the configuration; state is created per render call."""
        self.options = options or RenderOptions()
        self.class_styles = class_styles
        self.state = RenderState(max_width=self.options.effective_width)
        self._scanner: Optional[MarkupScanner] = None

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(self, markup: Optional[str]) -> RenderResult:
        """Render ``markup`` and return lines, spans, anchors and the justify map."""
        if self.options.max_width < 1:
            logger.warning("max_width %d is below 1; clamping to 1", self.options.max_width)

        self.state = RenderState(max_width=self.options.effective_width, class_styles=self.class_styles)
        if not markup:
            return RenderResult()

        self._scanner = MarkupScanner(markup)
        for token in self._scanner:
            if token.kind == "text":
                self._handle_text(token.raw)
            elif token.kind == "open":
                self._handle_open(token)
            else:
                self._handle_close(token.name)

        self._finish()
        return self._build_result()

    def _finish(self) -> None:
        state = self.state
        if state.table.in_table:
            logger.debug("Unterminated table at end of input; rendering collected cells")
            state.table.finish_row()
            self._emit_table()
        self._flush()
        while state.lines and state.lines[-1] == "":
            state.lines.pop()

    def _build_result(self) -> RenderResult:
        state = self.state
        line_count = len(state.lines)
        anchors = {name: max(1, min(line, line_count)) for name, line in state.anchors.items()}

        highlights = merge_spans(state.highlights)
        links = merge_spans(state.links)
        images = merge_spans(state.images)

        justify_map: JustifyMap = {}
        if self.options.justify:
            justify_map = apply_justification(
                state.lines,
                highlights,
                links,
                images,
                state.no_justify,
                state.max_width,
                self.options.justify_threshold,
            )

        return RenderResult(
            lines=state.lines,
            highlights=highlights,
            links=links,
            images=images,
            anchors=anchors,
            justify_map=justify_map,
            no_justify={line for line in state.no_justify if line <= line_count},
            centered_lines={line for line in state.centered_lines if line <= line_count},
        )

    # ------------------------------------------------------------------
    # Line management
    # ------------------------------------------------------------------

    def get_indent(self, list_depth: Optional[int] = None) -> str:
        """Return the structural indent for the current nesting state.

        Parameters
        ----------
        list_depth : int, optional
            List depth to indent for; defaults to the current depth. List
            markers sit one level shallower than their item text.

        """
        state = self.state
        options = self.options
        depth = len(state.list_stack) if list_depth is None else list_depth

        indent = ""
        if state.blockquote_depth > 0:
            indent += f"{QUOTE_BAR} " * state.blockquote_depth + " " * (options.indent_size - 2)
        indent += " " * (options.list_indent * depth)
        if state.in_dd:
            indent += " " * options.indent_size
        return indent

    def _flush(self, keep_indent: bool = False) -> None:
        """Move the in-progress line to the output."""
        state = self.state
        line = state.current_line.rstrip()
        if line:
            line_no = state.next_line_number
            if state.in_title:
                line = self._center_line(line, line_no)
            state.lines.append(line)
            if state.is_structural:
                state.no_justify.add(line_no)

        state.current_line = ""
        state.has_words = False
        state.pending_space = False
        state.prefix_pending = False
        if not keep_indent:
            state.line_start_indent = None

    def _center_line(self, line: str, line_no: int) -> str:
        state = self.state
        width = display_width(line)
        if width < state.max_width:
            pad = (state.max_width - width) // 2
            if pad:
                line = " " * pad + line
                for span in (*state.highlights, *state.links, *state.images):
                    if span.line == line_no:
                        span.start += pad
                        span.end += pad
        state.highlights.append(Span(line_no, 0, len(line), STYLE_TITLE))
        state.centered_lines.add(line_no)
        return line

    def _separate(self) -> None:
        """End the current line and ensure paragraph spacing before the next one."""
        self._flush()
        state = self.state
        if not state.lines:
            return
        trailing = 0
        for line in reversed(state.lines):
            if line:
                break
            trailing += 1
        for _ in range(self.options.paragraph_spacing - trailing):
            state.lines.append("")

    def _line_break(self) -> None:
        state = self.state
        if state.current_line:
            self._flush(keep_indent=True)
        elif state.lines and state.lines[-1] != "":
            state.lines.append("")

    def _open_block(self) -> None:
        state = self.state
        if state.prefix_pending and not state.has_words:
            return
        if state.list_stack or state.in_dd:
            self._flush()
        else:
            self._separate()

    def _append_line(self, text: str, structural: bool = True) -> int:
        """Append a finished line directly, bypassing wrapping."""
        state = self.state
        line_no = state.next_line_number
        state.lines.append(text)
        if structural:
            state.no_justify.add(line_no)
        return line_no

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _handle_text(self, raw: str) -> None:
        state = self.state
        if state.in_head and not state.in_title:
            return

        table = state.table
        if table.in_table and table.in_row:
            table.add_text(decode_entities(raw))
            return

        text = decode_entities(raw)
        words = [word for word in _WHITESPACE_PATTERN.split(text) if word]
        if not words:
            if text:
                state.pending_space = True
            return

        glue = state.has_words and not state.pending_space and not _WHITESPACE_PATTERN.match(text)
        for index, word in enumerate(words):
            self._add_word(word, glue=glue and index == 0)
        state.pending_space = text[-1] in " \t\n\r\f\v"

    def _add_code_mark(self) -> None:
        """Place a backtick around inline code, outside the code span."""
        state = self.state
        if state.table.in_table:
            if state.table.in_row:
                state.table.add_text(INLINE_CODE_MARK)
            return
        self._add_word(INLINE_CODE_MARK, glue=state.has_words and not state.pending_space)
        state.pending_space = False

    def _add_word(self, word: str, glue: bool = False) -> None:
        state = self.state
        max_width = state.max_width

        if not state.current_line:
            if state.line_start_indent is None:
                state.line_start_indent = self.get_indent()
            state.current_line = state.line_start_indent
        elif glue:
            if display_width(state.current_line) + display_width(word) > max_width:
                self._rewrap_tail()
        elif state.has_words:
            if display_width(state.current_line) + 1 + display_width(word) > max_width:
                self._wrap()
            else:
                state.current_line += " "

        start = len(state.current_line)
        state.current_line += word
        state.has_words = True
        state.prefix_pending = False
        self._emit_styles(state.next_line_number, start, len(state.current_line))

    def _wrap(self) -> None:
        state = self.state
        indent = state.line_start_indent or ""
        self._flush(keep_indent=True)
        state.current_line = indent

    def _rewrap_tail(self) -> None:
        """Carry the unbroken run at the end of the line onto a new line.

        Used when a fragment glued to the previous word (``<b>word</b>.``)
        overflows; the whole run moves so no word is split.
        """
        state = self.state
        indent = state.line_start_indent or ""
        cut = state.current_line.rfind(" ") + 1
        if cut <= len(indent) or cut >= len(state.current_line):
            return

        line_no = state.next_line_number
        moved = []
        for spans in (state.highlights, state.links, state.images):
            kept = []
            for span in spans:
                if span.line == line_no and span.start >= cut:
                    moved.append((spans, span))
                else:
                    kept.append(span)
            spans[:] = kept

        tail = state.current_line[cut:]
        state.current_line = state.current_line[:cut]
        self._flush(keep_indent=True)

        state.current_line = indent + tail
        state.has_words = True
        shift = len(indent) - cut
        for spans, span in moved:
            span.line = state.next_line_number
            span.start += shift
            span.end += shift
            spans.append(span)

    def _emit_styles(self, line_no: int, start: int, end: int) -> None:
        state = self.state
        for frame in state.style_stack:
            if isinstance(frame, ClassStyle):
                state.highlights.append(Span(line_no, start, end, frame.style_id))
            elif frame.tag == "a":
                if frame.href:
                    state.highlights.append(Span(line_no, start, end, STYLE_LINK))
                    state.links.append(Span(line_no, start, end, frame.href))
            else:
                style_id = TAG_STYLES.get(frame.tag)
                if style_id:
                    state.highlights.append(Span(line_no, start, end, style_id))

    # ------------------------------------------------------------------
    # Opening tags
    # ------------------------------------------------------------------

    def _handle_open(self, token: Token) -> None:
        state = self.state
        name = token.name

        if name in RAW_TEXT_TAGS:
            if not token.self_closing and self._scanner is not None:
                self._scanner.consume_raw(name)
            return

        if name == "head":
            state.in_head = True
            return
        if state.in_head and name != "title":
            return

        if state.table.in_table and (name in TABLE_TAGS or name in BLOCK_TAGS):
            self._open_table_tag(token)
            self._push_styles(token)
            return

        if name in ("img", "image"):
            self._record_anchor(token)
            self._place_image(token)
            return
        if name == "br":
            self._line_break()
            return
        if name == "hr":
            self._record_anchor(token)
            self._place_rule()
            return

        if name == "title":
            self._flush()
            state.in_title = True
        elif name == "table":
            self._open_block()
            state.table = TableState(in_table=True, depth=1)
        elif name in ("ul", "ol"):
            self._open_block()
            frame = ListFrame("ordered" if name == "ol" else "unordered")
            start = get_attribute(token.raw, "start") if name == "ol" else None
            if start is not None and start.strip().lstrip("-").isdigit():
                frame.counter = int(start) - 1
            state.list_stack.append(frame)
        elif name == "li":
            self._start_list_item()
        elif name == "blockquote":
            self._open_block()
            state.blockquote_depth += 1
        elif name == "dd":
            self._flush()
            state.in_dd = True
        elif name == "dt":
            self._flush()
        elif name in HEADING_TAGS:
            self._open_block()
            state.in_heading = True
        elif name == "pre":
            self._open_block()
            self._record_anchor(token)
            self._place_preformatted()
            return
        elif name in BLOCK_TAGS:
            self._open_block()
        elif name == "code" and not token.self_closing:
            self._add_code_mark()

        self._record_anchor(token)
        self._push_styles(token)

    def _push_styles(self, token: Token) -> None:
        state = self.state
        name = token.name
        if name in VOID_TAGS or token.self_closing:
            return

        href = get_attribute(token.raw, "href") if name == "a" else None
        state.style_stack.append(TagStyle(name, href or None))

        class_attr = get_attribute(token.raw, "class")
        if not class_attr or not state.class_styles:
            return
        for class_name in class_attr.split():
            style = lookup_class_style(state.class_styles, class_name)
            if style is None:
                continue
            if style.is_title and not state.table.in_table:
                self._separate()
                state.in_title = True
            for style_id in style.style_ids():
                state.style_stack.append(ClassStyle(style_id, owner=name))

    def _record_anchor(self, token: Token) -> None:
        anchor = get_attribute(token.raw, "id")
        if anchor is None and token.name == "a":
            anchor = get_attribute(token.raw, "name")
        if anchor:
            self.state.anchors[anchor] = self.state.next_line_number

    def _start_list_item(self) -> None:
        state = self.state
        self._flush()
        if not state.list_stack:
            return

        marker = state.list_stack[-1].next_marker()
        base = self.get_indent(len(state.list_stack) - 1)
        state.current_line = f"{base}{marker} "
        state.line_start_indent = base + " " * (len(marker) + 1)
        state.prefix_pending = True
        state.highlights.append(Span(state.next_line_number, len(base), len(base) + len(marker), STYLE_LIST_ITEM))

    def _place_image(self, token: Token) -> None:
        state = self.state
        if token.name == "img":
            src = get_attribute(token.raw, "src")
        else:
            src = get_attribute(token.raw, "xlink:href") or get_attribute(token.raw, "href")
        if not src:
            return

        label = self.options.image_label
        if state.table.in_table:
            if state.table.in_row:
                state.table.add_text(f" {label} ")
            return

        self._flush()
        line = self.get_indent() + label
        line_no = self._append_line(line)
        state.images.append(Span(line_no, 0, len(line), src))
        state.highlights.append(Span(line_no, 0, len(line), STYLE_IMAGE))

    def _place_rule(self) -> None:
        state = self.state
        if state.table.in_table:
            return
        self._separate()
        indent = self.get_indent()
        width = min(self.options.rule_max_width, state.max_width - display_width(indent))
        if width < 1:
            return
        line = indent + RULE_CHAR * width
        line_no = self._append_line(line)
        state.highlights.append(Span(line_no, len(indent), len(line), STYLE_HORIZONTAL_RULE))

    def _place_preformatted(self) -> None:
        """Emit a ``<pre>`` block verbatim, one output line per source line."""
        state = self.state
        if self._scanner is None:
            return
        content = self._scanner.consume_raw("pre")
        if content is None:
            logger.debug("Unterminated <pre>; treating the rest of the input as preformatted")
            content = self._scanner.markup[self._scanner.pos :]
            self._scanner.pos = len(self._scanner.markup)

        text = decode_entities(_INNER_TAG_PATTERN.sub("", content))
        text = text.replace("\r\n", "\n").expandtabs(self.options.tab_width)
        source_lines = text.split("\n")
        if source_lines and source_lines[0] == "" and len(source_lines) > 1:
            source_lines = source_lines[1:]
        if len(source_lines) > 1 and source_lines[-1] == "":
            source_lines = source_lines[:-1]

        indent = self.get_indent()
        state.in_pre = True
        for source_line in source_lines:
            if source_line.strip():
                line = (indent + source_line).rstrip()
                line_no = self._append_line(line)
                state.highlights.append(Span(line_no, len(indent), len(line), STYLE_CODE))
            else:
                self._append_line(indent.rstrip())
        state.in_pre = False

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _open_table_tag(self, token: Token) -> None:
        table = self.state.table
        name = token.name

        if name == "table":
            table.depth += 1
            table.add_text(" ")
        elif table.depth > 1:
            table.add_text(" ")
        elif name == "thead":
            table.in_head = True
        elif name in ("tbody", "tfoot"):
            table.in_head = False
        elif name == "tr":
            table.finish_row()
            table.start_row()
        elif name in ("td", "th"):
            if not table.in_row:
                table.start_row()
            elif table.current_cell.strip():
                table.finish_cell()
            if name == "td":
                table.row_has_data_cell = True
        else:
            table.add_text(" ")

        self._record_anchor(token)

    def _close_table_tag(self, name: str) -> None:
        table = self.state.table

        if name == "table":
            table.depth -= 1
            if table.depth <= 0:
                table.finish_row()
                self._emit_table()
            else:
                table.add_text(" ")
        elif table.depth > 1:
            table.add_text(" ")
        elif name in ("td", "th"):
            if table.in_row:
                table.finish_cell()
        elif name == "tr":
            table.finish_row()
        elif name == "thead":
            table.in_head = False
        else:
            table.add_text(" ")

    def _emit_table(self) -> None:
        state = self.state
        self._flush()
        if state.table.has_content:
            for line in render_table(state.table, state.max_width, self.get_indent()):
                self._append_line(line)
        else:
            logger.debug("Skipping table without cells")
        state.table = TableState()
        self._separate()

    # ------------------------------------------------------------------
    # Closing tags
    # ------------------------------------------------------------------

    def _handle_close(self, name: str) -> None:
        state = self.state

        if name in RAW_TEXT_TAGS:
            return
        if name == "head":
            state.in_head = False
            return
        if state.in_head and name != "title":
            return

        if pop_tag_style(state.style_stack, name) and name == "code":
            self._add_code_mark()

        if state.table.in_table and (name in TABLE_TAGS or name in BLOCK_TAGS):
            self._close_table_tag(name)
            return

        if name == "title":
            if state.in_title:
                self._flush()
                state.in_title = False
                self._separate()
            return

        if name not in BLOCK_TAGS or name in ("br", "hr"):
            return

        self._flush()
        if name in ("ul", "ol"):
            if state.list_stack:
                state.list_stack.pop()
        elif name == "blockquote":
            state.blockquote_depth = max(0, state.blockquote_depth - 1)
        elif name in HEADING_TAGS:
            state.in_heading = False
        elif name == "dd":
            state.in_dd = False

        if state.in_title:
            state.in_title = False
            self._separate()


def render_markup(
    markup: Optional[str],
    options: Optional[RenderOptions] = None,
    class_styles: Optional[ClassStyleLookup] = None,
) -> RenderResult:
    """Render ``markup`` with a fresh :class:`TextRenderer`."""
    return TextRenderer(options, class_styles).render(markup)


__all__ = ["ListFrame", "RenderState", "TextRenderer", "render_markup"]
