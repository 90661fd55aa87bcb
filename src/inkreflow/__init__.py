"""inkreflow - reflow EPUB, Markdown and web markup into justified text lines.

inkreflow converts chapter markup into word-wrapped monospaced lines with
structural indentation (lists, blockquotes, definition lists, tables,
preformatted blocks, headings and centered titles). Alongside the text it
returns positional spans for inline styles, links and images, an anchor table,
and, when justification is enabled, a per-line word map that translates
columns between the canonical and the justified layout.

Examples
--------
Render a chapter at 72 columns with justification:

    >>> from inkreflow import RenderOptions, render_html
    >>> result = render_html(chapter_markup, RenderOptions(max_width=72, justify=True))
    >>> print(result.to_text())

Move a stored highlight onto the justified display:

    >>> from inkreflow import UserHighlight, project_highlight
    >>> position = project_highlight(UserHighlight(3, 4, 3, 9), result)

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from inkreflow.api import render, render_html, render_markdown, render_web_page
from inkreflow.exceptions import ConfigError, DependencyError, InkReflowError, ValidationError
from inkreflow.highlights import TextPosition, UserHighlight, find_text_position, project_highlight, store_highlight
from inkreflow.justify import WordInfo, apply_justification, forward_map_column, reverse_map_column
from inkreflow.notes import wrap_note_text
from inkreflow.options import RenderOptions
from inkreflow.renderers.table import TableState, render_table
from inkreflow.renderers.text import TextRenderer
from inkreflow.result import RenderResult
from inkreflow.spans import Span, merge_spans
from inkreflow.styles import StyleDescriptor
from inkreflow.utils.entities import decode_entities
from inkreflow.utils.text import display_width

__version__ = "0.4.0"

__all__ = [
    "__version__",
    "render",
    "render_html",
    "render_markdown",
    "render_web_page",
    "RenderOptions",
    "RenderResult",
    "TextRenderer",
    "Span",
    "WordInfo",
    "StyleDescriptor",
    "forward_map_column",
    "reverse_map_column",
    "apply_justification",
    "merge_spans",
    "render_table",
    "TableState",
    "decode_entities",
    "display_width",
    "UserHighlight",
    "TextPosition",
    "project_highlight",
    "store_highlight",
    "find_text_position",
    "wrap_note_text",
    "InkReflowError",
    "ValidationError",
    "ConfigError",
    "DependencyError",
]
