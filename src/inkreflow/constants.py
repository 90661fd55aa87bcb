#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the inkreflow library.

This module centralizes the markup vocabulary, style identifiers, glyphs and
default configuration values used by the rendering pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Style Identifiers - Names of the visual styles emitted as spans
3. Markup Vocabulary - Tag classification tables
4. Glyphs - Characters used for bullets, rules, quotes and tables
5. Rendering Defaults - Default option values
6. Optional Dependencies - Packages required by optional front-ends
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

InputFormat = Literal["html", "markdown", "web"]
ListKind = Literal["ordered", "unordered"]

# =============================================================================
# Style Identifiers
# =============================================================================

STYLE_BOLD = "bold"
STYLE_ITALIC = "italic"
STYLE_UNDERLINE = "underline"
STYLE_STRIKETHROUGH = "strikethrough"
STYLE_CODE = "code"
STYLE_BLOCKQUOTE = "blockquote"
STYLE_HIGHLIGHT = "highlight"
STYLE_LINK = "link"
STYLE_LIST_ITEM = "list_item"
STYLE_TITLE = "title"
STYLE_IMAGE = "image"
STYLE_HORIZONTAL_RULE = "horizontal_rule"

# =============================================================================
# Markup Vocabulary
# =============================================================================

# Tags that start a new line when encountered.
BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "br",
        "dd",
        "div",
        "dl",
        "dt",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "table",
        "tr",
        "ul",
    }
)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

TABLE_TAGS = frozenset({"table", "thead", "tbody", "tfoot", "tr", "th", "td"})

# Elements without content; they never sit on the style stack.
VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "image",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose raw content is discarded outright.
RAW_TEXT_TAGS = frozenset({"script", "style"})

TAG_STYLES: dict[str, str] = {
    "h1": "h1",
    "h2": "h2",
    "h3": "h3",
    "h4": "h4",
    "h5": "h5",
    "h6": "h6",
    "b": STYLE_BOLD,
    "strong": STYLE_BOLD,
    "dt": STYLE_BOLD,
    "i": STYLE_ITALIC,
    "em": STYLE_ITALIC,
    "cite": STYLE_ITALIC,
    "dfn": STYLE_ITALIC,
    "var": STYLE_ITALIC,
    "u": STYLE_UNDERLINE,
    "ins": STYLE_UNDERLINE,
    "s": STYLE_STRIKETHROUGH,
    "strike": STYLE_STRIKETHROUGH,
    "del": STYLE_STRIKETHROUGH,
    "code": STYLE_CODE,
    "kbd": STYLE_CODE,
    "samp": STYLE_CODE,
    "tt": STYLE_CODE,
    "pre": STYLE_CODE,
    "blockquote": STYLE_BLOCKQUOTE,
    "mark": STYLE_HIGHLIGHT,
}

# =============================================================================
# Glyphs
# =============================================================================

BULLET = "•"
INLINE_CODE_MARK = "`"
QUOTE_BAR = "│"
RULE_CHAR = "─"

BOX_TOP_LEFT = "┌"
BOX_TOP_RIGHT = "┐"
BOX_BOTTOM_LEFT = "└"
BOX_BOTTOM_RIGHT = "┘"
BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"
BOX_TOP_JOIN = "┬"
BOX_BOTTOM_JOIN = "┴"
BOX_LEFT_JOIN = "├"
BOX_RIGHT_JOIN = "┤"
BOX_CROSS = "┼"

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_MAX_WIDTH = 80
DEFAULT_JUSTIFY = False
DEFAULT_JUSTIFY_THRESHOLD = 0.90
DEFAULT_INDENT_SIZE = 4
DEFAULT_LIST_INDENT = 2
DEFAULT_PARAGRAPH_SPACING = 1
DEFAULT_TAB_WIDTH = 4
DEFAULT_IMAGE_LABEL = "[image]"
DEFAULT_RULE_MAX_WIDTH = 60

TABLE_MIN_COLUMN_WIDTH = 10

NOTE_JUSTIFY_THRESHOLD = 0.85
NOTE_SHORT_FACTOR = 1.5

# =============================================================================
# Optional Dependencies
# =============================================================================

# Each spec is a list of tuples: (pip_package, import_name, version_constraint)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_WEB = [("beautifulsoup4", "bs4", ">=4.12.0"), ("readability-lxml", "readability", ">=0.8.1")]

# Environment variables consulted by the command-line interface
ENV_PREFIX = "INKREFLOW_"

CONFIG_FILENAMES = [".inkreflow.toml", ".inkreflow.yaml", ".inkreflow.yml", ".inkreflow.json"]

# Characters of surrounding text stored with a user highlight
HIGHLIGHT_CONTEXT_CHARS = 30
