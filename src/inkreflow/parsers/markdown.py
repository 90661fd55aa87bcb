#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/parsers/markdown.py
"""Markdown front-end built on mistune."""

from __future__ import annotations

from inkreflow.constants import DEPS_MARKDOWN
from inkreflow.utils.decorators import requires_dependencies

MARKDOWN_PLUGINS = ["strikethrough", "table"]


@requires_dependencies("markdown", DEPS_MARKDOWN)
def markdown_to_html(text: str) -> str:
    """Convert Markdown to HTML with table and strikethrough support.

    Raw HTML in the source is passed through unchanged.

    Raises
    ------
    DependencyError
        If mistune is not installed.

    Examples
    --------
        >>> markdown_to_html("**hi**")
        '<p><strong>hi</strong></p>\\n'

    """
    import mistune

    markdown = mistune.create_markdown(escape=False, plugins=MARKDOWN_PLUGINS)
    return str(markdown(text))


__all__ = ["markdown_to_html", "MARKDOWN_PLUGINS"]
