#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/api.py
"""High-level rendering entry points.

Each function takes markup in one input format, brings it to the chapter
markup understood by :class:`~inkreflow.renderers.text.TextRenderer`, and
returns a :class:`~inkreflow.result.RenderResult`.

Keyword arguments matching :class:`~inkreflow.options.RenderOptions` fields
override the corresponding values of ``options``:

    >>> from inkreflow import render_html
    >>> result = render_html("<p>Some text</p>", max_width=60, justify=True)

"""

from __future__ import annotations

import logging
from typing import Any, Optional

from inkreflow.constants import InputFormat
from inkreflow.exceptions import ValidationError
from inkreflow.options import RenderOptions
from inkreflow.renderers.text import TextRenderer
from inkreflow.result import RenderResult
from inkreflow.styles import ClassStyleLookup
from inkreflow.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


def _resolve_options(options: Optional[RenderOptions], **kwargs: Any) -> RenderOptions:
    """Merge keyword overrides into ``options``."""
    options = options or RenderOptions()
    if not kwargs:
        return options

    known = set(RenderOptions.field_names())
    unknown = sorted(set(kwargs) - known)
    if unknown:
        logger.debug(f"Skipping unknown render options: {unknown}")
    overrides = {key: value for key, value in kwargs.items() if key in known}
    return options.create_updated(**overrides) if overrides else options


def render_html(
    markup: Optional[str],
    options: Optional[RenderOptions] = None,
    class_styles: Optional[ClassStyleLookup] = None,
    **kwargs: Any,
) -> RenderResult:
    """Render an HTML or XHTML chapter into wrapped text lines.

    Parameters
    ----------
    markup : str or None
        Chapter markup; empty or None yields an empty result
    options : RenderOptions, optional
        Layout configuration
    class_styles : mapping, optional
        Resolved CSS class lookup (class name to StyleDescriptor or mapping)
    **kwargs
        RenderOptions field overrides

    Returns
    -------
    RenderResult
        Lines, merged spans, anchors and (when justifying) the justify map

    """
    options = _resolve_options(options, **kwargs)
    with debug_timer(logger, "Rendering (html)"):
        result = TextRenderer(options, class_styles).render(markup)
    logger.debug(
        f"Rendered {len(result.lines)} lines, {len(result.highlights)} highlights, "
        f"{len(result.links)} links, {len(result.images)} images"
    )
    return result


def render_markdown(
    text: Optional[str],
    options: Optional[RenderOptions] = None,
    class_styles: Optional[ClassStyleLookup] = None,
    **kwargs: Any,
) -> RenderResult:
    """Render Markdown by converting it to HTML first.

    Raises
    ------
    DependencyError
        If mistune is not installed.

    """
    from inkreflow.parsers.markdown import markdown_to_html

    if not text:
        return RenderResult()
    with debug_timer(logger, "Parsing (markdown)"):
        markup = markdown_to_html(text)
    return render_html(markup, options, class_styles, **kwargs)


def render_web_page(
    html: Optional[str],
    options: Optional[RenderOptions] = None,
    class_styles: Optional[ClassStyleLookup] = None,
    **kwargs: Any,
) -> RenderResult:
    """Render the readable content of a full web page.

    Navigation, headers, footers, scripts and styles are dropped and the
    best-scoring content block is rendered below the centered page title.

    Raises
    ------
    DependencyError
        If beautifulsoup4 is not installed.

    """
    from inkreflow.parsers.web import extract_readable_html

    if not html:
        return RenderResult()
    with debug_timer(logger, "Parsing (web)"):
        markup = extract_readable_html(html)
    return render_html(markup, options, class_styles, **kwargs)


def render(
    source: Optional[str],
    input_format: InputFormat = "html",
    options: Optional[RenderOptions] = None,
    class_styles: Optional[ClassStyleLookup] = None,
    **kwargs: Any,
) -> RenderResult:
    """Dispatch to the renderer for ``input_format``.

    Raises
    ------
    ValidationError
        If ``input_format`` is not one of "html", "markdown" or "web".

    """
    if input_format == "html":
        return render_html(source, options, class_styles, **kwargs)
    if input_format == "markdown":
        return render_markdown(source, options, class_styles, **kwargs)
    if input_format == "web":
        return render_web_page(source, options, class_styles, **kwargs)
    raise ValidationError(
        f"Unsupported input format: {input_format!r}",
        parameter_name="input_format",
        parameter_value=input_format,
    )


__all__ = ["render", "render_html", "render_markdown", "render_web_page"]
