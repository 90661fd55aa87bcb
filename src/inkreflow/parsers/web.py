#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/parsers/web.py
"""Readable-content extraction for full web pages.

A page is cleaned of scripts, styles, comments and navigation chrome with
BeautifulSoup, then readability-lxml picks the article content. When
readability finds nothing the whole cleaned body is used. The result is
chapter markup whose ``<title>`` is the page title, so the renderer centers
it above the content.
"""

from __future__ import annotations

import html as html_lib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from inkreflow.constants import DEPS_WEB
from inkreflow.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from bs4.element import Tag

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TITLE = "Web Page"

REMOVED_TAGS = ["script", "style", "noscript", "nav", "header", "footer"]

# readability-lxml reports this when a page has no title
NO_TITLE_MARKER = "[no-title]"


@dataclass
class WebPage:
    """A cleaned web page.

    Attributes
    ----------
    title : str
        Page title (``<title>``, else the first ``<h1>``, else the title
        readability finds, else "Web Page")
    raw_content : str
        Cleaned body markup
    main_content : str
        Markup of the article readability extracted, or the cleaned body

    """

    title: str
    raw_content: str
    main_content: str


def _normalize_space(text: str) -> str:
    return " ".join(text.split())


def extract_title(soup: "BeautifulSoup") -> str:
    """Return the page title, falling back to the first heading."""
    if soup.title is not None and soup.title.string:
        title = _normalize_space(soup.title.string)
        if title:
            return title
    h1 = soup.find("h1")
    if h1 is not None:
        title = _normalize_space(h1.get_text(" "))
        if title:
            return title
    return DEFAULT_PAGE_TITLE


def clean_soup(soup: "BeautifulSoup") -> None:
    """Remove scripts, styles, comments and navigation chrome in place."""
    from bs4.element import Comment

    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()
    for tag in soup.find_all(REMOVED_TAGS):
        tag.decompose()


def add_heading_ids(root: "Tag") -> None:
    """Give ``h2``/``h3`` elements without an id a sequential ``heading-N`` id."""
    for count, heading in enumerate(root.find_all(["h2", "h3"]), start=1):
        if not heading.get("id"):
            heading["id"] = f"heading-{count}"


def extract_article(html: str) -> tuple[Optional[str], Optional[str]]:
    """Extract the article markup and title with readability-lxml.

    Parameters
    ----------
    html : str
        Page markup, already cleaned of chrome

    Returns
    -------
    tuple[str or None, str or None]
        The article markup, or None when readability fails or finds nothing,
        and the title readability discovered, if any.

    """
    import readability

    readability_doc = readability.Document(html)

    try:
        summary_html = readability_doc.summary(html_partial=True)
    except Exception as exc:
        logger.warning("Readability summary extraction failed: %s", exc)
        return None, None

    if not summary_html or not summary_html.strip():
        logger.debug("Readability summary returned empty content; falling back to the cleaned body")
        return None, None

    logger.debug("Readability extraction succeeded; using article-only content")
    readable_title = readability_doc.short_title() or readability_doc.title()
    if isinstance(readable_title, str) and _normalize_space(readable_title) not in ("", NO_TITLE_MARKER):
        return str(summary_html), _normalize_space(readable_title)
    return str(summary_html), None


@requires_dependencies("web", DEPS_WEB)
def parse_web_page(html: str) -> WebPage:
    """Clean ``html`` and locate its main content.

    Raises
    ------
    DependencyError
        If beautifulsoup4 or readability-lxml is not installed.

    """
    from bs4 import BeautifulSoup

    soup = BeautifulSoup(html, "html.parser")
    title = extract_title(soup)
    clean_soup(soup)

    body = soup.body or soup
    add_heading_ids(body)
    raw_content = body.decode_contents() if body is not soup else str(soup)

    main_content = raw_content
    if raw_content.strip():
        article_html, article_title = extract_article(str(soup))
        if article_html is not None:
            article = BeautifulSoup(article_html, "html.parser")
            add_heading_ids(article)
            main_content = str(article)
        if title == DEFAULT_PAGE_TITLE and article_title:
            title = article_title

    return WebPage(title=title, raw_content=raw_content, main_content=main_content)


def build_chapter_markup(title: str, content: str) -> str:
    """Wrap content under a centered ``<title>``."""
    return f"<head><title>{html_lib.escape(title)}</title></head>\n<body>\n{content}\n</body>"


def extract_readable_html(html: str, main_only: bool = True, title: Optional[str] = None) -> str:
    """Return chapter markup for a web page.

    Parameters
    ----------
    html : str
        Full page markup
    main_only : bool, default True
        Keep only the extracted article; otherwise keep the whole cleaned
        body
    title : str, optional
        Title to show instead of the one found in the page

    Raises
    ------
    DependencyError
        If beautifulsoup4 or readability-lxml is not installed.

    """
    page = parse_web_page(html)
    content = page.main_content if main_only else page.raw_content
    return build_chapter_markup(title or page.title, content)


__all__ = [
    "WebPage",
    "extract_title",
    "clean_soup",
    "extract_article",
    "add_heading_ids",
    "parse_web_page",
    "build_chapter_markup",
    "extract_readable_html",
]
