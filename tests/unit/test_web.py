"""Unit tests for the web page front-end."""

import sys
from types import SimpleNamespace

import pytest

pytest.importorskip("bs4")

from bs4 import BeautifulSoup  # noqa: E402

from inkreflow import DependencyError, render_web_page  # noqa: E402
from inkreflow.parsers.web import (  # noqa: E402
    add_heading_ids,
    build_chapter_markup,
    extract_article,
    extract_readable_html,
    extract_title,
    parse_web_page,
)

PAGE = """<html>
<head><title>  Daily   News </title><script>track()</script></head>
<body>
  <nav><a href="/">Home</a></nav>
  <header>Site header</header>
  <div class="sidebar"><p>Ad one</p><p>Ad two</p></div>
  <article>
    <h2>Story</h2>
    <p>First paragraph of the story.</p>
    <!-- hidden comment -->
    <p>Second paragraph.</p>
  </article>
  <footer>Copyright</footer>
</body>
</html>"""

ARTICLE = "<div><article><h2>Story</h2><p>First paragraph of the story.</p><p>Second paragraph.</p></article></div>"


def _install_readability(monkeypatch, summary=ARTICLE, title="Readable Title", error=None):
    """Replace readability with a stub and return the markup it receives."""
    captured: dict[str, str] = {}

    class StubDocument:
        def __init__(self, html: str) -> None:
            captured["html"] = html

        def summary(self, html_partial: bool = True) -> str:
            if error is not None:
                raise error
            return summary

        def short_title(self) -> str:
            return title

        def title(self) -> str:
            return title

    monkeypatch.setitem(sys.modules, "readability", SimpleNamespace(Document=StubDocument))
    return captured


@pytest.fixture
def readability_stub(monkeypatch):
    return _install_readability(monkeypatch)


@pytest.mark.unit
class TestExtraction:
    """Test title extraction and cleaning."""

    def test_title_from_title_tag(self):
        assert extract_title(BeautifulSoup(PAGE, "html.parser")) == "Daily News"

    def test_title_from_h1(self):
        assert extract_title(BeautifulSoup("<body><h1>Only <b>heading</b></h1></body>", "html.parser")) == "Only heading"

    def test_title_default(self):
        assert extract_title(BeautifulSoup("<p>x</p>", "html.parser")) == "Web Page"

    def test_chrome_removed(self, readability_stub):
        page = parse_web_page(PAGE)
        assert "track()" not in page.raw_content
        assert "Site header" not in page.raw_content
        assert "Copyright" not in page.raw_content
        assert "hidden comment" not in page.raw_content
        assert "Ad one" in page.raw_content

    def test_heading_ids(self):
        soup = BeautifulSoup('<h2>A</h2><h3 id="keep">B</h3><h2>C</h2>', "html.parser")
        add_heading_ids(soup)
        assert [h.get("id") for h in soup.find_all(["h2", "h3"])] == ["heading-1", "keep", "heading-3"]

    def test_chapter_markup_escapes_title(self):
        assert build_chapter_markup("A & B", "<p>x</p>").startswith("<head><title>A &amp; B</title></head>")


@pytest.mark.unit
class TestReadability:
    """Test article extraction through readability-lxml."""

    def test_cleaned_markup_passed_to_readability(self, readability_stub):
        parse_web_page(PAGE)
        assert "<nav>" not in readability_stub["html"]
        assert "track()" not in readability_stub["html"]

    def test_article_used_as_main_content(self, readability_stub):
        page = parse_web_page(PAGE)
        assert page.title == "Daily News"
        assert "First paragraph of the story." in page.main_content
        assert "Ad one" not in page.main_content
        assert 'id="heading-1"' in page.main_content

    def test_summary_failure_falls_back_to_body(self, monkeypatch, caplog):
        _install_readability(monkeypatch, error=ValueError("unparseable"))
        page = parse_web_page(PAGE)
        assert page.main_content == page.raw_content
        assert "Readability summary extraction failed" in caplog.text

    def test_empty_summary_falls_back_to_body(self, monkeypatch):
        _install_readability(monkeypatch, summary="")
        assert extract_article("<p>x</p>") == (None, None)
        page = parse_web_page(PAGE)
        assert page.main_content == page.raw_content

    def test_readability_title_used_when_page_has_none(self, monkeypatch):
        _install_readability(monkeypatch, summary="<div><p>Body</p></div>", title="Found Title")
        assert parse_web_page("<body><p>Body</p></body>").title == "Found Title"

    def test_no_title_marker_ignored(self, monkeypatch):
        _install_readability(monkeypatch, summary="<div><p>Body</p></div>", title="[no-title]")
        assert parse_web_page("<body><p>Body</p></body>").title == "Web Page"

    def test_title_override(self, readability_stub):
        assert "<title>Mine</title>" in extract_readable_html(PAGE, title="Mine")

    def test_whole_body(self, readability_stub):
        assert "Ad one" in extract_readable_html(PAGE, main_only=False)

    def test_missing_dependency(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "readability", None)
        with pytest.raises(DependencyError) as exc_info:
            parse_web_page(PAGE)
        assert "readability-lxml" in str(exc_info.value)

    def test_real_readability(self):
        pytest.importorskip("readability")
        page = parse_web_page(PAGE)
        assert "First paragraph of the story." in page.main_content
        assert "Home" not in page.main_content


@pytest.mark.unit
class TestRenderWebPage:
    """Test rendering a web page end to end."""

    def test_render(self, readability_stub):
        result = render_web_page(PAGE, max_width=40)
        assert result.lines[0].strip() == "Daily News"
        assert result.centered_lines == {1}
        assert "First paragraph of the story." in result.lines
        assert "Home" not in result.to_text()
        assert "Ad one" not in result.to_text()
        assert result.anchors["heading-1"] == 3

    def test_empty(self, readability_stub):
        assert render_web_page("").is_empty
