"""Unit tests for the Markdown front-end."""

import pytest

pytest.importorskip("mistune")

from inkreflow import render, render_markdown  # noqa: E402
from inkreflow.parsers.markdown import markdown_to_html  # noqa: E402


@pytest.mark.unit
class TestMarkdownToHtml:
    """Test Markdown conversion."""

    def test_heading_and_paragraph(self):
        markup = markdown_to_html("# Title\n\nSome **bold** text.")
        assert "<h1>Title</h1>" in markup
        assert "<strong>bold</strong>" in markup

    def test_raw_html_passes_through(self):
        assert '<span class="x">' in markdown_to_html('Inline <span class="x">raw</span> html')

    def test_strikethrough_plugin(self):
        assert "<del>gone</del>" in markdown_to_html("~~gone~~")


@pytest.mark.unit
class TestRenderMarkdown:
    """Test rendering Markdown through the text renderer."""

    def test_render(self):
        result = render_markdown("# Title\n\nSome **bold** text.")
        assert result.lines == ["Title", "", "Some bold text."]
        assert [span.as_tuple() for span in result.highlights] == [(1, 0, 5, "h1"), (3, 5, 9, "bold")]

    def test_list(self):
        result = render_markdown("- one\n- two\n")
        assert result.lines == ["• one", "• two"]

    def test_table(self):
        result = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n", max_width=40)
        assert result.lines[0].startswith("┌")
        assert result.lines[-1].startswith("└")

    def test_empty(self):
        assert render_markdown("").is_empty

    def test_dispatch(self):
        assert render("*hi*", "markdown").lines == ["hi"]
