"""Integration tests rendering a complete chapter."""

import json

import pytest

from inkreflow import UserHighlight, find_text_position, project_highlight, render_html, store_highlight
from inkreflow.utils.text import display_width


@pytest.mark.integration
class TestChapterPipeline:
    """Render a chapter that exercises every structural element."""

    def test_structure(self, chapter_markup):
        result = render_html(chapter_markup, max_width=50)
        lines = result.lines

        assert lines[0].strip() == "Chapter One"
        assert result.centered_lines == {1}
        assert result.anchors["ch1"] == 3
        assert lines[2] == "The Beginning"
        assert "│   Quoted words of wisdom." in lines
        assert "• first" in lines
        assert "def f():" in lines
        assert "    return 1 < 2" in lines
        assert "[image]" in lines
        assert any(line.startswith("┌") for line in lines)
        assert lines[-1] == "The end."
        assert result.anchors["end"] == len(lines)
        assert "p { margin: 0 }" not in result.to_text()
        assert all(display_width(line) <= 50 for line in lines)

    def test_spans(self, chapter_markup):
        result = render_html(chapter_markup, max_width=50)

        (link,) = result.links
        assert link.value == "#n1"
        assert result.lines[link.line - 1][link.start : link.end] == "note"

        (image,) = result.images
        assert image.value == "images/map.png"
        assert result.lines[image.line - 1] == "[image]"

    def test_justified(self, chapter_markup):
        plain = render_html(chapter_markup, max_width=50)
        justified = render_html(chapter_markup, max_width=50, justify=True)

        assert len(plain.lines) == len(justified.lines)
        assert justified.justify_map
        for line_no in justified.justify_map:
            assert display_width(justified.lines[line_no - 1]) == 50
            assert justified.lines[line_no - 1].split() == plain.lines[line_no - 1].split()
        for line_no in justified.no_justify:
            assert justified.lines[line_no - 1] == plain.lines[line_no - 1]

    def test_user_highlight_survives_justification(self, chapter_markup):
        plain = render_html(chapter_markup, max_width=50)
        justified = render_html(chapter_markup, max_width=50, justify=True)

        line_no = min(justified.justify_map)
        words = justified.justify_map[line_no]
        first, second = words[0], words[1]

        stored = store_highlight(justified, line_no, second.new_start, line_no, second.new_end, note="check")
        assert plain.lines[line_no - 1][stored.start_col : stored.end_col] == second.word
        assert project_highlight(stored, justified) == (line_no, second.new_start, line_no, second.new_end)

        relocated = find_text_position(plain.lines, f"{first.word} {second.word}")
        assert relocated is not None
        assert relocated.start_line == line_no

    def test_json_serializable(self, chapter_markup):
        result = render_html(chapter_markup, max_width=50, justify=True)
        data = json.loads(json.dumps(result.to_dict()))
        assert data["lines"] == result.lines
        assert set(data["justify_map"]) == {str(line) for line in result.justify_map}

    def test_stored_highlight_round_trip(self):
        highlight = UserHighlight(1, 0, 1, 4, text="Some")
        result = render_html("<p>Some text</p>")
        assert project_highlight(highlight, result) == (1, 0, 1, 4)
