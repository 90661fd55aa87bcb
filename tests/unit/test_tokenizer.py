"""Unit tests for the markup scanner."""

import pytest

from inkreflow.tokenizer import MarkupScanner, get_attribute, iter_tokens


def _events(markup):
    return [(token.kind, token.name or token.raw) for token in iter_tokens(markup)]


@pytest.mark.unit
class TestMarkupScanner:
    """Test token stream production."""

    def test_basic_stream(self):
        assert _events("<p>Hi <b>there</b></p>") == [
            ("open", "p"),
            ("text", "Hi "),
            ("open", "b"),
            ("text", "there"),
            ("close", "b"),
            ("close", "p"),
        ]

    def test_tag_names_lowercased(self):
        assert _events("<P CLASS='x'>a</P>") == [("open", "p"), ("text", "a"), ("close", "p")]

    def test_comments_doctype_and_pi_skipped(self):
        markup = '<?xml version="1.0"?><!DOCTYPE html><!-- <p>hidden</p> -->text'
        assert _events(markup) == [("text", "text")]

    def test_unterminated_comment_swallows_rest(self):
        assert _events("a<!-- never closed <p>b") == [("text", "a")]

    def test_stray_angle_brackets_are_text(self):
        tokens = list(iter_tokens("a < b > c"))
        assert [token.kind for token in tokens] == ["text", "text", "text"]
        assert "".join(token.raw for token in tokens) == "a < b > c"

    def test_unclosed_bracket_is_text(self):
        assert _events("x <y") == [("text", "x <y")]

    def test_self_closing(self):
        token = next(iter_tokens('<img src="a.png"/>'))
        assert token.kind == "open"
        assert token.self_closing

    def test_offsets(self):
        markup = "ab<i>c</i>"
        tokens = list(iter_tokens(markup))
        assert [(token.start, token.end) for token in tokens] == [(0, 2), (2, 5), (5, 6), (6, 10)]

    def test_consume_raw(self):
        scanner = MarkupScanner("<pre>if a < b and c > d:</PRE>after")
        assert scanner.next_token().name == "pre"
        assert scanner.consume_raw("pre") == "if a < b and c > d:"
        assert scanner.next_token().raw == "after"

    def test_consume_raw_unterminated(self):
        scanner = MarkupScanner("<pre>no end")
        scanner.next_token()
        position = scanner.pos
        assert scanner.consume_raw("pre") is None
        assert scanner.pos == position


@pytest.mark.unit
class TestGetAttribute:
    """Test attribute extraction from raw tags."""

    def test_double_and_single_quotes(self):
        assert get_attribute('a href="#x"', "href") == "#x"
        assert get_attribute("a href='#y'", "href") == "#y"

    def test_whole_name_only(self):
        assert get_attribute('div data-id="1"', "id") is None
        assert get_attribute('div data-id="1" id="2"', "id") == "2"

    def test_spaces_around_equals(self):
        assert get_attribute('p class = "note"', "class") == "note"

    def test_missing(self):
        assert get_attribute("p", "class") is None

    def test_empty_value(self):
        assert get_attribute('a href=""', "href") == ""
