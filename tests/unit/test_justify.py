#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the justification engine and column maps."""

import pytest

from inkreflow.justify import (
    WordInfo,
    apply_justification,
    forward_map_column,
    is_justifiable,
    justify_line,
    reverse_map_column,
    split_words,
)
from inkreflow.spans import Span
from inkreflow.utils.text import display_width


def _line_of_width(width, word="word"):
    """Build a line of space-separated words with exactly ``width`` columns."""
    words = []
    while len(" ".join(words + [word])) <= width:
        words.append(word)
    line = " ".join(words)
    return line + "x" * (width - len(line))


@pytest.mark.unit
class TestSplitWords:
    """Test word splitting with canonical ranges."""

    def test_ranges(self):
        words = split_words("  ab cd  e")
        assert [(info.word, info.orig_start, info.orig_end) for info in words] == [
            ("ab", 2, 4),
            ("cd", 5, 7),
            ("e", 9, 10),
        ]

    def test_blank(self):
        assert split_words("   ") == []


@pytest.mark.unit
class TestJustifyLine:
    """Test single-line space distribution."""

    def test_even_distribution(self):
        line, words = justify_line("aa bb cc", 10)
        assert line == "aa  bb  cc"
        assert [(info.new_start, info.new_end) for info in words] == [(0, 2), (4, 6), (8, 10)]

    def test_remainder_goes_to_leftmost_gaps(self):
        line, _ = justify_line("a b c d", 10)
        # 4 letters, 6 spaces over 3 gaps
        assert line == "a  b  c  d"
        line, _ = justify_line("a b c d", 11)
        assert line == "a   b  c  d"

    def test_leading_whitespace_preserved(self):
        line, words = justify_line("  ab cd", 10)
        assert line == "  ab    cd"
        assert words[0].new_start == 2

    def test_single_word_skipped(self):
        assert justify_line("lonely", 10) is None

    def test_full_line_skipped(self):
        assert justify_line("aa bb cc", 8) is None


@pytest.mark.unit
class TestEligibility:
    """Test the fill threshold."""

    def test_ninety_percent_is_eligible(self):
        assert is_justifiable("x" * 72, 80)

    def test_below_threshold(self):
        assert not is_justifiable("x" * 70, 80)

    def test_full_width_not_eligible(self):
        assert not is_justifiable("x" * 80, 80)

    def test_empty_not_eligible(self):
        assert not is_justifiable("", 80)


@pytest.mark.unit
class TestApplyJustification:
    """Test in-place justification of rendered lines."""

    def test_72_of_80_becomes_80(self):
        line = _line_of_width(72)
        lines = [line]
        justify_map = apply_justification(lines, [], [], [], set(), 80)
        assert display_width(lines[0]) == 80
        assert 1 in justify_map

    def test_70_of_80_unchanged(self):
        line = _line_of_width(70)
        lines = [line]
        justify_map = apply_justification(lines, [], [], [], set(), 80)
        assert lines == [line]
        assert justify_map == {}

    def test_no_justify_lines_skipped(self):
        line = _line_of_width(75)
        lines = [line, line]
        justify_map = apply_justification(lines, [], [], [], {1}, 80)
        assert lines[0] == line
        assert display_width(lines[1]) == 80
        assert list(justify_map) == [2]

    def test_spans_remapped(self):
        lines = ["aa bb cc"]
        bold = Span(1, 3, 5, "bold")
        link = Span(1, 6, 8, "#n1")
        image = Span(1, 0, 8, "a.png")
        other_line = Span(2, 3, 5, "bold")
        apply_justification(lines, [bold, other_line], [link], [image], set(), 10, threshold=0.8)
        assert lines == ["aa  bb  cc"]
        assert bold.as_tuple() == (1, 4, 6, "bold")
        assert link.as_tuple() == (1, 8, 10, "#n1")
        assert image.as_tuple() == (1, 0, 10, "a.png")
        assert other_line.as_tuple() == (2, 3, 5, "bold")

    def test_custom_threshold(self):
        lines = ["aa bb"]
        assert apply_justification(lines, [], [], [], set(), 10, threshold=0.5)
        assert lines == ["aa      bb"]


def _sample_map():
    lines = ["ab cd ef"]
    return apply_justification(lines, [], [], [], set(), 12, threshold=0.5)[1]


@pytest.mark.unit
class TestColumnMaps:
    """Test forward and reverse column translation."""

    def test_map_layout(self):
        # six spaces over two gaps: "ab   cd   ef"
        words = _sample_map()
        assert [(info.orig_start, info.new_start) for info in words] == [(0, 0), (3, 5), (6, 10)]

    def test_word_boundaries_round_trip(self):
        words = _sample_map()
        for info in words:
            assert forward_map_column(words, info.orig_start) == info.new_start
            assert forward_map_column(words, info.orig_end) == info.new_end
            assert reverse_map_column(words, info.new_start) == info.orig_start
            assert reverse_map_column(words, info.new_end) == info.orig_end

    def test_interior_offset_preserved(self):
        words = _sample_map()
        assert forward_map_column(words, 4) == 6
        assert reverse_map_column(words, 6) == 4

    def test_reverse_gap_snaps_to_previous_word_end(self):
        words = _sample_map()
        assert reverse_map_column(words, 3) == 2
        assert reverse_map_column(words, 8) == 5

    def test_before_first_word_unchanged(self):
        words = [WordInfo("ab", 2, 4, 2, 4), WordInfo("cd", 5, 7, 8, 10)]
        assert forward_map_column(words, 1) == 1
        assert reverse_map_column(words, 0) == 0

    def test_past_last_word(self):
        words = _sample_map()
        assert forward_map_column(words, 20) == 12
        assert reverse_map_column(words, 20) == 8

    def test_without_map_identity(self):
        assert forward_map_column(None, 7) == 7
        assert reverse_map_column([], 7) == 7
