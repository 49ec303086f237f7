"""Tests for layout reconstruction from positioned words."""

import logging

import pytest

from chordshift.config import LayoutSettings
from chordshift.layout.models import Line, PageLayout, PositionedToken, SpatialMapEntry
from chordshift.layout.reconstructor import (
    find_anchor,
    group_lines,
    is_chord_line,
    reconstruct_document,
    reconstruct_page_layout,
    render_chord_line,
    render_grid_line,
    render_lyric_line,
)


def tok(text: str, x: float, y: float, width: float) -> PositionedToken:
    return PositionedToken(text=text, x=x, y=y, width=width)


class TestGroupLines:
    """Test y-proximity grouping."""

    def test_groups_within_tolerance(self) -> None:
        """Test tokens closer than 1% of the width share a line."""
        lines = group_lines([tok("a", 0, 100, 5), tok("b", 10, 107.9, 5)], 800)
        assert len(lines) == 1

    def test_tolerance_is_strict(self) -> None:
        lines = group_lines([tok("a", 0, 100, 5), tok("b", 10, 108, 5)], 800)
        assert len(lines) == 2

    def test_tolerance_scales_with_width(self) -> None:
        tokens = [tok("a", 0, 100, 5), tok("b", 10, 112, 5)]
        assert len(group_lines(tokens, 800)) == 2
        assert len(group_lines(tokens, 1600)) == 1

    def test_sorted_top_to_bottom_and_left_to_right(self) -> None:
        tokens = [
            tok("world", 60, 50, 40),
            tok("D", 80, 30, 10),
            tok("Hello", 0, 50, 50),
            tok("G", 0, 30, 10),
        ]
        lines = group_lines(tokens, 800)
        assert [line.text for line in lines] == ["G D", "Hello world"]

    def test_line_y_is_first_token(self) -> None:
        """Test a line keeps the y of the token that started it."""
        lines = group_lines([tok("a", 0, 100, 5), tok("b", 0, 106, 5), tok("c", 0, 113, 5)], 800)
        assert [line.y for line in lines] == [100, 113]
        assert [t.text for t in lines[0].tokens] == ["a", "b"]

    def test_empty(self) -> None:
        assert group_lines([], 800) == []


class TestIsChordLine:
    """Test line classification on joined text."""

    def test_chord_tokens(self) -> None:
        line = Line(y=0, tokens=[tok("G", 0, 0, 10), tok("D/F#", 50, 0, 30)])
        assert is_chord_line(line) is True

    def test_lyric_tokens(self) -> None:
        line = Line(y=0, tokens=[tok("Hello", 0, 0, 50), tok("world", 60, 0, 50)])
        assert is_chord_line(line) is False

    def test_empty_line(self) -> None:
        assert is_chord_line(Line(y=0)) is False


class TestRenderLyricLine:
    """Test natural-spacing lyric rendering."""

    def test_gap_inserts_single_space(self) -> None:
        line = Line(y=0, tokens=[tok("Hello", 10, 0, 50), tok("world", 100, 0, 50)])
        text, spatial_map = render_lyric_line(line, 800)
        assert text == "Hello world"
        assert spatial_map == [
            SpatialMapEntry(start_x=10, end_x=60, start_col=0),
            SpatialMapEntry(start_x=100, end_x=150, start_col=6),
        ]

    def test_small_gap_joins(self) -> None:
        """Test a gap of 3 px or less joins the fragments."""
        line = Line(y=0, tokens=[tok("Hel", 10, 0, 30), tok("lo", 43, 0, 20)])
        text, _ = render_lyric_line(line, 800)
        assert text == "Hello"

    def test_indent_beyond_margin(self) -> None:
        line = Line(y=0, tokens=[tok("Hello", 41, 0, 50)])
        text, spatial_map = render_lyric_line(line, 800)
        assert text == "  Hello"
        assert spatial_map[0].start_col == 2

    def test_no_indent_at_margin(self) -> None:
        line = Line(y=0, tokens=[tok("Hello", 40, 0, 50)])
        text, _ = render_lyric_line(line, 800)
        assert text == "Hello"


class TestRenderChordLine:
    """Test anchored chord rendering."""

    def test_anchors_to_word_start(self) -> None:
        spatial_map = [
            SpatialMapEntry(start_x=10, end_x=60, start_col=0),
            SpatialMapEntry(start_x=100, end_x=150, start_col=6),
        ]
        line = Line(y=0, tokens=[tok("G", 20, 0, 10), tok("D", 120, 0, 10)])
        assert render_chord_line(line, spatial_map) == "G     D"

    def test_anchor_slop(self) -> None:
        """Test a center just outside a span still anchors to it."""
        spatial_map = [SpatialMapEntry(start_x=100, end_x=150, start_col=4)]
        assert find_anchor(tok("G", 150, 0, 10), spatial_map) == 4
        assert find_anchor(tok("G", 151, 0, 10), spatial_map) == 15

    def test_floating_chord(self) -> None:
        """Test a chord with no word beneath is placed by x / 10."""
        line = Line(y=0, tokens=[tok("Em", 305, 0, 20)])
        assert render_chord_line(line, []) == " " * 30 + "Em"

    def test_collision_inserts_space(self) -> None:
        """Test chords anchored to the same word do not merge."""
        spatial_map = [SpatialMapEntry(start_x=0, end_x=100, start_col=0)]
        line = Line(y=0, tokens=[tok("G", 10, 0, 10), tok("D", 60, 0, 10)])
        assert render_chord_line(line, spatial_map) == "G D"

    def test_first_chord_at_column_zero(self) -> None:
        spatial_map = [SpatialMapEntry(start_x=0, end_x=50, start_col=0)]
        line = Line(y=0, tokens=[tok("C", 0, 0, 10)])
        assert render_chord_line(line, spatial_map) == "C"


class TestRenderGridLine:
    """Test grid fallback rendering."""

    def test_grid_columns(self) -> None:
        line = Line(y=0, tokens=[tok("G", 0, 0, 10), tok("D", 120, 0, 10), tok("Em", 240, 0, 20)])
        assert render_grid_line(line) == "G" + " " * 9 + "D" + " " * 9 + "Em"

    def test_overlap_not_padded(self) -> None:
        line = Line(y=0, tokens=[tok("Hello", 0, 0, 50), tok("x", 24, 0, 10)])
        assert render_grid_line(line) == "Hellox"

    def test_custom_grid_unit(self) -> None:
        line = Line(y=0, tokens=[tok("G", 60, 0, 10)])
        assert render_grid_line(line, LayoutSettings(grid_unit=20)) == "   G"


class TestReconstructPageLayout:
    """Test full page reconstruction."""

    def test_empty_tokens(self) -> None:
        assert reconstruct_page_layout([], 800) == ""

    def test_chord_above_lyric(self) -> None:
        """Test a chord is anchored to the word beneath its center."""
        tokens = [tok("G", 100, 30, 10), tok("Hello", 100, 50, 50)]
        result = reconstruct_page_layout(tokens, 800)
        chord_line, lyric_line = result.splitlines()
        assert chord_line.strip() == "G"
        assert lyric_line.strip() == "Hello"
        assert chord_line.index("G") == lyric_line.index("Hello")

    def test_chord_above_lyric_at_margin(self) -> None:
        tokens = [tok("G", 10, 30, 10), tok("Hello", 10, 50, 50)]
        assert reconstruct_page_layout(tokens, 800) == "G\nHello\n"

    def test_pair_with_two_words(self) -> None:
        tokens = [
            tok("Hello", 20, 50, 50),
            tok("G", 20, 30, 10),
            tok("world", 76, 51, 50),
            tok("D", 90, 31, 10),
        ]
        assert reconstruct_page_layout(tokens, 800) == "G     D\nHello world\n"

    def test_unpaired_lines_use_grid(self) -> None:
        """Test intro chords followed by chords are rendered on the grid."""
        tokens = [
            tok("G", 0, 10, 10),
            tok("C", 60, 10, 10),
            tok("D", 0, 40, 10),
            tok("Em", 36, 40, 20),
        ]
        assert reconstruct_page_layout(tokens, 800) == "G    C\nD  Em\n"

    def test_lyric_only_block(self) -> None:
        tokens = [tok("Just", 0, 10, 40), tok("words", 60, 10, 50), tok("here", 0, 40, 40)]
        assert reconstruct_page_layout(tokens, 800) == "Just words\nhere\n"

    def test_lyric_line_consumed_by_pair(self) -> None:
        """Test the lyric line of a pair is not rendered a second time."""
        tokens = [tok("Am", 0, 10, 20), tok("Hey", 0, 40, 30), tok("there", 0, 70, 50)]
        result = reconstruct_page_layout(tokens, 800)
        assert result == "Am\nHey\nthere\n"

    def test_pair_logged_at_debug(self, caplog) -> None:
        tokens = [tok("G", 10, 30, 10), tok("Hello", 10, 50, 50)]
        with caplog.at_level(logging.DEBUG, logger="chordshift.layout.reconstructor"):
            reconstruct_page_layout(tokens, 800)
        assert any("Paired chord line" in record.getMessage() for record in caplog.records)

    def test_trailing_whitespace_trimmed(self) -> None:
        tokens = [tok("G", 0, 10, 10), tok("Hi", 100, 40, 20)]
        for line in reconstruct_page_layout(tokens, 800).splitlines():
            assert line == line.rstrip()

    def test_custom_settings(self) -> None:
        """Test a wider line tolerance merges lines."""
        tokens = [tok("a", 0, 10, 5), tok("b", 30, 30, 5)]
        settings = LayoutSettings(line_tolerance_ratio=0.05)
        assert reconstruct_page_layout(tokens, 800, settings) == "a b\n"

    @pytest.mark.parametrize("width", [0, 100, 800])
    def test_never_raises_on_odd_input(self, width: float) -> None:
        tokens = [tok("", -20, 0, 0), tok("G", -5, 0, -10)]
        assert isinstance(reconstruct_page_layout(tokens, width), str)


class TestReconstructDocument:
    """Test multi-page reconstruction."""

    def test_pages_in_order(self) -> None:
        pages = [
            PageLayout(tokens=(tok("G", 10, 30, 10), tok("Hello", 10, 50, 50)), viewport_width=800),
            PageLayout(tokens=(tok("Outro", 0, 20, 50),), viewport_width=800),
        ]
        assert reconstruct_document(pages) == "G\nHello\n\nOutro\n\n"

    def test_empty_page(self) -> None:
        assert reconstruct_document([PageLayout(tokens=(), viewport_width=800)]) == "\n"

    def test_no_pages(self) -> None:
        assert reconstruct_document([]) == ""
