"""Monospace text reconstruction from positioned words.

This module rebuilds plain chord-sheet text from the words of one page.
Words are grouped into lines by y, lines are classified as chords or
lyrics, and each chord line that sits directly above a lyric line is
anchored to the columns of the lyric words beneath it.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from chordshift.config import DEFAULT_LAYOUT_SETTINGS, LayoutSettings
from chordshift.layout.models import Line, PageLayout, PositionedToken, SpatialMapEntry
from chordshift.sheet.chord_detector import classify_line

logger = logging.getLogger(__name__)


def group_lines(
    tokens: Iterable[PositionedToken],
    viewport_width: float,
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
) -> list[Line]:
    """Group tokens into lines by vertical proximity.

    A token joins the first line whose y is within the tolerance of its
    own y; otherwise it starts a new line. Lines are returned top to
    bottom with their tokens sorted left to right.

    Parameters
    ----------
    tokens : Iterable[PositionedToken]
        Words of one page, in extraction order.
    viewport_width : float
        Page width in pixels; the tolerance is a fraction of it.
    settings : LayoutSettings
        Pixel heuristics.

    Returns
    -------
    list[Line]
        Grouped lines, not yet classified.

    Examples
    --------
    >>> tokens = [
    ...     PositionedToken("Hello", 100, 50, 50),
    ...     PositionedToken("G", 100, 30, 10),
    ...     PositionedToken("world", 160, 52, 50),
    ... ]
    >>> [line.text for line in group_lines(tokens, 800)]
    ['G', 'Hello world']
    """
    tolerance = settings.line_tolerance(viewport_width)
    lines: list[Line] = []

    for token in tokens:
        for line in lines:
            if abs(line.y - token.y) < tolerance:
                line.tokens.append(token)
                break
        else:
            lines.append(Line(y=token.y, tokens=[token]))

    lines.sort(key=lambda line: line.y)
    for line in lines:
        line.tokens.sort(key=lambda token: token.x)

    return lines


def is_chord_line(line: Line) -> bool:
    """Classify a line with the same ratio heuristic as plain text.

    Examples
    --------
    >>> is_chord_line(Line(y=0, tokens=[PositionedToken("Am", 0, 0, 10)]))
    True
    """
    text = line.text.strip()
    if not text:
        return False
    return classify_line(text) == "chord"


def render_lyric_line(
    line: Line,
    viewport_width: float,
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
) -> tuple[str, list[SpatialMapEntry]]:
    """Render a lyric line with natural word spacing.

    One space is inserted wherever the gap between neighbouring words
    exceeds ``settings.word_gap``, and two leading spaces when the line
    starts away from the left margin.

    Parameters
    ----------
    line : Line
        The lyric line, tokens sorted by x.
    viewport_width : float
        Page width in pixels.
    settings : LayoutSettings
        Pixel heuristics.

    Returns
    -------
    tuple[str, list[SpatialMapEntry]]
        The rendered text and the span-to-column map of its words.
    """
    rendered = ""
    spatial_map: list[SpatialMapEntry] = []
    last_x_end = 0.0

    if line.tokens and line.tokens[0].x > viewport_width * settings.indent_ratio:
        rendered += "  "

    for token in line.tokens:
        gap = token.x - last_x_end
        if last_x_end > 0 and gap > settings.word_gap:
            rendered += " "

        spatial_map.append(
            SpatialMapEntry(start_x=token.x, end_x=token.end_x, start_col=len(rendered))
        )
        rendered += token.text
        last_x_end = token.end_x

    return rendered, spatial_map


def find_anchor(
    token: PositionedToken,
    spatial_map: Sequence[SpatialMapEntry],
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
) -> int:
    """Find the output column for a chord above a rendered lyric line.

    The chord is anchored to the first lyric word whose span contains the
    chord's center. A chord with no word beneath floats at a column
    estimated from its x.
    """
    center = token.center
    for entry in spatial_map:
        if entry.contains(center, settings.anchor_slop):
            return entry.start_col

    column = math.floor(token.x / settings.floating_char_width)
    logger.debug("Floating chord %r placed at column %d", token.text, column)
    return column


def render_chord_line(
    line: Line,
    spatial_map: Sequence[SpatialMapEntry],
    settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS,
) -> str:
    """Render a chord line anchored to the lyric line beneath it.

    Parameters
    ----------
    line : Line
        The chord line, tokens sorted by x.
    spatial_map : Sequence[SpatialMapEntry]
        Map produced by ``render_lyric_line`` for the paired lyric line.
    settings : LayoutSettings
        Pixel heuristics.

    Returns
    -------
    str
        The rendered chord line.
    """
    rendered = ""
    for token in line.tokens:
        target_col = find_anchor(token, spatial_map, settings)
        padding = max(0, target_col - len(rendered))
        if padding > 0:
            rendered += " " * padding
        elif rendered:
            # Already at or past the target: keep chords from merging
            rendered += " "
        rendered += token.text
    return rendered


def render_grid_line(line: Line, settings: LayoutSettings = DEFAULT_LAYOUT_SETTINGS) -> str:
    """Render an unpaired line by snapping each word to a fixed grid.

    Examples
    --------
    >>> line = Line(y=0, tokens=[PositionedToken("G", 0, 0, 10), PositionedToken("D", 60, 0, 10)])
    >>> render_grid_line(line)
    'G    D'
    """
    rendered = ""
    for token in line.tokens:
        target_col = math.floor(token.x / settings.grid_unit)
        padding = max(0, target_col - len(rendered))
        rendered += " " * padding
        rendered += token.text
    return rendered


def reconstruct_page_layout(
    tokens: Iterable[PositionedToken],
    viewport_width: float,
    settings: LayoutSettings | None = None,
) -> str:
    """Rebuild the text of one page from its positioned words.

    This is the main entry point of the layout reconstructor.

    Parameters
    ----------
    tokens : Iterable[PositionedToken]
        Words of the page, y increasing downward.
    viewport_width : float
        Page width in pixels.
    settings : LayoutSettings | None
        Pixel heuristics, or None for the defaults.

    Returns
    -------
    str
        Newline-terminated lines, each right-trimmed. Empty for no tokens.

    Examples
    --------
    >>> tokens = [PositionedToken("G", 10, 30, 10), PositionedToken("Hello", 10, 50, 50)]
    >>> reconstruct_page_layout(tokens, 800)
    'G\\nHello\\n'
    """
    settings = settings or DEFAULT_LAYOUT_SETTINGS
    lines = group_lines(tokens, viewport_width, settings)
    if not lines:
        return ""

    for line in lines:
        line.is_chord_line = is_chord_line(line)

    logger.debug("Grouped %d lines on a %.0f px wide page", len(lines), viewport_width)

    output: list[str] = []
    i = 0
    n = len(lines)

    while i < n:
        current = lines[i]
        if not current.tokens:
            i += 1
            continue

        following = lines[i + 1] if i + 1 < n else None
        if current.is_chord_line and following is not None and not following.is_chord_line:
            lyric_text, spatial_map = render_lyric_line(following, viewport_width, settings)
            chord_text = render_chord_line(current, spatial_map, settings)
            logger.debug(
                "Paired chord line at y=%.1f with lyric line at y=%.1f", current.y, following.y
            )
            output.append(chord_text.rstrip())
            output.append(lyric_text.rstrip())
            i += 2
            continue

        output.append(render_grid_line(current, settings).rstrip())
        i += 1

    return "".join(f"{line}\n" for line in output)


def reconstruct_document(
    pages: Iterable[PageLayout],
    settings: LayoutSettings | None = None,
) -> str:
    """Rebuild the text of several pages, in order.

    Each page's text is followed by one extra newline.

    Parameters
    ----------
    pages : Iterable[PageLayout]
        Pages with their words and widths.
    settings : LayoutSettings | None
        Pixel heuristics, or None for the defaults.

    Returns
    -------
    str
        The concatenated page texts.
    """
    return "".join(
        reconstruct_page_layout(page.tokens, page.viewport_width, settings) + "\n"
        for page in pages
    )
