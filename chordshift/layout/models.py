"""Data models for layout reconstruction.

This module defines positioned words as produced by a text-layer or OCR
extractor, and the transient structures used while rebuilding a page.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PositionedToken:
    """A word with its pixel position on a page.

    Parameters
    ----------
    text : str
        The word text.
    x : float
        Left edge in pixels.
    y : float
        Vertical position in pixels, increasing downward.
    width : float
        Horizontal extent in pixels.

    Examples
    --------
    >>> token = PositionedToken(text="G", x=100, y=30, width=10)
    >>> token.center
    105.0
    """

    text: str
    x: float
    y: float
    width: float

    @property
    def end_x(self) -> float:
        """Right edge in pixels."""
        return self.x + self.width

    @property
    def center(self) -> float:
        """Horizontal center in pixels."""
        return self.x + self.width / 2


@dataclass
class Line:
    """Tokens sharing approximately the same y.

    Parameters
    ----------
    y : float
        The y of the token that started the line.
    tokens : list[PositionedToken]
        Member tokens, sorted by x once grouping is complete.
    is_chord_line : bool
        Set by classification after grouping.
    """

    y: float
    tokens: list[PositionedToken] = field(default_factory=list)
    is_chord_line: bool = False

    @property
    def text(self) -> str:
        """Token texts joined by single spaces."""
        return " ".join(token.text for token in self.tokens)


@dataclass(frozen=True)
class SpatialMapEntry:
    """Binds a rendered lyric word's pixel span to its output column.

    Parameters
    ----------
    start_x : float
        Left edge of the word in pixels.
    end_x : float
        Right edge of the word in pixels.
    start_col : int
        Column of the word's first character in the rendered line.
    """

    start_x: float
    end_x: float
    start_col: int

    def contains(self, x: float, slop: float = 0.0) -> bool:
        """Return True if ``x`` falls inside the span, widened by ``slop``."""
        return self.start_x - slop <= x <= self.end_x + slop


@dataclass(frozen=True)
class PageLayout:
    """One page of extracted words.

    Parameters
    ----------
    tokens : tuple[PositionedToken, ...]
        Words on the page, in any order.
    viewport_width : float
        Page width in the same pixel space as the tokens.
    """

    tokens: tuple[PositionedToken, ...]
    viewport_width: float
