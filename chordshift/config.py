"""Layout reconstruction settings.

The defaults reproduce the pixel heuristics the reconstructor was tuned
with; callers normally never pass their own settings.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutSettings:
    """Pixel heuristics for rebuilding monospace text from positioned words.

    Parameters
    ----------
    line_tolerance_ratio : float
        Fraction of the viewport width within which two words share a line.
    word_gap : float
        Horizontal gap (px) above which a space is inserted between words.
    indent_ratio : float
        Fraction of the viewport width beyond which a lyric line is indented.
    anchor_slop : float
        Tolerance (px) when matching a chord center to a lyric word span.
    floating_char_width : float
        Estimated character width (px) for chords with no word beneath.
    grid_unit : float
        Column width (px) for lines rendered without a partner line.
    """

    line_tolerance_ratio: float = 0.01
    word_gap: float = 3.0
    indent_ratio: float = 0.05
    anchor_slop: float = 5.0
    floating_char_width: float = 10.0
    grid_unit: float = 12.0

    def line_tolerance(self, viewport_width: float) -> float:
        """Return the y tolerance (px) for a page of the given width."""
        return viewport_width * self.line_tolerance_ratio


DEFAULT_LAYOUT_SETTINGS = LayoutSettings()
