"""Layout reconstruction for positioned text extracted from pages.

This module provides functionality to rebuild monospace chord-sheet text
from words with pixel positions, keeping chords above the lyric syllables
they belong to.
"""

from chordshift.layout.models import Line, PageLayout, PositionedToken, SpatialMapEntry
from chordshift.layout.reconstructor import (
    group_lines,
    is_chord_line,
    reconstruct_document,
    reconstruct_page_layout,
    render_chord_line,
    render_grid_line,
    render_lyric_line,
)
from chordshift.layout.sources import (
    estimate_viewport_width,
    tokens_from_ocr_words,
    tokens_from_pdf_items,
)

__all__ = [
    "Line",
    "PageLayout",
    "PositionedToken",
    "SpatialMapEntry",
    "estimate_viewport_width",
    "group_lines",
    "is_chord_line",
    "reconstruct_document",
    "reconstruct_page_layout",
    "render_chord_line",
    "render_grid_line",
    "render_lyric_line",
    "tokens_from_ocr_words",
    "tokens_from_pdf_items",
]
