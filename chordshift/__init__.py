"""Chord sheet transposition and layout reconstruction.

This library shifts the chords of a plain-text chord sheet by a number of
semitones with a consistent sharp/flat spelling, and rebuilds chord-sheet
text from words positioned on a page (as extracted from a PDF text layer
or by OCR).

Examples
--------
>>> from chordshift import transpose_details, transpose_chord

>>> # Transpose a whole sheet, forcing sharps
>>> transpose_details("I [Am]feel like I am [F]floating", 2, True)
'I [Bm]feel like I am [G]floating'

>>> # Transpose a single chord, forcing flats
>>> transpose_chord("Am7/G", -2, False, "flat")
'Gm7/F'

>>> # Rebuild text from positioned words
>>> from chordshift import PositionedToken, reconstruct_page_layout
>>> tokens = [PositionedToken("G", 10, 30, 10), PositionedToken("Hello", 10, 50, 50)]
>>> reconstruct_page_layout(tokens, 800)
'G\\nHello\\n'
"""

from chordshift.config import LayoutSettings
from chordshift.layout import (
    PageLayout,
    PositionedToken,
    reconstruct_document,
    reconstruct_page_layout,
)
from chordshift.models import ChordSymbol, NoChord
from chordshift.pitch_class import (
    FLAT_NOTES,
    SHARP_NOTES,
    determine_key_preference,
    transpose_chord,
    transpose_note,
)
from chordshift.sheet import classify_line, is_chord, parse_chord, parse_line, transpose_details

__all__ = [
    "FLAT_NOTES",
    "SHARP_NOTES",
    "ChordSymbol",
    "LayoutSettings",
    "NoChord",
    "PageLayout",
    "PositionedToken",
    "classify_line",
    "determine_key_preference",
    "is_chord",
    "parse_chord",
    "parse_line",
    "reconstruct_document",
    "reconstruct_page_layout",
    "transpose_chord",
    "transpose_details",
    "transpose_note",
]
