"""Plain-text chord sheet tokenizing, classification and transposition.

This module provides functionality to split chord-sheet lines into
layout-preserving tokens, decide which lines hold chords, and transpose
every chord in a document with a consistent enharmonic spelling.
"""

from chordshift.sheet.chord_detector import (
    AMBIGUOUS_WORDS,
    classify_line,
    is_chord,
    is_wrapped,
    parse_chord,
    parse_line,
)
from chordshift.sheet.models import LineType, ParsedLine, Token
from chordshift.sheet.tokenizer import split_line
from chordshift.sheet.transposer import (
    document_key_context,
    transpose_details,
    transpose_line,
)

__all__ = [
    "AMBIGUOUS_WORDS",
    "LineType",
    "ParsedLine",
    "Token",
    "classify_line",
    "document_key_context",
    "is_chord",
    "is_wrapped",
    "parse_chord",
    "parse_line",
    "split_line",
    "transpose_details",
    "transpose_line",
]
