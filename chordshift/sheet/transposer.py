"""Document-level chord transposition.

This module provides ``transpose_details``, which runs the key preference
scan once for the whole text and then transposes every chord token line by
line, leaving everything else byte-for-byte intact.
"""

from __future__ import annotations

import logging
import re

from chordshift.pitch_class import (
    KeyContext,
    Preference,
    determine_key_preference,
    transpose_chord,
)
from chordshift.sheet.chord_detector import parse_line, split_wrapping
from chordshift.sheet.models import Token

logger = logging.getLogger(__name__)

# Root letters counted by the document-wide key preference scan
KEY_LETTER_RE = re.compile(r"[A-G][#b]?")


def document_key_context(text: str) -> KeyContext:
    """Decide sharp or flat spelling for a whole document.

    Every root-letter match in the text is counted, lyrics included.

    Examples
    --------
    >>> document_key_context("Bb  Eb  F")
    'flat'
    >>> document_key_context("")
    'sharp'
    """
    return determine_key_preference(KEY_LETTER_RE.findall(text))


def transpose_token(
    token: Token,
    semitones: int,
    preference: Preference,
    key_context: KeyContext,
) -> str:
    """Return the token text, transposed if the token is a chord."""
    if not token.is_chord:
        return token.text

    prefix, content, suffix = split_wrapping(token.text)
    return f"{prefix}{transpose_chord(content, semitones, preference, key_context)}{suffix}"


def transpose_line(
    line: str,
    semitones: int,
    preference: Preference,
    key_context: KeyContext,
) -> str:
    """Transpose the chords of a single line.

    Parameters
    ----------
    line : str
        One line of text, without its newline.
    semitones : int
        Number of semitones to transpose (positive = up).
    preference : Preference
        True for sharps, False for flats, ``"auto"`` for ``key_context``.
    key_context : KeyContext
        The document-wide spelling used in ``"auto"`` mode.

    Returns
    -------
    str
        The line with its chord tokens transposed. Blank lines are
        returned unchanged.
    """
    parsed = parse_line(line)
    if not parsed.tokens:
        return line

    return "".join(
        transpose_token(token, semitones, preference, key_context) for token in parsed.tokens
    )


def transpose_details(text: str, semitones: int, preference: Preference = "auto") -> str:
    """Transpose every chord in a chord sheet.

    This is the main entry point of the document transposer.

    Parameters
    ----------
    text : str
        Newline-delimited chord sheet. ``[Chord]`` notation and bare chord
        lines are both accepted.
    semitones : int
        Number of semitones to transpose (positive = up).
    preference : Preference
        True to spell with sharps, False with flats, ``"auto"`` to follow
        the accidentals already used in the document.

    Returns
    -------
    str
        The transposed text with exactly as many lines as the input.

    Examples
    --------
    >>> transpose_details("I [Am]feel like I am [F]floating", 2, True)
    'I [Bm]feel like I am [G]floating'
    >>> transpose_details("G   Em\\nHello there", -2, False)
    'F   Dm\\nHello there'
    """
    key_context: KeyContext = "sharp"
    if preference == "auto":
        key_context = document_key_context(text)
        logger.debug("Auto spelling resolved to %s", key_context)

    lines = text.split("\n")
    return "\n".join(transpose_line(line, semitones, preference, key_context) for line in lines)
