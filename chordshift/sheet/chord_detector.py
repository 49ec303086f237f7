"""Chord detection and line classification for chord sheets.

This module provides a small chord grammar scanner, the per-token chord
test and the ratio heuristic that decides whether a line holds chords or
lyrics.
"""

from __future__ import annotations

import re

from chordshift.models import ChordSymbol, NoChord, ParsedChord
from chordshift.sheet.models import LineType, ParsedLine, Token
from chordshift.sheet.tokenizer import is_whitespace, split_line

# Constants for line classification
CHORD_LINE_THRESHOLD = 0.5
BRACKETED_LINE_THRESHOLD = 0.4

ROOT_LETTERS = "ABCDEFG"
ACCIDENTALS = "#b"
DIGITS = "0123456789"

# Quality/extension terms, longest first so "maj" wins over "m"
QUALITY_TERMS: tuple[str, ...] = ("maj", "dim", "aug", "sus", "add", "11", "13", "m", "7", "9", "5")

NO_CHORD_MARKERS: frozenset[str] = frozenset({"N.C.", "NC"})

# Words that collide with chord shapes. True = always a chord, False = never.
# "A" and "Am" are accepted even though they are common English words.
AMBIGUOUS_WORDS: dict[str, bool] = {
    "A": True,
    "a": True,
    "Am": True,
    "am": True,
    "I": False,
}

WRAPPED_RE = re.compile(r"^(?:\[.+\]|\(.+\))$", re.DOTALL)

OPENERS = "[("
CLOSERS = "])"


def _scan_note(text: str, pos: int) -> tuple[str | None, int]:
    """Scan a note name (letter plus optional accidental) at ``pos``."""
    if pos >= len(text) or text[pos] not in ROOT_LETTERS:
        return None, pos
    end = pos + 1
    if end < len(text) and text[end] in ACCIDENTALS:
        end += 1
    return text[pos:end], end


def _scan_quality(text: str, pos: int) -> int:
    """Consume a run of quality terms followed by trailing digits."""
    n = len(text)
    while pos < n:
        for term in QUALITY_TERMS:
            if text.startswith(term, pos):
                pos += len(term)
                break
        else:
            break
    while pos < n and text[pos] in DIGITS:
        pos += 1
    return pos


def parse_chord(text: str) -> ParsedChord | None:
    """Parse a chord symbol into its parts.

    Grammar: root letter, optional ``#``/``b``, a run of quality terms
    (``maj dim aug sus add m 11 13 7 9 5``), optional digits, then an
    optional ``/`` and bass note. ``N.C.`` and ``NC`` parse as NoChord.

    Parameters
    ----------
    text : str
        The chord text without bracket delimiters.

    Returns
    -------
    ChordSymbol | NoChord | None
        The parsed chord, or None if the text does not follow the grammar.

    Examples
    --------
    >>> parse_chord("Cadd9")
    ChordSymbol(root='C', accidental='', quality='add9', bass=None)
    >>> parse_chord("D/F#").bass
    'F#'
    >>> parse_chord("Hello") is None
    True
    """
    if text in NO_CHORD_MARKERS:
        return NoChord(text)

    note, pos = _scan_note(text, 0)
    if note is None:
        return None

    quality_start = pos
    pos = _scan_quality(text, pos)
    quality = text[quality_start:pos]

    bass = None
    if pos < len(text) and text[pos] == "/":
        bass, pos = _scan_note(text, pos + 1)
        if bass is None:
            return None

    if pos != len(text):
        return None

    return ChordSymbol(root=note[0], accidental=note[1:], quality=quality, bass=bass)


def split_wrapping(token: str) -> tuple[str, str, str]:
    """Split one leading ``[``/``(`` and one trailing ``]``/``)`` off a token.

    Returns
    -------
    tuple[str, str, str]
        ``(prefix, content, suffix)``; prefix and suffix may be empty.

    Examples
    --------
    >>> split_wrapping("[Am]")
    ('[', 'Am', ']')
    >>> split_wrapping("G")
    ('', 'G', '')
    """
    prefix = ""
    suffix = ""
    content = token
    if content and content[0] in OPENERS:
        prefix, content = content[0], content[1:]
    if content and content[-1] in CLOSERS:
        suffix, content = content[-1], content[:-1]
    return prefix, content, suffix


def is_wrapped(token: str) -> bool:
    """Return True for ``[...]`` or ``(...)`` with non-empty content."""
    return bool(WRAPPED_RE.match(token.strip()))


def is_chord(text: str) -> bool:
    """Check if a token is shaped like a chord.

    Bracket/paren wrapping is ignored. Ambiguous words are decided by
    ``AMBIGUOUS_WORDS`` before the grammar is consulted.

    Parameters
    ----------
    text : str
        The token to check.

    Returns
    -------
    bool
        True if the token reads as a chord, False otherwise.

    Examples
    --------
    >>> is_chord("Gm7")
    True
    >>> is_chord("[F#m]")
    True
    >>> is_chord("am")
    True
    >>> is_chord("I")
    False
    """
    _, clean, _ = split_wrapping(text.strip())
    if not clean:
        return False

    if clean in AMBIGUOUS_WORDS:
        return AMBIGUOUS_WORDS[clean]

    return parse_chord(clean) is not None


def classify_line(line: str, parts: list[str] | None = None) -> LineType:
    """Classify a line as chords or lyrics.

    A line is a chord line when more than half of its visible tokens are
    chords, or more than 40% when at least one token is wrapped in
    brackets or parentheses.

    Parameters
    ----------
    line : str
        The line to classify.
    parts : list[str] | None
        Pre-split parts, or None to split internally.

    Returns
    -------
    LineType
        ``"chord"`` or ``"lyric"``. Blank lines are ``"lyric"``.

    Examples
    --------
    >>> classify_line("G   D/F#   Em")
    'chord'
    >>> classify_line("[G] [D] [Em]")
    'chord'
    >>> classify_line("I [Am]feel like I am [F]floating")
    'lyric'
    """
    if parts is None:
        parts = split_line(line)

    visible = [part.strip() for part in parts if not is_whitespace(part)]
    if not visible:
        return "lyric"

    sure_chords = sum(1 for part in visible if is_wrapped(part))
    potential_chords = sum(1 for part in visible if is_chord(part))
    ratio = potential_chords / len(visible)

    threshold = BRACKETED_LINE_THRESHOLD if sure_chords > 0 else CHORD_LINE_THRESHOLD
    return "chord" if ratio > threshold else "lyric"


def classify_token(part: str, line_type: LineType) -> Token:
    """Flag a single part of a line.

    Wrapped tokens are always chords. Bare tokens are chords only on a
    chord line.
    """
    if is_whitespace(part):
        return Token(text=part, is_separator=True)

    if is_wrapped(part):
        return Token(text=part, is_chord=True)

    return Token(text=part, is_chord=line_type == "chord" and is_chord(part))


def parse_line(line: str) -> ParsedLine:
    """Tokenize and classify a line of plain text.

    Parameters
    ----------
    line : str
        The line to parse.

    Returns
    -------
    ParsedLine
        The line type and its flagged tokens.

    Examples
    --------
    >>> parsed = parse_line("I [Am]feel like I am")
    >>> parsed.type
    'lyric'
    >>> [t.text for t in parsed.chords]
    ['[Am]']
    """
    parts = split_line(line)
    if all(is_whitespace(part) for part in parts):
        return ParsedLine(type="lyric")

    line_type = classify_line(line, parts)
    tokens = tuple(classify_token(part, line_type) for part in parts)
    return ParsedLine(type=line_type, tokens=tokens)
