"""Pitch class arithmetic and enharmonic spelling for transposition.

This module maps note names to pitch classes (0-11), shifts them by a
number of semitones and spells the result from either the sharp or the
flat note table.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Literal

Preference = bool | Literal["auto"]
KeyContext = Literal["sharp", "flat"]

# Pitch class to note name (index 0 = C)
SHARP_NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NOTES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

NO_CHORD = "N.C."

# Leading root of a chord token: letter plus optional accidental
ROOT_RE = re.compile(r"^([A-G][#b]?)(.*)$", re.DOTALL)

_SHARP_LOOKUP = [name.upper() for name in SHARP_NOTES]
_FLAT_LOOKUP = [name.upper() for name in FLAT_NOTES]


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    The lookup is case-insensitive and tries the sharp table first.

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not in either table.

    Examples
    --------
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("bb")
    10
    """
    key = note.upper()
    if key in _SHARP_LOOKUP:
        return _SHARP_LOOKUP.index(key)
    if key in _FLAT_LOOKUP:
        return _FLAT_LOOKUP.index(key)
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int, use_sharps: bool = True) -> str:
    """Spell a pitch class from the sharp or flat table.

    Parameters
    ----------
    pc : int
        Any integer; it is reduced modulo 12.
    use_sharps : bool
        Spell from ``SHARP_NOTES`` when True, ``FLAT_NOTES`` otherwise.

    Returns
    -------
    str
        The note name.

    Examples
    --------
    >>> pc_to_note(-1)
    'B'
    >>> pc_to_note(10, use_sharps=False)
    'Bb'
    """
    table = SHARP_NOTES if use_sharps else FLAT_NOTES
    return table[pc % 12]


def uses_sharps(preference: Preference, key_context: KeyContext = "sharp") -> bool:
    """Resolve a spelling preference to a table choice.

    An explicit True/False forces sharps/flats; ``"auto"`` defers to the
    key context.
    """
    if preference == "auto":
        return key_context == "sharp"
    return bool(preference)


def transpose_note(
    note: str,
    semitones: int,
    preference: Preference,
    key_context: KeyContext = "sharp",
) -> str:
    """Transpose a single note name by a number of semitones.

    Parameters
    ----------
    note : str
        The note name. ``"N.C."`` and unknown names are returned unchanged.
    semitones : int
        Number of semitones (positive = up). Any integer is accepted.
    preference : Preference
        True for sharps, False for flats, ``"auto"`` to follow key_context.
    key_context : KeyContext
        The spelling used in ``"auto"`` mode.

    Returns
    -------
    str
        The transposed note name.

    Examples
    --------
    >>> transpose_note("C", 2, True, "sharp")
    'D'
    >>> transpose_note("C", -1, "auto", "flat")
    'B'
    >>> transpose_note("A", 1, False)
    'Bb'
    """
    if note == NO_CHORD:
        return note

    try:
        pc = note_to_pc(note)
    except ValueError:
        return note

    return pc_to_note(transpose_pc(pc, semitones), uses_sharps(preference, key_context))


def determine_key_preference(chord_letters: Iterable[str]) -> KeyContext:
    """Pick a document-wide spelling from the accidentals in use.

    Each item counts once towards sharps if it contains ``#`` and once
    towards flats if it contains ``b``. Flats win only on a strict majority.

    Parameters
    ----------
    chord_letters : Iterable[str]
        Root-letter matches collected from the whole document.

    Returns
    -------
    KeyContext
        ``"flat"`` or ``"sharp"``.

    Examples
    --------
    >>> determine_key_preference(["Bb", "Eb", "F"])
    'flat'
    >>> determine_key_preference(["Bb", "F#"])
    'sharp'
    >>> determine_key_preference([])
    'sharp'
    """
    sharp_count = 0
    flat_count = 0
    for letters in chord_letters:
        if "#" in letters:
            sharp_count += 1
        if "b" in letters:
            flat_count += 1
    return "flat" if flat_count > sharp_count else "sharp"


def transpose_chord(
    token: str,
    semitones: int,
    preference: Preference = "auto",
    forced_context: KeyContext | None = None,
) -> str:
    """Transpose a chord token such as "Am7/G".

    The root is shifted and the quality is kept as written. After a slash,
    the bass is shifted only when it is a note on its own; otherwise the
    whole remainder is kept.

    Parameters
    ----------
    token : str
        The chord text without bracket delimiters.
    semitones : int
        Number of semitones to transpose (positive = up).
    preference : Preference
        True for sharps, False for flats, ``"auto"`` for the key context.
    forced_context : KeyContext | None
        Document-wide key context. When None, the context is ``"flat"`` if
        the root is flat-spelled and ``"sharp"`` otherwise.

    Returns
    -------
    str
        The transposed chord, or ``token`` unchanged if it has no root.

    Examples
    --------
    >>> transpose_chord("Am7/G", -2, False, "flat")
    'Gm7/F'
    >>> transpose_chord("Bb", 2)
    'C'
    >>> transpose_chord("Eb", 1)
    'E'
    >>> transpose_chord("Hello", 3)
    'Hello'
    """
    match = ROOT_RE.match(token)
    if not match:
        return token

    root, rest = match.group(1), match.group(2)
    context: KeyContext = forced_context or ("flat" if "b" in root else "sharp")
    new_root = transpose_note(root, semitones, preference, context)

    if "/" in rest:
        quality, _, bass = rest.partition("/")
        try:
            note_to_pc(bass)
        except ValueError:
            return f"{new_root}{rest}"
        new_bass = transpose_note(bass, semitones, preference, context)
        return f"{new_root}{quality}/{new_bass}"

    return f"{new_root}{rest}"


def transpose_pc(pc: int, semitones: int) -> int:
    """Shift a pitch class, wrapping into 0-11.

    Examples
    --------
    >>> transpose_pc(2, -5)
    9
    """
    return (pc + semitones) % 12
