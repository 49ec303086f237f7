"""Chord symbol data models for chordshift.

This module provides the tagged result of the chord grammar parser: either
a pitched ``ChordSymbol`` or the ``NoChord`` marker.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChordSymbol:
    """A chord symbol split into its grammatical parts.

    Parameters
    ----------
    root : str
        The root letter (A-G).
    accidental : str
        ``"#"``, ``"b"`` or ``""``.
    quality : str
        The quality/extension run as written (e.g., "m7", "add9", "").
    bass : str | None
        The slash bass note including its accidental, for slash chords.

    Examples
    --------
    >>> chord = ChordSymbol(root="F", accidental="#", quality="m7", bass="E")
    >>> chord.note
    'F#'
    >>> str(chord)
    'F#m7/E'
    """

    root: str
    accidental: str = ""
    quality: str = ""
    bass: str | None = None

    @property
    def note(self) -> str:
        """Return the root note with its accidental (e.g., "Bb")."""
        return f"{self.root}{self.accidental}"

    @property
    def is_slash_chord(self) -> bool:
        """Return True when a bass note is written after a slash."""
        return self.bass is not None

    def __str__(self) -> str:
        """Return the chord spelled as it was written."""
        result = f"{self.note}{self.quality}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result


@dataclass(frozen=True)
class NoChord:
    """The "no chord" marker (``N.C.`` or ``NC``).

    Parameters
    ----------
    text : str
        The marker as written.
    """

    text: str = "N.C."

    def __str__(self) -> str:
        return self.text


ParsedChord = ChordSymbol | NoChord
