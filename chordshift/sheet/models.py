"""Data models for parsed chord-sheet lines.

This module defines the tokenized form of a single line of plain text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

LineType = Literal["chord", "lyric"]


@dataclass(frozen=True)
class Token:
    """A piece of a line: a word, a wrapped group or a whitespace run.

    Parameters
    ----------
    text : str
        The exact characters of the token.
    is_chord : bool
        True if the token should be transposed.
    is_separator : bool
        True for whitespace runs.

    Examples
    --------
    >>> token = Token(text="[Am]", is_chord=True)
    >>> token.is_separator
    False
    """

    text: str
    is_chord: bool = False
    is_separator: bool = False


@dataclass(frozen=True)
class ParsedLine:
    """A classified line with its tokens.

    Parameters
    ----------
    type : LineType
        ``"chord"`` or ``"lyric"``.
    tokens : tuple[Token, ...]
        Tokens whose texts concatenate back to the original line. Empty for
        a line with no visible characters.
    """

    type: LineType
    tokens: tuple[Token, ...] = ()

    @property
    def text(self) -> str:
        """Return the tokens joined back together."""
        return "".join(token.text for token in self.tokens)

    @property
    def chords(self) -> tuple[Token, ...]:
        """Return the tokens flagged as chords."""
        return tuple(token for token in self.tokens if token.is_chord)
