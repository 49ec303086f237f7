"""Layout-preserving tokenizer for chord sheets.

This module splits a line into words, bracketed groups and whitespace
runs without losing a single character, so a line can be rebuilt exactly
by concatenating its parts.
"""

import re

# Whitespace runs, [..] and (..) groups and bare slashes are kept as parts
SPLIT_RE = re.compile(r"(\s+|\[.*?\]|\(.*?\)|/)")


def split_line(line: str) -> list[str]:
    """Split a line into parts, keeping every separator.

    Parameters
    ----------
    line : str
        The line to split. Should not include newline characters.

    Returns
    -------
    list[str]
        Non-empty parts whose concatenation equals ``line``.

    Examples
    --------
    >>> split_line("I [Am]feel")
    ['I', ' ', '[Am]', 'feel']

    >>> split_line("D/F#  G")
    ['D', '/', 'F#', '  ', 'G']
    """
    return [part for part in SPLIT_RE.split(line) if part]


def is_whitespace(part: str) -> bool:
    """Return True if the part has no visible characters."""
    return not part.strip()
