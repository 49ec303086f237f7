#!/usr/bin/env python3
"""CLI tool to transpose a plain-text chord sheet.

Usage:
    python examples/transpose_sheet.py <input_file> -s <semitones> [--sharp | --flat]

Examples:
    python examples/transpose_sheet.py testdata/amazing_grace.txt -s 2
    python examples/transpose_sheet.py testdata/amazing_grace.txt -s -3 --flat -o out.txt
    cat song.txt | python examples/transpose_sheet.py - -s 5
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from chordshift import transpose_details
from chordshift.pitch_class import Preference


def read_input(source: str) -> str:
    """Read the sheet from a file path, or stdin for "-"."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def resolve_preference(args: argparse.Namespace) -> Preference:
    """Map the spelling flags to a transposition preference."""
    if args.sharp:
        return True
    if args.flat:
        return False
    return "auto"


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Transpose the chords of a plain-text chord sheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s testdata/amazing_grace.txt -s 2
  %(prog)s testdata/amazing_grace.txt -s -3 --flat
  %(prog)s - -s 5 < song.txt
        """,
    )
    parser.add_argument(
        "input",
        help="Input chord sheet, or - for stdin",
    )
    parser.add_argument(
        "-s", "--semitones",
        type=int,
        required=True,
        help="Number of semitones to transpose (negative = down)",
    )
    spelling = parser.add_mutually_exclusive_group()
    spelling.add_argument(
        "--sharp",
        action="store_true",
        help="Spell every chord with sharps",
    )
    spelling.add_argument(
        "--flat",
        action="store_true",
        help="Spell every chord with flats",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    result = transpose_details(text, args.semitones, resolve_preference(args))

    if args.output:
        args.output.write_text(result, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        sys.stdout.write(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
