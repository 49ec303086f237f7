#!/usr/bin/env python3
"""CLI tool to rebuild chord-sheet text from positioned words.

The input is JSON describing one page:

    {"viewport_width": 800, "tokens": [{"text": "G", "x": 100, "y": 30, "width": 10}, ...]}

or several pages:

    {"pages": [{"viewport_width": 800, "tokens": [...]}, ...]}

A page without ``viewport_width`` gets one estimated from its words.

Usage:
    python examples/reconstruct_layout.py <input_json> [-o output] [-s semitones]

Examples:
    python examples/reconstruct_layout.py testdata/page.json
    python examples/reconstruct_layout.py testdata/page.json -s 2 --sharp
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from chordshift import PageLayout, PositionedToken, reconstruct_document, transpose_details
from chordshift.layout import estimate_viewport_width
from chordshift.pitch_class import Preference


def page_from_dict(data: dict[str, Any]) -> PageLayout:
    """Build a PageLayout from its JSON form."""
    tokens = tuple(
        PositionedToken(
            text=str(item["text"]),
            x=float(item["x"]),
            y=float(item["y"]),
            width=float(item["width"]),
        )
        for item in data.get("tokens", [])
    )
    width = data.get("viewport_width")
    viewport_width = float(width) if width is not None else estimate_viewport_width(tokens)
    return PageLayout(tokens=tokens, viewport_width=viewport_width)


def load_pages(input_path: Path) -> list[PageLayout]:
    """Load every page described by a JSON file."""
    data = json.loads(input_path.read_text(encoding="utf-8"))
    if "pages" in data:
        return [page_from_dict(page) for page in data["pages"]]
    return [page_from_dict(data)]


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
        description="Rebuild chord-sheet text from positioned words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s testdata/page.json
  %(prog)s testdata/page.json -o sheet.txt
  %(prog)s testdata/page.json -s -2 --flat
        """,
    )
    parser.add_argument(
        "input",
        type=Path,
        help="Input JSON file with positioned tokens",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output text file (default: stdout)",
    )
    parser.add_argument(
        "-s", "--semitones",
        type=int,
        default=0,
        help="Transpose the rebuilt text by this many semitones",
    )
    spelling = parser.add_mutually_exclusive_group()
    spelling.add_argument("--sharp", action="store_true", help="Spell chords with sharps")
    spelling.add_argument("--flat", action="store_true", help="Spell chords with flats")
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

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        pages = load_pages(args.input)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        print(f"Error parsing file: {e}", file=sys.stderr)
        return 1

    text = reconstruct_document(pages)

    if args.semitones or args.sharp or args.flat:
        text = transpose_details(text, args.semitones, resolve_preference(args))

    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote output to {args.output}")
    else:
        sys.stdout.write(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
