"""Adapters from extractor output to positioned tokens.

Text-layer and OCR extractors report word positions in their own shapes.
These helpers normalize them to ``PositionedToken`` with y increasing
downward. They never call an extractor themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from chordshift.layout.models import PositionedToken

logger = logging.getLogger(__name__)

# Margin added past the right-most word when the page width is unknown
VIEWPORT_MARGIN = 50.0
DEFAULT_VIEWPORT_WIDTH = 1000.0

# Upscale factor applied to images before OCR
DEFAULT_OCR_SCALE = 2.5


def tokens_from_pdf_items(
    items: Iterable[Mapping[str, Any]],
    page_height: float,
) -> list[PositionedToken]:
    """Convert PDF text-layer items to positioned tokens.

    Items follow the pdf.js ``getTextContent`` shape: ``str``, a
    ``transform`` matrix whose elements 4 and 5 are the x/y origin, and
    ``width``. PDF y grows upward, so it is inverted against the page
    height.

    Parameters
    ----------
    items : Iterable[Mapping[str, Any]]
        Text-layer items of one page.
    page_height : float
        Page height in the same units as the items.

    Returns
    -------
    list[PositionedToken]
        Tokens in item order. Items missing a field are skipped.

    Examples
    --------
    >>> items = [{"str": "G", "transform": [1, 0, 0, 1, 72, 700], "width": 8}]
    >>> tokens_from_pdf_items(items, 792)
    [PositionedToken(text='G', x=72.0, y=92.0, width=8.0)]
    """
    tokens: list[PositionedToken] = []
    for item in items:
        try:
            transform: Sequence[float] = item["transform"]
            token = PositionedToken(
                text=str(item["str"]),
                x=float(transform[4]),
                y=float(page_height) - float(transform[5]),
                width=float(item["width"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.debug("Skipping malformed text item %r: %s", item, e)
            continue
        tokens.append(token)
    return tokens


def tokens_from_ocr_words(
    words: Iterable[Mapping[str, Any]],
    scale: float = DEFAULT_OCR_SCALE,
) -> list[PositionedToken]:
    """Convert OCR word boxes to positioned tokens.

    Words carry ``text`` and a ``bbox`` with ``x0``, ``y0`` and ``x1``
    measured on an image upscaled by ``scale``; coordinates are scaled
    back down to the original image size.

    Parameters
    ----------
    words : Iterable[Mapping[str, Any]]
        OCR word records.
    scale : float
        The upscale factor used before recognition.

    Returns
    -------
    list[PositionedToken]
        Tokens in word order. Words missing a field are skipped.

    Examples
    --------
    >>> words = [{"text": "Am", "bbox": {"x0": 250, "y0": 100, "x1": 300}}]
    >>> tokens_from_ocr_words(words)
    [PositionedToken(text='Am', x=100.0, y=40.0, width=20.0)]
    """
    tokens: list[PositionedToken] = []
    for word in words:
        try:
            bbox = word["bbox"]
            x0 = float(bbox["x0"])
            token = PositionedToken(
                text=str(word["text"]),
                x=x0 / scale,
                y=float(bbox["y0"]) / scale,
                width=(float(bbox["x1"]) - x0) / scale,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Skipping malformed OCR word %r: %s", word, e)
            continue
        tokens.append(token)
    return tokens


def estimate_viewport_width(tokens: Sequence[PositionedToken]) -> float:
    """Estimate a page width from the right-most word.

    Examples
    --------
    >>> estimate_viewport_width([PositionedToken("G", 100, 0, 10)])
    160.0
    >>> estimate_viewport_width([])
    1000.0
    """
    if not tokens:
        return DEFAULT_VIEWPORT_WIDTH
    return max(token.end_x for token in tokens) + VIEWPORT_MARGIN
