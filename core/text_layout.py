"""
text_layout.py

Text measurement and wrapping. There are no real font metrics here: width is
estimated as ``len(text) * avg_char_width_px``. That formula is frozen; output
of every widget with text depends on it byte for byte.
"""

from __future__ import annotations

import re
from typing import List, Optional

from core.theme import (
    FONT,
    LABEL_AVG_CHAR_WIDTH_PX,
    LINE_HEIGHT_EM,
    PARENTHETICAL_WRAP_MIN_CHARS,
    TITLE_AVG_CHAR_WIDTH_PX,
    TITLE_TOP_PADDING_PX,
)

_PARENTHETICAL = re.compile(r"^(?P<main>.*\S)\s+(?P<paren>\([^()]*\))$")


def estimate_text_width(text: str, avg_char_width_px: float = LABEL_AVG_CHAR_WIDTH_PX) -> float:
    return len(text) * avg_char_width_px


def wrap_text(
    text: str,
    max_width_px: float,
    avg_char_width_px: float = LABEL_AVG_CHAR_WIDTH_PX,
) -> List[str]:
    """
    Split text into at most two lines.

    Rules, applied in order:
        1. "<main> (<parenthetical>)" longer than 36 characters becomes
           [main, "(parenthetical)"].
        2. Text estimated wider than ``max_width_px`` splits at the first word
           boundary whose running width reaches half of the total.
        3. Anything else stays on one line.
    """
    match = _PARENTHETICAL.match(text)
    if match and len(text) > PARENTHETICAL_WRAP_MIN_CHARS:
        return [match.group("main"), match.group("paren")]

    if estimate_text_width(text, avg_char_width_px) <= max_width_px:
        return [text]

    words = text.split(" ")
    if len(words) < 2:
        return [text]

    target = estimate_text_width(text, avg_char_width_px) / 2
    running = 0.0
    for index, word in enumerate(words[:-1]):
        # Separating space belongs to the word before it.
        running += estimate_text_width(word + " ", avg_char_width_px)
        if running >= target:
            return [" ".join(words[: index + 1]), " ".join(words[index + 1:])]
    return [" ".join(words[:-1]), words[-1]]


def wrapped_height(lines: List[str], font_px: float) -> float:
    return len(lines) * font_px * LINE_HEIGHT_EM


def wrap_title(title: str, max_width_px: float) -> List[str]:
    return wrap_text(title, max_width_px, TITLE_AVG_CHAR_WIDTH_PX)


def title_band_height(title: Optional[str], max_width_px: float) -> float:
    """Vertical space reserved above the plot area for a chart title."""
    if not title:
        return 0.0
    lines = wrap_title(title, max_width_px)
    return TITLE_TOP_PADDING_PX + wrapped_height(lines, FONT["size_title"])
