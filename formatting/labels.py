"""
labels.py

Deterministic number and label formatting for widget output. Every coordinate
and every piece of caller text written into an SVG/HTML fragment goes through
one of these helpers so identical input always yields identical bytes.
"""

from __future__ import annotations

import html
import math
import re
from fractions import Fraction
from typing import Union

from core.errors import GeneratorInternalError

Number = Union[int, float]


# =============================================================================
# NUMBERS
# =============================================================================

def format_number(value: Number) -> str:
    """
    Format a pixel coordinate or length.

    Rounds to two decimals, strips trailing zeros and normalises ``-0``.
    NaN and Infinity never reach the output.

    Examples:
        12.0 -> "12"
        3.14159 -> "3.14"
        -0.001 -> "0"
    """
    value = float(value)
    if not math.isfinite(value):
        raise GeneratorInternalError(f"non-finite coordinate: {value!r}")
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_value(value: Union[Number, str]) -> str:
    """
    Pass a caller value through without implicit rounding.

    Strings are returned unchanged, integral numbers lose their ``.0`` and
    every other float keeps its shortest round-trip representation.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise GeneratorInternalError("boolean is not a displayable value")
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise GeneratorInternalError(f"non-finite value: {value!r}")
    if value.is_integer():
        return str(int(value))
    return repr(value)


def decimal_places(step: Number) -> int:
    """Number of decimals needed to print multiples of ``step``."""
    text = repr(float(step))
    if "e" in text or "E" in text:
        # e.g. 1e-05
        mantissa, _, exponent = text.lower().partition("e")
        digits = len(mantissa.split(".")[1]) if "." in mantissa else 0
        return max(0, digits - int(exponent))
    if "." not in text:
        return 0
    fraction = text.split(".")[1].rstrip("0")
    return len(fraction)


def format_tick_label(value: Number, decimals: int) -> str:
    text = f"{float(value):.{decimals}f}"
    if decimals:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_percent(value: Number, decimals: int) -> str:
    return f"{format_tick_label(value, decimals)}%"


def format_pi_label(value: Number) -> str:
    """
    Label a tick expressed in radians as a multiple of π.

    Values that are not a multiple of π/12 fall back to a plain decimal.

    Examples:
        math.pi -> "π"
        -math.pi / 2 -> "-π/2"
        3 * math.pi / 2 -> "3π/2"
    """
    if abs(value) < 1e-9:
        return "0"
    ratio = Fraction(value / math.pi).limit_denominator(12)
    if abs(float(ratio) * math.pi - value) > 1e-6:
        return format_tick_label(value, 2)
    sign = "-" if ratio < 0 else ""
    num, den = abs(ratio.numerator), ratio.denominator
    head = "π" if num == 1 else f"{num}π"
    if den == 1:
        return f"{sign}{head}"
    return f"{sign}{head}/{den}"


# =============================================================================
# TEXT
# =============================================================================

_MONTHS = {
    "January": "Jan", "February": "Feb", "March": "Mar", "April": "Apr",
    "June": "Jun", "July": "Jul", "August": "Aug", "September": "Sep",
    "October": "Oct", "November": "Nov", "December": "Dec",
}

_MONTH_PATTERN = re.compile(r"\b(" + "|".join(_MONTHS) + r")\b")


def abbreviate_month(label: str) -> str:
    """Shorten full month names in category labels ("January" -> "Jan")."""
    return _MONTH_PATTERN.sub(lambda m: _MONTHS[m.group(1)], label)


_LATEX_SYMBOLS = {
    r"\pi": "π",
    r"\approx": "≈",
    r"\times": "×",
    r"\div": "÷",
    r"\leq": "≤",
    r"\le": "≤",
    r"\geq": "≥",
    r"\ge": "≥",
    r"\neq": "≠",
    r"\pm": "±",
    r"\infty": "∞",
    r"\degree": "°",
    r"\cdot": "·",
    r"\sqrt": "√",
    r"\angle": "∠",
}

_SUPERSCRIPTS = {
    "0": "⁰", "1": "¹", "2": "²", "3": "³", "4": "⁴",
    "5": "⁵", "6": "⁶", "7": "⁷", "8": "⁸", "9": "⁹",
    "-": "⁻", "+": "⁺",
}

_SUBSCRIPTS = {
    "0": "₀", "1": "₁", "2": "₂", "3": "₃", "4": "₄",
    "5": "₅", "6": "₆", "7": "₇", "8": "₈", "9": "₉",
}


def clean_label(text: str) -> str:
    """
    Convert inline LaTeX in a caller label to plain text with Unicode symbols.

    Examples:
        "\\( \\pi r^2 \\)" -> "π r²"
        "\\frac{3}{4}" -> "3/4"
        "Q_1" -> "Q₁"
    """
    if not text or ("\\" not in text and "^" not in text and "_" not in text):
        return text

    text = re.sub(r"\\\(|\\\)|\\\[|\\\]", "", text)

    # Longest commands first so "\leq" wins over "\le".
    for latex in sorted(_LATEX_SYMBOLS, key=len, reverse=True):
        text = re.sub(re.escape(latex) + r"(?![A-Za-z])", _LATEX_SYMBOLS[latex], text)

    text = re.sub(r"\\frac\{([^}]+)\}\{([^}]+)\}", r"\1/\2", text)

    def replace_superscript(match: re.Match) -> str:
        exp = match.group(1) or match.group(2)
        if all(c in _SUPERSCRIPTS for c in exp):
            return "".join(_SUPERSCRIPTS[c] for c in exp)
        return f"^({exp})"

    text = re.sub(r"\^(?:(\d)(?!\d)|\{([^}]+)\})", replace_superscript, text)

    def replace_subscript(match: re.Match) -> str:
        sub = match.group(1) or match.group(2)
        if all(c in _SUBSCRIPTS for c in sub):
            return "".join(_SUBSCRIPTS[c] for c in sub)
        return match.group(0)

    text = re.sub(r"(?<=[A-Za-z])_(?:(\d)(?!\d)|\{(\d+)\})", replace_subscript, text)

    text = re.sub(r"\s+", " ", text)
    return text.strip()


def escape_text(text: str) -> str:
    """Escape caller text for an SVG/HTML text node or attribute."""
    return html.escape(text, quote=True)


def display_text(text: str) -> str:
    return escape_text(clean_label(text))
