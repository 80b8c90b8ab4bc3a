"""
fraction_models.py

Visual fraction comparisons: circle pieces, tape diagrams and equivalent
fraction models.

Numerator and denominator fully determine the geometry. The comparison
symbol is drawn exactly as given; whether it is arithmetically true is the
caller's concern.
"""

from __future__ import annotations

import logging
from typing import List

from core.canvas import Canvas, sector_path
from core.errors import InvalidDimensionsError, InvalidRangeError
from core.theme import COLORS, FONT, PADDING, STROKE
from generators.registry import WidgetType, register_widget
from schemas.fractions import (
    CirclePieceComparisonDiagramProps,
    EquivalentFractionModelProps,
    FractionSpec,
    Tape,
    TapeDiagramProps,
)

logger = logging.getLogger(__name__)

SHADE_OPACITY = 0.3
FRACTION_FONT_PX = 18
TAPE_HEIGHT = 40
TAPE_GAP = 30
TAPE_LABEL_WIDTH = 80
BRACE_SPACE = 36


def _check_fraction(widget_type: str, name: str, fraction: FractionSpec) -> None:
    if fraction.numerator > fraction.denominator:
        logger.error("%s: %s numerator %s exceeds denominator %s", widget_type, name,
                     fraction.numerator, fraction.denominator)
        raise InvalidRangeError(
            f"{name}: numerator ({fraction.numerator}) cannot exceed denominator ({fraction.denominator})"
        )


def _draw_fraction_label(canvas: Canvas, cx: float, y: float, fraction: FractionSpec) -> None:
    digits = max(len(str(fraction.numerator)), len(str(fraction.denominator)))
    half = digits * 10 / 2 + 2
    canvas.draw_text(cx, y - 8, str(fraction.numerator), font_size=FRACTION_FONT_PX,
                     font_weight=FONT["weight_bold"])
    canvas.draw_line(cx - half, y, cx + half, y, stroke=COLORS["black"], stroke_width=STROKE["base"])
    canvas.draw_text(cx, y + 20, str(fraction.denominator), font_size=FRACTION_FONT_PX,
                     font_weight=FONT["weight_bold"])


def _draw_comparison(canvas: Canvas, x: float, y: float, symbol: str) -> None:
    canvas.draw_text(x, y, symbol, font_size=FONT["size_symbol"], font_weight=FONT["weight_bold"],
                     baseline="middle", css_class="comparison")


def _draw_circle_pieces(canvas: Canvas, cx: float, cy: float, r: float, fraction: FractionSpec) -> None:
    step = 360 / fraction.denominator
    for index in range(fraction.denominator):
        start = -90 + index * step
        shaded = index < fraction.numerator
        canvas.draw_path(sector_path(cx, cy, r, start, start + step),
                         fill=fraction.color if shaded else "none",
                         fill_opacity=SHADE_OPACITY if shaded else None,
                         stroke=COLORS["black"], stroke_width=STROKE["base"])


def _draw_rectangle_strips(canvas: Canvas, x: float, y: float, width: float, height: float,
                           fraction: FractionSpec) -> None:
    strip = width / fraction.denominator
    for index in range(fraction.denominator):
        shaded = index < fraction.numerator
        canvas.draw_rect(x + index * strip, y, strip, height,
                         fill=fraction.color if shaded else "none",
                         fill_opacity=SHADE_OPACITY if shaded else None,
                         stroke=COLORS["black"], stroke_width=STROKE["base"])


# =============================================================================
# CIRCLE PIECES
# =============================================================================

@register_widget(WidgetType.CIRCLE_PIECE_COMPARISON_DIAGRAM, CirclePieceComparisonDiagramProps)
def generate_circle_piece_comparison_diagram(props: CirclePieceComparisonDiagramProps) -> str:
    _check_fraction("circlePieceComparisonDiagram", "leftFraction", props.left_fraction)
    _check_fraction("circlePieceComparisonDiagram", "rightFraction", props.right_fraction)

    label_space = PADDING * 4 if props.show_fraction_labels else PADDING * 2
    diameter = min(props.width * 0.4, props.height - label_space)
    if diameter <= 0:
        logger.error("circlePieceComparisonDiagram canvas %sx%s too small", props.width, props.height)
        raise InvalidDimensionsError("canvas too small for the circle models")
    r = diameter / 2
    cy = PADDING + r
    left_cx = PADDING + r
    right_cx = props.width - PADDING - r

    canvas = Canvas(props.width, props.height, id_prefix="circlePieceComparisonDiagram")
    canvas.begin_group(css_class="models")
    _draw_circle_pieces(canvas, left_cx, cy, r, props.left_fraction)
    _draw_circle_pieces(canvas, right_cx, cy, r, props.right_fraction)
    canvas.end_group()

    _draw_comparison(canvas, props.width / 2, cy, props.comparison)

    if props.show_fraction_labels:
        canvas.begin_group(css_class="labels")
        label_y = cy + r + PADDING * 1.5
        _draw_fraction_label(canvas, left_cx, label_y, props.left_fraction)
        _draw_fraction_label(canvas, right_cx, label_y, props.right_fraction)
        canvas.end_group()
    return canvas.finalize()


# =============================================================================
# TAPE DIAGRAM
# =============================================================================

def _tape_total(widget_type: str, name: str, tape: Tape) -> float:
    if not tape.segments:
        logger.error("%s: %s has no segments", widget_type, name)
        raise InvalidDimensionsError(f"{name} needs at least one segment")
    return sum(segment.length for segment in tape.segments)


@register_widget(WidgetType.TAPE_DIAGRAM, TapeDiagramProps)
def generate_tape_diagram(props: TapeDiagramProps) -> str:
    """
    One or two horizontal tapes on a shared length scale, so equal totals
    draw equal widths. An optional brace above the tapes carries the total
    label; an optional comparison symbol sits to their right.
    """
    tapes: List[Tape] = [props.top_tape]
    totals = [_tape_total("tapeDiagram", "topTape", props.top_tape)]
    if props.bottom_tape is not None:
        tapes.append(props.bottom_tape)
        totals.append(_tape_total("tapeDiagram", "bottomTape", props.bottom_tape))

    comparison_space = 50 if props.comparison is not None else 0
    left = TAPE_LABEL_WIDTH
    available = props.width - left - PADDING - comparison_space
    top = PADDING + (BRACE_SPACE if props.total_label else 0)
    needed = top + len(tapes) * TAPE_HEIGHT + (len(tapes) - 1) * TAPE_GAP + PADDING
    if available <= 0 or needed > props.height:
        logger.error("tapeDiagram canvas %sx%s too small", props.width, props.height)
        raise InvalidDimensionsError("canvas too small for the tapes")
    unit = available / max(totals)

    canvas = Canvas(props.width, props.height, id_prefix="tapeDiagram")
    canvas.begin_group(css_class="tapes")
    for row, tape in enumerate(tapes):
        y = top + row * (TAPE_HEIGHT + TAPE_GAP)
        canvas.draw_text(left - 10, y + TAPE_HEIGHT / 2, tape.label, anchor="end", baseline="middle",
                         font_weight=FONT["weight_bold"])
        x = left
        for segment in tape.segments:
            width = segment.length * unit
            canvas.draw_rect(x, y, width, TAPE_HEIGHT, fill=tape.color, fill_opacity=SHADE_OPACITY,
                             stroke=COLORS["black"], stroke_width=STROKE["base"])
            if segment.label:
                canvas.draw_text(x + width / 2, y + TAPE_HEIGHT / 2, segment.label, baseline="middle")
            x += width
    canvas.end_group()

    if props.total_label:
        right = left + max(totals) * unit
        brace_y = top - 12
        canvas.begin_group(css_class="brace")
        canvas.draw_polyline(
            [(left, brace_y + 8), (left, brace_y), (right, brace_y), (right, brace_y + 8)],
            stroke=COLORS["black"], stroke_width=STROKE["base"],
        )
        canvas.draw_text((left + right) / 2, brace_y - 6, props.total_label, font_weight=FONT["weight_bold"])
        canvas.end_group()

    if props.comparison is not None:
        span = len(tapes) * TAPE_HEIGHT + (len(tapes) - 1) * TAPE_GAP
        _draw_comparison(canvas, props.width - PADDING - comparison_space / 2, top + span / 2,
                         props.comparison)
    return canvas.finalize()


# =============================================================================
# EQUIVALENT FRACTIONS
# =============================================================================

@register_widget(WidgetType.EQUIVALENT_FRACTION_MODEL, EquivalentFractionModelProps)
def generate_equivalent_fraction_model(props: EquivalentFractionModelProps) -> str:
    _check_fraction("equivalentFractionModel", "leftFraction", props.left_fraction)
    _check_fraction("equivalentFractionModel", "rightFraction", props.right_fraction)

    model_width = props.width * 0.35
    model_height = props.height - PADDING * 5
    if model_width <= 0 or model_height <= 0:
        logger.error("equivalentFractionModel canvas %sx%s too small", props.width, props.height)
        raise InvalidDimensionsError("canvas too small for the fraction models")
    left_x = PADDING
    right_x = props.width - PADDING - model_width
    top = PADDING

    canvas = Canvas(props.width, props.height, id_prefix="equivalentFractionModel")
    canvas.begin_group(css_class="models")
    if props.shape == "rectangle":
        _draw_rectangle_strips(canvas, left_x, top, model_width, model_height, props.left_fraction)
        _draw_rectangle_strips(canvas, right_x, top, model_width, model_height, props.right_fraction)
        label_y = top + model_height + PADDING * 1.5
        center_y = top + model_height / 2
    else:
        r = min(model_width, model_height) / 2
        _draw_circle_pieces(canvas, left_x + model_width / 2, top + r, r, props.left_fraction)
        _draw_circle_pieces(canvas, right_x + model_width / 2, top + r, r, props.right_fraction)
        label_y = top + 2 * r + PADDING * 1.5
        center_y = top + r
    canvas.end_group()

    _draw_comparison(canvas, props.width / 2, center_y, props.comparison)

    canvas.begin_group(css_class="labels")
    _draw_fraction_label(canvas, left_x + model_width / 2, label_y, props.left_fraction)
    _draw_fraction_label(canvas, right_x + model_width / 2, label_y, props.right_fraction)
    canvas.end_group()
    return canvas.finalize()
