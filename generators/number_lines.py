"""
number_lines.py

Number-line widgets: the general number line (horizontal or vertical), the
absolute-value line, the inequality line, the double number line and the
fraction number line.

All lines reserve NUMBER_LINE_PADDING at both ends, so a value v maps to
``padding + (v - min) / (max - min) * (length - 2 * padding)``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from core.canvas import Canvas
from core.coordinate_plane import LinearScale, Tick, scale, value_ticks
from core.errors import InvalidDimensionsError, InvalidRangeError
from core.theme import COLORS, FONT, MINOR_TICK_LENGTH, NUMBER_LINE_PADDING, STROKE
from formatting.labels import format_number, format_value
from generators.registry import WidgetType, register_widget
from schemas.number_lines import (
    AbsoluteValueNumberLineProps,
    BoundedEnd,
    DoubleNumberLineProps,
    FractionNumberLineProps,
    InequalityNumberLineProps,
    NumberLineProps,
)

logger = logging.getLogger(__name__)

MAJOR_TICK_HALF = 8
MARKER_RADIUS = 6
LABEL_GAP = 25
RANGE_STROKE = 5
DOUBLE_LINE_SIDE_PADDING = 20


def _check_in_range(widget_type: str, what: str, value: float, minimum: float, maximum: float) -> None:
    if not minimum <= value <= maximum:
        logger.error("%s: %s %s outside [%s, %s]", widget_type, what, value, minimum, maximum)
        raise InvalidRangeError(f"{what} {format_value(value)} lies outside [{format_value(minimum)}, "
                                f"{format_value(maximum)}]")


def _horizontal_scale(canvas: Canvas, minimum: float, maximum: float) -> LinearScale:
    if canvas.width <= 2 * NUMBER_LINE_PADDING:
        logger.error("%s width %s too narrow", canvas.id_prefix, canvas.width)
        raise InvalidDimensionsError(f"width {format_number(canvas.width)} leaves no room for the line")
    return scale(minimum, maximum, NUMBER_LINE_PADDING, canvas.width - NUMBER_LINE_PADDING)


def _draw_horizontal_axis(canvas: Canvas, sx: LinearScale, y: float, ticks: Sequence[Tick], *,
                          arrows: bool) -> None:
    marker = canvas.add_arrow_marker("arrow", COLORS["axis"]) if arrows else None
    canvas.draw_line(sx.range_start, y, sx.range_end, y, stroke=COLORS["axis"], stroke_width=STROKE["base"],
                     marker_start=marker, marker_end=marker)
    for tick in ticks:
        x = sx(tick.value)
        canvas.draw_line(x, y - MAJOR_TICK_HALF, x, y + MAJOR_TICK_HALF, stroke=COLORS["axis"])
        canvas.draw_text(x, y + LABEL_GAP, tick.label)


# =============================================================================
# NUMBER LINE
# =============================================================================

def _minor_values(ticks: Sequence[Tick], interval: float, per_interval: int, maximum: float) -> List[float]:
    step = interval / (per_interval + 1)
    values = []
    for tick in ticks:
        for m in range(1, per_interval + 1):
            value = tick.value + m * step
            if value < maximum:
                values.append(value)
    return values


@register_widget(WidgetType.NUMBER_LINE, NumberLineProps)
def generate_number_line(props: NumberLineProps) -> str:
    """
    Number line with major/minor ticks, highlighted points and special tick
    labels. A special label replaces the numeric label at its value.
    """
    horizontal = props.orientation == "horizontal"
    length = props.width if horizontal else props.height
    if length <= 2 * NUMBER_LINE_PADDING:
        logger.error("numberLine length %s too short", length)
        raise InvalidDimensionsError(f"numberLine of length {format_number(length)} leaves no room for the line")
    canvas = Canvas(props.width, props.height, id_prefix="numberLine")
    if horizontal:
        s = scale(props.min, props.max, NUMBER_LINE_PADDING, length - NUMBER_LINE_PADDING)
    else:
        s = scale(props.min, props.max, length - NUMBER_LINE_PADDING, NUMBER_LINE_PADDING)

    ticks = value_ticks(props.min, props.max, props.tick_interval)
    minor = _minor_values(ticks, props.tick_interval, props.minor_ticks_per_interval, props.max)
    special = {label.value: label.label for label in props.special_tick_labels}
    for value in special:
        _check_in_range("numberLine", "special tick label", value, props.min, props.max)
    for point in props.points:
        _check_in_range("numberLine", "point", point.value, props.min, props.max)
    # Special labels match ticks to within a millionth of the interval.
    tolerance = props.tick_interval * 1e-6

    mid_x = props.width / 2
    mid_y = props.height / 2

    canvas.begin_group(css_class="axes")
    if horizontal:
        canvas.draw_line(s.range_start, mid_y, s.range_end, mid_y, stroke=COLORS["black"])
    else:
        canvas.draw_line(mid_x, s.range_end, mid_x, s.range_start, stroke=COLORS["black"])
    for tick in ticks:
        p = s(tick.value)
        if horizontal:
            canvas.draw_line(p, mid_y - MAJOR_TICK_HALF, p, mid_y + MAJOR_TICK_HALF, stroke=COLORS["black"])
        else:
            canvas.draw_line(mid_x - MAJOR_TICK_HALF, p, mid_x + MAJOR_TICK_HALF, p, stroke=COLORS["black"])
        if any(math.isclose(tick.value, value, abs_tol=tolerance) for value in special):
            continue
        if horizontal:
            canvas.draw_text(p, mid_y + LABEL_GAP, tick.label)
        else:
            canvas.draw_text(mid_x - 15, p + 4, tick.label, anchor="end")
    for value in minor:
        p = s(value)
        if horizontal:
            canvas.draw_line(p, mid_y - MINOR_TICK_LENGTH - 1, p, mid_y + MINOR_TICK_LENGTH + 1,
                             stroke=COLORS["black"])
        else:
            canvas.draw_line(mid_x - MINOR_TICK_LENGTH - 1, p, mid_x + MINOR_TICK_LENGTH + 1, p,
                             stroke=COLORS["black"])
    for value, label in special.items():
        p = s(value)
        if horizontal:
            canvas.draw_text(p, mid_y + LABEL_GAP, label, font_weight=FONT["weight_bold"])
        else:
            canvas.draw_text(mid_x - 15, p + 4, label, anchor="end", font_weight=FONT["weight_bold"])
    canvas.end_group()

    canvas.begin_group(css_class="points")
    for point in props.points:
        p = s(point.value)
        cx, cy = (p, mid_y) if horizontal else (mid_x, p)
        canvas.draw_circle(cx, cy, MARKER_RADIUS, fill=point.color, stroke=COLORS["black"],
                           stroke_width=STROKE["thin"])
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    for point in props.points:
        if not point.label:
            continue
        p = s(point.value)
        cx, cy = (p, mid_y) if horizontal else (mid_x, p)
        position = point.label_position
        if position == "above":
            canvas.draw_text(cx, cy - 15, point.label, baseline="middle")
        elif position == "below":
            canvas.draw_text(cx, cy + 15, point.label, baseline="middle")
        elif position == "left":
            canvas.draw_text(cx - 15, cy, point.label, anchor="end", baseline="middle")
        else:
            canvas.draw_text(cx + 15, cy, point.label, anchor="start", baseline="middle")
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.ABSOLUTE_VALUE_NUMBER_LINE, AbsoluteValueNumberLineProps)
def generate_absolute_value_number_line(props: AbsoluteValueNumberLineProps) -> str:
    """Highlight ``value`` and bracket its distance from zero."""
    canvas = Canvas(props.width, props.height, id_prefix="absoluteValueNumberLine")
    sx = _horizontal_scale(canvas, props.min, props.max)
    ticks = value_ticks(props.min, props.max, props.tick_interval)
    _check_in_range("absoluteValueNumberLine", "value", props.value, props.min, props.max)
    _check_in_range("absoluteValueNumberLine", "zero", 0.0, props.min, props.max)
    y = props.height / 2

    canvas.begin_group(css_class="axes")
    _draw_horizontal_axis(canvas, sx, y, ticks, arrows=True)
    canvas.end_group()

    zero_x = sx(0)
    value_x = sx(props.value)
    bracket_y = y - 20
    canvas.begin_group(css_class="distance")
    canvas.draw_line(zero_x, bracket_y, value_x, bracket_y, stroke=props.highlight_color,
                     stroke_width=STROKE["xxthick"])
    for x in (zero_x, value_x):
        canvas.draw_line(x, bracket_y - 5, x, bracket_y + 5, stroke=props.highlight_color,
                         stroke_width=STROKE["thick"])
    canvas.end_group()

    canvas.begin_group(css_class="points")
    canvas.draw_circle(value_x, y, MARKER_RADIUS, fill=props.highlight_color, stroke=COLORS["black"],
                       stroke_width=STROKE["thin"])
    canvas.end_group()

    if props.show_distance_label:
        distance = abs(props.value)
        unit = "unit" if distance == 1 else "units"
        canvas.begin_group(css_class="labels")
        canvas.draw_text((zero_x + value_x) / 2, bracket_y - 10, f"{format_number(distance)} {unit}",
                         fill=props.highlight_color, font_weight=FONT["weight_bold"])
        canvas.end_group()
    return canvas.finalize()


# =============================================================================
# INEQUALITY
# =============================================================================

@register_widget(WidgetType.INEQUALITY_NUMBER_LINE, InequalityNumberLineProps)
def generate_inequality_number_line(props: InequalityNumberLineProps) -> str:
    """
    Shade solution ranges. Bounded ends get an open or closed circle;
    unbounded ends run to the line's edge and finish in an arrowhead.
    """
    canvas = Canvas(props.width, props.height, id_prefix="inequalityNumberLine")
    sx = _horizontal_scale(canvas, props.min, props.max)
    ticks = value_ticks(props.min, props.max, props.tick_interval)
    y = props.height / 2
    for index, r in enumerate(props.ranges):
        for name, end in (("start", r.start), ("end", r.end)):
            if isinstance(end, BoundedEnd):
                _check_in_range("inequalityNumberLine", f"ranges.{index}.{name}", end.at.value,
                                props.min, props.max)

    canvas.begin_group(css_class="axes")
    _draw_horizontal_axis(canvas, sx, y, ticks, arrows=True)
    canvas.end_group()

    # One arrowhead marker per distinct colour, in first-use order.
    markers = {}
    for r in props.ranges:
        if r.color not in markers:
            markers[r.color] = canvas.add_arrow_marker(f"arrow-{len(markers) + 1}", r.color, size=3)

    canvas.begin_group(css_class="ranges")
    for r in props.ranges:
        start = sx(r.start.at.value) if isinstance(r.start, BoundedEnd) else sx.range_start
        end = sx(r.end.at.value) if isinstance(r.end, BoundedEnd) else sx.range_end
        canvas.draw_line(
            start, y, end, y, stroke=r.color, stroke_width=RANGE_STROKE,
            marker_start=None if isinstance(r.start, BoundedEnd) else markers[r.color],
            marker_end=None if isinstance(r.end, BoundedEnd) else markers[r.color],
        )
        for x, edge in ((start, r.start), (end, r.end)):
            if isinstance(edge, BoundedEnd):
                fill = r.color if edge.at.type == "closed" else COLORS["white"]
                canvas.draw_circle(x, y, MARKER_RADIUS - 1, fill=fill, stroke=r.color,
                                   stroke_width=STROKE["base"])
    canvas.end_group()
    return canvas.finalize()


# =============================================================================
# DOUBLE & FRACTION
# =============================================================================

@register_widget(WidgetType.DOUBLE_NUMBER_LINE, DoubleNumberLineProps)
def generate_double_number_line(props: DoubleNumberLineProps) -> str:
    top, bottom = props.top_line, props.bottom_line
    if len(top.ticks) != len(bottom.ticks):
        logger.error("double number line tick mismatch: %s vs %s", len(top.ticks), len(bottom.ticks))
        raise InvalidDimensionsError(
            f"top line has {len(top.ticks)} ticks, bottom line has {len(bottom.ticks)} ticks"
        )
    if len(top.ticks) < 2:
        raise InvalidDimensionsError("a double number line needs at least two ticks per line")

    canvas = Canvas(props.width, props.height, id_prefix="doubleNumberLine")
    left = DOUBLE_LINE_SIDE_PADDING
    right = props.width - DOUBLE_LINE_SIDE_PADDING
    top_y = NUMBER_LINE_PADDING
    bottom_y = props.height - NUMBER_LINE_PADDING
    if right <= left or bottom_y <= top_y:
        raise InvalidDimensionsError("canvas too small for a double number line")
    spacing = (right - left) / (len(top.ticks) - 1)
    xs = [left + i * spacing for i in range(len(top.ticks))]

    canvas.begin_group(css_class="guides")
    for x in xs:
        canvas.draw_line(x, top_y + 5, x, bottom_y - 5, stroke=COLORS["grid_minor"], dash="2")
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    canvas.draw_line(left, top_y, right, top_y, stroke=COLORS["axis"])
    canvas.draw_text(props.width / 2, top_y - 20, top.label, font_size=FONT["size_base"],
                     font_weight=FONT["weight_bold"])
    canvas.draw_line(left, bottom_y, right, bottom_y, stroke=COLORS["axis"])
    canvas.draw_text(props.width / 2, bottom_y + 30, bottom.label, font_size=FONT["size_base"],
                     font_weight=FONT["weight_bold"])
    for x, top_tick, bottom_tick in zip(xs, top.ticks, bottom.ticks):
        canvas.draw_line(x, top_y - 5, x, top_y + 5, stroke=COLORS["axis"])
        canvas.draw_text(x, top_y + 20, format_value(top_tick), fill=COLORS["axis"])
        canvas.draw_line(x, bottom_y - 5, x, bottom_y + 5, stroke=COLORS["axis"])
        canvas.draw_text(x, bottom_y - 15, format_value(bottom_tick), fill=COLORS["axis"])
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.FRACTION_NUMBER_LINE, FractionNumberLineProps)
def generate_fraction_number_line(props: FractionNumberLineProps) -> str:
    canvas = Canvas(props.width, props.height, id_prefix="fractionNumberLine")
    sx = _horizontal_scale(canvas, props.min, props.max)
    y = props.height / 2
    for index, tick in enumerate(props.ticks):
        _check_in_range("fractionNumberLine", f"ticks.{index}", tick.value, props.min, props.max)
    for index, segment in enumerate(props.segments):
        if not segment.start < segment.end:
            logger.error("fraction segment %s has start >= end", index)
            raise InvalidRangeError(f"segment {index}: start must be less than end")
        _check_in_range("fractionNumberLine", f"segments.{index}.start", segment.start, props.min, props.max)
        _check_in_range("fractionNumberLine", f"segments.{index}.end", segment.end, props.min, props.max)

    canvas.begin_group(css_class="segments")
    for segment in props.segments:
        canvas.draw_rect(sx(segment.start), y - 6, sx(segment.end) - sx(segment.start), 12,
                         fill=segment.color, fill_opacity=0.6)
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    canvas.draw_line(sx.range_start, y, sx.range_end, y, stroke=COLORS["axis"], stroke_width=STROKE["base"])
    for tick in props.ticks:
        x = sx(tick.value)
        half = MAJOR_TICK_HALF + 2 if tick.is_major else MAJOR_TICK_HALF - 3
        weight: Optional[str] = FONT["weight_bold"] if tick.is_major else None
        canvas.draw_line(x, y - half, x, y + half, stroke=COLORS["axis"],
                         stroke_width=STROKE["base"] if tick.is_major else STROKE["thin"])
        if tick.top_label:
            canvas.draw_text(x, y - half - 6, tick.top_label, font_weight=weight)
        if tick.bottom_label:
            canvas.draw_text(x, y + half + 16, tick.bottom_label, font_weight=weight)
    canvas.end_group()
    return canvas.finalize()
