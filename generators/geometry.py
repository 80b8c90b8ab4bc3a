"""
geometry.py

Circle-based and angle widgets: pie chart, probability spinner and the
labelled angle diagram.

Sectors start at the top (-90 degrees in SVG terms) and run clockwise.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from core.canvas import Canvas, Frame, polar, sector_path
from core.errors import InvalidDimensionsError
from core.theme import COLORS, FONT, PADDING, STROKE
from formatting.labels import format_number, format_value
from generators.registry import WidgetType, register_widget
from schemas.geometry import AngleDiagramProps, PieChartProps, ProbabilitySpinnerProps

logger = logging.getLogger(__name__)

START_ANGLE = -90.0
PIE_LABEL_SPACE = 30
HUB_RADIUS = 8
ARC_RADIUS = 30
RIGHT_ANGLE_SIZE = 16


def _circle_frame(canvas: Canvas, title: Optional[str], reserve: float) -> Frame:
    band = canvas.draw_title(title)
    frame = Frame.inset(canvas.width, canvas.height, top=PADDING, right=PADDING, bottom=PADDING,
                        left=PADDING, title_band=band)
    if min(frame.width, frame.height) / 2 <= reserve:
        logger.error("%s canvas %sx%s too small", canvas.id_prefix, canvas.width, canvas.height)
        raise InvalidDimensionsError("canvas too small for the circle")
    return frame


def _outer_anchor(degrees: float) -> str:
    horizontal = math.cos(math.radians(degrees))
    if horizontal > 0.1:
        return "start"
    if horizontal < -0.1:
        return "end"
    return "middle"


@register_widget(WidgetType.PIE_CHART, PieChartProps)
def generate_pie_chart(props: PieChartProps) -> str:
    if not props.slices:
        logger.error("pieChart called with no slices")
        raise InvalidDimensionsError("pieChart requires at least one slice")
    canvas = Canvas(props.width, props.height, id_prefix="pieChart")
    frame = _circle_frame(canvas, props.title, PIE_LABEL_SPACE)
    cx, cy = frame.center_x, frame.center_y
    r = min(frame.width, frame.height) / 2 - PIE_LABEL_SPACE
    total = sum(s.value for s in props.slices)

    canvas.begin_group(css_class="slices")
    angle = START_ANGLE
    mids = []
    for piece in props.slices:
        sweep = piece.value / total * 360
        canvas.draw_path(sector_path(cx, cy, r, angle, angle + sweep), fill=piece.color,
                         stroke=COLORS["white"], stroke_width=STROKE["thick"])
        mids.append(angle + sweep / 2)
        angle += sweep
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    for piece, mid in zip(props.slices, mids):
        percent = math.floor(piece.value / total * 100 + 0.5)
        x, y = polar(cx, cy, r + 14, mid)
        canvas.draw_text(x, y, f"{piece.label} {percent}%", anchor=_outer_anchor(mid), baseline="middle")
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.PROBABILITY_SPINNER, ProbabilitySpinnerProps)
def generate_probability_spinner(props: ProbabilitySpinnerProps) -> str:
    """
    Equal sectors, ``count`` per group in group order, clockwise from the
    top. The pointer aims ``pointerAngle`` degrees clockwise from east.
    """
    if not props.groups:
        logger.error("probabilitySpinner called with no groups")
        raise InvalidDimensionsError("probabilitySpinner requires at least one group")
    canvas = Canvas(props.width, props.height, id_prefix="probabilitySpinner")
    frame = _circle_frame(canvas, props.title, HUB_RADIUS)
    cx, cy = frame.center_x, frame.center_y
    r = min(frame.width, frame.height) / 2
    sectors = sum(group.count for group in props.groups)
    step = 360 / sectors

    canvas.begin_group(css_class="sectors")
    index = 0
    label_jobs = []
    for group in props.groups:
        for _ in range(group.count):
            start = START_ANGLE + index * step
            canvas.draw_path(sector_path(cx, cy, r, start, start + step), fill=group.color,
                             stroke=COLORS["black"], stroke_width=STROKE["base"])
            if group.label:
                label_jobs.append((polar(cx, cy, r * 0.65, start + step / 2), group.label))
            index += 1
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    for (x, y), text in label_jobs:
        canvas.draw_text(x, y, text, baseline="middle", font_weight=FONT["weight_bold"])
    canvas.end_group()

    marker = canvas.add_arrow_marker("pointer", COLORS["pointer"], size=5)
    tip_x, tip_y = polar(cx, cy, r * 0.8, props.pointer_angle)
    canvas.begin_group(css_class="pointer")
    canvas.draw_line(cx, cy, tip_x, tip_y, stroke=COLORS["pointer"], stroke_width=STROKE["xxthick"],
                     marker_end=marker)
    canvas.draw_circle(cx, cy, HUB_RADIUS, fill=COLORS["hub_fill"], stroke=COLORS["pointer"],
                       stroke_width=STROKE["base"])
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.ANGLE_DIAGRAM, AngleDiagramProps)
def generate_angle_diagram(props: AngleDiagramProps) -> str:
    """
    Two rays from a common vertex. The first ray points ``rotation`` degrees
    counter-clockwise from east; the second is ``measure`` degrees further.
    """
    if len(props.ray_labels) != 2:
        logger.error("angleDiagram rayLabels has %s entries", len(props.ray_labels))
        raise InvalidDimensionsError(f"rayLabels must have exactly 2 entries, got {len(props.ray_labels)}")
    ray_length = min(props.width, props.height) / 2 - PADDING * 2
    if ray_length <= ARC_RADIUS:
        logger.error("angleDiagram canvas %sx%s too small", props.width, props.height)
        raise InvalidDimensionsError("canvas too small for the angle")

    canvas = Canvas(props.width, props.height, id_prefix="angleDiagram")
    vx, vy = props.width / 2, props.height / 2
    first = props.rotation
    second = props.rotation + props.measure

    def at(radius: float, degrees: float):
        # Mathematical angles: counter-clockwise with y up.
        return polar(vx, vy, radius, -degrees)

    canvas.begin_group(css_class="mark")
    if props.mark == "rightAngle":
        size = RIGHT_ANGLE_SIZE
        ax, ay = at(size, first)
        bx, by = at(size, second)
        corner = (ax + bx - vx, ay + by - vy)
        canvas.draw_polyline([(ax, ay), corner, (bx, by)], stroke=props.color, stroke_width=STROKE["base"])
    else:
        sx, sy = at(ARC_RADIUS, first)
        ex, ey = at(ARC_RADIUS, second)
        large_arc = 1 if props.measure > 180 else 0
        canvas.draw_path(
            f"M {format_number(sx)} {format_number(sy)} A {ARC_RADIUS} {ARC_RADIUS} 0 {large_arc} 0 "
            f"{format_number(ex)} {format_number(ey)}",
            stroke=props.color, stroke_width=STROKE["base"],
        )
    canvas.end_group()

    marker = canvas.add_arrow_marker("ray", COLORS["black"])
    canvas.begin_group(css_class="rays")
    for degrees in (first, second):
        x, y = at(ray_length, degrees)
        canvas.draw_line(vx, vy, x, y, stroke=COLORS["black"], stroke_width=STROKE["thick"], marker_end=marker)
    canvas.draw_circle(vx, vy, 3, fill=COLORS["black"])
    canvas.end_group()

    bisector = first + props.measure / 2
    canvas.begin_group(css_class="labels")
    for degrees, label in zip((first, second), props.ray_labels):
        x, y = at(ray_length + 14, degrees)
        canvas.draw_text(x, y, label, baseline="middle", font_weight=FONT["weight_bold"])
    x, y = at(18, bisector + 180)
    canvas.draw_text(x, y, props.vertex_label, baseline="middle", font_weight=FONT["weight_bold"])
    angle_text = props.angle_label if props.angle_label is not None else f"{format_value(props.measure)}°"
    x, y = at(ARC_RADIUS + 16, bisector)
    canvas.draw_text(x, y, angle_text, baseline="middle", fill=props.color)
    canvas.end_group()
    return canvas.finalize()
