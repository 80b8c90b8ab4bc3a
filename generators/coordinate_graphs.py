"""
coordinate_graphs.py

Widgets drawn directly on a Cartesian plane: the general-purpose coordinate
plane (points, lines, polygons, polylines, distances) and the parabola graph.
"""

from __future__ import annotations

import logging

import numpy as np

from core.canvas import Canvas, Frame
from core.coordinate_plane import CoordinatePlane, LabelJob, render_labels, render_plot_layers
from core.errors import InvalidDimensionsError
from core.theme import AXIS_PADDING, COLORS, DASH, POINT_RADIUS, STROKE
from formatting.labels import format_number
from generators.registry import WidgetType, register_widget
from schemas.coordinate import CoordinatePlaneProps, ParabolaGraphProps

logger = logging.getLogger(__name__)

PARABOLA_SAMPLES = 201


def _plane_frame(canvas: Canvas) -> Frame:
    return Frame.inset(canvas.width, canvas.height, **AXIS_PADDING)


@register_widget(WidgetType.COORDINATE_PLANE, CoordinatePlaneProps)
def generate_coordinate_plane(props: CoordinatePlaneProps) -> str:
    canvas = Canvas(props.width, props.height, id_prefix="coordinatePlane")
    plane = CoordinatePlane(canvas, _plane_frame(canvas), props.x_axis, props.y_axis)
    plane.draw_background(show_quadrant_labels=props.show_quadrant_labels)
    render_plot_layers(
        canvas,
        plane,
        widget_type="coordinatePlane",
        points=props.points,
        lines=props.lines,
        polygons=props.polygons,
        polylines=props.polylines,
        distances=props.distances,
    )
    return canvas.finalize()


@register_widget(WidgetType.PARABOLA_GRAPH, ParabolaGraphProps)
def generate_parabola_graph(props: ParabolaGraphProps) -> str:
    """
    Plot ``y = a(x - h)^2 + k`` across the visible x range.

    The curve is sampled at evenly spaced x values; samples far outside the
    y range are clamped so the path stays bounded before clipping.
    """
    parabola = props.parabola
    if parabola.a == 0:
        logger.error("parabolaGraph with a=0")
        raise InvalidDimensionsError("parabola coefficient 'a' must be non-zero")

    canvas = Canvas(props.width, props.height, id_prefix="parabolaGraph")
    plane = CoordinatePlane(canvas, _plane_frame(canvas), props.x_axis, props.y_axis)
    plane.draw_background(show_quadrant_labels=False)

    xs = np.linspace(props.x_axis.min, props.x_axis.max, PARABOLA_SAMPLES)
    ys = parabola.a * (xs - parabola.h) ** 2 + parabola.k
    span = props.y_axis.max - props.y_axis.min
    ys = np.clip(ys, props.y_axis.min - span, props.y_axis.max + span)
    vertices = [plane.to_svg(float(x), float(y)) for x, y in zip(xs, ys)]

    canvas.begin_group(css_class="shapes", clip_id=plane.clip_id)
    canvas.draw_polyline(vertices, stroke=parabola.color, stroke_width=STROKE["xthick"],
                         dash=DASH["dashed"] if parabola.style == "dashed" else None)
    canvas.end_group()

    labels = []
    canvas.begin_group(css_class="points", clip_id=plane.clip_id)
    if props.show_vertex and plane.x.contains(parabola.h) and plane.y.contains(parabola.k):
        x, y = plane.to_svg(parabola.h, parabola.k)
        canvas.draw_circle(x, y, POINT_RADIUS, fill=parabola.color, stroke=parabola.color)
        text = f"({format_number(parabola.h)}, {format_number(parabola.k)})"
        labels.append(LabelJob(x + POINT_RADIUS + 3, y + (16 if parabola.a > 0 else -8), text, "start",
                               COLORS["text"]))
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    render_labels(canvas, labels)
    canvas.end_group()
    return canvas.finalize()
