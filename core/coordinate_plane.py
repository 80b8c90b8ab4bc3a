"""
coordinate_plane.py

Shared scaling and rendering substrate for every axis-based widget: linear
and band scales, tick generation, grid/axis drawing and the plane primitives
(points, lines, polygons, polylines, distances).

Layer order on a plane is fixed: grid, axes, quadrant labels, distances,
shapes, points, labels. Each data layer is emitted as its own ``<g>`` so the
order is visible in the output.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from core.canvas import Canvas, Frame, Point
from core.errors import FieldIssue, InvalidDimensionsError, InvalidRangeError, WidgetValidationError
from core.theme import (
    AXIS_TITLE_OFFSET,
    COLORS,
    DASH,
    FONT,
    MAX_TICKS,
    POINT_RADIUS,
    STROKE,
    TICK_LABEL_OFFSET,
    TICK_LENGTH,
)
from formatting.labels import (
    decimal_places,
    format_percent,
    format_pi_label,
    format_tick_label,
    format_value,
)
from schemas.primitives import (
    AxisSpec,
    PlotDistance,
    PlotLine,
    PlotPoint,
    PlotPolygon,
    PlotPolyline,
    PointSlopeEquation,
    SlopeInterceptEquation,
    StandardEquation,
    TickValues,
)

logger = logging.getLogger(__name__)


# =============================================================================
# SCALES
# =============================================================================

@dataclass(frozen=True)
class LinearScale:
    """Affine, monotonic map from a domain interval to a pixel interval."""

    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    def __call__(self, value: float) -> float:
        span = self.domain_max - self.domain_min
        return self.range_start + (value - self.domain_min) / span * (self.range_end - self.range_start)

    def contains(self, value: float) -> bool:
        return self.domain_min <= value <= self.domain_max


def scale(domain_min: float, domain_max: float, range_start: float, range_end: float) -> LinearScale:
    """
    Build a scale placing ``domain_min`` at ``range_start`` and ``domain_max``
    at ``range_end``. Pass an inverted pixel range for vertical axes.
    """
    if not domain_min < domain_max:
        logger.error("invalid axis range: min=%s max=%s", domain_min, domain_max)
        raise InvalidRangeError(f"min ({domain_min}) must be less than max ({domain_max})")
    return LinearScale(domain_min, domain_max, range_start, range_end)


def x_scale(minimum: float, maximum: float, frame: Frame) -> LinearScale:
    return scale(minimum, maximum, frame.left, frame.right)


def y_scale(minimum: float, maximum: float, frame: Frame) -> LinearScale:
    return scale(minimum, maximum, frame.bottom, frame.top)


@dataclass(frozen=True)
class BandScale:
    """Equal-width category bands with inner padding."""

    start: float
    end: float
    count: int
    padding: float

    @property
    def step(self) -> float:
        return (self.end - self.start) / self.count

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    def band_start(self, index: int) -> float:
        return self.start + index * self.step + self.step * self.padding / 2

    def center(self, index: int) -> float:
        return self.band_start(index) + self.bandwidth / 2


def band_scale(count: int, start: float, end: float, padding: float) -> BandScale:
    if count <= 0:
        logger.error("band scale over empty category list")
        raise InvalidDimensionsError("at least one category is required")
    return BandScale(start=start, end=end, count=count, padding=padding)


# =============================================================================
# TICKS
# =============================================================================

@dataclass(frozen=True)
class Tick:
    value: float
    label: str


def interval_tick_values(minimum: float, maximum: float, interval: float) -> List[float]:
    """
    Tick values ``minimum + i * interval`` up to ``maximum``.

    Each value is computed from its index, never by repeated addition, so
    float drift cannot skip or duplicate the last tick.
    """
    if not minimum < maximum:
        logger.error("invalid tick range: min=%s max=%s", minimum, maximum)
        raise InvalidRangeError(f"min ({minimum}) must be less than max ({maximum})")
    count = int(math.floor((maximum - minimum) / interval + 1e-9)) + 1
    if count > MAX_TICKS:
        logger.error("too many ticks: %s (limit %s)", count, MAX_TICKS)
        raise InvalidDimensionsError(
            f"tick interval {interval} yields {count} ticks over [{minimum}, {maximum}]; limit is {MAX_TICKS}"
        )
    values = minimum + np.arange(count, dtype=float) * interval
    return [float(v) for v in values]


def tick_label(value: float, tick_format: str, decimals: int) -> str:
    if tick_format == "piMultiple":
        return format_pi_label(value)
    if tick_format == "percent":
        return format_percent(value, decimals)
    return format_tick_label(value, decimals)


def generate_ticks(axis: AxisSpec) -> List[Tick]:
    if isinstance(axis.ticks, TickValues):
        return [Tick(mark.value, mark.label) for mark in axis.ticks.values]
    interval = axis.ticks.interval
    decimals = max(decimal_places(interval), decimal_places(axis.min))
    return [
        Tick(value, tick_label(value, axis.tick_format, decimals))
        for value in interval_tick_values(axis.min, axis.max, interval)
    ]


def value_ticks(minimum: float, maximum: float, interval: float) -> List[Tick]:
    """Plain decimal ticks for value and linear axes."""
    decimals = max(decimal_places(interval), decimal_places(minimum))
    return [
        Tick(value, format_tick_label(value, decimals))
        for value in interval_tick_values(minimum, maximum, interval)
    ]


# =============================================================================
# GRID & AXES
# =============================================================================

def draw_horizontal_grid(canvas: Canvas, frame: Frame, scale_y: LinearScale, ticks: Sequence[Tick],
                         color: str = COLORS["grid"]) -> None:
    for tick in ticks:
        y = scale_y(tick.value)
        canvas.draw_line(frame.left, y, frame.right, y, stroke=color, stroke_width=STROKE["thin"])


def draw_vertical_grid(canvas: Canvas, frame: Frame, scale_x: LinearScale, ticks: Sequence[Tick],
                       color: str = COLORS["grid"]) -> None:
    for tick in ticks:
        x = scale_x(tick.value)
        canvas.draw_line(x, frame.top, x, frame.bottom, stroke=color, stroke_width=STROKE["thin"])


def draw_x_axis(canvas: Canvas, frame: Frame, scale_x: LinearScale, ticks: Sequence[Tick], *,
                axis_y: float, label: str, skip_value: Optional[float] = None) -> None:
    canvas.draw_line(frame.left, axis_y, frame.right, axis_y, stroke=COLORS["axis"],
                     stroke_width=STROKE["base"])
    for tick in ticks:
        x = scale_x(tick.value)
        canvas.draw_line(x, axis_y - TICK_LENGTH, x, axis_y + TICK_LENGTH, stroke=COLORS["axis"])
        if tick.label and tick.value != skip_value:
            canvas.draw_text(x, axis_y + TICK_LABEL_OFFSET, tick.label, fill=COLORS["axis_label"])
    if label:
        canvas.draw_text(frame.center_x, frame.bottom + AXIS_TITLE_OFFSET, label,
                         fill=COLORS["axis_label"], font_size=FONT["size_base"])


def draw_y_axis(canvas: Canvas, frame: Frame, scale_y: LinearScale, ticks: Sequence[Tick], *,
                axis_x: float, label: str, skip_value: Optional[float] = None) -> None:
    canvas.draw_line(axis_x, frame.top, axis_x, frame.bottom, stroke=COLORS["axis"],
                     stroke_width=STROKE["base"])
    for tick in ticks:
        y = scale_y(tick.value)
        canvas.draw_line(axis_x - TICK_LENGTH, y, axis_x + TICK_LENGTH, y, stroke=COLORS["axis"])
        if tick.label and tick.value != skip_value:
            canvas.draw_text(axis_x - TICK_LENGTH - 3, y + 4, tick.label, anchor="end",
                             fill=COLORS["axis_label"])
    if label:
        x = frame.left - AXIS_TITLE_OFFSET - 5
        canvas.draw_text(x, frame.center_y, label, fill=COLORS["axis_label"],
                         font_size=FONT["size_base"], rotate=-90)


# =============================================================================
# COORDINATE PLANE
# =============================================================================

QUADRANT_NUMERALS = ("I", "II", "III", "IV")


class CoordinatePlane:
    """
    A frame with x/y scales derived from two ``AxisSpec`` objects.

    Usage:
        plane = CoordinatePlane(canvas, frame, props.x_axis, props.y_axis)
        plane.draw_background(show_quadrant_labels=True)
        render_plot_layers(canvas, plane, points=..., ...)
    """

    def __init__(self, canvas: Canvas, frame: Frame, x_axis: AxisSpec, y_axis: AxisSpec):
        self.canvas = canvas
        self.frame = frame
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.x = x_scale(x_axis.min, x_axis.max, frame)
        self.y = y_scale(y_axis.min, y_axis.max, frame)
        self.x_ticks = generate_ticks(x_axis)
        self.y_ticks = generate_ticks(y_axis)
        self._clip_id: Optional[str] = None

    def to_svg(self, x: float, y: float) -> Point:
        return self.x(x), self.y(y)

    @property
    def origin_visible(self) -> bool:
        return self.x.contains(0) and self.y.contains(0)

    @property
    def clip_id(self) -> str:
        if self._clip_id is None:
            self._clip_id = self.canvas.add_clip_rect(self.frame)
        return self._clip_id

    def draw_grid(self) -> None:
        if self.x_axis.show_grid_lines:
            draw_vertical_grid(self.canvas, self.frame, self.x, self.x_ticks)
        if self.y_axis.show_grid_lines:
            draw_horizontal_grid(self.canvas, self.frame, self.y, self.y_ticks)

    def draw_axes(self) -> None:
        # Axes cross at the origin when it is visible, otherwise run along the frame edges.
        axis_y = self.y(0) if self.y.contains(0) else self.frame.bottom
        axis_x = self.x(0) if self.x.contains(0) else self.frame.left
        crossing = 0.0 if self.origin_visible else None
        draw_x_axis(self.canvas, self.frame, self.x, self.x_ticks, axis_y=axis_y,
                    label=self.x_axis.label, skip_value=crossing)
        draw_y_axis(self.canvas, self.frame, self.y, self.y_ticks, axis_x=axis_x,
                    label=self.y_axis.label, skip_value=crossing)

    def draw_quadrant_labels(self) -> None:
        x0, y0 = self.to_svg(0, 0)
        dx = self.frame.width / 4
        dy = self.frame.height / 4
        positions = ((x0 + dx, y0 - dy), (x0 - dx, y0 - dy), (x0 - dx, y0 + dy), (x0 + dx, y0 + dy))
        self.canvas.begin_group(css_class="quadrant-labels")
        for numeral, (x, y) in zip(QUADRANT_NUMERALS, positions):
            self.canvas.draw_text(x, y, numeral, fill=COLORS["muted_text"], font_size=FONT["size_title"],
                                  baseline="middle")
        self.canvas.end_group()

    def draw_background(self, *, show_quadrant_labels: bool) -> None:
        self.canvas.begin_group(css_class="grid")
        self.draw_grid()
        self.canvas.end_group()
        self.canvas.begin_group(css_class="axes")
        self.draw_axes()
        self.canvas.end_group()
        if show_quadrant_labels and self.origin_visible:
            self.draw_quadrant_labels()


# =============================================================================
# PRIMITIVES
# =============================================================================

@dataclass(frozen=True)
class LabelJob:
    x: float
    y: float
    text: str
    anchor: str
    color: str


def index_points(widget_type: str, points: Sequence[PlotPoint]) -> Dict[str, PlotPoint]:
    by_id: Dict[str, PlotPoint] = {}
    issues = []
    for index, point in enumerate(points):
        if point.id in by_id:
            issues.append(FieldIssue(f"points.{index}.id", f"duplicate point id '{point.id}'"))
        by_id[point.id] = point
    if issues:
        raise WidgetValidationError(widget_type, issues)
    return by_id


def check_point_references(widget_type: str, point_map: Dict[str, PlotPoint],
                           polygons: Sequence[PlotPolygon], distances: Sequence[PlotDistance]) -> None:
    issues = []
    for index, polygon in enumerate(polygons):
        for vertex_index, vertex in enumerate(polygon.vertices):
            if vertex not in point_map:
                issues.append(FieldIssue(f"polygons.{index}.vertices.{vertex_index}",
                                         f"unknown point id '{vertex}'"))
    for index, distance in enumerate(distances):
        for key, ref in (("pointId1", distance.point_id1), ("pointId2", distance.point_id2)):
            if ref not in point_map:
                issues.append(FieldIssue(f"distances.{index}.{key}", f"unknown point id '{ref}'"))
    if issues:
        logger.error("unresolved point references in %s: %s", widget_type, [str(i) for i in issues])
        raise WidgetValidationError(widget_type, issues)


def line_endpoints(line: PlotLine, x_min: float, x_max: float,
                   y_min: float, y_max: float) -> Tuple[Point, Point]:
    """Domain endpoints of an infinite line spanning the visible x range."""
    equation = line.equation
    if isinstance(equation, SlopeInterceptEquation):
        f = lambda x: equation.slope * x + equation.y_intercept
    elif isinstance(equation, PointSlopeEquation):
        f = lambda x: equation.y1 + equation.slope * (x - equation.x1)
    elif isinstance(equation, StandardEquation):
        if equation.b == 0:
            if equation.a == 0:
                logger.error("degenerate standard-form line %s", line.id)
                raise InvalidDimensionsError(f"line '{line.id}': A and B cannot both be zero")
            x = equation.c / equation.a
            return (x, y_min), (x, y_max)
        f = lambda x: (equation.c - equation.a * x) / equation.b
    else:
        raise InvalidDimensionsError(f"line '{line.id}': unsupported equation")
    return (x_min, f(x_min)), (x_max, f(x_max))


def _dash(style: str) -> Optional[str]:
    return DASH["dashed"] if style == "dashed" else None


def render_distances(canvas: Canvas, plane: CoordinatePlane, distances: Sequence[PlotDistance],
                     point_map: Dict[str, PlotPoint]) -> List[LabelJob]:
    labels: List[LabelJob] = []
    for distance in distances:
        p1 = point_map[distance.point_id1]
        p2 = point_map[distance.point_id2]
        x1, y1 = plane.to_svg(p1.x, p1.y)
        x2, y2 = plane.to_svg(p2.x, p2.y)
        dash = DASH["distance"] if distance.style == "dashed" else None
        if distance.show_legs:
            canvas.draw_line(x1, y1, x2, y1, stroke=distance.color, stroke_width=STROKE["base"],
                             dash=DASH["distance"])
            canvas.draw_line(x2, y1, x2, y2, stroke=distance.color, stroke_width=STROKE["base"],
                             dash=DASH["distance"])
            if distance.show_leg_labels:
                labels.append(LabelJob((x1 + x2) / 2, y1 + (14 if y2 < y1 else -6),
                                       format_value(round(abs(p2.x - p1.x), 2)), "middle", distance.color))
                labels.append(LabelJob(x2 + 6, (y1 + y2) / 2,
                                       format_value(round(abs(p2.y - p1.y), 2)), "start", distance.color))
        canvas.draw_line(x1, y1, x2, y2, stroke=distance.color, stroke_width=STROKE["thick"], dash=dash)
        if distance.hypotenuse_label:
            labels.append(LabelJob((x1 + x2) / 2 - 6, (y1 + y2) / 2 - 6, distance.hypotenuse_label,
                                   "end", distance.color))
    return labels


def render_lines(canvas: Canvas, plane: CoordinatePlane, lines: Sequence[PlotLine]) -> List[LabelJob]:
    labels: List[LabelJob] = []
    for line in lines:
        (ax, ay), (bx, by) = line_endpoints(line, plane.x_axis.min, plane.x_axis.max,
                                            plane.y_axis.min, plane.y_axis.max)
        x1, y1 = plane.to_svg(ax, ay)
        x2, y2 = plane.to_svg(bx, by)
        canvas.draw_line(x1, y1, x2, y2, stroke=line.color, stroke_width=STROKE["thick"],
                         dash=_dash(line.style))
        if line.label:
            # Keep the label inside the frame even when the line leaves it.
            lx = min(max(x2, plane.frame.left), plane.frame.right) - 4
            ly = min(max(y2, plane.frame.top + 12), plane.frame.bottom - 4)
            labels.append(LabelJob(lx, ly, line.label, "end", line.color))
    return labels


def render_polylines(canvas: Canvas, plane: CoordinatePlane, polylines: Sequence[PlotPolyline]) -> None:
    for polyline in polylines:
        if len(polyline.points) < 2:
            logger.error("polyline %s has %s point(s)", polyline.id, len(polyline.points))
            raise InvalidDimensionsError(f"polyline '{polyline.id}' needs at least two points")
        canvas.draw_polyline([plane.to_svg(p.x, p.y) for p in polyline.points], stroke=polyline.color,
                             dash=_dash(polyline.style))


def render_polygons(canvas: Canvas, plane: CoordinatePlane, polygons: Sequence[PlotPolygon],
                    point_map: Dict[str, PlotPoint]) -> List[LabelJob]:
    labels: List[LabelJob] = []
    for polygon in polygons:
        vertices = [plane.to_svg(point_map[v].x, point_map[v].y) for v in polygon.vertices]
        if len(vertices) < 2:
            raise InvalidDimensionsError("a polygon needs at least two vertices")
        if polygon.is_closed:
            canvas.draw_polygon(vertices, fill=polygon.fill_color, fill_opacity=0.3,
                                stroke=polygon.stroke_color, stroke_width=STROKE["thick"])
        else:
            canvas.draw_polyline(vertices, stroke=polygon.stroke_color)
        if polygon.label:
            cx = sum(x for x, _ in vertices) / len(vertices)
            cy = sum(y for _, y in vertices) / len(vertices)
            labels.append(LabelJob(cx, cy, polygon.label, "middle", polygon.stroke_color))
    return labels


def render_points(canvas: Canvas, plane: CoordinatePlane, points: Sequence[PlotPoint]) -> List[LabelJob]:
    labels: List[LabelJob] = []
    for point in points:
        x, y = plane.to_svg(point.x, point.y)
        if point.style == "open":
            canvas.draw_circle(x, y, POINT_RADIUS, fill=COLORS["white"], stroke=point.color,
                               stroke_width=STROKE["base"])
        else:
            canvas.draw_circle(x, y, POINT_RADIUS, fill=point.color, stroke=point.color)
        if point.label:
            labels.append(LabelJob(x + POINT_RADIUS + 3, y - POINT_RADIUS - 3, point.label, "start",
                                   COLORS["text"]))
    return labels


def render_labels(canvas: Canvas, labels: Sequence[LabelJob]) -> None:
    for job in labels:
        canvas.draw_text(job.x, job.y, job.text, anchor=job.anchor, fill=job.color)


def render_plot_layers(
    canvas: Canvas,
    plane: CoordinatePlane,
    *,
    widget_type: str,
    points: Sequence[PlotPoint] = (),
    lines: Sequence[PlotLine] = (),
    polygons: Sequence[PlotPolygon] = (),
    polylines: Sequence[PlotPolyline] = (),
    distances: Sequence[PlotDistance] = (),
) -> None:
    """
    Draw plane primitives in z-order: distances, shapes, points, labels.

    Data layers are clipped to the frame; labels are not.
    """
    point_map = index_points(widget_type, points)
    check_point_references(widget_type, point_map, polygons, distances)

    labels: List[LabelJob] = []

    canvas.begin_group(css_class="distances", clip_id=plane.clip_id)
    labels.extend(render_distances(canvas, plane, distances, point_map))
    canvas.end_group()

    canvas.begin_group(css_class="shapes", clip_id=plane.clip_id)
    labels.extend(render_lines(canvas, plane, lines))
    render_polylines(canvas, plane, polylines)
    labels.extend(render_polygons(canvas, plane, polygons, point_map))
    canvas.end_group()

    canvas.begin_group(css_class="points", clip_id=plane.clip_id)
    labels.extend(render_points(canvas, plane, points))
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    render_labels(canvas, labels)
    canvas.end_group()
