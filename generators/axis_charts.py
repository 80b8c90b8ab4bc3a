"""
axis_charts.py

Axis-based statistical charts: bar charts, histograms, population bars, line
and area graphs, scatter plots, dot plots and box plots.

Every chart draws its value scale from the caller's axis declaration and
never fits it to the data. Empty data is an error, not an empty canvas.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from core.canvas import Canvas, Frame
from core.coordinate_plane import (
    BandScale,
    CoordinatePlane,
    LabelJob,
    LinearScale,
    band_scale,
    draw_horizontal_grid,
    draw_x_axis,
    draw_y_axis,
    render_labels,
    render_lines,
    value_ticks,
    x_scale,
    y_scale,
)
from core.errors import InvalidDimensionsError, InvalidRangeError
from core.theme import (
    AXIS_PADDING,
    AXIS_TITLE_OFFSET,
    COLORS,
    DASH,
    FONT,
    LEGEND_GAP,
    LEGEND_ITEM_HEIGHT,
    LEGEND_LINE_LENGTH,
    PADDING,
    POINT_RADIUS,
    STROKE,
    TICK_LABEL_OFFSET,
    TICK_LENGTH,
)
from formatting.labels import abbreviate_month, format_value
from generators.registry import WidgetType, register_widget
from schemas.charts import (
    AreaGraphProps,
    BarChartProps,
    BoxPlotProps,
    DotPlotProps,
    HistogramProps,
    LineGraphProps,
    PopulationBarChartProps,
    ScatterPlotProps,
)
from schemas.primitives import ValueAxis

logger = logging.getLogger(__name__)

BAR_PADDING = 0.2
POPULATION_BAR_PADDING = 0.3


# =============================================================================
# SHARED
# =============================================================================

def _require_data(widget_type: str, items: Sequence, what: str = "data") -> None:
    if not items:
        logger.error("%s called with empty %s", widget_type, what)
        raise InvalidDimensionsError(f"{widget_type} requires at least one entry in {what}")


def _chart_frame(canvas: Canvas, title: Optional[str], *, bottom_extra: float = 0.0) -> Frame:
    band = canvas.draw_title(title)
    return Frame.inset(
        canvas.width,
        canvas.height,
        top=AXIS_PADDING["top"],
        right=AXIS_PADDING["right"],
        bottom=AXIS_PADDING["bottom"] + bottom_extra,
        left=AXIS_PADDING["left"],
        title_band=band,
    )


def _baseline(axis: ValueAxis, scale: LinearScale) -> float:
    """Pixel y of zero, or of the nearest axis end when zero is off-scale."""
    return scale(min(max(0.0, axis.min), axis.max))


def _draw_category_axis(canvas: Canvas, frame: Frame, bands: BandScale, labels: Sequence[str], *,
                        title: str, axis_y: float, visible: Optional[set] = None) -> None:
    canvas.draw_line(frame.left, axis_y, frame.right, axis_y, stroke=COLORS["axis"],
                     stroke_width=STROKE["base"])
    for index, label in enumerate(labels):
        if visible is not None and label not in visible:
            continue
        canvas.draw_text(bands.center(index), frame.bottom + TICK_LABEL_OFFSET, abbreviate_month(label),
                         fill=COLORS["axis_label"])
    if title:
        canvas.draw_text(frame.center_x, frame.bottom + AXIS_TITLE_OFFSET, title,
                         fill=COLORS["axis_label"], font_size=FONT["size_base"])


def _draw_value_bars(canvas: Canvas, frame: Frame, *, bands: BandScale, scale: LinearScale,
                     baseline: float, values: Sequence[float], colors: Sequence[str],
                     unknown: Sequence[bool]) -> None:
    canvas.begin_group(css_class="bars", clip_id=canvas.add_clip_rect(frame))
    for index, value in enumerate(values):
        top = scale(value)
        y = min(top, baseline)
        height = abs(baseline - top)
        if unknown[index]:
            canvas.draw_rect(bands.band_start(index), y, bands.bandwidth, height, fill="none",
                             stroke=colors[index], stroke_width=STROKE["thick"], dash=DASH["dashed"])
        else:
            canvas.draw_rect(bands.band_start(index), y, bands.bandwidth, height, fill=colors[index])
    canvas.end_group()


# =============================================================================
# BAR CHARTS
# =============================================================================

@register_widget(WidgetType.BAR_CHART, BarChartProps)
def generate_bar_chart(props: BarChartProps) -> str:
    _require_data("barChart", props.data)
    canvas = Canvas(props.width, props.height, id_prefix="barChart")
    frame = _chart_frame(canvas, props.title)

    scale_y = y_scale(props.y_axis.min, props.y_axis.max, frame)
    ticks = value_ticks(props.y_axis.min, props.y_axis.max, props.y_axis.tick_interval)
    bands = band_scale(len(props.data), frame.left, frame.right, BAR_PADDING)
    baseline = _baseline(props.y_axis, scale_y)

    canvas.begin_group(css_class="grid")
    if props.y_axis.show_grid_lines:
        draw_horizontal_grid(canvas, frame, scale_y, ticks)
    canvas.end_group()

    _draw_value_bars(
        canvas, frame, bands=bands, scale=scale_y, baseline=baseline,
        values=[bar.value for bar in props.data],
        colors=[props.bar_color] * len(props.data),
        unknown=[bar.state == "unknown" for bar in props.data],
    )

    canvas.begin_group(css_class="axes")
    draw_y_axis(canvas, frame, scale_y, ticks, axis_x=frame.left, label=props.y_axis.label)
    _draw_category_axis(canvas, frame, bands, [bar.label for bar in props.data],
                        title=props.x_axis_label, axis_y=baseline)
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.HISTOGRAM, HistogramProps)
def generate_histogram(props: HistogramProps) -> str:
    """
    Adjacent bars over explicit bin edges. ``separators`` must have exactly
    one more entry than ``bins`` and be strictly increasing.
    """
    _require_data("histogram", props.bins, "bins")
    if len(props.separators) != len(props.bins) + 1:
        logger.error("histogram separators=%s bins=%s", len(props.separators), len(props.bins))
        raise InvalidDimensionsError(
            f"histogram needs {len(props.bins) + 1} separators for {len(props.bins)} bins, "
            f"got {len(props.separators)}"
        )
    for left, right in zip(props.separators, props.separators[1:]):
        if not left < right:
            logger.error("histogram separators not increasing: %s", props.separators)
            raise InvalidRangeError(f"separators must be strictly increasing ({left} then {right})")

    canvas = Canvas(props.width, props.height, id_prefix="histogram")
    frame = _chart_frame(canvas, props.title)
    scale_x = x_scale(props.separators[0], props.separators[-1], frame)
    scale_y = y_scale(props.y_axis.min, props.y_axis.max, frame)
    ticks = value_ticks(props.y_axis.min, props.y_axis.max, props.y_axis.tick_interval)
    baseline = _baseline(props.y_axis, scale_y)

    canvas.begin_group(css_class="grid")
    if props.y_axis.show_grid_lines:
        draw_horizontal_grid(canvas, frame, scale_y, ticks)
    canvas.end_group()

    canvas.begin_group(css_class="bars", clip_id=canvas.add_clip_rect(frame))
    for index, bin_ in enumerate(props.bins):
        x1 = scale_x(props.separators[index])
        x2 = scale_x(props.separators[index + 1])
        top = scale_y(bin_.frequency)
        canvas.draw_rect(x1, min(top, baseline), x2 - x1, abs(baseline - top), fill=props.bar_color,
                         stroke=COLORS["axis"], stroke_width=STROKE["thin"])
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    draw_y_axis(canvas, frame, scale_y, ticks, axis_x=frame.left, label=props.y_axis.label)
    canvas.draw_line(frame.left, baseline, frame.right, baseline, stroke=COLORS["axis"],
                     stroke_width=STROKE["base"])
    for separator in props.separators:
        x = scale_x(separator)
        canvas.draw_line(x, baseline, x, baseline + TICK_LENGTH, stroke=COLORS["axis"])
        canvas.draw_text(x, frame.bottom + TICK_LABEL_OFFSET, format_value(separator),
                         fill=COLORS["axis_label"])
    if props.x_axis_label:
        canvas.draw_text(frame.center_x, frame.bottom + AXIS_TITLE_OFFSET, props.x_axis_label,
                         fill=COLORS["axis_label"], font_size=FONT["size_base"])
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.POPULATION_BAR_CHART, PopulationBarChartProps)
def generate_population_bar_chart(props: PopulationBarChartProps) -> str:
    _require_data("populationBarChart", props.data)
    canvas = Canvas(props.width, props.height, id_prefix="populationBarChart")
    frame = _chart_frame(canvas, None)

    scale_y = y_scale(props.y_axis.min, props.y_axis.max, frame)
    ticks = value_ticks(props.y_axis.min, props.y_axis.max, props.y_axis.tick_interval)
    bands = band_scale(len(props.data), frame.left, frame.right, POPULATION_BAR_PADDING)
    baseline = _baseline(props.y_axis, scale_y)

    canvas.begin_group(css_class="grid")
    if props.y_axis.show_grid_lines:
        draw_horizontal_grid(canvas, frame, scale_y, ticks, color=props.grid_color)
    canvas.end_group()

    _draw_value_bars(
        canvas, frame, bands=bands, scale=scale_y, baseline=baseline,
        values=[bar.value for bar in props.data],
        colors=[props.bar_color] * len(props.data),
        unknown=[False] * len(props.data),
    )

    canvas.begin_group(css_class="axes")
    draw_y_axis(canvas, frame, scale_y, ticks, axis_x=frame.left, label=props.y_axis.label)
    _draw_category_axis(canvas, frame, bands, [bar.label for bar in props.data],
                        title=props.x_axis_label, axis_y=baseline,
                        visible=set(props.x_axis_visible_labels))
    canvas.end_group()
    return canvas.finalize()


# =============================================================================
# LINE & AREA
# =============================================================================

_SERIES_DASH = {"solid": None, "dashed": DASH["long"], "dotted": DASH["dotted"]}


def _draw_marker(canvas: Canvas, shape: str, x: float, y: float, color: str) -> None:
    r = POINT_RADIUS
    if shape == "circle":
        canvas.draw_circle(x, y, r, fill=color)
    elif shape == "square":
        canvas.draw_rect(x - r, y - r, 2 * r, 2 * r, fill=color)
    elif shape == "triangle":
        canvas.draw_polygon([(x, y - r - 1), (x + r + 1, y + r), (x - r - 1, y + r)], fill=color)


@register_widget(WidgetType.LINE_GRAPH, LineGraphProps)
def generate_line_graph(props: LineGraphProps) -> str:
    categories = props.x_axis.categories
    _require_data("lineGraph", categories, "xAxis.categories")
    _require_data("lineGraph", props.series, "series")
    for index, series in enumerate(props.series):
        if len(series.values) != len(categories):
            logger.error("series %s has %s values for %s categories", index, len(series.values), len(categories))
            raise InvalidDimensionsError(
                f"series {index} ('{series.name}') has {len(series.values)} values "
                f"for {len(categories)} categories"
            )

    legend_height = LEGEND_ITEM_HEIGHT * len(props.series) + PADDING if props.show_legend else 0.0
    canvas = Canvas(props.width, props.height, id_prefix="lineGraph")
    frame = _chart_frame(canvas, props.title, bottom_extra=legend_height)

    scale_y = y_scale(props.y_axis.min, props.y_axis.max, frame)
    ticks = value_ticks(props.y_axis.min, props.y_axis.max, props.y_axis.tick_interval)
    points = band_scale(len(categories), frame.left, frame.right, 0.0)

    canvas.begin_group(css_class="grid")
    if props.y_axis.show_grid_lines:
        draw_horizontal_grid(canvas, frame, scale_y, ticks)
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    draw_y_axis(canvas, frame, scale_y, ticks, axis_x=frame.left, label=props.y_axis.label)
    _draw_category_axis(canvas, frame, points, categories, title=props.x_axis.label, axis_y=frame.bottom)
    canvas.end_group()

    canvas.begin_group(css_class="series", clip_id=canvas.add_clip_rect(frame))
    for series in props.series:
        vertices = [(points.center(i), scale_y(v)) for i, v in enumerate(series.values)]
        if len(vertices) > 1:
            canvas.draw_polyline(vertices, stroke=series.color, stroke_width=STROKE["xthick"],
                                 dash=_SERIES_DASH[series.style])
        for x, y in vertices:
            _draw_marker(canvas, series.point_shape, x, y, series.color)
    canvas.end_group()

    if props.show_legend:
        canvas.begin_group(css_class="legend")
        top = frame.bottom + AXIS_TITLE_OFFSET + PADDING
        for index, series in enumerate(props.series):
            y = top + index * LEGEND_ITEM_HEIGHT
            x1 = frame.left
            x2 = x1 + LEGEND_LINE_LENGTH
            canvas.draw_line(x1, y, x2, y, stroke=series.color, stroke_width=STROKE["xthick"],
                             dash=_SERIES_DASH[series.style])
            _draw_marker(canvas, series.point_shape, (x1 + x2) / 2, y, series.color)
            canvas.draw_text(x2 + LEGEND_GAP, y + 4, series.name, anchor="start")
        canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.AREA_GRAPH, AreaGraphProps)
def generate_area_graph(props: AreaGraphProps) -> str:
    if len(props.data_points) < 2:
        logger.error("areaGraph called with %s data point(s)", len(props.data_points))
        raise InvalidDimensionsError("areaGraph requires at least two data points")

    canvas = Canvas(props.width, props.height, id_prefix="areaGraph")
    frame = _chart_frame(canvas, props.title)
    plane = CoordinatePlane(canvas, frame, props.x_axis, props.y_axis)

    boundary = [plane.to_svg(p.x, p.y) for p in props.data_points]
    first_x, last_x = boundary[0][0], boundary[-1][0]

    canvas.begin_group(css_class="grid")
    plane.draw_grid()
    canvas.end_group()

    canvas.begin_group(css_class="areas", clip_id=plane.clip_id)
    canvas.draw_polygon([(first_x, frame.bottom)] + boundary + [(last_x, frame.bottom)],
                        fill=props.bottom_area.color)
    canvas.draw_polygon(boundary + [(last_x, frame.top), (first_x, frame.top)], fill=props.top_area.color)
    canvas.draw_polyline(boundary, stroke=props.boundary_line.color,
                         stroke_width=props.boundary_line.stroke_width)
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    plane.draw_axes()
    canvas.end_group()

    mean_y = sum(y for _, y in boundary) / len(boundary)
    center_x = (first_x + last_x) / 2
    canvas.begin_group(css_class="labels")
    canvas.draw_text(center_x, (mean_y + frame.bottom) / 2, props.bottom_area.label,
                     font_size=FONT["size_base"], font_weight=FONT["weight_bold"])
    canvas.draw_text(center_x, (frame.top + mean_y) / 2, props.top_area.label,
                     font_size=FONT["size_base"], font_weight=FONT["weight_bold"])
    canvas.end_group()
    return canvas.finalize()


# =============================================================================
# STATISTICS
# =============================================================================

@register_widget(WidgetType.SCATTER_PLOT, ScatterPlotProps)
def generate_scatter_plot(props: ScatterPlotProps) -> str:
    _require_data("scatterPlot", props.points, "points")
    canvas = Canvas(props.width, props.height, id_prefix="scatterPlot")
    frame = _chart_frame(canvas, props.title)
    plane = CoordinatePlane(canvas, frame, props.x_axis, props.y_axis)
    plane.draw_background(show_quadrant_labels=False)

    canvas.begin_group(css_class="shapes", clip_id=plane.clip_id)
    labels: List[LabelJob] = render_lines(canvas, plane, props.lines)
    canvas.end_group()

    canvas.begin_group(css_class="points", clip_id=plane.clip_id)
    for point in props.points:
        x, y = plane.to_svg(point.x, point.y)
        canvas.draw_circle(x, y, POINT_RADIUS, fill=props.point_color, stroke=COLORS["black"],
                           stroke_width=0.5)
        if point.label:
            labels.append(LabelJob(x + POINT_RADIUS + 3, y - POINT_RADIUS - 3, point.label, "start",
                                   COLORS["text"]))
    canvas.end_group()

    canvas.begin_group(css_class="labels")
    render_labels(canvas, labels)
    canvas.end_group()
    return canvas.finalize()


def _linear_axis_frame(canvas: Canvas, *, bottom: float) -> Frame:
    return Frame.inset(canvas.width, canvas.height, top=PADDING, right=PADDING, bottom=bottom, left=PADDING)


@register_widget(WidgetType.DOT_PLOT, DotPlotProps)
def generate_dot_plot(props: DotPlotProps) -> str:
    _require_data("dotPlot", props.data)
    canvas = Canvas(props.width, props.height, id_prefix="dotPlot")
    frame = _linear_axis_frame(canvas, bottom=AXIS_PADDING["bottom"])
    scale_x = x_scale(props.axis.min, props.axis.max, frame)
    ticks = value_ticks(props.axis.min, props.axis.max, props.axis.tick_interval)
    axis_y = frame.bottom

    canvas.begin_group(css_class="axes")
    draw_x_axis(canvas, frame, scale_x, ticks, axis_y=axis_y, label=props.axis.label)
    canvas.end_group()

    canvas.begin_group(css_class="dots")
    spacing = props.dot_radius * 2 + 2
    for datum in props.data:
        if not scale_x.contains(datum.value):
            logger.error("dot plot value %s outside [%s, %s]", datum.value, props.axis.min, props.axis.max)
            raise InvalidRangeError(
                f"value {datum.value} lies outside the axis [{props.axis.min}, {props.axis.max}]"
            )
        x = scale_x(datum.value)
        for level in range(datum.count):
            cy = axis_y - TICK_LENGTH - props.dot_radius - level * spacing
            canvas.draw_circle(x, cy, props.dot_radius, fill=props.dot_color)
    canvas.end_group()
    return canvas.finalize()


@register_widget(WidgetType.BOX_PLOT, BoxPlotProps)
def generate_box_plot(props: BoxPlotProps) -> str:
    s = props.summary
    if not (s.min <= s.q1 <= s.median <= s.q3 <= s.max):
        logger.error("box plot summary out of order: %s", s.model_dump())
        raise InvalidRangeError("summary must satisfy min <= q1 <= median <= q3 <= max")

    canvas = Canvas(props.width, props.height, id_prefix="boxPlot")
    frame = _linear_axis_frame(canvas, bottom=AXIS_PADDING["bottom"] + PADDING)
    scale_x = x_scale(props.axis.min, props.axis.max, frame)
    # The summary is ordered, so its ends bound every whisker and box edge.
    if not (scale_x.contains(s.min) and scale_x.contains(s.max)):
        logger.error("box plot summary [%s, %s] outside [%s, %s]", s.min, s.max, props.axis.min, props.axis.max)
        raise InvalidRangeError(
            f"summary [{s.min}, {s.max}] lies outside the axis [{props.axis.min}, {props.axis.max}]"
        )
    ticks = value_ticks(props.axis.min, props.axis.max, props.axis.tick_interval)
    axis_y = frame.bottom + PADDING
    y_center = frame.center_y
    half = frame.height / 2

    canvas.begin_group(css_class="axes")
    draw_x_axis(canvas, frame, scale_x, ticks, axis_y=axis_y, label="")
    if props.axis.label:
        canvas.draw_text(frame.center_x, axis_y + AXIS_TITLE_OFFSET, props.axis.label,
                         fill=COLORS["axis_label"], font_size=FONT["size_base"])
    canvas.end_group()

    lo, q1, med, q3, hi = (scale_x(v) for v in (s.min, s.q1, s.median, s.q3, s.max))
    canvas.begin_group(css_class="box")
    canvas.draw_line(lo, y_center, q1, y_center, stroke=COLORS["black"])
    canvas.draw_line(q3, y_center, hi, y_center, stroke=COLORS["black"])
    canvas.draw_line(lo, y_center - 10, lo, y_center + 10, stroke=COLORS["black"])
    canvas.draw_line(hi, y_center - 10, hi, y_center + 10, stroke=COLORS["black"])
    canvas.draw_rect(q1, y_center - half, q3 - q1, frame.height, fill=props.box_color, stroke=COLORS["black"])
    canvas.draw_line(med, y_center - half, med, y_center + half, stroke=props.median_color,
                     stroke_width=STROKE["thick"])
    canvas.end_group()
    return canvas.finalize()
