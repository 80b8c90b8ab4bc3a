"""
science.py

Scientific plots: the Keeling curve (a fixed atmospheric CO2 record with
caller annotations) and the before/after population change graph.
"""

from __future__ import annotations

import logging

import numpy as np

from core.canvas import Canvas, Frame
from core.coordinate_plane import draw_horizontal_grid, scale, value_ticks, x_scale, y_scale
from core.errors import InvalidDimensionsError, InvalidRangeError
from core.theme import (
    AXIS_PADDING,
    COLORS,
    DASH,
    FONT,
    LABEL_AVG_CHAR_WIDTH_PX,
    LEGEND_GAP,
    LEGEND_ITEM_HEIGHT,
    LEGEND_LINE_LENGTH,
    STROKE,
    TICK_LENGTH,
)
from core.text_layout import estimate_text_width
from formatting.labels import format_value
from generators.registry import WidgetType, register_widget
from schemas.science import KeelingCurveProps, PopulationChangeEventGraphProps

logger = logging.getLogger(__name__)


# =============================================================================
# KEELING CURVE
# =============================================================================

# (year, ppm): ice-core approximations before 1959, Mauna Loa annual means after.
CO2_RECORD = (
    (1, 277), (200, 278), (400, 277), (600, 278), (800, 279), (1000, 280),
    (1100, 279), (1200, 280), (1300, 279), (1400, 278), (1500, 279), (1600, 277),
    (1650, 277), (1700, 278), (1750, 278), (1775, 279), (1800, 280), (1825, 281),
    (1850, 285), (1875, 289), (1900, 295), (1910, 299), (1920, 303), (1930, 307),
    (1940, 310), (1950, 312), (1955, 314),
    (1959, 315.98), (1960, 316.91), (1961, 317.64), (1962, 318.45), (1963, 318.99),
    (1964, 319.62), (1965, 320.04), (1966, 321.37), (1967, 322.18), (1968, 323.05),
    (1969, 324.62), (1970, 325.68), (1971, 326.32), (1972, 327.46), (1973, 329.68),
    (1974, 330.19), (1975, 331.13), (1976, 332.03), (1977, 333.84), (1978, 335.41),
    (1979, 336.84), (1980, 338.76), (1981, 340.12), (1982, 341.48), (1983, 343.15),
    (1984, 344.87), (1985, 346.35), (1986, 347.61), (1987, 349.31), (1988, 351.69),
    (1989, 353.2), (1990, 354.45), (1991, 355.7), (1992, 356.54), (1993, 357.21),
    (1994, 358.96), (1995, 360.97), (1996, 362.74), (1997, 363.88), (1998, 366.84),
    (1999, 368.54), (2000, 369.71), (2001, 371.32), (2002, 373.45), (2003, 375.98),
    (2004, 377.7), (2005, 379.98), (2006, 382.09), (2007, 384.02), (2008, 385.83),
    (2009, 387.64), (2010, 390.1), (2011, 391.85), (2012, 394.06), (2013, 396.74),
    (2014, 398.81), (2015, 401.01), (2016, 404.41), (2017, 406.76), (2018, 408.72),
    (2019, 411.65), (2020, 414.21), (2021, 416.41), (2022, 418.53), (2023, 421.08),
    (2024, 424.61),
)

KEELING_YEARS = (1.0, 2021.0)
KEELING_PPM = (240.0, 420.0)
KEELING_PPM_STEP = 20.0
KEELING_YEAR_TICKS = (1, 500, 1000, 1500, 2021)
KEELING_MARGIN = {"top": 20, "right": 20, "bottom": 50, "left": 70}
ANNOTATION_STACK_PX = 60


def ppm_for_year(year: float) -> float:
    """Linearly interpolated CO2 concentration for ``year``, clamped at the record ends."""
    years, ppm = np.array(CO2_RECORD, dtype=float).T
    return float(np.interp(year, years, ppm))


@register_widget(WidgetType.KEELING_CURVE, KeelingCurveProps)
def generate_keeling_curve(props: KeelingCurveProps) -> str:
    canvas = Canvas(props.width, props.height, id_prefix="keelingCurve", font_size=FONT["size_base"])
    frame = Frame.inset(props.width, props.height, **KEELING_MARGIN)
    sx = x_scale(*KEELING_YEARS, frame)
    sy = y_scale(*KEELING_PPM, frame)
    for index, annotation in enumerate(props.annotations):
        if not sx.contains(annotation.year):
            logger.error("keelingCurve annotation %s year %s outside record", index, annotation.year)
            raise InvalidRangeError(
                f"annotations.{index}.year ({format_value(annotation.year)}) lies outside "
                f"[{format_value(KEELING_YEARS[0])}, {format_value(KEELING_YEARS[1])}]"
            )

    canvas.begin_group(css_class="grid")
    ticks = value_ticks(KEELING_PPM[0], KEELING_PPM[1], KEELING_PPM_STEP)
    draw_horizontal_grid(canvas, frame, sy, ticks, color=COLORS["grid_minor"])
    canvas.end_group()

    canvas.begin_group(css_class="axes")
    canvas.draw_line(frame.left, frame.bottom, frame.right, frame.bottom, stroke=COLORS["black"],
                     stroke_width=STROKE["base"])
    for tick in ticks:
        canvas.draw_text(frame.left - 10, sy(tick.value) + 5, tick.label, anchor="end")
    for year in KEELING_YEAR_TICKS:
        x = sx(year)
        canvas.draw_line(x, frame.bottom, x, frame.bottom + TICK_LENGTH, stroke=COLORS["black"],
                         stroke_width=STROKE["base"])
        canvas.draw_text(x, frame.bottom + 20, str(year))
    canvas.draw_text(frame.center_x, props.height - 10, props.x_axis_label, font_size=FONT["size_title"])
    canvas.draw_text(frame.left - 50, frame.center_y, props.y_axis_label, font_size=FONT["size_title"],
                     rotate=-90)
    canvas.end_group()

    canvas.begin_group(css_class="curve", clip_id=canvas.add_clip_rect(frame))
    canvas.draw_polyline([(sx(year), sy(ppm)) for year, ppm in CO2_RECORD], stroke=COLORS["black"],
                         stroke_width=STROKE["xthick"])
    canvas.end_group()

    if props.annotations:
        marker = canvas.add_arrow_marker("arrow", COLORS["black"])
        canvas.begin_group(css_class="annotations")
        for index, annotation in enumerate(props.annotations):
            text_x = frame.left + 40
            text_y = frame.top + 40 + index * ANNOTATION_STACK_PX
            canvas.draw_line(text_x, text_y + 20, sx(annotation.year), sy(ppm_for_year(annotation.year)),
                             stroke=COLORS["black"], stroke_width=STROKE["base"], marker_end=marker)
            canvas.draw_text_lines(text_x, text_y, annotation.text, anchor="start",
                                   font_size=FONT["size_title"], font_weight=FONT["weight_bold"])
        canvas.end_group()
    return canvas.finalize()


# =============================================================================
# POPULATION CHANGE
# =============================================================================

LEGEND_SPACE = 50 + 2 * LEGEND_ITEM_HEIGHT


@register_widget(WidgetType.POPULATION_CHANGE_EVENT_GRAPH, PopulationChangeEventGraphProps)
def generate_population_change_event_graph(props: PopulationChangeEventGraphProps) -> str:
    """
    Conceptual graph with unlabelled axes: a solid "before" curve and a
    dashed "after" curve, with an optional two-entry legend underneath.
    """
    before, after = props.before_segment, props.after_segment
    if not before.points and not after.points:
        logger.error("populationChangeEventGraph called with two empty segments")
        raise InvalidDimensionsError("at least one segment needs points")
    for name, segment in (("beforeSegment", before), ("afterSegment", after)):
        if len(segment.points) == 1:
            raise InvalidDimensionsError(f"{name} needs zero or at least two points")

    canvas = Canvas(props.width, props.height, id_prefix="populationChangeEventGraph",
                    font_size=FONT["size_base"])
    bottom = AXIS_PADDING["bottom"] + (LEGEND_SPACE if props.show_legend else 0)
    frame = Frame.inset(props.width, props.height, top=AXIS_PADDING["top"], right=AXIS_PADDING["right"],
                        bottom=bottom, left=AXIS_PADDING["left"])
    sx = scale(props.x_axis_min, props.x_axis_max, frame.left, frame.right)
    sy = scale(props.y_axis_min, props.y_axis_max, frame.bottom, frame.top)

    marker = canvas.add_arrow_marker("arrow", COLORS["black"])
    canvas.begin_group(css_class="axes")
    canvas.draw_line(frame.left, frame.bottom, frame.left, frame.top, stroke=COLORS["axis"],
                     stroke_width=STROKE["thick"], marker_end=marker)
    canvas.draw_line(frame.left, frame.bottom, frame.right, frame.bottom, stroke=COLORS["axis"],
                     stroke_width=STROKE["thick"], marker_end=marker)
    canvas.draw_text(frame.center_x, frame.bottom + 30, props.x_axis_label)
    canvas.draw_text(frame.left - 20, frame.center_y, props.y_axis_label, rotate=-90)
    canvas.end_group()

    canvas.begin_group(css_class="curves", clip_id=canvas.add_clip_rect(frame))
    for segment, dash in ((before, None), (after, DASH["long"])):
        if segment.points:
            canvas.draw_polyline([(sx(p.x), sy(p.y)) for p in segment.points], stroke=segment.color,
                                 stroke_width=STROKE["xxthick"], dash=dash)
    canvas.end_group()

    if props.show_legend:
        items = ((before, None), (after, DASH["legend"]))
        text_width = max(estimate_text_width(seg.label, LABEL_AVG_CHAR_WIDTH_PX) for seg, _ in items)
        box_width = LEGEND_LINE_LENGTH + LEGEND_GAP + text_width
        start_x = max((props.width - box_width) / 2, 10)
        start_y = frame.bottom + 50
        canvas.begin_group(css_class="legend")
        for index, (segment, dash) in enumerate(items):
            y = start_y + index * LEGEND_ITEM_HEIGHT
            canvas.draw_line(start_x, y, start_x + LEGEND_LINE_LENGTH, y, stroke=segment.color,
                             stroke_width=STROKE["xxthick"], dash=dash)
            canvas.draw_text(start_x + LEGEND_LINE_LENGTH + LEGEND_GAP, y + 5, segment.label, anchor="start")
        canvas.end_group()
    return canvas.finalize()
