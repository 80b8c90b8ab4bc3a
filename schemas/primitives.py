from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from schemas.base import Color, Flag, PositiveReal, Real, Text, WidgetModel


# =============================================================================
# AXES
# =============================================================================

class TickInterval(WidgetModel):
    """Ticks derived as ``min + i * interval``."""
    kind: Literal["interval"] = Field(..., description="Discriminant for interval-derived ticks.")
    interval: PositiveReal = Field(..., description="Spacing between consecutive ticks in domain units.")


class TickMark(WidgetModel):
    value: Real = Field(..., description="Domain position of the tick.")
    label: Text = Field(..., description="Tick label; an empty string draws an unlabeled tick.")


class TickValues(WidgetModel):
    """Explicit ticks, used verbatim."""
    kind: Literal["values"] = Field(..., description="Discriminant for enumerated ticks.")
    values: List[TickMark] = Field(..., description="Ticks to draw, in order.")


Ticks = Annotated[Union[TickInterval, TickValues], Field(discriminator="kind")]


class AxisSpec(WidgetModel):
    label: Text = Field(..., description="Axis title; empty string for none.")
    min: Real = Field(..., description="Domain value at the start of the axis. Must be less than max.")
    max: Real = Field(..., description="Domain value at the end of the axis.")
    ticks: Ticks = Field(..., description="Explicit tick spacing: an interval or enumerated values.")
    show_grid_lines: Flag = Field(..., description="Draw grid lines at each tick.")
    tick_format: Literal["decimal", "piMultiple", "percent"] = Field(
        ..., description="Label style for interval-derived ticks."
    )


class ValueAxis(WidgetModel):
    """Value axis of a categorical chart."""
    label: Text = Field(..., description="Axis title; empty string for none.")
    min: Real = Field(..., description="Bottom of the value axis.")
    max: Real = Field(..., description="Top of the value axis. Never auto-fit to data.")
    tick_interval: PositiveReal = Field(..., description="Spacing between value ticks.")
    show_grid_lines: Flag = Field(..., description="Draw horizontal grid lines at each tick.")


class LinearAxis(WidgetModel):
    """Single horizontal axis for one-dimensional statistics plots."""
    label: Text = Field(..., description="Axis title; empty string for none.")
    min: Real = Field(..., description="Leftmost value.")
    max: Real = Field(..., description="Rightmost value.")
    tick_interval: PositiveReal = Field(..., description="Spacing between ticks.")


# =============================================================================
# PLANE PRIMITIVES
# =============================================================================

LineStyle = Literal["solid", "dashed"]


class PlotPoint(WidgetModel):
    id: Text = Field(..., description="Unique id referenced by polygons and distances.")
    x: Real = Field(..., description="Domain x coordinate.")
    y: Real = Field(..., description="Domain y coordinate.")
    label: Optional[Text] = Field(..., description="Text drawn next to the point, or null.")
    color: Color = Field(..., description="Marker color.")
    style: Literal["open", "closed"] = Field(..., description="Hollow (open) or filled (closed) marker.")


class SlopeInterceptEquation(WidgetModel):
    """y = slope * x + yIntercept"""
    kind: Literal["slopeIntercept"] = Field(..., description="Discriminant.")
    slope: Real = Field(..., description="Slope m.")
    y_intercept: Real = Field(..., description="Intercept b.")


class StandardEquation(WidgetModel):
    """A x + B y = C"""
    kind: Literal["standard"] = Field(..., description="Discriminant.")
    a: Real = Field(..., description="Coefficient A.")
    b: Real = Field(..., description="Coefficient B.")
    c: Real = Field(..., description="Constant C.")


class PointSlopeEquation(WidgetModel):
    """y - y1 = slope (x - x1)"""
    kind: Literal["pointSlope"] = Field(..., description="Discriminant.")
    x1: Real = Field(..., description="x of the known point.")
    y1: Real = Field(..., description="y of the known point.")
    slope: Real = Field(..., description="Slope m.")


LineEquation = Annotated[
    Union[SlopeInterceptEquation, StandardEquation, PointSlopeEquation],
    Field(discriminator="kind"),
]


class PlotLine(WidgetModel):
    id: Text = Field(..., description="Identifier for the line.")
    equation: LineEquation = Field(..., description="Line equation in one of three forms.")
    color: Color = Field(..., description="Stroke color.")
    style: LineStyle = Field(..., description="Solid or dashed stroke.")
    label: Optional[Text] = Field(..., description="Label drawn near the line's right end, or null.")


class PlotPolygon(WidgetModel):
    vertices: List[Text] = Field(..., description="Point ids, in drawing order.")
    is_closed: Flag = Field(..., description="Closed polygon (filled) or open polyline path.")
    fill_color: Color = Field(..., description="Fill for closed polygons.")
    stroke_color: Color = Field(..., description="Outline color.")
    label: Optional[Text] = Field(..., description="Label drawn at the vertex centroid, or null.")


class PlotDistance(WidgetModel):
    point_id1: Text = Field(..., description="Id of the first endpoint.")
    point_id2: Text = Field(..., description="Id of the second endpoint.")
    show_legs: Flag = Field(..., description="Draw the horizontal and vertical legs.")
    show_leg_labels: Flag = Field(..., description="Label each leg with its length.")
    hypotenuse_label: Optional[Text] = Field(..., description="Label for the direct segment, or null.")
    color: Color = Field(..., description="Stroke color.")
    style: LineStyle = Field(..., description="Solid or dashed hypotenuse.")


class DomainPoint(WidgetModel):
    x: Real = Field(..., description="Domain x coordinate.")
    y: Real = Field(..., description="Domain y coordinate.")


class PlotPolyline(WidgetModel):
    id: Text = Field(..., description="Identifier for the polyline.")
    points: List[DomainPoint] = Field(..., description="Vertices in drawing order.")
    color: Color = Field(..., description="Stroke color.")
    style: LineStyle = Field(..., description="Solid or dashed stroke.")
