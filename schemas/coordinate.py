from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from schemas.base import Color, Flag, Pixels, Real, WidgetModel
from schemas.primitives import AxisSpec, LineStyle, PlotDistance, PlotLine, PlotPoint, PlotPolygon, PlotPolyline


class CoordinatePlaneProps(WidgetModel):
    type: Literal["coordinatePlane"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    x_axis: AxisSpec = Field(..., description="Horizontal axis.")
    y_axis: AxisSpec = Field(..., description="Vertical axis.")
    show_quadrant_labels: Flag = Field(..., description="Label quadrants I-IV when the origin is visible.")
    points: List[PlotPoint] = Field(..., description="Points; ids must be unique.")
    lines: List[PlotLine] = Field(..., description="Infinite lines, clipped to the plot.")
    polygons: List[PlotPolygon] = Field(..., description="Polygons referencing point ids.")
    polylines: List[PlotPolyline] = Field(..., description="Open paths through domain points.")
    distances: List[PlotDistance] = Field(..., description="Distance segments between two points.")


class Parabola(WidgetModel):
    """y = a (x - h)^2 + k"""
    a: Real = Field(..., description="Leading coefficient; must be non-zero.")
    h: Real = Field(..., description="Vertex x.")
    k: Real = Field(..., description="Vertex y.")
    color: Color = Field(..., description="Curve stroke.")
    style: LineStyle = Field(..., description="Solid or dashed curve.")


class ParabolaGraphProps(WidgetModel):
    type: Literal["parabolaGraph"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    x_axis: AxisSpec = Field(..., description="Horizontal axis.")
    y_axis: AxisSpec = Field(..., description="Vertical axis.")
    parabola: Parabola = Field(..., description="Curve in vertex form.")
    show_vertex: Flag = Field(..., description="Mark and label the vertex.")
