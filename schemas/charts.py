from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from schemas.base import Color, Count, Flag, NonNegativeReal, Pixels, PositiveReal, Real, SmallCount, Text, WidgetModel
from schemas.primitives import AxisSpec, LinearAxis, PlotLine, ValueAxis


# =============================================================================
# BAR CHARTS
# =============================================================================

class Bar(WidgetModel):
    label: Text = Field(..., description="Category label under the bar.")
    value: Real = Field(..., description="Bar height in y-axis units.")
    state: Literal["normal", "unknown"] = Field(
        ..., description="'unknown' draws a dashed outline for a value the learner must find."
    )


class BarChartProps(WidgetModel):
    type: Literal["barChart"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    x_axis_label: Text = Field(..., description="Title under the category axis.")
    y_axis: ValueAxis = Field(..., description="Caller-declared value axis.")
    data: List[Bar] = Field(..., description="Bars, rendered in input order.")
    bar_color: Color = Field(..., description="Fill color of normal bars.")


class HistogramBin(WidgetModel):
    frequency: Count = Field(..., description="Count of observations in this bin.")


class HistogramProps(WidgetModel):
    type: Literal["histogram"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    x_axis_label: Text = Field(..., description="Title under the bin axis.")
    y_axis: ValueAxis = Field(..., description="Frequency axis.")
    separators: List[Real] = Field(..., description="Bin edges; exactly one more than the number of bins.")
    bins: List[HistogramBin] = Field(..., description="Bins from left to right.")
    bar_color: Color = Field(..., description="Fill color of the bins.")


class PopulationBar(WidgetModel):
    label: Text = Field(..., description="Category label (often a year).")
    value: NonNegativeReal = Field(..., description="Population value.")


class PopulationBarChartProps(WidgetModel):
    type: Literal["populationBarChart"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    x_axis_label: Text = Field(..., description="Title under the category axis.")
    y_axis: ValueAxis = Field(..., description="Population axis.")
    x_axis_visible_labels: List[Text] = Field(
        ..., description="Only these category labels are printed, for density control."
    )
    data: List[PopulationBar] = Field(..., description="Bars, rendered in input order.")
    bar_color: Color = Field(..., description="Bar fill color.")
    grid_color: Color = Field(..., description="Grid line color.")


# =============================================================================
# LINE & AREA
# =============================================================================

class LineSeries(WidgetModel):
    name: Text = Field(..., description="Series name shown in the legend.")
    values: List[Real] = Field(..., description="One value per x category.")
    color: Color = Field(..., description="Series stroke color.")
    style: Literal["solid", "dashed", "dotted"] = Field(..., description="Stroke style.")
    point_shape: Literal["circle", "square", "triangle", "none"] = Field(..., description="Marker at each value.")


class CategoryAxis(WidgetModel):
    label: Text = Field(..., description="Axis title; empty string for none.")
    categories: List[Text] = Field(..., description="Category labels, left to right.")


class LineGraphProps(WidgetModel):
    type: Literal["lineGraph"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    x_axis: CategoryAxis = Field(..., description="Categorical x axis.")
    y_axis: ValueAxis = Field(..., description="Value axis.")
    series: List[LineSeries] = Field(..., description="Series drawn in input order.")
    show_legend: Flag = Field(..., description="Draw a legend below the chart.")


class AreaPoint(WidgetModel):
    x: Real = Field(..., description="Domain x.")
    y: Real = Field(..., description="Domain y on the boundary line.")


class AreaStyle(WidgetModel):
    label: Text = Field(..., description="Text centred in the area.")
    color: Color = Field(..., description="Fill color.")


class BoundaryLine(WidgetModel):
    color: Color = Field(..., description="Stroke color.")
    stroke_width: PositiveReal = Field(..., description="Stroke width in pixels.")


class AreaGraphProps(WidgetModel):
    type: Literal["areaGraph"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    x_axis: AxisSpec = Field(..., description="Horizontal axis.")
    y_axis: AxisSpec = Field(..., description="Vertical axis.")
    data_points: List[AreaPoint] = Field(..., description="Boundary line vertices, left to right.")
    bottom_area: AreaStyle = Field(..., description="Region between the x axis and the boundary.")
    top_area: AreaStyle = Field(..., description="Region between the boundary and the top of the frame.")
    boundary_line: BoundaryLine = Field(..., description="Boundary stroke.")


# =============================================================================
# STATISTICS
# =============================================================================

class ScatterPoint(WidgetModel):
    x: Real = Field(..., description="Domain x.")
    y: Real = Field(..., description="Domain y.")
    label: Optional[Text] = Field(..., description="Label next to the point, or null.")


class ScatterPlotProps(WidgetModel):
    type: Literal["scatterPlot"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    x_axis: AxisSpec = Field(..., description="Horizontal axis.")
    y_axis: AxisSpec = Field(..., description="Vertical axis.")
    points: List[ScatterPoint] = Field(..., description="Data points in input order.")
    point_color: Color = Field(..., description="Marker fill.")
    lines: List[PlotLine] = Field(..., description="Trend or reference lines.")


class DotPlotDatum(WidgetModel):
    value: Real = Field(..., description="Position on the axis.")
    count: SmallCount = Field(..., description="Dots stacked at this value.")


class DotPlotProps(WidgetModel):
    type: Literal["dotPlot"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    axis: LinearAxis = Field(..., description="Horizontal axis.")
    data: List[DotPlotDatum] = Field(..., description="Stacks of dots.")
    dot_color: Color = Field(..., description="Dot fill.")
    dot_radius: PositiveReal = Field(..., description="Dot radius in pixels.")


class FiveNumberSummary(WidgetModel):
    min: Real = Field(..., description="Lower whisker.")
    q1: Real = Field(..., description="First quartile.")
    median: Real = Field(..., description="Median.")
    q3: Real = Field(..., description="Third quartile.")
    max: Real = Field(..., description="Upper whisker.")


class BoxPlotProps(WidgetModel):
    type: Literal["boxPlot"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    axis: LinearAxis = Field(..., description="Horizontal axis.")
    summary: FiveNumberSummary = Field(..., description="min <= q1 <= median <= q3 <= max.")
    box_color: Color = Field(..., description="Fill of the interquartile box.")
    median_color: Color = Field(..., description="Stroke of the median line.")
