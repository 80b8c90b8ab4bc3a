from __future__ import annotations

from typing import List, Literal

from pydantic import Field

from schemas.base import Color, Flag, Pixels, Real, Text, WidgetModel
from schemas.primitives import DomainPoint


class KeelingAnnotation(WidgetModel):
    year: Real = Field(..., description="Year on the curve the arrow points at.")
    text: List[Text] = Field(..., description="Annotation lines.")


class KeelingCurveProps(WidgetModel):
    type: Literal["keelingCurve"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    x_axis_label: Text = Field(..., description="Horizontal axis title.")
    y_axis_label: Text = Field(..., description="Vertical axis title, with units.")
    annotations: List[KeelingAnnotation] = Field(..., description="Callouts stacked in the upper left.")


class PopulationSegment(WidgetModel):
    points: List[DomainPoint] = Field(..., description="Curve vertices for this period.")
    color: Color = Field(..., description="Curve stroke.")
    label: Text = Field(..., description="Legend text.")


class PopulationChangeEventGraphProps(WidgetModel):
    type: Literal["populationChangeEventGraph"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    x_axis_label: Text = Field(..., description="Horizontal axis title (e.g. 'Time').")
    y_axis_label: Text = Field(..., description="Vertical axis title.")
    x_axis_min: Real = Field(..., description="Left end of the time axis.")
    x_axis_max: Real = Field(..., description="Right end of the time axis.")
    y_axis_min: Real = Field(..., description="Bottom of the population axis.")
    y_axis_max: Real = Field(..., description="Top of the population axis.")
    before_segment: PopulationSegment = Field(..., description="Solid curve before the event.")
    after_segment: PopulationSegment = Field(..., description="Dashed curve after the event.")
    show_legend: Flag = Field(..., description="Draw a legend under the plot.")
