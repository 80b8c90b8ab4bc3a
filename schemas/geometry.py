from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import Field, Strict

from schemas.base import Angle, Color, PartCount, Pixels, PositiveReal, Text, WidgetModel

# Strictly between a degenerate and a full turn.
AngleMeasure = Annotated[float, Strict(), Field(gt=0, lt=360, allow_inf_nan=False)]


class PieSlice(WidgetModel):
    label: Text = Field(..., description="Slice name; the percentage is appended.")
    value: PositiveReal = Field(..., description="Slice weight.")
    color: Color = Field(..., description="Slice fill.")


class PieChartProps(WidgetModel):
    type: Literal["pieChart"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Chart title, or null.")
    slices: List[PieSlice] = Field(..., description="Slices clockwise from the top.")


class SpinnerGroup(WidgetModel):
    count: PartCount = Field(..., description="Number of equal sectors in this group.")
    label: Optional[Text] = Field(..., description="Text (or emoji) in each sector, or null.")
    color: Color = Field(..., description="Sector fill.")


class ProbabilitySpinnerProps(WidgetModel):
    type: Literal["probabilitySpinner"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    title: Optional[Text] = Field(..., description="Title above the spinner, or null.")
    groups: List[SpinnerGroup] = Field(..., description="Sector groups clockwise from the top.")
    pointer_angle: Angle = Field(..., description="Pointer direction in degrees, clockwise from east.")


class AngleDiagramProps(WidgetModel):
    type: Literal["angleDiagram"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    measure: AngleMeasure = Field(..., description="Angle between the rays in degrees.")
    rotation: Angle = Field(..., description="Direction of the first ray, counter-clockwise from east.")
    vertex_label: Text = Field(..., description="Point name at the vertex (empty for none).")
    ray_labels: List[Text] = Field(..., description="Exactly two labels for the ray endpoints.")
    angle_label: Optional[Text] = Field(..., description="Text in the arc, or null to print the measure.")
    color: Color = Field(..., description="Arc color.")
    mark: Literal["arc", "rightAngle"] = Field(..., description="Angle mark style.")
