from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from schemas.base import Color, Flag, Pixels, PositiveReal, Real, SmallCount, Text, WidgetModel


# =============================================================================
# NUMBER LINE
# =============================================================================

class NumberLinePoint(WidgetModel):
    value: Real = Field(..., description="Domain position of the highlighted point.")
    label: Optional[Text] = Field(..., description="Label next to the point, or null.")
    color: Color = Field(..., description="Marker fill.")
    label_position: Literal["above", "below", "left", "right"] = Field(
        ..., description="Side of the marker the label sits on."
    )


class SpecialTickLabel(WidgetModel):
    value: Real = Field(..., description="Tick whose numeric label is replaced.")
    label: Text = Field(..., description="Replacement text.")


class NumberLineProps(WidgetModel):
    type: Literal["numberLine"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    orientation: Literal["horizontal", "vertical"] = Field(..., description="Direction of the line.")
    min: Real = Field(..., description="Start of the line. Must be less than max.")
    max: Real = Field(..., description="End of the line.")
    tick_interval: PositiveReal = Field(..., description="Spacing between major ticks.")
    minor_ticks_per_interval: SmallCount = Field(..., description="Minor ticks between each pair of majors.")
    points: List[NumberLinePoint] = Field(..., description="Highlighted values.")
    special_tick_labels: List[SpecialTickLabel] = Field(..., description="Custom labels for specific ticks.")


class AbsoluteValueNumberLineProps(WidgetModel):
    type: Literal["absoluteValueNumberLine"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    min: Real = Field(..., description="Start of the line. Must be less than max.")
    max: Real = Field(..., description="End of the line.")
    tick_interval: PositiveReal = Field(..., description="Spacing between ticks.")
    value: Real = Field(..., description="Highlighted value whose distance from zero is shown.")
    highlight_color: Color = Field(..., description="Marker and distance bracket color.")
    show_distance_label: Flag = Field(..., description="Print '|v| units' above the bracket.")


# =============================================================================
# INEQUALITIES
# =============================================================================

class Boundary(WidgetModel):
    value: Real = Field(..., description="Boundary position.")
    type: Literal["open", "closed"] = Field(..., description="Open (hollow) or closed (filled) endpoint.")


class BoundedEnd(WidgetModel):
    type: Literal["bounded"] = Field(..., description="Discriminant.")
    at: Boundary = Field(..., description="The boundary.")


class UnboundedEnd(WidgetModel):
    type: Literal["unbounded"] = Field(..., description="Discriminant; the range runs off the line.")


RangeEnd = Annotated[Union[BoundedEnd, UnboundedEnd], Field(discriminator="type")]


class InequalityRange(WidgetModel):
    start: RangeEnd = Field(..., description="Left end of the shaded range.")
    end: RangeEnd = Field(..., description="Right end of the shaded range.")
    color: Color = Field(..., description="Shading color.")


class InequalityNumberLineProps(WidgetModel):
    type: Literal["inequalityNumberLine"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    min: Real = Field(..., description="Start of the line. Must be less than max.")
    max: Real = Field(..., description="End of the line.")
    tick_interval: PositiveReal = Field(..., description="Spacing between ticks.")
    ranges: List[InequalityRange] = Field(..., description="Solution ranges; may overlap.")


# =============================================================================
# DOUBLE & FRACTION NUMBER LINES
# =============================================================================

TickLabel = Union[Real, Text]


class DoubleNumberLineRow(WidgetModel):
    label: Text = Field(..., description="Quantity name, centred above the top line or below the bottom line.")
    ticks: List[TickLabel] = Field(..., description="Tick labels, left to right.")


class DoubleNumberLineProps(WidgetModel):
    type: Literal["doubleNumberLine"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    top_line: DoubleNumberLineRow = Field(..., description="Upper quantity.")
    bottom_line: DoubleNumberLineRow = Field(..., description="Lower quantity; same tick count as the top.")


class FractionTick(WidgetModel):
    value: Real = Field(..., description="Domain position.")
    top_label: Text = Field(..., description="Label above the line (empty for none).")
    bottom_label: Text = Field(..., description="Label below the line (empty for none).")
    is_major: Flag = Field(..., description="Major ticks are longer.")


class FractionSegment(WidgetModel):
    start: Real = Field(..., description="Segment start.")
    end: Real = Field(..., description="Segment end.")
    color: Color = Field(..., description="Segment color.")


class FractionNumberLineProps(WidgetModel):
    type: Literal["fractionNumberLine"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    min: Real = Field(..., description="Start of the line. Must be less than max.")
    max: Real = Field(..., description="End of the line.")
    ticks: List[FractionTick] = Field(..., description="Ticks in any order.")
    segments: List[FractionSegment] = Field(..., description="Highlighted spans above the line.")
