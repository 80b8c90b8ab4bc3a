from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from schemas.base import Color, Flag, PartCount, Pixels, PositiveReal, SmallCount, Text, WidgetModel

Comparison = Literal["<", ">", "="]


class FractionSpec(WidgetModel):
    numerator: SmallCount = Field(..., description="Shaded parts; at most the denominator.")
    denominator: PartCount = Field(..., description="Equal parts in the whole.")
    color: Color = Field(..., description="Fill for shaded parts.")


class CirclePieceComparisonDiagramProps(WidgetModel):
    type: Literal["circlePieceComparisonDiagram"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    left_fraction: FractionSpec = Field(..., description="Fraction drawn in the left circle.")
    right_fraction: FractionSpec = Field(..., description="Fraction drawn in the right circle.")
    comparison: Comparison = Field(..., description="Symbol drawn between the circles, as given.")
    show_fraction_labels: Flag = Field(..., description="Print 'n/d' under each circle.")


class TapeSegment(WidgetModel):
    label: Text = Field(..., description="Text centred in the segment (empty for none).")
    length: PositiveReal = Field(..., description="Relative length of the segment.")


class Tape(WidgetModel):
    label: Text = Field(..., description="Name printed left of the tape.")
    segments: List[TapeSegment] = Field(..., description="Segments, left to right.")
    color: Color = Field(..., description="Segment fill.")


class TapeDiagramProps(WidgetModel):
    type: Literal["tapeDiagram"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    top_tape: Tape = Field(..., description="Upper tape.")
    bottom_tape: Optional[Tape] = Field(..., description="Lower tape, or null for a single tape.")
    comparison: Optional[Comparison] = Field(
        ..., description="Symbol drawn right of the tapes, as given; null for none."
    )
    total_label: Optional[Text] = Field(..., description="Label on a brace spanning the longer tape, or null.")


class EquivalentFractionModelProps(WidgetModel):
    type: Literal["equivalentFractionModel"] = Field(..., description="Widget discriminant.")
    width: Pixels = Field(..., description="Canvas width in pixels.")
    height: Pixels = Field(..., description="Canvas height in pixels.")
    shape: Literal["rectangle", "circle"] = Field(..., description="Area model shape.")
    left_fraction: FractionSpec = Field(..., description="Left model.")
    right_fraction: FractionSpec = Field(..., description="Right model.")
    comparison: Comparison = Field(..., description="Symbol drawn between the models, as given.")
