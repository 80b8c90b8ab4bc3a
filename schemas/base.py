"""
base.py

Strict base model and constrained field types shared by every widget schema.

Every widget field is required: declare it as ``Field(..., description=...)``.
A field may be nullable, but the key must still be present.
"""

from __future__ import annotations

from typing import Annotated

from matplotlib.colors import CSS4_COLORS
from pydantic import BaseModel, ConfigDict, Field, Strict
from pydantic.alias_generators import to_camel

from core.theme import MAX_ABS_VALUE, MAX_CANVAS_PX


# =============================================================================
# COLORS
# =============================================================================

_HEX = r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})"
_ALPHA = r"(?:\s*,\s*(?:0|1|0?\.[0-9]+)\s*)?"
_RGB = r"rgba?\(\s*[0-9]{1,3}\s*,\s*[0-9]{1,3}\s*,\s*[0-9]{1,3}" + _ALPHA + r"\)"
_HSL = r"hsla?\(\s*[0-9]{1,3}\s*,\s*[0-9]{1,3}%\s*,\s*[0-9]{1,3}%" + _ALPHA + r"\)"
_NAMED = "|".join(sorted(set(CSS4_COLORS) | {"transparent", "none"}))

CSS_COLOR_PATTERN = rf"^(?:{_HEX}|{_RGB}|{_HSL}|{_NAMED})$"


# =============================================================================
# FIELD TYPES
# =============================================================================

Text = Annotated[str, Strict()]
Flag = Annotated[bool, Strict()]
Color = Annotated[str, Strict(), Field(pattern=CSS_COLOR_PATTERN)]

Real = Annotated[float, Strict(), Field(ge=-MAX_ABS_VALUE, le=MAX_ABS_VALUE, allow_inf_nan=False)]
NonNegativeReal = Annotated[float, Strict(), Field(ge=0, le=MAX_ABS_VALUE, allow_inf_nan=False)]
PositiveReal = Annotated[float, Strict(), Field(gt=0, le=MAX_ABS_VALUE, allow_inf_nan=False)]
Angle = Annotated[float, Strict(), Field(ge=-360, le=360, allow_inf_nan=False)]
Pixels = Annotated[float, Strict(), Field(gt=0, le=MAX_CANVAS_PX, allow_inf_nan=False)]
Count = Annotated[int, Strict(), Field(ge=0, le=MAX_ABS_VALUE)]
PositiveInt = Annotated[int, Strict(), Field(ge=1, le=MAX_ABS_VALUE)]

# Counts that repeat drawn elements (dots, pie pieces, minor ticks).
SmallCount = Annotated[int, Strict(), Field(ge=0, le=100)]
PartCount = Annotated[int, Strict(), Field(ge=1, le=100)]


class WidgetModel(BaseModel):
    """
    Base for every descriptor and nested descriptor part.

    Unknown keys are rejected, values are not coerced, instances are frozen
    and wire keys are camelCase (``tick_interval`` is sent as ``tickInterval``).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=False,
    )
