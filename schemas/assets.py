from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from schemas.base import Pixels, Text, WidgetModel


class PeriodicTableProps(WidgetModel):
    type: Literal["periodicTable"] = Field(..., description="Widget discriminant.")
    alt: Text = Field(..., description="Alternative text for the image.")
    caption: Optional[Text] = Field(..., description="Figure caption, or null.")
    width: Pixels = Field(..., description="Rendered image width in pixels.")
    height: Pixels = Field(..., description="Rendered image height in pixels.")
