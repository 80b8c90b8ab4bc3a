from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import Field

from schemas.base import Real, Text, WidgetModel

# A number, or a value the caller already formatted ("4.5 cm", "?").
CellValue = Union[Real, Text]


class FiveNumberSummaryTableProps(WidgetModel):
    type: Literal["fiveNumberSummaryTable"] = Field(..., description="Widget discriminant.")
    min: CellValue = Field(..., description="Minimum, shown verbatim.")
    q1: CellValue = Field(..., description="First quartile, shown verbatim.")
    median: CellValue = Field(..., description="Median, shown verbatim.")
    q3: CellValue = Field(..., description="Third quartile, shown verbatim.")
    max: CellValue = Field(..., description="Maximum, shown verbatim.")


class TableColumn(WidgetModel):
    key: Text = Field(..., description="Column identifier.")
    label: Text = Field(..., description="Header text.")


class DataTableProps(WidgetModel):
    type: Literal["dataTable"] = Field(..., description="Widget discriminant.")
    caption: Optional[Text] = Field(..., description="Table caption, or null.")
    columns: List[TableColumn] = Field(..., description="Columns, left to right.")
    rows: List[List[CellValue]] = Field(..., description="Rows; each has one cell per column.")
