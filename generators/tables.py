"""
tables.py

HTML table widgets. Cell values are printed as given: strings unchanged,
numbers without implicit rounding (integral floats print as integers).
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from core.errors import InvalidDimensionsError
from formatting.labels import escape_text, format_value
from generators.registry import WidgetType, register_widget
from schemas.tables import CellValue, DataTableProps, FiveNumberSummaryTableProps

logger = logging.getLogger(__name__)

FIVE_NUMBER_HEADERS = ("Min", "Q₁", "Median", "Q₃", "Max")


def _row(cells: Sequence[str], tag: str) -> str:
    return "<tr>" + "".join(f"<{tag}>{escape_text(cell)}</{tag}>" for cell in cells) + "</tr>"


def _cells(values: Sequence[CellValue]) -> List[str]:
    return [format_value(value) for value in values]


@register_widget(WidgetType.FIVE_NUMBER_SUMMARY_TABLE, FiveNumberSummaryTableProps)
def generate_five_number_summary_table(props: FiveNumberSummaryTableProps) -> str:
    values = _cells([props.min, props.q1, props.median, props.q3, props.max])
    return (
        '<table class="five-number-summary">'
        f"<thead>{_row(FIVE_NUMBER_HEADERS, 'th')}</thead>"
        f"<tbody>{_row(values, 'td')}</tbody>"
        "</table>"
    )


@register_widget(WidgetType.DATA_TABLE, DataTableProps)
def generate_data_table(props: DataTableProps) -> str:
    if not props.columns:
        logger.error("dataTable called with no columns")
        raise InvalidDimensionsError("dataTable requires at least one column")
    width = len(props.columns)
    for index, row in enumerate(props.rows):
        if len(row) != width:
            logger.error("dataTable row %s has %s cells for %s columns", index, len(row), width)
            raise InvalidDimensionsError(f"row {index} has {len(row)} cells, expected {width}")

    caption = f"<caption>{escape_text(props.caption)}</caption>" if props.caption else ""
    header = _row([column.label for column in props.columns], "th")
    body = "".join(_row(_cells(row), "td") for row in props.rows)
    return f'<table class="data-table">{caption}<thead>{header}</thead><tbody>{body}</tbody></table>'
