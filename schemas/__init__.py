"""
Strict pydantic schemas for every widget descriptor, shared between the
registry, the generators and the CLI tools.
"""

from .assets import PeriodicTableProps
from .base import CSS_COLOR_PATTERN, WidgetModel
from .charts import (
    AreaGraphProps,
    BarChartProps,
    BoxPlotProps,
    DotPlotProps,
    HistogramProps,
    LineGraphProps,
    PopulationBarChartProps,
    ScatterPlotProps,
)
from .coordinate import CoordinatePlaneProps, ParabolaGraphProps
from .fractions import (
    CirclePieceComparisonDiagramProps,
    EquivalentFractionModelProps,
    TapeDiagramProps,
)
from .geometry import AngleDiagramProps, PieChartProps, ProbabilitySpinnerProps
from .number_lines import (
    AbsoluteValueNumberLineProps,
    DoubleNumberLineProps,
    FractionNumberLineProps,
    InequalityNumberLineProps,
    NumberLineProps,
)
from .primitives import AxisSpec
from .science import KeelingCurveProps, PopulationChangeEventGraphProps
from .tables import DataTableProps, FiveNumberSummaryTableProps

__all__ = [
    "CSS_COLOR_PATTERN",
    "WidgetModel",
    "AxisSpec",
    "AbsoluteValueNumberLineProps",
    "AngleDiagramProps",
    "AreaGraphProps",
    "BarChartProps",
    "BoxPlotProps",
    "CirclePieceComparisonDiagramProps",
    "CoordinatePlaneProps",
    "DataTableProps",
    "DotPlotProps",
    "DoubleNumberLineProps",
    "EquivalentFractionModelProps",
    "FiveNumberSummaryTableProps",
    "FractionNumberLineProps",
    "HistogramProps",
    "InequalityNumberLineProps",
    "KeelingCurveProps",
    "LineGraphProps",
    "NumberLineProps",
    "ParabolaGraphProps",
    "PeriodicTableProps",
    "PieChartProps",
    "PopulationBarChartProps",
    "PopulationChangeEventGraphProps",
    "ProbabilitySpinnerProps",
    "ScatterPlotProps",
    "TapeDiagramProps",
]
