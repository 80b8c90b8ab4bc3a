import copy
import re

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Descriptor builders
# ─────────────────────────────────────────────────────────────────────────────

def _axis(label="x", minimum=-10, maximum=10, interval=1, grid=True, tick_format="decimal"):
    return {
        "label": label,
        "min": minimum,
        "max": maximum,
        "ticks": {"kind": "interval", "interval": interval},
        "showGridLines": grid,
        "tickFormat": tick_format,
    }


def _value_axis(label="Count", minimum=0, maximum=10, interval=2, grid=True):
    return {"label": label, "min": minimum, "max": maximum, "tickInterval": interval, "showGridLines": grid}


DESCRIPTORS = {
    "barChart": {
        "type": "barChart",
        "width": 400,
        "height": 300,
        "title": "Favorite Fruit",
        "xAxisLabel": "Fruit",
        "yAxis": _value_axis("Votes"),
        "data": [
            {"label": "Apple", "value": 4, "state": "normal"},
            {"label": "Pear", "value": 7, "state": "unknown"},
        ],
        "barColor": "#4472C4",
    },
    "histogram": {
        "type": "histogram",
        "width": 400,
        "height": 300,
        "title": None,
        "xAxisLabel": "Height (cm)",
        "yAxis": _value_axis("Frequency", 0, 8, 2),
        "separators": [140, 150, 160, 170],
        "bins": [{"frequency": 3}, {"frequency": 7}, {"frequency": 2}],
        "barColor": "steelblue",
    },
    "populationBarChart": {
        "type": "populationBarChart",
        "width": 500,
        "height": 300,
        "xAxisLabel": "Year",
        "yAxis": _value_axis("Elk", 0, 100, 20),
        "xAxisVisibleLabels": ["1990", "2000"],
        "data": [
            {"label": "1990", "value": 40},
            {"label": "1995", "value": 55},
            {"label": "2000", "value": 80},
        ],
        "barColor": "#8B4513",
        "gridColor": "#cccccc",
    },
    "lineGraph": {
        "type": "lineGraph",
        "width": 500,
        "height": 350,
        "title": "Monthly Temperature",
        "xAxis": {"label": "Month", "categories": ["January", "February", "March"]},
        "yAxis": _value_axis("°C", 0, 30, 5),
        "series": [
            {"name": "City A", "values": [5, 8, 14], "color": "red", "style": "solid", "pointShape": "circle"},
            {"name": "City B", "values": [2, 4, 9], "color": "blue", "style": "dashed", "pointShape": "square"},
        ],
        "showLegend": True,
    },
    "areaGraph": {
        "type": "areaGraph",
        "width": 500,
        "height": 350,
        "title": None,
        "xAxis": _axis("Year", 0, 10, 2, grid=False),
        "yAxis": _axis("Share", 0, 100, 20, tick_format="percent"),
        "dataPoints": [{"x": 0, "y": 30}, {"x": 5, "y": 45}, {"x": 10, "y": 70}],
        "bottomArea": {"label": "Renewable", "color": "rgba(0, 128, 0, 0.4)"},
        "topArea": {"label": "Fossil", "color": "hsl(30, 80%, 60%)"},
        "boundaryLine": {"color": "black", "strokeWidth": 2},
    },
    "scatterPlot": {
        "type": "scatterPlot",
        "width": 400,
        "height": 400,
        "title": "Study Time vs Score",
        "xAxis": _axis("Hours", 0, 10, 2),
        "yAxis": _axis("Score", 0, 100, 20),
        "points": [{"x": 1, "y": 40, "label": None}, {"x": 6, "y": 75, "label": "A"}],
        "pointColor": "#333333",
        "lines": [
            {
                "id": "fit",
                "equation": {"kind": "slopeIntercept", "slope": 6, "yIntercept": 35},
                "color": "red",
                "style": "dashed",
                "label": "best fit",
            }
        ],
    },
    "dotPlot": {
        "type": "dotPlot",
        "width": 400,
        "height": 200,
        "axis": {"label": "Pets", "min": 0, "max": 5, "tickInterval": 1},
        "data": [{"value": 0, "count": 2}, {"value": 2, "count": 4}, {"value": 5, "count": 1}],
        "dotColor": "purple",
        "dotRadius": 5,
    },
    "boxPlot": {
        "type": "boxPlot",
        "width": 400,
        "height": 160,
        "axis": {"label": "Minutes", "min": 0, "max": 50, "tickInterval": 10},
        "summary": {"min": 5, "q1": 12, "median": 20, "q3": 31, "max": 45},
        "boxColor": "#eeeeee",
        "medianColor": "red",
    },
    "coordinatePlane": {
        "type": "coordinatePlane",
        "width": 400,
        "height": 400,
        "xAxis": _axis("x"),
        "yAxis": _axis("y"),
        "showQuadrantLabels": True,
        "points": [
            {"id": "A", "x": 1, "y": 2, "label": "A", "color": "blue", "style": "closed"},
            {"id": "B", "x": 4, "y": 6, "label": "B", "color": "blue", "style": "open"},
            {"id": "C", "x": 4, "y": 2, "label": None, "color": "blue", "style": "closed"},
        ],
        "lines": [
            {
                "id": "l1",
                "equation": {"kind": "standard", "a": 1, "b": 0, "c": -3},
                "color": "green",
                "style": "solid",
                "label": "x = -3",
            }
        ],
        "polygons": [
            {"vertices": ["A", "B", "C"], "isClosed": True, "fillColor": "yellow", "strokeColor": "orange",
             "label": None}
        ],
        "polylines": [
            {"id": "p1", "points": [{"x": -8, "y": -8}, {"x": -4, "y": -2}], "color": "gray", "style": "dashed"}
        ],
        "distances": [
            {"pointId1": "A", "pointId2": "B", "showLegs": True, "showLegLabels": True,
             "hypotenuseLabel": "5", "color": "red", "style": "dashed"}
        ],
    },
    "parabolaGraph": {
        "type": "parabolaGraph",
        "width": 400,
        "height": 400,
        "xAxis": _axis("x"),
        "yAxis": _axis("y"),
        "parabola": {"a": 1, "h": 2, "k": -3, "color": "#aa00aa", "style": "solid"},
        "showVertex": True,
    },
    "numberLine": {
        "type": "numberLine",
        "width": 480,
        "height": 100,
        "orientation": "horizontal",
        "min": -10,
        "max": 10,
        "tickInterval": 5,
        "minorTicksPerInterval": 4,
        "points": [{"value": -7, "label": "P", "color": "red", "labelPosition": "above"}],
        "specialTickLabels": [{"value": 0, "label": "zero"}],
    },
    "absoluteValueNumberLine": {
        "type": "absoluteValueNumberLine",
        "width": 480,
        "height": 100,
        "min": -10,
        "max": 10,
        "tickInterval": 5,
        "value": -7,
        "highlightColor": "orange",
        "showDistanceLabel": True,
    },
    "inequalityNumberLine": {
        "type": "inequalityNumberLine",
        "width": 480,
        "height": 100,
        "min": -5,
        "max": 5,
        "tickInterval": 1,
        "ranges": [
            {
                "start": {"type": "bounded", "at": {"value": -2, "type": "open"}},
                "end": {"type": "unbounded"},
                "color": "#1E90FF",
            }
        ],
    },
    "doubleNumberLine": {
        "type": "doubleNumberLine",
        "width": 400,
        "height": 150,
        "topLine": {"label": "Cups of flour", "ticks": [0, 2, 4, 6]},
        "bottomLine": {"label": "Cakes", "ticks": [0, 1, 2, "?"]},
    },
    "fractionNumberLine": {
        "type": "fractionNumberLine",
        "width": 480,
        "height": 120,
        "min": 0,
        "max": 1,
        "ticks": [
            {"value": 0, "topLabel": "0", "bottomLabel": "", "isMajor": True},
            {"value": 0.25, "topLabel": "1/4", "bottomLabel": "", "isMajor": False},
            {"value": 0.5, "topLabel": "1/2", "bottomLabel": "2/4", "isMajor": False},
            {"value": 1, "topLabel": "1", "bottomLabel": "", "isMajor": True},
        ],
        "segments": [{"start": 0, "end": 0.5, "color": "teal"}],
    },
    "circlePieceComparisonDiagram": {
        "type": "circlePieceComparisonDiagram",
        "width": 400,
        "height": 250,
        "leftFraction": {"numerator": 1, "denominator": 2, "color": "red"},
        "rightFraction": {"numerator": 2, "denominator": 4, "color": "blue"},
        "comparison": "=",
        "showFractionLabels": True,
    },
    "tapeDiagram": {
        "type": "tapeDiagram",
        "width": 400,
        "height": 200,
        "topTape": {"label": "Ana", "segments": [{"label": "3", "length": 3}, {"label": "2", "length": 2}],
                    "color": "gold"},
        "bottomTape": {"label": "Ben", "segments": [{"label": "4", "length": 4}], "color": "silver"},
        "comparison": ">",
        "totalLabel": "5 total",
    },
    "equivalentFractionModel": {
        "type": "equivalentFractionModel",
        "width": 400,
        "height": 220,
        "shape": "rectangle",
        "leftFraction": {"numerator": 2, "denominator": 3, "color": "green"},
        "rightFraction": {"numerator": 4, "denominator": 6, "color": "green"},
        "comparison": "=",
    },
    "pieChart": {
        "type": "pieChart",
        "width": 300,
        "height": 300,
        "title": "Favorite Sport",
        "slices": [
            {"label": "Soccer", "value": 50, "color": "red"},
            {"label": "Tennis", "value": 25, "color": "green"},
            {"label": "Golf", "value": 25, "color": "blue"},
        ],
    },
    "probabilitySpinner": {
        "type": "probabilitySpinner",
        "width": 300,
        "height": 300,
        "title": None,
        "groups": [
            {"count": 3, "label": "A", "color": "#ffcccc"},
            {"count": 1, "label": "B", "color": "#ccffcc"},
        ],
        "pointerAngle": 45,
    },
    "angleDiagram": {
        "type": "angleDiagram",
        "width": 300,
        "height": 300,
        "measure": 60,
        "rotation": 10,
        "vertexLabel": "B",
        "rayLabels": ["A", "C"],
        "angleLabel": "60°",
        "color": "blue",
        "mark": "arc",
    },
    "keelingCurve": {
        "type": "keelingCurve",
        "width": 600,
        "height": 400,
        "xAxisLabel": "Year",
        "yAxisLabel": "CO₂ (ppm)",
        "annotations": [{"year": 1850, "text": ["Industrial", "Revolution"]}],
    },
    "populationChangeEventGraph": {
        "type": "populationChangeEventGraph",
        "width": 400,
        "height": 350,
        "xAxisLabel": "Time",
        "yAxisLabel": "Population",
        "xAxisMin": 0,
        "xAxisMax": 10,
        "yAxisMin": 0,
        "yAxisMax": 100,
        "beforeSegment": {"points": [{"x": 0, "y": 60}, {"x": 5, "y": 62}], "color": "black",
                          "label": "Before drought"},
        "afterSegment": {"points": [{"x": 5, "y": 62}, {"x": 10, "y": 20}], "color": "red",
                         "label": "After drought"},
        "showLegend": True,
    },
    "periodicTable": {
        "type": "periodicTable",
        "alt": "Periodic table of the elements",
        "caption": "Figure 1",
        "width": 700,
        "height": 450,
    },
    "fiveNumberSummaryTable": {
        "type": "fiveNumberSummaryTable",
        "min": 1,
        "q1": 3,
        "median": 5,
        "q3": 7,
        "max": 9,
    },
    "dataTable": {
        "type": "dataTable",
        "caption": "Plant growth",
        "columns": [{"key": "day", "label": "Day"}, {"key": "height", "label": "Height (cm)"}],
        "rows": [[1, 2.5], [2, "n/a"]],
    },
}


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def descriptor():
    """Return a fresh, valid descriptor for a widget type."""
    def build(widget_type: str) -> dict:
        return copy.deepcopy(DESCRIPTORS[widget_type])
    return build


@pytest.fixture
def all_descriptors():
    """Fresh copies of one valid descriptor per widget type."""
    return copy.deepcopy(DESCRIPTORS)


@pytest.fixture
def make_axis():
    return _axis


@pytest.fixture
def attr_values():
    """Collect numeric values of an attribute on a given SVG tag, in document order."""
    def collect(svg: str, tag: str, attribute: str) -> list:
        values = []
        for element in re.findall(rf"<{tag}\b[^>]*>", svg):
            match = re.search(rf'\s{attribute}="([^"]*)"', element)
            if match:
                values.append(float(match.group(1)))
        return values
    return collect


@pytest.fixture
def group_order():
    """Return the ``class`` of every ``<g>`` in document order."""
    def collect(svg: str) -> list:
        return re.findall(r'<g class="([^"]+)"', svg)
    return collect


@pytest.fixture
def group():
    """Return the markup inside the first ``<g>`` with the given class."""
    def extract(svg: str, css_class: str) -> str:
        match = re.search(rf'<g class="{re.escape(css_class)}"[^>]*>(.*?)</g>', svg, re.S)
        assert match, f"no <g class={css_class!r}> in output"
        return match.group(1)
    return extract
