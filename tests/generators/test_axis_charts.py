"""
Tests for the axis chart widgets in generators.axis_charts.

Covers barChart, histogram, populationBarChart, lineGraph, areaGraph,
scatterPlot, dotPlot and boxPlot.
"""

import pytest

from core.errors import InvalidDimensionsError, InvalidRangeError
from generators import generate


# ─────────────────────────────────────────────────────────────────────────────
# Bar charts
# ─────────────────────────────────────────────────────────────────────────────

class TestBarChart:
    """Tests for the "barChart" widget."""

    def test_bar_chart_when_rendered_then_heights_follow_declared_axis(self, descriptor, group, attr_values):
        """Bar heights come from the caller's y axis (0..10), not from the data maximum."""
        # Arrange: title band 29.2px leaves a 200.8px plot area
        props = descriptor("barChart")

        # Act
        bars = group(generate("barChart", props), "bars")

        # Assert
        assert attr_values(bars, "rect", "height") == pytest.approx([80.32, 140.56])
        assert attr_values(bars, "rect", "x") == pytest.approx([76, 236])

    def test_bar_chart_when_axis_max_larger_then_bars_shorter(self, descriptor, group, attr_values):
        props = descriptor("barChart")
        props["yAxis"]["max"] = 100
        props["yAxis"]["tickInterval"] = 20

        bars = group(generate("barChart", props), "bars")

        assert attr_values(bars, "rect", "height")[0] == pytest.approx(8.03)

    def test_bar_chart_when_state_unknown_then_dashed_outline(self, descriptor, group):
        bars = group(generate("barChart", descriptor("barChart")), "bars")

        assert 'fill="#4472C4"' in bars
        assert 'fill="none" stroke="#4472C4" stroke-width="2" stroke-dasharray="5 3"' in bars

    def test_bar_chart_when_titled_then_title_and_layers_in_order(self, descriptor, group_order):
        svg = generate("barChart", descriptor("barChart"))

        assert ">Favorite Fruit</tspan>" in svg
        assert group_order(svg) == ["grid", "bars", "axes"]

    def test_bar_chart_when_data_empty_then_raises(self, descriptor):
        props = descriptor("barChart")
        props["data"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("barChart", props)

    def test_bar_chart_when_axis_range_empty_then_raises(self, descriptor):
        props = descriptor("barChart")
        props["yAxis"]["min"] = 10

        with pytest.raises(InvalidRangeError):
            generate("barChart", props)


class TestHistogram:
    """Tests for the "histogram" widget."""

    def test_histogram_when_rendered_then_bins_are_adjacent(self, descriptor, group, attr_values):
        bars = group(generate("histogram", descriptor("histogram")), "bars")

        xs = attr_values(bars, "rect", "x")
        widths = attr_values(bars, "rect", "width")

        assert len(xs) == 3
        assert xs[1] == pytest.approx(xs[0] + widths[0], abs=0.02)
        assert xs[2] == pytest.approx(xs[1] + widths[1], abs=0.02)
        assert attr_values(bars, "rect", "height") == pytest.approx([86.25, 201.25, 57.5])

    def test_histogram_when_rendered_then_separators_labelled(self, descriptor, group):
        axes = group(generate("histogram", descriptor("histogram")), "axes")

        for edge in ("140", "150", "160", "170"):
            assert f">{edge}<" in axes

    def test_histogram_when_separator_count_wrong_then_raises(self, descriptor):
        props = descriptor("histogram")
        props["separators"] = [140, 150, 160]

        with pytest.raises(InvalidDimensionsError):
            generate("histogram", props)

    def test_histogram_when_separators_not_increasing_then_raises(self, descriptor):
        props = descriptor("histogram")
        props["separators"] = [140, 160, 150, 170]

        with pytest.raises(InvalidRangeError):
            generate("histogram", props)

    def test_histogram_when_no_bins_then_raises(self, descriptor):
        props = descriptor("histogram")
        props["bins"] = []
        props["separators"] = [140]

        with pytest.raises(InvalidDimensionsError):
            generate("histogram", props)


class TestPopulationBarChart:
    """Tests for the "populationBarChart" widget."""

    def test_population_bar_chart_when_visible_labels_given_then_others_hidden(self, descriptor, group):
        axes = group(generate("populationBarChart", descriptor("populationBarChart")), "axes")

        assert ">1990<" in axes
        assert ">2000<" in axes
        assert ">1995<" not in axes

    def test_population_bar_chart_when_rendered_then_grid_uses_grid_color(self, descriptor, group):
        grid = group(generate("populationBarChart", descriptor("populationBarChart")), "grid")

        assert grid.count('stroke="#cccccc"') == 6

    def test_population_bar_chart_when_data_empty_then_raises(self, descriptor):
        props = descriptor("populationBarChart")
        props["data"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("populationBarChart", props)


# ─────────────────────────────────────────────────────────────────────────────
# Line and area
# ─────────────────────────────────────────────────────────────────────────────

class TestLineGraph:
    """Tests for the "lineGraph" widget."""

    def test_line_graph_when_month_categories_then_abbreviated(self, descriptor, group):
        axes = group(generate("lineGraph", descriptor("lineGraph")), "axes")

        assert ">Jan<" in axes
        assert "January" not in axes

    def test_line_graph_when_series_styled_then_dash_and_markers_follow(self, descriptor, group):
        series = group(generate("lineGraph", descriptor("lineGraph")), "series")

        assert series.count("<polyline") == 2
        assert 'stroke="blue" stroke-width="2.5" stroke-dasharray="8 4"' in series
        assert series.count("<circle") == 3
        assert series.count("<rect") == 3

    def test_line_graph_when_legend_enabled_then_names_listed(self, descriptor, group):
        legend = group(generate("lineGraph", descriptor("lineGraph")), "legend")

        assert ">City A<" in legend
        assert ">City B<" in legend

    def test_line_graph_when_legend_disabled_then_omitted(self, descriptor, group_order):
        props = descriptor("lineGraph")
        props["showLegend"] = False

        assert "legend" not in group_order(generate("lineGraph", props))

    def test_line_graph_when_series_length_mismatch_then_raises(self, descriptor):
        props = descriptor("lineGraph")
        props["series"][1]["values"] = [1, 2]

        with pytest.raises(InvalidDimensionsError) as exc_info:
            generate("lineGraph", props)

        assert "City B" in str(exc_info.value)

    def test_line_graph_when_no_categories_then_raises(self, descriptor):
        props = descriptor("lineGraph")
        props["xAxis"]["categories"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("lineGraph", props)


class TestAreaGraph:
    """Tests for the "areaGraph" widget."""

    def test_area_graph_when_rendered_then_layers_in_order(self, descriptor, group_order):
        svg = generate("areaGraph", descriptor("areaGraph"))

        assert group_order(svg) == ["grid", "areas", "axes", "labels"]

    def test_area_graph_when_rendered_then_both_regions_filled(self, descriptor, group):
        areas = group(generate("areaGraph", descriptor("areaGraph")), "areas")

        assert areas.count("<polygon") == 2
        assert 'fill="rgba(0, 128, 0, 0.4)"' in areas
        assert 'fill="hsl(30, 80%, 60%)"' in areas

    def test_area_graph_when_percent_ticks_then_labels_have_percent_sign(self, descriptor, group):
        axes = group(generate("areaGraph", descriptor("areaGraph")), "axes")

        assert ">20%<" in axes
        assert ">100%<" in axes

    def test_area_graph_when_single_point_then_raises(self, descriptor):
        props = descriptor("areaGraph")
        props["dataPoints"] = props["dataPoints"][:1]

        with pytest.raises(InvalidDimensionsError):
            generate("areaGraph", props)


# ─────────────────────────────────────────────────────────────────────────────
# Statistics
# ─────────────────────────────────────────────────────────────────────────────

class TestScatterPlot:
    """Tests for the "scatterPlot" widget."""

    def test_scatter_plot_when_rendered_then_layers_in_order(self, descriptor, group_order):
        svg = generate("scatterPlot", descriptor("scatterPlot"))

        assert group_order(svg) == ["grid", "axes", "shapes", "points", "labels"]

    def test_scatter_plot_when_line_and_point_labelled_then_labels_drawn(self, descriptor, group):
        labels = group(generate("scatterPlot", descriptor("scatterPlot")), "labels")

        assert ">best fit<" in labels
        assert ">A<" in labels

    def test_scatter_plot_when_points_empty_then_raises(self, descriptor):
        props = descriptor("scatterPlot")
        props["points"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("scatterPlot", props)


class TestDotPlot:
    """Tests for the "dotPlot" widget."""

    def test_dot_plot_when_counts_given_then_one_circle_per_dot(self, descriptor, group):
        dots = group(generate("dotPlot", descriptor("dotPlot")), "dots")

        assert dots.count("<circle") == 7

    def test_dot_plot_when_stacked_then_dots_rise_evenly(self, descriptor, group, attr_values):
        dots = group(generate("dotPlot", descriptor("dotPlot")), "dots")

        cx = attr_values(dots, "circle", "cx")
        cy = attr_values(dots, "circle", "cy")

        assert cx[2:6] == pytest.approx([164] * 4)
        assert cy[2:6] == pytest.approx([140, 128, 116, 104])

    def test_dot_plot_when_value_outside_axis_then_raises(self, descriptor):
        props = descriptor("dotPlot")
        props["data"].append({"value": 6, "count": 1})

        with pytest.raises(InvalidRangeError):
            generate("dotPlot", props)

    def test_dot_plot_when_data_empty_then_raises(self, descriptor):
        props = descriptor("dotPlot")
        props["data"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("dotPlot", props)


class TestBoxPlot:
    """Tests for the "boxPlot" widget."""

    def test_box_plot_when_rendered_then_box_spans_quartiles(self, descriptor, group, attr_values):
        box = group(generate("boxPlot", descriptor("boxPlot")), "box")

        assert attr_values(box, "rect", "x") == pytest.approx([106.4])
        assert attr_values(box, "rect", "width") == pytest.approx([136.8])

    def test_box_plot_when_rendered_then_median_drawn_in_median_color(self, descriptor, group):
        box = group(generate("boxPlot", descriptor("boxPlot")), "box")

        assert '<line x1="164" y1="20" x2="164" y2="90" stroke="red" stroke-width="2"/>' in box

    def test_box_plot_when_summary_unordered_then_raises(self, descriptor):
        props = descriptor("boxPlot")
        props["summary"]["q1"] = 25

        with pytest.raises(InvalidRangeError):
            generate("boxPlot", props)

    def test_box_plot_when_summary_beyond_axis_then_raises(self, descriptor):
        """A whisker past axis.max would be drawn off the frame."""
        props = descriptor("boxPlot")
        props["summary"]["max"] = 60

        with pytest.raises(InvalidRangeError):
            generate("boxPlot", props)
