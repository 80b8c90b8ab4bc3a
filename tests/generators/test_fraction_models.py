"""
Tests for the fraction model widgets in generators.fraction_models.

Covers circlePieceComparisonDiagram, tapeDiagram and equivalentFractionModel.
The comparison symbol is drawn as given, even when it is arithmetically false.
"""

import pytest

from core.errors import InvalidDimensionsError, InvalidRangeError
from generators import generate


class TestCirclePieceComparisonDiagram:
    """Tests for the "circlePieceComparisonDiagram" widget."""

    def test_circle_pieces_when_rendered_then_one_sector_per_part(self, descriptor, group):
        models = group(generate("circlePieceComparisonDiagram", descriptor("circlePieceComparisonDiagram")),
                       "models")

        assert models.count("<path") == 2 + 4
        assert models.count('fill-opacity="0.3"') == 1 + 2

    def test_circle_pieces_when_whole_then_full_circle_path(self, descriptor, group):
        props = descriptor("circlePieceComparisonDiagram")
        props["leftFraction"].update(numerator=1, denominator=1)

        models = group(generate("circlePieceComparisonDiagram", props), "models")
        first_path = models.split("/>")[0]

        assert " L " not in first_path
        assert first_path.count(" A ") == 2

    def test_circle_pieces_when_comparison_false_then_drawn_as_given(self, descriptor):
        """1/2 < 2/4 is false but the symbol is not corrected."""
        props = descriptor("circlePieceComparisonDiagram")
        props["comparison"] = "<"

        svg = generate("circlePieceComparisonDiagram", props)

        assert 'class="comparison">&lt;</text>' in svg

    def test_circle_pieces_when_labels_shown_then_numerators_and_denominators(self, descriptor, group):
        labels = group(generate("circlePieceComparisonDiagram", descriptor("circlePieceComparisonDiagram")),
                       "labels")

        for digit in ("1", "2", "4"):
            assert f">{digit}<" in labels

    def test_circle_pieces_when_labels_hidden_then_no_labels_group(self, descriptor, group_order):
        props = descriptor("circlePieceComparisonDiagram")
        props["showFractionLabels"] = False

        assert group_order(generate("circlePieceComparisonDiagram", props)) == ["models"]

    def test_circle_pieces_when_numerator_exceeds_denominator_then_raises(self, descriptor):
        props = descriptor("circlePieceComparisonDiagram")
        props["rightFraction"]["numerator"] = 5

        with pytest.raises(InvalidRangeError):
            generate("circlePieceComparisonDiagram", props)


class TestTapeDiagram:
    """Tests for the "tapeDiagram" widget."""

    def test_tape_diagram_when_two_tapes_then_shared_length_scale(self, descriptor, group, attr_values):
        """Segments of length 3, 2 and 4 scaled so the longer total of 5 spans 250px."""
        tapes = group(generate("tapeDiagram", descriptor("tapeDiagram")), "tapes")

        assert attr_values(tapes, "rect", "width") == [150, 100, 200]
        assert attr_values(tapes, "rect", "x") == [80, 230, 80]

    def test_tape_diagram_when_total_label_then_brace_drawn(self, descriptor, group):
        brace = group(generate("tapeDiagram", descriptor("tapeDiagram")), "brace")

        assert "<polyline" in brace
        assert ">5 total<" in brace

    def test_tape_diagram_when_comparison_given_then_symbol_right_of_tapes(self, descriptor):
        svg = generate("tapeDiagram", descriptor("tapeDiagram"))

        assert 'class="comparison">&gt;</text>' in svg

    def test_tape_diagram_when_single_tape_then_no_comparison_or_brace(self, descriptor, group,
                                                                       group_order, attr_values):
        props = descriptor("tapeDiagram")
        props.update(bottomTape=None, comparison=None, totalLabel=None)

        svg = generate("tapeDiagram", props)

        assert group_order(svg) == ["tapes"]
        assert 'class="comparison"' not in svg
        assert len(attr_values(group(svg, "tapes"), "rect", "width")) == 2

    def test_tape_diagram_when_tape_has_no_segments_then_raises(self, descriptor):
        props = descriptor("tapeDiagram")
        props["bottomTape"]["segments"] = []

        with pytest.raises(InvalidDimensionsError):
            generate("tapeDiagram", props)

    def test_tape_diagram_when_canvas_too_short_then_raises(self, descriptor):
        props = descriptor("tapeDiagram")
        props["height"] = 100

        with pytest.raises(InvalidDimensionsError):
            generate("tapeDiagram", props)


class TestEquivalentFractionModel:
    """Tests for the "equivalentFractionModel" widget."""

    def test_equivalent_model_when_rectangle_then_strips_shaded(self, descriptor, group):
        models = group(generate("equivalentFractionModel", descriptor("equivalentFractionModel")), "models")

        assert models.count("<rect") == 3 + 6
        assert models.count('fill-opacity="0.3"') == 2 + 4

    def test_equivalent_model_when_circle_then_sectors(self, descriptor, group):
        props = descriptor("equivalentFractionModel")
        props["shape"] = "circle"

        models = group(generate("equivalentFractionModel", props), "models")

        assert models.count("<path") == 3 + 6
        assert "<rect" not in models

    def test_equivalent_model_when_rendered_then_both_fractions_labelled(self, descriptor, group):
        labels = group(generate("equivalentFractionModel", descriptor("equivalentFractionModel")), "labels")

        for digit in ("2", "3", "4", "6"):
            assert f">{digit}<" in labels

    def test_equivalent_model_when_numerator_exceeds_denominator_then_raises(self, descriptor):
        props = descriptor("equivalentFractionModel")
        props["rightFraction"]["numerator"] = 7

        with pytest.raises(InvalidRangeError):
            generate("equivalentFractionModel", props)
