"""
Unit tests for generators.registry.

Dispatch, strict validation with complete issue paths, registry invariants
and the async/batch entry points.
"""

import asyncio
from typing import Literal

import pytest
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from core.errors import (
    GeneratorInternalError,
    RegistryError,
    UnknownWidgetTypeError,
    WidgetError,
    WidgetValidationError,
)
from generators import (
    WidgetType,
    agenerate,
    agenerate_many,
    export_json_schemas,
    generate,
    generate_many,
    registered_types,
    typed_schemas,
    validate_props,
)
from generators import registry
from schemas import BarChartProps
from schemas.base import Real, WidgetModel


class _ProbeProps(WidgetModel):
    type: Literal["barChart"] = Field(..., description="Discriminant.")
    value: Real = Field(..., description="Any number.")


class _DefaultedProps(WidgetModel):
    type: Literal["barChart"] = Field(..., description="Discriminant.")
    width: Real = Field(300, description="Defaulted on purpose.")


def _noop(props):
    return "<svg/>"


# ─────────────────────────────────────────────────────────────────────────────
# Dispatch
# ─────────────────────────────────────────────────────────────────────────────

class TestDispatch:
    """Tests for generate() over the whole registry."""

    def test_registered_types_when_imported_then_every_widget_type_present(self):
        assert registered_types() == sorted(t.value for t in WidgetType)
        assert len(registered_types()) == 26

    @pytest.mark.parametrize("widget_type", registered_types())
    def test_generate_when_valid_descriptor_then_fragment_returned(self, widget_type, descriptor):
        """Every widget renders one SVG or HTML fragment."""
        output = generate(widget_type, descriptor(widget_type))

        assert output.startswith(("<svg", "<figure", "<table"))

    @pytest.mark.parametrize("widget_type", registered_types())
    def test_generate_when_called_twice_then_identical_bytes(self, widget_type, descriptor):
        """Rendering is a pure function of the props."""
        assert generate(widget_type, descriptor(widget_type)) == generate(widget_type, descriptor(widget_type))

    def test_generate_when_type_unknown_then_raises(self):
        with pytest.raises(UnknownWidgetTypeError) as exc_info:
            generate("pictograph", {"type": "pictograph"})

        assert exc_info.value.widget_type == "pictograph"

    def test_generate_when_generator_hits_arithmetic_error_then_internal_error(self, descriptor, monkeypatch):
        """Unexpected arithmetic failures surface as GeneratorInternalError."""
        def boom(props):
            return 1 / 0

        entry = registry._REGISTRY["barChart"]
        monkeypatch.setitem(
            registry._REGISTRY,
            "barChart",
            registry.WidgetEntry(entry.widget_type, entry.schema, boom, False),
        )

        with pytest.raises(GeneratorInternalError):
            generate("barChart", descriptor("barChart"))


# ─────────────────────────────────────────────────────────────────────────────
# Validation
# ─────────────────────────────────────────────────────────────────────────────

class TestValidation:
    """Tests for validate_props() and the errors generate() reports."""

    def test_validate_props_when_valid_then_frozen_model(self, descriptor):
        props = validate_props("barChart", descriptor("barChart"))

        assert isinstance(props, BarChartProps)
        assert props.width == 400
        with pytest.raises(PydanticValidationError):
            props.width = 10

    def test_generate_when_nullable_field_missing_then_path_reported(self, descriptor):
        """Nullable is not optional: the key itself must be present."""
        props = descriptor("barChart")
        del props["title"]

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert exc_info.value.paths == ["title"]

    def test_generate_when_unknown_key_then_rejected(self, descriptor):
        props = descriptor("barChart")
        props["legend"] = True

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert exc_info.value.paths == ["legend"]

    def test_generate_when_several_fields_invalid_then_every_path_reported(self, descriptor):
        """All failing fields are listed, not only the first."""
        props = descriptor("barChart")
        del props["title"]
        props["width"] = "400"
        props["data"][1]["value"] = True

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert set(exc_info.value.paths) == {"title", "width", "data.1.value"}

    @pytest.mark.parametrize("bad_value", [True, "10", float("nan"), float("inf")])
    def test_generate_when_number_not_strict_then_rejected(self, descriptor, bad_value):
        """Booleans, numeric strings and non-finite numbers are not numbers."""
        props = descriptor("barChart")
        props["yAxis"]["max"] = bad_value

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert exc_info.value.paths == ["yAxis.max"]

    def test_generate_when_snake_case_key_then_rejected(self, descriptor):
        """Wire keys are camelCase only."""
        props = descriptor("barChart")
        props["x_axis_label"] = props.pop("xAxisLabel")

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert set(exc_info.value.paths) == {"xAxisLabel", "x_axis_label"}

    def test_generate_when_props_not_a_mapping_then_rejected(self):
        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", ["not", "an", "object"])

        assert exc_info.value.paths == [""]

    def test_generate_when_color_not_css_then_rejected(self, descriptor):
        props = descriptor("barChart")
        props["barColor"] = "bluish"

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("barChart", props)

        assert exc_info.value.paths == ["barColor"]

    def test_generate_when_number_or_text_cell_invalid_then_single_field_path(self, descriptor):
        """Both union alternatives fail, but only the cell itself is reported."""
        props = descriptor("fiveNumberSummaryTable")
        props["min"] = True

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("fiveNumberSummaryTable", props)

        assert exc_info.value.paths == ["min"]

    def test_generate_when_tagged_ticks_invalid_then_path_follows_input_keys(self, descriptor):
        # Arrange
        props = descriptor("coordinatePlane")
        props["xAxis"]["ticks"]["interval"] = -1

        # Act
        with pytest.raises(WidgetValidationError) as exc_info:
            generate("coordinatePlane", props)

        # Assert
        assert exc_info.value.paths == ["xAxis.ticks.interval"]

    def test_generate_when_tagged_equation_invalid_then_kind_tag_not_in_path(self, descriptor):
        props = descriptor("coordinatePlane")
        props["lines"][0]["equation"]["a"] = "1"
        del props["lines"][0]["equation"]["b"]

        with pytest.raises(WidgetValidationError) as exc_info:
            generate("coordinatePlane", props)

        assert set(exc_info.value.paths) == {"lines.0.equation.a", "lines.0.equation.b"}

    def test_validation_error_when_raised_then_is_widget_error(self, descriptor):
        props = descriptor("barChart")
        props["width"] = -1

        with pytest.raises(WidgetError):
            generate("barChart", props)


# ─────────────────────────────────────────────────────────────────────────────
# Registry invariants
# ─────────────────────────────────────────────────────────────────────────────

class TestRegistration:
    """Tests for register_widget() and assert_registry_complete()."""

    def test_register_when_tag_taken_then_raises(self):
        with pytest.raises(RegistryError):
            registry.register_widget(WidgetType.BAR_CHART, BarChartProps)(_noop)

    def test_register_when_literal_does_not_match_tag_then_raises(self, monkeypatch):
        monkeypatch.setattr(registry, "_REGISTRY", {})

        with pytest.raises(RegistryError):
            registry.register_widget(WidgetType.HISTOGRAM, _ProbeProps)(_noop)

    def test_register_when_schema_has_default_then_raises(self, monkeypatch):
        monkeypatch.setattr(registry, "_REGISTRY", {})

        with pytest.raises(RegistryError) as exc_info:
            registry.register_widget(WidgetType.BAR_CHART, _DefaultedProps)(_noop)

        assert "width" in str(exc_info.value)

    def test_register_when_schema_valid_then_entry_added(self, monkeypatch):
        monkeypatch.setattr(registry, "_REGISTRY", {})

        registry.register_widget(WidgetType.BAR_CHART, _ProbeProps)(_noop)

        assert registry.registered_types() == ["barChart"]
        assert registry.generate("barChart", {"type": "barChart", "value": 1}) == "<svg/>"

    def test_assert_complete_when_generators_missing_then_raises(self, monkeypatch):
        monkeypatch.setattr(registry, "_REGISTRY", {})

        with pytest.raises(RegistryError):
            registry.assert_registry_complete()

    def test_typed_schemas_when_listed_then_keyed_by_tag(self):
        schemas = typed_schemas()

        assert schemas["barChart"] is BarChartProps
        assert list(schemas) == registered_types()

    def test_export_json_schemas_when_called_then_uses_wire_keys(self):
        schemas = export_json_schemas()

        assert set(schemas) == set(registered_types())
        assert "xAxisLabel" in schemas["barChart"]["properties"]
        assert "x_axis_label" not in schemas["barChart"]["properties"]


# ─────────────────────────────────────────────────────────────────────────────
# Async and batch
# ─────────────────────────────────────────────────────────────────────────────

class TestAsyncAndBatch:
    """Tests for agenerate(), generate_many() and agenerate_many()."""

    def test_agenerate_when_async_widget_then_awaited(self, descriptor):
        output = asyncio.run(agenerate("periodicTable", descriptor("periodicTable")))

        assert output.startswith("<figure")

    def test_agenerate_when_sync_widget_then_same_output_as_generate(self, descriptor):
        output = asyncio.run(agenerate("boxPlot", descriptor("boxPlot")))

        assert output == generate("boxPlot", descriptor("boxPlot"))

    def test_generate_when_async_widget_outside_loop_then_runs_to_completion(self, descriptor):
        assert generate("periodicTable", descriptor("periodicTable")).startswith("<figure")

    def test_generate_when_async_widget_inside_running_loop_then_raises(self, descriptor):
        """Blocking on an async generator from inside a loop is refused."""
        async def render():
            return generate("periodicTable", descriptor("periodicTable"))

        with pytest.raises(GeneratorInternalError):
            asyncio.run(render())

    def test_generate_many_when_one_fails_then_siblings_unaffected(self, descriptor):
        """Each slot holds either its fragment or its own typed error."""
        bad = descriptor("barChart")
        bad["data"] = []
        batch = [
            descriptor("pieChart"),
            {"type": "pictograph"},
            bad,
            {"width": 10},
            descriptor("dataTable"),
        ]

        results = generate_many(batch)

        assert len(results) == 5
        assert results[0].startswith("<svg")
        assert isinstance(results[1], UnknownWidgetTypeError)
        assert isinstance(results[2], WidgetError)
        assert isinstance(results[3], WidgetValidationError)
        assert results[4].startswith("<table")

    def test_agenerate_many_when_awaited_then_order_preserved(self, all_descriptors):
        batch = list(all_descriptors.values())

        results = asyncio.run(agenerate_many(batch))

        assert [generate(d["type"], d) for d in batch] == results
