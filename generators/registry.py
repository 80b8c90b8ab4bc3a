"""
registry.py

Schema registry and dispatch. Maps a widget ``type`` tag to its pydantic
schema and generator function, validates raw props strictly and runs the
matched generator.

Usage:
    from generators import generate
    svg = generate("barChart", props)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Sequence, Tuple, Type, Union, get_args

from pydantic import ValidationError as PydanticValidationError

from core.errors import (
    FieldIssue,
    GeneratorInternalError,
    RegistryError,
    UnknownWidgetTypeError,
    WidgetError,
    WidgetValidationError,
)
from schemas.base import WidgetModel
from validators.schema_integrity import find_defaulted_fields

logger = logging.getLogger(__name__)


class WidgetType(str, Enum):
    """Every widget the engine renders."""
    # Axis charts
    BAR_CHART = "barChart"
    HISTOGRAM = "histogram"
    POPULATION_BAR_CHART = "populationBarChart"
    LINE_GRAPH = "lineGraph"
    AREA_GRAPH = "areaGraph"
    SCATTER_PLOT = "scatterPlot"
    DOT_PLOT = "dotPlot"
    BOX_PLOT = "boxPlot"

    # Coordinate plane
    COORDINATE_PLANE = "coordinatePlane"
    PARABOLA_GRAPH = "parabolaGraph"

    # Number lines
    NUMBER_LINE = "numberLine"
    ABSOLUTE_VALUE_NUMBER_LINE = "absoluteValueNumberLine"
    INEQUALITY_NUMBER_LINE = "inequalityNumberLine"
    DOUBLE_NUMBER_LINE = "doubleNumberLine"
    FRACTION_NUMBER_LINE = "fractionNumberLine"

    # Fractions
    CIRCLE_PIECE_COMPARISON_DIAGRAM = "circlePieceComparisonDiagram"
    TAPE_DIAGRAM = "tapeDiagram"
    EQUIVALENT_FRACTION_MODEL = "equivalentFractionModel"

    # Geometry & probability
    PIE_CHART = "pieChart"
    PROBABILITY_SPINNER = "probabilitySpinner"
    ANGLE_DIAGRAM = "angleDiagram"

    # Science
    KEELING_CURVE = "keelingCurve"
    POPULATION_CHANGE_EVENT_GRAPH = "populationChangeEventGraph"

    # Static assets
    PERIODIC_TABLE = "periodicTable"

    # Tables
    FIVE_NUMBER_SUMMARY_TABLE = "fiveNumberSummaryTable"
    DATA_TABLE = "dataTable"


WidgetGenerator = Callable[[Any], Union[str, Awaitable[str]]]


@dataclass(frozen=True)
class WidgetEntry:
    widget_type: str
    schema: Type[WidgetModel]
    generator: WidgetGenerator
    is_async: bool


_REGISTRY: Dict[str, WidgetEntry] = {}


# ---------------------------------------------------------------------- #
# Registration
# ---------------------------------------------------------------------- #

def register_widget(widget_type: WidgetType, schema: Type[WidgetModel]):
    """
    Decorator registering a generator for ``widget_type``.

    The schema's ``type`` literal must equal the tag and the schema must not
    contain optional or defaulted fields; violations fail at import time.
    """
    tag = WidgetType(widget_type).value

    def decorator(func: WidgetGenerator) -> WidgetGenerator:
        if tag in _REGISTRY:
            raise RegistryError(f"widget type '{tag}' registered twice")
        type_field = schema.model_fields.get("type")
        if type_field is None or get_args(type_field.annotation) != (tag,):
            raise RegistryError(f"{schema.__name__}.type must be Literal['{tag}']")
        problems = find_defaulted_fields(schema)
        if problems:
            raise RegistryError(f"{schema.__name__} has optional fields: {'; '.join(problems)}")
        _REGISTRY[tag] = WidgetEntry(
            widget_type=tag,
            schema=schema,
            generator=func,
            is_async=inspect.iscoroutinefunction(func),
        )
        return func

    return decorator


def assert_registry_complete() -> None:
    missing = sorted(t.value for t in WidgetType if t.value not in _REGISTRY)
    if missing:
        raise RegistryError(f"widget types without a generator: {', '.join(missing)}")


# ---------------------------------------------------------------------- #
# Introspection
# ---------------------------------------------------------------------- #

def registered_types() -> List[str]:
    return sorted(_REGISTRY)


def typed_schemas() -> Dict[str, Type[WidgetModel]]:
    return {tag: _REGISTRY[tag].schema for tag in sorted(_REGISTRY)}


def export_json_schemas() -> Dict[str, Dict[str, Any]]:
    """JSON-Schema (wire keys) for every registered widget."""
    return {
        tag: _REGISTRY[tag].schema.model_json_schema(by_alias=True, mode="validation")
        for tag in sorted(_REGISTRY)
    }


def _lookup(widget_type: str) -> WidgetEntry:
    entry = _REGISTRY.get(widget_type)
    if entry is None:
        logger.error("unknown widget type %r", widget_type)
        raise UnknownWidgetTypeError(widget_type)
    return entry


# ---------------------------------------------------------------------- #
# Validation & dispatch
# ---------------------------------------------------------------------- #

def _field_path(raw: Any, loc: Tuple[Union[str, int], ...], missing: bool) -> Tuple[int, bool, List[str]]:
    """
    Resolve a pydantic ``loc`` against the raw input.

    Union members add segments ("constrained-float", a discriminator tag)
    that name no key of the input; those are dropped. When a segment could
    be either a key or a tag, the reading that addresses more of the input
    wins, then the one that reaches the final segment. An absent key is only
    a field when the error reports it missing. Returns
    ``(matched, reached_end, parts)``.
    """
    if not loc:
        return 0, True, []
    head, rest = loc[0], loc[1:]
    candidates = []
    if isinstance(head, str) and isinstance(raw, Mapping) and (head in raw or (missing and not rest)):
        matched, reached_end, parts = _field_path(raw.get(head), rest, missing)
        candidates.append((matched + 1, reached_end, [head] + parts))
    elif (isinstance(head, int) and isinstance(raw, (list, tuple))
          and 0 <= head < len(raw)):
        matched, reached_end, parts = _field_path(raw[head], rest, missing)
        candidates.append((matched + 1, reached_end, [str(head)] + parts))
    if isinstance(head, str):
        matched, reached_end, parts = _field_path(raw, rest, missing)
        candidates.append((matched, reached_end and bool(rest), parts))
    if not candidates:
        return 0, False, []
    return max(candidates, key=lambda c: (c[0], c[1]))


def _issues_from(exc: PydanticValidationError, raw_props: Mapping) -> List[FieldIssue]:
    """One issue per failing field path; union alternatives are merged into it."""
    messages: Dict[str, List[str]] = {}
    for error in exc.errors():
        path = ".".join(_field_path(raw_props, tuple(error["loc"]), error["type"] == "missing")[2])
        bucket = messages.setdefault(path, [])
        if error["msg"] not in bucket:
            bucket.append(error["msg"])
    return [FieldIssue(path, "; ".join(msgs)) for path, msgs in messages.items()]


def validate_props(widget_type: str, raw_props: Any) -> WidgetModel:
    """Validate raw props against the widget schema, reporting every failing path."""
    entry = _lookup(widget_type)
    if not isinstance(raw_props, Mapping):
        raise WidgetValidationError(widget_type, [FieldIssue("", "props must be an object")])
    try:
        return entry.schema.model_validate(dict(raw_props))
    except PydanticValidationError as exc:
        issues = _issues_from(exc, raw_props)
        logger.error("validation failed for %s: %d issue(s)", widget_type, len(issues))
        raise WidgetValidationError(widget_type, issues) from exc


def _internal_error(widget_type: str, exc: Exception) -> GeneratorInternalError:
    logger.error("generator for %s failed: %s", widget_type, exc)
    return GeneratorInternalError(f"{widget_type}: {exc}")


def generate(widget_type: str, raw_props: Any) -> str:
    """
    Validate ``raw_props`` and render the widget.

    Raises:
        UnknownWidgetTypeError, WidgetValidationError, InvalidRangeError,
        InvalidDimensionsError, GeneratorInternalError
    """
    entry = _lookup(widget_type)
    props = validate_props(widget_type, raw_props)
    logger.debug("rendering %s", widget_type)
    if entry.is_async:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise GeneratorInternalError(
                f"{widget_type} is asynchronous; use agenerate() inside a running event loop"
            )
    try:
        if entry.is_async:
            return asyncio.run(entry.generator(props))
        return entry.generator(props)
    except WidgetError:
        raise
    except (ArithmeticError, ValueError) as exc:
        raise _internal_error(widget_type, exc) from exc


async def agenerate(widget_type: str, raw_props: Any) -> str:
    """Awaitable counterpart of ``generate``."""
    entry = _lookup(widget_type)
    props = validate_props(widget_type, raw_props)
    logger.debug("rendering %s", widget_type)
    try:
        if entry.is_async:
            return await entry.generator(props)
        return entry.generator(props)
    except WidgetError:
        raise
    except (ArithmeticError, ValueError) as exc:
        raise _internal_error(widget_type, exc) from exc


async def _render_isolated(descriptor: Any) -> Union[str, WidgetError]:
    if not isinstance(descriptor, Mapping) or not isinstance(descriptor.get("type"), str):
        return WidgetValidationError("<unknown>", [FieldIssue("type", "descriptor needs a string 'type'")])
    try:
        return await agenerate(descriptor["type"], descriptor)
    except WidgetError as exc:
        return exc


async def agenerate_many(descriptors: Sequence[Any]) -> List[Union[str, WidgetError]]:
    """
    Render a batch concurrently. Each slot holds the fragment or the typed
    error for that descriptor; one failure never affects its siblings.
    """
    return list(await asyncio.gather(*(_render_isolated(d) for d in descriptors)))


def generate_many(descriptors: Sequence[Any]) -> List[Union[str, WidgetError]]:
    return asyncio.run(agenerate_many(descriptors))
