"""
schema_integrity.py

Structural checks over widget schemas. The registry runs these at
registration time and the test suite runs them over every registered widget:
no field may be optional or defaulted, and the exported JSON-Schema must
require every property and forbid extra keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Type, get_args

from pydantic import BaseModel
from pydantic_core import PydanticUndefined


@dataclass
class IntegrityReport:
    """Outcome of checking one widget schema."""

    model: str
    problems: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


# ---------------------------------------------------------------------- #
# Pydantic view
# ---------------------------------------------------------------------- #

def _nested_models(annotation: Any) -> List[Type[BaseModel]]:
    found: List[Type[BaseModel]] = []
    stack = [annotation]
    while stack:
        current = stack.pop()
        if isinstance(current, type) and issubclass(current, BaseModel):
            found.append(current)
            continue
        stack.extend(get_args(current))
    return found


def find_defaulted_fields(model: Type[BaseModel]) -> List[str]:
    """
    Return dotted paths of fields that are optional or carry a default,
    walking nested models recursively.
    """
    problems: List[str] = []
    visited: Set[Type[BaseModel]] = set()

    def walk(current: Type[BaseModel], prefix: str) -> None:
        if current in visited:
            return
        visited.add(current)
        for name, info in current.model_fields.items():
            path = f"{prefix}{current.__name__}.{name}"
            if not info.is_required():
                problems.append(f"{path} is not required")
            if info.default is not PydanticUndefined and info.default is not Ellipsis:
                problems.append(f"{path} has a default")
            if info.default_factory is not None:
                problems.append(f"{path} has a default factory")
            for nested in _nested_models(info.annotation):
                walk(nested, "")

    walk(model, "")
    return problems


# ---------------------------------------------------------------------- #
# JSON-Schema view
# ---------------------------------------------------------------------- #

def find_json_schema_gaps(schema: Dict[str, Any]) -> List[str]:
    """
    Check an exported JSON-Schema: every object must list all of its
    properties as required and forbid additional properties.
    """
    problems: List[str] = []

    def walk(node: Any, path: str) -> None:
        if isinstance(node, dict):
            properties = node.get("properties")
            if isinstance(properties, dict):
                missing = sorted(set(properties) - set(node.get("required", [])))
                if missing:
                    problems.append(f"{path or '#'}: not required: {', '.join(missing)}")
                if node.get("additionalProperties") is not False:
                    problems.append(f"{path or '#'}: additional properties allowed")
                for key, value in properties.items():
                    if isinstance(value, dict) and "default" in value:
                        problems.append(f"{path or '#'}/{key}: has a default")
            for key, value in node.items():
                walk(value, f"{path}/{key}")
        elif isinstance(node, list):
            for index, value in enumerate(node):
                walk(value, f"{path}/{index}")

    walk(schema, "")
    return problems


def check_model(model: Type[BaseModel]) -> IntegrityReport:
    report = IntegrityReport(model=model.__name__)
    report.problems.extend(find_defaulted_fields(model))
    report.problems.extend(find_json_schema_gaps(model.model_json_schema(by_alias=True)))
    return report
