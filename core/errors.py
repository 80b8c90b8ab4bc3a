"""
errors.py

Typed failures raised by the widget engine. Every input-contract violation
surfaces as one of these, synchronously, to the caller of ``generate``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence


class WidgetError(Exception):
    """Base class for every error the engine raises."""


@dataclass(frozen=True)
class FieldIssue:
    """One failing field path inside a rejected descriptor."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.message}"


class WidgetValidationError(WidgetError):
    """
    Raised when raw props are rejected by a widget schema.

    ``issues`` lists every failing field path, not only the first one.
    """

    def __init__(self, widget_type: str, issues: Sequence[FieldIssue]):
        self.widget_type = widget_type
        self.issues: List[FieldIssue] = list(issues)
        summary = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"invalid props for '{widget_type}': {summary}")

    @property
    def paths(self) -> List[str]:
        return [issue.path for issue in self.issues]


class UnknownWidgetTypeError(WidgetError):
    def __init__(self, widget_type: str):
        self.widget_type = widget_type
        super().__init__(f"unknown widget type: {widget_type!r}")


class InvalidRangeError(WidgetError):
    """Degenerate bounds: min >= max, unordered summaries, and similar."""


class InvalidDimensionsError(WidgetError):
    """Empty data, collapsed frames, or mismatched lengths."""


class GeneratorInternalError(WidgetError):
    """Unexpected arithmetic failure (NaN/Infinity) or misuse of a canvas."""


class RegistryError(WidgetError):
    """A widget registration breaks a registry invariant."""
