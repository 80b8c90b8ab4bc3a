"""
Widget generators. Importing this package registers every widget family and
verifies that each ``WidgetType`` has a generator.
"""

from .registry import (
    WidgetType,
    agenerate,
    agenerate_many,
    assert_registry_complete,
    export_json_schemas,
    generate,
    generate_many,
    registered_types,
    typed_schemas,
    validate_props,
)
from . import (  # noqa: F401  (registration side effects)
    axis_charts,
    coordinate_graphs,
    fraction_models,
    geometry,
    number_lines,
    science,
    static_assets,
    tables,
)

assert_registry_complete()

__all__ = [
    "WidgetType",
    "agenerate",
    "agenerate_many",
    "export_json_schemas",
    "generate",
    "generate_many",
    "registered_types",
    "typed_schemas",
    "validate_props",
]
