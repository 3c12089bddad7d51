"""
Validation — Semantic validators for resolved Swagger 2.0 documents.

Each validator takes a ValidationContext and returns its own
ValidationResponse; the engine concatenates them.
"""

from swagval.validation.paths import validate_paths_and_operations
from swagval.validation.references import validate_references
from swagval.validation.schema_objects import (
    SCHEMA_HANDLERS,
    validate_array_type_items_existence,
    validate_default_value,
    validate_schema_objects,
    validate_schema_properties,
)
from swagval.validation.structure import validate_structure
from swagval.validation.walker import walk_schema

SEMANTIC_VALIDATORS = (
    ("references", validate_references),
    ("schema_objects", validate_schema_objects),
    ("paths_and_operations", validate_paths_and_operations),
)

__all__ = [
    "SEMANTIC_VALIDATORS",
    "SCHEMA_HANDLERS",
    "validate_array_type_items_existence",
    "validate_default_value",
    "validate_paths_and_operations",
    "validate_references",
    "validate_schema_objects",
    "validate_schema_properties",
    "validate_structure",
    "walk_schema",
]
