"""
IR Enums — Diagnostic codes, statuses and run options.

No stringly-typed codes scattered across validators.
"""

from enum import Enum


# ============================================================================
# Diagnostics
# ============================================================================

class DiagnosticCode(str, Enum):
    """
    Every code a validation run can report.

    The semantic codes come from the swagval validators. The rest are
    reported by the JSON Schema adapter (default values, structure).
    """

    # Schema objects
    OBJECT_MISSING_REQUIRED_PROPERTY = "OBJECT_MISSING_REQUIRED_PROPERTY"
    OBJECT_MISSING_REQUIRED_PROPERTY_DEFINITION = "OBJECT_MISSING_REQUIRED_PROPERTY_DEFINITION"

    # References
    UNRESOLVABLE_REFERENCE = "UNRESOLVABLE_REFERENCE"
    CIRCULAR_INHERITANCE = "CIRCULAR_INHERITANCE"
    UNUSED_DEFINITION = "UNUSED_DEFINITION"          # warning only

    # Paths and operations
    EQUIVALENT_PATH = "EQUIVALENT_PATH"
    DUPLICATE_PARAMETER = "DUPLICATE_PARAMETER"
    DUPLICATE_OPERATIONID = "DUPLICATE_OPERATIONID"
    MULTIPLE_BODY_PARAMETERS = "MULTIPLE_BODY_PARAMETERS"
    INVALID_PARAMETER_COMBINATION = "INVALID_PARAMETER_COMBINATION"
    MISSING_PATH_PARAMETER_DEFINITION = "MISSING_PATH_PARAMETER_DEFINITION"
    MISSING_PATH_PARAMETER_DECLARATION = "MISSING_PATH_PARAMETER_DECLARATION"

    # JSON Schema adapter
    INVALID_TYPE = "INVALID_TYPE"
    ENUM_MISMATCH = "ENUM_MISMATCH"
    MINIMUM = "MINIMUM"
    MINIMUM_EXCLUSIVE = "MINIMUM_EXCLUSIVE"
    MAXIMUM = "MAXIMUM"
    MAXIMUM_EXCLUSIVE = "MAXIMUM_EXCLUSIVE"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    PATTERN = "PATTERN"
    INVALID_FORMAT = "INVALID_FORMAT"
    MULTIPLE_OF = "MULTIPLE_OF"
    ARRAY_LENGTH_SHORT = "ARRAY_LENGTH_SHORT"
    ARRAY_LENGTH_LONG = "ARRAY_LENGTH_LONG"
    ARRAY_UNIQUE = "ARRAY_UNIQUE"
    OBJECT_ADDITIONAL_PROPERTIES = "OBJECT_ADDITIONAL_PROPERTIES"
    OBJECT_PROPERTIES_MINIMUM = "OBJECT_PROPERTIES_MINIMUM"
    OBJECT_PROPERTIES_MAXIMUM = "OBJECT_PROPERTIES_MAXIMUM"
    ANY_OF_MISSING = "ANY_OF_MISSING"
    ONE_OF_MISSING = "ONE_OF_MISSING"
    NOT_PASSED = "NOT_PASSED"
    SCHEMA_VALIDATION_FAILED = "SCHEMA_VALIDATION_FAILED"
    INVALID_SCHEMA = "INVALID_SCHEMA"


class ValidationStatus(str, Enum):
    """Overall validation status."""

    VALID = "valid"
    INVALID = "invalid"


class ItemsTraversal(str, Enum):
    """
    How the schema walker descends into array ``items``.

    CONTAINER walks each member of the item schema, then runs handlers on
    the item schema itself. Nested ``properties``/``allOf`` of an item
    schema are not validated this way; it is the long-standing behavior
    and the default.

    SCHEMA walks the item schema like any other schema node.
    """

    CONTAINER = "container"
    SCHEMA = "schema"
