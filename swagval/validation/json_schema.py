"""
JSON Schema Adapter — Validate a value against a schema with ``jsonschema``.

Swagger 2.0 schemas are Draft 4 schemas plus the ``file`` type, so the
Draft 4 validator is extended to know it. Failures are reported as
Diagnostics whose path is the location inside the validated value.
"""

from typing import Any

from jsonschema import Draft4Validator, FormatChecker, validators
from jsonschema.exceptions import SchemaError, UnknownType, ValidationError
from referencing.exceptions import Unresolvable

from swagval.ir.enums import DiagnosticCode
from swagval.ir.schema import ValidationResponse

SwaggerSchemaValidator = validators.extend(
    Draft4Validator,
    type_checker=Draft4Validator.TYPE_CHECKER.redefine(
        "file", lambda checker, instance: isinstance(instance, str)
    ),
)

KEYWORD_CODES = {
    "type": DiagnosticCode.INVALID_TYPE,
    "enum": DiagnosticCode.ENUM_MISMATCH,
    "minimum": DiagnosticCode.MINIMUM,
    "maximum": DiagnosticCode.MAXIMUM,
    "minLength": DiagnosticCode.MIN_LENGTH,
    "maxLength": DiagnosticCode.MAX_LENGTH,
    "pattern": DiagnosticCode.PATTERN,
    "format": DiagnosticCode.INVALID_FORMAT,
    "multipleOf": DiagnosticCode.MULTIPLE_OF,
    "minItems": DiagnosticCode.ARRAY_LENGTH_SHORT,
    "maxItems": DiagnosticCode.ARRAY_LENGTH_LONG,
    "uniqueItems": DiagnosticCode.ARRAY_UNIQUE,
    "required": DiagnosticCode.OBJECT_MISSING_REQUIRED_PROPERTY,
    "additionalProperties": DiagnosticCode.OBJECT_ADDITIONAL_PROPERTIES,
    "minProperties": DiagnosticCode.OBJECT_PROPERTIES_MINIMUM,
    "maxProperties": DiagnosticCode.OBJECT_PROPERTIES_MAXIMUM,
    "anyOf": DiagnosticCode.ANY_OF_MISSING,
    "oneOf": DiagnosticCode.ONE_OF_MISSING,
    "not": DiagnosticCode.NOT_PASSED,
}


def _code_for(error: ValidationError) -> DiagnosticCode:
    # Draft 4 expresses exclusive bounds as flags on minimum/maximum
    if error.validator == "minimum" and error.schema.get("exclusiveMinimum") is True:
        return DiagnosticCode.MINIMUM_EXCLUSIVE
    if error.validator == "maximum" and error.schema.get("exclusiveMaximum") is True:
        return DiagnosticCode.MAXIMUM_EXCLUSIVE
    return KEYWORD_CODES.get(error.validator, DiagnosticCode.SCHEMA_VALIDATION_FAILED)


def validate_against_schema(schema: dict, value: Any, document: Any = None) -> ValidationResponse:
    """
    Validate ``value`` against ``schema``.

    When ``document`` is given, ``schema`` is evaluated as a node of it:
    local ``#/...`` references resolve against the document, not the node.

    Returns:
        A response whose errors carry the path of the offending element
        within ``value``. A schema the validator cannot evaluate yields a
        single INVALID_SCHEMA error.
    """
    response = ValidationResponse()
    if document is None:
        validator = SwaggerSchemaValidator(schema, format_checker=FormatChecker())
    else:
        root = SwaggerSchemaValidator(document, format_checker=FormatChecker())
        validator = root.evolve(schema=schema)

    try:
        errors = list(validator.iter_errors(value))
    except (SchemaError, UnknownType, Unresolvable) as e:
        response.error(
            DiagnosticCode.INVALID_SCHEMA,
            f"Schema cannot be evaluated: {e}",
            [],
        )
        return response

    for error in errors:
        response.error(
            _code_for(error),
            error.message,
            [str(token) for token in error.absolute_path],
        )

    return response
