"""
Schema Object Validator — Checks every schema and schema-like object.

Walks definitions, parameters (global, path and operation level) and
responses (global and operation level) with three handlers:

- array types must declare ``items``
- ``default`` values must satisfy their own schema
- every ``required`` property must be defined, directly or through ``allOf``

Locations that held a ``$ref`` are blacklisted: the referenced schema is
validated at its own location, so findings are not repeated per use.
"""

from collections.abc import Mapping
from typing import Any, Optional

from swagval.core.context import ValidationContext
from swagval.core.logging import get_validator_logger
from swagval.core.pointers import path_from_pointer, path_to_pointer
from swagval.document.model import SUPPORTED_HTTP_METHODS, SwaggerApi
from swagval.ir.enums import DiagnosticCode
from swagval.ir.schema import ValidationResponse
from swagval.validation.json_schema import validate_against_schema
from swagval.validation.walker import walk_schema

VALIDATOR_NAME = "schema_objects"
log = get_validator_logger(VALIDATOR_NAME)

# JSON Schema keywords a non-body parameter may carry
PARAMETER_SCHEMA_KEYWORDS = (
    "title",
    "description",
    "type",
    "format",
    "items",
    "default",
    "maximum",
    "exclusiveMaximum",
    "minimum",
    "exclusiveMinimum",
    "maxLength",
    "minLength",
    "pattern",
    "maxItems",
    "minItems",
    "uniqueItems",
    "enum",
    "multipleOf",
)


# =============================================================================
# Helpers
# =============================================================================

def get_schema_properties(schema: Mapping, _seen: Optional[set[int]] = None) -> list[str]:
    """
    Property names a schema defines, including those inherited via ``allOf``.

    Own properties come first; inherited ones are appended without
    duplicates, depth first.
    """
    seen = _seen if _seen is not None else set()
    if id(schema) in seen:
        return []
    seen.add(id(schema))

    own = schema.get("properties")
    properties = [str(name) for name in own] if isinstance(own, Mapping) else []

    parents = schema.get("allOf")
    for parent in parents if isinstance(parents, list) else []:
        if not isinstance(parent, Mapping):
            continue
        for name in get_schema_properties(parent, seen):
            if name not in properties:
                properties.append(name)

    return properties


def get_parameter_schema(parameter: Mapping) -> dict:
    """
    The JSON Schema a non-body parameter describes.

    Swagger's ``file`` type has no JSON Schema equivalent and is dropped.
    """
    schema = {
        key: parameter[key]
        for key in PARAMETER_SCHEMA_KEYWORDS
        if key in parameter
    }
    if schema.get("type") == "file":
        del schema["type"]
    return schema


# =============================================================================
# Handlers
# =============================================================================

def validate_array_type_items_existence(
    api: SwaggerApi,
    response: ValidationResponse,
    schema: Mapping,
    path: list[str],
) -> None:
    """Arrays must say what they contain."""
    if schema.get("type") == "array" and "items" not in schema:
        response.error(
            DiagnosticCode.OBJECT_MISSING_REQUIRED_PROPERTY,
            "Missing required property: items",
            path,
        )


def validate_default_value(
    api: SwaggerApi,
    response: ValidationResponse,
    schema: Mapping,
    path: list[str],
) -> None:
    """A ``default`` must be valid against the schema declaring it."""
    if "default" not in schema:
        return

    result = validate_against_schema(schema, schema["default"], api.resolved)

    for error in result.errors:
        response.error(error.code, error.message, path + error.path + ["default"], error.cause)

    for warning in result.warnings:
        response.warning(warning.code, warning.message, path + warning.path + ["default"], warning.cause)


def validate_schema_properties(
    api: SwaggerApi,
    response: ValidationResponse,
    schema: Mapping,
    path: list[str],
) -> None:
    """Every required property needs a definition."""
    required = schema.get("required")
    if not isinstance(required, list):
        return

    defined = get_schema_properties(schema)

    for name in required:
        if name not in defined:
            response.error(
                DiagnosticCode.OBJECT_MISSING_REQUIRED_PROPERTY_DEFINITION,
                f"Missing required property definition: {name}",
                path,
            )


SCHEMA_HANDLERS = (
    validate_array_type_items_existence,
    validate_default_value,
    validate_schema_properties,
)


# =============================================================================
# Validator
# =============================================================================

def build_blacklist(api: SwaggerApi) -> set[str]:
    """Pointers of every location that held a ``$ref``."""
    return {path_to_pointer(path_from_pointer(ptr)) for ptr in api.references}


def validate_schema_objects(ctx: ValidationContext) -> ValidationResponse:
    """
    Validate all schema objects and schema-like objects.

    Returns:
        Findings for array items, default values and required properties
    """
    api = ctx.api
    resolved = api.resolved
    blacklist = build_blacklist(api)
    response = ValidationResponse()
    items_traversal = ctx.settings.items_traversal

    def walk(schema: Any, path: list[str]) -> None:
        walk_schema(api, blacklist, schema, path, SCHEMA_HANDLERS, response, items_traversal)

    def validate_parameters(parameters: Any, path: list[str]) -> None:
        if isinstance(parameters, Mapping):
            members = [(str(name), parameter) for name, parameter in parameters.items()]
        else:
            members = [(str(index), parameter) for index, parameter in enumerate(parameters or [])]

        for name, parameter in members:
            if isinstance(parameter, Mapping) and parameter.get("in") != "body":
                parameter = get_parameter_schema(parameter)
            walk(parameter, path + [name])

    def validate_responses(responses: Any, path: list[str]) -> None:
        for name, response_def in (responses or {}).items():
            response_path = path + [str(name)]
            if not isinstance(response_def, Mapping):
                continue

            for header_name, header in (response_def.get("headers") or {}).items():
                walk(header, response_path + ["headers", str(header_name)])

            if "schema" in response_def:
                walk(response_def["schema"], response_path + ["schema"])

    log.verbose("blacklist_built", entries=len(blacklist))

    for name, definition in (resolved.get("definitions") or {}).items():
        walk(definition, ["definitions", str(name)])

    validate_parameters(resolved.get("parameters"), ["parameters"])

    validate_responses(resolved.get("responses"), ["responses"])

    for path, path_def in (resolved.get("paths") or {}).items():
        path_path = ["paths", path]

        validate_parameters(path_def.get("parameters"), path_path + ["parameters"])

        for method, operation_def in path_def.items():
            if method not in SUPPORTED_HTTP_METHODS:
                continue

            operation_path = path_path + [method]
            validate_parameters(operation_def.get("parameters"), operation_path + ["parameters"])
            validate_responses(operation_def.get("responses"), operation_path + ["responses"])

    log.info(
        "schema_objects_validated",
        errors=len(response.errors),
        warnings=len(response.warnings),
    )

    return response
