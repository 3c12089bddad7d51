"""
Paths & Operations Validator — One pass over every path and operation.

* Paths must be functionally different (``/pet/{id}`` == ``/pet/{petId}``)
* Parameters must be unique per level (``in`` + ``name``)
* operationIds must be unique across the document
* An operation has at most one body parameter, and never body + formData
* Declared path parameters must be defined, and defined ones declared
"""

import re
from dataclasses import dataclass, field
from typing import Any

from swagval.core.context import ValidationContext
from swagval.core.logging import get_validator_logger
from swagval.core.pointers import path_from_pointer, path_to_pointer
from swagval.document.model import SUPPORTED_HTTP_METHODS
from swagval.ir.enums import DiagnosticCode
from swagval.ir.schema import ValidationResponse

VALIDATOR_NAME = "paths_and_operations"
log = get_validator_logger(VALIDATOR_NAME)

PATH_PARAMETER_PATTERN = re.compile(r"\{(.*?)\}")


@dataclass
class PathAccumulator:
    """What earlier paths of the same run have claimed."""

    paths: set[str] = field(default_factory=set)
    operation_ids: set[str] = field(default_factory=set)


def normalize_path(path: str) -> tuple[str, list[str]]:
    """
    Replace each ``{name}`` placeholder with a positional marker.

    Returns:
        (normalized path, declared parameter names in order)
    """
    declared = []
    normalized = path

    for index, match in enumerate(PATH_PARAMETER_PATTERN.finditer(path)):
        declared.append(match.group(1))
        normalized = normalized.replace(match.group(0), f"arg{index}", 1)

    return normalized, declared


def _validate_duplicate_parameters(
    parameters: Any,
    path: list[str],
    response: ValidationResponse,
) -> None:
    seen: set[str] = set()

    for index, parameter in enumerate(parameters or []):
        key = f"{parameter.get('in')}:{parameter.get('name')}"
        parameter_path = path + [str(index)]

        if key in seen:
            response.error(
                DiagnosticCode.DUPLICATE_PARAMETER,
                f"Operation cannot have duplicate parameters: {path_to_pointer(parameter_path)}",
                parameter_path,
            )
        else:
            seen.add(key)


def validate_paths_and_operations(ctx: ValidationContext) -> ValidationResponse:
    """
    Validate paths and operations in a single pass.

    Returns:
        Findings for equivalent paths, duplicate parameters and
        operationIds, parameter combinations and path parameters
    """
    api = ctx.api
    response = ValidationResponse()
    accumulator = PathAccumulator()

    for path, path_def in (api.resolved.get("paths") or {}).items():
        path_path = ["paths", path]
        normalized, declared = normalize_path(path)

        if normalized in accumulator.paths:
            response.error(
                DiagnosticCode.EQUIVALENT_PATH,
                f"Equivalent path already exists: {path}",
                path_path,
            )
        else:
            accumulator.paths.add(normalized)

        # Path-level duplicates are checked here; the model merges them away
        _validate_duplicate_parameters(path_def.get("parameters"), path_path + ["parameters"], response)

        for method, operation_def in path_def.items():
            if method not in SUPPORTED_HTTP_METHODS:
                continue

            operation_path = path_path + [method]
            operation_id = operation_def.get("operationId")

            if operation_id is not None:
                if operation_id in accumulator.operation_ids:
                    response.error(
                        DiagnosticCode.DUPLICATE_OPERATIONID,
                        f"Cannot have multiple operations with the same operationId: {operation_id}",
                        operation_path + ["operationId"],
                    )
                else:
                    accumulator.operation_ids.add(operation_id)

            _validate_duplicate_parameters(
                operation_def.get("parameters"),
                operation_path + ["parameters"],
                response,
            )

            body_parameters = 0
            form_parameters = 0
            defined: dict[str, str] = {}

            for parameter in api.get_operation(path, method).get_parameters():
                if parameter.location == "path":
                    defined[parameter.name] = parameter.ptr
                elif parameter.location == "body":
                    body_parameters += 1
                elif parameter.location == "formData":
                    form_parameters += 1

            if body_parameters > 1:
                response.error(
                    DiagnosticCode.MULTIPLE_BODY_PARAMETERS,
                    "Operation cannot have multiple body parameters",
                    operation_path,
                )

            if body_parameters > 0 and form_parameters > 0:
                response.error(
                    DiagnosticCode.INVALID_PARAMETER_COMBINATION,
                    "Operation cannot have a body parameter and a formData parameter",
                    operation_path,
                )

            for name in declared:
                if name not in defined:
                    response.error(
                        DiagnosticCode.MISSING_PATH_PARAMETER_DEFINITION,
                        f"Path parameter is declared but is not defined: {name}",
                        operation_path,
                    )

            for name, ptr in defined.items():
                if name not in declared:
                    response.error(
                        DiagnosticCode.MISSING_PATH_PARAMETER_DECLARATION,
                        f"Path parameter is defined but is not declared: {name}",
                        path_from_pointer(ptr),
                    )

        log.debug("path_validated", path=path, declared=len(declared))

    log.info(
        "paths_validated",
        paths=len(accumulator.paths),
        operation_ids=len(accumulator.operation_ids),
        errors=len(response.errors),
    )

    return response
