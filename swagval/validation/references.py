"""
Reference Validator — Integrity of the document's reference graph.

* Identifies unresolvable references (JSON References and security)
* Identifies circular inheritance (cycles through ``allOf``)
* Identifies referenceable definitions nothing uses
"""

from collections.abc import Mapping
from typing import Any

from swagval.core.context import ValidationContext
from swagval.core.logging import get_validator_logger
from swagval.core.pointers import path_from_pointer, path_to_pointer
from swagval.document.model import SUPPORTED_HTTP_METHODS
from swagval.ir.enums import DiagnosticCode
from swagval.ir.schema import ValidationResponse

VALIDATOR_NAME = "references"
log = get_validator_logger(VALIDATOR_NAME)

REFERENCEABLE_SECTIONS = ("definitions", "parameters", "responses")


class ReferenceGraph:
    """
    Referenceable locations and the pointers that use them.

    Using a schema nested in an ``allOf`` also uses the schema owning that
    ``allOf``: composition is transparent for usage.
    """

    def __init__(self) -> None:
        self.referenceable: dict[str, None] = {}  # ordered set
        self.references: dict[str, list[str]] = {}

    def add_referenceable(self, path: list[str]) -> None:
        self.referenceable.setdefault(path_to_pointer(path), None)

    def is_referenceable(self, ptr: str) -> bool:
        return ptr in self.referenceable

    def add_reference(self, ref: str, ptr: str) -> None:
        """Record that ``ptr`` references ``ref``."""
        self.references.setdefault(ref, []).append(ptr)

        tokens = path_from_pointer(ref)
        if "allOf" in tokens:
            owner = tokens[:len(tokens) - 1 - tokens[::-1].index("allOf")]
            self.add_reference(path_to_pointer(owner), ptr)

    def unused(self) -> list[str]:
        return [ptr for ptr in self.referenceable if ptr not in self.references]


def _normalize_ref(ref: str) -> str:
    """Local refs are compared in canonical pointer form."""
    if ref.startswith("#"):
        return path_to_pointer(path_from_pointer(ref))
    return ref


def _collect_referenceable(resolved: Mapping, graph: ReferenceGraph) -> None:
    for section in REFERENCEABLE_SECTIONS:
        for name in resolved.get(section) or {}:
            graph.add_referenceable([section, str(name)])

    for name, definition in (resolved.get("securityDefinitions") or {}).items():
        definition_path = ["securityDefinitions", str(name)]
        graph.add_referenceable(definition_path)

        scopes = definition.get("scopes") if isinstance(definition, Mapping) else None
        for scope in scopes or {}:
            graph.add_referenceable(definition_path + ["scopes", str(scope)])


def _process_security(
    requirements: Any,
    path: list[str],
    graph: ReferenceGraph,
    response: ValidationResponse,
) -> None:
    """Resolve the schemes and scopes named by a list of security requirements."""
    for index, requirement in enumerate(requirements or []):
        for name, scopes in requirement.items():
            definition_path = ["securityDefinitions", str(name)]
            requirement_path = path + [str(index), str(name)]

            if not graph.is_referenceable(path_to_pointer(definition_path)):
                response.error(
                    DiagnosticCode.UNRESOLVABLE_REFERENCE,
                    f"Security definition could not be resolved: {name}",
                    requirement_path,
                )
                continue

            graph.add_reference(path_to_pointer(definition_path), path_to_pointer(requirement_path))

            for scope_index, scope in enumerate(scopes or []):
                scope_path = requirement_path + [str(scope_index)]
                scope_ptr = path_to_pointer(definition_path + ["scopes", str(scope)])

                if not graph.is_referenceable(scope_ptr):
                    response.error(
                        DiagnosticCode.UNRESOLVABLE_REFERENCE,
                        f"Security scope definition could not be resolved: {scope}",
                        scope_path,
                    )
                else:
                    graph.add_reference(scope_ptr, path_to_pointer(scope_path))


def validate_references(ctx: ValidationContext) -> ValidationResponse:
    """
    Validate all references.

    Returns:
        Errors for unresolvable and circular-inheritance references,
        warnings for unused definitions
    """
    api = ctx.api
    resolved = api.resolved
    graph = ReferenceGraph()
    response = ValidationResponse()

    _collect_referenceable(resolved, graph)

    log.verbose("referenceable_collected", count=len(graph.referenceable))

    # JSON References
    for ptr, metadata in api.references.items():
        source_path = path_from_pointer(ptr)
        real_path = source_path + ["$ref"]

        if metadata.missing:
            response.error(
                DiagnosticCode.UNRESOLVABLE_REFERENCE,
                f"Reference could not be resolved: {metadata.ref}",
                real_path,
                metadata.error,
            )
            continue

        if metadata.circular and "allOf" in source_path:
            response.error(
                DiagnosticCode.CIRCULAR_INHERITANCE,
                f"Schema object inherits from itself: {metadata.ref}",
                real_path,
            )

        graph.add_reference(_normalize_ref(metadata.ref), path_to_pointer(real_path))

    # Security requirements reference definitions by name, not by $ref
    _process_security(resolved.get("security"), ["security"], graph, response)

    for path, path_def in (resolved.get("paths") or {}).items():
        path_path = ["paths", path]

        _process_security(path_def.get("security"), path_path + ["security"], graph, response)

        for method, operation_def in path_def.items():
            if method not in SUPPORTED_HTTP_METHODS:
                continue

            _process_security(
                operation_def.get("security"),
                path_path + [method, "security"],
                graph,
                response,
            )

    for ptr in graph.unused():
        response.warning(
            DiagnosticCode.UNUSED_DEFINITION,
            f"Definition is not used: {ptr}",
            path_from_pointer(ptr),
        )

    log.info(
        "references_validated",
        referenceable=len(graph.referenceable),
        referenced=len(graph.references),
        errors=len(response.errors),
        warnings=len(response.warnings),
    )

    return response
