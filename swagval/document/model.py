"""
Document Model — Operations and their consolidated parameters.

The validators never merge path-level and operation-level parameters
themselves; they ask the model.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from swagval.core.pointers import path_to_pointer
from swagval.document.resolver import resolve_refs
from swagval.ir.schema import ReferenceMetadata

SUPPORTED_HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


@dataclass
class Parameter:
    """A parameter as seen by one operation."""

    location: Optional[str]
    name: Optional[str]
    ptr: str
    definition: dict = field(default_factory=dict)

    @property
    def key(self) -> str:
        """Identity of a parameter within an operation (``in:name``)."""
        return f"{self.location}:{self.name}"


@dataclass
class Operation:
    """One HTTP method of one path."""

    path: str
    method: str
    definition: dict
    path_definition: dict

    @property
    def ptr(self) -> str:
        return path_to_pointer(["paths", self.path, self.method])

    def get_parameters(self) -> list[Parameter]:
        """
        Operation parameters merged with the path-level ones.

        Operation-level parameters come first and win over a path-level
        parameter with the same ``in:name``. Repeats are dropped.
        """
        seen: set[str] = set()
        parameters: list[Parameter] = []

        sources = [
            (self.definition.get("parameters") or [], ["paths", self.path, self.method, "parameters"]),
            (self.path_definition.get("parameters") or [], ["paths", self.path, "parameters"]),
        ]

        for definitions, base in sources:
            for index, definition in enumerate(definitions):
                parameter = Parameter(
                    location=definition.get("in"),
                    name=definition.get("name"),
                    ptr=path_to_pointer(base + [str(index)]),
                    definition=definition,
                )
                if parameter.key in seen:
                    continue
                seen.add(parameter.key)
                parameters.append(parameter)

        return parameters


class SwaggerApi:
    """
    A Swagger 2.0 document after reference resolution.

    Attributes:
        definition: The document as loaded (may still hold ``$ref``s)
        resolved: The resolved tree the validators read
        references: Metadata for every original ``$ref``, by source pointer
    """

    def __init__(
        self,
        definition: Any,
        resolved: Any,
        references: Optional[dict[str, ReferenceMetadata]] = None,
    ) -> None:
        self.definition = definition
        self.resolved = resolved
        self.references = references or {}

    @classmethod
    def create(cls, document: Any) -> "SwaggerApi":
        """Resolve a loaded document's local references and wrap it."""
        result = resolve_refs(document)
        return cls(document, result.resolved, result.references)

    def get_operation(self, path: str, method: str) -> Optional[Operation]:
        """Return the operation for a path and method, or None."""
        method = str(method).lower()
        if method not in SUPPORTED_HTTP_METHODS:
            return None

        path_definition = (self.resolved.get("paths") or {}).get(path)
        if not isinstance(path_definition, Mapping):
            return None

        definition = path_definition.get(method)
        if not isinstance(definition, Mapping):
            return None

        return Operation(
            path=path,
            method=method,
            definition=definition,
            path_definition=path_definition,
        )

    def get_operations(self) -> list[Operation]:
        """Every operation of the document, in document order."""
        operations = []
        for path, path_definition in (self.resolved.get("paths") or {}).items():
            for method in path_definition:
                operation = self.get_operation(path, method)
                if operation is not None:
                    operations.append(operation)
        return operations
