"""
Contracts — Type definitions for validators and schema handlers.
"""

from typing import Protocol

from swagval.core.context import ValidationContext
from swagval.document.model import SwaggerApi
from swagval.ir.schema import ValidationResponse


class SemanticValidator(Protocol):
    """Protocol for whole-document validators run by the engine."""

    def __call__(self, ctx: ValidationContext) -> ValidationResponse:
        """Validate the context's API and return the findings."""
        ...


class SchemaHandler(Protocol):
    """
    Protocol for per-node checks run by the schema walker.

    Handlers append to ``response``; they never raise and never mutate
    ``schema``.
    """

    def __call__(
        self,
        api: SwaggerApi,
        response: ValidationResponse,
        schema: dict,
        path: list[str],
    ) -> None:
        ...
