"""
IR Schema — Pydantic models for diagnostics, references and results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from swagval.ir.enums import DiagnosticCode, ValidationStatus

IR_VERSION = "0.1.0"


class Diagnostic(BaseModel):
    """A single validation finding. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    code: DiagnosticCode = Field(..., description="Machine-readable finding code")
    message: str = Field(..., description="Human-readable explanation")
    path: list[str] = Field(default_factory=list, description="Token path of the offending element")
    cause: Optional[Any] = Field(None, description="Underlying cause, when one is known")


class ReferenceMetadata(BaseModel):
    """What the resolver learned about one ``$ref`` in the original document."""

    ref: str = Field(..., description="Raw reference string")
    missing: bool = Field(default=False, description="Resolution failed")
    error: Optional[str] = Field(None, description="Why resolution failed")
    circular: bool = Field(default=False, description="Resolution passed through a cycle")


class ValidationResponse(BaseModel):
    """
    Append-only accumulator shared by the validators of one run.

    Validators only append; the lists are read once the run is over.
    """

    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)

    def error(
        self,
        code: DiagnosticCode,
        message: str,
        path: list[str],
        cause: Any = None,
    ) -> None:
        self.errors.append(
            Diagnostic(code=code, message=message, path=list(path), cause=cause)
        )

    def warning(
        self,
        code: DiagnosticCode,
        message: str,
        path: list[str],
        cause: Any = None,
    ) -> None:
        self.warnings.append(
            Diagnostic(code=code, message=message, path=list(path), cause=cause)
        )

    def extend(self, other: ValidationResponse) -> None:
        """Concatenate another response, preserving order."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)


class ValidationResult(BaseModel):
    """The complete output of a validation run."""

    version: str = Field(default=IR_VERSION, description="Result schema version")
    request_id: str = Field(..., description="Unique validation run ID")
    timestamp: datetime = Field(..., description="When validation occurred")
    status: ValidationStatus = Field(..., description="Overall outcome")
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.status == ValidationStatus.VALID
