"""
IR — Diagnostics and results

Every validator speaks in these types; text output is a rendering of them.
"""

from swagval.ir.enums import (
    DiagnosticCode,
    ItemsTraversal,
    ValidationStatus,
)
from swagval.ir.schema import (
    Diagnostic,
    ReferenceMetadata,
    ValidationResponse,
    ValidationResult,
)

__all__ = [
    "DiagnosticCode",
    "ItemsTraversal",
    "ValidationStatus",
    "Diagnostic",
    "ReferenceMetadata",
    "ValidationResponse",
    "ValidationResult",
]
