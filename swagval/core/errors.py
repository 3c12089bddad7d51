"""
Errors — Failures that stop a validation run.

Validation findings are never raised; they are Diagnostics. These
exceptions mean no result could be produced at all.
"""


class SwagvalError(Exception):
    """Base class for swagval failures."""


class DocumentLoadError(SwagvalError):
    """The document could not be read or parsed."""


class CannotValidateError(SwagvalError):
    """The document lacks the minimal shape the validators rely on."""

    def __init__(self, message: str, validator: str = None):
        super().__init__(message)
        self.validator = validator
