"""
Engine — Validation orchestration.

The engine resolves the document when needed, runs the registered
validators in order and merges their findings.

The engine is NOT where validation logic lives.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from swagval.core.context import ValidationContext, ValidationRequest
from swagval.core.contracts import SemanticValidator
from swagval.core.errors import CannotValidateError
from swagval.core.logging import ValidationLogger
from swagval.core.settings import ValidationSettings
from swagval.document.model import SUPPORTED_HTTP_METHODS, SwaggerApi
from swagval.ir.enums import ValidationStatus
from swagval.ir.schema import ValidationResponse, ValidationResult


MAPPING_SECTIONS = ("paths", "definitions", "parameters", "responses", "securityDefinitions")


def check_document_shape(document: Any) -> None:
    """
    Reject documents the validators cannot walk.

    Raises:
        CannotValidateError: If a section has the wrong container type
    """
    if not isinstance(document, Mapping):
        raise CannotValidateError(
            f"Document must be an object, got {type(document).__name__}"
        )

    for section in MAPPING_SECTIONS:
        value = document.get(section)
        if value is not None and not isinstance(value, Mapping):
            raise CannotValidateError(f"'{section}' must be an object")

    security = document.get("security")
    if security is not None and not isinstance(security, list):
        raise CannotValidateError("'security' must be an array")

    for path, path_def in (document.get("paths") or {}).items():
        if not isinstance(path, str):
            raise CannotValidateError(f"Path keys must be strings: {path!r}")
        if not isinstance(path_def, Mapping):
            raise CannotValidateError(f"Path item must be an object: {path}")
        for method in SUPPORTED_HTTP_METHODS:
            if method in path_def and not isinstance(path_def[method], Mapping):
                raise CannotValidateError(f"Operation must be an object: {method} {path}")


class Engine:
    """
    Validator orchestrator.

    Runs validators in order and packages results. A validator that
    cannot finish aborts the run: no partial result is returned.
    """

    def __init__(self, settings: Optional[ValidationSettings] = None) -> None:
        self.settings = settings or ValidationSettings()
        self._validators: list[tuple[str, SemanticValidator]] = []
        self._structure_schema: Optional[dict] = None

    def register_validator(self, name: str, validator: SemanticValidator) -> None:
        """Register a validator; validators run in registration order."""
        self._validators.append((name, validator))

    def list_validators(self) -> list[str]:
        """List registered validator names."""
        return [name for name, _ in self._validators]

    def _build_api(self, request: ValidationRequest) -> SwaggerApi:
        if not isinstance(request.document, Mapping):
            raise CannotValidateError(
                f"Document must be an object, got {type(request.document).__name__}"
            )
        if request.references is None:
            return SwaggerApi.create(request.document)
        return SwaggerApi(request.document, request.document, request.references)

    def _structure_findings(self, ctx: ValidationContext, tlog: ValidationLogger) -> ValidationResponse:
        from swagval.validation.structure import load_structure_schema, validate_structure

        if self._structure_schema is None:
            self._structure_schema = load_structure_schema(self.settings.structure_schema)

        tlog.validator_start("structure")
        response = validate_structure(ctx.api, self._structure_schema)
        tlog.validator_end("structure", errors=len(response.errors))
        return response

    def validate(self, request: ValidationRequest) -> ValidationResult:
        """
        Run a validation.

        Args:
            request: The validation request

        Returns:
            ValidationResult with every error and warning found

        Raises:
            CannotValidateError: If the document is malformed
        """
        tlog = ValidationLogger(request.request_id)

        try:
            api = self._build_api(request)
            check_document_shape(api.resolved)
        except CannotValidateError as e:
            tlog.validator_error("engine", e)
            tlog.validation_complete(status="error")
            raise

        ctx = ValidationContext(
            request_id=request.request_id,
            api=api,
            settings=self.settings,
        )
        response = ValidationResponse()

        if self.settings.structure_schema is not None:
            response.extend(self._structure_findings(ctx, tlog))

        # Semantic validation assumes a structurally valid document
        if not response.errors:
            for name, validator in self._validators:
                if name in self.settings.disabled_validators:
                    continue

                try:
                    tlog.validator_start(name)
                    result = validator(ctx)
                    tlog.validator_end(
                        name,
                        errors=len(result.errors),
                        warnings=len(result.warnings),
                    )
                except Exception as e:
                    tlog.validator_error(name, e)
                    tlog.validation_complete(status="error")
                    raise CannotValidateError(f"Validator '{name}' failed: {e}", name) from e

                response.extend(result)

        status = ValidationStatus.INVALID if response.errors else ValidationStatus.VALID

        tlog.validation_complete(
            status=status.value,
            errors=len(response.errors),
            warnings=len(response.warnings),
        )

        return ValidationResult(
            request_id=request.request_id,
            timestamp=datetime.now(),
            status=status,
            errors=response.errors,
            warnings=response.warnings,
        )


def setup_default_validators(engine: Engine) -> None:
    """Register the semantic validators in their canonical order."""
    from swagval.validation import SEMANTIC_VALIDATORS

    for name, validator in SEMANTIC_VALIDATORS:
        engine.register_validator(name, validator)


def create_engine(settings: Optional[ValidationSettings] = None) -> Engine:
    """Create an engine with the default validators registered."""
    engine = Engine(settings)
    setup_default_validators(engine)
    return engine


# Global engine instance
_engine: Optional[Engine] = None


def get_engine() -> Engine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def validate_document(document: Any, references: Optional[dict] = None) -> ValidationResult:
    """
    Convenience function for simple validations.

    Args:
        document: A loaded document (resolved if ``references`` is given)
        references: Resolver metadata, by source pointer

    Returns:
        ValidationResult
    """
    engine = get_engine()
    request = ValidationRequest(document=document, references=references)
    return engine.validate(request)
