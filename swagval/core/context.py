"""
ValidationContext — Read-only state shared by the validators of one run.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from swagval.core.settings import ValidationSettings
from swagval.document.model import SwaggerApi
from swagval.ir.schema import ReferenceMetadata


@dataclass
class ValidationRequest:
    """
    Input to the validation engine.

    When ``references`` is None the document is treated as unresolved and
    the engine resolves its local references first. Metadata may be given
    as ReferenceMetadata or as plain ``{ref, missing, error, circular}``
    mappings.
    """

    document: Any
    references: Optional[dict[str, ReferenceMetadata]] = None
    request_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())
        if self.references is not None:
            self.references = {
                ptr: ReferenceMetadata.model_validate(metadata)
                for ptr, metadata in self.references.items()
            }


@dataclass
class ValidationContext:
    """
    Context handed to every validator.

    Validators read the API and settings and return their own
    ValidationResponse; nothing here is mutated during a run.
    """

    request_id: str
    api: SwaggerApi
    settings: ValidationSettings = field(default_factory=ValidationSettings)
    start_time: datetime = field(default_factory=datetime.now)

    @classmethod
    def for_api(cls, api: SwaggerApi, settings: Optional[ValidationSettings] = None) -> "ValidationContext":
        return cls(
            request_id=str(uuid4()),
            api=api,
            settings=settings or ValidationSettings(),
        )
