"""
Structure Validator — The whole document against a JSON Schema.

Semantic validation assumes a structurally sound document; the engine
skips it when this check reports errors.
"""

import json
from pathlib import Path
from typing import Union

from swagval.core.errors import CannotValidateError
from swagval.core.logging import get_validator_logger
from swagval.document.model import SwaggerApi
from swagval.ir.schema import ValidationResponse
from swagval.validation.json_schema import validate_against_schema

VALIDATOR_NAME = "structure"
log = get_validator_logger(VALIDATOR_NAME)


def load_structure_schema(path: Union[str, Path]) -> dict:
    """Load a JSON meta-schema from disk."""
    path = Path(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise CannotValidateError(f"Structure schema unusable: {path}: {e}", VALIDATOR_NAME) from e


def validate_structure(api: SwaggerApi, schema: dict) -> ValidationResponse:
    """Validate the resolved document against ``schema``."""
    response = validate_against_schema(schema, api.resolved)

    log.info("structure_validated", errors=len(response.errors))

    return response
