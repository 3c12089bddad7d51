"""
IR Serialization — JSON import/export for validation results.
"""

from pathlib import Path
from typing import Union

from swagval.ir.schema import ValidationResult


def to_json(result: ValidationResult, indent: int = 2) -> str:
    """Serialize a ValidationResult to JSON string."""
    return result.model_dump_json(indent=indent)


def from_json(json_str: str) -> ValidationResult:
    """Deserialize a ValidationResult from JSON string."""
    return ValidationResult.model_validate_json(json_str)


def save(result: ValidationResult, path: Union[str, Path]) -> None:
    """Save a ValidationResult to a JSON file."""
    path = Path(path)
    path.write_text(to_json(result))
