"""
Settings — Run options loaded from YAML with environment overrides.

A settings file looks like:

    settings:
      items_traversal: container
      structure_schema: schemas/swagger-2.0.json
      disabled_validators: [references]
      fail_on_warnings: false
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from swagval.ir.enums import ItemsTraversal

DEFAULT_SETTINGS_FILE = "swagval.yaml"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ValidationSettings:
    """Options for one validation run."""
    items_traversal: ItemsTraversal = ItemsTraversal.CONTAINER
    structure_schema: Optional[Path] = None
    disabled_validators: list[str] = field(default_factory=list)
    fail_on_warnings: bool = False


def parse_settings(data: dict) -> ValidationSettings:
    """Build settings from a parsed ``settings`` mapping."""
    structure_schema = data.get("structure_schema")
    return ValidationSettings(
        items_traversal=ItemsTraversal(data.get("items_traversal", ItemsTraversal.CONTAINER.value)),
        structure_schema=Path(structure_schema) if structure_schema else None,
        disabled_validators=list(data.get("disabled_validators", [])),
        fail_on_warnings=bool(data.get("fail_on_warnings", False)),
    )


def load_settings(path: Union[str, Path, None] = None) -> ValidationSettings:
    """
    Load settings from a YAML file, then apply environment overrides.

    Args:
        path: Settings file. Falls back to ./swagval.yaml when it exists.

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If an option has an unknown value
    """
    data: dict = {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
    elif Path(DEFAULT_SETTINGS_FILE).exists():
        path = Path(DEFAULT_SETTINGS_FILE)

    if path is not None:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        data = dict(loaded.get("settings", {}))

    # Environment wins over the file
    if "SWAGVAL_ITEMS_TRAVERSAL" in os.environ:
        data["items_traversal"] = os.environ["SWAGVAL_ITEMS_TRAVERSAL"].lower()
    if "SWAGVAL_STRUCTURE_SCHEMA" in os.environ:
        data["structure_schema"] = os.environ["SWAGVAL_STRUCTURE_SCHEMA"]
    if "SWAGVAL_FAIL_ON_WARNINGS" in os.environ:
        data["fail_on_warnings"] = os.environ["SWAGVAL_FAIL_ON_WARNINGS"].lower() in _TRUTHY

    return parse_settings(data)
