"""
Document Loader — Read Swagger documents from JSON or YAML.

JSON is a subset of YAML, so one parser serves both.
"""

from pathlib import Path
from typing import Union

import yaml

from swagval.core.errors import DocumentLoadError
from swagval.core.logging import LogChannel, get_logger

log = get_logger(LogChannel.DOCUMENT)


def load_document_from_string(text: str, source: str = "<string>") -> dict:
    """
    Parse a document from text.

    Raises:
        DocumentLoadError: If the text doesn't parse or isn't a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentLoadError(f"Could not parse {source}: {e}") from e

    if not isinstance(data, dict):
        raise DocumentLoadError(
            f"Document root must be an object, got {type(data).__name__}: {source}"
        )

    log.verbose("document_parsed", source=source, top_level_keys=len(data))
    return data


def load_document(path: Union[str, Path]) -> dict:
    """
    Load a document from a file.

    Raises:
        DocumentLoadError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise DocumentLoadError(f"Document not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(f"Could not read {path}: {e}") from e

    return load_document_from_string(text, source=str(path))
