"""
Pointers — Conversion between token paths and JSON Pointer fragments.

Paths are lists of string tokens (array indices stringified). Pointers
are their ``#/a/b`` rendering, used for skip-lists, reference keys and
messages. Only ``~`` and ``/`` are escaped; tokens are never
percent-encoded, so path keys such as ``/a%20b`` survive a round trip.
"""

from typing import Iterable


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def path_to_pointer(path: Iterable) -> str:
    """Render a token path as a ``#/...`` pointer."""
    tokens = [_escape(str(token)) for token in path]
    if not tokens:
        return "#"
    return "#/" + "/".join(tokens)


def path_from_pointer(pointer: str) -> list[str]:
    """Parse a ``#/...`` pointer into its token path."""
    if pointer.startswith("#"):
        pointer = pointer[1:]
    if pointer == "":
        return []
    if pointer.startswith("/"):
        pointer = pointer[1:]
    return [_unescape(token) for token in pointer.split("/")]


def is_local_pointer(ref: str) -> bool:
    """True for document-local references (``#`` fragments)."""
    return isinstance(ref, str) and ref.startswith("#")
