"""
Reference Resolver — Inline local ``$ref`` pointers and describe each one.

Only document-local references (``#/...``) are followed. Remote ones are
recorded as missing; nothing is fetched.

A reference is circular when resolving it passes through a cycle: from its
target, following the references held at or below each target location
eventually reaches a reference that leads back to itself. Circular
references stay in the resolved tree as ``{"$ref": ...}`` so the tree
remains finite. Every other reference is replaced by a copy of its
resolved target.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from swagval.core.logging import LogChannel, get_logger
from swagval.core.pointers import is_local_pointer, path_from_pointer, path_to_pointer
from swagval.ir.schema import ReferenceMetadata

log = get_logger(LogChannel.DOCUMENT)


@dataclass
class ResolvedDocument:
    """A resolved tree plus metadata keyed by each original ``$ref`` location."""

    resolved: Any
    references: dict[str, ReferenceMetadata] = field(default_factory=dict)


def _ref_of(value: Any):
    if isinstance(value, Mapping) and isinstance(value.get("$ref"), str):
        return value["$ref"]
    return None


def _collect_refs(value: Any, path: list[str], found: dict[str, str]) -> None:
    """Record every ``$ref`` location in document order."""
    ref = _ref_of(value)
    if ref is not None:
        found[path_to_pointer(path)] = ref
        return

    if isinstance(value, Mapping):
        for key, child in value.items():
            _collect_refs(child, path + [str(key)], found)
    elif isinstance(value, list):
        for index, child in enumerate(value):
            _collect_refs(child, path + [str(index)], found)


def _lookup(document: Any, tokens: list[str]) -> Any:
    """Follow a token path through the original document."""
    node = document
    for token in tokens:
        if isinstance(node, Mapping):
            # YAML may have produced non-string keys (e.g. response codes)
            matches = [key for key in node if str(key) == token]
            if not matches:
                raise KeyError(token)
            node = node[matches[0]]
        elif isinstance(node, list):
            if not token.isdigit() or int(token) >= len(node):
                raise KeyError(token)
            node = node[int(token)]
        else:
            raise KeyError(token)
    return node


def _is_under(path: list[str], prefix: list[str]) -> bool:
    return path[:len(prefix)] == prefix


def _find_circular(targets: dict[str, list[str]]) -> set[str]:
    """Return the source pointers of every reference whose resolution meets a cycle."""
    sources = {ptr: path_from_pointer(ptr) for ptr in targets}
    successors = {
        ptr: [other for other, other_path in sources.items() if _is_under(other_path, target)]
        for ptr, target in targets.items()
    }

    reachable: dict[str, set[str]] = {}
    for start in targets:
        seen: set[str] = set()
        stack = list(successors[start])
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            stack.extend(successors[current])
        reachable[start] = seen

    on_cycle = {ptr for ptr, seen in reachable.items() if ptr in seen}
    return {ptr for ptr, seen in reachable.items() if seen & on_cycle}


def resolve_refs(document: Any) -> ResolvedDocument:
    """
    Resolve the local references of a document.

    The input is not modified.
    """
    found: dict[str, str] = {}
    _collect_refs(document, [], found)

    references: dict[str, ReferenceMetadata] = {}
    targets: dict[str, list[str]] = {}

    for ptr, ref in found.items():
        if not is_local_pointer(ref):
            references[ptr] = ReferenceMetadata(
                ref=ref,
                missing=True,
                error=f"Remote references are not supported: {ref}",
            )
            continue

        target = path_from_pointer(ref)
        try:
            _lookup(document, target)
        except KeyError:
            references[ptr] = ReferenceMetadata(
                ref=ref,
                missing=True,
                error=f"JSON Pointer points to missing location: {ref}",
            )
            continue

        targets[ptr] = target
        references[ptr] = ReferenceMetadata(ref=ref)

    for ptr in _find_circular(targets):
        references[ptr] = ReferenceMetadata(ref=references[ptr].ref, circular=True)

    def resolve(value: Any, path: list[str]) -> Any:
        ref = _ref_of(value)
        if ref is not None:
            metadata = references[path_to_pointer(path)]
            if metadata.missing or metadata.circular:
                return copy.deepcopy(value)
            target = targets[path_to_pointer(path)]
            return resolve(_lookup(document, target), target)

        if isinstance(value, Mapping):
            return {key: resolve(child, path + [str(key)]) for key, child in value.items()}
        if isinstance(value, list):
            return [resolve(child, path + [str(index)]) for index, child in enumerate(value)]
        return value

    resolved = resolve(document, [])

    log.info(
        "references_resolved",
        references=len(references),
        missing=sum(1 for m in references.values() if m.missing),
        circular=sum(1 for m in references.values() if m.circular),
    )

    return ResolvedDocument(resolved=resolved, references=references)
