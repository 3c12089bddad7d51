"""
Schema Walker — Post-order traversal of a schema and what it composes.

At each node, in priority order:
1. A blacklisted path is skipped entirely.
2. A nested ``schema`` (parameter wrapper) is walked instead of the node.
3. An array's ``items`` is descended into.
4. An object's ``additionalProperties``, ``allOf`` members and
   ``properties`` members are descended into.
5. Every handler runs on the node itself, after its children.

The blacklist holds pointers of subtrees that were inlined from a
reference; their canonical location is validated on its own.
"""

from collections.abc import Mapping
from typing import Any, Sequence

from swagval.core.contracts import SchemaHandler
from swagval.core.pointers import path_to_pointer
from swagval.document.model import SwaggerApi
from swagval.ir.enums import ItemsTraversal
from swagval.ir.schema import ValidationResponse

COMPOSITION_KEYS = ("allOf", "properties")


def effective_type(schema: Mapping) -> Any:
    """The declared type, ``object`` when absent."""
    return schema.get("type", "object")


def _members(container: Any) -> list[tuple[str, Any]]:
    if isinstance(container, Mapping):
        return [(str(name), member) for name, member in container.items()]
    if isinstance(container, list):
        return [(str(index), member) for index, member in enumerate(container)]
    return []


def walk_schema(
    api: SwaggerApi,
    blacklist: set[str],
    schema: Any,
    path: list[str],
    handlers: Sequence[SchemaHandler],
    response: ValidationResponse,
    items_traversal: ItemsTraversal = ItemsTraversal.CONTAINER,
) -> None:
    """
    Walk ``schema`` at ``path``, running ``handlers`` on every visited node.

    Args:
        api: The API being validated (passed through to handlers)
        blacklist: Pointers that must not be walked
        schema: The node to start from
        path: Token path of ``schema`` in the resolved document
        handlers: Checks run post-order on each node
        response: Where handlers append their findings
        items_traversal: How array ``items`` are descended into
    """
    if path_to_pointer(path) in blacklist:
        return

    # Only mappings can be schemas; handlers have nothing to say about the rest
    if not isinstance(schema, Mapping):
        return

    def walk(child: Any, child_path: list[str]) -> None:
        walk_schema(api, blacklist, child, child_path, handlers, response, items_traversal)

    def walk_items_container(items: Any, items_path: list[str]) -> None:
        if path_to_pointer(items_path) in blacklist:
            return

        for name, member in _members(items):
            walk(member, items_path + [name])

        if isinstance(items, Mapping):
            for handler in handlers:
                handler(api, response, items, items_path)

    schema_type = effective_type(schema)

    if "schema" in schema:
        walk(schema["schema"], path + ["schema"])
        return

    if schema_type == "array" and "items" in schema:
        if items_traversal == ItemsTraversal.SCHEMA:
            walk(schema["items"], path + ["items"])
        else:
            walk_items_container(schema["items"], path + ["items"])
    elif schema_type == "object":
        if "additionalProperties" in schema:
            walk(schema["additionalProperties"], path + ["additionalProperties"])

        for key in COMPOSITION_KEYS:
            if key in schema:
                for name, member in _members(schema[key]):
                    walk(member, path + [key, name])

    for handler in handlers:
        handler(api, response, schema, path)
