"""
Tests for local reference resolution.
"""

from swagval.document.resolver import resolve_refs


def test_inlines_local_reference():
    """A reference is replaced by a copy of its target."""
    document = {
        "definitions": {
            "Pet": {"type": "object"},
            "Holder": {"properties": {"pet": {"$ref": "#/definitions/Pet"}}},
        },
    }

    result = resolve_refs(document)

    assert result.resolved["definitions"]["Holder"]["properties"]["pet"] == {"type": "object"}
    metadata = result.references["#/definitions/Holder/properties/pet"]
    assert metadata.ref == "#/definitions/Pet"
    assert not metadata.missing
    assert not metadata.circular


def test_input_is_not_modified():
    document = {
        "definitions": {
            "A": {"type": "string"},
            "B": {"$ref": "#/definitions/A"},
        },
    }

    resolve_refs(document)

    assert document["definitions"]["B"] == {"$ref": "#/definitions/A"}


def test_chained_references():
    """A target that is itself a reference is followed."""
    document = {
        "definitions": {
            "A": {"type": "string"},
            "B": {"$ref": "#/definitions/A"},
            "C": {"$ref": "#/definitions/B"},
        },
    }

    result = resolve_refs(document)

    assert result.resolved["definitions"]["C"] == {"type": "string"}
    assert list(result.references) == ["#/definitions/B", "#/definitions/C"]


def test_missing_target():
    document = {"definitions": {"A": {"$ref": "#/definitions/Nope"}}}

    result = resolve_refs(document)

    metadata = result.references["#/definitions/A"]
    assert metadata.missing
    assert metadata.error == "JSON Pointer points to missing location: #/definitions/Nope"
    assert result.resolved["definitions"]["A"] == {"$ref": "#/definitions/Nope"}


def test_remote_reference_is_not_fetched():
    document = {"definitions": {"A": {"$ref": "https://example.com/schemas.json#/Pet"}}}

    result = resolve_refs(document)

    metadata = result.references["#/definitions/A"]
    assert metadata.missing
    assert metadata.error == "Remote references are not supported: https://example.com/schemas.json#/Pet"


def test_circular_reference_left_in_place():
    """A reference that reaches itself keeps its $ref so the tree stays finite."""
    document = {
        "definitions": {
            "Node": {"properties": {"next": {"$ref": "#/definitions/Node"}}},
        },
    }

    result = resolve_refs(document)

    assert result.references["#/definitions/Node/properties/next"].circular
    assert result.resolved["definitions"]["Node"]["properties"]["next"] == {
        "$ref": "#/definitions/Node",
    }


def test_mutual_cycle_marks_both_references():
    document = {
        "definitions": {
            "A": {"allOf": [{"$ref": "#/definitions/B"}]},
            "B": {"allOf": [{"$ref": "#/definitions/A"}]},
        },
    }

    result = resolve_refs(document)

    assert result.references["#/definitions/A/allOf/0"].circular
    assert result.references["#/definitions/B/allOf/0"].circular


def test_reference_into_cycle_is_circular():
    """Resolving a reference to a recursive schema passes through its cycle."""
    document = {
        "definitions": {
            "Node": {"properties": {"next": {"$ref": "#/definitions/Node"}}},
        },
        "paths": {"/a": {"get": {"responses": {"200": {"schema": {"$ref": "#/definitions/Node"}}}}}},
    }

    result = resolve_refs(document)

    outer = "#/paths/~1a/get/responses/200/schema"
    assert result.references[outer].circular
    schema = result.resolved["paths"]["/a"]["get"]["responses"]["200"]["schema"]
    assert schema == {"$ref": "#/definitions/Node"}


def test_inheriting_from_a_cycle_is_circular():
    """A schema outside a cycle that composes a member of it is circular too."""
    document = {
        "definitions": {
            "A": {"allOf": [{"$ref": "#/definitions/B"}]},
            "B": {"allOf": [{"$ref": "#/definitions/A"}]},
            "C": {"allOf": [{"$ref": "#/definitions/A"}]},
        },
    }

    result = resolve_refs(document)

    assert {ptr: m.circular for ptr, m in result.references.items()} == {
        "#/definitions/A/allOf/0": True,
        "#/definitions/B/allOf/0": True,
        "#/definitions/C/allOf/0": True,
    }


def test_reference_beside_a_cycle_is_not_circular():
    """Only references whose own resolution meets the cycle are flagged."""
    document = {
        "definitions": {
            "Node": {"properties": {"next": {"$ref": "#/definitions/Node"}}},
            "Name": {"type": "string"},
            "Holder": {"properties": {"name": {"$ref": "#/definitions/Name"}}},
        },
    }

    result = resolve_refs(document)

    assert not result.references["#/definitions/Holder/properties/name"].circular
    assert result.resolved["definitions"]["Holder"]["properties"]["name"] == {"type": "string"}


def test_non_string_keys_are_matched():
    """YAML integer response codes can still be referenced."""
    document = {
        "responses": {404: {"description": "missing"}},
        "x-alias": {"$ref": "#/responses/404"},
    }

    result = resolve_refs(document)

    assert result.resolved["x-alias"] == {"description": "missing"}


def test_escaped_pointer_tokens():
    document = {
        "paths": {"/pets": {"get": {"description": "list"}}},
        "x-alias": {"$ref": "#/paths/~1pets/get"},
    }

    result = resolve_refs(document)

    assert result.resolved["x-alias"] == {"description": "list"}


def test_list_index_tokens():
    document = {
        "x-list": [{"a": 1}, {"b": 2}],
        "x-alias": {"$ref": "#/x-list/1"},
        "x-bad": {"$ref": "#/x-list/7"},
    }

    result = resolve_refs(document)

    assert result.resolved["x-alias"] == {"b": 2}
    assert result.references["#/x-bad"].missing


def test_no_references():
    document = {"swagger": "2.0", "paths": {}}

    result = resolve_refs(document)

    assert result.resolved == document
    assert result.references == {}
