"""
Tests for the document model: operations and merged parameters.
"""

from swagval.document.model import SwaggerApi


def query(name, **extra):
    return {"name": name, "in": "query", "type": "string", **extra}


class TestGetOperation:
    """Tests for operation lookup."""

    def test_found(self, petstore):
        api = SwaggerApi.create(petstore)

        operation = api.get_operation("/pets", "get")

        assert operation.path == "/pets"
        assert operation.method == "get"
        assert operation.definition["operationId"] == "listPets"
        assert operation.ptr == "#/paths/~1pets/get"

    def test_method_is_case_insensitive(self, petstore):
        api = SwaggerApi.create(petstore)

        assert api.get_operation("/pets", "POST").method == "post"

    def test_missing_path_or_method(self, petstore):
        api = SwaggerApi.create(petstore)

        assert api.get_operation("/nope", "get") is None
        assert api.get_operation("/pets", "delete") is None

    def test_unsupported_key(self, petstore):
        api = SwaggerApi.create(petstore)

        assert api.get_operation("/pets/{petId}", "parameters") is None

    def test_get_operations_in_document_order(self, petstore):
        api = SwaggerApi.create(petstore)

        assert [(op.path, op.method) for op in api.get_operations()] == [
            ("/pets", "get"),
            ("/pets", "post"),
            ("/pets/{petId}", "get"),
        ]


class TestGetParameters:
    """Tests for parameter consolidation."""

    def test_operation_level_first(self):
        api = SwaggerApi.create({
            "paths": {
                "/a": {
                    "parameters": [query("p")],
                    "get": {"parameters": [query("o")]},
                },
            },
        })

        parameters = api.get_operation("/a", "get").get_parameters()

        assert [p.name for p in parameters] == ["o", "p"]
        assert [p.ptr for p in parameters] == [
            "#/paths/~1a/get/parameters/0",
            "#/paths/~1a/parameters/0",
        ]

    def test_operation_level_overrides(self):
        api = SwaggerApi.create({
            "paths": {
                "/a": {
                    "parameters": [query("q", description="path")],
                    "get": {"parameters": [query("q", description="operation")]},
                },
            },
        })

        parameters = api.get_operation("/a", "get").get_parameters()

        assert len(parameters) == 1
        assert parameters[0].definition["description"] == "operation"
        assert parameters[0].key == "query:q"

    def test_resolved_references(self, petstore):
        """Parameters defined by $ref are seen resolved."""
        api = SwaggerApi.create(petstore)

        parameters = api.get_operation("/pets/{petId}", "get").get_parameters()

        assert [(p.location, p.name) for p in parameters] == [("path", "petId")]
        assert parameters[0].ptr == "#/paths/~1pets~1{petId}/parameters/0"

    def test_only_path_level(self, petstore):
        """An operation without parameters still gets the path-level ones."""
        api = SwaggerApi.create(petstore)
        operation = api.get_operation("/pets/{petId}", "get")

        assert operation.definition.get("parameters") is None
        assert len(operation.get_parameters()) == 1


def test_create_keeps_original_document(petstore):
    api = SwaggerApi.create(petstore)

    assert api.definition is petstore
    assert api.resolved is not petstore
    assert "#/definitions/Dog/allOf/0" in api.references
