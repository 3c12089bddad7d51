"""
Tests for the validation engine.
"""

import json

import pytest

from swagval.core.context import ValidationRequest
from swagval.core.engine import Engine, create_engine, validate_document
from swagval.core.errors import CannotValidateError
from swagval.core.settings import ValidationSettings
from swagval.document.resolver import resolve_refs
from swagval.ir.enums import DiagnosticCode, ValidationStatus
from swagval.ir.schema import ValidationResponse


def run(document, **settings):
    engine = create_engine(ValidationSettings(**settings))
    return engine.validate(ValidationRequest(document=document))


class TestValidDocuments:
    """Tests for documents without findings."""

    def test_petstore_is_valid(self, petstore):
        result = run(petstore)

        assert result.status == ValidationStatus.VALID
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    def test_convenience_function(self, petstore):
        result = validate_document(petstore)

        assert result.valid

    def test_warnings_alone_keep_document_valid(self, make_document):
        result = run(make_document(definitions={"Unused": {"type": "string"}}))

        assert result.valid
        assert [w.code for w in result.warnings] == [DiagnosticCode.UNUSED_DEFINITION]


class TestAggregation:
    """Tests for merging validator findings."""

    def test_validators_run_in_order(self, make_document):
        """Reference findings come before schema findings before path findings."""
        document = make_document(
            definitions={"Tags": {"type": "array"}},
            paths={"/a/{id}": {"get": {"responses": {"200": {"$ref": "#/responses/Nope"}}}}},
        )

        result = run(document)

        assert result.status == ValidationStatus.INVALID
        assert [e.code for e in result.errors] == [
            DiagnosticCode.UNRESOLVABLE_REFERENCE,
            DiagnosticCode.OBJECT_MISSING_REQUIRED_PROPERTY,
            DiagnosticCode.MISSING_PATH_PARAMETER_DEFINITION,
        ]
        assert [w.code for w in result.warnings] == [DiagnosticCode.UNUSED_DEFINITION]

    def test_list_validators(self):
        assert create_engine().list_validators() == [
            "references",
            "schema_objects",
            "paths_and_operations",
        ]

    def test_disabled_validator(self, make_document):
        document = make_document(definitions={"Unused": {"type": "array"}})

        result = run(document, disabled_validators=["references"])

        assert result.warnings == []
        assert [e.code for e in result.errors] == [DiagnosticCode.OBJECT_MISSING_REQUIRED_PROPERTY]

    def test_pre_resolved_document(self, petstore):
        """Resolver output can be supplied with the request."""
        resolved = resolve_refs(petstore)
        engine = create_engine()

        result = engine.validate(
            ValidationRequest(document=resolved.resolved, references=resolved.references)
        )

        assert result.valid
        assert result.warnings == []

    def test_pre_resolved_plain_metadata(self, make_document):
        """Reference metadata may be supplied as plain mappings."""
        document = make_document(
            definitions={"Tags": {"type": "array", "items": {"type": "string"}}},
            paths={"/a": {"get": {"responses": {"200": {"$ref": "#/responses/Nope"}}}}},
        )
        references = {
            "#/paths/~1a/get/responses/200": {
                "ref": "#/responses/Nope",
                "missing": True,
                "error": "JSON Pointer points to missing location: #/responses/Nope",
            },
        }

        result = validate_document(document, references)

        assert [e.code for e in result.errors] == [DiagnosticCode.UNRESOLVABLE_REFERENCE]
        assert result.errors[0].path == ["paths", "/a", "get", "responses", "200", "$ref"]
        assert result.errors[0].cause == "JSON Pointer points to missing location: #/responses/Nope"

    def test_deterministic(self, make_document):
        document = make_document(
            definitions={"Tags": {"type": "array"}, "Unused": {"type": "string"}},
            security=[{"nope": []}],
        )

        first = run(document)
        second = run(document)

        assert first.errors == second.errors
        assert first.warnings == second.warnings


class TestCannotValidate:
    """Tests for runs that cannot produce a result."""

    @pytest.mark.parametrize("document", [
        ["not", "an", "object"],
        {"paths": []},
        {"definitions": "nope"},
        {"security": {"auth": []}},
        {"paths": {"/a": "nope"}},
        {"paths": {"/a": {"get": []}}},
    ])
    def test_malformed_document(self, document):
        with pytest.raises(CannotValidateError):
            run(document)

    def test_failing_validator_is_wrapped(self, petstore):
        def explode(ctx):
            raise RuntimeError("boom")

        engine = Engine()
        engine.register_validator("explode", explode)

        with pytest.raises(CannotValidateError) as excinfo:
            engine.validate(ValidationRequest(document=petstore))

        assert excinfo.value.validator == "explode"
        assert "boom" in str(excinfo.value)

    def test_custom_validator(self, petstore):
        def flag_everything(ctx):
            response = ValidationResponse()
            response.warning(DiagnosticCode.UNUSED_DEFINITION, "flagged", [])
            return response

        engine = Engine()
        engine.register_validator("flag", flag_everything)

        result = engine.validate(ValidationRequest(document=petstore))

        assert result.valid
        assert [w.message for w in result.warnings] == ["flagged"]


class TestStructureSchema:
    """Tests for the optional structural pre-check."""

    SCHEMA = {
        "type": "object",
        "required": ["swagger", "info", "paths"],
        "properties": {"swagger": {"enum": ["2.0"]}},
    }

    def test_structural_errors_skip_semantic_validation(self, tmp_path, make_document):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(self.SCHEMA))
        document = make_document(swagger="3.0", definitions={"Tags": {"type": "array"}})

        result = run(document, structure_schema=path)

        assert [e.code for e in result.errors] == [DiagnosticCode.ENUM_MISMATCH]
        assert result.errors[0].path == ["swagger"]
        assert result.warnings == []

    def test_structurally_valid_document_continues(self, tmp_path, petstore):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(self.SCHEMA))

        assert run(petstore, structure_schema=path).valid

    def test_unreadable_structure_schema(self, tmp_path, petstore):
        with pytest.raises(CannotValidateError):
            run(petstore, structure_schema=tmp_path / "missing.json")
