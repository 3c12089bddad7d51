"""
Tests for IR models and serialization.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from swagval.ir import (
    Diagnostic,
    DiagnosticCode,
    ValidationResponse,
    ValidationResult,
    ValidationStatus,
)
from swagval.ir.serialization import from_json, save, to_json


def test_diagnostic_is_frozen():
    """Diagnostics cannot be changed once recorded."""
    diagnostic = Diagnostic(
        code=DiagnosticCode.UNUSED_DEFINITION,
        message="Definition is not used: #/definitions/Pet",
        path=["definitions", "Pet"],
    )

    with pytest.raises(ValidationError):
        diagnostic.message = "changed"


def test_response_appends_in_order():
    response = ValidationResponse()
    path = ["definitions", "A"]

    response.error(DiagnosticCode.CIRCULAR_INHERITANCE, "first", path)
    response.warning(DiagnosticCode.UNUSED_DEFINITION, "warned", path)
    response.error(DiagnosticCode.UNRESOLVABLE_REFERENCE, "second", path, cause="why")
    path.append("mutated")

    assert [e.message for e in response.errors] == ["first", "second"]
    assert [w.message for w in response.warnings] == ["warned"]
    assert response.errors[1].cause == "why"
    assert response.errors[0].path == ["definitions", "A"]


def test_response_extend():
    first = ValidationResponse()
    first.error(DiagnosticCode.EQUIVALENT_PATH, "a", [])
    second = ValidationResponse()
    second.error(DiagnosticCode.DUPLICATE_PARAMETER, "b", [])
    second.warning(DiagnosticCode.UNUSED_DEFINITION, "c", [])

    first.extend(second)

    assert [e.message for e in first.errors] == ["a", "b"]
    assert [w.message for w in first.warnings] == ["c"]


def test_result_serialization(tmp_path):
    """ValidationResult should serialize to/from JSON."""
    result = ValidationResult(
        request_id="test-123",
        timestamp=datetime.now(),
        status=ValidationStatus.INVALID,
        errors=[
            Diagnostic(
                code=DiagnosticCode.MISSING_PATH_PARAMETER_DEFINITION,
                message="Path parameter is declared but is not defined: id",
                path=["paths", "/a/{id}", "get"],
            ),
        ],
    )

    json_str = to_json(result)
    assert "test-123" in json_str
    assert "MISSING_PATH_PARAMETER_DEFINITION" in json_str

    restored = from_json(json_str)
    assert restored.request_id == "test-123"
    assert restored.errors == result.errors
    assert not restored.valid

    path = tmp_path / "result.json"
    save(result, path)
    assert from_json(path.read_text()).errors == result.errors
