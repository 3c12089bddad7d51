"""
Shared fixtures: a clean petstore document and context builders.
"""

import copy

import pytest

from swagval.core.context import ValidationContext
from swagval.core.settings import ValidationSettings
from swagval.document.model import SwaggerApi

# Valid in every respect: no errors, no warnings
PETSTORE = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "securityDefinitions": {
        "petstore_auth": {
            "type": "oauth2",
            "flow": "implicit",
            "authorizationUrl": "https://example.com/oauth/authorize",
            "scopes": {
                "read:pets": "Read pets",
                "write:pets": "Modify pets",
            },
        },
    },
    "security": [{"petstore_auth": ["read:pets"]}],
    "parameters": {
        "petId": {
            "name": "petId",
            "in": "path",
            "required": True,
            "type": "integer",
            "format": "int64",
        },
    },
    "responses": {
        "NotFound": {
            "description": "Pet not found",
            "schema": {"$ref": "#/definitions/Error"},
        },
    },
    "definitions": {
        "Pet": {
            "type": "object",
            "required": ["id", "name"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
        },
        "Dog": {
            "allOf": [
                {"$ref": "#/definitions/Pet"},
                {
                    "type": "object",
                    "required": ["breed"],
                    "properties": {"breed": {"type": "string", "default": "mixed"}},
                },
            ],
        },
        "Error": {
            "type": "object",
            "required": ["code"],
            "properties": {
                "code": {"type": "integer"},
                "message": {"type": "string"},
            },
        },
    },
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "default": 20, "minimum": 1},
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    },
                },
            },
            "post": {
                "operationId": "createPet",
                "security": [{"petstore_auth": ["write:pets"]}],
                "parameters": [
                    {"name": "pet", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Dog"}},
                ],
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/pets/{petId}": {
            "parameters": [{"$ref": "#/parameters/petId"}],
            "get": {
                "operationId": "showPet",
                "responses": {
                    "200": {"description": "A pet", "schema": {"$ref": "#/definitions/Pet"}},
                    "404": {"$ref": "#/responses/NotFound"},
                },
            },
        },
    },
}


@pytest.fixture
def petstore():
    """A fresh copy of the clean petstore document."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def make_document():
    """Build a minimal document with the given top-level sections."""
    def _make(**sections):
        document = {
            "swagger": "2.0",
            "info": {"title": "Test", "version": "1.0.0"},
            "paths": {},
        }
        document.update(sections)
        return document
    return _make


@pytest.fixture
def make_ctx():
    """Resolve a document and wrap it in a ValidationContext."""
    def _make(document, **settings):
        api = SwaggerApi.create(document)
        return ValidationContext.for_api(api, ValidationSettings(**settings))
    return _make
