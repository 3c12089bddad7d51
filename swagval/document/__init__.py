"""
Document — Loading, local reference resolution and the operation model.
"""

from swagval.document.loader import load_document, load_document_from_string
from swagval.document.model import SUPPORTED_HTTP_METHODS, Operation, Parameter, SwaggerApi
from swagval.document.resolver import ResolvedDocument, resolve_refs

__all__ = [
    "load_document",
    "load_document_from_string",
    "SUPPORTED_HTTP_METHODS",
    "Operation",
    "Parameter",
    "SwaggerApi",
    "ResolvedDocument",
    "resolve_refs",
]
