"""
swagval — Semantic validation for Swagger 2.0 documents

Validates what a JSON Schema cannot express: reference graph integrity,
schema composition and path/operation consistency.

The meta-schema checks structure. swagval checks meaning.
"""

__version__ = "0.1.0"
