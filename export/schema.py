"""
export/schema.py — JSON Schema zrzutu StructuredContent.

Używany przez from_json() do walidacji wejścia przed odbudową dataclass.
Klucz "metadata" (zrzut OCRMetadata) jest opcjonalny i nie jest walidowany
szczegółowo.
"""

from __future__ import annotations

from typing import Any

_NULLABLE_STRING: dict[str, Any] = {"type": ["string", "null"]}

STRUCTURED_CONTENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "StructuredContent",
    "type": "object",
    "required": ["sections", "clauses", "tables", "signatures",
                 "legal_references", "definitions", "key_information"],
    "properties": {
        "title": _NULLABLE_STRING,
        "sections": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["content", "level"],
                "properties": {
                    "heading": _NULLABLE_STRING,
                    "content": {"type": "string"},
                    "level": {"type": "integer", "minimum": 0},
                },
            },
        },
        "clauses": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["number", "content"],
                "properties": {
                    "number": {"type": "string"},
                    "title": _NULLABLE_STRING,
                    "content": {"type": "string"},
                    "subclauses": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["number", "content"],
                            "properties": {
                                "number": {"type": "string"},
                                "content": {"type": "string"},
                            },
                        },
                    },
                },
            },
        },
        "tables": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["description", "location"],
                "properties": {
                    "description": {"type": "string"},
                    "location": {"type": "string"},
                },
            },
        },
        "signatures": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": _NULLABLE_STRING,
                    "position": _NULLABLE_STRING,
                    "date": _NULLABLE_STRING,
                },
            },
        },
        "legal_references": {
            "type": "array",
            "items": {"type": "string"},
            "uniqueItems": True,
        },
        "definitions": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
        "key_information": {
            "type": "object",
            "additionalProperties": {"type": "string", "minLength": 1},
        },
        "metadata": {"type": ["object", "null"]},
    },
}
