"""
export — serializatory wyniku analizy.

Publiczne API:
  to_plain_text(structured, metadata)      -> str
  to_json(structured, metadata)            -> str
  from_json(text)                          -> StructuredContent
  to_structured_text(structured, metadata) -> str
  render(fmt, structured, metadata)        -> str   (fmt: plain | json | structured)
"""

from .formats import (
    FORMATS,
    ExportFormatError,
    from_json,
    metadata_from_dict,
    render,
    structured_from_dict,
    to_json,
    to_plain_text,
    to_structured_text,
)
from .schema import STRUCTURED_CONTENT_SCHEMA

__all__ = [
    "FORMATS",
    "ExportFormatError",
    "from_json",
    "metadata_from_dict",
    "render",
    "structured_from_dict",
    "to_json",
    "to_plain_text",
    "to_structured_text",
    "STRUCTURED_CONTENT_SCHEMA",
]
