"""JSON value parsing and typed marshalling."""

from .values import JsonValue, parse, to_text
from .contexts import MarshallContext, UnmarshallContext

__all__ = [
    "JsonValue",
    "parse",
    "to_text",
    "MarshallContext",
    "UnmarshallContext",
]
