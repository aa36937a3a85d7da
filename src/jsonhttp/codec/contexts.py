"""
=============================================================================
MARSHALL AND UNMARSHALL CONTEXTS
=============================================================================

Convert between typed Python values and generic JSON values.

    MarshallContext.marshall(value)                  typed value → JSON value
    UnmarshallContext.unmarshall(node, target_type)  JSON value → typed value

Both are backed by pydantic TypeAdapters, so any type pydantic understands
works: BaseModel subclasses, dataclasses, TypedDicts, builtins and their
generic aliases.

    class Conversion(BaseModel):
        input: float

    UnmarshallContext().unmarshall({"input": 123.5}, Conversion)
    # Conversion(input=123.5)

    MarshallContext().marshall(Conversion(input=123.5))
    # {'input': 123.5}

Contexts hold no per-request state and can be shared by every pipeline in
the process.

=============================================================================
"""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..errors import UnmarshallError
from .values import JsonValue


@lru_cache(maxsize=256)
def _adapter(target_type: Any) -> TypeAdapter:
    # Building an adapter compiles a validation schema; reuse them per type
    return TypeAdapter(target_type)


class MarshallContext:
    """Typed value → JSON value."""

    def __init__(self, by_alias: bool = False, exclude_none: bool = False):
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def marshall(self, value: Any) -> JsonValue:
        """
        Convert ``value`` using an adapter for its runtime type.

        The runtime type is used rather than any declared type so that
        subclasses keep their extra fields.
        """
        if value is None:
            return None
        return _adapter(type(value)).dump_python(
            value,
            mode="json",
            by_alias=self.by_alias,
            exclude_none=self.exclude_none,
        )

    def __repr__(self) -> str:
        return f"MarshallContext(by_alias={self.by_alias}, exclude_none={self.exclude_none})"


class UnmarshallContext:
    """JSON value → typed value."""

    def __init__(self, strict: bool = False):
        self.strict = strict

    def unmarshall(self, node: JsonValue, target_type: Any) -> Any:
        """
        Raises:
            UnmarshallError: The value does not validate as ``target_type``.
        """
        try:
            return _adapter(target_type).validate_python(node, strict=self.strict)
        except ValidationError as e:
            raise UnmarshallError(str(e), target_type) from e

    def __repr__(self) -> str:
        return f"UnmarshallContext(strict={self.strict})"
