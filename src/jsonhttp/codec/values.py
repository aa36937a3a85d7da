"""
Generic JSON values.

A JSON value is whatever the standard json module produces: dict, list,
str, int, float, bool or None. The untyped pipeline hands these straight to
its handler function.
"""

import json
from typing import Any


JsonValue = Any


def parse(text: str) -> JsonValue:
    """
    Parse JSON text.

    Raises:
        json.JSONDecodeError: With a message naming the line, column and
            character offset of the problem.
    """
    return json.loads(text)


def to_text(value: JsonValue) -> str:
    """
    Serialize compactly, e.g. {"output":45.75}.

    Raises:
        TypeError: The value holds something json cannot serialize.
        ValueError: The value holds NaN or an infinity, which JSON text
            cannot represent.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
