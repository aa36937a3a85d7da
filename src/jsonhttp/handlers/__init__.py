"""
JSON request handlers.

    JsonHandler             any method, generic JSON values in and out
    PostRequestBodyHandler  POST only, typed input and output

Both are callables taking ``(request, response)``; they write to the
response and return nothing.
"""

from .exchange import JsonExchange, Rejection, X_CONTENT_TYPE_NAME, type_name, simple_type_name
from .json_handler import JsonHandler
from .post_body import PostRequestBodyHandler

__all__ = [
    "JsonExchange",
    "Rejection",
    "X_CONTENT_TYPE_NAME",
    "type_name",
    "simple_type_name",
    "JsonHandler",
    "PostRequestBodyHandler",
]
