"""
=============================================================================
jsonhttp - JSON request handlers for single-argument functions
=============================================================================

Turns a function ``input -> output`` into an HTTP request handler that
decodes a JSON request body, calls the function and encodes its result as
the JSON response body, answering malformed requests with precise 4xx
statuses and handler failures with 500.

=============================================================================
QUICK START
=============================================================================

    from pydantic import BaseModel
    from jsonhttp import (
        HTTPResponse, MarshallContext, UnmarshallContext,
        parse_request, post_request_body,
    )

    class Celsius(BaseModel):
        degrees: float

    class Fahrenheit(BaseModel):
        degrees: float

    def convert(c: Celsius) -> Fahrenheit:
        return Fahrenheit(degrees=c.degrees * 9 / 5 + 32)

    handler = post_request_body(convert, Celsius, Fahrenheit,
                                MarshallContext(), UnmarshallContext())

    response = HTTPResponse()
    handler(parse_request(raw_bytes), response)
    transport.send(response.to_bytes())

Generic JSON values, any method:

    handler = json_handler(lambda value: {"echo": value})

=============================================================================
"""

from typing import Any, Callable, Optional

from .codec import JsonValue, MarshallContext, UnmarshallContext
from .config import DEFAULT_CONFIG, HandlerConfig, setup_logging
from .errors import (
    ContentDecodeError,
    HTTPParseError,
    JsonHttpError,
    NotAcceptableHeaderError,
    UnmarshallError,
)
from .handlers import JsonHandler, PostRequestBodyHandler, X_CONTENT_TYPE_NAME
from .handlers.json_handler import identity
from .http import HTTPEntity, HTTPRequest, HTTPResponse, HTTPStatus, HttpStatus, parse_request
from .middleware import LoggingMiddleware, MiddlewarePipeline

__version__ = "1.0.0"


def json_handler(
    handler: Callable[[JsonValue], Optional[JsonValue]],
    post: Callable[[HTTPEntity], HTTPEntity] = identity,
    config: HandlerConfig = DEFAULT_CONFIG,
) -> JsonHandler:
    """Handler for generic JSON values; ``post`` may rewrite the response entity."""
    return JsonHandler(handler, post, config)


def post_request_body(
    handler: Callable[[Any], Any],
    input_type: Any,
    output_type: Any,
    marshall_context: MarshallContext,
    unmarshall_context: UnmarshallContext,
    config: HandlerConfig = DEFAULT_CONFIG,
) -> PostRequestBodyHandler:
    """Handler for POSTed JSON unmarshalled into ``input_type``."""
    return PostRequestBodyHandler(
        handler,
        input_type,
        output_type,
        marshall_context,
        unmarshall_context,
        config,
    )


__all__ = [
    # Factories
    "json_handler",
    "post_request_body",
    "X_CONTENT_TYPE_NAME",

    # Handlers
    "JsonHandler",
    "PostRequestBodyHandler",

    # HTTP model
    "HTTPRequest",
    "HTTPResponse",
    "HTTPEntity",
    "HTTPStatus",
    "HttpStatus",
    "parse_request",

    # Codec
    "JsonValue",
    "MarshallContext",
    "UnmarshallContext",

    # Config / logging
    "HandlerConfig",
    "setup_logging",
    "LoggingMiddleware",
    "MiddlewarePipeline",

    # Errors
    "JsonHttpError",
    "HTTPParseError",
    "ContentDecodeError",
    "UnmarshallError",
    "NotAcceptableHeaderError",
]
