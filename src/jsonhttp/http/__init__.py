"""
=============================================================================
HTTP MESSAGE MODEL
=============================================================================

The request, response and header types the JSON pipelines operate on.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  request.py       HTTPRequest (read-only view), RequestParser       │
    │  response.py      HTTPResponse (sink), HTTPEntity (payload)         │
    │  status_codes.py  HTTPStatus codes, HttpStatus (code + message)     │
    │  media_types.py   MediaType, Accept, AcceptCharset                  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .request import (
    HTTPRequest,
    RequestParser,
    parse_request,
    CONTENT_TYPE,
    CONTENT_LENGTH,
    ACCEPT,
    ACCEPT_CHARSET,
)
from .response import HTTPResponse, HTTPEntity, format_http_date
from .status_codes import HTTPStatus, HttpStatus
from .media_types import (
    MediaType,
    Accept,
    AcceptCharset,
    APPLICATION_JSON,
    TEXT_PLAIN,
    UTF_8,
    MEDIA_TYPE_JSON,
    MEDIA_TYPE_TEXT_PLAIN,
)

__all__ = [
    # Request
    "HTTPRequest",
    "RequestParser",
    "parse_request",
    "CONTENT_TYPE",
    "CONTENT_LENGTH",
    "ACCEPT",
    "ACCEPT_CHARSET",

    # Response
    "HTTPResponse",
    "HTTPEntity",
    "format_http_date",

    # Status codes
    "HTTPStatus",
    "HttpStatus",

    # Media types
    "MediaType",
    "Accept",
    "AcceptCharset",
    "APPLICATION_JSON",
    "TEXT_PLAIN",
    "UTF_8",
    "MEDIA_TYPE_JSON",
    "MEDIA_TYPE_TEXT_PLAIN",
]
