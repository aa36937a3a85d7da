"""
Exceptions raised by jsonhttp.

Client input problems never surface as exceptions from a pipeline; they are
written to the response as 4xx statuses. The exceptions below are raised by
the collaborators (request body decoding, unmarshalling, raw request
parsing) or signal a configuration defect that the caller must handle.
"""

from typing import Optional


class JsonHttpError(Exception):
    """Base class for all jsonhttp errors."""


class HTTPParseError(JsonHttpError):
    """
    Raised when raw HTTP request parsing fails.

    Carries the HTTP status code a transport should answer with:

        400 Bad Request                - Malformed request syntax
        405 Method Not Allowed         - Unknown method
        413 Payload Too Large          - Request exceeds size limit
        505 HTTP Version Not Supported - Unknown HTTP version
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class ContentDecodeError(JsonHttpError):
    """Request body bytes could not be decoded into text."""


class UnmarshallError(JsonHttpError):
    """A JSON value could not be converted into the requested type."""

    def __init__(self, message: str, target_type: Optional[type] = None):
        super().__init__(message)
        self.target_type = target_type


class NotAcceptableHeaderError(JsonHttpError):
    """
    Accept-Charset named no charset this process can encode with.

    Not mapped to an HTTP status by the pipelines; it propagates to whoever
    invoked the handler.
    """
