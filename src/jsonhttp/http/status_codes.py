"""
=============================================================================
HTTP STATUS CODES
=============================================================================

Status codes used by the JSON pipelines, plus the status value written to a
response: a code paired with a message.

=============================================================================
CODE VERSUS STATUS
=============================================================================

    HTTPStatus.BAD_REQUEST                    ← the code (an IntEnum member)
    HTTPStatus.BAD_REQUEST.status()           ← HttpStatus(400, "Bad Request")
    HTTPStatus.BAD_REQUEST.with_message("x")  ← HttpStatus(400, "x")

The message ends up after the code in the status line:

    HTTP/1.1 400 Required body missing
             ─── ─────────────────────
              │           │
              │           └── Message (reason phrase by default)
              └────────────── Code

Error messages produced by the pipelines travel in the status line so that
clients can report them without parsing a body.

=============================================================================
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.OK.phrase
        'OK'
    """

    # 2xx SUCCESS
    OK = 200                            # Handler produced an output
    NO_CONTENT = 204                    # Handler produced nothing

    # 4xx CLIENT ERRORS
    BAD_REQUEST = 400                   # Missing/invalid headers or body
    METHOD_NOT_ALLOWED = 405            # Typed pipeline only accepts POST
    LENGTH_REQUIRED = 411               # Missing Content-Length header
    PAYLOAD_TOO_LARGE = 413             # Raw request exceeds parser limit

    # 5xx SERVER ERRORS
    INTERNAL_SERVER_ERROR = 500         # Handler function raised
    HTTP_VERSION_NOT_SUPPORTED = 505    # Raw request used unknown version

    @property
    def phrase(self) -> str:
        """Get the reason phrase for this status code."""
        return _STATUS_PHRASES.get(self, "Unknown")

    @property
    def is_success(self) -> bool:
        return 200 <= self < 300

    @property
    def is_client_error(self) -> bool:
        return 400 <= self < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self < 600

    @property
    def is_error(self) -> bool:
        """Check if this is an error status code (4xx or 5xx)."""
        return self >= 400

    def status(self) -> "HttpStatus":
        """This code with its reason phrase as the message."""
        return HttpStatus(self, self.phrase)

    def with_message(self, message: str) -> "HttpStatus":
        """This code with a custom message."""
        return HttpStatus(self, message)

    def with_message_or_default(self, message: Optional[str]) -> "HttpStatus":
        """
        This code with a custom message, falling back to the reason phrase.

        Exception messages may be empty, in which case the status line still
        needs a readable message.
        """
        return self.with_message(message) if message else self.status()


@dataclass(frozen=True)
class HttpStatus:
    """A status code plus the message written to the status line."""

    code: HTTPStatus
    message: str

    def __str__(self) -> str:
        return f"{int(self.code)} {self.message}"


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NO_CONTENT: "No Content",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.METHOD_NOT_ALLOWED: "Method Not Allowed",
    HTTPStatus.LENGTH_REQUIRED: "Length Required",
    HTTPStatus.PAYLOAD_TOO_LARGE: "Payload Too Large",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
    HTTPStatus.HTTP_VERSION_NOT_SUPPORTED: "HTTP Version Not Supported",
}
