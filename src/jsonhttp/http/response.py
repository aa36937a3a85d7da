"""
=============================================================================
HTTP RESPONSE AND ENTITIES
=============================================================================

The response sink the JSON pipelines write into.

    ┌──────────────────────────────────────────────────────────────────┐
    │  HTTPResponse                                                     │
    │  ──────────────────────────────────────────────────────────────  │
    │  version      "HTTP/1.1"        set_version()                     │
    │  status       HttpStatus        set_status()                      │
    │  entities     [HTTPEntity, ...] add_entity()                      │
    └──────────────────────────────────────────────────────────────────┘

    ┌──────────────────────────────────────────────────────────────────┐
    │  HTTPEntity (immutable)                                           │
    │  ──────────────────────────────────────────────────────────────  │
    │  headers      (("Content-Type", "application/json; ..."), ...)    │
    │  body         b'{"output":45.75}'                                 │
    └──────────────────────────────────────────────────────────────────┘

A response is created empty by the caller, filled by exactly one pipeline
run and handed back to the caller (usually a transport) which serializes it
with to_bytes().

Entities are immutable; every setter returns a new entity:

    entity = (HTTPEntity.EMPTY
        .set_content_type(MEDIA_TYPE_JSON.set_charset("UTF-8"))
        .set_body_text('{"output":45.75}', "UTF-8")
        .set_content_length())

=============================================================================
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from ..config import DEFAULT_CONFIG, HandlerConfig
from .media_types import MEDIA_TYPE_TEXT_PLAIN, UTF_8, MediaType
from .status_codes import HttpStatus


@dataclass(frozen=True)
class HTTPEntity:
    """Headers plus body of one response payload."""

    headers: Tuple[Tuple[str, str], ...] = ()
    body: bytes = b""

    EMPTY = None  # assigned below the class

    def header(self, name: str) -> Optional[str]:
        """Get a header value (case-insensitive lookup)."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def set_header(self, name: str, value: str) -> "HTTPEntity":
        """Replace or append a header, keeping the position of a replaced one."""
        lowered = name.lower()
        headers = []
        replaced = False
        for key, existing in self.headers:
            if key.lower() == lowered:
                if not replaced:
                    headers.append((name, value))
                    replaced = True
            else:
                headers.append((key, existing))
        if not replaced:
            headers.append((name, value))
        return HTTPEntity(tuple(headers), self.body)

    def set_content_type(self, content_type: MediaType) -> "HTTPEntity":
        return self.set_header("Content-Type", str(content_type))

    def set_body(self, body: bytes) -> "HTTPEntity":
        return HTTPEntity(self.headers, body)

    def set_body_text(self, text: str, charset: str = UTF_8) -> "HTTPEntity":
        return self.set_body(text.encode(charset))

    def set_content_length(self) -> "HTTPEntity":
        """Derive the Content-Length header from the current body."""
        return self.set_header("Content-Length", str(len(self.body)))

    @property
    def content_length(self) -> int:
        return len(self.body)

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.body

    def body_text(self) -> str:
        """Decode the body with the Content-Type charset, UTF-8 if none."""
        content_type = self.header("Content-Type")
        charset = MediaType.parse(content_type).charset if content_type else None
        return self.body.decode(charset or UTF_8)

    @classmethod
    def dump_stack_trace(cls, cause: BaseException) -> "HTTPEntity":
        """
        Render an exception and its traceback as a text/plain entity.

        Used for every error response that has a cause, so clients see
        what failed without access to server logs.
        """
        text = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
        return (cls()
            .set_content_type(MEDIA_TYPE_TEXT_PLAIN.set_charset(UTF_8))
            .set_body_text(text, UTF_8)
            .set_content_length())


HTTPEntity.EMPTY = HTTPEntity()


@dataclass
class HTTPResponse:
    """
    Mutable response sink.

    The pipelines only ever write: set_version(), set_status() and
    add_entity(). Error paths may set a status and then separately attach
    a diagnostic entity, so entities are recorded in order.
    """

    version: Optional[str] = None
    status: Optional[HttpStatus] = None
    entities: List[HTTPEntity] = field(default_factory=list)

    def set_version(self, version: str) -> None:
        self.version = version

    def set_status(self, status: HttpStatus) -> None:
        self.status = status

    def add_entity(self, entity: HTTPEntity) -> None:
        self.entities.append(entity)

    @property
    def status_line(self) -> str:
        """
        Format: HTTP-VERSION SP STATUS-CODE SP MESSAGE

        Defaults to HTTP/1.1 when no version was set.
        """
        version = self.version or "HTTP/1.1"
        if self.status is None:
            return f"{version} 200 OK"
        # messages may carry multi-line exception text
        message = " ".join(self.status.message.splitlines())
        return f"{version} {int(self.status.code)} {message}"

    def to_bytes(self, config: HandlerConfig = DEFAULT_CONFIG) -> bytes:
        """
        Serialize the response for a transport.

        Entity headers are merged in order and bodies concatenated.
        Content-Length always reflects the total body; Date and Server
        (``config.server_name``) are added when no entity supplied them.
        """
        headers = HTTPEntity.EMPTY
        body = b""
        for entity in self.entities:
            for name, value in entity.headers:
                headers = headers.set_header(name, value)
            body += entity.body

        headers = headers.set_body(body).set_content_length()
        if headers.header("Date") is None:
            headers = headers.set_header("Date", format_http_date(datetime.now(timezone.utc)))
        if headers.header("Server") is None:
            headers = headers.set_header("Server", config.server_name)

        lines = [self.status_line]
        for name, value in headers.headers:
            lines.append(f"{name}: {value}")
        lines.append("")

        return "\r\n".join(lines).encode("utf-8") + b"\r\n" + body


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Wed, 01 Jan 2026 12:00:00 GMT
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )
