"""
=============================================================================
HTTP REQUEST
=============================================================================

The read-only request view consumed by the JSON pipelines, and a parser
that builds one from raw HTTP/1.x bytes.

=============================================================================
WHAT THE PIPELINES READ
=============================================================================

    request.method            "POST"
    request.version           "HTTP/1.1"
    request.content_type      MediaType or None
    request.content_length    int or None (absent or not a number)
    request.accept            Accept or None
    request.accept_charset    AcceptCharset or None
    request.body_text()       str, raises ContentDecodeError
    request.body_length       len(request.body)

Headers are stored with lowercase names, so lookups are case-insensitive.
Typed header accessors parse on every call; requests are small and the
pipelines read each header at most once.

=============================================================================
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..errors import ContentDecodeError, HTTPParseError
from .media_types import Accept, AcceptCharset, MediaType


CONTENT_TYPE = "Content-Type"
CONTENT_LENGTH = "Content-Length"
ACCEPT = "Accept"
ACCEPT_CHARSET = "Accept-Charset"

# Request bodies without a charset parameter are read as UTF-8
DEFAULT_BODY_CHARSET = "utf-8"


@dataclass(frozen=True)
class HTTPRequest:
    """
    An immutable HTTP request.

    Header names are lowercased on construction so callers may pass them in
    any case:

        HTTPRequest("POST", "/convert", headers={"Content-Type": "application/json"})
    """

    method: str
    path: str = "/"
    version: str = "HTTP/1.1"
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    client_address: tuple = ("", 0)

    def __post_init__(self):
        # frozen dataclass, so normalize through object.__setattr__
        object.__setattr__(
            self, "headers", {name.lower(): value for name, value in self.headers.items()}
        )
        object.__setattr__(self, "method", self.method.upper())

    # =========================================================================
    # HEADER ACCESS
    # =========================================================================

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a raw header value (case-insensitive lookup)."""
        return self.headers.get(name.lower(), default)

    @property
    def content_type(self) -> Optional[MediaType]:
        value = self.get_header(CONTENT_TYPE)
        return MediaType.parse(value) if value is not None else None

    @property
    def content_length(self) -> Optional[int]:
        """
        The declared Content-Length, or None when absent.

        A value that is not a non-negative integer is treated as absent.
        """
        value = self.get_header(CONTENT_LENGTH)
        if value is None:
            return None
        value = value.strip()
        return int(value) if value.isdigit() else None

    @property
    def accept(self) -> Optional[Accept]:
        value = self.get_header(ACCEPT)
        return Accept.parse(value) if value is not None else None

    @property
    def accept_charset(self) -> Optional[AcceptCharset]:
        value = self.get_header(ACCEPT_CHARSET)
        return AcceptCharset.parse(value) if value is not None else None

    # =========================================================================
    # BODY ACCESS
    # =========================================================================

    @property
    def body_length(self) -> int:
        """Length of the body in bytes, not characters."""
        return len(self.body)

    def body_text(self) -> str:
        """
        Decode the body using the Content-Type charset (UTF-8 if none).

        Raises:
            ContentDecodeError: The charset is unknown or not a text encoding, or
                the bytes are not valid in it.
        """
        content_type = self.content_type
        charset = (content_type.charset if content_type else None) or DEFAULT_BODY_CHARSET
        try:
            return self.body.decode(charset)
        except LookupError as e:
            raise ContentDecodeError(f"Unsupported charset {charset!r}") from e
        except UnicodeDecodeError as e:
            raise ContentDecodeError(str(e)) from e


class RequestParser:
    """
    Parses raw HTTP/1.x request bytes into HTTPRequest objects.

    The data handed to the parser is one complete message. Everything after
    the blank line is the body; the parser does not trim it to the declared
    Content-Length, since checking that declaration is the pipeline's job.
    """

    VALID_METHODS = {
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "PATCH",
        "HEAD",
        "OPTIONS",
        "TRACE",
        "CONNECT",
    }

    REQUEST_LINE_PATTERN = re.compile(r"^([A-Z]+) ([^ ]+) (HTTP/\d\.\d)$")
    HEADER_PATTERN = re.compile(r"^([^:]+):\s*(.*)$")

    def __init__(self, max_request_size: int = 10 * 1024 * 1024):
        self.max_request_size = max_request_size

    def parse(self, data: bytes, client_address: tuple = ("", 0)) -> HTTPRequest:
        """
        Parse raw HTTP request data into an HTTPRequest object.

        Raises:
            HTTPParseError: If the request is malformed or too large.
        """
        if len(data) > self.max_request_size:
            raise HTTPParseError(f"Request too large: {len(data)} bytes", status_code=413)

        header_end = data.find(b"\r\n\r\n")
        if header_end == -1:
            raise HTTPParseError("Incomplete request: no header terminator")

        header_section = data[:header_end].decode("iso-8859-1")
        body = data[header_end + 4:]

        lines = header_section.split("\r\n")
        method, path, version = self._parse_request_line(lines[0])
        headers = self._parse_headers(lines[1:])

        return HTTPRequest(
            method=method,
            path=path,
            version=version,
            headers=headers,
            body=body,
            client_address=client_address,
        )

    def _parse_request_line(self, line: str) -> tuple:
        match = self.REQUEST_LINE_PATTERN.match(line)
        if not match:
            raise HTTPParseError(f"Invalid request line: {line}")

        method, path, version = match.groups()

        if method not in self.VALID_METHODS:
            raise HTTPParseError(f"Invalid method: {method}", status_code=405)

        if version not in ("HTTP/1.0", "HTTP/1.1"):
            raise HTTPParseError(f"Unsupported HTTP version: {version}", status_code=505)

        return method, path, version

    def _parse_headers(self, lines: list) -> Dict[str, str]:
        """
        Parse header lines into a dict with lowercase names.

        Continuation lines (leading whitespace) extend the previous header
        and repeated headers are joined with ", " per RFC 7230.
        """
        headers: Dict[str, str] = {}
        current_name = None

        for line in lines:
            if not line:
                continue

            if line[0] in (" ", "\t"):
                if current_name is not None:
                    headers[current_name] += " " + line.strip()
                continue

            match = self.HEADER_PATTERN.match(line)
            if not match:
                continue  # lenient

            name, value = match.groups()
            name = name.strip().lower()
            value = value.strip()
            current_name = name

            if name in headers:
                headers[name] += ", " + value
            else:
                headers[name] = value

        return headers


def parse_request(
    data: bytes,
    client_address: tuple = ("", 0),
    max_size: int = 10 * 1024 * 1024,
) -> HTTPRequest:
    """Parse one raw HTTP request with a throwaway RequestParser."""
    return RequestParser(max_request_size=max_size).parse(data, client_address)
