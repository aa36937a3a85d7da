"""
pytest configuration and fixtures.
"""

from typing import Callable, Dict, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jsonhttp.http import HTTPRequest


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample raw HTTP POST request with JSON body."""
    return (
        b"POST /convert HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        b"Accept: application/json\r\n"
        b"Content-Length: 15\r\n"
        b"\r\n"
        b'{"input":123.5}'
    )


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample raw HTTP GET request without a body."""
    return (
        b"GET /convert HTTP/1.0\r\n"
        b"Host: localhost:8080\r\n"
        b"Accept: application/json\r\n"
        b"\r\n"
    )


def build_request(
    body: str = "",
    method: str = "POST",
    headers: Optional[Dict[str, str]] = None,
    content_length: bool = True,
    version: str = "HTTP/1.0",
) -> HTTPRequest:
    """
    Build a request whose body is UTF-8 encoded ``body``.

    Content-Length is derived from the encoded body unless
    ``content_length`` is False or ``headers`` already declares one.
    """
    raw = body.encode("utf-8")
    all_headers = dict(headers or {})
    if content_length and not any(name.lower() == "content-length" for name in all_headers):
        all_headers["Content-Length"] = str(len(raw))
    return HTTPRequest(method=method, path="/handler", version=version, headers=all_headers, body=raw)


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
    """Request builder, see build_request."""
    return build_request
