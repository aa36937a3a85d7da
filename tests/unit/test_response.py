"""
Unit tests for HTTP responses and entities.
"""

from datetime import datetime, timezone

from jsonhttp.config import HandlerConfig
from jsonhttp.http.media_types import MEDIA_TYPE_JSON
from jsonhttp.http.response import HTTPEntity, HTTPResponse, format_http_date
from jsonhttp.http.status_codes import HTTPStatus


class TestHTTPEntity:
    """Tests for immutable entities."""

    def test_empty(self):
        """Test the shared empty entity."""
        assert HTTPEntity.EMPTY.is_empty
        assert HTTPEntity.EMPTY.headers == ()
        assert HTTPEntity.EMPTY.body == b""

    def test_setters_return_new_entity(self):
        """Test setters never modify the receiver."""
        entity = HTTPEntity.EMPTY.set_header("X-One", "1")

        assert entity.header("X-One") == "1"
        assert HTTPEntity.EMPTY.is_empty

    def test_set_header_replaces_in_place(self):
        """Test a replaced header keeps its position."""
        entity = (HTTPEntity.EMPTY
            .set_header("X-One", "1")
            .set_header("X-Two", "2")
            .set_header("x-one", "3"))

        assert entity.headers == (("x-one", "3"), ("X-Two", "2"))

    def test_json_entity(self):
        """Test building a JSON entity."""
        entity = (HTTPEntity.EMPTY
            .set_content_type(MEDIA_TYPE_JSON.set_charset("UTF-8"))
            .set_body_text('{"output":45.75}', "UTF-8")
            .set_content_length())

        assert entity.header("content-type") == "application/json; charset=UTF-8"
        assert entity.header("Content-Length") == "16"
        assert entity.content_length == 16
        assert entity.body_text() == '{"output":45.75}'

    def test_entity_equality(self):
        """Test entities compare by headers and body."""
        first = HTTPEntity.EMPTY.set_header("A", "1").set_body(b"x")
        second = HTTPEntity.EMPTY.set_header("A", "1").set_body(b"x")

        assert first == second

    def test_dump_stack_trace(self):
        """Test a traceback entity describes the exception."""
        try:
            raise ValueError("Something went wrong!")
        except ValueError as e:
            entity = HTTPEntity.dump_stack_trace(e)

        assert entity.header("Content-Type") == "text/plain; charset=UTF-8"
        assert entity.header("Content-Length") == str(len(entity.body))
        text = entity.body_text()
        assert "Traceback" in text
        assert "ValueError: Something went wrong!" in text


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_initially_empty(self):
        """Test a new response has nothing written."""
        response = HTTPResponse()

        assert response.version is None
        assert response.status is None
        assert response.entities == []

    def test_status_line(self):
        """Test status line generation."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.BAD_REQUEST.with_message("Required body missing"))

        assert response.status_line == "HTTP/1.1 400 Required body missing"

        response.set_version("HTTP/1.0")
        assert response.status_line == "HTTP/1.0 400 Required body missing"

    def test_status_line_flattens_multiline_message(self):
        """Test newlines in the message never break the status line."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.BAD_REQUEST.with_message("first\nsecond"))

        assert response.status_line == "HTTP/1.1 400 first second"

    def test_to_bytes_includes_headers(self):
        """Test that to_bytes includes all headers."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.OK.status())
        response.add_entity(HTTPEntity.EMPTY.set_header("X-Custom", "value").set_body(b"test"))

        result = response.to_bytes()

        assert b"HTTP/1.1 200 OK\r\n" in result
        assert b"X-Custom: value\r\n" in result
        assert b"Content-Length: 4\r\n" in result
        assert b"Server: jsonhttp/1.0\r\n" in result
        assert b"Date: " in result
        assert result.endswith(b"\r\n\r\ntest")

    def test_to_bytes_sets_content_length(self):
        """Test that Content-Length reflects all entity bodies."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.OK.status())
        response.add_entity(HTTPEntity.EMPTY.set_body(b"hello "))
        response.add_entity(HTTPEntity.EMPTY.set_body(b"world"))

        result = response.to_bytes()

        assert b"Content-Length: 11\r\n" in result
        assert result.endswith(b"hello world")

    def test_to_bytes_server_name(self):
        """Test the configured server name is the Server header."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.NO_CONTENT.status())

        assert b"Server: converter/2\r\n" in response.to_bytes(HandlerConfig(server_name="converter/2"))

    def test_to_bytes_server_name_from_env(self, monkeypatch):
        """Test JSONHTTP_SERVER_NAME reaches the Server header."""
        monkeypatch.setenv("JSONHTTP_SERVER_NAME", "converter/3")
        response = HTTPResponse()
        response.set_status(HTTPStatus.OK.status())

        assert b"Server: converter/3\r\n" in response.to_bytes(HandlerConfig.from_env())

    def test_entity_server_header_wins(self):
        """Test an entity supplied Server header is kept."""
        response = HTTPResponse()
        response.set_status(HTTPStatus.OK.status())
        response.add_entity(HTTPEntity.EMPTY.set_header("Server", "custom"))

        result = response.to_bytes(HandlerConfig(server_name="converter/2"))

        assert b"Server: custom\r\n" in result
        assert b"converter/2" not in result


class TestFormatHTTPDate:
    """Tests for HTTP date formatting."""

    def test_format(self):
        """Test HTTP date format."""
        dt = datetime(2026, 1, 15, 12, 30, 45, tzinfo=timezone.utc)

        assert format_http_date(dt) == "Thu, 15 Jan 2026 12:30:45 GMT"
