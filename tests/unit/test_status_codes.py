"""
Unit tests for status codes and status values.
"""

from jsonhttp.http.status_codes import HTTPStatus, HttpStatus


class TestHTTPStatus:
    """Tests for HTTPStatus enum."""

    def test_status_phrases(self):
        """Test that all statuses have phrases."""
        for code in HTTPStatus:
            assert code.phrase != "Unknown"

        assert HTTPStatus.OK.phrase == "OK"
        assert HTTPStatus.LENGTH_REQUIRED.phrase == "Length Required"
        assert HTTPStatus.INTERNAL_SERVER_ERROR.phrase == "Internal Server Error"

    def test_status_categories(self):
        """Test status category helpers."""
        assert HTTPStatus.OK.is_success
        assert HTTPStatus.NO_CONTENT.is_success
        assert HTTPStatus.BAD_REQUEST.is_client_error
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_server_error

        assert HTTPStatus.METHOD_NOT_ALLOWED.is_error
        assert HTTPStatus.INTERNAL_SERVER_ERROR.is_error
        assert not HTTPStatus.OK.is_error

    def test_int_comparison(self):
        """Test codes compare as integers."""
        assert HTTPStatus.NO_CONTENT == 204
        assert int(HTTPStatus.LENGTH_REQUIRED) == 411


class TestHttpStatus:
    """Tests for code plus message values."""

    def test_status_uses_phrase(self):
        """Test status() carries the reason phrase."""
        assert HTTPStatus.LENGTH_REQUIRED.status() == HttpStatus(HTTPStatus.LENGTH_REQUIRED, "Length Required")

    def test_with_message(self):
        """Test a custom message replaces the phrase."""
        status = HTTPStatus.BAD_REQUEST.with_message("Missing Accept")

        assert status.code == HTTPStatus.BAD_REQUEST
        assert status.message == "Missing Accept"
        assert str(status) == "400 Missing Accept"

    def test_with_message_or_default(self):
        """Test empty messages fall back to the phrase."""
        code = HTTPStatus.INTERNAL_SERVER_ERROR

        assert code.with_message_or_default("boom").message == "boom"
        assert code.with_message_or_default("").message == "Internal Server Error"
        assert code.with_message_or_default(None).message == "Internal Server Error"
