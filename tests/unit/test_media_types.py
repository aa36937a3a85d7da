"""
Unit tests for media types and Accept/Accept-Charset negotiation.
"""

import pytest

from jsonhttp.http.media_types import (
    ACCEPT_CHARSET_UTF_8,
    MEDIA_TYPE_JSON,
    Accept,
    AcceptCharset,
    MediaType,
)


class TestMediaType:
    """Tests for MediaType parsing and comparison."""

    def test_parse(self):
        """Test type, subtype and parameters are split."""
        media_type = MediaType.parse("Application/JSON; Charset=UTF-8")

        assert media_type.type == "application"
        assert media_type.subtype == "json"
        assert media_type.charset == "UTF-8"
        assert media_type.value == "application/json"

    def test_str(self):
        """Test formatting with and without parameters."""
        assert str(MEDIA_TYPE_JSON) == "application/json"
        assert str(MEDIA_TYPE_JSON.set_charset("UTF-16")) == "application/json; charset=UTF-16"

    def test_set_charset_replaces(self):
        """Test setting the charset twice keeps one parameter."""
        media_type = MEDIA_TYPE_JSON.set_charset("UTF-8").set_charset("UTF-16")

        assert media_type.parameters == (("charset", "UTF-16"),)

    def test_equals_ignoring_parameters(self):
        """Test parameters do not affect the JSON check."""
        assert MEDIA_TYPE_JSON.equals_ignoring_parameters(MediaType.parse("application/json; charset=UTF-8"))
        assert not MEDIA_TYPE_JSON.equals_ignoring_parameters(MediaType.parse("text/json"))

    @pytest.mark.parametrize("media_range, expected", [
        ("*/*", True),
        ("application/*", True),
        ("application/json", True),
        ("text/*", False),
        ("application/xml", False),
    ])
    def test_matches(self, media_range, expected):
        """Test wildcard media ranges."""
        assert MediaType.parse(media_range).matches(MEDIA_TYPE_JSON) is expected

    def test_quality(self):
        """Test q parameter parsing."""
        assert MediaType.parse("text/html").quality == 1.0
        assert MediaType.parse("text/html;q=0.3").quality == 0.3
        assert MediaType.parse("text/html;q=bogus").quality == 0.0


class TestAccept:
    """Tests for Accept header negotiation."""

    @pytest.mark.parametrize("header", [
        "application/json",
        "*/*",
        "text/html, application/*;q=0.8",
    ])
    def test_accepts_json(self, header):
        """Test headers that include JSON."""
        assert Accept.parse(header).test(MEDIA_TYPE_JSON)

    @pytest.mark.parametrize("header", [
        "image/jpeg",
        "text/*, image/png",
        "application/json;q=0",
        "",
    ])
    def test_rejects_json(self, header):
        """Test headers that exclude JSON."""
        assert not Accept.parse(header).test(MEDIA_TYPE_JSON)


class TestAcceptCharset:
    """Tests for Accept-Charset resolution."""

    @pytest.mark.parametrize("header, expected", [
        ("utf-8", "UTF-8"),
        ("UTF-16", "UTF-16"),
        ("iso-8859-1", "ISO-8859-1"),
        ("latin1", "ISO-8859-1"),
        ("*", "UTF-8"),
        ("x-no-such-charset, utf-16", "UTF-16"),
        ("utf-8;q=0.5, utf-16", "UTF-16"),
        ("base64, utf-16", "UTF-16"),
    ])
    def test_charset(self, header, expected):
        """Test resolution to the header spelling of the best charset."""
        assert AcceptCharset.parse(header).charset() == expected

    @pytest.mark.parametrize("header", [
        "x-no-such-charset",
        "base64",
        "rot13",
        "zlib",
        "utf-8;q=0",
        "",
    ])
    def test_unsupported(self, header):
        """Test headers that resolve to nothing."""
        assert AcceptCharset.parse(header).charset() is None

    def test_default(self):
        """Test the default resolves to UTF-8."""
        assert ACCEPT_CHARSET_UTF_8.charset() == "UTF-8"

    def test_str(self):
        """Test formatting back into a header value."""
        assert str(AcceptCharset.parse("utf-8, utf-16;q=0.5")) == "utf-8, utf-16;q=0.5"
