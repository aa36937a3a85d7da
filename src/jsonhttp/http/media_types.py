"""
=============================================================================
MEDIA TYPES AND CONTENT NEGOTIATION
=============================================================================

Parses the three request headers the JSON pipelines negotiate on:

    Content-Type:    application/json; charset=UTF-8
                     ─────┬────────── ──────┬──────
                          │                 │
                     type/subtype       parameters

    Accept:          text/html, application/*;q=0.8, */*;q=0.1
                     ─────────────────┬────────────────────────
                                      │
                     comma separated media ranges with q weights

    Accept-Charset:  iso-8859-1, utf-8;q=0.7, *;q=0.5
                     ─────────────────┬───────────────
                                      │
                     comma separated charsets with q weights

=============================================================================
CHARSET RESOLUTION
=============================================================================

An Accept-Charset header resolves to a concrete charset when one of its
entries (highest q first, q=0 entries excluded) is a text encoding in
Python's codec registry. The wildcard "*" resolves to UTF-8. The resolved charset is
reported by its usual header spelling ("UTF-8", "UTF-16", "ISO-8859-1"),
which Python also accepts as a codec name for encoding the body.

=============================================================================
"""

import codecs
from dataclasses import dataclass
from typing import Optional, Tuple


APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"

# Process wide default when a request carries no Accept-Charset header.
UTF_8 = "UTF-8"

# Python codec name → header spelling.
_CHARSET_HEADER_NAMES = {
    "utf-8": "UTF-8",
    "utf-16": "UTF-16",
    "utf-16-be": "UTF-16BE",
    "utf-16-le": "UTF-16LE",
    "utf-32": "UTF-32",
    "utf-32-be": "UTF-32BE",
    "utf-32-le": "UTF-32LE",
    "ascii": "US-ASCII",
    "iso8859-1": "ISO-8859-1",
    "latin-1": "ISO-8859-1",
}


def _split_parameters(text: str) -> Tuple[str, Tuple[Tuple[str, str], ...]]:
    """Split "value; a=1; b=2" into ("value", (("a", "1"), ("b", "2")))."""
    head, *rest = text.split(";")
    parameters = []
    for item in rest:
        name, _, value = item.partition("=")
        name = name.strip().lower()
        if name:
            parameters.append((name, value.strip().strip('"')))
    return head.strip(), tuple(parameters)


def _quality(parameters: Tuple[Tuple[str, str], ...]) -> float:
    for name, value in parameters:
        if name == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


@dataclass(frozen=True)
class MediaType:
    """
    A parsed media type such as ``application/json; charset=UTF-8``.

    Type and subtype are lowercased, parameter names are lowercased and
    parameter values are kept as sent.
    """

    type: str
    subtype: str
    parameters: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, text: str) -> "MediaType":
        essence, parameters = _split_parameters(text)
        type_, _, subtype = essence.lower().partition("/")
        return cls(type_, subtype, parameters)

    @property
    def value(self) -> str:
        """The media type without parameters, e.g. ``application/json``."""
        return f"{self.type}/{self.subtype}"

    @property
    def charset(self) -> Optional[str]:
        return self.parameter("charset")

    @property
    def quality(self) -> float:
        return _quality(self.parameters)

    def parameter(self, name: str) -> Optional[str]:
        for key, value in self.parameters:
            if key == name:
                return value
        return None

    def set_charset(self, charset: str) -> "MediaType":
        parameters = tuple(p for p in self.parameters if p[0] != "charset")
        return MediaType(self.type, self.subtype, parameters + (("charset", charset),))

    def equals_ignoring_parameters(self, other: "MediaType") -> bool:
        return self.value == other.value

    def matches(self, other: "MediaType") -> bool:
        """True if this media range (possibly a wildcard) includes ``other``."""
        if self.type != "*" and self.type != other.type:
            return False
        return self.subtype == "*" or self.subtype == other.subtype

    def __str__(self) -> str:
        text = self.value
        for name, value in self.parameters:
            text += f"; {name}={value}"
        return text


MEDIA_TYPE_JSON = MediaType.parse(APPLICATION_JSON)
MEDIA_TYPE_TEXT_PLAIN = MediaType.parse(TEXT_PLAIN)


@dataclass(frozen=True)
class Accept:
    """A parsed Accept header: an ordered tuple of media ranges."""

    media_types: Tuple[MediaType, ...]

    @classmethod
    def parse(cls, text: str) -> "Accept":
        return cls(tuple(
            MediaType.parse(item) for item in text.split(",") if item.strip()
        ))

    def test(self, media_type: MediaType) -> bool:
        """True if any range with a non-zero weight accepts ``media_type``."""
        return any(
            accepted.quality > 0 and accepted.matches(media_type)
            for accepted in self.media_types
        )

    def __str__(self) -> str:
        return ", ".join(str(media_type) for media_type in self.media_types)


@dataclass(frozen=True)
class AcceptCharset:
    """A parsed Accept-Charset header: (charset, q) pairs in header order."""

    entries: Tuple[Tuple[str, float], ...]

    @classmethod
    def parse(cls, text: str) -> "AcceptCharset":
        entries = []
        for item in text.split(","):
            if not item.strip():
                continue
            name, parameters = _split_parameters(item)
            entries.append((name, _quality(parameters)))
        return cls(tuple(entries))

    def charset(self) -> Optional[str]:
        """
        Resolve to the header name of the best supported charset.

        Returns None when no entry names a charset Python can encode with.
        """
        # sorted() is stable so equal weights keep header order
        for name, quality in sorted(self.entries, key=lambda entry: -entry[1]):
            if quality <= 0:
                continue
            if name == "*":
                return UTF_8
            try:
                codec = codecs.lookup(name)
                # base64, rot13, zlib etc. are registered but cannot encode str
                "".encode(codec.name)
            except LookupError:
                continue
            return _CHARSET_HEADER_NAMES.get(codec.name, codec.name.upper())
        return None

    def __str__(self) -> str:
        return ", ".join(
            name if quality == 1.0 else f"{name};q={quality:g}"
            for name, quality in self.entries
        )


ACCEPT_CHARSET_UTF_8 = AcceptCharset(((UTF_8, 1.0),))
