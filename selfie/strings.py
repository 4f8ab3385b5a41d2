"""Parsing of quoted string and character literals with escape sequences.

Recognised escapes are ``\\n \\r \\t \\b \\f \\\\ \\/ \\" \\'`` and ``\\u{XXXX}``
with one to six hexadecimal digits. In strings, a backslash followed by
whitespace discards all of that whitespace.
"""

from __future__ import annotations

import re
from typing import Optional

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\x08",
    "f": "\x0c",
    "\\": "\\",
    "/": "/",
    '"': '"',
    "'": "'",
}

_UNICODE = re.compile(r"u\{([0-9A-Fa-f]{1,6})\}")
_LITERAL = re.compile(r'[^"\\]+')
_ESCAPED_WS = re.compile(r"\\\s+")


class LiteralSyntaxError(ValueError):
    """A malformed string or character literal."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


def _escaped_char(text: str, pos: int) -> Optional[tuple[str, int]]:
    """Decode the escape whose code starts at ``pos``, just after a backslash."""
    if pos >= len(text):
        return None
    code = text[pos]
    if code == "u":
        m = _UNICODE.match(text, pos)
        if m is None:
            return None
        point = int(m.group(1), 16)
        if point > 0x10FFFF or 0xD800 <= point <= 0xDFFF:
            return None
        return chr(point), m.end()
    if code in _ESCAPES:
        return _ESCAPES[code], pos + 1
    return None


def _expect_open(text: str, start: int, quote: str) -> None:
    if not text.startswith(quote, start):
        raise LiteralSyntaxError(f"expected opening {quote}", start)


def parse_string(text: str, start: int = 0) -> tuple[str, int]:
    """Parse a double-quoted string at ``start``; return its value and end offset."""
    _expect_open(text, start, '"')
    pos = start + 1
    parts: list[str] = []
    while True:
        m = _LITERAL.match(text, pos)
        if m is not None:
            parts.append(m.group())
            pos = m.end()
            continue
        if text.startswith("\\", pos):
            escaped = _escaped_char(text, pos + 1)
            if escaped is not None:
                parts.append(escaped[0])
                pos = escaped[1]
                continue
            m = _ESCAPED_WS.match(text, pos)
            if m is not None:
                pos = m.end()
                continue
        break
    if pos >= len(text):
        raise LiteralSyntaxError("unterminated string literal", pos)
    if text[pos] != '"':
        raise LiteralSyntaxError("invalid escape sequence", pos)
    return "".join(parts), pos + 1


def parse_char(text: str, start: int = 0) -> tuple[str, int]:
    """Parse a single-quoted character at ``start``; return it and the end offset."""
    _expect_open(text, start, "'")
    pos = start + 1
    if text.startswith("\\", pos):
        escaped = _escaped_char(text, pos + 1)
        if escaped is None:
            raise LiteralSyntaxError("invalid escape sequence", pos)
        value, pos = escaped
    elif pos < len(text) and text[pos] != "'":
        value, pos = text[pos], pos + 1
    else:
        raise LiteralSyntaxError("expected a character", pos)
    if not text.startswith("'", pos):
        raise LiteralSyntaxError("expected closing '", pos)
    return value, pos + 1