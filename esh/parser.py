"""POSIX-like line tokenizer and backslash escape decoder.

``tokenize_to_bytes`` splits a line into words honouring whitespace,
single/double quotes, ``#`` comments and backslash escapes.  The decoded
words are bytes because ``\\xNN`` and ``\\0ooo`` escapes can produce
arbitrary byte values; ``tokenize_to_text`` adds UTF-8 validation on top.

``decode_argument_to_bytes`` interprets escapes in a single value whose
boundaries are already known (for example an entry of ``sys.argv``) using
double-quote rules, without splitting or treating quotes as delimiters.

Supported escapes (unquoted and inside double quotes)::

    \\\\ \\' \\" \\$ \\` \\<space>    the literal character
    \\a \\b \\e \\E \\f \\n \\r \\t \\v    control characters
    \\0[ooo]                       octal byte, capped at 0377
    \\xH[H]                        hex byte
    \\u{H..H}                      unicode scalar, 1-6 hex digits
    \\<newline>                    line continuation (dropped)

Any other ``\\X`` becomes ``X`` when unquoted and stays ``\\X`` inside
double quotes.  Nothing is escaped inside single quotes.
"""

from __future__ import annotations

import enum
from typing import List, Optional

from .errors import (
    InvalidHexEscape,
    InvalidUnicodeCodePoint,
    InvalidUnicodeEscape,
    InvalidUtf8,
    TrailingBackslash,
    UnmatchedDoubleQuote,
    UnmatchedSingleQuote,
)

WHITESPACE = frozenset(" \t\n\r")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
OCTAL_DIGITS = frozenset("01234567")

MAX_OCTAL_DIGITS = 3
MAX_HEX_DIGITS = 2
MAX_UNICODE_DIGITS = 6
MAX_CODE_POINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)

_SIMPLE_ESCAPES = {
    "a": b"\x07",
    "b": b"\x08",
    "e": b"\x1b",
    "E": b"\x1b",
    "f": b"\x0c",
    "n": b"\n",
    "r": b"\r",
    "t": b"\t",
    "v": b"\x0b",
    "\\": b"\\",
    "'": b"'",
    '"': b'"',
    "$": b"$",
    "`": b"`",
    " ": b" ",
}


class ScanState(enum.Enum):
    NORMAL = "normal"
    SINGLE_QUOTED = "single-quoted"


class _Cursor:
    """Read position over the input with one character of lookahead."""

    __slots__ = ("text", "pos")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return None

    def next(self) -> Optional[str]:
        ch = self.peek()
        if ch is not None:
            self.pos += 1
        return ch


def _push_char(output: bytearray, ch: str) -> None:
    try:
        output += ch.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as exc:
        raise InvalidUtf8() from exc


def _to_text(word: bytes) -> str:
    try:
        return word.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidUtf8() from exc


def _decode_octal(cursor: _Cursor) -> int:
    # The leading 0 has already been consumed.
    value = 0
    for _ in range(MAX_OCTAL_DIGITS):
        digit = cursor.peek()
        if digit is None or digit not in OCTAL_DIGITS:
            break
        candidate = value * 8 + int(digit)
        if candidate > 0xFF:
            break
        value = candidate
        cursor.next()
    return value


def _decode_hex(cursor: _Cursor) -> int:
    value = 0
    count = 0
    while count < MAX_HEX_DIGITS:
        digit = cursor.peek()
        if digit is None or digit not in HEX_DIGITS:
            break
        value = (value << 4) | int(digit, 16)
        cursor.next()
        count += 1
    if count == 0:
        raise InvalidHexEscape()
    return value


def _decode_unicode(cursor: _Cursor) -> str:
    if cursor.peek() != "{":
        raise InvalidUnicodeEscape()
    cursor.next()
    value = 0
    count = 0
    while True:
        ch = cursor.next()
        if ch is None:
            raise InvalidUnicodeEscape()
        if ch == "}":
            break
        if ch not in HEX_DIGITS:
            raise InvalidUnicodeEscape()
        count += 1
        if count > MAX_UNICODE_DIGITS:
            raise InvalidUnicodeEscape()
        value = (value << 4) | int(ch, 16)
    if count == 0:
        raise InvalidUnicodeEscape()
    if value > MAX_CODE_POINT or value in SURROGATES:
        raise InvalidUnicodeCodePoint(value)
    return chr(value)


def decode_escape(cursor: _Cursor, output: bytearray, *, quoted: bool) -> None:
    """Decode one escape sequence; *cursor* sits right after the backslash.

    ``quoted`` selects the fallback for unknown escapes: inside double quotes
    the backslash is kept, unquoted it only quotes the next character.
    """
    ch = cursor.next()
    if ch is None:
        raise TrailingBackslash()
    simple = _SIMPLE_ESCAPES.get(ch)
    if simple is not None:
        output += simple
    elif ch == "\n":
        pass  # line continuation
    elif ch == "0":
        output.append(_decode_octal(cursor))
    elif ch == "x":
        output.append(_decode_hex(cursor))
    elif ch == "u":
        _push_char(output, _decode_unicode(cursor))
    else:
        if quoted:
            output += b"\\"
        _push_char(output, ch)


def _scan_double_quoted(cursor: _Cursor, output: bytearray) -> bool:
    """Consume up to the closing quote; False if the input ran out first."""
    while True:
        ch = cursor.next()
        if ch is None:
            return False
        if ch == '"':
            return True
        if ch == "\\":
            decode_escape(cursor, output, quoted=True)
        else:
            _push_char(output, ch)


def tokenize_to_bytes(line: str) -> List[bytes]:
    """Split *line* into words and return each word as raw bytes.

    Raises a :class:`~esh.errors.ShellParseError` subclass on unmatched
    quotes, a trailing backslash or a malformed escape sequence.
    """
    words: List[bytes] = []
    current = bytearray()
    in_word = False
    state = ScanState.NORMAL
    cursor = _Cursor(line)

    while True:
        ch = cursor.next()
        if ch is None:
            break
        if state is ScanState.SINGLE_QUOTED:
            if ch == "'":
                state = ScanState.NORMAL
            else:
                _push_char(current, ch)
            continue
        if ch in WHITESPACE:
            if in_word:
                words.append(bytes(current))
                current.clear()
                in_word = False
        elif ch == "'":
            in_word = True
            state = ScanState.SINGLE_QUOTED
        elif ch == '"':
            in_word = True
            if not _scan_double_quoted(cursor, current):
                raise UnmatchedDoubleQuote()
        elif ch == "\\":
            in_word = True
            decode_escape(cursor, current, quoted=False)
        elif ch == "#" and not in_word:
            break  # comment runs to the end of the line
        else:
            in_word = True
            _push_char(current, ch)

    if state is ScanState.SINGLE_QUOTED:
        raise UnmatchedSingleQuote()
    if in_word:
        words.append(bytes(current))
    return words


def tokenize_to_text(line: str) -> List[str]:
    """Like :func:`tokenize_to_bytes` but every word must be valid UTF-8."""
    return [_to_text(word) for word in tokenize_to_bytes(line)]


def decode_argument_to_bytes(arg: str) -> bytes:
    """Interpret escapes in a single pre-split value using double-quote rules."""
    cursor = _Cursor(arg)
    output = bytearray()
    while True:
        ch = cursor.next()
        if ch is None:
            break
        if ch == "\\":
            decode_escape(cursor, output, quoted=True)
        else:
            _push_char(output, ch)
    return bytes(output)


def decode_argument_to_text(arg: str) -> str:
    return _to_text(decode_argument_to_bytes(arg))


def split_command(line: str) -> List[str]:
    """Split a command line into argv tokens."""
    if not line:
        return []
    return tokenize_to_text(line)


__all__ = [
    "ScanState",
    "decode_escape",
    "tokenize_to_bytes",
    "tokenize_to_text",
    "decode_argument_to_bytes",
    "decode_argument_to_text",
    "split_command",
]
