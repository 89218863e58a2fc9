"""Exception types raised by esh."""

from __future__ import annotations


class ShellParseError(ValueError):
    """Base class for errors raised while tokenizing or decoding a line."""

    message = "shell parse error"

    def __str__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.args == other.args  # type: ignore[union-attr]

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class UnmatchedSingleQuote(ShellParseError):
    """A single-quoted string was never closed."""

    message = "unmatched single quote"


class UnmatchedDoubleQuote(ShellParseError):
    """A double-quoted string was never closed."""

    message = "unmatched double quote"


class TrailingBackslash(ShellParseError):
    """Input ends with a lone backslash."""

    message = "trailing backslash"


class InvalidHexEscape(ShellParseError):
    message = "invalid \\x hex escape sequence"


class InvalidUnicodeEscape(ShellParseError):
    message = "invalid \\u{} unicode escape sequence"


class InvalidUnicodeCodePoint(ShellParseError):
    """The value inside ``\\u{...}`` is not a Unicode scalar value."""

    def __init__(self, value: int) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"invalid unicode code point: U+{self.value:04X}"


class InvalidUtf8(ShellParseError):
    message = "invalid UTF-8 in argument"


# Errors that mean "the line is not finished yet" rather than "the line is wrong".
INCOMPLETE_INPUT_ERRORS = (TrailingBackslash, UnmatchedSingleQuote, UnmatchedDoubleQuote)


class ShellError(RuntimeError):
    """Base class for shell framework failures."""


class CommandNotFound(ShellError):
    def __init__(self, name: str) -> None:
        super().__init__(f"unknown command: {name}")
        self.name = name


class DuplicateCommand(ShellError):
    def __init__(self, name: str) -> None:
        super().__init__(f"command already registered: {name}")
        self.name = name


class VfsError(ShellError):
    """Raised when the virtual filesystem cannot be created or is missing."""


__all__ = [
    "ShellParseError",
    "UnmatchedSingleQuote",
    "UnmatchedDoubleQuote",
    "TrailingBackslash",
    "InvalidHexEscape",
    "InvalidUnicodeEscape",
    "InvalidUnicodeCodePoint",
    "InvalidUtf8",
    "INCOMPLETE_INPUT_ERRORS",
    "ShellError",
    "CommandNotFound",
    "DuplicateCommand",
    "VfsError",
]
