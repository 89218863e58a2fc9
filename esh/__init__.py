"""
esh: an embeddable command shell.

The heart of the package is :mod:`esh.parser`, a POSIX-like line tokenizer
with backslash escape decoding.  :class:`ShellConfig` builds a
:class:`Shell` that dispatches tokenized command lines to registered
commands, either from the process command line or from an interactive
prompt.  Use ``python -m esh`` to launch the reference shell.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .commands import Command, CommandRegistry, HandlerCommand
from .context import ShellContext
from .errors import (
    CommandNotFound,
    DuplicateCommand,
    InvalidHexEscape,
    InvalidUnicodeCodePoint,
    InvalidUnicodeEscape,
    InvalidUtf8,
    ShellError,
    ShellParseError,
    TrailingBackslash,
    UnmatchedDoubleQuote,
    UnmatchedSingleQuote,
    VfsError,
)
from .parser import (
    decode_argument_to_bytes,
    decode_argument_to_text,
    split_command,
    tokenize_to_bytes,
    tokenize_to_text,
)
from .shell import Shell, ShellConfig
from .util import die, get_cmd_basename, init_logging, pluralize
from .vfs import DirVfs, Vfs

__all__ = [
    "__version__",
    "Command",
    "CommandRegistry",
    "HandlerCommand",
    "ShellContext",
    "Shell",
    "ShellConfig",
    "Vfs",
    "DirVfs",
    "tokenize_to_bytes",
    "tokenize_to_text",
    "decode_argument_to_bytes",
    "decode_argument_to_text",
    "split_command",
    "init_logging",
    "get_cmd_basename",
    "die",
    "pluralize",
    "ShellParseError",
    "UnmatchedSingleQuote",
    "UnmatchedDoubleQuote",
    "TrailingBackslash",
    "InvalidHexEscape",
    "InvalidUnicodeEscape",
    "InvalidUnicodeCodePoint",
    "InvalidUtf8",
    "ShellError",
    "CommandNotFound",
    "DuplicateCommand",
    "VfsError",
]
