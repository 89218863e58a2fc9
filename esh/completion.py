"""prompt_toolkit completer for the interactive shell."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from prompt_toolkit.completion import CompleteEvent, Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from .commands import CommandRegistry
from .context import ShellContext
from .errors import ShellParseError
from .parser import WHITESPACE, tokenize_to_text

# Escapes that read back as the original character outside quotes.
_UNQUOTED_ESCAPES = {
    " ": "\\ ",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "'": "\\'",
    '"': '\\"',
    "\\": "\\\\",
    "#": "\\#",
}


def _scan_open_quote(text: str) -> Tuple[str, bool]:
    """Return ``(open_quote, at_word_boundary)`` for the end of *text*."""
    quote = ""
    boundary = True
    chars = iter(text)
    for ch in chars:
        if quote == "'":
            if ch == "'":
                quote = ""
            boundary = False
        elif quote == '"':
            if ch == "\\":
                next(chars, None)
            elif ch == '"':
                quote = ""
            boundary = False
        elif ch in WHITESPACE:
            boundary = True
        elif ch == "\\":
            next(chars, None)
            boundary = False
        else:
            if ch in "'\"":
                quote = ch
            boundary = False
    return quote, boundary


def _escape_for(quote: str, text: str) -> str:
    if quote == "'":
        return text.replace("'", "'\\''")
    if quote == '"':
        return text.replace("\\", "\\\\").replace('"', '\\"')
    return "".join(_UNQUOTED_ESCAPES.get(ch, ch) for ch in text)


def _normalise_tokens(text: str) -> Tuple[List[str], str]:
    if not text:
        return [], ""
    quote, boundary = _scan_open_quote(text)
    try:
        # Close an open quote so the half-typed word decodes like a finished one.
        tokens = tokenize_to_text(text + quote)
    except ShellParseError:
        tokens = text.split()
    if boundary:
        tokens.append("")
    return tokens, quote


class ShellCompleter(Completer):
    """Completes command names first, then paths below the VFS root."""

    def __init__(self, ctx: ShellContext, registry: CommandRegistry) -> None:
        self.ctx = ctx
        self.registry = registry
        self._path = PathCompleter(expanduser=True, get_paths=self._search_roots)

    def _search_roots(self) -> List[str]:
        if self.ctx.has_vfs:
            return [str(self.ctx.vfs.cwd())]
        return ["."]

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        tokens, quote = _normalise_tokens(document.text_before_cursor)
        if len(tokens) <= 1:
            prefix = tokens[0] if tokens else ""
            for name in self._command_names(prefix):
                yield Completion(name, start_position=-len(prefix))
            return
        prefix = tokens[-1]
        if prefix.startswith("-"):
            return
        sub_document = Document(prefix, cursor_position=len(prefix))
        for completion in self._path.get_completions(sub_document, complete_event):
            yield Completion(
                _escape_for(quote, completion.text),
                start_position=completion.start_position,
                display=completion.display,
            )

    def _command_names(self, prefix: str) -> List[str]:
        names = set(self.registry.names())
        names.update(self.ctx.aliases)
        return sorted(name for name in names if name.startswith(prefix))


__all__ = ["ShellCompleter"]
