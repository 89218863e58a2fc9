"""Interactive REPL for esh shells."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout

from .completion import ShellCompleter
from .context import ShellContext
from .errors import INCOMPLETE_INPUT_ERRORS, ShellParseError
from .history import HistoryStore
from .output import emit_error
from .parser import split_command
from .util import exit_status

if TYPE_CHECKING:  # pragma: no cover
    from .shell import Shell

LOGGER = logging.getLogger("esh.repl")

CONTINUATION_PROMPT = "> "

LineReader = Callable[[str], str]


class ShellREPL:
    """Reads lines, joins continued ones, and hands them to the shell.

    A line ending in a backslash, or leaving a quote open, is continued on
    the next read; the pieces are joined with newlines so the tokenizer
    sees a backslash-newline continuation or a quote spanning lines.
    """

    def __init__(
        self,
        shell: "Shell",
        ctx: ShellContext,
        *,
        history_store: Optional[HistoryStore] = None,
        read_line: Optional[LineReader] = None,
    ) -> None:
        self.shell = shell
        self.ctx = ctx
        self.history_store = history_store
        self._read_line = read_line

    def run(self) -> int:
        read_line = self._read_line
        if read_line is None:
            read_line = self._prompt_reader() if sys.stdin.isatty() else input
        pending: List[str] = []
        while True:
            prompt = CONTINUATION_PROMPT if pending else self.shell.prompt
            try:
                line = read_line(prompt)
            except KeyboardInterrupt:
                if pending:
                    pending.clear()
                    print()
                    continue
                print()
                return 0
            except EOFError:
                if pending:
                    emit_error(self.ctx, message="unexpected end of input")
                    return 1
                return 0
            pending.append(line)
            entry = "\n".join(pending)
            try:
                argv = split_command(entry)
            except INCOMPLETE_INPUT_ERRORS:
                LOGGER.debug("continuing incomplete entry %r", entry)
                continue
            except ShellParseError as exc:
                pending.clear()
                self._record_history(entry)
                emit_error(self.ctx, message=f"parse error: {exc}")
                continue
            pending.clear()
            self._record_history(entry)
            try:
                self.shell.dispatch(self.ctx, argv)
            except SystemExit as exc:
                return exit_status(exc)

    def _prompt_reader(self) -> LineReader:
        history = InMemoryHistory()
        if self.history_store:
            for entry in self.history_store.snapshot():
                history.append_string(entry)
        session: PromptSession[str] = PromptSession(
            history=history,
            completer=ShellCompleter(self.ctx, self.shell.shell_registry),
            complete_while_typing=False,
        )

        def read(prompt: str) -> str:
            with patch_stdout():
                return session.prompt(prompt)

        return read

    def _record_history(self, entry: str) -> None:
        if self.history_store:
            self.history_store.append(entry)

