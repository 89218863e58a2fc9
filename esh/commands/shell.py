"""Command that drops into the interactive prompt."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, List

from .base import Command, parse_command_args
from ..context import ShellContext

if TYPE_CHECKING:  # pragma: no cover
    from ..shell import Shell


class ShellCommand(Command):
    def __init__(self) -> None:
        super().__init__("shell", "Start an interactive shell")
        self._shell: Shell | None = None
        self._parser = argparse.ArgumentParser(prog="shell", add_help=False)

    def attach(self, shell: "Shell") -> None:
        self._shell = shell

    def usage(self) -> str:
        return self._parser.format_usage()

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        if parse_command_args(self._parser, argv) is None:
            return 1
        if self._shell is None:
            return 1
        return self._shell.run_interactive(ctx)
