"""Exit command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command, parse_command_args
from ..context import ShellContext


class ExitCommand(Command):
    def __init__(self) -> None:
        super().__init__("exit", "Leave the shell", aliases=("quit", "q"))
        parser = argparse.ArgumentParser(prog="exit", add_help=False)
        parser.add_argument("code", nargs="?", type=int, default=0, help="Exit status")
        self._parser = parser

    def usage(self) -> str:
        return self._parser.format_usage()

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        args = parse_command_args(self._parser, argv)
        if args is None:
            return 1
        raise SystemExit(args.code)
