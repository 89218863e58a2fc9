"""Command base classes for esh."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..context import ShellContext
from ..parser import split_command

Handler = Callable[[ShellContext, List[str]], int]


@dataclass
class Command:
    """Abstract command description."""

    name: str
    description: str
    aliases: Sequence[str] = field(default_factory=tuple)

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        raise NotImplementedError("Command must implement run()")

    def format_help(self) -> str:
        return f"{self.name:<12} {self.description}"

    def usage(self) -> Optional[str]:
        return None

    def parse(self, line: str) -> List[str]:
        return split_command(line)


class HandlerCommand(Command):
    """Wraps a plain ``handler(ctx, argv) -> int`` callable."""

    def __init__(self, name: str, description: str, handler: Handler, *, aliases: Sequence[str] = ()) -> None:
        super().__init__(name, description, aliases=tuple(aliases))
        self._handler = handler

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        return int(self._handler(ctx, argv) or 0)


def parse_command_args(parser: argparse.ArgumentParser, argv: List[str]) -> Optional[argparse.Namespace]:
    """Parse *argv* with *parser*; ``None`` when argparse rejected it."""
    try:
        return parser.parse_args(argv)
    except SystemExit:
        return None
