"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from .base import Command
from ..context import ShellContext
from ..output import emit_error

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class HelpCommand(Command):
    def __init__(self) -> None:
        super().__init__("help", "Show available commands", aliases=("?",))
        self._registry: CommandRegistry | None = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        registry = self._registry
        if not registry:
            return 1
        if argv:
            name = ctx.resolve_alias(argv[0])
            command = registry.get(name)
            if command is None:
                emit_error(ctx, message=f"no help for unknown command: {argv[0]}")
                return 1
            print(command.format_help())
            usage = command.usage()
            if usage:
                print(usage.rstrip())
            if command.aliases:
                print(f"aliases: {', '.join(command.aliases)}")
            return 0
        for command in registry.list_commands():
            print(command.format_help())
        return 0
