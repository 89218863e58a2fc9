"""Alias management command."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, List

from .base import Command, parse_command_args
from ..context import ShellContext
from ..output import emit_error, emit_result

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry


class AliasCommand(Command):
    """Map one command name onto another (``alias ll help``)."""

    def __init__(self) -> None:
        super().__init__("alias", "List, define or remove command aliases")
        parser = argparse.ArgumentParser(prog="alias", add_help=False)
        parser.add_argument("name", nargs="?", help="Alias name")
        parser.add_argument("command", nargs="?", help="Target command")
        parser.add_argument("-r", "--remove", action="store_true", help="Remove the named alias")
        parser.add_argument("--clear", action="store_true", help="Remove all aliases")
        self._parser = parser
        self._registry: CommandRegistry | None = None

    def bind(self, registry: "CommandRegistry") -> None:
        self._registry = registry

    def usage(self) -> str:
        return self._parser.format_usage()

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        args = parse_command_args(self._parser, argv)
        if args is None:
            return 1
        if args.clear:
            ctx.aliases.clear()
            emit_result(ctx, message="aliases cleared", data={"aliases": {}})
            return 0
        if args.remove:
            if not args.name or args.name not in ctx.aliases:
                emit_error(ctx, message=f"no such alias: {args.name}")
                return 1
            ctx.aliases.pop(args.name)
            emit_result(ctx, message=f"removed {args.name}", data={"aliases": ctx.list_aliases()})
            return 0
        if args.name and args.command:
            if self._registry is not None and self._registry.get(args.command) is None:
                emit_error(ctx, message=f"unknown command: {args.command}")
                return 1
            ctx.set_alias(args.name, args.command)
            emit_result(ctx, message=f"{args.name} -> {args.command}", data={"aliases": ctx.list_aliases()})
            return 0
        aliases = ctx.list_aliases()
        if args.name:
            target = aliases.get(args.name)
            if target is None:
                emit_error(ctx, message=f"no such alias: {args.name}")
                return 1
            emit_result(ctx, message=f"{args.name}={target}", data={"aliases": {args.name: target}})
            return 0
        if not ctx.json_output:
            if not aliases:
                print("no aliases defined")
            for alias, command in sorted(aliases.items()):
                print(f"{alias}={command}")
            return 0
        emit_result(ctx, message="aliases", data={"aliases": aliases})
        return 0
