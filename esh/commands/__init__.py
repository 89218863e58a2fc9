"""Command registry for esh."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..errors import CommandNotFound, DuplicateCommand
from .alias import AliasCommand
from .base import Command, HandlerCommand
from .exit import ExitCommand
from .help import HelpCommand
from .shell import ShellCommand
from .version import VersionCommand


class CommandRegistry:
    """Stores the known commands and resolves their aliases."""

    def __init__(self) -> None:
        self._commands: Dict[str, Command] = {}
        self._ordered: List[Command] = []

    def register(self, command: Command) -> None:
        for key in (command.name, *command.aliases):
            if key in self._commands:
                raise DuplicateCommand(key)
        self._ordered.append(command)
        self._commands[command.name] = command
        for alias in command.aliases:
            self._commands[alias] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def require(self, name: str) -> Command:
        command = self._commands.get(name)
        if command is None:
            raise CommandNotFound(name)
        return command

    def list_commands(self) -> Iterable[Command]:
        return self._ordered

    def names(self) -> List[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands


def build_registry(commands: Iterable[Command]) -> CommandRegistry:
    registry = CommandRegistry()
    for command in commands:
        registry.register(command)
    for command in registry.list_commands():
        bind = getattr(command, "bind", None)
        if callable(bind):
            bind(registry)
    return registry


__all__ = [
    "Command",
    "HandlerCommand",
    "CommandRegistry",
    "build_registry",
    "AliasCommand",
    "ExitCommand",
    "HelpCommand",
    "ShellCommand",
    "VersionCommand",
]
