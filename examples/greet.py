#!/usr/bin/env python3
"""Minimal esh shell with two commands: ``hello [NAME]`` and ``bye [-b...] [NAME]``."""

from __future__ import annotations

import argparse
from typing import List

from esh import Command, ShellConfig, ShellContext
from esh.commands.base import parse_command_args


class HelloCommand(Command):
    def __init__(self) -> None:
        super().__init__("hello", "Say hello")
        parser = argparse.ArgumentParser(prog="hello", add_help=False)
        parser.add_argument("name", nargs="?", default="world")
        self._parser = parser

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        args = parse_command_args(self._parser, argv)
        if args is None:
            return 1
        print(f"Hello, {args.name}!")
        return 0


class ByeCommand(Command):
    def __init__(self) -> None:
        super().__init__("bye", "Say goodbye, repeatedly with -b")
        parser = argparse.ArgumentParser(prog="bye", add_help=False)
        parser.add_argument("name", nargs="?", default="blackbird")
        parser.add_argument("-b", "--bye", dest="count", action="count", default=0)
        self._parser = parser

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        args = parse_command_args(self._parser, argv)
        if args is None:
            return 1
        print(f"Bye, {'bye, ' * (args.count + 1)}{args.name}!")
        return 0


def build_shell():
    return ShellConfig("hello", "greet", "0.1.0").shared_commands(HelloCommand(), ByeCommand()).build()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(build_shell().run())
