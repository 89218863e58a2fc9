"""Version command."""

from __future__ import annotations

import argparse
from typing import List

from .base import Command, parse_command_args
from ..context import ShellContext
from ..output import emit_result


class VersionCommand(Command):
    def __init__(self) -> None:
        super().__init__("version", "Print the package name and version")
        self._parser = argparse.ArgumentParser(prog="version", add_help=False)

    def usage(self) -> str:
        return self._parser.format_usage()

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        if parse_command_args(self._parser, argv) is None:
            return 1
        emit_result(
            ctx,
            message=f"version {ctx.pkg_name} {ctx.version}",
            data={"name": ctx.pkg_name, "version": ctx.version},
        )
        return 0
