"""Reference ``esh`` binary: a shell rooted at a directory."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .commands import Command
from .commands.base import parse_command_args
from .context import ShellContext
from .errors import VfsError
from .output import emit_result
from .shell import Shell, ShellConfig
from .util import get_cmd_basename
from .vfs import DirVfs, Vfs, parse_vfs_root

LOG = logging.getLogger("esh.cli")


class PwdCommand(Command):
    def __init__(self) -> None:
        super().__init__("pwd", "Print the current VFS directory")
        self._parser = argparse.ArgumentParser(prog="pwd", add_help=False)

    def usage(self) -> str:
        return self._parser.format_usage()

    def run(self, ctx: ShellContext, argv: List[str]) -> int:
        if parse_command_args(self._parser, argv) is None:
            return 1
        cwd = ctx.vfs.cwd()
        emit_result(ctx, message=str(cwd), data={"cwd": str(cwd)})
        return 0


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    # The path is trusted input; it is not a sandbox boundary.
    parser.add_argument(
        "-p",
        "--path",
        dest="vfs_path",
        default=".",
        type=parse_vfs_root,
        help="Path to open a VFS on (default: current directory)",
    )


def create_vfs(args: argparse.Namespace) -> Vfs:
    root = getattr(args, "vfs_path", None)
    if root is None:
        raise VfsError("missing vfs_path argument")
    vfs = DirVfs(root)
    LOG.info("VFS root %s", vfs.cwd())
    return vfs


def build_shell(name: Optional[str] = None) -> Shell:
    return (
        ShellConfig(name or get_cmd_basename("esh"), "esh", __version__)
        .cli_args(_add_path_argument)
        .vfs_lookup(create_vfs)
        .shared_commands(PwdCommand())
        .build()
    )


def main(argv: Optional[List[str]] = None) -> int:
    return build_shell().run(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
