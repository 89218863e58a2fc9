"""Embeddable shell: configuration builder, argv handling and dispatch."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from .commands import (
    AliasCommand,
    Command,
    CommandRegistry,
    ExitCommand,
    HelpCommand,
    ShellCommand,
    VersionCommand,
    build_registry,
)
from .context import ShellContext
from .errors import CommandNotFound, ShellError, ShellParseError
from .history import DEFAULT_LIMIT, HistoryStore, default_history_path
from .output import emit_error
from .parser import decode_argument_to_text, split_command
from .repl import ShellREPL
from .util import exit_status, init_logging
from .vfs import Vfs

LOGGER = logging.getLogger("esh.shell")

ArgsAugmentor = Callable[[argparse.ArgumentParser], None]
VfsFactory = Callable[[argparse.Namespace], Vfs]

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

_VERBOSE_RUN = re.compile(r"-v+")

_logging_ready = False


def _hoist_global_flags(args: argparse.Namespace) -> None:
    """Apply -q, -v and --json found after COMMAND as if given before it.

    Scanning stops at ``--``; the rest goes to the command untouched.
    """
    rest: List[str] = []
    words = iter(args.args)
    for word in words:
        if word == "--":
            rest.append(word)
            rest.extend(words)
            break
        if word in ("-q", "--quiet"):
            args.quiet = True
        elif word == "--verbose":
            args.verbose += 1
        elif word == "--json":
            args.json = True
        elif _VERBOSE_RUN.fullmatch(word):
            args.verbose += len(word) - 1
        else:
            rest.append(word)
    args.args = rest


def _ensure_logging(name: str, quiet: bool, verbose: int) -> None:
    global _logging_ready
    if _logging_ready:
        return
    _, level = init_logging(name, quiet, verbose)
    _logging_ready = True
    LOGGER.info("starting %s, log level: %s", name, logging.getLevelName(level))


class ShellConfig:
    """Builder for a :class:`Shell`.

    Every setter returns the config so calls can be chained::

        ShellConfig("hello", "hello", "1.0").cli_commands(HelloCommand()).build().run()
    """

    def __init__(self, name: str, pkg_name: str, version: str) -> None:
        self._name = name
        self.pkg_name = pkg_name
        self.version = version
        self.cli: List[Command] = []
        self.interactive: List[Command] = []
        self.shared: List[Command] = []
        self.augmentors: List[ArgsAugmentor] = []
        self.vfs_factory: Optional[VfsFactory] = None
        self.escapes = False
        self.prompt_text: Optional[str] = None
        self.history: Optional[Path] = None
        self.history_limit = DEFAULT_LIMIT

    @property
    def program(self) -> str:
        return self._name

    def name(self, name: str) -> "ShellConfig":
        self._name = name
        return self

    def cli_args(self, augmentor: ArgsAugmentor) -> "ShellConfig":
        self.augmentors.append(augmentor)
        return self

    def cli_commands(self, *commands: Command) -> "ShellConfig":
        self.cli.extend(commands)
        return self

    def shell_commands(self, *commands: Command) -> "ShellConfig":
        self.interactive.extend(commands)
        return self

    def shared_commands(self, *commands: Command) -> "ShellConfig":
        self.shared.extend(commands)
        return self

    def vfs_lookup(self, factory: VfsFactory) -> "ShellConfig":
        self.vfs_factory = factory
        return self

    def decode_escapes(self, enabled: bool = True) -> "ShellConfig":
        self.escapes = enabled
        return self

    def prompt(self, text: str) -> "ShellConfig":
        self.prompt_text = text
        return self

    def history_path(self, path: Optional[Union[str, Path]], *, limit: int = DEFAULT_LIMIT) -> "ShellConfig":
        self.history = Path(path) if path else None
        self.history_limit = limit
        return self

    def build(self) -> "Shell":
        return Shell(self)


class Shell:
    """Runs commands from argv, from single lines, or from an interactive prompt."""

    def __init__(self, config: ShellConfig) -> None:
        self.name = config.program
        self.pkg_name = config.pkg_name
        self.version = config.version
        self.prompt = config.prompt_text or f"{self.name}> "
        self.decode_escapes = config.escapes
        self.history_path = config.history
        self.history_limit = config.history_limit
        self._augmentors = list(config.augmentors)
        self._vfs_factory = config.vfs_factory

        shell_command = ShellCommand()
        shell_command.attach(self)
        self.cli_registry: CommandRegistry = build_registry(
            [shell_command, VersionCommand(), *config.shared, *config.cli]
        )
        self.shell_registry: CommandRegistry = build_registry(
            [HelpCommand(), VersionCommand(), *config.shared, *config.interactive, AliasCommand(), ExitCommand()]
        )
        self._default_ctx: Optional[ShellContext] = None

    # ------------------------------------------------------------------
    # outer command line

    def build_arg_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=f"{self.name} ({self.pkg_name} {self.version})",
            epilog="commands: " + ", ".join(command.name for command in self.cli_registry.list_commands()),
        )
        parser.add_argument("-q", "--quiet", action="store_true", help="Only report errors (overrides -v)")
        parser.add_argument(
            "-v", "--verbose", action="count", default=0, help="More log output; repeat for more detail"
        )
        parser.add_argument("--json", action="store_true", help="Emit JSON output when supported")
        parser.add_argument("--version", action="version", version=f"{self.name} {self.pkg_name} {self.version}")
        for augmentor in self._augmentors:
            augmentor(parser)
        parser.add_argument("command", nargs="?", metavar="COMMAND", help="Command to run")
        parser.add_argument("args", nargs=argparse.REMAINDER, metavar="ARGS", help="Command arguments")
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse *argv* (default ``sys.argv[1:]``) and run the selected command."""
        words = list(sys.argv[1:] if argv is None else argv)
        if self.decode_escapes:
            try:
                words = [decode_argument_to_text(word) for word in words]
            except ShellParseError as exc:
                print(f"{self.name}: error: {exc}", file=sys.stderr)
                return EXIT_USAGE
        parser = self.build_arg_parser()
        try:
            args = parser.parse_args(words)
        except SystemExit as exc:
            return exit_status(exc)
        if not args.command:
            parser.print_help(sys.stderr)
            return EXIT_USAGE

        _hoist_global_flags(args)
        _ensure_logging(self.name, args.quiet, args.verbose)
        ctx = self.new_context(json_output=args.json, options=args)
        if self._vfs_factory is not None:
            try:
                ctx.set_vfs(self._vfs_factory(args))
            except ShellError as exc:
                print(f"{self.name}: error: {exc}", file=sys.stderr)
                return EXIT_USAGE

        command = self.cli_registry.get(args.command)
        if command is None:
            print(f"{self.name}: error: unrecognized command '{args.command}'", file=sys.stderr)
            parser.print_usage(sys.stderr)
            return EXIT_USAGE
        try:
            return self._invoke(ctx, command, list(args.args))
        except SystemExit as exc:
            return exit_status(exc)

    def new_context(self, **kwargs) -> ShellContext:
        return ShellContext(name=self.name, pkg_name=self.pkg_name, version=self.version, **kwargs)

    # ------------------------------------------------------------------
    # interactive side

    def _context(self, ctx: Optional[ShellContext]) -> ShellContext:
        if ctx is not None:
            return ctx
        if self._default_ctx is None:
            self._default_ctx = self.new_context()
        return self._default_ctx

    def run_line(self, line: str, ctx: Optional[ShellContext] = None) -> int:
        """Tokenize one line and run it as a shell command.

        ``exit`` raises :class:`SystemExit`; everything else returns a status.
        """
        ctx = self._context(ctx)
        try:
            argv = split_command(line)
        except ShellParseError as exc:
            LOGGER.debug("parse error in %r: %s", line, exc)
            emit_error(ctx, message=f"parse error: {exc}")
            return EXIT_FAILURE
        return self.dispatch(ctx, argv)

    def dispatch(self, ctx: ShellContext, argv: List[str]) -> int:
        if not argv:
            return EXIT_OK
        cmd_name, *cmd_args = argv
        try:
            command = self.shell_registry.require(ctx.resolve_alias(cmd_name))
        except CommandNotFound as exc:
            emit_error(ctx, message=str(exc))
            return EXIT_FAILURE
        return self._invoke(ctx, command, cmd_args)

    def run_interactive(self, ctx: Optional[ShellContext] = None, **repl_options) -> int:
        ctx = self._context(ctx)
        path = self.history_path or default_history_path(self.name)
        store = HistoryStore(path, limit=self.history_limit)
        repl = ShellREPL(self, ctx, history_store=store, **repl_options)
        return repl.run()

    # ------------------------------------------------------------------

    def _invoke(self, ctx: ShellContext, command: Command, argv: List[str]) -> int:
        LOGGER.debug("running %s %r", command.name, argv)
        try:
            return int(command.run(ctx, argv) or 0)
        except SystemExit:
            raise
        except ShellError as exc:
            emit_error(ctx, message=str(exc))
            return EXIT_FAILURE
        except Exception as exc:
            LOGGER.exception("command %s failed", command.name)
            print(f"Command '{command.name}' failed: {exc}", file=sys.stderr)
            return EXIT_FAILURE


__all__ = ["Shell", "ShellConfig", "EXIT_OK", "EXIT_FAILURE", "EXIT_USAGE"]
