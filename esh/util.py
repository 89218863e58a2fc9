"""Process-level helpers: logging setup, program name, fatal exits."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, NoReturn, Optional, Tuple

LOGGER = logging.getLogger("esh.util")

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

# Third-party loggers that are too chatty below WARNING.
QUIET_LOGGERS = ("prompt_toolkit", "asyncio")

_basename: Optional[str] = None


def log_env_var(name: str) -> str:
    return f"{name.upper().replace('-', '_')}_LOG"


def _level_from_env(name: str) -> Optional[int]:
    env_name = log_env_var(name)
    raw = os.environ.get(env_name, "").strip()
    if not raw:
        return None
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    LOGGER.warning("ignoring %s=%r: not a log level", env_name, raw)
    return None


def init_logging(
    name: str,
    quiet: bool = False,
    verbose: int = 0,
    *,
    stream: Optional[IO[str]] = None,
) -> Tuple[bool, int]:
    """Configure root logging for a shell named *name*.

    ``quiet`` wins over ``verbose``.  Each ``-v`` lowers the threshold one
    step (WARNING, INFO, DEBUG, TRACE).  ``<NAME>_LOG`` in the environment
    overrides the computed level.  Returns ``(is_verbose, level)``.
    """
    is_verbose = not quiet and verbose > 0
    if quiet:
        level = logging.ERROR
    else:
        level = _VERBOSITY_LEVELS.get(max(0, verbose), TRACE)
    override = _level_from_env(name)
    if override is not None:
        level = override

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream or sys.stderr)
    logging.getLogger().setLevel(level)
    for noisy in QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))
    return is_verbose, level


def get_cmd_basename(fallback: str) -> str:
    """Return the basename this process was invoked as, cached after first use."""
    global _basename
    if _basename is None:
        arg0 = sys.argv[0] if sys.argv else ""
        candidate = Path(arg0).name if arg0 else ""
        if candidate in ("", "-c", "__main__.py"):
            candidate = fallback
        _basename = candidate
    return _basename


def die(message: Optional[str] = None) -> NoReturn:
    if message:
        LOGGER.error("Fatal error, exiting: %s", message)
    else:
        LOGGER.error("Fatal error, exiting")
    raise SystemExit(1)


def exit_status(exc: SystemExit) -> int:
    """Map a SystemExit to a process status, printing string codes to stderr."""
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    print(code, file=sys.stderr)
    return 1


def pluralize(word: str, count: int, plural: Optional[str] = None) -> str:
    if count == 1:
        return word
    return plural if plural is not None else f"{word}s"


__all__ = [
    "TRACE",
    "init_logging",
    "log_env_var",
    "get_cmd_basename",
    "die",
    "exit_status",
    "pluralize",
]
