"""Output helpers for esh commands."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Mapping, Optional

from .context import ShellContext


def _json_dump(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_result(ctx: ShellContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit a successful command result."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "ok"}
        if data is not None:
            payload["result"] = dict(data)
        else:
            payload["message"] = message
        print(_json_dump(payload))
    else:
        print(message)


def emit_error(ctx: ShellContext, *, message: str, data: Optional[Mapping[str, Any]] = None) -> None:
    """Emit an error; plain text goes to stderr, JSON to stdout."""
    if ctx.json_output:
        payload: Dict[str, Any] = {"status": "error", "error": message}
        if data:
            payload["details"] = dict(data)
        print(_json_dump(payload))
    else:
        print(f"error: {message}", file=sys.stderr)


__all__ = ["emit_result", "emit_error"]
