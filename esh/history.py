"""File-backed history for the interactive prompt."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

LOGGER = logging.getLogger("esh.history")

DEFAULT_LIMIT = 1000


def default_history_path(name: str) -> Path:
    return Path.home() / f".{name}_history"


class HistoryStore:
    """Bounded list of previously entered lines, mirrored to a text file.

    Multi-line entries (continued with a trailing backslash or an open
    quote) are stored on one line with the newlines escaped, so the file
    stays one entry per line.
    """

    def __init__(self, path: Optional[Union[str, Path]], *, limit: int = DEFAULT_LIMIT) -> None:
        self.limit = max(1, int(limit or 1))
        self.path = Path(path).expanduser() if path else None
        self.entries: List[str] = []
        if self.path:
            self._load()

    @staticmethod
    def _encode(entry: str) -> str:
        return entry.replace("\\", "\\\\").replace("\n", "\\n")

    @staticmethod
    def _decode(stored: str) -> str:
        out: List[str] = []
        chars = iter(stored)
        for ch in chars:
            if ch != "\\":
                out.append(ch)
                continue
            nxt = next(chars, "")
            out.append("\n" if nxt == "n" else nxt)
        return "".join(out)

    def _load(self) -> None:
        if not self.path:
            return
        try:
            data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return
        except OSError as exc:
            LOGGER.warning("cannot read history %s: %s", self.path, exc)
            return
        lines = [self._decode(line) for line in data.splitlines() if line.strip()]
        self.entries = lines[-self.limit :]
        LOGGER.debug("loaded %d history entries from %s", len(self.entries), self.path)

    def append(self, line: str) -> None:
        if not line.strip() or (self.entries and self.entries[-1] == line):
            return
        self.entries.append(line)
        del self.entries[: -self.limit]
        self._persist()

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def _persist(self) -> None:
        if not self.path:
            return
        body = "".join(self._encode(entry) + "\n" for entry in self.entries)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(body, encoding="utf-8")
        except OSError as exc:
            LOGGER.warning("cannot write history %s: %s", self.path, exc)

    def snapshot(self) -> List[str]:
        return list(self.entries)


__all__ = ["HistoryStore", "default_history_path", "DEFAULT_LIMIT"]
