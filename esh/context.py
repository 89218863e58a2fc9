"""Per-invocation shell state handed to every command."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .errors import VfsError
from .vfs import Vfs

LOGGER = logging.getLogger("esh.context")


@dataclass
class ShellContext:
    """Holds shared state for one shell run."""

    name: str = "esh"
    pkg_name: str = "esh"
    version: str = "0.0.0"
    json_output: bool = False
    options: argparse.Namespace = field(default_factory=argparse.Namespace)
    aliases: Dict[str, str] = field(default_factory=dict)
    _vfs: Optional[Vfs] = field(default=None, init=False, repr=False)

    @property
    def vfs(self) -> Vfs:
        if self._vfs is None:
            raise VfsError("no VFS configured")
        return self._vfs

    @property
    def has_vfs(self) -> bool:
        return self._vfs is not None

    def set_vfs(self, vfs: Optional[Vfs]) -> None:
        LOGGER.debug("vfs set to %r", vfs)
        self._vfs = vfs

    def resolve_alias(self, name: str) -> str:
        return self.aliases.get(name, name)

    def set_alias(self, alias: str, command: str) -> None:
        if alias == command:
            self.aliases.pop(alias, None)
            return
        self.aliases[alias] = command

    def list_aliases(self) -> Dict[str, str]:
        return dict(self.aliases)
