"""Virtual filesystem boundary used by shell commands."""

from __future__ import annotations

import abc
import argparse
import logging
from pathlib import Path
from typing import Union

from .errors import VfsError

LOGGER = logging.getLogger("esh.vfs")


class Vfs(abc.ABC):
    """What commands may see of a filesystem."""

    @abc.abstractmethod
    def cwd(self) -> Path:
        raise NotImplementedError


class DirVfs(Vfs):
    """A VFS rooted at a directory on the host filesystem."""

    def __init__(self, root: Union[str, Path]) -> None:
        path = Path(root).expanduser()
        try:
            path = path.resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise VfsError(f"can't open VFS at '{root}': {exc}") from exc
        if not path.is_dir():
            raise VfsError(f"can't open VFS at '{root}': not a directory")
        self.root = path
        LOGGER.info("created DirVfs with root %s", path)

    def cwd(self) -> Path:
        return self.root

    def __repr__(self) -> str:
        return f"DirVfs({str(self.root)!r})"


def parse_vfs_root(text: str) -> Path:
    """argparse ``type=`` converter for a VFS root directory."""
    try:
        path = Path(text).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise argparse.ArgumentTypeError(f"cannot open path '{text}': {exc}") from exc
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"not a directory: '{text}'")
    return path


__all__ = ["Vfs", "DirVfs", "parse_vfs_root"]
