"""Filesystem implementation of :class:`~ghc.core.protocols.SSHConfigEmitter`.

Each emitted fragment gets a fresh UUID4 file name, so concurrent
invocations sharing one directory never write to the same file.
Fragments are left in place after cloning; :meth:`FileSSHConfigEmitter.prune`
removes old ones when a retention period is configured.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

from ghc.core.ssh_config import render_ssh_config

logger = logging.getLogger(__name__)


class FileSSHConfigEmitter:
    """Write SSH config fragments into a directory.

    Parameters
    ----------
    name_factory:
        Returns the file name for the next fragment.  Defaults to a
        random UUID4 string.
    """

    DIR_MODE: int = 0o700
    FILE_MODE: int = 0o600

    def __init__(self, name_factory: Callable[[], str] | None = None) -> None:
        self._name_factory: Callable[[], str] = name_factory or (lambda: str(uuid.uuid4()))

    def ensure_directory(self, directory: Path) -> None:
        if not directory.is_dir():
            logger.debug("Creating ssh config directory %s", directory)
        directory.mkdir(mode=self.DIR_MODE, parents=True, exist_ok=True)

    def emit(self, host_alias: str, ssh_key_path: str, directory: Path) -> Path:
        """Render and write a fragment; return the path written.

        The file is created exclusively with mode ``0600``.  Any
        ``OSError`` from the write propagates unchanged.
        """
        path = directory / self._name_factory()
        content = render_ssh_config(host_alias, ssh_key_path)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, self.FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        logger.debug("Wrote ssh config %s", path)
        return path

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def prune(self, directory: Path, older_than: timedelta) -> int:
        """Delete regular files in *directory* last modified before the cutoff."""
        if not directory.is_dir():
            return 0
        cutoff = time.time() - older_than.total_seconds()
        removed = 0
        for entry in directory.iterdir():
            if not entry.is_file() or entry.is_symlink():
                continue
            if entry.stat().st_mtime < cutoff:
                entry.unlink(missing_ok=True)
                removed += 1
        return removed
