"""Path expansion helpers."""

from __future__ import annotations

import os
from pathlib import Path

from ghc.exceptions import HomeDirectoryNotFoundError


def home_directory() -> Path:
    """Return the current user's home directory.

    Raises
    ------
    HomeDirectoryNotFoundError
        If the home directory cannot be determined or is empty.
    """
    try:
        home = Path.home()
    except (KeyError, RuntimeError) as exc:
        raise HomeDirectoryNotFoundError() from exc
    if not str(home):
        raise HomeDirectoryNotFoundError()
    return home


def expand_path(path: str) -> Path:
    """Replace ``~`` with the home directory and expand ``$VARS`` in *path*.

    The home directory is only looked up when *path* refers to it, so
    absolute paths keep working without one.
    """
    if "~" in path or "$HOME" in path or "${HOME}" in path:
        home = str(home_directory())
        path = path.replace("~", home).replace("${HOME}", home).replace("$HOME", home)
    return Path(os.path.expandvars(path))
