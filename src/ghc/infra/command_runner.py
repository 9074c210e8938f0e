"""Subprocess implementation of :class:`~ghc.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns a
process.  The child inherits the caller's stdout and stderr, so git's
own progress and error output reach the user unchanged.
"""

from __future__ import annotations

import logging
import subprocess

from ghc.core.models import CloneCommand
from ghc.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    """Run clone commands with :func:`subprocess.run`, blocking until exit.

    This class satisfies the :class:`~ghc.core.protocols.CommandRunner`
    protocol structurally — no explicit inheritance required.
    """

    def run(self, command: CloneCommand) -> None:
        """Execute *command*.

        Raises
        ------
        ExternalCommandError
            When the executable is missing or exits non-zero.
        """
        executable = command.argv[0]
        try:
            completed = subprocess.run(list(command.argv), check=False)
        except FileNotFoundError as exc:
            raise ExternalCommandError(
                f"{executable} is not installed or not on PATH.",
                hint=f"Install {executable} and retry; `ghc doctor` shows what is missing.",
            ) from exc

        logger.debug("%s exited with status %d", executable, completed.returncode)
        if completed.returncode != 0:
            raise ExternalCommandError(
                f"{executable} clone failed with exit status {completed.returncode}",
                returncode=completed.returncode,
            )
