"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can substitute recording doubles.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Protocol

from ghc.core.models import CloneCommand, Registry


class ConfigStore(Protocol):
    """Contract for loading and persisting the organization registry."""

    def load(self) -> Registry:
        """Return the persisted registry.

        Raises
        ------
        ConfigNotFoundError
            When nothing has been persisted yet.
        ConfigParseError
            When the persisted document is not valid structured data.
        """
        ...  # pragma: no cover

    def save(self, registry: Registry) -> None:
        """Persist *registry*, creating parent directories as needed."""
        ...  # pragma: no cover


class SSHConfigEmitter(Protocol):
    """Contract for writing per-invocation SSH config fragments."""

    def ensure_directory(self, directory: Path) -> None:
        """Create *directory* with owner-only permissions if absent."""
        ...  # pragma: no cover

    def emit(self, host_alias: str, ssh_key_path: str, directory: Path) -> Path:
        """Write a fragment to a new, uniquely named file in *directory*."""
        ...  # pragma: no cover

    def exists(self, path: Path) -> bool:
        """Return whether the fragment at *path* is still present."""
        ...  # pragma: no cover

    def prune(self, directory: Path, older_than: timedelta) -> int:
        """Delete fragments older than *older_than*; return how many."""
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for executing the external clone command."""

    def run(self, command: CloneCommand) -> None:
        """Run *command* to completion.

        Raises
        ------
        ExternalCommandError
            When the command exits non-zero or cannot be started.
        """
        ...  # pragma: no cover
