"""Core clone service — routes a clone URL to the right SSH key.

Pipeline, short-circuiting on the first failure:

1. reject an empty URL
2. parse the organization from the URL
3. load the registry
4. resolve the organization's key path
5. ensure the SSH config directory exists
6. emit a per-invocation SSH config fragment
7. re-check the URL against the generic SSH shape
8. run ``git clone`` through the injected :class:`CommandRunner`

Every failure is tagged with the stage it escaped from.  Typed
:class:`~ghc.exceptions.GhcError` subclasses keep their type; raw
``OSError`` is wrapped in :class:`~ghc.exceptions.CloneError`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path

from ghc.core.models import CloneCommand
from ghc.core.protocols import CommandRunner, ConfigStore, SSHConfigEmitter
from ghc.core.ssh_config import build_clone_command
from ghc.core.url_parser import CloneURLParser, is_generic_ssh_url
from ghc.exceptions import (
    CloneError,
    EmptyRepoURLError,
    GhcError,
    InvalidRepoURLFormatError,
    SSHConfigNotFoundError,
)

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
    try:
        yield
    except GhcError as exc:
        if exc.stage is None:
            exc.stage = name
        raise
    except OSError as exc:
        err = CloneError(f"{name}: {exc}")
        err.stage = name
        raise err from exc


class CloneService:
    """Clone repositories with the key of the organization in their URL.

    Parameters
    ----------
    store:
        Source of the organization registry.
    emitter:
        Writer for SSH config fragments.
    runner:
        Executor for the external ``git clone`` command.
    ssh_host:
        SSH host clone URLs must point at; also the ``Host`` alias of
        emitted fragments.
    ssh_config_dir:
        Directory receiving the emitted fragments.
    retention:
        When set, fragments older than this are pruned before a new one
        is emitted.
    """

    def __init__(
        self,
        store: ConfigStore,
        emitter: SSHConfigEmitter,
        runner: CommandRunner,
        *,
        ssh_host: str,
        ssh_config_dir: Path,
        retention: timedelta | None = None,
    ) -> None:
        self._store: ConfigStore = store
        self._emitter: SSHConfigEmitter = emitter
        self._runner: CommandRunner = runner
        self._parser: CloneURLParser = CloneURLParser(ssh_host)
        self._ssh_config_dir: Path = ssh_config_dir
        self._retention: timedelta | None = retention

    @property
    def ssh_host(self) -> str:
        return self._parser.host

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def clone(self, repo_url: str) -> CloneCommand:
        """Clone *repo_url* and return the command that was run.

        Raises
        ------
        EmptyRepoURLError
        InvalidRepoURLFormatError
        OrgNameNotFoundError
        ConfigNotFoundError, ConfigParseError, HomeDirectoryNotFoundError
        OrganizationNotFoundError
        SSHConfigNotFoundError
        CloneError
            When an ``OSError`` interrupts a stage.
        ExternalCommandError
            When git fails.
        """
        with _stage("validate url"):
            if not repo_url:
                raise EmptyRepoURLError()

        with _stage("parse url"):
            org_name = self._parser.parse(repo_url)
        logger.debug("Resolved organization %r from %s", org_name, repo_url)

        with _stage("load config"):
            registry = self._store.load()

        with _stage("resolve key"):
            ssh_key_path = registry.key_path_for(org_name)
        logger.debug("Using key %s for organization %r", ssh_key_path, org_name)

        with _stage("prepare ssh config dir"):
            self._emitter.ensure_directory(self._ssh_config_dir)
            if self._retention is not None:
                removed = self._emitter.prune(self._ssh_config_dir, self._retention)
                if removed:
                    logger.debug("Pruned %d stale ssh config file(s)", removed)

        with _stage("write ssh config"):
            config_path = self._emitter.emit(
                self.ssh_host, ssh_key_path, self._ssh_config_dir,
            )

        with _stage("build command"):
            command = self._build_command(config_path, repo_url)

        with _stage("run git clone"):
            logger.debug("Running %s", " ".join(command.argv))
            self._runner.run(command)
        return command

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build_command(self, config_path: Path, repo_url: str) -> CloneCommand:
        if not self._emitter.exists(config_path):
            raise SSHConfigNotFoundError(str(config_path))
        if not is_generic_ssh_url(repo_url):
            raise InvalidRepoURLFormatError(repo_url)
        return build_clone_command(str(config_path), repo_url)
