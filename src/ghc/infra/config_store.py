"""JSON-file backed implementation of :class:`~ghc.core.protocols.ConfigStore`.

Persisted document::

    {"organizations": [{"name": "...", "ssh_key_path": "...", "is_default": false}]}

The file location is fixed at construction; nothing here consults
process-wide state.  Writes go through a temporary file and an atomic
rename.  There is no locking: concurrent writers race and the last one
wins.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from ghc.core.models import Organization, Registry
from ghc.exceptions import ConfigNotFoundError, ConfigParseError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Persisted schema
# ---------------------------------------------------------------------------

class OrganizationRecord(BaseModel):
    """One persisted organization.  Missing fields take their zero value."""

    model_config = ConfigDict(extra="ignore", strict=True)

    name: str = ""
    ssh_key_path: str = ""
    is_default: bool = False


class ConfigDocument(BaseModel):
    """Top-level persisted document."""

    model_config = ConfigDict(extra="ignore")

    organizations: list[OrganizationRecord] = []

    @classmethod
    def from_registry(cls, registry: Registry) -> ConfigDocument:
        return cls(
            organizations=[
                OrganizationRecord(
                    name=org.name,
                    ssh_key_path=org.ssh_key_path,
                    is_default=org.is_default,
                )
                for org in registry
            ]
        )

    def to_registry(self) -> Registry:
        return Registry(
            organizations=[
                Organization(
                    name=record.name,
                    ssh_key_path=record.ssh_key_path,
                    is_default=record.is_default,
                )
                for record in self.organizations
            ]
        )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class JsonConfigStore:
    """Load and save the organization registry as a JSON document.

    This class satisfies the :class:`~ghc.core.protocols.ConfigStore`
    protocol structurally — no explicit inheritance required.

    Parameters
    ----------
    path:
        Location of the JSON document.
    """

    DIR_MODE: int = 0o700
    FILE_MODE: int = 0o600

    def __init__(self, path: Path) -> None:
        self.path: Path = path

    def load(self) -> Registry:
        """Read the registry from :attr:`path`.

        Raises
        ------
        ConfigNotFoundError
            If no file exists at :attr:`path`.
        ConfigParseError
            If the file is not a valid registry document.
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise ConfigNotFoundError(str(self.path)) from exc

        try:
            document = ConfigDocument.model_validate_json(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ConfigParseError(
                f"invalid config file {self.path}: not valid UTF-8 ({exc.reason})",
                hint="Fix or delete the file, then re-add your organizations.",
            ) from exc
        except ValidationError as exc:
            raise ConfigParseError(
                f"invalid config file {self.path}: {exc.error_count()} error(s)\n{exc}",
                hint="Fix or delete the file, then re-add your organizations.",
            ) from exc

        registry = document.to_registry()
        logger.debug("Loaded %d organization(s) from %s", len(registry), self.path)
        return registry

    def save(self, registry: Registry) -> None:
        """Write *registry* to :attr:`path`, creating parent directories."""
        directory = self.path.parent
        directory.mkdir(mode=self.DIR_MODE, parents=True, exist_ok=True)

        payload = ConfigDocument.from_registry(registry).model_dump_json(indent=2) + "\n"

        fd, tmp_name = tempfile.mkstemp(
            dir=directory, prefix=f".{self.path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.chmod(tmp_name, self.FILE_MODE)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved %d organization(s) to %s", len(registry), self.path)
