"""Runtime settings for ghc, read from ``GHC_*`` environment variables."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghc.exceptions import ConfigError
from ghc.utils.paths import expand_path


class GhcSettings(BaseSettings):
    """Configuration for registry storage and clone routing."""

    ssh_host: str = Field(
        default="github.com",
        min_length=1,
        description="SSH host clone URLs must point at",
    )
    config_path: str = Field(
        default="~/.config/ghc/ghc.conf",
        description="Location of the organization registry document",
    )
    ssh_config_dir: str = Field(
        default="~/.config/ghc/ssh_configs/",
        description="Directory receiving generated SSH config fragments",
    )
    ssh_config_retention_hours: int = Field(
        default=0,
        ge=0,
        description="Prune fragments older than this many hours (0 = never)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level used when --verbose is not given",
    )

    model_config = SettingsConfigDict(
        env_prefix="GHC_",
        extra="ignore",
    )

    def resolved_config_path(self) -> Path:
        return expand_path(self.config_path)

    def resolved_ssh_config_dir(self) -> Path:
        return expand_path(self.ssh_config_dir)

    def retention(self) -> timedelta | None:
        if self.ssh_config_retention_hours == 0:
            return None
        return timedelta(hours=self.ssh_config_retention_hours)


def load_settings() -> GhcSettings:
    """Read :class:`GhcSettings` from the environment.

    Raises
    ------
    ConfigError
        If a ``GHC_*`` variable holds an invalid value.
    """
    try:
        return GhcSettings()
    except ValidationError as exc:
        raise ConfigError(
            f"invalid ghc settings: {exc.error_count()} error(s)\n{exc}",
            hint="Check the GHC_* environment variables.",
        ) from exc
