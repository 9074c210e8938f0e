"""Custom exception hierarchy for ghc.

All exceptions that cross layer boundaries must inherit from
:class:`GhcError`.  Raw ``OSError`` instances raised while cloning are
caught by the clone pipeline and re-raised as :class:`CloneError`
naming the stage that failed.

Hierarchy
---------
GhcError
├── EmptyRepoURLError
├── InvalidRepoURLFormatError
├── OrgNameNotFoundError
├── OrganizationValidationError
│   ├── EmptyOrganizationNameError
│   ├── InvalidOrganizationNameError
│   ├── EmptySSHKeyPathError
│   ├── DuplicateOrganizationError
│   └── NoOrganizationsError
├── KeyFileError
│   ├── KeyFileNotFoundError
│   └── InsecureKeyPermissionsError
├── OrganizationNotFoundError
├── CannotRemoveDefaultError
├── ConfigError
│   ├── ConfigNotFoundError
│   ├── ConfigParseError
│   └── HomeDirectoryNotFoundError
├── SSHConfigNotFoundError
├── CloneError
├── ExternalCommandError
└── EnvironmentError
"""

from __future__ import annotations


class GhcError(Exception):
    """Base exception for all ghc errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""

        self.stage: str | None = None
        """Clone pipeline stage the error escaped from, if any."""


# --- Repository URL --------------------------------------------------------

class EmptyRepoURLError(GhcError):
    """Raised when no repository URL was given."""

    def __init__(self) -> None:
        super().__init__("repository URL is required")


class InvalidRepoURLFormatError(GhcError):
    """Raised when the URL is not a ``git@<host>:<org>/<repo>[.git]`` URL."""

    def __init__(self, url: str, host: str | None = None) -> None:
        expected = f"git@{host}:<org>/<repo>.git" if host else "git@<host>:<org>/<repo>.git"
        super().__init__(
            f"invalid GitHub SSH URL format: {url!r}",
            hint=f"Expected a URL of the form {expected}",
        )
        self.url: str = url


class OrgNameNotFoundError(GhcError):
    """Raised when the URL matched but carries an empty organization."""

    def __init__(self, url: str) -> None:
        super().__init__(f"organization name not found in the URL: {url!r}")
        self.url: str = url


# --- Organization validation -----------------------------------------------

class OrganizationValidationError(GhcError):
    """Base class for domain validation failures; the caller must fix input."""


class EmptyOrganizationNameError(OrganizationValidationError):
    def __init__(self) -> None:
        super().__init__("organization name cannot be empty")


class InvalidOrganizationNameError(OrganizationValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"invalid organization name: {name!r}",
            hint=(
                "Use 1-39 lowercase letters, digits or hyphens, "
                "not starting or ending with a hyphen."
            ),
        )
        self.name: str = name


class EmptySSHKeyPathError(OrganizationValidationError):
    def __init__(self) -> None:
        super().__init__("SSH key path cannot be empty")


class DuplicateOrganizationError(OrganizationValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate organization name found: {name}")
        self.name: str = name


class NoOrganizationsError(OrganizationValidationError):
    def __init__(self) -> None:
        super().__init__(
            "no organizations found in the configuration",
            hint="Add one with: ghc org set ORG_NAME SSH_KEY_PATH",
        )


# --- Key files -------------------------------------------------------------

class KeyFileError(GhcError):
    """Base class for problems with an organization's key file on disk."""


class KeyFileNotFoundError(KeyFileError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"SSH key file does not exist: {path}",
            hint="Create the key or point the organization at an existing one.",
        )
        self.path: str = path


class InsecureKeyPermissionsError(KeyFileError):
    def __init__(self, path: str, mode: int) -> None:
        super().__init__(
            f"{path} has incorrect permissions: {mode:04o}",
            hint=f"Restrict the key to its owner: chmod 600 {path}",
        )
        self.path: str = path
        self.mode: int = mode


# --- Registry consistency --------------------------------------------------

class OrganizationNotFoundError(GhcError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"organization not found: {name}",
            hint="List the configured organizations with: ghc org ls",
        )
        self.name: str = name


class CannotRemoveDefaultError(GhcError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"cannot remove the default organization: {name}",
            hint="Remove the other organizations first, or mark another one as default.",
        )
        self.name: str = name


# --- Configuration I/O -----------------------------------------------------

class ConfigError(GhcError):
    """Base class for failures reading or writing the registry document."""


class ConfigNotFoundError(ConfigError):
    def __init__(self, path: str) -> None:
        super().__init__(
            f"config file not found: {path}",
            hint="Add an organization with: ghc org set ORG_NAME SSH_KEY_PATH",
        )
        self.path: str = path


class ConfigParseError(ConfigError):
    """Raised when the registry document is not valid structured data."""


class HomeDirectoryNotFoundError(ConfigError):
    def __init__(self) -> None:
        super().__init__(
            "home directory not found",
            hint="Set HOME, or configure absolute paths via GHC_CONFIG_PATH and GHC_SSH_CONFIG_DIR.",
        )


# --- Cloning ---------------------------------------------------------------

class SSHConfigNotFoundError(GhcError):
    """Raised when the generated SSH config vanished before git could use it."""

    def __init__(self, path: str) -> None:
        super().__init__(f"ssh config file {path} does not exist")
        self.path: str = path


class CloneError(GhcError):
    """Raised when an OS-level failure interrupts a clone pipeline stage."""


class ExternalCommandError(GhcError):
    """Raised when the external clone command fails or cannot be started."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int | None = returncode


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(GhcError):
    """Raised when a required runtime dependency is not available."""
