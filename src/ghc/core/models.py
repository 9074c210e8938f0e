"""Domain models for ghc.

:class:`Organization` entries are owned exclusively by a
:class:`Registry`; the registry enforces name uniqueness and the
default-selection rules on every mutation.  :class:`CloneCommand` is an
immutable value object describing one external ``git clone`` call.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from ghc.exceptions import (
    CannotRemoveDefaultError,
    DuplicateOrganizationError,
    NoOrganizationsError,
    OrganizationNotFoundError,
)


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Organization:
    """A named binding between a GitHub account and one SSH key."""

    name: str
    """Organization (or user) name as it appears in clone URLs."""

    ssh_key_path: str
    """Filesystem path to the private (or public) key file."""

    is_default: bool = False
    """Whether this is the registry's default organization."""


# ---------------------------------------------------------------------------
# Registry (aggregate root)
# ---------------------------------------------------------------------------

@dataclass
class Registry:
    """Ordered, name-unique collection of :class:`Organization` entries.

    Insertion order is preserved for listing and persistence.
    """

    organizations: list[Organization] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.organizations)

    def __iter__(self) -> Iterator[Organization]:
        return iter(self.organizations)

    def names(self) -> list[str]:
        return [org.name for org in self.organizations]

    def _find(self, name: str) -> Organization | None:
        return next((org for org in self.organizations if org.name == name), None)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, name: str, ssh_key_path: str, is_default: bool = False) -> None:
        """Add or update the organization called *name*.

        When *is_default* is true every other entry loses its default
        flag first.  An existing entry is updated in place, keeping its
        position; otherwise the entry is appended.  A registry left with
        exactly one entry always has that entry marked default.

        The key file is not inspected here; see
        :func:`ghc.core.validation.validate_organization`.
        """
        if is_default:
            for org in self.organizations:
                org.is_default = False

        existing = self._find(name)
        if existing is not None:
            existing.ssh_key_path = ssh_key_path
            existing.is_default = is_default
        else:
            self.organizations.append(
                Organization(name=name, ssh_key_path=ssh_key_path, is_default=is_default)
            )

        if len(self.organizations) == 1:
            self.organizations[0].is_default = True

    def remove(self, name: str) -> None:
        """Delete the organization called *name*.

        Raises
        ------
        OrganizationNotFoundError
            If no entry has that name.
        CannotRemoveDefaultError
            If the entry is the default and other entries remain.
        """
        org = self._find(name)
        if org is None:
            raise OrganizationNotFoundError(name)
        if org.is_default and len(self.organizations) > 1:
            raise CannotRemoveDefaultError(name)
        self.organizations.remove(org)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def key_path_for(self, name: str) -> str:
        """Return the key path bound to *name* (exact match, no fallback).

        Raises
        ------
        OrganizationNotFoundError
            If no entry has that name.
        """
        org = self._find(name)
        if org is None:
            raise OrganizationNotFoundError(name)
        return org.ssh_key_path

    def default_organization(self) -> Organization | None:
        return next((org for org in self.organizations if org.is_default), None)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """Validate the whole registry, stopping at the first failure.

        Raises
        ------
        NoOrganizationsError
            If the registry is empty.
        DuplicateOrganizationError
            If two entries share a name.
        OrganizationValidationError, KeyFileError
            The first per-entry failure, in registry order.
        """
        from ghc.core.validation import validate_organization

        if not self.organizations:
            raise NoOrganizationsError()

        seen: set[str] = set()
        for org in self.organizations:
            if org.name in seen:
                raise DuplicateOrganizationError(org.name)
            seen.add(org.name)
            validate_organization(org)


# ---------------------------------------------------------------------------
# External clone command
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CloneCommand:
    """One ``git clone`` invocation, ready to hand to a command runner."""

    argv: tuple[str, ...]
    """Full argument vector, executable first."""

    ssh_config_path: str
    """Generated SSH config fragment the command points ssh at."""

    repo_url: str
