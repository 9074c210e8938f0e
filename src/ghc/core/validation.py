"""Validation of a single :class:`~ghc.core.models.Organization`.

Checks run in a fixed order and the first failure wins:

1. empty name
2. name neither ``default`` nor a valid slug
3. empty key path
4. key file missing, or present with a mode other than ``0600``

The only side effect is one ``os.stat`` call on the key path.  A stat
failure other than "not found" is not classified and propagates as the
raw ``OSError``.
"""

from __future__ import annotations

import os
import re
import stat

from ghc.core.models import Organization
from ghc.exceptions import (
    EmptyOrganizationNameError,
    EmptySSHKeyPathError,
    InsecureKeyPermissionsError,
    InvalidOrganizationNameError,
    KeyFileNotFoundError,
)

DEFAULT_ORGANIZATION_NAME: str = "default"
"""Reserved name accepted regardless of the slug pattern."""

ORGANIZATION_NAME_PATTERN: re.Pattern[str] = re.compile(
    r"[a-z0-9](?:[a-z0-9-]{0,37}[a-z0-9])?"
)

REQUIRED_KEY_MODE: int = 0o600


def validate_name(name: str) -> None:
    """Raise if *name* is empty or not an acceptable organization name."""
    if not name:
        raise EmptyOrganizationNameError()
    if name != DEFAULT_ORGANIZATION_NAME and ORGANIZATION_NAME_PATTERN.fullmatch(name) is None:
        raise InvalidOrganizationNameError(name)


def validate_key_file(path: str) -> None:
    """Raise unless *path* exists with owner-only read-write permission."""
    try:
        st = os.stat(path)
    except FileNotFoundError as exc:
        raise KeyFileNotFoundError(path) from exc

    mode = stat.S_IMODE(st.st_mode)
    if mode != REQUIRED_KEY_MODE:
        raise InsecureKeyPermissionsError(path, mode)


def validate_organization(org: Organization) -> None:
    """Validate *org* completely.

    Raises
    ------
    EmptyOrganizationNameError
    InvalidOrganizationNameError
    EmptySSHKeyPathError
    KeyFileNotFoundError
    InsecureKeyPermissionsError
    OSError
        For any other ``stat`` failure.
    """
    validate_name(org.name)
    if not org.ssh_key_path:
        raise EmptySSHKeyPathError()
    validate_key_file(org.ssh_key_path)
