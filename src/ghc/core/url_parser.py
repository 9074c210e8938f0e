"""Organization extraction from Git-over-SSH clone URLs."""

from __future__ import annotations

import re

from ghc.exceptions import InvalidRepoURLFormatError, OrgNameNotFoundError

DEFAULT_SSH_HOST: str = "github.com"

GENERIC_SSH_URL_PATTERN: re.Pattern[str] = re.compile(
    r"git@[^:\s]+:[^/\s]+/[^/\s]+(?:\.git)?"
)
"""Host-agnostic shape every URL must have before it reaches git."""


class CloneURLParser:
    """Parse ``git@<host>:<org>/<repo>[.git]`` URLs for one SSH host.

    Parameters
    ----------
    host:
        SSH host the URLs must point at.  It is matched literally, so
        regex metacharacters in it carry no special meaning.
    """

    def __init__(self, host: str = DEFAULT_SSH_HOST) -> None:
        self.host: str = host
        self._pattern: re.Pattern[str] = re.compile(
            rf"git@{re.escape(host)}:([^/\s]*)/[^/\s]+(?:\.git)?"
        )

    def parse(self, url: str) -> str:
        """Return the organization part of *url*.

        Raises
        ------
        InvalidRepoURLFormatError
            If *url* does not have the expected shape for this host.
        OrgNameNotFoundError
            If the organization part is empty.
        """
        match = self._pattern.fullmatch(url)
        if match is None:
            raise InvalidRepoURLFormatError(url, self.host)
        org = match.group(1)
        if not org:
            raise OrgNameNotFoundError(url)
        return org


def is_generic_ssh_url(url: str) -> bool:
    return GENERIC_SSH_URL_PATTERN.fullmatch(url) is not None
