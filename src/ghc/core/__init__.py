"""Core / service layer — domain model and clone routing.

Rules
-----
* No ``print()`` calls.
* No imports from ``cli`` or ``infra``.
* Filesystem access is limited to the key-file ``stat`` performed by
  :mod:`ghc.core.validation`; everything else goes through the
  protocols in :mod:`ghc.core.protocols`.
"""

from ghc.core.clone_service import CloneService
from ghc.core.models import CloneCommand, Organization, Registry
from ghc.core.protocols import CommandRunner, ConfigStore, SSHConfigEmitter
from ghc.core.url_parser import CloneURLParser

__all__: list[str] = [
    "CloneCommand",
    "CloneService",
    "CloneURLParser",
    "CommandRunner",
    "ConfigStore",
    "Organization",
    "Registry",
    "SSHConfigEmitter",
]
