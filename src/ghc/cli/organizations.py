"""``ghc organization`` sub-commands: set, list, remove.

Each command is a full read-modify-write of the registry document.
Concurrent invocations are not coordinated; the last write wins.
"""

from __future__ import annotations

from ghc.cli import exit_codes
from ghc.cli.console import console, escape
from ghc.config import GhcSettings
from ghc.core.models import Registry
from ghc.core.validation import validate_name
from ghc.exceptions import (
    ConfigNotFoundError,
    EmptyOrganizationNameError,
    EmptySSHKeyPathError,
    NoOrganizationsError,
)
from ghc.infra.config_store import JsonConfigStore
from ghc.utils.paths import expand_path


def _store(settings: GhcSettings) -> JsonConfigStore:
    return JsonConfigStore(settings.resolved_config_path())


def set_organization(
    settings: GhcSettings,
    name: str,
    ssh_key_path: str,
    *,
    is_default: bool = False,
) -> int:
    """Bind *name* to *ssh_key_path*, creating the registry if needed.

    The name and path are checked for emptiness and shape only; the key
    file itself is checked by ``ghc doctor`` since public keys are
    legitimately group/world readable.
    """
    validate_name(name)
    if not ssh_key_path:
        raise EmptySSHKeyPathError()
    key_path = str(expand_path(ssh_key_path))

    store = _store(settings)
    try:
        registry = store.load()
    except ConfigNotFoundError:
        registry = Registry()

    registry.set(name, key_path, is_default)
    store.save(registry)

    org = next(o for o in registry if o.name == name)
    suffix = " [bold](default)[/bold]" if org.is_default else ""
    console.print(f"[green]Saved[/green] {escape(name)} → {escape(key_path)}{suffix}")
    return exit_codes.SUCCESS


def list_organizations(settings: GhcSettings) -> int:
    """Print every organization to stdout in insertion order, marking the default."""
    registry = _store(settings).load()
    if not len(registry):
        raise NoOrganizationsError()

    rows = [
        [escape(org.name), escape(org.ssh_key_path), "*" if org.is_default else " "]
        for org in registry
    ]
    console.table(("Org Name", "SSH Key Path", "Default"), rows, stdout=True)
    return exit_codes.SUCCESS


def remove_organization(settings: GhcSettings, name: str) -> int:
    """Delete *name* from the registry."""
    if not name:
        raise EmptyOrganizationNameError()

    store = _store(settings)
    registry = store.load()
    registry.remove(name)
    store.save(registry)

    console.print(f"[green]Removed[/green] {escape(name)}")
    return exit_codes.SUCCESS
