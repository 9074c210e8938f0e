"""``ghc doctor`` — environment and registry diagnostics.

Collects one row per check and renders them as a table.  The registry
row runs the full registry validation, which is where missing key
files and loose key permissions are reported.
"""

from __future__ import annotations

import platform
import sys

from ghc.cli import exit_codes
from ghc.cli.console import console, escape
from ghc.config import GhcSettings
from ghc.exceptions import GhcError
from ghc.infra.config_store import JsonConfigStore
from ghc.infra.tool_detector import REQUIRED_TOOLS, detect_tool
from ghc.version import __version__

_OK = "[green]OK[/green]"
_FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _ghc_version_check() -> Check:
    return "ghc", __version__, _OK


def _python_version_check() -> Check:
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", platform.python_version(), status


def _tool_check(name: str) -> Check:
    status = detect_tool(name)
    if status.found:
        return name, escape(str(status.path)), _OK
    return name, "not found", _FAIL


def _registry_check(settings: GhcSettings) -> Check:
    """Load the registry and validate every organization in it."""
    try:
        registry = JsonConfigStore(settings.resolved_config_path()).load()
        registry.validate()
    except (GhcError, OSError) as exc:
        return "Registry", escape(str(exc)), _FAIL
    return "Registry", f"{len(registry)} organization(s)", _OK


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: GhcSettings) -> int:
    """Run every check and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when every check passes,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks: list[Check] = [
        _ghc_version_check(),
        _python_version_check(),
        *(_tool_check(name) for name in REQUIRED_TOOLS),
        _registry_check(settings),
    ]
    console.table(("Component", "Value", "Status"), checks, title="ghc doctor")

    for name in REQUIRED_TOOLS:
        status = detect_tool(name)
        if not status.found and status.install_commands:
            console.print(f"[yellow]{name} is not installed.[/yellow] Install using one of:")
            for cmd in status.install_commands:
                console.print(f"  [bold]{cmd}[/bold]")
            console.print()

    if any("FAIL" in status for _, _, status in checks):
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
