"""Infrastructure: detection of the external tools ghc shells out to.

``git`` performs the clone and ``ssh`` is the transport git is pointed
at.  Neither is installed or modified here; missing tools are reported
with platform-specific install guidance.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from ghc.exceptions import EnvironmentError

REQUIRED_TOOLS: tuple[str, ...] = ("git", "ssh")


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one executable.

    Attributes
    ----------
    name : str
        Executable name that was looked up.
    found : bool
        Whether the executable was located on PATH.
    path : Path | None
        Absolute path to the executable, or ``None``.
    install_commands : tuple[str, ...]
        Suggested install commands for the current platform.  Empty
        when the executable is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe PATH for *name*; never raises."""
    result = shutil.which(name)
    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`~ghc.exceptions.EnvironmentError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise EnvironmentError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_PACKAGES: dict[str, dict[str, str]] = {
    "git": {"winget": "Git.Git", "apt": "git", "dnf": "git", "pacman": "git", "brew": "git"},
    "ssh": {
        "winget": "Microsoft.OpenSSH.Beta",
        "apt": "openssh-client",
        "dnf": "openssh-clients",
        "pacman": "openssh",
        "brew": "openssh",
    },
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    packages = _PACKAGES.get(name)
    if packages is None:
        return (f"Please install {name} with your system package manager",)

    system = platform.system().lower()
    if system == "windows":
        return (f"winget install {packages['winget']}",)
    if system == "linux":
        return (
            f"sudo apt install {packages['apt']}",
            f"sudo dnf install {packages['dnf']}",
            f"sudo pacman -S {packages['pacman']}",
        )
    if system == "darwin":
        return (f"brew install {packages['brew']}",)
    return (f"Please install {name} with your system package manager",)
