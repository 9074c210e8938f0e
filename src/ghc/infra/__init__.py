"""Infrastructure layer — external system integration.

This layer owns the registry file, the generated SSH config fragments,
the git subprocess, and PATH probing.  Each adapter satisfies one of
the protocols in :mod:`ghc.core.protocols`.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from ghc.infra.command_runner import SubprocessCommandRunner
from ghc.infra.config_store import JsonConfigStore
from ghc.infra.ssh_config_writer import FileSSHConfigEmitter
from ghc.infra.tool_detector import ToolStatus, detect_tool, require_tool

__all__: list[str] = [
    "FileSSHConfigEmitter",
    "JsonConfigStore",
    "SubprocessCommandRunner",
    "ToolStatus",
    "detect_tool",
    "require_tool",
]
