"""Tests for git/ssh detection (infra/tool_detector.py).

All tests mock :func:`shutil.which` — no system dependency.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from ghc.exceptions import EnvironmentError
from ghc.infra.tool_detector import (
    ToolStatus,
    _platform_install_commands,
    detect_tool,
    require_tool,
)


# ---------------------------------------------------------------------------
# detect_tool
# ---------------------------------------------------------------------------

class TestDetectTool:
    @patch("ghc.infra.tool_detector.shutil.which", return_value="/usr/bin/git")
    def test_found(self, _mock_which: object) -> None:
        status = detect_tool("git")
        assert status.found is True
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch("ghc.infra.tool_detector.shutil.which", return_value=None)
    def test_not_found(self, _mock_which: object) -> None:
        status = detect_tool("git")
        assert status.found is False
        assert status.path is None
        assert status.install_commands


# ---------------------------------------------------------------------------
# require_tool
# ---------------------------------------------------------------------------

class TestRequireTool:
    @patch("ghc.infra.tool_detector.shutil.which", return_value="/usr/bin/ssh")
    def test_found_returns_path(self, _mock_which: object) -> None:
        assert isinstance(require_tool("ssh"), Path)

    @patch("ghc.infra.tool_detector.shutil.which", return_value=None)
    def test_missing_raises_with_hint(self, _mock_which: object) -> None:
        with pytest.raises(EnvironmentError, match="ssh is not installed") as exc_info:
            require_tool("ssh")
        assert exc_info.value.hint is not None
        assert "Install ssh" in exc_info.value.hint


# ---------------------------------------------------------------------------
# Platform install commands
# ---------------------------------------------------------------------------

class TestPlatformInstallCommands:
    @patch("ghc.infra.tool_detector.platform.system", return_value="Linux")
    def test_linux_ssh_packages(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("ssh")
        assert "sudo apt install openssh-client" in cmds
        assert "sudo dnf install openssh-clients" in cmds

    @patch("ghc.infra.tool_detector.platform.system", return_value="Darwin")
    def test_darwin_git(self, _mock_sys: object) -> None:
        assert _platform_install_commands("git") == ("brew install git",)

    @patch("ghc.infra.tool_detector.platform.system", return_value="Windows")
    def test_windows_git(self, _mock_sys: object) -> None:
        assert _platform_install_commands("git") == ("winget install Git.Git",)

    def test_unknown_tool(self) -> None:
        (cmd,) = _platform_install_commands("frobnicate")
        assert "frobnicate" in cmd


class TestToolStatus:
    def test_frozen(self) -> None:
        status = ToolStatus(name="git", found=True, path=Path("/usr/bin/git"), install_commands=())
        with pytest.raises(AttributeError):
            status.found = False  # type: ignore[misc]
