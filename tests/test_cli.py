"""Tests for the command-line surface (cli/app.py, cli/organizations.py).

Every test runs against a temporary HOME via the ``ghc_env`` fixture;
git is never executed.

Coverage:
* ``org set`` / ``org list`` / ``org remove`` against the real store.
* ``clone`` wiring with a patched command runner.
* The ``cli()`` error boundary and its exit codes.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from ghc.cli import exit_codes
from ghc.cli.app import cli, main
from ghc.core.models import CloneCommand
from ghc.exceptions import (
    CannotRemoveDefaultError,
    ConfigNotFoundError,
    ConfigParseError,
    EmptyOrganizationNameError,
    EmptySSHKeyPathError,
    InvalidOrganizationNameError,
    NoOrganizationsError,
    OrganizationNotFoundError,
)


def _config(home: Path) -> dict:
    path = home / ".config" / "ghc" / "ghc.conf"
    return json.loads(path.read_text(encoding="utf-8"))


def _run_cli(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["ghc", *argv])
    with pytest.raises(SystemExit) as exc_info:
        cli()
    code = exc_info.value.code
    assert isinstance(code, int)
    return code


# ---------------------------------------------------------------------------
# org set
# ---------------------------------------------------------------------------

class TestOrgSet:
    def test_creates_config(self, ghc_env: Path) -> None:
        assert main(["org", "set", "acme", "/keys/acme"]) == exit_codes.SUCCESS
        assert _config(ghc_env) == {
            "organizations": [
                {"name": "acme", "ssh_key_path": "/keys/acme", "is_default": True},
            ]
        }

    def test_default_flag_moves_default(self, ghc_env: Path) -> None:
        main(["org", "set", "acme", "/keys/acme"])
        main(["organization", "set", "personal", "/keys/me", "--default"])
        orgs = _config(ghc_env)["organizations"]
        assert [(o["name"], o["is_default"]) for o in orgs] == [
            ("acme", False),
            ("personal", True),
        ]

    def test_short_default_flag(self, ghc_env: Path) -> None:
        main(["org", "set", "acme", "/keys/acme"])
        main(["org", "set", "personal", "/keys/me", "-D"])
        assert _config(ghc_env)["organizations"][1]["is_default"] is True

    def test_expands_key_path(self, ghc_env: Path) -> None:
        main(["org", "set", "acme", "~/.ssh/id_acme"])
        key = _config(ghc_env)["organizations"][0]["ssh_key_path"]
        assert key == str(ghc_env / ".ssh" / "id_acme")

    def test_invalid_name_rejected_before_writing(self, ghc_env: Path) -> None:
        with pytest.raises(InvalidOrganizationNameError):
            main(["org", "set", "Acme_Corp", "/keys/acme"])
        assert not (ghc_env / ".config" / "ghc" / "ghc.conf").exists()

    def test_empty_arguments(self, ghc_env: Path) -> None:
        with pytest.raises(EmptyOrganizationNameError):
            main(["org", "set", "", "/keys/acme"])
        with pytest.raises(EmptySSHKeyPathError):
            main(["org", "set", "acme", ""])

    def test_wrong_argument_count(self, ghc_env: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["org", "set", "acme"])
        assert exc_info.value.code == 2

    def test_corrupt_config_is_not_overwritten(self, ghc_env: Path) -> None:
        path = ghc_env / ".config" / "ghc" / "ghc.conf"
        path.parent.mkdir(parents=True)
        path.write_text("not json", encoding="utf-8")
        with pytest.raises(ConfigParseError):
            main(["org", "set", "acme", "/keys/acme"])
        assert path.read_text(encoding="utf-8") == "not json"


# ---------------------------------------------------------------------------
# org list
# ---------------------------------------------------------------------------

class TestOrgList:
    def test_lists_in_order(self, ghc_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["org", "set", "acme", "/k/a"])
        main(["org", "set", "personal", "/k/p"])
        capsys.readouterr()

        assert main(["org", "ls"]) == exit_codes.SUCCESS
        captured = capsys.readouterr()
        out = captured.out
        assert "Org Name" in out
        assert "Default" in out
        assert out.index("acme") < out.index("personal")
        assert "*" in out
        assert "Org Name" not in captured.err

    def test_missing_config(self, ghc_env: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            main(["org", "list"])

    def test_empty_registry(self, ghc_env: Path) -> None:
        main(["org", "set", "acme", "/k/a"])
        main(["org", "rm", "acme"])
        with pytest.raises(NoOrganizationsError):
            main(["org", "list"])


# ---------------------------------------------------------------------------
# org remove
# ---------------------------------------------------------------------------

class TestOrgRemove:
    def test_removal_sequence(self, ghc_env: Path) -> None:
        main(["org", "set", "org1", "/k/a", "--default"])
        main(["org", "set", "org2", "/k/b"])

        with pytest.raises(CannotRemoveDefaultError):
            main(["org", "remove", "org1"])

        assert main(["org", "rm", "org2"]) == exit_codes.SUCCESS
        assert _config(ghc_env)["organizations"] == [
            {"name": "org1", "ssh_key_path": "/k/a", "is_default": True},
        ]

        assert main(["org", "rm", "org1"]) == exit_codes.SUCCESS
        assert _config(ghc_env) == {"organizations": []}

    def test_unknown(self, ghc_env: Path) -> None:
        main(["org", "set", "acme", "/k/a"])
        with pytest.raises(OrganizationNotFoundError):
            main(["org", "rm", "nope"])

    def test_requires_existing_config(self, ghc_env: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            main(["org", "rm", "acme"])


# ---------------------------------------------------------------------------
# clone
# ---------------------------------------------------------------------------

class TestClone:
    def test_routes_to_org_key(
        self, ghc_env: Path, make_key: Callable[..., str],
    ) -> None:
        key = make_key("acme")
        main(["org", "set", "acme", key])

        with patch("ghc.infra.command_runner.SubprocessCommandRunner.run") as mock_run:
            assert main(["clone", "git@github.com:acme/widgets.git"]) == exit_codes.SUCCESS

        (command,), _ = mock_run.call_args
        assert isinstance(command, CloneCommand)
        assert command.repo_url == "git@github.com:acme/widgets.git"
        fragment = Path(command.ssh_config_path)
        assert fragment.parent == ghc_env / ".config" / "ghc" / "ssh_configs"
        assert f"IdentityFile {key}" in fragment.read_text(encoding="utf-8")

    def test_custom_host_from_environment(
        self, ghc_env: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("GHC_SSH_HOST", "ghe.example.com")
        main(["org", "set", "team", "/k/team"])

        with patch("ghc.infra.command_runner.SubprocessCommandRunner.run") as mock_run:
            main(["clone", "git@ghe.example.com:team/app.git"])

        (command,), _ = mock_run.call_args
        assert Path(command.ssh_config_path).read_text(encoding="utf-8").startswith(
            "Host ghe.example.com\n"
        )


# ---------------------------------------------------------------------------
# Routing and error boundary
# ---------------------------------------------------------------------------

class TestRouting:
    def test_no_args_prints_help(self) -> None:
        assert main([]) == exit_codes.SUCCESS

    def test_org_without_subcommand_prints_help(self, ghc_env: Path) -> None:
        assert main(["org"]) == exit_codes.SUCCESS

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert out.startswith("ghc ")
        assert "Build date:" in out

    def test_unknown_command(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2


class TestErrorBoundary:
    def test_success_exit(self, ghc_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        assert _run_cli(monkeypatch, "org", "set", "acme", "/k/a") == exit_codes.SUCCESS

    def test_known_error_shows_message_and_hint(
        self,
        ghc_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert _run_cli(monkeypatch, "org", "rm", "acme") == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "config file not found" in err
        assert "Hint:" in err

    def test_undecodable_config_is_a_known_error(
        self,
        ghc_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = ghc_env / ".config" / "ghc" / "ghc.conf"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe garbage")

        assert _run_cli(monkeypatch, "org", "ls") == exit_codes.GENERAL_ERROR
        err = " ".join(capsys.readouterr().err.split())
        assert "not valid UTF-8" in err
        assert "Unexpected error" not in err

    def test_clone_error_names_stage(
        self,
        ghc_env: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _run_cli(monkeypatch, "org", "set", "acme", "/k/a")
        capsys.readouterr()

        code = _run_cli(monkeypatch, "clone", "git@github.com:nope/x.git")

        assert code == exit_codes.GENERAL_ERROR
        assert "resolve key: organization not found: nope" in capsys.readouterr().err

    def test_git_failure(
        self,
        ghc_env: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        from ghc.exceptions import ExternalCommandError

        _run_cli(monkeypatch, "org", "set", "acme", "/k/a")
        with patch(
            "ghc.infra.command_runner.SubprocessCommandRunner.run",
            side_effect=ExternalCommandError("git clone failed", returncode=128),
        ):
            code = _run_cli(monkeypatch, "clone", "git@github.com:acme/x.git")
        assert code == exit_codes.GENERAL_ERROR

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with patch("ghc.cli.app.main", side_effect=KeyboardInterrupt):
            assert _run_cli(monkeypatch) == exit_codes.KEYBOARD_INTERRUPT

    def test_os_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        with patch("ghc.cli.app.main", side_effect=PermissionError(13, "Permission denied")):
            assert _run_cli(monkeypatch) == exit_codes.GENERAL_ERROR

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with patch("ghc.cli.app.main", side_effect=RuntimeError("kaboom")):
            assert _run_cli(monkeypatch) == exit_codes.UNEXPECTED_ERROR
        assert "Unexpected error" in capsys.readouterr().err
