"""CLI application entry point and command routing for ghc.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ghc.exceptions.GhcError`, ``OSError``,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Commands
--------
* ``ghc organization|org set ORG_NAME SSH_KEY_PATH [-D]``
* ``ghc organization|org list|ls``
* ``ghc organization|org remove|rm ORG_NAME``
* ``ghc clone REPO_URL``
* ``ghc doctor``
"""

from __future__ import annotations

import argparse
import logging
import sys

from ghc.cli import exit_codes
from ghc.cli.console import console, escape
from ghc.config import GhcSettings, load_settings
from ghc.exceptions import GhcError
from ghc.version import __build_date__, __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its command tree."""
    parser = argparse.ArgumentParser(
        prog="ghc",
        description="Clone GitHub repositories with SSH keys for different organizations.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}\nBuild date: {__build_date__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr.",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    org = commands.add_parser(
        "organization",
        aliases=["org"],
        help="Manage GitHub organizations.",
    )
    org.set_defaults(print_org_help=org.print_help)
    org_commands = org.add_subparsers(dest="org_command", metavar="<subcommand>")

    org_set = org_commands.add_parser(
        "set", help="Set the SSH key for the specified organization.",
    )
    org_set.add_argument("org_name", metavar="ORG_NAME")
    org_set.add_argument("ssh_key_path", metavar="SSH_KEY_PATH")
    org_set.add_argument(
        "-D",
        "--default",
        action="store_true",
        help="Set this organization as the default.",
    )

    org_commands.add_parser(
        "list", aliases=["ls"], help="List all organizations in the configuration.",
    )

    org_remove = org_commands.add_parser(
        "remove", aliases=["rm"], help="Remove an organization from the configuration.",
    )
    org_remove.add_argument("org_name", metavar="ORG_NAME")

    clone = commands.add_parser(
        "clone", help="Clone a GitHub repository using the organization's SSH key.",
    )
    clone.add_argument("repo_url", metavar="REPO_URL")

    commands.add_parser("doctor", help="Check the environment and the registry.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_clone(settings: GhcSettings, repo_url: str) -> int:
    """Wire the clone pipeline to its filesystem and subprocess adapters."""
    from ghc.core.clone_service import CloneService
    from ghc.infra.command_runner import SubprocessCommandRunner
    from ghc.infra.config_store import JsonConfigStore
    from ghc.infra.ssh_config_writer import FileSSHConfigEmitter

    service = CloneService(
        JsonConfigStore(settings.resolved_config_path()),
        FileSSHConfigEmitter(),
        SubprocessCommandRunner(),
        ssh_host=settings.ssh_host,
        ssh_config_dir=settings.resolved_ssh_config_dir(),
        retention=settings.retention(),
    )
    console.print(f"[bold]Cloning[/bold] {escape(repo_url)}")
    service.clone(repo_url)
    return exit_codes.SUCCESS


def _dispatch(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    from ghc.cli import organizations
    from ghc.cli.doctor import run_doctor
    from ghc.cli.logging_setup import configure_logging

    settings = load_settings()
    configure_logging(logging.DEBUG if args.verbose else settings.log_level)

    if args.command in ("organization", "org"):
        if args.org_command == "set":
            return organizations.set_organization(
                settings, args.org_name, args.ssh_key_path, is_default=args.default,
            )
        if args.org_command in ("list", "ls"):
            return organizations.list_organizations(settings)
        if args.org_command in ("remove", "rm"):
            return organizations.remove_organization(settings, args.org_name)
        args.print_org_help()
        return exit_codes.SUCCESS
    if args.command == "clone":
        return _handle_clone(settings, args.repo_url)
    if args.command == "doctor":
        return run_doctor(settings)
    parser.print_help()
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ghc CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    return _dispatch(args, parser)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _render_error(exc: GhcError) -> None:
    prefix = f"{exc.stage}: " if exc.stage else ""
    console.print(f"[bold red]Error:[/bold red] {escape(prefix + str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a
    raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GhcError as exc:
        logger.debug("Command failed", exc_info=exc)
        _render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except OSError as exc:
        logger.debug("Command failed", exc_info=exc)
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
