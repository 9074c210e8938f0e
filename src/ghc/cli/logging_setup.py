"""Logging configuration for the ``ghc`` logger tree.

Log records are diagnostics for ``--verbose`` runs; user-facing output
goes through :mod:`ghc.cli.console` instead.
"""

from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "ghc-cli"


def configure_logging(level: int | str) -> None:
    """Attach one stderr handler to the ``ghc`` logger at *level*.

    Uses :class:`rich.logging.RichHandler` when Rich is installed and a
    plain :class:`logging.StreamHandler` otherwise.  Calling this again
    replaces the previous handler.
    """
    root = logging.getLogger("ghc")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        from ghc.cli.console import get_rich_console

        handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
