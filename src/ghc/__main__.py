"""Allow ``python -m ghc`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m ghc`` behaves identically to the ``ghc`` console script.
"""

from __future__ import annotations

from ghc.cli.app import cli

if __name__ == "__main__":
    cli()
