"""Single source of the package version."""

from __future__ import annotations

__version__: str = "0.1.0"

__build_date__: str = "unknown"
"""Overwritten by release tooling; ``unknown`` for source checkouts."""
