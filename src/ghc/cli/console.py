"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) keep working when Rich is not installed.
Messages go to stderr.  Only listings meant for pipes and redirection
(``ghc org list``) are written to stdout.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from ghc.exceptions import EnvironmentError

_MARKUP = re.compile(r"\[/?[a-z ]+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def escape(text: str) -> str:
    """Escape Rich markup in *text*; identity when Rich is unavailable."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


def strip_markup(text: str) -> str:
    """Drop simple ``[style]...[/style]`` tags for plain-text output."""
    return _MARKUP.sub("", text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*(strip_markup(o) if isinstance(o, str) else o for o in objects), file=sys.stderr)
            return
        rich_console.print(*objects)

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str | None = None,
        stdout: bool = False,
    ) -> None:
        """Render *rows* under *headers* as a Rich table or aligned text.

        The table goes to stderr unless *stdout* is true.
        """
        try:
            from rich.table import Table
        except ModuleNotFoundError:
            stream = sys.stdout if stdout else sys.stderr
            _print_plain_table(headers, rows, title=title, stream=stream)
            return

        table = Table(
            title=title,
            show_header=True,
            header_style="bold green underline",
            border_style="dim",
            box=None,
            padding=(0, 2),
        )
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        rich_console = get_rich_console(stderr=not stdout)
        rich_console.print()
        rich_console.print(table)
        rich_console.print()


def _print_plain_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    title: str | None = None,
    stream: TextIO,
) -> None:
    plain_rows = [[strip_markup(cell) for cell in row] for row in rows]
    widths = [
        max([len(header)] + [len(row[i]) for row in plain_rows])
        for i, header in enumerate(headers)
    ]
    print(file=stream)
    if title:
        print(title, file=stream)
    print("  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip(), file=stream)
    for row in plain_rows:
        print("  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip(), file=stream)
    print(file=stream)


console = _ConsoleProxy()
