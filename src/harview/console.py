"""Centralized terminal output for harview.

Status and progress go to stderr, data (tables, domain lists) to stdout, so
``harview domains capture.har > domains.txt`` stays clean.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

# stderr console for status messages
err_console = Console(stderr=True)

# stdout console for data output
out_console = Console()


def success(message: str, *, console: Console | None = None) -> None:
    """Print a success message (green checkmark) to stderr."""
    c = console or err_console
    c.print(f"[green]  ✓ {message}[/green]")


def error(message: str, *, console: Console | None = None) -> None:
    """Print an error message (red X) to stderr."""
    c = console or err_console
    c.print(f"[red]  ✗ {message}[/red]")


def warn(message: str, *, console: Console | None = None) -> None:
    """Print a warning message (yellow) to stderr."""
    c = console or err_console
    c.print(f"[yellow]  ⚠ {message}[/yellow]")


def info(message: str, *, console: Console | None = None) -> None:
    """Print an info message (dim) to stderr."""
    c = console or err_console
    c.print(f"[dim]  {message}[/dim]")


def key_value_panel(title: str, rows: dict[str, object]) -> Panel:
    """Build an aligned ``label: value`` panel, e.g. for settings or file info."""
    width = max((len(label) for label in rows), default=0) + 1
    body = "\n".join(
        f"[dim]{label + ':':<{width}}[/dim] {escape(str(value))}" for label, value in rows.items()
    )
    return Panel(body, title=title, border_style="cyan", expand=False)
