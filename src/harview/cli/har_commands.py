"""CLI commands that inspect a HAR file without starting the web UI."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from harview import console as hv_console
from harview.config import get_settings
from harview.exceptions import MalformedDocumentError
from harview.export import write_domains_csv
from harview.har import (
    HARDocument,
    count_by_method,
    extract_domains,
    format_size,
    parse_har_file,
    status_class,
)
from harview.logging import get_logger

LOG = get_logger(__name__)

STATUS_STYLES = {
    "info": "dim",
    "success": "green",
    "redirect": "yellow",
    "client-error": "red",
    "server-error": "bold red",
    "unknown": "dim",
}


def _load(har_file: Path) -> HARDocument:
    """Parse ``har_file`` or exit with a readable error."""
    try:
        return parse_har_file(har_file)
    except MalformedDocumentError as exc:
        hv_console.error(f"Failed to parse HAR file: {exc}")
        raise typer.Exit(1) from None
    except FileNotFoundError:
        hv_console.error(f"File not found: {har_file}")
        raise typer.Exit(1) from None


def summary(har_file: Path, limit: int = 50) -> None:
    """Print file info, method counts and the first ``limit`` entries."""
    document = _load(har_file)
    counts = count_by_method(document)
    creator = " ".join(p for p in (document.creator.name, document.creator.version) if p)

    hv_console.out_console.print(
        hv_console.key_value_panel(
            "HAR file",
            {
                "File": har_file.name,
                "Size": format_size(har_file.stat().st_size),
                "Version": document.version or "-",
                "Creator": creator or "-",
                "Requests": f"GET {counts.get}  POST {counts.post}  OTHER {counts.other}",
                "Domains": len(extract_domains(document)),
            },
        )
    )

    if not document.entries:
        hv_console.warn("No HTTP entries found in HAR file")
        return

    table = Table(
        title=f"Entries ({len(document.entries)})",
        title_style="bold",
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Time (ms)", justify="right")
    table.add_column("URL", style="white", overflow="fold")

    shown = document.entries[:limit] if limit > 0 else document.entries
    for idx, entry in enumerate(shown, 1):
        status = entry.response.status
        style = STATUS_STYLES[status_class(status)]
        table.add_row(
            str(idx),
            escape(entry.request.method),
            f"[{style}]{status}[/{style}]",
            f"{entry.time_ms:.2f}",
            escape(entry.request.url),
        )

    if len(shown) < len(document.entries):
        table.add_row("...", "", "", "", f"(+{len(document.entries) - len(shown)} more)")

    hv_console.out_console.print(table)


def domains(har_file: Path, output: Path | None = None, encoding: str | None = None) -> None:
    """Print the unique domains of ``har_file`` or write them as CSV."""
    document = _load(har_file)
    found = extract_domains(document)

    if output is None:
        for domain in found:
            hv_console.out_console.print(domain, highlight=False, markup=False, soft_wrap=True)
        hv_console.info(f"{len(found)} unique domains")
        return

    settings = get_settings()
    target_encoding = encoding or settings.csv_encoding
    try:
        path, rows = write_domains_csv(
            found,
            output,
            header=settings.csv_header,
            encoding=target_encoding,
        )
    except LookupError:
        hv_console.error(f"Unknown encoding: {target_encoding}")
        raise typer.Exit(1) from None
    except OSError as exc:
        hv_console.error(f"Failed to write CSV: {exc}")
        raise typer.Exit(1) from None

    LOG.info("domains_exported", path=path, domains=rows)
    hv_console.success(f"Wrote {rows} domains to {path}")
