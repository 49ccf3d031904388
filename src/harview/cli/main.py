"""harview CLI - inspect HAR captures in the browser.

Runs the local web viewer and offers a few terminal shortcuts for HAR files.
"""

import os
from pathlib import Path
from typing import Annotated

import click
import typer

import harview
from harview import console as hv_console
from harview.config import get_settings
from harview.logging import configure_logging, get_logger

# Configure logging early using env vars directly; -v/-vv and --log-format in
# main_callback() may reconfigure later.
configure_logging(
    level=os.environ.get("HARVIEW_LOG_LEVEL", "WARNING"),
    json_output=os.environ.get("HARVIEW_LOG_FORMAT", "console") == "json",
)

LOG = get_logger(__name__)

app = typer.Typer(
    name="harview",
    help="""
    🔍 harview - inspect HAR captures in the browser

    Upload a HAR file, browse and sort its requests, and export the
    domains it talks to as CSV.

    \b
    Quick start:
      harview serve                 Start the viewer and open the browser
      harview summary capture.har   Show a capture in the terminal
      harview domains capture.har   List the unique domains
      harview config                Show current configuration
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


HarFileArg = Annotated[
    Path,
    typer.Argument(
        help="Path to HAR file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]


@app.callback(invoke_without_command=True)
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v for info, -vv for debug)",
        ),
    ] = 0,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            click_type=click.Choice(["console", "json"]),
            help="Log output format: console (human-readable) or json (structured)",
        ),
    ] = None,
) -> None:
    """harview - inspect HAR captures in the browser."""
    settings = get_settings()
    json_output = (log_format or settings.log_format) == "json"

    if verbose >= 2:
        configure_logging(level="DEBUG", json_output=json_output)
    elif verbose >= 1:
        configure_logging(level="INFO", json_output=json_output)
    elif log_format is not None:
        configure_logging(level=settings.log_level, json_output=json_output)


@app.command("version")
def version() -> None:
    """Show harview version."""
    hv_console.out_console.print(f"[bold cyan]harview[/bold cyan] v{harview.__version__}")


@app.command("serve")
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (default: HARVIEW_HOST or 127.0.0.1)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            min=1,
            max=65535,
            help="Port to listen on (default: HARVIEW_PORT or 8081)",
        ),
    ] = None,
    open_browser: Annotated[
        bool | None,
        typer.Option(
            "--open/--no-open",
            help="Open the default browser once the server is up",
        ),
    ] = None,
) -> None:
    """Start the web viewer and serve until Ctrl+C.

    \b
    Examples:
        harview serve
        harview serve --port 9000 --no-open
    """
    from harview.server import ViewerServer, open_in_browser
    from harview.web import create_app

    settings = get_settings()
    server = ViewerServer(
        create_app(settings),
        host=host or settings.host,
        port=port or settings.port,
    )
    should_open = settings.open_browser if open_browser is None else open_browser

    try:
        server.start()
    except RuntimeError as exc:
        hv_console.error(str(exc))
        raise typer.Exit(1) from None

    hv_console.success(f"HAR Viewer running at {server.url}")
    if should_open:
        open_in_browser(server.url)
    hv_console.info("Press Ctrl+C to stop")

    try:
        while server.is_running:
            server.wait(0.5)
    except KeyboardInterrupt:
        pass
    finally:
        server.stop()
        hv_console.info("HAR Viewer stopped")


@app.command("summary")
def summary_cmd(
    har_file: HarFileArg,
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum entries to list (0 for all)"),
    ] = 50,
) -> None:
    """Show a HAR file's info, request counts and entries.

    \b
    Examples:
        harview summary capture.har
        harview summary capture.har -n 0
    """
    from harview.cli.har_commands import summary

    summary(har_file, limit=limit)


@app.command("domains")
def domains_cmd(
    har_file: HarFileArg,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write domains as CSV to this path"),
    ] = None,
    encoding: Annotated[
        str | None,
        typer.Option(
            "--encoding",
            "-e",
            help="CSV encoding (default: HARVIEW_CSV_ENCODING or gbk)",
        ),
    ] = None,
) -> None:
    """List the unique domains of a HAR file, in first-seen order.

    \b
    Examples:
        harview domains capture.har
        harview domains capture.har -o domains.csv
        harview domains capture.har -o domains.csv -e utf-8-sig
    """
    from harview.cli.har_commands import domains

    domains(har_file, output=output, encoding=encoding)


@app.command("config")
def config() -> None:
    """Show current harview configuration."""
    settings = get_settings()
    hv_console.out_console.print(
        hv_console.key_value_panel("⚙ Configuration", settings.as_display_dict())
    )


if __name__ == "__main__":
    app()
