"""CLI entry point for shell-insights."""

import logging
from pathlib import Path

import click
import uvicorn

from .catalog import TOOL_CATALOG
from .config import get_log_path
from .core import SUPPORTED_SHELLS
from .export import snapshot_to_json, snapshot_to_markdown
from .pipeline import run_analysis
from .probe import probe_tools
from .shells import get_supported_shells

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(log_file: Path, verbose: bool = False) -> None:
    """Send package logs to ``log_file``.

    Raises:
        click.ClickException: the log file cannot be opened.
    """
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Cannot open log file {log_file}: {e}")

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger = logging.getLogger("shell_insights")
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@click.group()
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Diagnostic log file (default: $SHELL_INSIGHTS_LOG or ./shell_insights.log).")
@click.option("-v", "--verbose", is_flag=True, help="Log probe failures and skipped config lines.")
def main(log_file: Path | None, verbose: bool):
    """Profile your work from shell history and shell configuration."""
    setup_logging(log_file or get_log_path(), verbose)


@main.command()
@click.option("--format", "fmt", type=click.Choice(["md", "json"]), default="md", help="Output format.")
@click.option("--shell", "shells", multiple=True, type=click.Choice(SUPPORTED_SHELLS),
              help="Only analyze these shells (repeatable).")
@click.option("--full-command", is_flag=True,
              help="Keep whole command lines instead of only the last token.")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per tool probe.")
@click.option("--commands", is_flag=True, help="Include every command record in JSON output.")
def analyze(fmt: str, shells: tuple, full_command: bool, timeout: float | None, commands: bool):
    """Analyze shell history and print a report."""
    snapshot = run_analysis(
        shells=get_supported_shells(shells) if shells else None,
        full_command=full_command or None,
        probe_timeout=timeout,
    )

    if fmt == "json":
        click.echo(snapshot_to_json(snapshot, include_commands=commands))
    else:
        click.echo(snapshot_to_markdown(snapshot))


@main.command()
@click.option("--all", "show_all", is_flag=True, help="Also list tools that are not installed.")
@click.option("--timeout", type=float, default=None, help="Seconds allowed per tool probe.")
def tools(show_all: bool, timeout: float | None):
    """List catalog tools detected on this machine."""
    presence = probe_tools(TOOL_CATALOG, timeout=timeout)
    for spec in TOOL_CATALOG:
        installed = presence.get(spec.name, False)
        if installed or show_all:
            mark = "✓" if installed else "✗"
            click.echo(f"{mark} {spec.name:<12} {spec.kind}")


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
def serve(port: int, host: str):
    """Start the JSON API."""
    click.echo(f"Starting shell-insights on http://{host}:{port}")
    uvicorn.run("shell_insights.server:app", host=host, port=port, reload=False)
