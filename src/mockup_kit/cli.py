"""Typer-based CLI for mockup-kit."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console

from .config import ConfigError, ConfigOverrides, resolve_server_settings
from .generate import OutputError, run_generate
from .server import run_server

app = typer.Typer(help="Generate mockup manifests and run the mockup sync server.")
console = Console()
err_console = Console(stderr=True)


def _sink(message) -> None:
    err_console.print(message, end="", markup=False, highlight=False)


def _configure_logging(level: str | None) -> None:
    logger.remove()
    if level is not None:
        logger.add(_sink, level=level, format="{level: <8} {message}")


def _log_level(debug: bool, silent: bool) -> str | None:
    if silent:
        return None
    return "DEBUG" if debug else "INFO"


def _start_server(overrides: ConfigOverrides | None, level: str | None) -> None:
    cwd = Path.cwd()
    try:
        settings = resolve_server_settings(overrides, cwd)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=4)
    run_server(
        settings.host,
        settings.port,
        project_root=cwd,
        log_level=(level or "critical").lower(),
    )


@app.command()
def generate(
    search_dir: Optional[List[str]] = typer.Option(
        None,
        "--search-dir",
        help="Directory, relative to the project root, to search for mockups. Repeatable.",
    ),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", help="Glob matched inside each search directory, e.g. '**/*.mockup.tsx'."
    ),
    output_file: Optional[str] = typer.Option(None, "--output-file", help="Path to the generated module."),
    start_server: bool = typer.Option(False, "--start-server", help="Start the sync server afterwards."),
    debug: bool = typer.Option(False, "--debug", help="Log debug output."),
    silent: bool = typer.Option(False, "--silent", help="Silence all logging."),
) -> None:
    """Generate the mockups module."""

    level = _log_level(debug, silent)
    _configure_logging(level)
    overrides = ConfigOverrides(search_dir=search_dir, pattern=pattern, output_file=output_file)
    try:
        result = run_generate(overrides, Path.cwd(), summary=not silent)
    except ConfigError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=4)
    except OutputError as exc:
        err_console.print(f"[red]Failed to write output:[/red] {exc}")
        raise typer.Exit(code=3)

    if not silent:
        console.print(f"[green]Wrote {result.file_count} mockup(s) to {result.output_file}[/green]")
    if start_server:
        _start_server(None, level)


@app.command()
def server(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Hostname to bind. [default: 127.0.0.1]"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on. [default: 1337]"),
    debug: bool = typer.Option(False, "--debug", help="Log debug output."),
    silent: bool = typer.Option(False, "--silent", help="Silence all logging."),
) -> None:
    """Start the sync server."""

    level = _log_level(debug, silent)
    _configure_logging(level)
    _start_server(ConfigOverrides(host=host, port=port), level)


if __name__ == "__main__":
    app()
