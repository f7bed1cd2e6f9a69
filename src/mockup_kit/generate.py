"""High level generation routine."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.table import Table

from .config import ConfigOverrides, resolve_configuration
from .locator import locate_mockups
from .models import GenerationResult
from .template import generate_template

console = Console()


class OutputError(Exception):
    """Raised when the generated module cannot be written."""


def write_output(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` without ever leaving a partial file."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputError(f"Unable to create output directory {path.parent}: {exc}") from exc

    staging = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        with staging.open("w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(staging, path)
    except OSError as exc:
        staging.unlink(missing_ok=True)
        raise OutputError(f"Unable to write {path}: {exc}") from exc


def run_generate(
    overrides: ConfigOverrides | None,
    process_directory: Path,
    *,
    summary: bool = True,
) -> GenerationResult:
    """Resolve configuration, discover mockups and write the manifest module."""

    config = resolve_configuration(overrides, process_directory)
    manifest = locate_mockups(config, cwd=process_directory)
    text = generate_template(manifest)

    logger.info("Writing to {}", manifest.output_file)
    write_output(manifest.output_file, text)

    if summary:
        table = Table(title="Generation Summary")
        table.add_column("Mockups", justify="right")
        table.add_column("Output")
        table.add_row(str(len(manifest.files)), str(manifest.output_file))
        console.print(table)

    return GenerationResult(output_file=manifest.output_file, file_count=len(manifest.files), text=text)


__all__ = ["OutputError", "run_generate", "write_output"]
