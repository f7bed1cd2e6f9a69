"""Rendering of the generated mockup manifest module."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from .formatting import FormatOptions, quote_string, resolve_format_options
from .models import LoaderManifest

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
MANIFEST_TEMPLATE = "mockups.js.j2"


@dataclass(slots=True, frozen=True)
class ManifestEntry:
    """One ``key: require(target)`` pair of the generated module."""

    key: str
    target: str


def _environment() -> Environment:
    loader = FileSystemLoader(str(TEMPLATE_DIR))
    return Environment(loader=loader, autoescape=False, trim_blocks=True, lstrip_blocks=True)


def compose_entries(manifest: LoaderManifest) -> List[ManifestEntry]:
    """Pair both projections of every file, sorted by key."""

    entries = [
        ManifestEntry(key=item.root_relative_path, target=item.output_relative_path)
        for item in manifest.files
    ]
    return sorted(entries, key=lambda entry: entry.key)


def render_module(entries: List[ManifestEntry], options: FormatOptions) -> str:
    template = _environment().get_template(MANIFEST_TEMPLATE)
    text = template.render(
        entries=[
            {"key": quote_string(entry.key, options), "target": quote_string(entry.target, options)}
            for entry in entries
        ],
        indent=options.indent,
        semi=";" if options.semi else "",
        trailing_comma=options.trailing_comma != "none",
    )
    if options.newline != "\n":
        text = text.replace("\n", options.newline)
    return text


def generate_template(manifest: LoaderManifest, *, search_from: Path | None = None) -> str:
    """Produce the manifest module text for ``manifest``.

    Formatter options are looked up from ``search_from``, defaulting to the
    directory the module will be written to.
    """

    entries = compose_entries(manifest)
    options = resolve_format_options(search_from or manifest.output_file.parent)
    return render_module(entries, options)


__all__ = ["ManifestEntry", "compose_entries", "generate_template", "render_module"]
