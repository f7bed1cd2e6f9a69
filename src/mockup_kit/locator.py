"""Discovery of mockup modules inside a project tree."""

from __future__ import annotations

import glob
import os
from pathlib import Path
from typing import Dict, Iterable, List

from loguru import logger
from pathspec import PathSpec

from .config import Configuration
from .models import DiscoveredFile, LoaderManifest


def compile_ignore_patterns(patterns: Iterable[str]) -> PathSpec | None:
    """Compile gitignore-style patterns, or ``None`` when there are none."""

    lines = [pattern for pattern in patterns if pattern.strip()]
    if not lines:
        return None
    return PathSpec.from_lines("gitwildmatch", lines)


def is_ignored(path: Path, spec: PathSpec | None, root: Path) -> bool:
    """Determine if path should be ignored."""

    if spec is None:
        return False
    rel = os.path.relpath(path, root)
    if rel.startswith(os.pardir):
        return False
    return spec.match_file(Path(rel).as_posix())


def to_posix(path: str) -> str:
    return Path(path).as_posix()


def strip_extension(path: str) -> str:
    stem, _ = os.path.splitext(path)
    return stem


def import_specifier(relative: str) -> str:
    """Make a relative path usable as a module reference."""

    if relative.startswith("./") or relative.startswith("../"):
        return relative
    return f"./{relative}"


def lookup_patterns(config: Configuration) -> List[str]:
    """One absolute glob expression per search directory."""

    expressions: List[str] = []
    for search_dir in config.search_dir:
        directory = os.path.normpath(os.path.join(config.root_directory, search_dir))
        expressions.append(os.path.join(glob.escape(directory), config.pattern))
    return expressions


def _gather_files(config: Configuration, exclude: Path) -> List[Path]:
    spec = compile_ignore_patterns(config.ignore)
    found: Dict[str, Path] = {}
    for expression in lookup_patterns(config):
        matches = glob.glob(expression, recursive=True)
        logger.debug("{} matched {} path(s)", expression, len(matches))
        for match in matches:
            absolute = os.path.normpath(os.path.abspath(match))
            if absolute in found or not os.path.isfile(absolute):
                continue
            path = Path(absolute)
            if path == exclude:
                logger.debug("Skipping generated file {}", path)
                continue
            if is_ignored(path, spec, config.root_directory):
                logger.debug("Ignoring {}", path)
                continue
            found[absolute] = path
    return list(found.values())


def locate_mockups(config: Configuration, *, cwd: Path | None = None) -> LoaderManifest:
    """Expand the configured search directories into a de-duplicated manifest."""

    project_root = (cwd or Path.cwd()).absolute()
    output_file = config.output_path
    output_dir = output_file.parent

    files: List[DiscoveredFile] = []
    for path in _gather_files(config, exclude=output_file):
        output_relative = strip_extension(to_posix(os.path.relpath(path, output_dir)))
        files.append(
            DiscoveredFile(
                absolute_path=path,
                root_relative_path=to_posix(os.path.relpath(path, project_root)),
                output_relative_path=import_specifier(output_relative),
            )
        )

    logger.info("Found {} mockup file(s)", len(files))
    return LoaderManifest(output_file=output_file, files=files)


__all__ = [
    "compile_ignore_patterns",
    "import_specifier",
    "is_ignored",
    "locate_mockups",
    "lookup_patterns",
    "strip_extension",
    "to_posix",
]
