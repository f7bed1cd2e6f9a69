"""Shared models for discovery and generation data."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass(slots=True, frozen=True)
class DiscoveredFile:
    """A mockup module found on disk and its two relative projections."""

    absolute_path: Path
    root_relative_path: str
    output_relative_path: str


@dataclass(slots=True)
class LoaderManifest:
    """Discovered mockups for one generation run."""

    output_file: Path
    files: List[DiscoveredFile] = field(default_factory=list)

    @property
    def root_relative_paths(self) -> List[str]:
        return [item.root_relative_path for item in self.files]


@dataclass(slots=True)
class GenerationResult:
    """Outcome of a generation run."""

    output_file: Path
    file_count: int
    text: str


__all__ = ["DiscoveredFile", "LoaderManifest", "GenerationResult"]
