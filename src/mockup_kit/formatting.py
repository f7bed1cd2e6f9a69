"""Formatter options applied to the generated manifest module.

Options are read from the project's Prettier configuration so the generated file
matches the code style of the surrounding project. Only options that affect a
flat object literal of ``require`` calls are honoured. Anything that prevents the
options from being used (unsupported file type, parse error, invalid values)
falls back to the baseline options with a warning.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Literal

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

_RC_FILES = (
    ".prettierrc",
    ".prettierrc.json",
    ".prettierrc.yaml",
    ".prettierrc.yml",
    ".prettierrc.toml",
)
_UNSUPPORTED_FILES = (
    ".prettierrc.json5",
    ".prettierrc.js",
    ".prettierrc.cjs",
    ".prettierrc.mjs",
    ".prettierrc.ts",
    "prettier.config.js",
    "prettier.config.cjs",
    "prettier.config.mjs",
    "prettier.config.ts",
)


class FormatOptions(BaseModel):
    """Prettier options relevant to the manifest module."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    single_quote: bool = Field(default=False, alias="singleQuote")
    semi: bool = True
    tab_width: int = Field(default=2, ge=0, alias="tabWidth")
    use_tabs: bool = Field(default=False, alias="useTabs")
    trailing_comma: Literal["all", "es5", "none"] = Field(default="all", alias="trailingComma")
    end_of_line: Literal["lf", "crlf", "cr", "auto"] = Field(default="lf", alias="endOfLine")

    @property
    def indent(self) -> str:
        return "\t" if self.use_tabs else " " * self.tab_width

    @property
    def quote(self) -> str:
        return "'" if self.single_quote else '"'

    @property
    def newline(self) -> str:
        return {"crlf": "\r\n", "cr": "\r"}.get(self.end_of_line, "\n")


BASELINE = FormatOptions()


class FormatConfigError(Exception):
    """Raised when formatter configuration exists but cannot be used."""


def _has_prettier_key(package_json: Path) -> bool:
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FormatConfigError(f"Failed to parse {package_json}: {exc}") from exc
    return isinstance(data, dict) and "prettier" in data


def find_format_config(start: Path) -> Path | None:
    """Return the nearest formatter configuration file at or above ``start``."""

    directory = start.absolute()
    for candidate_dir in (directory, *directory.parents):
        package_json = candidate_dir / "package.json"
        if package_json.is_file() and _has_prettier_key(package_json):
            return package_json
        for name in _RC_FILES + _UNSUPPORTED_FILES:
            candidate = candidate_dir / name
            if candidate.is_file():
                return candidate
    return None


def _parse(path: Path, text: str) -> Any:
    if path.name == "package.json":
        return json.loads(text).get("prettier")
    if path.suffix == ".json":
        return json.loads(text)
    if path.suffix == ".toml":
        return tomllib.loads(text)
    if path.name == ".prettierrc":
        # JSON or YAML; tab-indented JSON is not valid YAML
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass
    return yaml.safe_load(text)


def load_format_options(path: Path) -> FormatOptions:
    """Load the options explicitly set in ``path``."""

    if path.name in _UNSUPPORTED_FILES:
        raise FormatConfigError(f"{path.name} cannot be evaluated; use a JSON, YAML or TOML file")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FormatConfigError(f"Unable to read {path}: {exc}") from exc
    try:
        data = _parse(path, text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise FormatConfigError(f"Failed to parse {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FormatConfigError(f"{path} does not contain an options object")
    try:
        return FormatOptions.model_validate(data)
    except ValidationError as exc:
        raise FormatConfigError(f"Invalid formatter options in {path}: {exc}") from exc


def merge_options(project: FormatOptions) -> FormatOptions:
    """Overlay options explicitly set by the project onto the baseline."""

    return BASELINE.model_copy(update=project.model_dump(exclude_unset=True))


def resolve_format_options(start: Path) -> FormatOptions:
    """Find and merge project formatter options, never raising."""

    try:
        config_file = find_format_config(start)
        if config_file is None:
            logger.info("Formatter configuration not detected, using default formatting.")
            return BASELINE
        logger.info("Using formatter configuration detected at {}", config_file)
        return merge_options(load_format_options(config_file))
    except (FormatConfigError, OSError) as exc:
        logger.warning("Falling back to default formatting [{}]", exc)
        return BASELINE


def quote_string(value: str, options: FormatOptions) -> str:
    quote = options.quote
    escaped = value.replace("\\", "\\\\").replace(quote, f"\\{quote}")
    return f"{quote}{escaped}{quote}"


__all__ = [
    "BASELINE",
    "FormatConfigError",
    "FormatOptions",
    "find_format_config",
    "load_format_options",
    "merge_options",
    "quote_string",
    "resolve_format_options",
]
