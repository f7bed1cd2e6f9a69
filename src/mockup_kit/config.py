"""Configuration loading and resolution for mockup-kit."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PROJECT_CONFIG_FILE = "package.json"
CONFIG_SECTION = "mockups"


class ConfigOverrides(BaseModel):
    """One configuration layer. ``None`` means "not set at this layer"."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    search_dir: Optional[List[str]] = Field(default=None, alias="searchDir")
    pattern: Optional[str] = None
    output_file: Optional[str] = Field(default=None, alias="outputFile")
    ignore: Optional[List[str]] = None
    host: Optional[str] = None
    port: Optional[int] = None

    @field_validator("search_dir", "ignore", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return [str(value)]
        if isinstance(value, (list, tuple)):
            return [str(item) if isinstance(item, Path) else item for item in value]
        return value

    @field_validator("search_dir")
    @classmethod
    def _empty_search_dir_is_unset(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return value or None

    @field_validator("pattern", "output_file", "host", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, Path):
            value = str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


DEFAULTS = ConfigOverrides(
    search_dir=["./src/"],
    pattern="**/*.mockup.jsx",
    output_file="./src/mockups.js",
    ignore=[],
    host="127.0.0.1",
    port=1337,
)


class Configuration(BaseModel):
    """Fully resolved generation settings."""

    model_config = ConfigDict(frozen=True)

    search_dir: List[str] = Field(min_length=1)
    pattern: str
    output_file: str
    root_directory: Path
    ignore: List[str] = Field(default_factory=list)

    @property
    def output_path(self) -> Path:
        return Path(os.path.normpath(self.root_directory / self.output_file))


class ServerSettings(BaseModel):
    """Host and port the sync server binds to."""

    host: str
    port: int = Field(ge=1, le=65535)


class ConfigError(Exception):
    """Raised when the project configuration cannot be used."""


def find_up(name: str, start: Path) -> Path | None:
    """Return the nearest ``name`` in ``start`` or one of its ancestors."""

    directory = start.absolute()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / name
        if candidate.is_file():
            return candidate
    return None


def load_project_section(process_directory: Path) -> ConfigOverrides | None:
    """Read the ``config.mockups`` section of the nearest package.json."""

    package_json = find_up(PROJECT_CONFIG_FILE, process_directory)
    if package_json is None:
        logger.debug("No {} found above {}", PROJECT_CONFIG_FILE, process_directory)
        return None

    logger.debug("{} located at {}", PROJECT_CONFIG_FILE, package_json)
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to parse {package_json}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Unable to read {package_json}: {exc}") from exc

    config_block = data.get("config") if isinstance(data, dict) else None
    if not isinstance(config_block, dict) or CONFIG_SECTION not in config_block:
        logger.debug("{} has no '{}' configuration", package_json, CONFIG_SECTION)
        return None

    section = config_block[CONFIG_SECTION]
    if not isinstance(section, dict):
        raise ConfigError(f"'config.{CONFIG_SECTION}' in {package_json} must be an object")
    try:
        return ConfigOverrides.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {package_json}: {exc}") from exc


def merge_layers(*layers: ConfigOverrides | None) -> Dict[str, Any]:
    """Merge layers lowest precedence first; unset fields never clobber."""

    merged: Dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for name in ConfigOverrides.model_fields:
            value = getattr(layer, name)
            if value is not None:
                merged[name] = value
    return merged


def resolve_configuration(
    overrides: ConfigOverrides | None, process_directory: Path
) -> Configuration:
    """Resolve defaults < package.json section < run-time overrides."""

    project = load_project_section(process_directory)
    merged = merge_layers(DEFAULTS, project, overrides)
    configuration = Configuration(
        search_dir=merged["search_dir"],
        pattern=merged["pattern"],
        output_file=merged["output_file"],
        ignore=merged["ignore"],
        root_directory=process_directory.absolute(),
    )
    logger.debug("Using configuration: {}", configuration)
    return configuration


def resolve_server_settings(
    overrides: ConfigOverrides | None, process_directory: Path
) -> ServerSettings:
    project = load_project_section(process_directory)
    merged = merge_layers(DEFAULTS, project, overrides)
    try:
        return ServerSettings(host=merged["host"], port=merged["port"])
    except ValidationError as exc:
        raise ConfigError(f"Invalid server settings: {exc}") from exc


__all__ = [
    "ConfigError",
    "ConfigOverrides",
    "Configuration",
    "ServerSettings",
    "find_up",
    "load_project_section",
    "resolve_configuration",
    "resolve_server_settings",
]
