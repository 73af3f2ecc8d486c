"""Configuration loader wrapping the extraction schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    DEFAULT_LANGUAGES,
    CategorySpec,
    ConfigurationError,
    ExtractionSettings,
    FailurePolicy,
    IdentifierDerivation,
    KeyTransform,
    RowSource,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
SETTINGS_FILE = CONFIG_DIRECTORY / "extraction.yaml"
CONFIG_ENV = "LANGUNPACK_CONFIG"


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Configuration file {path} is not valid YAML: {error}") from error
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def default_settings_path() -> Path:
    """Return the settings file named by ``LANGUNPACK_CONFIG`` or the bundled default."""

    override = os.getenv(CONFIG_ENV, "").strip()
    return Path(override).expanduser() if override else SETTINGS_FILE


@lru_cache(maxsize=8)
def _load_settings_file(path: Path) -> ExtractionSettings:
    if not path.exists():
        raise FileNotFoundError(f"Extraction configuration not found: {path}")

    raw_settings = _load_yaml(path)

    try:
        return ExtractionSettings.model_validate(raw_settings)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed for {path}: {error}") from error


def load_settings(path: str | Path | None = None) -> ExtractionSettings:
    """Load and cache the extraction settings from ``path`` (or the default file)."""

    resolved = Path(path).expanduser().resolve() if path else default_settings_path().resolve()
    return _load_settings_file(resolved)


def clear_settings_cache() -> None:
    """Forget previously loaded settings files."""

    _load_settings_file.cache_clear()


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_ENV",
    "DEFAULT_LANGUAGES",
    "SETTINGS_FILE",
    "CategorySpec",
    "ConfigurationError",
    "ExtractionSettings",
    "FailurePolicy",
    "IdentifierDerivation",
    "KeyTransform",
    "RowSource",
    "clear_settings_cache",
    "default_settings_path",
    "load_settings",
]
