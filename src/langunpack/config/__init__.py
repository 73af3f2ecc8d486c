"""Extraction configuration models and loaders."""

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
from .settings import clear_settings_cache, default_settings_path, load_settings

__all__ = [
    "DEFAULT_LANGUAGES",
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
