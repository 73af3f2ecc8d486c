"""Exceptions raised while extracting catalog text."""

from __future__ import annotations

from pathlib import Path


class ExtractionError(RuntimeError):
    """Base class for failures that stop a category or (category, language) pair."""


class CatalogUnavailable(ExtractionError):
    """Raised when a message catalog file cannot be read or decoded."""

    def __init__(self, path: str | Path, reason: str, *, language: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.language = language
        scope = f" [{language}]" if language else ""
        super().__init__(f"Could not open language file at path: {self.path}{scope}: {reason}")


class SourceUnavailable(ExtractionError):
    """Raised when the relational store cannot produce rows for a category."""

    def __init__(self, path: str | Path, reason: str, *, category: str | None = None) -> None:
        self.path = Path(path)
        self.reason = reason
        self.category = category
        scope = f" for category '{category}'" if category else ""
        super().__init__(f"Could not read sqlite db at path: {self.path}{scope}: {reason}")


class OutputWriteFailed(ExtractionError):
    """Raised when an artifact cannot be written to disk."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not write output file {self.path}: {reason}")


__all__ = [
    "CatalogUnavailable",
    "ExtractionError",
    "OutputWriteFailed",
    "SourceUnavailable",
]
