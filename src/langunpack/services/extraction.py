"""Run the resolution pipeline for every configured category and language.

Every run recomputes all requested (category, language) pairs from scratch.
A relational source failure stops the whole category; a catalog or write
failure stops only its pair. Under ``FailurePolicy.ABORT`` the first failure propagates,
under ``FailurePolicy.CONTINUE`` it is logged, recorded in the report and the
run carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Protocol

from langunpack.catalog import CatalogCache
from langunpack.config import CategorySpec, ExtractionSettings, FailurePolicy, RowSource
from langunpack.errors import CatalogUnavailable, OutputWriteFailed, SourceUnavailable

from .artifacts import write_table
from .pipeline import SourceRow, resolve, source_rows_for
from .sources import SQLiteRowSource

_LOGGER = logging.getLogger(__name__)


class RowSourceProtocol(Protocol):
    def fetch(self, category: CategorySpec) -> list[SourceRow]: ...


@dataclass(frozen=True)
class ExtractionFailure:
    """A category (``language is None``) or pair that could not be extracted."""

    category: str
    language: str | None
    reason: str


@dataclass
class ExtractionReport:
    """Outcome of an extraction run."""

    written: list[Path] = field(default_factory=list)
    failures: list[ExtractionFailure] = field(default_factory=list)
    entry_counts: dict[tuple[str, str], int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def _select_categories(
    settings: ExtractionSettings, names: Sequence[str] | None
) -> list[CategorySpec]:
    if not names:
        return list(settings.categories)
    selected: list[CategorySpec] = []
    for name in names:
        try:
            selected.append(settings.get_category(name))
        except KeyError as exc:
            known = ", ".join(settings.category_names)
            raise ValueError(f"Unknown category '{name}' (configured: {known})") from exc
    return selected


def _select_languages(settings: ExtractionSettings, codes: Sequence[str] | None) -> list[str]:
    if not codes:
        return list(settings.languages)
    unknown = [code for code in codes if code not in settings.languages]
    if unknown:
        known = ", ".join(settings.languages)
        raise ValueError(f"Unsupported language(s) {unknown} (configured: {known})")
    return [code for code in settings.languages if code in codes]


def extract_pair(
    settings: ExtractionSettings,
    category: CategorySpec,
    language: str,
    *,
    rows: Sequence[SourceRow] | None,
    cache: CatalogCache,
) -> tuple[Path, int]:
    """Resolve and write one (category, language) artifact."""

    catalog = cache.get(settings.catalog_path(category, language), language)
    source_rows = rows if rows is not None else source_rows_for(category, catalog)
    table = resolve(
        category,
        language,
        source_rows,
        catalog,
        warn_on_collision=settings.warn_on_collision,
    )
    path = write_table(settings.output_path(category, language), table)
    return path, len(table)


def extract_all(
    settings: ExtractionSettings,
    *,
    source: RowSourceProtocol | None = None,
    cache: CatalogCache | None = None,
    categories: Sequence[str] | None = None,
    languages: Sequence[str] | None = None,
) -> ExtractionReport:
    """Extract every selected category for every selected language."""

    selected_categories = _select_categories(settings, categories)
    selected_languages = _select_languages(settings, languages)
    row_source = source if source is not None else SQLiteRowSource(settings.database)
    catalogs = cache if cache is not None else CatalogCache(enabled=settings.cache_catalogs)
    isolate = settings.on_error is FailurePolicy.CONTINUE

    report = ExtractionReport()
    started = perf_counter()

    for category in selected_categories:
        rows: list[SourceRow] | None = None
        if category.source is RowSource.RELATIONAL:
            try:
                rows = row_source.fetch(category)
            except SourceUnavailable as error:
                if not isolate:
                    raise
                _LOGGER.error("Skipping category %s for all languages: %s", category.name, error)
                report.failures.append(
                    ExtractionFailure(category=category.name, language=None, reason=str(error))
                )
                continue

        for language in selected_languages:
            try:
                path, count = extract_pair(settings, category, language, rows=rows, cache=catalogs)
            except (CatalogUnavailable, OutputWriteFailed) as error:
                if not isolate:
                    raise
                _LOGGER.error("Skipping %s [%s]: %s", category.name, language, error)
                report.failures.append(
                    ExtractionFailure(category=category.name, language=language, reason=str(error))
                )
                continue

            report.written.append(path)
            report.entry_counts[(category.name, language)] = count
            _LOGGER.info("Wrote %d %s entries for %s to %s", count, category.name, language, path)

    _LOGGER.debug(
        "Extraction finished in %.1f ms (%d artifacts, %d failures)",
        (perf_counter() - started) * 1000,
        len(report.written),
        len(report.failures),
    )
    return report


__all__ = [
    "ExtractionFailure",
    "ExtractionReport",
    "RowSourceProtocol",
    "extract_all",
    "extract_pair",
]
