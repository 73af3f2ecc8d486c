"""Join category rows against a message catalog and key them by output id."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from langunpack.catalog import MessageCatalog
from langunpack.config import CategorySpec, RowSource

from .transforms import derive_output_id

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceRow:
    """A natural key and the catalog id holding its text."""

    natural_key: str
    translation_id: str


@dataclass(frozen=True)
class ResolvedEntry:
    """Localized text published under a derived output id."""

    output_id: str
    key: str
    text: str

    def as_dict(self) -> dict[str, Any]:
        """Return the serialisable payload stored under ``output_id``."""

        return {"key": self.key, "text": self.text}


OutputTable = dict[str, ResolvedEntry]


def source_rows_for(category: CategorySpec, catalog: MessageCatalog) -> list[SourceRow]:
    """Build the rows for categories that are driven by the catalog itself."""

    if category.source is RowSource.ID_TABLE:
        return [
            SourceRow(natural_key=catalog_id, translation_id=catalog_id)
            for catalog_id in category.id_table.values()
        ]
    if category.source is RowSource.CATALOG:
        return [SourceRow(natural_key=row.id_hash, translation_id=row.id_hash) for row in catalog.rows]
    raise ValueError(f"Category '{category.name}' reads its rows from the relational store")


def resolve(
    category: CategorySpec,
    language: str,
    source_rows: Iterable[SourceRow],
    catalog: MessageCatalog,
    *,
    warn_on_collision: bool = True,
) -> OutputTable:
    """Resolve ``source_rows`` for one (category, language) pair.

    Rows without text are skipped. Entries sharing an output id overwrite each
    other in row order.
    """

    table: OutputTable = {}
    skipped = 0

    for row in source_rows:
        text = catalog.get(row.translation_id)
        if not text:
            skipped += 1
            continue

        output_id = derive_output_id(category, row.natural_key)
        if output_id is None:
            skipped += 1
            continue

        previous = table.get(output_id)
        if warn_on_collision and previous is not None and previous.key != row.natural_key:
            _LOGGER.warning(
                "%s [%s]: output id %s collides for keys %r and %r; keeping the latter",
                category.name,
                language,
                output_id,
                previous.key,
                row.natural_key,
            )

        table[output_id] = ResolvedEntry(output_id=output_id, key=row.natural_key, text=text)

    _LOGGER.debug(
        "%s [%s]: resolved %d entries, skipped %d rows",
        category.name,
        language,
        len(table),
        skipped,
    )
    return table


__all__ = ["OutputTable", "ResolvedEntry", "SourceRow", "resolve", "source_rows_for"]
