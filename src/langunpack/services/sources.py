"""Relational row source backed by the game's SQLite table dump."""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import closing
from pathlib import Path

from langunpack.config import CategorySpec, RowSource
from langunpack.errors import SourceUnavailable

from .pipeline import SourceRow

_LOGGER = logging.getLogger(__name__)


class SQLiteRowSource:
    """Run each category's query against a read-only SQLite database."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        # mode=ro keeps sqlite from creating an empty database for a bad path.
        uri = f"{self._path.resolve().as_uri()}?mode=ro"
        return sqlite3.connect(uri, uri=True)

    def fetch(self, category: CategorySpec) -> list[SourceRow]:
        """Return the (natural key, translation id) rows of ``category`` in query order."""

        if category.source is not RowSource.RELATIONAL or not category.query:
            raise ValueError(f"Category '{category.name}' has no relational query")

        if not self._path.is_file():
            raise SourceUnavailable(self._path, "database file not found", category=category.name)

        try:
            with closing(self._connect()) as connection:
                cursor = connection.execute(category.query)
                records = cursor.fetchall()
        except sqlite3.Error as error:
            raise SourceUnavailable(self._path, str(error), category=category.name) from error

        rows: list[SourceRow] = []
        for record in records:
            if len(record) < 2:
                raise SourceUnavailable(
                    self._path,
                    "query must select a key column and a translation id column",
                    category=category.name,
                )
            key, translation_id = record[0], record[1]
            if key is None or translation_id is None:
                continue
            rows.append(SourceRow(natural_key=str(key), translation_id=str(translation_id)))

        _LOGGER.debug("%s: fetched %d rows from %s", category.name, len(rows), self._path)
        return rows


__all__ = ["SQLiteRowSource"]
