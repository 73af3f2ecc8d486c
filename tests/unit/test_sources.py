"""Unit coverage for the SQLite row source."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from langunpack.config import CategorySpec
from langunpack.errors import SourceUnavailable
from langunpack.services import SourceRow, SQLiteRowSource

ITEMS = CategorySpec(
    name="items",
    query="SELECT Key, ItemName FROM item",
    catalog="{language}/text.msg",
)


@pytest.fixture()
def database(tmp_path: Path) -> Path:
    path = tmp_path / "system_table.sqlite"
    connection = sqlite3.connect(path)
    connection.execute("CREATE TABLE item (Key TEXT, ItemName TEXT)")
    connection.executemany(
        "INSERT INTO item VALUES (?, ?)",
        [("It0001", "TXT_IT0001"), (None, "TXT_X"), ("It0002", None), ("It0003", "TXT_IT0003")],
    )
    connection.commit()
    connection.close()
    return path


def test_fetch_returns_rows_in_query_order_without_nulls(database: Path) -> None:
    rows = SQLiteRowSource(database).fetch(ITEMS)

    assert rows == [SourceRow("It0001", "TXT_IT0001"), SourceRow("It0003", "TXT_IT0003")]


def test_missing_database_is_not_created(tmp_path: Path) -> None:
    path = tmp_path / "missing.sqlite"

    with pytest.raises(SourceUnavailable) as excinfo:
        SQLiteRowSource(path).fetch(ITEMS)

    assert excinfo.value.category == "items"
    assert not path.exists()


def test_query_errors_raise_source_unavailable(database: Path) -> None:
    broken = CategorySpec(
        name="gems",
        query="SELECT Key, Name FROM gem",
        catalog="{language}/text.msg",
    )

    with pytest.raises(SourceUnavailable, match="gem"):
        SQLiteRowSource(database).fetch(broken)


def test_single_column_queries_are_rejected(database: Path) -> None:
    narrow = CategorySpec(name="items", query="SELECT Key FROM item", catalog="{language}/text.msg")

    with pytest.raises(SourceUnavailable, match="translation id column"):
        SQLiteRowSource(database).fetch(narrow)


def test_catalog_driven_categories_cannot_be_fetched(database: Path) -> None:
    quests = CategorySpec(
        name="quests",
        source="catalog",
        catalog="{language}/text_stage.msg",
        identifier="substring_extraction",
        prefix="TXT_QR",
    )

    with pytest.raises(ValueError):
        SQLiteRowSource(database).fetch(quests)
