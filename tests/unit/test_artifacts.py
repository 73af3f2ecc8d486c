"""Unit coverage for artifact serialisation."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from langunpack.catalog import CatalogRow
from langunpack.errors import OutputWriteFailed
from langunpack.hashing import hash_hex
from langunpack.services import ResolvedEntry
from langunpack.services.artifacts import (
    DUMP_HEADER,
    dump_rows,
    read_table,
    write_dump_csv,
    write_hash_csv,
    write_table,
)


def test_write_table_creates_directories_and_keeps_unicode(tmp_path: Path) -> None:
    table = {"0042": ResolvedEntry(output_id="0042", key="TXT_QR_0042_title", text="剣を探せ")}
    path = tmp_path / "data" / "jp" / "quests.json"

    written = write_table(path, table)

    assert written == path
    raw = path.read_text(encoding="utf-8")
    assert "剣を探せ" in raw
    assert json.loads(raw) == {"0042": {"key": "TXT_QR_0042_title", "text": "剣を探せ"}}
    assert read_table(path) == json.loads(raw)


def test_write_table_reports_unwritable_targets(tmp_path: Path) -> None:
    blocker = tmp_path / "data"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OutputWriteFailed) as excinfo:
        write_table(blocker / "en" / "weapons.json", {})

    assert excinfo.value.path == blocker / "en" / "weapons.json"


def test_read_table_rejects_non_objects(tmp_path: Path) -> None:
    path = tmp_path / "weapons.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(ValueError):
        read_table(path)


def test_dump_rows_keep_every_catalog_field(tmp_path: Path) -> None:
    rows = dump_rows([CatalogRow("TXT_A", "3", "Hello, world")])
    path = write_dump_csv(tmp_path / "text.csv", rows)

    with path.open(encoding="utf-8", newline="") as handle:
        records = list(csv.reader(handle))

    assert records == [list(DUMP_HEADER), [hash_hex("TXT_A"), "TXT_A", "3", "Hello, world"]]


def test_write_hash_csv_lists_values_in_order(tmp_path: Path) -> None:
    path = write_hash_csv(tmp_path / "names.csv", ["", "hello"])

    lines = path.read_text(encoding="utf-8").splitlines()

    assert lines == ["hash,value", "0x887AE0B0,", "0x9AD6310D,hello"]
