"""Read and write the artifacts produced by an extraction run."""

from __future__ import annotations

import csv
import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from langunpack.catalog import CatalogRow
from langunpack.errors import OutputWriteFailed
from langunpack.hashing import hash_display, hash_hex, xxhash32_custom

from .pipeline import ResolvedEntry

DUMP_HEADER = ("hash", "id_hash", "sub_id", "text")
HASH_HEADER = ("hash", "value")


@dataclass(frozen=True)
class DumpRow:
    """Catalog row annotated with the content hash of its id."""

    hash: str
    id_hash: str
    sub_id: str
    text: str

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.hash, self.id_hash, self.sub_id, self.text)


def _ensure_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise OutputWriteFailed(path, error.strerror or str(error)) from error


def serialise_table(table: Mapping[str, ResolvedEntry]) -> dict[str, dict[str, Any]]:
    return {output_id: entry.as_dict() for output_id, entry in table.items()}


def write_table(path: str | os.PathLike[str], table: Mapping[str, ResolvedEntry]) -> Path:
    """Write ``table`` as pretty-printed UTF-8 JSON and return the path written."""

    target = Path(path)
    _ensure_parent(target)
    payload = json.dumps(serialise_table(table), ensure_ascii=False, indent=2)
    try:
        target.write_text(payload, encoding="utf-8")
    except OSError as error:
        raise OutputWriteFailed(target, error.strerror or str(error)) from error
    return target


def read_table(path: str | os.PathLike[str]) -> dict[str, dict[str, Any]]:
    """Load a previously written table; raises ``FileNotFoundError`` when absent."""

    with Path(path).open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Artifact {path} does not contain a JSON object")
    return payload


def dump_rows(rows: Iterable[CatalogRow]) -> list[DumpRow]:
    return [
        DumpRow(hash=hash_hex(row.id_hash), id_hash=row.id_hash, sub_id=row.sub_id, text=row.text)
        for row in rows
    ]


def write_dump_csv(path: str | os.PathLike[str], rows: Iterable[DumpRow]) -> Path:
    target = Path(path)
    _ensure_parent(target)
    try:
        with target.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(DUMP_HEADER)
            writer.writerows(row.as_tuple() for row in rows)
    except OSError as error:
        raise OutputWriteFailed(target, error.strerror or str(error)) from error
    return target


def write_hash_csv(path: str | os.PathLike[str], values: Iterable[str]) -> Path:
    """Write one ``hash,value`` line per value, in input order."""

    target = Path(path)
    _ensure_parent(target)
    try:
        with target.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(HASH_HEADER)
            for value in values:
                writer.writerow((hash_display(xxhash32_custom(value)), value))
    except OSError as error:
        raise OutputWriteFailed(target, error.strerror or str(error)) from error
    return target


__all__ = [
    "DUMP_HEADER",
    "DumpRow",
    "HASH_HEADER",
    "dump_rows",
    "read_table",
    "serialise_table",
    "write_dump_csv",
    "write_hash_csv",
    "write_table",
]
