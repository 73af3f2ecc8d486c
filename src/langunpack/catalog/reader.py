"""Decode ``.msg`` message catalogs into ordered rows.

A catalog is a MessagePack document shaped like::

    {"rows_": [{"column_": {"id_hash_": "TXT_0001", "sub_id_": "", "text_": "Sword"}}, ...]}

Only the fields above are read; anything else in a row is ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import msgpack

from langunpack.errors import CatalogUnavailable


@dataclass(frozen=True)
class CatalogRow:
    """One decoded catalog row."""

    id_hash: str
    sub_id: str
    text: str


def _decode_row(index: int, raw: Any) -> CatalogRow:
    if not isinstance(raw, Mapping):
        raise ValueError(f"row {index} is not a mapping")
    column = raw.get("column_")
    if not isinstance(column, Mapping):
        raise ValueError(f"row {index} has no 'column_' mapping")

    id_hash = column.get("id_hash_")
    text = column.get("text_")
    if not isinstance(id_hash, str) or not isinstance(text, str):
        raise ValueError(f"row {index} must carry string 'id_hash_' and 'text_' fields")

    sub_id = column.get("sub_id_")
    return CatalogRow(id_hash=id_hash, sub_id="" if sub_id is None else str(sub_id), text=text)


def decode_catalog(payload: bytes) -> list[CatalogRow]:
    """Decode a raw catalog document; raises ``ValueError`` when it is malformed."""

    document = msgpack.unpackb(payload, raw=False, strict_map_key=False)
    if not isinstance(document, Mapping):
        raise ValueError("catalog root must be a mapping")

    rows = document.get("rows_")
    if not isinstance(rows, list):
        raise ValueError("catalog root has no 'rows_' list")

    return [_decode_row(index, raw) for index, raw in enumerate(rows)]


def read_catalog_rows(path: str | Path, *, language: str | None = None) -> list[CatalogRow]:
    """Read and decode every row of the catalog at ``path`` in file order."""

    catalog_path = Path(path)
    try:
        payload = catalog_path.read_bytes()
    except OSError as error:
        raise CatalogUnavailable(catalog_path, error.strerror or str(error), language=language) from error

    try:
        return decode_catalog(payload)
    except (TypeError, ValueError, msgpack.exceptions.UnpackException) as error:
        raise CatalogUnavailable(catalog_path, f"undecodable catalog: {error}", language=language) from error


__all__ = ["CatalogRow", "decode_catalog", "read_catalog_rows"]
