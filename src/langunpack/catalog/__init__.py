"""Message catalog decoding and lookup helpers."""

from .catalog import CatalogCache, MessageCatalog, load, load_catalog
from .reader import CatalogRow, decode_catalog, read_catalog_rows

__all__ = [
    "CatalogCache",
    "CatalogRow",
    "MessageCatalog",
    "decode_catalog",
    "load",
    "load_catalog",
    "read_catalog_rows",
]
