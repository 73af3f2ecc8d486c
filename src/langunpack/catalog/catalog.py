"""Per-language message catalogs mapping text ids to localized strings."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .reader import CatalogRow, read_catalog_rows

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageCatalog:
    """Read-only lookup of catalog text by ``id_hash``.

    Rows are inserted in file order; when two rows share an id the later one
    wins. The ordered rows are kept for categories driven by the catalog
    itself rather than by the relational store.
    """

    rows: tuple[CatalogRow, ...] = ()
    _messages: Mapping[str, str] = field(default_factory=dict, repr=False)

    @classmethod
    def from_rows(cls, rows: Iterable[CatalogRow]) -> MessageCatalog:
        ordered = tuple(rows)
        messages: dict[str, str] = {}
        for row in ordered:
            messages[row.id_hash] = row.text
        return cls(rows=ordered, _messages=MappingProxyType(messages))

    def get(self, id_hash: str) -> str | None:
        return self._messages.get(id_hash)

    def __contains__(self, id_hash: object) -> bool:
        return id_hash in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)


def load(rows: Iterable[CatalogRow]) -> MessageCatalog:
    """Build a catalog from already decoded rows."""

    return MessageCatalog.from_rows(rows)


def load_catalog(path: str | Path, *, language: str | None = None) -> MessageCatalog:
    """Decode the catalog file at ``path`` into a :class:`MessageCatalog`."""

    catalog = load(read_catalog_rows(path, language=language))
    _LOGGER.debug("Loaded %d rows (%d ids) from %s", len(catalog.rows), len(catalog), path)
    return catalog


class CatalogCache:
    """Keep decoded catalogs keyed by (catalog file, language).

    Several categories read the same catalog for a language; the cache avoids
    decoding it more than once per run. Cached catalogs are immutable, so
    handing the same instance to several resolution passes is safe. Failures
    are not cached.
    """

    def __init__(
        self,
        *,
        enabled: bool = True,
        loader: Callable[..., MessageCatalog] = load_catalog,
    ) -> None:
        self._enabled = enabled
        self._loader = loader
        self._catalogs: dict[tuple[str, str], MessageCatalog] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, path: str | Path, language: str) -> MessageCatalog:
        if not self._enabled:
            return self._loader(path, language=language)

        key = (str(Path(path)), language)
        catalog = self._catalogs.get(key)
        if catalog is None:
            catalog = self._loader(path, language=language)
            self._catalogs[key] = catalog
        else:
            _LOGGER.debug("Catalog cache hit for %s [%s]", path, language)
        return catalog

    def clear(self) -> None:
        self._catalogs.clear()

    def __len__(self) -> int:
        return len(self._catalogs)


__all__ = ["CatalogCache", "MessageCatalog", "load", "load_catalog"]
