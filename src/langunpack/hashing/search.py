"""Best-effort brute-force search for keys that hash to known values.

Nothing guarantees a hit: the search only enumerates the candidates it is
given, and a match may be a collision rather than the original key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .xxhash32 import xxhash32_custom

_LOGGER = logging.getLogger(__name__)

_PROGRESS_INTERVAL = 1_000_000


@dataclass(frozen=True)
class SearchHit:
    """A candidate whose (optionally transformed) hash matched a target."""

    target: int
    candidate: str
    hashed: str


def candidate_keys(
    prefix: str,
    width: int,
    *,
    start: int = 0,
    stop: int | None = None,
    suffix: str = "",
) -> Iterator[str]:
    """Yield ``prefix`` + zero-padded counter + ``suffix`` for ``start <= n < stop``."""

    if width <= 0:
        raise ValueError("width must be positive")
    upper = 10**width if stop is None else stop
    if start < 0 or upper < start:
        raise ValueError("search range must satisfy 0 <= start <= stop")

    for counter in range(start, upper):
        yield f"{prefix}{counter:0{width}d}{suffix}"


def search(
    targets: Iterable[int],
    candidates: Iterable[str],
    *,
    transform: Callable[[str], str] | None = None,
) -> Iterator[SearchHit]:
    """Yield a hit for every candidate whose hash is one of ``targets``."""

    wanted = frozenset(targets)
    if not wanted:
        return

    checked = 0
    for candidate in candidates:
        hashed = transform(candidate) if transform is not None else candidate
        value = xxhash32_custom(hashed)
        if value in wanted:
            yield SearchHit(target=value, candidate=candidate, hashed=hashed)
        checked += 1
        if checked % _PROGRESS_INTERVAL == 0:
            _LOGGER.info("Checked %d candidates", checked)

    _LOGGER.debug("Search finished after %d candidates", checked)


__all__ = ["SearchHit", "candidate_keys", "search"]
