"""Content hash used to derive stable output identifiers."""

from .search import SearchHit, candidate_keys, search
from .xxhash32 import hash_display, hash_hex, xxhash32_custom

__all__ = [
    "SearchHit",
    "candidate_keys",
    "hash_display",
    "hash_hex",
    "search",
    "xxhash32_custom",
]
