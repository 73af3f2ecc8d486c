"""Extract localized game text and key it by stable content hashes."""

from langunpack.hashing import hash_hex, xxhash32_custom

__all__ = ["hash_hex", "xxhash32_custom"]
