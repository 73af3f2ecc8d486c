"""Custom xxHash32 variant used by the game to key its text tables.

The structure follows the public xxHash32 algorithm, but the seed-derived
accumulators are replaced by fixed values, so the function does not take a
seed. Inputs of at most 16 bytes never touch the stripe accumulators.
"""

from __future__ import annotations

import struct
from typing import Final

PRIME32_1: Final = 0x9E3779B1
PRIME32_2: Final = 0x85EBCA77
PRIME32_3: Final = 0xC2B2AE3D
PRIME32_4: Final = 0x27D4EB2F
PRIME32_5: Final = 0x165667B1

INITIAL_STATE: Final = 0x178A54A4
INITIAL_ACCUMULATORS: Final = (0x2557311B, 0x871FB76A, 0x0133ECF3, 0x62FC7342)

_MASK: Final = 0xFFFFFFFF
_STRIPE = struct.Struct("<4I")
_LANE = struct.Struct("<I")


def _rotl(value: int, bits: int) -> int:
    value &= _MASK
    return ((value << bits) | (value >> (32 - bits))) & _MASK


def _round(accumulator: int, lane: int) -> int:
    return (_rotl(accumulator + lane * PRIME32_2, 13) * PRIME32_1) & _MASK


def xxhash32_custom(data: bytes | str) -> int:
    """Return the 32-bit content hash of ``data``.

    ``str`` values are hashed as their UTF-8 encoding.
    """

    if isinstance(data, str):
        data = data.encode("utf-8")

    length = len(data)
    offset = 0
    h32 = INITIAL_STATE

    if length > 16:
        v1, v2, v3, v4 = INITIAL_ACCUMULATORS
        while length - offset >= 16:
            lane1, lane2, lane3, lane4 = _STRIPE.unpack_from(data, offset)
            v1 = _round(v1, lane1)
            v2 = _round(v2, lane2)
            v3 = _round(v3, lane3)
            v4 = _round(v4, lane4)
            offset += 16

        h32 = (_rotl(v1, 1) + _rotl(v2, 7) + _rotl(v3, 12) + _rotl(v4, 18)) & _MASK

    h32 = (h32 + length) & _MASK

    while length - offset >= 4:
        (lane,) = _LANE.unpack_from(data, offset)
        h32 = (_rotl(h32 + lane * PRIME32_3, 17) * PRIME32_4) & _MASK
        offset += 4

    while offset < length:
        h32 = (_rotl(h32 + data[offset] * PRIME32_5, 11) * PRIME32_1) & _MASK
        offset += 1

    h32 ^= h32 >> 15
    h32 = (h32 * PRIME32_2) & _MASK
    h32 ^= h32 >> 13
    h32 = (h32 * PRIME32_3) & _MASK
    h32 ^= h32 >> 16
    return h32


def hash_hex(data: bytes | str) -> str:
    """Render the hash of ``data`` as eight lowercase hex digits."""

    return f"{xxhash32_custom(data):08x}"


def hash_display(value: int) -> str:
    """Format a hash value the way the hash tool prints it (``0x887AE0B0``)."""

    return f"0x{value & _MASK:08X}"


__all__ = [
    "INITIAL_ACCUMULATORS",
    "INITIAL_STATE",
    "PRIME32_1",
    "PRIME32_2",
    "PRIME32_3",
    "PRIME32_4",
    "PRIME32_5",
    "hash_display",
    "hash_hex",
    "xxhash32_custom",
]
