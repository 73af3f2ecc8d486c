"""Unit coverage for the custom xxHash32 content hash."""

from __future__ import annotations

import pytest

from langunpack.hashing import hash_display, hash_hex, xxhash32_custom
from langunpack.hashing import xxhash32 as xxhash32_module


def test_known_vectors() -> None:
    assert xxhash32_custom(b"") == 0x887AE0B0
    assert xxhash32_custom(b"hello") == 0x9AD6310D


def test_strings_hash_as_utf8_bytes() -> None:
    assert xxhash32_custom("hello") == xxhash32_custom(b"hello")
    assert xxhash32_custom("グラン") == xxhash32_custom("グラン".encode("utf-8"))


def test_hash_is_deterministic() -> None:
    value = "Wp0001-with-a-longer-tail-than-sixteen-bytes"
    results = {xxhash32_custom(value) for _ in range(8)}
    assert len(results) == 1


@pytest.mark.parametrize("length", [0, 1, 3, 4, 5, 15, 16, 17, 31, 32, 33, 64, 100])
def test_hash_fits_in_32_bits_for_all_tail_shapes(length: int) -> None:
    value = xxhash32_custom(bytes(range(length)))
    assert 0 <= value <= 0xFFFFFFFF


def test_sixteen_byte_inputs_skip_the_stripe_phase(monkeypatch: pytest.MonkeyPatch) -> None:
    """Only inputs longer than 16 bytes may touch the four accumulators."""

    prefix = b"0123456789abcdef"
    expected = xxhash32_custom(prefix)

    def fail_round(accumulator: int, lane: int) -> int:
        raise AssertionError("stripe accumulators used")

    monkeypatch.setattr(xxhash32_module, "_round", fail_round)

    assert xxhash32_custom(prefix) == expected
    with pytest.raises(AssertionError, match="stripe accumulators used"):
        xxhash32_custom(prefix + b"!")


def test_seventeen_bytes_are_not_an_extension_of_the_prefix_hash() -> None:
    prefix = b"0123456789abcdef"
    assert len(prefix) == 16
    assert xxhash32_custom(prefix + b"!") != xxhash32_custom(prefix)
    assert xxhash32_custom(prefix + b"!") != xxhash32_custom(prefix + b"?")


def test_hash_hex_is_lowercase_and_zero_padded() -> None:
    assert hash_hex("") == "887ae0b0"
    assert hash_hex("hello") == "9ad6310d"
    assert len(hash_hex("Wp0001")) == 8


def test_hash_display_matches_tool_format() -> None:
    assert hash_display(0x887AE0B0) == "0x887AE0B0"
    assert hash_display(0x1F) == "0x0000001F"
