"""Strategy tables for key normalisation and output id derivation.

Each category names one entry of :data:`KEY_TRANSFORMS` and one entry of
:data:`IDENTIFIER_DERIVATIONS`; the pipeline looks both up instead of carrying
per-category code.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType

from langunpack.config import CategorySpec, IdentifierDerivation, KeyTransform
from langunpack.hashing import hash_hex

KeyTransformFn = Callable[[str], str]
DerivationFn = Callable[[CategorySpec, str, str], str | None]


def _is_ascii_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _ascii_upper(char: str) -> str:
    return char.upper() if char.isascii() else char


def _ascii_lower(char: str) -> str:
    return char.lower() if char.isascii() else char


def identity(key: str) -> str:
    return key


def alphanumeric_title_case(key: str) -> str:
    """Title-case ``key`` the way the game normalises ids before hashing.

    A character is upper-cased when it starts the string, follows a
    non-alphanumeric character, or is itself not alphanumeric; every other
    character is lower-cased. ``"EM7700"`` becomes ``"Em7700"`` and
    ``"em_07"`` becomes ``"Em_07"``. Only ASCII letters change case.
    """

    converted: list[str] = []
    for index, char in enumerate(key):
        if index == 0 or not _is_ascii_alnum(char) or not _is_ascii_alnum(key[index - 1]):
            converted.append(_ascii_upper(char))
        else:
            converted.append(_ascii_lower(char))
    return "".join(converted)


def _hash_of_key_hex(category: CategorySpec, natural_key: str, transformed_key: str) -> str:
    return hash_hex(transformed_key)


def _lowercase_key(category: CategorySpec, natural_key: str, transformed_key: str) -> str:
    return natural_key.lower()


def _fixed_id_table(category: CategorySpec, natural_key: str, transformed_key: str) -> str | None:
    return category.catalog_ids.get(natural_key)


def _substring_extraction(
    category: CategorySpec, natural_key: str, transformed_key: str
) -> str | None:
    if category.prefix is None or not natural_key.startswith(category.prefix):
        return None
    segments = natural_key.split(category.delimiter)
    if category.segment >= len(segments):
        return None
    return segments[category.segment] or None


KEY_TRANSFORMS: Mapping[KeyTransform, KeyTransformFn] = MappingProxyType(
    {
        KeyTransform.IDENTITY: identity,
        KeyTransform.ALPHANUMERIC_TITLE_CASE: alphanumeric_title_case,
    }
)

IDENTIFIER_DERIVATIONS: Mapping[IdentifierDerivation, DerivationFn] = MappingProxyType(
    {
        IdentifierDerivation.HASH_OF_KEY_HEX: _hash_of_key_hex,
        IdentifierDerivation.LOWERCASE_KEY: _lowercase_key,
        IdentifierDerivation.FIXED_ID_TABLE: _fixed_id_table,
        IdentifierDerivation.SUBSTRING_EXTRACTION: _substring_extraction,
    }
)


def transform_key(category: CategorySpec, natural_key: str) -> str:
    return KEY_TRANSFORMS[category.key_transform](natural_key)


def derive_output_id(category: CategorySpec, natural_key: str) -> str | None:
    """Return the output id ``natural_key`` is published under, or ``None`` to skip it."""

    transformed = transform_key(category, natural_key)
    return IDENTIFIER_DERIVATIONS[category.identifier](category, natural_key, transformed)


__all__ = [
    "IDENTIFIER_DERIVATIONS",
    "KEY_TRANSFORMS",
    "alphanumeric_title_case",
    "derive_output_id",
    "identity",
    "transform_key",
]
