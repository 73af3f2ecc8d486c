"""Pydantic models describing the extraction configuration."""

from __future__ import annotations

from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self

DEFAULT_LANGUAGES: tuple[str, ...] = ("bp", "cs", "ct", "en", "es", "fr", "ge", "it", "jp", "ko")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class KeyTransform(str, Enum):
    """How a natural key is normalised before an identifier is derived from it."""

    IDENTITY = "identity"
    ALPHANUMERIC_TITLE_CASE = "alphanumeric_title_case"


class IdentifierDerivation(str, Enum):
    """How the published output id of an entry is computed."""

    HASH_OF_KEY_HEX = "hash_of_key_hex"
    LOWERCASE_KEY = "lowercase_key"
    FIXED_ID_TABLE = "fixed_id_table"
    SUBSTRING_EXTRACTION = "substring_extraction"


class RowSource(str, Enum):
    """Where the rows joined against the catalog come from."""

    RELATIONAL = "relational"
    ID_TABLE = "id_table"
    CATALOG = "catalog"


class FailurePolicy(str, Enum):
    """What an extraction run does after a catalog or source failure."""

    ABORT = "abort"
    CONTINUE = "continue"


_DERIVATIONS_BY_SOURCE: Mapping[RowSource, frozenset[IdentifierDerivation]] = {
    RowSource.RELATIONAL: frozenset(
        {IdentifierDerivation.HASH_OF_KEY_HEX, IdentifierDerivation.LOWERCASE_KEY}
    ),
    RowSource.ID_TABLE: frozenset({IdentifierDerivation.FIXED_ID_TABLE}),
    RowSource.CATALOG: frozenset({IdentifierDerivation.SUBSTRING_EXTRACTION}),
}


class CategorySpec(ImmutableModel):
    """Declarative description of how one category is extracted."""

    name: str
    source: RowSource = RowSource.RELATIONAL
    query: str | None = None
    catalog: str
    key_transform: KeyTransform = KeyTransform.IDENTITY
    identifier: IdentifierDerivation = IdentifierDerivation.HASH_OF_KEY_HEX
    output: str = "{language}/{category}.json"
    id_table: Mapping[str, str] = Field(default_factory=dict)
    prefix: str | None = None
    delimiter: str = "_"
    segment: int = Field(default=2, ge=0)

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ConfigurationError("Category names must be non-empty")
        return cleaned

    @field_validator("id_table", mode="before")
    @classmethod
    def _coerce_id_table(cls, value: Any) -> Mapping[str, str]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {str(key): str(val) for key, val in value.items()}
        raise ConfigurationError("Category 'id_table' must be a mapping of output id to catalog id")

    @model_validator(mode="after")
    def _validate_source(self) -> Self:
        allowed = _DERIVATIONS_BY_SOURCE[self.source]
        if self.identifier not in allowed:
            raise ConfigurationError(
                f"Category '{self.name}' cannot derive '{self.identifier.value}' ids "
                f"from a '{self.source.value}' source"
            )
        if self.source is RowSource.RELATIONAL and not (self.query and self.query.strip()):
            raise ConfigurationError(f"Category '{self.name}' requires a relational query")
        if self.source is not RowSource.RELATIONAL and self.query:
            raise ConfigurationError(
                f"Category '{self.name}' reads from the catalog and cannot declare a query"
            )
        if self.identifier is IdentifierDerivation.FIXED_ID_TABLE and not self.id_table:
            raise ConfigurationError(f"Category '{self.name}' requires a non-empty 'id_table'")
        if self.identifier is IdentifierDerivation.SUBSTRING_EXTRACTION:
            if not self.prefix:
                raise ConfigurationError(f"Category '{self.name}' requires an id 'prefix'")
            if not self.delimiter:
                raise ConfigurationError(f"Category '{self.name}' requires a non-empty 'delimiter'")
        return self

    @computed_field
    @cached_property
    def catalog_ids(self) -> Mapping[str, str]:
        """Reverse view of ``id_table``: catalog id to output id."""

        return {catalog_id: output_id for output_id, catalog_id in self.id_table.items()}

    def catalog_file(self, language: str) -> str:
        return self.catalog.format(language=language, category=self.name)

    def output_file(self, language: str) -> str:
        return self.output.format(language=language, category=self.name)


class ExtractionSettings(ImmutableModel):
    """Everything an extraction run needs, passed explicitly to the pipeline."""

    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    database: str = "system_table.sqlite"
    text_root: str = "text"
    output_root: str = "data"
    on_error: FailurePolicy = FailurePolicy.ABORT
    cache_catalogs: bool = True
    warn_on_collision: bool = True
    categories: Sequence[CategorySpec]

    @field_validator("languages", mode="before")
    @classmethod
    def _coerce_languages(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str) or not isinstance(value, Sequence):
            raise ConfigurationError("'languages' must be a list of language codes")
        languages = tuple(str(code).strip().lower() for code in value)
        if not languages or not all(languages):
            raise ConfigurationError("'languages' must list at least one non-empty code")
        return languages

    @model_validator(mode="after")
    def _validate_categories(self) -> Self:
        if not self.categories:
            raise ConfigurationError("At least one category must be configured")
        seen: set[str] = set()
        for category in self.categories:
            if category.name in seen:
                raise ConfigurationError(f"Duplicate category '{category.name}' configured")
            seen.add(category.name)
        return self

    @computed_field
    @property
    def category_names(self) -> tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    def get_category(self, name: str) -> CategorySpec:
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)

    def catalog_path(self, category: CategorySpec, language: str) -> Path:
        return Path(self.text_root) / category.catalog_file(language)

    def output_path(self, category: CategorySpec, language: str) -> Path:
        return Path(self.output_root) / category.output_file(language)


__all__ = [
    "DEFAULT_LANGUAGES",
    "CategorySpec",
    "ConfigurationError",
    "ExtractionSettings",
    "FailurePolicy",
    "IdentifierDerivation",
    "ImmutableModel",
    "KeyTransform",
    "RowSource",
    "ValidationError",
]
