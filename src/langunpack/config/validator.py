"""Utilities for validating extraction settings and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from .schema import CategorySpec, ConfigurationError, ExtractionSettings, RowSource
from .settings import load_settings


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_languages(languages: Sequence[str]) -> list[str]:
    errors: list[str] = []

    duplicates = [code for code, count in Counter(languages).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope("languages", f"duplicate language codes detected: {sorted(duplicates)}")
        )

    invalid = [code for code in languages if not code.isalnum()]
    if invalid:
        errors.append(
            _format_scope("languages", f"language codes must be alphanumeric: {invalid}")
        )

    return errors


def _validate_category(category: CategorySpec) -> list[str]:
    errors: list[str] = []
    scope = f"categories.{category.name}"

    if "{language}" not in category.catalog:
        errors.append(_format_scope(scope, "catalog template must contain '{language}'"))

    if "{language}" not in category.output:
        errors.append(_format_scope(scope, "output template must contain '{language}'"))

    if category.source is RowSource.RELATIONAL and category.query:
        if not category.query.lstrip().upper().startswith("SELECT"):
            errors.append(_format_scope(scope, "relational query must be a SELECT statement"))

    catalog_ids = Counter(category.id_table.values())
    duplicates = [catalog_id for catalog_id, count in catalog_ids.items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                scope,
                f"id_table maps several output ids to the same catalog id: {sorted(duplicates)}",
            )
        )

    return errors


def _validate_outputs(settings: ExtractionSettings) -> list[str]:
    errors: list[str] = []
    probe = settings.languages[0]

    targets = Counter(category.output_file(probe) for category in settings.categories)
    clashes = [target for target, count in targets.items() if count > 1]
    if clashes:
        errors.append(
            _format_scope("categories", f"several categories write the same file: {sorted(clashes)}")
        )

    return errors


def validate_settings(settings: ExtractionSettings) -> list[str]:
    """Return a list of human readable validation issues for ``settings``."""

    errors: list[str] = []

    errors.extend(_validate_languages(settings.languages))
    for category in settings.categories:
        errors.extend(_validate_category(category))
    errors.extend(_validate_outputs(settings))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the extraction settings and report issues helpful to contributors."
    )
    parser.add_argument(
        "config",
        nargs="?",
        type=Path,
        help="Settings file to validate (defaults to the bundled configuration)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"failed to load configuration: {error}")
        return 1

    issues = validate_settings(settings)
    if issues:
        print(f"{len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print(
        f"OK: {len(settings.categories)} categories, {len(settings.languages)} languages"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
