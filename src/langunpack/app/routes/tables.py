"""Read-only lookups over the artifacts written by ``extract``.

Downstream tools resolve entries here by output id or by natural key without
access to the original SQLite store.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from langunpack.app.http import ProblemResponse, not_found, problem_response
from langunpack.config import CategorySpec, ExtractionSettings
from langunpack.hashing import hash_display, hash_hex, xxhash32_custom
from langunpack.services import derive_output_id, read_table

blueprint = Blueprint("tables", __name__, url_prefix="/api/v1")

SETTINGS_KEY = "LANGUNPACK_SETTINGS"


@dataclass(frozen=True)
class TableContext:
    """The artifact a table-scoped request points at."""

    language: str
    category: CategorySpec
    table: dict[str, dict[str, Any]]


def current_settings() -> ExtractionSettings:
    return current_app.config[SETTINGS_KEY]


def _load_table_context(language: str, category_name: str) -> TableContext | ProblemResponse:
    settings = current_settings()
    language = language.lower()

    if language not in settings.languages:
        return not_found(f"Unsupported language '{language}'", language=language)

    try:
        category = settings.get_category(category_name)
    except KeyError:
        return not_found(f"Unknown category '{category_name}'", category=category_name)

    path: Path = settings.output_path(category, language)
    try:
        table = read_table(path)
    except FileNotFoundError:
        return not_found(
            "Table has not been extracted yet",
            language=language,
            category=category.name,
        )
    except ValueError as error:
        return problem_response(
            "invalid_artifact",
            status=500,
            message=str(error),
            language=language,
            category=category.name,
        )

    return TableContext(language=language, category=category, table=table)


def _entry_payload(context: TableContext, output_id: str) -> dict[str, Any]:
    return {
        "language": context.language,
        "category": context.category.name,
        "id": output_id,
        **context.table[output_id],
    }


@blueprint.get("/tables/<language>/<category>")
def get_table(language: str, category: str):
    """Return every entry of one extracted table."""

    context = _load_table_context(language, category)
    if isinstance(context, ProblemResponse):
        return context.to_response()

    return jsonify(
        {
            "language": context.language,
            "category": context.category.name,
            "entries": context.table,
        }
    ), 200


@blueprint.get("/tables/<language>/<category>/<output_id>")
def get_entry(language: str, category: str, output_id: str):
    """Return a single entry by its published output id."""

    context = _load_table_context(language, category)
    if isinstance(context, ProblemResponse):
        return context.to_response()

    if output_id not in context.table:
        return not_found(
            f"No entry with id '{output_id}'",
            language=context.language,
            category=context.category.name,
        ).to_response()

    return jsonify(_entry_payload(context, output_id)), 200


@blueprint.get("/lookup/<language>/<category>")
def lookup_by_key(language: str, category: str):
    """Derive the output id for ``?key=`` the way extraction does and return its entry."""

    key = request.args.get("key", "")
    if not key:
        return problem_response(
            "bad_request", status=400, message="Query parameter 'key' is required"
        ).to_response()

    context = _load_table_context(language, category)
    if isinstance(context, ProblemResponse):
        return context.to_response()

    output_id = derive_output_id(context.category, key)
    if output_id is None or output_id not in context.table:
        return not_found(
            f"No entry for key '{key}'",
            language=context.language,
            category=context.category.name,
            id=output_id,
        ).to_response()

    return jsonify(_entry_payload(context, output_id)), 200


@blueprint.get("/hash")
def hash_value():
    """Return the content hash of ``?value=``."""

    value = request.args.get("value")
    if value is None:
        return problem_response(
            "bad_request", status=400, message="Query parameter 'value' is required"
        ).to_response()

    digest = xxhash32_custom(value)
    return jsonify({"value": value, "hash": hash_hex(value), "display": hash_display(digest)}), 200
