"""Command line entry point: dump catalogs, extract tables, hash and search keys."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from langunpack.catalog import read_catalog_rows
from langunpack.config import (
    ConfigurationError,
    ExtractionSettings,
    FailurePolicy,
    load_settings,
)
from langunpack.config import validator
from langunpack.errors import ExtractionError
from langunpack.hashing import candidate_keys, hash_display, search, xxhash32_custom
from langunpack.services.artifacts import dump_rows, write_dump_csv, write_hash_csv
from langunpack.services.extraction import extract_all
from langunpack.services.transforms import alphanumeric_title_case
from langunpack.version import get_project_version

_LOGGER = logging.getLogger(__name__)


def _parse_hash(value: str) -> int:
    try:
        parsed = int(value, 16)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a hexadecimal hash") from exc
    if not 0 <= parsed <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"'{value}' does not fit in 32 bits")
    return parsed


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for name in ("database", "text_root", "output_root"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = str(value)
    if args.continue_on_error:
        overrides["on_error"] = FailurePolicy.CONTINUE
    if args.no_cache:
        overrides["cache_catalogs"] = False
    return overrides


def _configure_settings(args: argparse.Namespace) -> ExtractionSettings:
    settings = load_settings(args.config)
    overrides = _settings_overrides(args)
    return settings.model_copy(update=overrides) if overrides else settings


def _command_dump(args: argparse.Namespace) -> int:
    rows = dump_rows(read_catalog_rows(args.file))
    if args.csv is not None:
        path = write_dump_csv(args.csv, rows)
        print(f"Wrote {len(rows)} rows to {path}")
        return 0

    for row in rows:
        print("\t".join(row.as_tuple()))
    return 0


def _command_extract(args: argparse.Namespace) -> int:
    settings = _configure_settings(args)
    report = extract_all(settings, categories=args.category, languages=args.language)

    print(f"Wrote {len(report.written)} table(s) to {settings.output_root}")
    for failure in report.failures:
        scope = failure.language or "all languages"
        print(f"  ! {failure.category} [{scope}]: {failure.reason}")
    return 0 if report.ok else 1


def _command_hash(args: argparse.Namespace) -> int:
    if args.name is None and args.file is None:
        print("You must provide either a name or a file", file=sys.stderr)
        return 2

    if args.name is not None:
        print(hash_display(xxhash32_custom(args.name)))
        return 0

    source: Path = args.file
    output = args.output or Path(f"{source.stem}.csv")
    with source.open("r", encoding="utf-8") as handle:
        lines = [line.rstrip("\r\n") for line in handle]
    path = write_hash_csv(output, lines)
    print(f"Hashed {len(lines)} line(s) into {path}")
    return 0


def _command_search(args: argparse.Namespace) -> int:
    if args.wordlist is not None:
        with args.wordlist.open("r", encoding="utf-8") as handle:
            candidates = [line.strip() for line in handle if line.strip()]
    else:
        candidates = candidate_keys(
            args.prefix,
            args.width,
            start=args.start,
            stop=args.stop,
            suffix=args.suffix,
        )

    transform = alphanumeric_title_case if args.title_case else None
    found = 0
    for hit in search(args.targets, candidates, transform=transform):
        found += 1
        print(f"{hash_display(hit.target)},{hit.candidate}")

    if not found:
        print("No candidate matched", file=sys.stderr)
        return 1
    return 0


def _command_validate(args: argparse.Namespace) -> int:
    argv = [str(args.config)] if args.config else []
    return validator.main(argv)


def _command_serve(args: argparse.Namespace) -> int:  # pragma: no cover - runs a server
    from langunpack.app import create_app

    settings = load_settings(args.config)
    if args.output_root is not None:
        settings = settings.model_copy(update={"output_root": str(args.output_root)})
    create_app(settings).run(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="language-unpack",
        description="Extract localized text from message catalogs keyed by stable content hashes.",
    )
    parser.add_argument("--version", action="version", version=get_project_version())
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    dump = subparsers.add_parser("dump", help="Print the rows of one catalog file")
    dump.add_argument("file", type=Path, help="Catalog (.msg) file to decode")
    dump.add_argument("--csv", type=Path, help="Write the rows to this CSV file instead")
    dump.set_defaults(handler=_command_dump)

    extract = subparsers.add_parser("extract", help="Extract every category for every language")
    extract.add_argument("--config", type=Path, help="Settings file (defaults to the bundled one)")
    extract.add_argument("--database", type=Path, help="SQLite table dump to read")
    extract.add_argument("--text-root", type=Path, help="Directory holding <language>/*.msg")
    extract.add_argument("--output-root", type=Path, help="Directory receiving the JSON tables")
    extract.add_argument(
        "--category", action="append", help="Only extract this category (repeatable)"
    )
    extract.add_argument(
        "--language", action="append", help="Only extract this language (repeatable)"
    )
    extract.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Keep going after a catalog, database or write failure instead of aborting",
    )
    extract.add_argument("--no-cache", action="store_true", help="Decode catalogs once per pair")
    extract.set_defaults(handler=_command_extract)

    hash_parser = subparsers.add_parser("hash", help="Hash a string or every line of a file")
    hash_parser.add_argument("name", nargs="?", help="String to hash")
    hash_parser.add_argument("-f", "--file", type=Path, help="File whose lines should be hashed")
    hash_parser.add_argument("-o", "--output", type=Path, help="CSV output (defaults to <stem>.csv)")
    hash_parser.set_defaults(handler=_command_hash)

    search_parser = subparsers.add_parser(
        "search", help="Brute-force keys that hash to the given values (best effort)"
    )
    search_parser.add_argument("targets", nargs="+", type=_parse_hash, help="Hex hashes to find")
    search_parser.add_argument("--prefix", default="", help="Candidate key prefix, e.g. Wp")
    search_parser.add_argument("--width", type=int, default=4, help="Digits in the counter")
    search_parser.add_argument("--start", type=int, default=0, help="First counter value")
    search_parser.add_argument("--stop", type=int, help="Counter value to stop before")
    search_parser.add_argument("--suffix", default="", help="Candidate key suffix")
    search_parser.add_argument("--wordlist", type=Path, help="Read candidates from this file")
    search_parser.add_argument(
        "--title-case",
        action="store_true",
        help="Title-case candidates before hashing, as enemy keys are",
    )
    search_parser.set_defaults(handler=_command_search)

    validate = subparsers.add_parser("validate", help="Check the extraction settings")
    validate.add_argument("config", nargs="?", type=Path, help="Settings file to validate")
    validate.set_defaults(handler=_command_validate)

    serve = subparsers.add_parser("serve", help="Serve extracted tables over HTTP")
    serve.add_argument("--config", type=Path, help="Settings file (defaults to the bundled one)")
    serve.add_argument("--output-root", type=Path, help="Directory holding the JSON tables")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5000)
    serve.set_defaults(handler=_command_serve)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``language-unpack`` command."""

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args)
    except (ExtractionError, ConfigurationError, FileNotFoundError, ValueError) as error:
        _LOGGER.error("%s", error)
        print(f"error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
