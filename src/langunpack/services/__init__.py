"""Service-layer helpers for resolving and publishing catalog text."""

from .artifacts import read_table, write_table
from .extraction import ExtractionFailure, ExtractionReport, extract_all
from .pipeline import OutputTable, ResolvedEntry, SourceRow, resolve, source_rows_for
from .sources import SQLiteRowSource
from .transforms import alphanumeric_title_case, derive_output_id

__all__ = [
    "ExtractionFailure",
    "ExtractionReport",
    "OutputTable",
    "ResolvedEntry",
    "SQLiteRowSource",
    "SourceRow",
    "alphanumeric_title_case",
    "derive_output_id",
    "extract_all",
    "read_table",
    "resolve",
    "source_rows_for",
    "write_table",
]
