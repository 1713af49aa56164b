"""Parsing and bulk import of tabular record data."""
from bgdtracker.ingestion.importer import (
    HEADER_SYNONYMS,
    PASTE_COLUMNS,
    BulkImporter,
    ImportReport,
    map_headers,
    row_to_candidate,
)
from bgdtracker.ingestion.parsing import (
    clean_cell,
    parse_csv_row,
    parse_csv_text,
    parse_paste_text,
    split_paste_line,
)

__all__ = [
    "HEADER_SYNONYMS",
    "PASTE_COLUMNS",
    "BulkImporter",
    "ImportReport",
    "clean_cell",
    "map_headers",
    "parse_csv_row",
    "parse_csv_text",
    "parse_paste_text",
    "row_to_candidate",
    "split_paste_line",
]
