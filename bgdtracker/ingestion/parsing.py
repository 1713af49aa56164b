"""Helpers that split CSV files and pasted text into trimmed cells."""
from __future__ import annotations

import csv
import io
import re
from typing import List, Tuple

from bgdtracker.core.errors import ValidationFailure

BOM = "\ufeff"
# Spreadsheet text formula written by the CSV export to keep leading zeros.
_FORMULA_TEXT = re.compile(r'^="(.*)"$')


def clean_cell(value: str) -> str:
    """Trim a cell and unwrap the ``="0171..."`` form produced by exports."""

    text = (value or "").strip()
    match = _FORMULA_TEXT.match(text)
    if match:
        return match.group(1).replace('""', '"').strip()
    return text


def _read_error(exc: csv.Error) -> ValidationFailure:
    return ValidationFailure("file", "csv_shape", f"Error reading CSV file: {exc}")


def _is_blank_line(row: List[str]) -> bool:
    return len(row) <= 1 and not "".join(row).strip()


def parse_csv_row(line: str) -> List[str]:
    """Split one comma-separated line, honouring quotes and doubled-quote escapes."""

    try:
        rows = list(csv.reader([line], skipinitialspace=True))
    except csv.Error as exc:
        raise _read_error(exc) from exc
    if not rows or not rows[0]:
        return [""]
    return [clean_cell(cell) for cell in rows[0]]


def split_paste_line(line: str) -> List[str]:
    """Split a pasted line on tabs when any tab is present, otherwise as CSV."""

    if "\t" in line:
        return [clean_cell(cell) for cell in line.split("\t")]
    return parse_csv_row(line)


def parse_csv_text(text: str) -> Tuple[List[str], List[List[str]]]:
    """Return the header cells and data rows of a CSV document.

    Blank lines are dropped before rows are counted. Raises
    :class:`ValidationFailure` when the text is not readable CSV or has no
    data row after the header.
    """

    reader = csv.reader(io.StringIO(text.lstrip(BOM)), skipinitialspace=True)
    try:
        rows = [[clean_cell(cell) for cell in row] for row in reader if not _is_blank_line(row)]
    except csv.Error as exc:
        raise _read_error(exc) from exc
    if len(rows) < 2:
        raise ValidationFailure(
            "file", "csv_shape", "CSV file must contain headers and at least one data row!"
        )
    return rows[0], rows[1:]


def parse_paste_text(text: str) -> List[List[str]]:
    """Split pasted text into rows of cells, skipping blank lines."""

    return [split_paste_line(line) for line in text.splitlines() if line.strip()]
