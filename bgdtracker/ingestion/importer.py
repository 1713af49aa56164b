"""Bulk import of CSV files and pasted spreadsheet rows through the store's create path."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from bgdtracker.core.errors import DuplicateConflict, ImportRowError, ValidationFailure
from bgdtracker.core.models import BgdRecord, RecordCandidate
from bgdtracker.core.schema import FIELD_KEYS, FIELDS
from bgdtracker.ingestion.parsing import parse_csv_text, parse_paste_text
from bgdtracker.records.store import RecordStore

logger = logging.getLogger(__name__)

HEADER_SYNONYMS: Dict[str, str] = {
    "sl no": "sl_no",
    "sl. no": "sl_no",
    "serial no": "sl_no",
    "serial number": "sl_no",
    "email": "email",
    "email address": "email",
    "mobile": "mobile_number",
    "mobile number": "mobile_number",
    "phone": "mobile_number",
    "phone number": "mobile_number",
    "login password": "login_password",
    "password": "login_password",
    "email password": "email_password",
    "assigned person": "assigned_person",
    "assigned person for this bgd file": "assigned_person",
    "ivac center": "ivac_center",
    "center": "ivac_center",
    "total bgd file": "total_bgd_file",
    "bgd file": "total_bgd_file",
    "file starting date": "file_starting_date",
    "starting date": "file_starting_date",
    "start date": "file_starting_date",
    "file success date": "file_success_date",
    "success date": "file_success_date",
    "end date": "file_success_date",
    "note": "note",
    "notes": "note",
}
# Field keys in either spelling map to themselves.
for _spec in FIELDS:
    HEADER_SYNONYMS.setdefault(_spec.key, _spec.key)
    HEADER_SYNONYMS.setdefault(_spec.storage_key.lower(), _spec.key)

PASTE_COLUMNS: List[str] = list(FIELD_KEYS)


@dataclass
class ImportReport:
    """Outcome of one batch: counts, collected row errors, and created records."""

    imported: int = 0
    skipped: int = 0
    errors: List[ImportRowError] = field(default_factory=list)
    records: List[BgdRecord] = field(default_factory=list)

    @property
    def level(self) -> str:
        return "success" if self.imported else "warning"

    def summary(self) -> str:
        message = f"Import completed: {self.imported} records imported"
        if self.skipped:
            message += f", {self.skipped} records skipped"
        if self.errors:
            message += f" ({len(self.errors)} errors)"
        return message


def map_headers(headers: Iterable[str]) -> List[str]:
    """Map header cells to field keys; unknown headers pass through lower-cased."""

    mapped = []
    for header in headers:
        normalized = " ".join((header or "").split()).lower()
        mapped.append(HEADER_SYNONYMS.get(normalized, normalized))
    return mapped


def row_to_candidate(mapped_headers: Sequence[str], row: Sequence[str]) -> RecordCandidate:
    """Pair cells with mapped headers; cells beyond the header row are dropped."""

    values = {header: cell for header, cell in zip(mapped_headers, row)}
    return RecordCandidate.from_mapping(values)


class BulkImporter:
    """Feed tabular rows through :meth:`RecordStore.create` and collect per-row outcomes."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def import_rows(
        self,
        headers: Sequence[str],
        rows: Iterable[Sequence[str]],
        first_row: int = 1,
    ) -> ImportReport:
        """Import ``rows`` whose columns are described by ``headers``.

        ``first_row`` is the number reported for the first data row in
        error messages.
        """

        mapped = map_headers(headers)
        report = ImportReport()

        for row_number, row in enumerate(rows, start=first_row):
            if not row or all(not (cell or "").strip() for cell in row):
                report.skipped += 1
                continue

            candidate = row_to_candidate(mapped, row)
            try:
                record = self.store.create(candidate, bulk=True)
            except (ValidationFailure, DuplicateConflict) as exc:
                error = ImportRowError(row_number, exc.message)
                report.errors.append(error)
                report.skipped += 1
                logger.warning("Skipped import row: %s", error)
                continue

            report.records.append(record)
            report.imported += 1

        logger.info(
            "Import finished: %d imported, %d skipped", report.imported, report.skipped
        )
        return report

    def import_csv_text(self, text: str) -> ImportReport:
        """Import a CSV document; errors cite the CSV record number, with the header as record 1."""

        headers, rows = parse_csv_text(text)
        return self.import_rows(headers, rows, first_row=2)

    def import_csv_file(self, path: Path) -> ImportReport:
        logger.info("Importing CSV file %s", path)
        return self.import_csv_text(Path(path).read_text(encoding="utf-8-sig"))

    def import_paste_text(self, text: str) -> ImportReport:
        """Import pasted rows laid out in the fixed positional column order."""

        if not (text or "").strip():
            raise ValidationFailure("paste", "required", "Please paste some data first!")
        return self.import_rows(PASTE_COLUMNS, parse_paste_text(text))
