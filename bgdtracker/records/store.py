"""In-memory record collection with the serial counter and persistence hooks."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, List, Optional, Tuple

from bgdtracker.core.errors import RecordNotFound, StorageError
from bgdtracker.core.models import BgdRecord, RecordCandidate
from bgdtracker.records.duplicates import check_duplicates
from bgdtracker.records.validator import (
    ValidatedFields,
    validate_bulk_candidate,
    validate_candidate,
)
from bgdtracker.storage.backends import StorageBackend

logger = logging.getLogger(__name__)

COPY_MARKER = "_copy"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


def _copy_email(email: str) -> str:
    local, at, domain = email.partition("@")
    if not at:
        return f"{email}{COPY_MARKER}"
    return f"{local}{COPY_MARKER}@{domain}"


class RecordStore:
    """Owns the record collection and the auto-increment serial counter.

    Every mutation builds the next state, saves it through the backend, and
    only then replaces the in-memory state, so a failed save leaves the
    collection untouched.
    """

    def __init__(
        self,
        backend: StorageBackend,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._backend = backend
        self._clock = clock or _utc_now
        self._id_factory = id_factory or _new_id
        self._records: List[BgdRecord] = []
        self._counter = 1
        self.reload()

    def reload(self) -> None:
        """Replace the in-memory state with what the backend holds."""

        state = self._backend.load()
        records: List[BgdRecord] = []
        counter = 1
        if state:
            try:
                records = [BgdRecord.from_storage(item) for item in state.get("records") or []]
                counter = int(state.get("currentRecordId") or 1)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Stored records are corrupt, starting empty: %s", exc)
                records, counter = [], 1
        if records:
            counter = max(counter, max(record.sl_no for record in records) + 1)
        self._records = records
        self._counter = counter
        logger.info("Loaded %d records (next serial %d)", len(records), counter)

    @property
    def records(self) -> Tuple[BgdRecord, ...]:
        return tuple(self._records)

    @property
    def next_serial(self) -> int:
        """Serial number suggested for the next record."""

        return self._counter

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[BgdRecord]:
        return iter(list(self._records))

    def get(self, record_id: str) -> Optional[BgdRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def _timestamp(self) -> str:
        return self._clock().isoformat(timespec="milliseconds")

    def _commit(self, records: List[BgdRecord], counter: int) -> None:
        state: dict[str, Any] = {
            "records": [record.to_storage() for record in records],
            "currentRecordId": counter,
        }
        try:
            self._backend.save(state)
        except OSError as exc:
            logger.error("Failed to persist %d records: %s", len(records), exc)
            raise StorageError(f"Could not save records: {exc}") from exc
        self._records = records
        self._counter = counter

    @staticmethod
    def _build(record_id: str, candidate: RecordCandidate, parsed: ValidatedFields, created_at: str) -> BgdRecord:
        return BgdRecord(
            id=record_id,
            sl_no=parsed.sl_no,
            email=candidate.email,
            mobile_number=parsed.mobile_number,
            login_password=candidate.login_password,
            ivac_center=candidate.ivac_center,
            total_bgd_file=parsed.total_bgd_file,
            file_starting_date=parsed.file_starting_date,
            assigned_person=candidate.assigned_person,
            email_password=candidate.email_password,
            file_success_date=parsed.file_success_date,
            note=candidate.note,
            created_at=created_at,
        )

    def create(self, candidate: RecordCandidate, bulk: bool = False) -> BgdRecord:
        """Validate, check duplicates, and append a new record.

        ``bulk`` switches to the import rules: presence of the bulk field list
        only, without email, mobile, or date shape checks.
        """

        parsed = validate_bulk_candidate(candidate) if bulk else validate_candidate(candidate)
        normalized = replace(candidate, mobile_number=parsed.mobile_number)
        check_duplicates(normalized, self._records)

        record = self._build(self._id_factory(), normalized, parsed, self._timestamp())
        counter = max(self._counter, record.sl_no + 1)
        self._commit(self._records + [record], counter)
        logger.info("Created record %s (serial %d)", record.id, record.sl_no)
        return record

    def update(self, record_id: str, candidate: RecordCandidate) -> BgdRecord:
        """Replace the record with ``record_id`` in place, keeping its creation time."""

        index = next((i for i, r in enumerate(self._records) if r.id == record_id), None)
        if index is None:
            logger.warning("Update skipped, record %s not found", record_id)
            raise RecordNotFound(record_id)

        parsed = validate_candidate(candidate)
        normalized = replace(candidate, mobile_number=parsed.mobile_number)
        check_duplicates(normalized, self._records, exclude_id=record_id)

        current = self._records[index]
        record = self._build(record_id, normalized, parsed, current.created_at)
        record.updated_at = self._timestamp()
        records = list(self._records)
        records[index] = record
        self._commit(records, self._counter)
        logger.info("Updated record %s", record_id)
        return record

    def delete(self, record_id: str) -> Optional[BgdRecord]:
        """Remove the record if present; returns it, or None when nothing matched."""

        removed = self.get(record_id)
        remaining = [record for record in self._records if record.id != record_id]
        self._commit(remaining, self._counter)
        if removed:
            logger.info("Deleted record %s", record_id)
        else:
            logger.info("Delete requested for unknown record %s", record_id)
        return removed

    def duplicate(self, record_id: str) -> BgdRecord:
        """Clone a record under the next serial with ``_copy`` markers on email and mobile.

        The markers keep the clone from colliding with its source until the
        user edits both fields.
        """

        source = self.get(record_id)
        if source is None:
            raise RecordNotFound(record_id)

        clone = replace(
            source,
            id=self._id_factory(),
            sl_no=self._counter,
            email=_copy_email(source.email),
            mobile_number=f"{source.mobile_number}{COPY_MARKER}",
            created_at=self._timestamp(),
            updated_at=None,
        )
        self._commit(self._records + [clone], self._counter + 1)
        logger.info("Duplicated record %s as %s (serial %d)", record_id, clone.id, clone.sl_no)
        return clone

    def clear(self) -> int:
        """Drop every record and reset the serial counter; returns how many were removed."""

        removed = len(self._records)
        self._commit([], 1)
        logger.info("Cleared %d records", removed)
        return removed
