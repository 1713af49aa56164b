"""Identity-conflict detection against the existing collection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from bgdtracker.core.errors import DuplicateConflict
from bgdtracker.core.models import BgdRecord


class _Identity(Protocol):
    email: str
    mobile_number: str


@dataclass(frozen=True)
class DuplicateMatch:
    """The first existing record that collides with a candidate."""

    record: BgdRecord
    field: str
    value: str

    def to_error(self) -> DuplicateConflict:
        return DuplicateConflict(self.field, self.value, existing=self.record)


def find_duplicate(
    candidate: _Identity,
    records: Iterable[BgdRecord],
    exclude_id: Optional[str] = None,
) -> Optional[DuplicateMatch]:
    """Return the first record sharing the email (any case) or the exact mobile number.

    Records are scanned in collection order. When one record collides on both
    fields, the email is reported.
    """

    email = (candidate.email or "").lower()
    mobile = candidate.mobile_number or ""
    for record in records:
        if exclude_id is not None and record.id == exclude_id:
            continue
        if record.email.lower() == email:
            return DuplicateMatch(record, "email", candidate.email)
        if record.mobile_number == mobile:
            return DuplicateMatch(record, "mobile_number", candidate.mobile_number)
    return None


def check_duplicates(
    candidate: _Identity,
    records: Iterable[BgdRecord],
    exclude_id: Optional[str] = None,
) -> None:
    """Raise :class:`DuplicateConflict` when ``candidate`` collides with a record."""

    match = find_duplicate(candidate, records, exclude_id)
    if match:
        raise match.to_error()
