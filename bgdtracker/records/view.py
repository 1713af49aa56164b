"""Filtered, sorted projection of the collection shared by the table and exports."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from bgdtracker.core.models import BgdRecord


@dataclass(frozen=True)
class ViewCriteria:
    """Active filters; blank values are inactive.

    ``date_from`` and ``date_to`` are inclusive ISO dates compared as text.
    """

    search: str = ""
    center: str = ""
    date_from: str = ""
    date_to: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.search.strip() or self.center or self.date_from or self.date_to)


def matches_search(record: BgdRecord, term: str) -> bool:
    """Case-insensitive substring match on email, mobile, center, and login password."""

    haystacks = [
        record.email,
        record.mobile_number,
        record.ivac_center,
        record.login_password,
    ]
    return any(term in (value or "").lower() for value in haystacks)


def filtered_view(records: Iterable[BgdRecord], criteria: ViewCriteria | None = None) -> List[BgdRecord]:
    """Return the records matching every active criterion, highest serial first."""

    criteria = criteria or ViewCriteria()
    term = criteria.search.strip().lower()

    selected = [
        record
        for record in records
        if (not term or matches_search(record, term))
        and (not criteria.center or record.ivac_center == criteria.center)
        and (not criteria.date_from or record.file_starting_date >= criteria.date_from)
        and (not criteria.date_to or record.file_starting_date <= criteria.date_to)
    ]
    selected.sort(key=lambda record: record.sl_no, reverse=True)
    return selected


def count_label(filtered: Sequence[BgdRecord], total: int) -> str:
    """Return "N" when nothing is filtered out, otherwise "N of M"."""

    shown = len(filtered)
    return str(total) if shown == total else f"{shown} of {total}"


def center_options(records: Iterable[BgdRecord]) -> List[str]:
    """Distinct non-blank centers for the exact-match filter, sorted."""

    return sorted({record.ivac_center for record in records if record.ivac_center})


def empty_view_message(criteria: ViewCriteria | None = None) -> str:
    """Message shown in place of an empty view."""

    if criteria is not None and criteria.is_active:
        return "No records match the current filters."
    return "No records found. Add some records to get started!"
