"""Validation rules for candidate records.

Interactive submissions go through :func:`validate_candidate`, which checks
rules in a fixed order and stops at the first violation. Bulk rows go through
:func:`validate_bulk_candidate`, which only re-checks presence of the bulk
field list and that the numeric fields can be read as integers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from bgdtracker.core.errors import ValidationFailure
from bgdtracker.core.models import RecordCandidate
from bgdtracker.core.schema import BULK_REQUIRED_FIELDS, REQUIRED_FIELDS, field_label
from bgdtracker.core.utils import parse_int_prefix, strip_non_digits

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_DIGITS = 11
DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
]


@dataclass(frozen=True)
class ValidatedFields:
    """Values parsed once at the boundary so the store never re-reads strings."""

    sl_no: int
    total_bgd_file: int
    mobile_number: str
    file_starting_date: str
    file_success_date: str


def parse_date(raw: str) -> Optional[date]:
    """Return a calendar date for the accepted input formats, or None."""

    text = (raw or "").strip()
    if not text or not text.isascii():
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


def is_valid_mobile(value: str) -> bool:
    """Exactly 11 digits once every non-digit character is dropped."""

    return len(strip_non_digits(value)) == MOBILE_DIGITS


def _positive_int(raw: str) -> Optional[int]:
    parsed = parse_int_prefix(raw)
    if parsed is None or parsed < 1:
        return None
    return parsed


def check_presence(candidate: RecordCandidate, required: List[str] = REQUIRED_FIELDS) -> None:
    for key in required:
        if not candidate.value(key):
            raise ValidationFailure(key, "required", f"{field_label(key)} is required!")


def validate_candidate(candidate: RecordCandidate) -> ValidatedFields:
    """Run the interactive rules in order and return the parsed values.

    Raises :class:`ValidationFailure` for the first rule that fails.
    """

    check_presence(candidate)

    if not is_valid_email(candidate.email):
        raise ValidationFailure("email", "email_format", "Please enter a valid email address!")

    if not is_valid_mobile(candidate.mobile_number):
        raise ValidationFailure(
            "mobile_number", "mobile_length", "Mobile number must be exactly 11 digits!"
        )

    starting = parse_date(candidate.file_starting_date)
    if starting is None:
        raise ValidationFailure(
            "file_starting_date", "date_format", "Please enter a valid file starting date!"
        )

    success_text = ""
    if candidate.file_success_date:
        success = parse_date(candidate.file_success_date)
        if success is None:
            raise ValidationFailure(
                "file_success_date", "date_format", "Please enter a valid file success date!"
            )
        if success < starting:
            raise ValidationFailure(
                "file_success_date",
                "date_order",
                "File success date must be after file starting date!",
            )
        success_text = success.isoformat()

    sl_no = _positive_int(candidate.sl_no)
    if sl_no is None:
        raise ValidationFailure("sl_no", "positive_integer", "Serial number must be a positive number!")

    total = _positive_int(candidate.total_bgd_file)
    if total is None:
        raise ValidationFailure(
            "total_bgd_file", "positive_integer", "Total BGD file must be a positive number!"
        )

    return ValidatedFields(
        sl_no=sl_no,
        total_bgd_file=total,
        mobile_number=strip_non_digits(candidate.mobile_number),
        file_starting_date=starting.isoformat(),
        file_success_date=success_text,
    )


def validation_error(candidate: RecordCandidate) -> Optional[ValidationFailure]:
    """Return the first violated rule for ``candidate``, or None when valid."""

    try:
        validate_candidate(candidate)
    except ValidationFailure as exc:
        return exc
    return None


def _normalized_date_text(raw: str) -> str:
    parsed = parse_date(raw)
    return parsed.isoformat() if parsed else raw


def validate_bulk_candidate(candidate: RecordCandidate) -> ValidatedFields:
    """Presence-only checks for imported rows.

    Email, mobile, and date shapes are not enforced. Serial number and file
    count must still start with an integer because ordering and the serial
    counter depend on them.
    """

    missing = candidate.missing(BULK_REQUIRED_FIELDS)
    if missing:
        labels = ", ".join(field_label(key) for key in missing)
        raise ValidationFailure(missing[0], "required", f"Missing required fields: {labels}")

    sl_no = parse_int_prefix(candidate.sl_no)
    if sl_no is None:
        raise ValidationFailure("sl_no", "integer", "Serial number must be a number!")

    total = parse_int_prefix(candidate.total_bgd_file)
    if total is None:
        raise ValidationFailure("total_bgd_file", "integer", "Total BGD file must be a number!")

    return ValidatedFields(
        sl_no=sl_no,
        total_bgd_file=total,
        mobile_number=candidate.mobile_number,
        file_starting_date=_normalized_date_text(candidate.file_starting_date),
        file_success_date=_normalized_date_text(candidate.file_success_date),
    )
