"""Validation, duplicate detection, the record store, and the filtered view."""
from bgdtracker.records.duplicates import DuplicateMatch, check_duplicates, find_duplicate
from bgdtracker.records.store import RecordStore
from bgdtracker.records.validator import (
    ValidatedFields,
    is_valid_email,
    is_valid_mobile,
    parse_date,
    validate_bulk_candidate,
    validate_candidate,
    validation_error,
)
from bgdtracker.records.view import (
    ViewCriteria,
    center_options,
    count_label,
    empty_view_message,
    filtered_view,
)

__all__ = [
    "DuplicateMatch",
    "RecordStore",
    "ValidatedFields",
    "ViewCriteria",
    "center_options",
    "check_duplicates",
    "count_label",
    "empty_view_message",
    "filtered_view",
    "find_duplicate",
    "is_valid_email",
    "is_valid_mobile",
    "parse_date",
    "validate_bulk_candidate",
    "validate_candidate",
    "validation_error",
]
