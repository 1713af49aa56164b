"""Error taxonomy for record operations.

Every error carries the single human-readable message shown to the user.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class RecordError(Exception):
    """Base class for recoverable record-management failures."""

    @property
    def message(self) -> str:
        return str(self)


class ValidationFailure(RecordError):
    """A field violated one of the validation rules."""

    def __init__(self, field: str, rule: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.rule = rule


class DuplicateConflict(RecordError):
    """The candidate's email or mobile number is already used by another record."""

    def __init__(self, field: str, value: str, existing: Any = None) -> None:
        label = "Email" if field == "email" else "Mobile number"
        super().__init__(f'{label} "{value}" already exists')
        self.field = field
        self.value = value
        self.existing = existing


class RecordNotFound(RecordError):
    """An operation referenced an id that is not in the collection."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Record {record_id} not found")
        self.record_id = record_id


class StorageError(RecordError):
    """The persistent store refused a write."""


class AuthorizationError(RecordError):
    """The confirmation secret did not match."""


@dataclass(frozen=True)
class ImportRowError:
    """A single rejected row collected during a bulk import."""

    row: int
    message: str

    def __str__(self) -> str:
        return f"Row {self.row}: {self.message}"
