"""Core building blocks for the bgdtracker package."""
from bgdtracker.core.auth import AuthorizationGate
from bgdtracker.core.config import Settings, load_settings
from bgdtracker.core.errors import (
    AuthorizationError,
    DuplicateConflict,
    ImportRowError,
    RecordError,
    RecordNotFound,
    StorageError,
    ValidationFailure,
)
from bgdtracker.core.logging import configure_logging
from bgdtracker.core.models import BgdRecord, RecordCandidate
from bgdtracker.core.schema import FIELDS, FieldSpec, field_label

__all__ = [
    "AuthorizationError",
    "AuthorizationGate",
    "BgdRecord",
    "DuplicateConflict",
    "FIELDS",
    "FieldSpec",
    "ImportRowError",
    "RecordCandidate",
    "RecordError",
    "RecordNotFound",
    "Settings",
    "StorageError",
    "ValidationFailure",
    "configure_logging",
    "field_label",
    "load_settings",
]
