"""Record tracking for BGD file processing tasks."""
from bgdtracker.core import (
    AuthorizationGate,
    BgdRecord,
    DuplicateConflict,
    ImportRowError,
    RecordCandidate,
    RecordError,
    RecordNotFound,
    ValidationFailure,
    configure_logging,
    load_settings,
)
from bgdtracker.export import render_csv, render_html, write_excel
from bgdtracker.ingestion import BulkImporter, ImportReport
from bgdtracker.records import (
    RecordStore,
    ViewCriteria,
    filtered_view,
    find_duplicate,
    validate_candidate,
    validation_error,
)
from bgdtracker.storage import JsonFileBackend, MemoryBackend

__all__ = [
    "AuthorizationGate",
    "BgdRecord",
    "BulkImporter",
    "DuplicateConflict",
    "ImportReport",
    "ImportRowError",
    "JsonFileBackend",
    "MemoryBackend",
    "RecordCandidate",
    "RecordError",
    "RecordNotFound",
    "RecordStore",
    "ValidationFailure",
    "ViewCriteria",
    "configure_logging",
    "filtered_view",
    "find_duplicate",
    "load_settings",
    "render_csv",
    "render_html",
    "validate_candidate",
    "validation_error",
    "write_excel",
]
