"""Declarative definition of the fields carried by a BGD file record."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

DEFAULT_LOGIN_PASSWORD = "123456"
DEFAULT_EMAIL_PREFILL = "@gmail.com"


@dataclass(frozen=True)
class FieldSpec:
    """One recognized record field.

    ``required`` applies to interactive submissions; ``bulk_required`` is the
    narrower list enforced for CSV and pasted rows.
    """

    key: str
    storage_key: str
    label: str
    required: bool = False
    bulk_required: bool = False


# Ordered as the positional columns of a bulk paste.
FIELDS: List[FieldSpec] = [
    FieldSpec("sl_no", "slNo", "Serial Number", required=True, bulk_required=True),
    FieldSpec("email", "email", "Email", required=True, bulk_required=True),
    FieldSpec("mobile_number", "mobileNumber", "Mobile Number", required=True, bulk_required=True),
    FieldSpec("login_password", "loginPassword", "Login Password", required=True, bulk_required=True),
    FieldSpec("email_password", "emailPassword", "Email Password"),
    FieldSpec("ivac_center", "ivacCenter", "IVAC Center", required=True, bulk_required=True),
    FieldSpec(
        "assigned_person",
        "assignedPerson",
        "Assigned person for this BGD file",
        required=True,
    ),
    FieldSpec("total_bgd_file", "totalBgdFile", "Total BGD File", required=True, bulk_required=True),
    FieldSpec(
        "file_starting_date",
        "fileStartingDate",
        "File Starting Date",
        required=True,
        bulk_required=True,
    ),
    FieldSpec("file_success_date", "fileSuccessDate", "File Success Date"),
    FieldSpec("note", "note", "Note"),
]

FIELD_KEYS: List[str] = [spec.key for spec in FIELDS]
FIELDS_BY_KEY: Dict[str, FieldSpec] = {spec.key: spec for spec in FIELDS}
STORAGE_TO_KEY: Dict[str, str] = {spec.storage_key: spec.key for spec in FIELDS}

# Presence is checked in this order, which is also the order messages report.
REQUIRED_FIELDS: List[str] = [
    "sl_no",
    "email",
    "mobile_number",
    "login_password",
    "assigned_person",
    "ivac_center",
    "total_bgd_file",
    "file_starting_date",
]
BULK_REQUIRED_FIELDS: List[str] = [spec.key for spec in FIELDS if spec.bulk_required]


def canonical_key(name: str) -> str | None:
    """Resolve a snake_case or camelCase field name to its schema key."""

    if name in FIELDS_BY_KEY:
        return name
    return STORAGE_TO_KEY.get(name)


def field_label(name: str) -> str:
    """Return the human-readable label used in messages, or the name itself."""

    key = canonical_key(name)
    return FIELDS_BY_KEY[key].label if key else name
