"""Data models for BGD file processing records."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

from bgdtracker.core.schema import FIELD_KEYS, FIELDS, canonical_key
from bgdtracker.core.utils import parse_int_prefix

STATUS_DONE = "Done"
STATUS_PROCESSING = "Processing"


@dataclass
class RecordCandidate:
    """Unvalidated input from a form, CSV row, or pasted row.

    Every value is text; surrounding whitespace is trimmed on construction.
    """

    sl_no: str = ""
    email: str = ""
    mobile_number: str = ""
    login_password: str = ""
    email_password: str = ""
    ivac_center: str = ""
    assigned_person: str = ""
    total_bgd_file: str = ""
    file_starting_date: str = ""
    file_success_date: str = ""
    note: str = ""

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            setattr(self, item.name, "" if value is None else str(value).strip())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecordCandidate":
        """Build a candidate from snake_case or camelCase keys, ignoring unknown ones."""

        values: Dict[str, Any] = {}
        for name, value in data.items():
            key = canonical_key(str(name))
            if key:
                values[key] = value
        return cls(**values)

    def value(self, key: str) -> str:
        return getattr(self, key)

    def missing(self, required: List[str]) -> List[str]:
        """Return the required keys whose values are blank, in schema order."""

        return [key for key in required if not self.value(key)]

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class BgdRecord:
    """A stored BGD file processing task."""

    id: str
    sl_no: int
    email: str
    mobile_number: str
    login_password: str
    ivac_center: str
    total_bgd_file: int
    file_starting_date: str
    assigned_person: str = ""
    email_password: str = ""
    file_success_date: str = ""
    note: str = ""
    created_at: str = ""
    updated_at: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return bool(self.file_success_date and self.file_success_date.strip())

    @property
    def status(self) -> str:
        """Derived status: Done once a success date is recorded."""

        return STATUS_DONE if self.is_done else STATUS_PROCESSING

    def business_fields(self) -> Dict[str, str]:
        """Return the user-facing field values as text, keyed by schema key."""

        return {key: str(getattr(self, key)) for key in FIELD_KEYS}

    def to_candidate(self) -> RecordCandidate:
        """Return the record as form input, used to prefill edits."""

        return RecordCandidate(**self.business_fields())

    def to_storage(self) -> Dict[str, Any]:
        """Serialize using the camelCase transport keys (serial and count as text)."""

        data: Dict[str, Any] = {"id": self.id}
        for spec in FIELDS:
            data[spec.storage_key] = str(getattr(self, spec.key))
        data["createdAt"] = self.created_at
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_storage(cls, data: Mapping[str, Any]) -> "BgdRecord":
        """Rebuild a record from its transport form.

        Raises ``KeyError`` when the id is missing so callers can treat the
        payload as corrupt.
        """

        values = RecordCandidate.from_mapping(data).to_dict()
        updated_at = data.get("updatedAt")
        return cls(
            id=str(data["id"]),
            sl_no=parse_int_prefix(values.pop("sl_no")) or 0,
            total_bgd_file=parse_int_prefix(values.pop("total_bgd_file")) or 0,
            created_at=str(data.get("createdAt") or ""),
            updated_at=str(updated_at) if updated_at else None,
            **values,
        )
