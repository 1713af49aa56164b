"""Column layout and value formatting shared by every export format."""
from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional

from bgdtracker.core.models import BgdRecord
from bgdtracker.core.utils import strip_non_digits

EXPORT_HEADERS = [
    "Sl No",
    "Email",
    "Mobile Number",
    "Login Password",
    "Email Password",
    "IVAC Center",
    "Assigned Person",
    "Total BGD File",
    "File Starting Date",
    "File Success Date",
    "Note",
    "Status",
]

TEMPLATE_SAMPLE_ROWS = [
    ["1", "user1@gmail.com", "+8801234567890", "123456", "email123", "Dhaka", "John Doe", "5",
     "2024-01-15", "2024-01-20", "Sample note", "Done"],
    ["2", "user2@gmail.com", "+8801987654321", "123456", "email456", "Chittagong", "Jane Smith", "3",
     "2024-01-16", "", "Another note", "Processing"],
]


def zero_padded_mobile(mobile: str) -> str:
    """Digits only, with a leading zero added when the number lacks one."""

    digits = strip_non_digits(mobile)
    if not digits:
        return mobile or ""
    return digits if digits.startswith("0") else f"0{digits}"


def format_mobile_for_csv(mobile: str) -> str:
    """Wrap the number in a text formula so spreadsheets keep the leading zero."""

    if not mobile:
        return ""
    if not strip_non_digits(mobile):
        return mobile
    return f'="{zero_padded_mobile(mobile)}"'


def format_mobile_for_html(mobile: str) -> str:
    if not mobile:
        return ""
    return zero_padded_mobile(mobile)


def record_to_export_row(record: BgdRecord) -> Dict[str, str]:
    """Convert a record into a header-keyed row of display values."""

    return {
        "Sl No": str(record.sl_no),
        "Email": record.email,
        "Mobile Number": record.mobile_number,
        "Login Password": record.login_password or "",
        "Email Password": record.email_password or "",
        "IVAC Center": record.ivac_center,
        "Assigned Person": record.assigned_person or "",
        "Total BGD File": str(record.total_bgd_file) if record.total_bgd_file else "",
        "File Starting Date": record.file_starting_date,
        "File Success Date": record.file_success_date or "",
        "Note": record.note or "",
        "Status": record.status,
    }


def records_to_export_rows(records: Iterable[BgdRecord]) -> List[Dict[str, str]]:
    return [record_to_export_row(record) for record in records]


def export_filename(extension: str, day: Optional[date] = None) -> str:
    """Return the dated download name, e.g. ``bgd_records_export_2024-01-31.csv``."""

    stamp = (day or date.today()).isoformat()
    return f"bgd_records_export_{stamp}.{extension.lstrip('.')}"
