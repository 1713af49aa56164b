"""Export sinks for the filtered record view: CSV, HTML, Excel, and Google Sheets."""
from __future__ import annotations

import html
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from bgdtracker.core.models import BgdRecord
from bgdtracker.core.utils import get_config_value
from bgdtracker.export.templates import (
    EXPORT_HEADERS,
    TEMPLATE_SAMPLE_ROWS,
    format_mobile_for_csv,
    format_mobile_for_html,
    records_to_export_rows,
    zero_padded_mobile,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"
MOBILE_COLUMN = "Mobile Number"
DEFAULT_SERVICE_ACCOUNT_PATHS = [
    Path("secrets/service_account.json"),
    Path("credentials/service_account.json"),
]


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def _quote(value: Any) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def render_csv(records: Iterable[BgdRecord]) -> str:
    """Render records as BOM-prefixed CSV.

    Every cell is quoted except the mobile number, which is written as a
    text formula so spreadsheets keep its leading zero.
    """

    lines = [",".join(EXPORT_HEADERS)]
    for row in records_to_export_rows(records):
        cells = []
        for header in EXPORT_HEADERS:
            if header == MOBILE_COLUMN:
                cells.append(format_mobile_for_csv(row[header]))
            else:
                cells.append(_quote(row[header]))
        lines.append(",".join(cells))
    return BOM + "\n".join(lines)


def render_template_csv() -> str:
    """Return the downloadable import template with two sample rows."""

    lines = [",".join(EXPORT_HEADERS)]
    lines.extend(",".join(_quote(cell) for cell in row) for row in TEMPLATE_SAMPLE_ROWS)
    return BOM + "\n".join(lines)


def render_html(records: Iterable[BgdRecord], generated_at: Optional[datetime] = None) -> str:
    """Render an Excel-compatible HTML table of the records."""

    generated = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    header_cells = "".join(f"<th>{html.escape(header)}</th>" for header in EXPORT_HEADERS)
    body_rows: List[str] = []
    for row in records_to_export_rows(records):
        cells = []
        for header in EXPORT_HEADERS:
            value = row[header]
            if header == MOBILE_COLUMN:
                cells.append(
                    f"<td style=\"mso-number-format:'\\@'\">{html.escape(format_mobile_for_html(value))}</td>"
                )
            elif header in ("File Starting Date", "File Success Date"):
                cells.append(f'<td class="date">{html.escape(value)}</td>')
            else:
                cells.append(f"<td>{html.escape(value)}</td>")
        body_rows.append("<tr>" + "".join(cells) + "</tr>")

    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="UTF-8">\n'
        "<title>BGD Records Export</title>\n"
        "<style>\n"
        "table { border-collapse: collapse; width: 100%; font-family: Arial, sans-serif; }\n"
        "th, td { border: 1px solid #000; padding: 8px; text-align: left; }\n"
        "th { background-color: #f2f2f2; font-weight: bold; }\n"
        '.date { mso-number-format: "dd/mm/yyyy"; }\n'
        "</style>\n</head>\n<body>\n"
        "<h1>BGD Records Export</h1>\n"
        f"<p>Generated on: {generated}</p>\n"
        f"<table>\n<thead><tr>{header_cells}</tr></thead>\n<tbody>\n"
        + "\n".join(body_rows)
        + "\n</tbody>\n</table>\n</body>\n</html>\n"
    )


def write_csv(records: Iterable[BgdRecord], output_path: Path) -> Path:
    ensure_output_dir(output_path)
    output_path.write_text(render_csv(records), encoding="utf-8")
    logger.info("Wrote CSV export to %s", output_path)
    return output_path


def write_html(records: Iterable[BgdRecord], output_path: Path) -> Path:
    ensure_output_dir(output_path)
    output_path.write_text(render_html(records), encoding="utf-8")
    logger.info("Wrote HTML export to %s", output_path)
    return output_path


def _build_workbook(records: Iterable[BgdRecord]):
    try:
        from openpyxl import Workbook
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("openpyxl is required for Excel exports") from exc

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "bgd_records"
    sheet.append(EXPORT_HEADERS)
    mobile_index = EXPORT_HEADERS.index(MOBILE_COLUMN) + 1
    for row in records_to_export_rows(records):
        values = [row[header] for header in EXPORT_HEADERS]
        values[mobile_index - 1] = zero_padded_mobile(row[MOBILE_COLUMN])
        sheet.append(values)
        sheet.cell(row=sheet.max_row, column=mobile_index).number_format = "@"
    return workbook


def write_excel(records: Iterable[BgdRecord], output_path: Path) -> Path:
    """Write records to an Excel workbook using openpyxl."""

    ensure_output_dir(output_path)
    _build_workbook(records).save(output_path)
    logger.info("Wrote Excel export to %s", output_path)
    return output_path


def excel_bytes(records: Iterable[BgdRecord]) -> bytes:
    """Return the Excel workbook as bytes, for download buttons."""

    buffer = io.BytesIO()
    _build_workbook(records).save(buffer)
    return buffer.getvalue()


def _default_service_account_path() -> Optional[Path]:
    for candidate in DEFAULT_SERVICE_ACCOUNT_PATHS:
        if candidate.exists():
            return candidate
    return None


def resolve_sheets_target(
    spreadsheet_id: Optional[str] = None,
    worksheet_title: Optional[str] = None,
    service_account_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """Fill Google Sheets settings from arguments, then config, then default paths."""

    spreadsheet_id = spreadsheet_id or get_config_value("GOOGLE_SHEETS_SPREADSHEET_ID")
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required for the Google Sheets export")

    worksheet_title = worksheet_title or get_config_value("GOOGLE_SHEETS_WORKSHEET", "Sheet1")
    account_env = get_config_value("GOOGLE_SHEETS_SERVICE_ACCOUNT")
    account_path = service_account_path or (Path(account_env) if account_env else _default_service_account_path())
    if not account_path:
        raise ValueError(
            "Provide --service-account pointing to your Google credentials or place a file at "
            f"{DEFAULT_SERVICE_ACCOUNT_PATHS[0]}"
        )

    return {
        "spreadsheet_id": spreadsheet_id,
        "worksheet_title": worksheet_title,
        "service_account_path": account_path,
    }


def push_to_google_sheets(
    records: Iterable[BgdRecord],
    spreadsheet_id: str,
    worksheet_title: str = "Sheet1",
    service_account_path: Path | None = None,
) -> int:
    """Replace a worksheet's contents with the exported rows; returns the row count."""

    rows = records_to_export_rows(records)
    if not rows:
        return 0

    try:
        import gspread
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise ImportError("gspread is required for Google Sheets exports") from exc

    client = (
        gspread.service_account(filename=str(service_account_path))
        if service_account_path
        else gspread.service_account()
    )
    worksheet = client.open_by_key(spreadsheet_id).worksheet(worksheet_title)
    worksheet.clear()
    values = [EXPORT_HEADERS]
    for row in rows:
        row = dict(row, **{MOBILE_COLUMN: zero_padded_mobile(row[MOBILE_COLUMN])})
        values.append([row[header] for header in EXPORT_HEADERS])
    worksheet.append_rows(values, value_input_option="RAW")
    logger.info("Pushed %d rows to Google Sheets worksheet %s", len(rows), worksheet_title)
    return len(rows)
