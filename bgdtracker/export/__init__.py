"""Export destinations for the filtered record view."""
from bgdtracker.export.sinks import (
    excel_bytes,
    push_to_google_sheets,
    render_csv,
    render_html,
    render_template_csv,
    resolve_sheets_target,
    write_csv,
    write_excel,
    write_html,
)
from bgdtracker.export.templates import (
    EXPORT_HEADERS,
    export_filename,
    format_mobile_for_csv,
    format_mobile_for_html,
    record_to_export_row,
    records_to_export_rows,
)

__all__ = [
    "EXPORT_HEADERS",
    "excel_bytes",
    "export_filename",
    "format_mobile_for_csv",
    "format_mobile_for_html",
    "push_to_google_sheets",
    "record_to_export_row",
    "records_to_export_rows",
    "render_csv",
    "render_html",
    "render_template_csv",
    "resolve_sheets_target",
    "write_csv",
    "write_excel",
    "write_html",
]
