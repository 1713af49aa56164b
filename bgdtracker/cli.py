"""Command line interface over the BGD record store."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from bgdtracker.core.auth import AuthorizationGate
from bgdtracker.core.config import Settings, load_settings
from bgdtracker.core.errors import DuplicateConflict, RecordError
from bgdtracker.core.logging import configure_logging
from bgdtracker.core.models import RecordCandidate
from bgdtracker.export.sinks import (
    push_to_google_sheets,
    render_template_csv,
    resolve_sheets_target,
    write_csv,
    write_excel,
    write_html,
)
from bgdtracker.export.templates import export_filename
from bgdtracker.ingestion.importer import BulkImporter, ImportReport
from bgdtracker.records.store import RecordStore
from bgdtracker.records.view import ViewCriteria, count_label, empty_view_message, filtered_view
from bgdtracker.storage.backends import JsonFileBackend

# CLI option -> record field
RECORD_OPTIONS = {
    "sl_no": "--sl-no",
    "email": "--email",
    "mobile_number": "--mobile",
    "login_password": "--login-password",
    "email_password": "--email-password",
    "ivac_center": "--center",
    "assigned_person": "--assigned-person",
    "total_bgd_file": "--total-files",
    "file_starting_date": "--start-date",
    "file_success_date": "--success-date",
    "note": "--note",
}


def _add_record_arguments(parser: argparse.ArgumentParser) -> None:
    for field, option in RECORD_OPTIONS.items():
        parser.add_argument(option, dest=field, default=None)


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--search", default="", help="Substring of email, mobile, center, or login password")
    parser.add_argument("--center", default="", help="Exact IVAC center")
    parser.add_argument("--date-from", default="", help="Earliest file starting date (YYYY-MM-DD)")
    parser.add_argument("--date-to", default="", help="Latest file starting date (YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one sub-command per store operation."""

    parser = argparse.ArgumentParser(description="Track BGD file processing records")
    parser.add_argument(
        "--data-file",
        type=Path,
        default=None,
        help="JSON file holding the records (defaults to BGD_DATA_FILE)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Add a record")
    _add_record_arguments(add)

    update = commands.add_parser("update", help="Update fields of an existing record")
    update.add_argument("record_id")
    _add_record_arguments(update)

    delete = commands.add_parser("delete", help="Delete a record")
    delete.add_argument("record_id")
    delete.add_argument("--password", required=True, help="Confirmation secret")

    duplicate = commands.add_parser("duplicate", help="Copy a record under the next serial number")
    duplicate.add_argument("record_id")

    clear = commands.add_parser("clear", help="Delete every record and reset the serial counter")
    clear.add_argument("--password", required=True, help="Confirmation secret")

    listing = commands.add_parser("list", help="Show the filtered records, latest first")
    _add_filter_arguments(listing)

    importer = commands.add_parser("import", help="Import records from a CSV file with a header row")
    importer.add_argument("path", type=Path)

    paste = commands.add_parser("paste", help="Import pasted rows (tab or comma separated, no header)")
    paste.add_argument("path", help="Text file with the pasted rows, or - for stdin")

    export = commands.add_parser("export", help="Export the filtered records")
    _add_filter_arguments(export)
    export.add_argument("--format", choices=["csv", "html", "excel", "sheets"], default="csv")
    export.add_argument("--output", type=Path, help="Destination file (defaults to a dated name)")
    export.add_argument("--spreadsheet-id", help="Google Sheets spreadsheet ID for the sheets format")
    export.add_argument("--worksheet", help="Worksheet title inside the Google Sheets document")
    export.add_argument("--service-account", type=Path, help="Google service account JSON key")

    template = commands.add_parser("template", help="Write the CSV import template")
    template.add_argument("--output", type=Path, default=Path("bgd_records_template.csv"))
    return parser


def _criteria(args: argparse.Namespace) -> ViewCriteria:
    return ViewCriteria(
        search=args.search,
        center=args.center,
        date_from=args.date_from,
        date_to=args.date_to,
    )


def _candidate_from_args(args: argparse.Namespace, base: RecordCandidate) -> RecordCandidate:
    values = base.to_dict()
    for field in RECORD_OPTIONS:
        value = getattr(args, field)
        if value is not None:
            values[field] = value
    return RecordCandidate(**values)


def _print_report(report: ImportReport) -> None:
    print(report.summary())
    if report.records:
        print("Imported serials: " + ", ".join(str(record.sl_no) for record in report.records))
    for error in report.errors:
        print(f"  {error}")


def _run(args: argparse.Namespace, store: RecordStore, settings: Settings) -> int:
    gate = AuthorizationGate(settings.admin_secret)

    if args.command == "add":
        base = RecordCandidate(
            sl_no=str(store.next_serial),
            login_password=settings.default_login_password,
        )
        record = store.create(_candidate_from_args(args, base))
        print(f"Record added successfully! (id {record.id}, serial {record.sl_no})")
        return 0

    if args.command == "update":
        existing = store.get(args.record_id)
        base = existing.to_candidate() if existing else RecordCandidate()
        store.update(args.record_id, _candidate_from_args(args, base))
        print("Record updated successfully!")
        return 0

    if args.command == "delete":
        gate.require(args.password, "delete this record")
        if store.delete(args.record_id) is None:
            print(f"Record {args.record_id} not found; nothing deleted.", file=sys.stderr)
            return 1
        print("Record deleted successfully!")
        return 0

    if args.command == "duplicate":
        clone = store.duplicate(args.record_id)
        print(
            f"Record duplicated successfully as {clone.id}! "
            "Please update email and mobile number to remove duplicate markers."
        )
        return 0

    if args.command == "clear":
        gate.require(args.password, "clear all records")
        store.clear()
        print("All records cleared successfully!")
        return 0

    if args.command == "list":
        criteria = _criteria(args)
        view = filtered_view(store.records, criteria)
        if not view:
            print(empty_view_message(criteria))
        for record in view:
            print(
                f"{record.sl_no:>5}  {record.email:<32} {record.mobile_number:<16} "
                f"{record.ivac_center:<14} {record.file_starting_date:<10}  {record.status:<10} {record.id}"
            )
        print(f"Records: {count_label(view, len(store))}")
        return 0

    if args.command == "import":
        report = BulkImporter(store).import_csv_file(args.path)
        _print_report(report)
        return 0 if report.imported else 1

    if args.command == "paste":
        text = sys.stdin.read() if args.path == "-" else Path(args.path).read_text(encoding="utf-8")
        report = BulkImporter(store).import_paste_text(text)
        _print_report(report)
        return 0 if report.imported else 1

    if args.command == "export":
        if not len(store):
            print("No records to export!", file=sys.stderr)
            return 1
        view = filtered_view(store.records, _criteria(args))
        if args.format == "sheets":
            target = resolve_sheets_target(args.spreadsheet_id, args.worksheet, args.service_account)
            count = push_to_google_sheets(view, **target)
            print(f"{count} records pushed to Google Sheets worksheet '{target['worksheet_title']}'!")
            return 0
        extension = {"csv": "csv", "html": "html", "excel": "xlsx"}[args.format]
        output = args.output or Path(export_filename(extension))
        writer = {"csv": write_csv, "html": write_html, "excel": write_excel}[args.format]
        writer(view, output)
        print(f"{len(view)} records exported to {output}")
        return 0

    if args.command == "template":
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(render_template_csv(), encoding="utf-8")
        print(f"Template CSV written to {args.output}")
        return 0

    raise ValueError(f"Unknown command {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for running store operations from the command line."""

    settings = load_settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    store = RecordStore(JsonFileBackend(args.data_file or settings.data_file))
    try:
        return _run(args, store, settings)
    except DuplicateConflict as exc:
        print(f"Duplicate found: {exc.message}", file=sys.stderr)
        return 1
    except RecordError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
