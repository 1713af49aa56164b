"""Streamlit dashboard to add, edit, filter, import, and export BGD records."""
from datetime import date
from pathlib import Path
from typing import List, Optional

import streamlit as st

# Allow running via "streamlit run bgdtracker/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from bgdtracker.core.auth import AuthorizationGate
from bgdtracker.core.config import Settings, load_settings
from bgdtracker.core.errors import DuplicateConflict, RecordError
from bgdtracker.core.logging import configure_logging
from bgdtracker.core.models import BgdRecord, RecordCandidate
from bgdtracker.core.schema import FIELDS
from bgdtracker.export.sinks import excel_bytes, render_csv, render_html, render_template_csv
from bgdtracker.export.templates import export_filename, record_to_export_row
from bgdtracker.ingestion.importer import BulkImporter, ImportReport
from bgdtracker.records.store import RecordStore
from bgdtracker.records.view import (
    ViewCriteria,
    center_options,
    count_label,
    empty_view_message,
    filtered_view,
)
from bgdtracker.storage.backends import JsonFileBackend

MULTILINE_FIELDS = {"note"}


def _get_store(settings: Settings) -> RecordStore:
    """Create the record store once per session."""

    if "store" not in st.session_state:
        st.session_state.store = RecordStore(JsonFileBackend(settings.data_file))
    return st.session_state.store


def _rerun_app() -> None:
    """Trigger a Streamlit rerun, compatible with newer and older APIs."""

    rerun = getattr(st, "rerun", None) or getattr(st, "experimental_rerun", None)
    if not rerun:
        raise RuntimeError("Streamlit does not expose a rerun helper.")
    rerun()


def _flash(message: str, level: str = "info") -> None:
    """Keep a message for the next run and rerender."""

    st.session_state["last_action"] = {"message": message, "level": level}
    _rerun_app()


def _render_flash() -> None:
    action = st.session_state.pop("last_action", None)
    if not action:
        return
    renderer = {
        "success": st.success,
        "warning": st.warning,
        "info": st.info,
        "error": st.error,
    }.get(action["level"], st.info)
    renderer(action["message"])


def _report_error(exc: RecordError) -> None:
    if isinstance(exc, DuplicateConflict):
        st.warning(f"Duplicate found: {exc.message}")
    else:
        st.error(exc.message)


def _form_defaults(store: RecordStore, settings: Settings) -> RecordCandidate:
    editing_id = st.session_state.get("editing_id")
    if editing_id:
        record = store.get(editing_id)
        if record:
            return record.to_candidate()
        st.session_state.pop("editing_id", None)
    return RecordCandidate(
        sl_no=str(store.next_serial),
        email=settings.default_email,
        login_password=settings.default_login_password,
    )


def _record_form(store: RecordStore, settings: Settings) -> None:
    """Render the add/edit form and submit through the store."""

    editing_id = st.session_state.get("editing_id")
    defaults = _form_defaults(store, settings)
    st.subheader("Update record" if editing_id else "Add record")

    form_key = f"record_form_{editing_id or 'new'}_{st.session_state.get('form_version', 0)}"
    with st.form(form_key, clear_on_submit=False):
        values = {}
        columns = st.columns(3)
        for index, spec in enumerate(FIELDS):
            label = f"{spec.label}{' *' if spec.required else ''}"
            with columns[index % 3]:
                if spec.key in MULTILINE_FIELDS:
                    values[spec.key] = st.text_area(label, value=defaults.value(spec.key))
                else:
                    values[spec.key] = st.text_input(label, value=defaults.value(spec.key))
        submit_cols = st.columns([1, 1, 4])
        submitted = submit_cols[0].form_submit_button(
            "Update Record" if editing_id else "Add Record", type="primary"
        )
        cancelled = submit_cols[1].form_submit_button("Cancel", disabled=not editing_id)

    if cancelled:
        st.session_state.pop("editing_id", None)
        _flash("Edit cancelled.", "info")

    if not submitted:
        return

    candidate = RecordCandidate(**values)
    try:
        if editing_id:
            store.update(editing_id, candidate)
            message = "Record updated successfully!"
        else:
            store.create(candidate)
            message = "Record added successfully!"
    except RecordError as exc:
        _report_error(exc)
        return

    st.session_state.pop("editing_id", None)
    st.session_state["form_version"] = st.session_state.get("form_version", 0) + 1
    _flash(message, "success")


def _filters(records: List[BgdRecord]) -> ViewCriteria:
    """Render the search and filter controls and return the active criteria."""

    st.markdown("### Filters")
    cols = st.columns([2, 1.2, 1, 1])
    with cols[0]:
        search = st.text_input("Search email, mobile, center, or password", key="search_input")
    with cols[1]:
        center = st.selectbox("IVAC Center", options=["", *center_options(records)], key="center_filter")
    with cols[2]:
        date_from: Optional[date] = st.date_input("From", value=None, key="date_from")
    with cols[3]:
        date_to: Optional[date] = st.date_input("To", value=None, key="date_to")
    return ViewCriteria(
        search=search,
        center=center,
        date_from=date_from.isoformat() if date_from else "",
        date_to=date_to.isoformat() if date_to else "",
    )


def _records_table(view: List[BgdRecord], total: int, criteria: ViewCriteria) -> None:
    st.markdown(f"### Records ({count_label(view, total)})")
    if not view:
        st.info(empty_view_message(criteria))
        return
    rows = []
    for record in view:
        row = record_to_export_row(record)
        row["Status"] = "✅ Done" if record.is_done else "⏳ Processing"
        rows.append(row)
    st.dataframe(rows, use_container_width=True, height=420, hide_index=True)


def _record_actions(store: RecordStore, view: List[BgdRecord], gate: AuthorizationGate) -> None:
    """Edit, duplicate, or delete one record from the filtered view."""

    if not view:
        return
    labels = {record.id: f"#{record.sl_no} · {record.email} · {record.mobile_number}" for record in view}
    selected_id = st.selectbox(
        "Select record", options=list(labels), format_func=labels.get, key="selected_record"
    )
    cols = st.columns([1, 1, 2, 1])
    if cols[0].button("✏️ Edit"):
        st.session_state["editing_id"] = selected_id
        _flash("Editing record. Make changes and click Update Record.", "info")
    if cols[1].button("📄 Duplicate"):
        try:
            store.duplicate(selected_id)
        except RecordError as exc:
            _report_error(exc)
        else:
            _flash(
                "Record duplicated successfully! Please update email and mobile number "
                "to remove duplicate markers.",
                "info",
            )
    password = cols[2].text_input(
        "Password to delete", type="password", key="delete_password", label_visibility="collapsed",
        placeholder="Password to delete",
    )
    if cols[3].button("🗑️ Delete", type="secondary"):
        if not gate.check(password):
            st.error("Incorrect password! Please try again.")
            return
        store.delete(selected_id)
        if st.session_state.get("editing_id") == selected_id:
            st.session_state.pop("editing_id", None)
        _flash("Record deleted successfully!", "success")


def _show_report(report: ImportReport) -> None:
    level = report.level
    message = report.summary()
    if report.errors:
        details = "\n".join(f"- {error}" for error in report.errors)
        message = f"{message}\n\n{details}"
    _flash(message, level)


def _import_panel(store: RecordStore) -> None:
    """CSV upload, bulk paste, and template download."""

    importer = BulkImporter(store)
    upload_col, paste_col = st.columns(2)
    with upload_col:
        st.markdown("#### Import CSV")
        uploaded = st.file_uploader("CSV file with a header row", type=["csv"], key="csv_upload")
        if st.button("Import CSV", disabled=uploaded is None):
            try:
                report = importer.import_csv_text(uploaded.getvalue().decode("utf-8-sig"))
            except RecordError as exc:
                st.error(exc.message)
            except UnicodeDecodeError as exc:
                st.error(f"Error reading CSV file: {exc}")
            else:
                _show_report(report)
        st.download_button(
            "Download template",
            data=render_template_csv().encode("utf-8"),
            file_name="bgd_records_template.csv",
            mime="text/csv",
        )
    with paste_col:
        st.markdown("#### Bulk paste")
        st.caption(
            "One record per line, tab or comma separated: "
            + ", ".join(spec.label for spec in FIELDS)
        )
        pasted = st.text_area("Rows", key="bulk_paste_text", height=160)
        if st.button("Process pasted rows"):
            try:
                report = importer.import_paste_text(pasted)
            except RecordError as exc:
                st.warning(exc.message)
            else:
                st.session_state.pop("bulk_paste_text", None)
                _show_report(report)


def _export_panel(store: RecordStore, view: List[BgdRecord]) -> None:
    st.markdown("#### Export filtered records")
    if not len(store):
        st.caption("No records to export!")
        return
    cols = st.columns(3)
    cols[0].download_button(
        "⬇️ CSV",
        data=render_csv(view).encode("utf-8"),
        file_name=export_filename("csv"),
        mime="text/csv",
    )
    cols[1].download_button(
        "⬇️ Excel (HTML)",
        data=render_html(view).encode("utf-8"),
        file_name=export_filename("html"),
        mime="text/html",
    )
    cols[2].download_button(
        "⬇️ Excel (xlsx)",
        data=excel_bytes(view),
        file_name=export_filename("xlsx"),
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


def _sidebar(store: RecordStore, view: List[BgdRecord], gate: AuthorizationGate) -> None:
    with st.sidebar:
        st.subheader("Overview")
        done = len([record for record in store.records if record.is_done])
        row1 = st.columns(2)
        row1[0].metric("Total records", len(store))
        row1[1].metric("Shown", len(view))
        row2 = st.columns(2)
        row2[0].metric("Done", done)
        row2[1].metric("Processing", len(store) - done)
        st.caption(f"Next serial number: {store.next_serial}")

        st.subheader("Danger zone")
        password = st.text_input("Password to clear all records", type="password", key="clear_password")
        if st.button("Clear all records", type="secondary"):
            if not gate.check(password):
                st.error("Incorrect password! Please try again.")
            else:
                store.clear()
                st.session_state.pop("editing_id", None)
                _flash("All records cleared successfully!", "success")


def main() -> None:
    """Launch the record management dashboard."""

    settings = load_settings()
    configure_logging(settings.log_level)
    st.set_page_config(page_title="BGD Record Manager", layout="wide", initial_sidebar_state="expanded")
    st.title("BGD File Record Manager")

    store = _get_store(settings)
    gate = AuthorizationGate(settings.admin_secret)
    _render_flash()

    records_tab, import_tab = st.tabs(["Records", "Import & export"])
    with records_tab:
        _record_form(store, settings)
        criteria = _filters(list(store.records))
        view = filtered_view(store.records, criteria)
        _records_table(view, len(store), criteria)
        _record_actions(store, view, gate)
    with import_tab:
        _import_panel(store)
        _export_panel(store, view)

    _sidebar(store, view, gate)


if __name__ == "__main__":
    main()
