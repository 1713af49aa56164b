"""CSV and pasted-row imports through the store."""
import pytest

from bgdtracker.core.errors import ValidationFailure
from bgdtracker.export.sinks import render_csv, render_template_csv
from bgdtracker.ingestion.importer import BulkImporter, ImportReport, map_headers
from bgdtracker.ingestion.parsing import clean_cell, parse_csv_row, parse_csv_text, split_paste_line
from bgdtracker.records.store import RecordStore
from bgdtracker.storage.backends import MemoryBackend

CSV_HEADER = "Sl No,Email,Mobile,Login Password,IVAC Center,Total BGD File,File Starting Date"


@pytest.fixture
def importer(store):
    return BulkImporter(store)


def test_header_synonyms_map_to_fields():
    headers = ["Serial Number", " EMAIL ", "Phone", "Center", "Start  Date", "slNo", "ivacCenter", "Extra"]
    assert map_headers(headers) == [
        "sl_no",
        "email",
        "mobile_number",
        "ivac_center",
        "file_starting_date",
        "sl_no",
        "ivac_center",
        "extra",
    ]


def test_csv_import_creates_records(importer, store):
    text = "\n".join(
        [
            CSV_HEADER,
            "1,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01",
            "2,b@gmail.com,01822222222,123456,Sylhet,1,2024-01-02",
        ]
    )

    report = importer.import_csv_text(text)

    assert (report.imported, report.skipped, report.errors) == (2, 0, [])
    assert [record.email for record in store.records] == ["a@gmail.com", "b@gmail.com"]
    assert store.next_serial == 3
    assert report.summary() == "Import completed: 2 records imported"
    assert report.level == "success"


def test_csv_row_errors_cite_file_lines(importer, store):
    text = "\n".join(
        [
            CSV_HEADER,
            "1,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01",
            "2,b@gmail.com,01822222222,123456,,1,2024-01-02",
            "3,A@GMAIL.COM,01933333333,123456,Dhaka,1,2024-01-03",
        ]
    )

    report = importer.import_csv_text(text)

    assert report.imported == 1
    assert report.skipped == 2
    assert [str(error) for error in report.errors] == [
        "Row 3: Missing required fields: IVAC Center",
        'Row 4: Email "A@GMAIL.COM" already exists',
    ]
    assert report.summary() == "Import completed: 1 records imported, 2 records skipped (2 errors)"
    assert len(store) == 1


def test_bulk_rows_skip_shape_checks(importer, store):
    text = CSV_HEADER + "\n7,not-an-email,+880 171,123456,Dhaka,3,15/01/2024\n"

    report = importer.import_csv_text(text)

    assert report.imported == 1
    record = store.records[0]
    assert record.email == "not-an-email"
    assert record.mobile_number == "+880 171"
    assert record.file_starting_date == "2024-01-15"
    assert record.assigned_person == ""
    assert store.next_serial == 8


def test_quoted_cells_keep_commas(importer, store):
    text = CSV_HEADER + ',Note\n1,a@gmail.com,01711111111,123456,"Dhaka, Gulshan",2,2024-01-01,"said ""hi"", left"'

    importer.import_csv_text(text)

    record = store.records[0]
    assert record.ivac_center == "Dhaka, Gulshan"
    assert record.note == 'said "hi", left'


def test_csv_without_data_rows_is_rejected(importer):
    with pytest.raises(ValidationFailure, match="at least one data row"):
        importer.import_csv_text("\ufeff" + CSV_HEADER + "\n\n")


def test_csv_file_with_bom(importer, store, tmp_path):
    path = tmp_path / "records.csv"
    path.write_text("\ufeff" + CSV_HEADER + "\n1,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01\n", encoding="utf-8")

    report = importer.import_csv_file(path)

    assert report.imported == 1
    assert store.records[0].sl_no == 1


def test_template_imports_cleanly(importer, store):
    report = importer.import_csv_text(render_template_csv())

    assert report.imported == 2
    assert [record.assigned_person for record in store.records] == ["John Doe", "Jane Smith"]
    assert store.records[0].is_done
    assert not store.records[1].is_done


def test_paste_two_rows_second_missing_center(importer, store):
    text = (
        "1\ta@gmail.com\t01711111111\t123456\t\tDhaka\tP\t2\t2024-01-01\t\t\n"
        "2\tb@gmail.com\t01822222222\t123456\t\t\tQ\t1\t2024-01-02\t\t\n"
    )

    report = importer.import_paste_text(text)

    assert report.imported == 1
    assert report.skipped == 1
    assert [str(error) for error in report.errors] == ["Row 2: Missing required fields: IVAC Center"]
    assert store.records[0].assigned_person == "P"


def test_paste_accepts_comma_separated_rows(importer, store):
    report = importer.import_paste_text('5,a@gmail.com,01711111111,123456,mail-pass,"Dhaka, Uttara",P,2,2024-01-01')

    assert report.imported == 1
    record = store.records[0]
    assert record.email_password == "mail-pass"
    assert record.ivac_center == "Dhaka, Uttara"


def test_blank_rows_are_skipped_without_errors(importer):
    report = importer.import_rows(["email"], [["", "  "], ["a"]])

    assert report.skipped == 2
    assert report.imported == 0
    assert [str(error) for error in report.errors] == [
        "Row 2: Missing required fields: Serial Number, Mobile Number, Login Password, "
        "IVAC Center, Total BGD File, File Starting Date"
    ]
    assert report.level == "warning"


def test_empty_paste_is_rejected(importer):
    with pytest.raises(ValidationFailure, match="paste some data"):
        importer.import_paste_text("  \n ")


def test_non_numeric_serial_is_reported(importer):
    report = importer.import_csv_text(CSV_HEADER + "\nabc,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01")

    assert report.imported == 0
    assert str(report.errors[0]) == "Row 2: Serial number must be a number!"


def test_exported_csv_round_trips(store, make_candidate):
    store.create(make_candidate(sl_no="1", note='quote " and, comma'))
    store.create(
        make_candidate(
            sl_no="2",
            email="b@gmail.com",
            mobile_number="01822222222",
            file_success_date="2024-01-05",
        )
    )
    fresh = RecordStore(MemoryBackend())

    report = BulkImporter(fresh).import_csv_text(render_csv(store.records))

    assert report.imported == 2
    original = sorted(store.records, key=lambda record: record.sl_no)
    for before, after in zip(original, sorted(fresh.records, key=lambda record: record.sl_no)):
        assert after.business_fields() == before.business_fields()


def test_report_defaults():
    report = ImportReport()
    assert report.summary() == "Import completed: 0 records imported"


def test_cell_helpers():
    assert clean_cell('  ="01711111111" ') == "01711111111"
    assert parse_csv_row('a, "b, c" ,d') == ["a", "b, c", "d"]
    assert split_paste_line("a\t b \tc") == ["a", "b", "c"]
    headers, rows = parse_csv_text("h1,h2\n\n1,2\n")
    assert headers == ["h1", "h2"]
    assert rows == [["1", "2"]]


def test_oversized_cell_is_reported_as_unreadable_csv(importer, store):
    text = CSV_HEADER + ',Note\n1,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01,"' + "x" * 200_000 + '"\n'

    with pytest.raises(ValidationFailure, match="Error reading CSV file") as excinfo:
        importer.import_csv_text(text)

    assert excinfo.value.rule == "csv_shape"
    assert len(store) == 0


def test_oversized_pasted_cell_is_reported(importer):
    with pytest.raises(ValidationFailure, match="Error reading CSV file"):
        importer.import_paste_text('1,"' + "x" * 200_000 + '"')


def test_multiline_cell_counts_as_one_record(importer):
    text = CSV_HEADER + ',Note\n1,a@gmail.com,01711111111,123456,Dhaka,2,2024-01-01,"line one\nline two"\n2,b@gmail.com,01822222222,123456,,1,2024-01-02,\n'

    report = importer.import_csv_text(text)

    assert report.imported == 1
    assert [str(error) for error in report.errors] == ["Row 3: Missing required fields: IVAC Center"]
