"""Interactive and bulk validation rules for candidate records."""
import pytest

from bgdtracker.core.errors import ValidationFailure
from bgdtracker.core.models import RecordCandidate
from bgdtracker.core.utils import parse_int_prefix, strip_non_digits
from bgdtracker.records.validator import (
    is_valid_mobile,
    parse_date,
    validate_bulk_candidate,
    validate_candidate,
    validation_error,
)


def test_valid_candidate_returns_parsed_values(make_candidate):
    parsed = validate_candidate(make_candidate(sl_no="12", total_bgd_file="3", file_success_date="2024-01-05"))

    assert parsed.sl_no == 12
    assert parsed.total_bgd_file == 3
    assert parsed.file_starting_date == "2024-01-01"
    assert parsed.file_success_date == "2024-01-05"
    assert validation_error(make_candidate()) is None


def test_presence_reports_first_missing_field_in_schema_order(make_candidate):
    error = validation_error(make_candidate(email="", ivac_center=""))

    assert error.field == "email"
    assert error.rule == "required"
    assert str(error) == "Email is required!"


def test_presence_uses_human_labels(make_candidate):
    error = validation_error(make_candidate(assigned_person="  "))

    assert str(error) == "Assigned person for this BGD file is required!"


def test_optional_fields_may_be_blank(make_candidate):
    candidate = make_candidate(email_password="", file_success_date="", note="")
    assert validation_error(candidate) is None


@pytest.mark.parametrize("email", ["a@b", "a b@c.com", "ab.com", "a@@", "@gmail.com"])
def test_email_shape_is_enforced(make_candidate, email):
    error = validation_error(make_candidate(email=email))
    assert error.rule == "email_format"


@pytest.mark.parametrize(
    "mobile,expected",
    [
        ("01711111111", True),
        ("017-1111-1111", True),
        ("(017) 1111 1111", True),
        ("+8801711111111", False),
        ("0171111111", False),
        ("017111111111", False),
        ("phone: 01711111111", True),
    ],
)
def test_mobile_rule_counts_digits_only(make_candidate, mobile, expected):
    assert is_valid_mobile(mobile) is expected
    error = validation_error(make_candidate(mobile_number=mobile))
    assert (error is None) is expected


def test_mobile_is_stored_as_digits(make_candidate):
    parsed = validate_candidate(make_candidate(mobile_number="017-1111-1111"))
    assert parsed.mobile_number == "01711111111"


def test_rules_short_circuit_in_order(make_candidate):
    candidate = make_candidate(email="bad", mobile_number="1", sl_no="0")
    assert validation_error(candidate).rule == "email_format"

    candidate = make_candidate(mobile_number="1", file_starting_date="nope", sl_no="0")
    assert validation_error(candidate).rule == "mobile_length"

    candidate = make_candidate(file_starting_date="2024-02-30", sl_no="0")
    error = validation_error(candidate)
    assert (error.field, error.rule) == ("file_starting_date", "date_format")


def test_success_date_must_parse_and_not_precede_start(make_candidate):
    error = validation_error(make_candidate(file_success_date="someday"))
    assert (error.field, error.rule) == ("file_success_date", "date_format")

    error = validation_error(make_candidate(file_success_date="2023-12-31"))
    assert error.rule == "date_order"
    assert str(error) == "File success date must be after file starting date!"

    assert validation_error(make_candidate(file_success_date="2024-01-01")) is None


def test_alternate_date_formats_are_normalized(make_candidate):
    parsed = validate_candidate(make_candidate(file_starting_date="15/01/2024"))
    assert parsed.file_starting_date == "2024-01-15"


@pytest.mark.parametrize("value", ["0", "-4", "abc"])
def test_serial_number_must_be_positive(make_candidate, value):
    error = validation_error(make_candidate(sl_no=value))
    assert (error.field, error.rule) == ("sl_no", "positive_integer")


@pytest.mark.parametrize("value", ["0", "x"])
def test_total_files_must_be_positive(make_candidate, value):
    error = validation_error(make_candidate(total_bgd_file=value))
    assert error.field == "total_bgd_file"
    assert str(error) == "Total BGD file must be a positive number!"


def test_validate_candidate_raises_failure(make_candidate):
    with pytest.raises(ValidationFailure, match="valid email"):
        validate_candidate(make_candidate(email="nope"))


def test_bulk_validation_checks_presence_only(make_candidate):
    candidate = make_candidate(email="not-an-email", mobile_number="+8801234567890", assigned_person="")
    parsed = validate_bulk_candidate(candidate)

    assert parsed.mobile_number == "+8801234567890"
    assert parsed.sl_no == 1


def test_bulk_validation_lists_missing_fields():
    candidate = RecordCandidate(sl_no="1", email="a@b.com", mobile_number="01711111111")

    with pytest.raises(ValidationFailure) as excinfo:
        validate_bulk_candidate(candidate)

    assert excinfo.value.field == "login_password"
    assert str(excinfo.value) == (
        "Missing required fields: Login Password, IVAC Center, Total BGD File, File Starting Date"
    )


def test_bulk_validation_requires_numeric_serial(make_candidate):
    with pytest.raises(ValidationFailure, match="Serial number"):
        validate_bulk_candidate(make_candidate(sl_no="first"))


def test_non_ascii_digits_are_not_mobile_digits(make_candidate):
    failure = validation_error(make_candidate(mobile_number="০১৭১১১১১১১১"))

    assert failure is not None
    assert failure.rule == "mobile_length"
    assert not is_valid_mobile("০১৭১১১১১১১১")


def test_non_ascii_digits_are_not_serial_numbers(make_candidate):
    failure = validation_error(make_candidate(sl_no="১২"))

    assert failure is not None
    assert failure.field == "sl_no"
    assert validation_error(make_candidate(total_bgd_file="৩")).field == "total_bgd_file"


def test_non_ascii_digit_dates_are_rejected(make_candidate):
    assert parse_date("২০২৪-০১-০১") is None
    assert validation_error(make_candidate(file_starting_date="২০২৪-০১-০১")).rule == "date_format"


def test_bulk_serial_in_non_ascii_digits_is_rejected(make_candidate):
    with pytest.raises(ValidationFailure, match="Serial number must be a number!"):
        validate_bulk_candidate(make_candidate(sl_no="১২"))


def test_ascii_helpers_ignore_other_digit_scripts():
    assert parse_int_prefix("১২") is None
    assert parse_int_prefix(" 12abc") == 12
    assert strip_non_digits("০১৭-1234") == "1234"
