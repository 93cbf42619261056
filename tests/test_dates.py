"""
Tests for spreadsheet date normalization.
"""

from datetime import date, datetime

import pandas as pd
import pytest

from po_analytics.dates import normalize_date, to_canonical_string, to_display_string


def test_serial_number_and_string_agree():
    """Numeric serials and their string form go through the same path."""
    assert normalize_date(45123) == normalize_date("45123") == date(2023, 7, 16)


def test_serial_unix_epoch():
    assert normalize_date(25569) == date(1970, 1, 1)


def test_fractional_serial_keeps_calendar_day():
    assert normalize_date("45123.75") == date(2023, 7, 16)
    assert normalize_date(45123.25) == date(2023, 7, 16)


@pytest.mark.parametrize("raw", [0, -5, "0", 0.0])
def test_non_positive_serial_rejected(raw):
    assert normalize_date(raw) is None


def test_day_first_strings():
    assert normalize_date("27-11-2025") == date(2025, 11, 27)
    assert normalize_date("5/3/2024") == date(2024, 3, 5)
    assert normalize_date(" 06-04-2025 ") == date(2025, 4, 6)


def test_day_first_is_never_read_as_serial():
    """'27-11-2025' is a date, not the number 27."""
    assert normalize_date("27-11-2025") != normalize_date(27)


def test_impossible_day_first_date_is_none():
    assert normalize_date("31-02-2025") is None
    assert normalize_date("12-13-2025") is None


def test_iso_strings():
    assert normalize_date("2025-04-20") == date(2025, 4, 20)
    assert normalize_date("2025-04-20T10:30:00") == date(2025, 4, 20)


@pytest.mark.parametrize("raw", [None, "", "   ", "Pending", "not a date", True, float("nan")])
def test_unreadable_values_are_none(raw):
    assert normalize_date(raw) is None


def test_date_objects_pass_through():
    assert normalize_date(date(2025, 1, 2)) == date(2025, 1, 2)
    assert normalize_date(datetime(2025, 1, 2, 15, 0)) == date(2025, 1, 2)
    assert normalize_date(pd.Timestamp("2025-01-02 08:00")) == date(2025, 1, 2)
    assert normalize_date(pd.NaT) is None


@pytest.mark.parametrize("raw", ["06-04-2025", "28-06-2025", "01-01-2000", "29-02-2024", "31-12-1999"])
def test_day_first_round_trip(raw):
    assert to_display_string(to_canonical_string(normalize_date(raw))) == raw


def test_canonical_string():
    assert to_canonical_string(date(2025, 4, 6)) == "2025-04-06"
    assert to_canonical_string(None) == ""


def test_display_string_passes_through_other_shapes():
    assert to_display_string("2025-04-06") == "06-04-2025"
    assert to_display_string("Pending") == "Pending"
    assert to_display_string("") == ""
