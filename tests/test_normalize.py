from datetime import date, datetime, time, timedelta, timezone

import pytest

from app.machines.normalize import (
    EXCEL_SERIAL_MIN,
    excel_serial_to_iso,
    normalize_date,
    normalize_part_number,
    passthrough,
)


def _expected_from_serial(serial):
    return (datetime(1970, 1, 1) + timedelta(days=serial - 25569)).date().isoformat()


class TestDates:

    @pytest.mark.parametrize("value", [
        "Por confirmar", "POR CONFIRMAR", "  a confirmar ", "To be confirmed", "TBC",
    ])
    def test_to_confirm_text_is_null(self, value):
        assert normalize_date(value) is None

    @pytest.mark.parametrize("serial", [EXCEL_SERIAL_MIN, 40000, 45000, 45750, 45750.5, 46000.25])
    def test_serial_at_or_above_threshold(self, serial):
        assert normalize_date(serial) == _expected_from_serial(serial)

    @pytest.mark.parametrize("serial", [1, 100.0, 25569, EXCEL_SERIAL_MIN - 1, 34999.9])
    def test_serial_below_threshold_is_null(self, serial):
        assert normalize_date(serial) is None

    def test_known_serial(self):
        # 45658 is 2025-01-01 in Excel's 1900 date system
        assert normalize_date(45658) == "2025-01-01"

    @pytest.mark.parametrize("value", [None, "", "   ", 0, 0.0])
    def test_falsy_is_null(self, value):
        assert normalize_date(value) is None

    def test_native_datetime(self):
        assert normalize_date(datetime(2025, 3, 2, 15, 30)) == "2025-03-02"

    def test_aware_datetime_uses_utc_day(self):
        value = datetime(2025, 3, 2, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        assert normalize_date(value) == "2025-03-01"

    def test_native_date(self):
        assert normalize_date(date(2024, 12, 31)) == "2024-12-31"

    @pytest.mark.parametrize("value,expected", [
        ("2025-03-02", "2025-03-02"),
        ("  2025-03-02  ", "2025-03-02"),
        ("March 2, 2025", "2025-03-02"),
        ("2025/03/02", "2025-03-02"),
        ("2025-03-02T23:30:00-05:00", "2025-03-03"),
    ])
    def test_text_dates(self, value, expected):
        assert normalize_date(value) == expected

    @pytest.mark.parametrize("value", ["pending", "xyz"])
    def test_unparseable_text_is_null(self, value):
        assert normalize_date(value) is None

    @pytest.mark.parametrize("value", ["10:30", "12", "Dec", "March 11", "Monday"])
    def test_incomplete_text_is_null(self, value):
        # year or month missing: nothing may be filled in from the current date
        assert normalize_date(value) is None

    @pytest.mark.parametrize("value,expected", [
        ("March 2025", "2025-03-01"),
        ("Dec 2024", "2024-12-01"),
    ])
    def test_month_and_year_only_is_first_of_month(self, value, expected):
        assert normalize_date(value) == expected

    @pytest.mark.parametrize("value", [True, float("nan"), float("inf"), 1e12, object()])
    def test_non_dates_are_null(self, value):
        assert normalize_date(value) is None

    def test_serial_overflow_is_null(self):
        assert excel_serial_to_iso(1e15) is None


class TestPartNumber:

    @pytest.mark.parametrize("value,expected", [
        (3222334455.0, "3222334455"),
        ("3222334455.0", "3222334455"),
        ("ABC-12.0", "ABC-12"),
        ("12.05", "12.05"),
        ("1.00", "1.00"),
        ("5.0.0", "5.0"),
        (42, "42"),
        ("PN-77", "PN-77"),
        ("", ""),
    ])
    def test_trailing_point_zero(self, value, expected):
        assert normalize_part_number(value) == expected

    def test_none(self):
        assert normalize_part_number(None) is None


def test_passthrough_keeps_value():
    marker = object()
    assert passthrough(marker) is marker
    assert passthrough(None) is None
    assert passthrough("In transit") == "In transit"
    assert passthrough(7) == 7


def test_passthrough_stores_time_cells_as_text():
    assert passthrough(time(10, 30)) == "10:30:00"
    assert passthrough(timedelta(hours=36)) == "1 day, 12:00:00"
