"""Tests for the date helpers."""

import pytest
from datetime import datetime, timedelta, timezone

from src.functions.dates import (
    CalendarDate,
    FormatError,
    date_range,
    decompose,
    expand_date,
    normalize,
    parse_date,
    plus_days,
    today,
    yesterday,
)


class TestParseDate:
    """Tests for parsing yyyy-mm-dd strings."""

    def test_parse_padded(self):
        assert parse_date("2019-01-20") == CalendarDate(2019, 1, 20)

    def test_parse_single_digit_month_and_day(self):
        assert parse_date("2019-1-2") == CalendarDate(2019, 1, 2)

    def test_str_is_zero_padded(self):
        assert str(parse_date("2019-1-2")) == "2019-01-02"

    @pytest.mark.parametrize("value", [
        "not-a-date",
        "2019-13-01",
        "2019-02-30",
        "2019-13-32",
        "19-01-01",
        "2019/01/01",
        "2019-01-01T10:00:00",
        "",
        None,
        20190101,
        "\u0662\u0660\u0661\u0669-01-01",
        "2019-\uff10\uff11-01",
    ])
    def test_invalid_dates_raise_format_error(self, value):
        with pytest.raises(FormatError):
            parse_date(value)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_date("2019-00-10")

    def test_leap_day(self):
        assert parse_date("2020-02-29") == CalendarDate(2020, 2, 29)
        with pytest.raises(FormatError):
            parse_date("2019-02-29")


class TestDecomposeAndNormalize:
    """Tests for splitting and ordering dates."""

    def test_decompose(self):
        assert decompose(parse_date("2018-11-05")) == (2018, 11, 5)

    def test_expand_date(self):
        assert expand_date("2018-11-05") == [2018, 11, 5]

    def test_normalize_keeps_ascending_order(self):
        lo, hi = normalize(parse_date("2017-01-09"), parse_date("2019-04-10"))
        assert (str(lo), str(hi)) == ("2017-01-09", "2019-04-10")

    def test_normalize_swaps_descending_order(self):
        lo, hi = normalize(parse_date("2019-04-10"), parse_date("2017-01-09"))
        assert (str(lo), str(hi)) == ("2017-01-09", "2019-04-10")

    def test_normalize_equal_dates(self):
        lo, hi = normalize(parse_date("2019-4-10"), parse_date("2019-04-10"))
        assert lo == hi

    def test_ordering_is_chronological(self):
        assert parse_date("2018-12-31") < parse_date("2019-01-01")
        assert parse_date("2019-01-31") < parse_date("2019-02-01")


class TestDateArithmetic:
    """Tests for plus_days, date_range, today and yesterday."""

    def test_plus_days(self):
        assert plus_days("2018-01-10", 5) == "2018-01-15"
        assert plus_days("2018-01-10", -5) == "2018-01-05"
        assert plus_days("2018-01-10", 0) == "2018-01-10"

    def test_plus_days_crosses_year(self):
        assert plus_days("2018-12-30", 3) == "2019-01-02"

    def test_plus_days_rejects_bad_input(self):
        with pytest.raises(FormatError):
            plus_days(None, 5)

    def test_date_range_single_day(self):
        assert date_range("2018-01-10", "2018-01-10") == ["2018-01-10"]

    def test_date_range_within_month(self):
        assert date_range("2018-01-10", "2018-01-14") == [
            "2018-01-10", "2018-01-11", "2018-01-12", "2018-01-13", "2018-01-14"
        ]

    def test_date_range_across_month(self):
        assert date_range("2018-01-30", "2018-02-04") == [
            "2018-01-30", "2018-01-31", "2018-02-01", "2018-02-02", "2018-02-03", "2018-02-04"
        ]

    def test_date_range_across_year(self):
        days = date_range("2018-12-25", "2019-01-05")
        assert len(days) == 12
        assert days[0] == "2018-12-25"
        assert "2018-12-31" in days
        assert days[-1] == "2019-01-05"

    def test_date_range_rejects_reversed_dates(self):
        with pytest.raises(ValueError, match="must be before end date"):
            date_range("2018-01-14", "2018-01-10")

    def test_today_and_yesterday(self):
        now = datetime.now(timezone.utc).date()
        assert today() in (now.isoformat(), (now + timedelta(days=1)).isoformat())
        assert plus_days(yesterday(), 1) in (today(), plus_days(today(), -1))
