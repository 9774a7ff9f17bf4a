from __future__ import annotations

from datetime import date

from src.attendly.attendly.common.datetime_utils import (
    day_of_week,
    iter_days,
    parse_iso_date,
    to_date_string,
    try_parse_date,
)


def test_day_of_week_starts_on_sunday():
    assert day_of_week(date(2024, 1, 7)) == 0  # Sunday
    assert day_of_week(date(2024, 1, 1)) == 1  # Monday
    assert day_of_week(date(2024, 1, 6)) == 6  # Saturday


def test_iter_days_is_inclusive():
    days = list(iter_days(date(2024, 1, 30), date(2024, 2, 2)))
    assert [to_date_string(d) for d in days] == ["2024-01-30", "2024-01-31", "2024-02-01", "2024-02-02"]


def test_iter_days_single_day_and_reversed_range():
    assert list(iter_days(date(2024, 1, 1), date(2024, 1, 1))) == [date(2024, 1, 1)]
    assert list(iter_days(date(2024, 1, 2), date(2024, 1, 1))) == []


def test_iter_days_across_dst_switch_has_no_gap_or_repeat():
    # US and EU clocks change inside these ranges
    spring = [to_date_string(d) for d in iter_days(date(2024, 3, 9), date(2024, 3, 11))]
    autumn = [to_date_string(d) for d in iter_days(date(2024, 10, 26), date(2024, 10, 28))]
    assert spring == ["2024-03-09", "2024-03-10", "2024-03-11"]
    assert autumn == ["2024-10-26", "2024-10-27", "2024-10-28"]


def test_to_date_string_pads_calendar_fields():
    assert to_date_string(date(987, 2, 3)) == "0987-02-03"


def test_try_parse_date_rejects_blank_and_malformed():
    assert try_parse_date(None) is None
    assert try_parse_date("   ") is None
    assert try_parse_date("2024-02-30") is None
    assert try_parse_date("01/02/2024") is None
    assert try_parse_date(" 2024-02-29 ") == date(2024, 2, 29)
    assert parse_iso_date("2024-12-31") == date(2024, 12, 31)
