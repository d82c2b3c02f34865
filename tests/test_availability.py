"""Tests for the weekly-window availability resolver."""

from datetime import date, timedelta

import pytest

from facility_reservations.domain.clock import format_time, normalize_time, parse_time
from facility_reservations.domain.models import WEEKDAYS, Weekday
from facility_reservations.services.availability import (
    is_date_within_weekly_window,
    is_time_within_range,
    weekday_of,
    window_days,
    window_offsets,
)

# 2026-10-18 is a Sunday
_SUNDAY = date(2026, 10, 18)


def _on(day: Weekday) -> date:
    return _SUNDAY + timedelta(days=WEEKDAYS.index(day))


# ---------------------------------------------------------------------------
# Clock encoding
# ---------------------------------------------------------------------------


def test_parse_time_minutes_since_midnight():
    assert parse_time("00:00") == 0
    assert parse_time("09:30") == 570
    assert parse_time("9:30") == 570
    assert parse_time("23:59") == 1439


@pytest.mark.parametrize("raw", ["24:00", "12:60", "noon", "1230", ""])
def test_parse_time_rejects_malformed(raw):
    with pytest.raises(ValueError):
        parse_time(raw)


def test_format_and_normalize():
    assert format_time(570) == "09:30"
    assert normalize_time("7:05") == "07:05"


# ---------------------------------------------------------------------------
# Day-of-week window
# ---------------------------------------------------------------------------


def test_weekday_of_uses_sunday_first_week():
    assert weekday_of(_SUNDAY) == Weekday.SUNDAY
    assert weekday_of(date(2026, 10, 19)) == Weekday.MONDAY
    assert weekday_of(date(2026, 10, 24)) == Weekday.SATURDAY


def test_contiguous_window():
    assert window_days("Monday", "Friday") == [
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
    ]
    assert is_date_within_weekly_window("Monday", "Friday", _on(Weekday.WEDNESDAY))
    assert not is_date_within_weekly_window("Monday", "Friday", _on(Weekday.SATURDAY))
    assert not is_date_within_weekly_window("Monday", "Friday", _on(Weekday.SUNDAY))


def test_wrapping_window_includes_weekend():
    """Friday to Monday covers Fri, Sat, Sun and Mon."""
    assert list(window_offsets("Friday", "Monday")) == [5, 6, 7, 8]
    for day in (Weekday.FRIDAY, Weekday.SATURDAY, Weekday.SUNDAY, Weekday.MONDAY):
        assert is_date_within_weekly_window("Friday", "Monday", _on(day))
    for day in (Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY):
        assert not is_date_within_weekly_window("Friday", "Monday", _on(day))


def test_single_day_window():
    assert window_days("Wednesday", "Wednesday") == [Weekday.WEDNESDAY]
    assert is_date_within_weekly_window("Wednesday", "Wednesday", _on(Weekday.WEDNESDAY))
    assert not is_date_within_weekly_window("Wednesday", "Wednesday", _on(Weekday.THURSDAY))


def test_every_pair_includes_all_days_between():
    """For every (start, end) pair, each day walked from start to end is inside."""
    for start in WEEKDAYS:
        for end in WEEKDAYS:
            s, e = WEEKDAYS.index(start), WEEKDAYS.index(end)
            span = (e - s) % 7
            inside = {WEEKDAYS[(s + i) % 7] for i in range(span + 1)}
            for day in WEEKDAYS:
                assert is_date_within_weekly_window(start, end, _on(day)) == (
                    day in inside
                ), (start, end, day)


def test_unknown_weekday_name_rejected():
    with pytest.raises(ValueError):
        window_days("Funday", "Monday")


# ---------------------------------------------------------------------------
# Time-of-day window
# ---------------------------------------------------------------------------


def test_time_inside_opening_hours():
    assert is_time_within_range("10:00", "11:00", "09:00", "17:00")
    assert is_time_within_range("09:00", "17:00", "09:00", "17:00")


def test_time_before_or_after_opening_hours():
    assert not is_time_within_range("08:00", "09:00", "09:00", "17:00")
    assert not is_time_within_range("16:30", "17:30", "09:00", "17:00")
    assert not is_time_within_range("08:30", "10:00", "09:00", "17:00")


def test_empty_or_inverted_request_rejected():
    assert not is_time_within_range("10:00", "10:00", "09:00", "17:00")
    assert not is_time_within_range("11:00", "10:00", "09:00", "17:00")


def test_times_compared_numerically():
    """"9:00" would sort after "10:00" as a string."""
    assert is_time_within_range("9:00", "10:00", "08:00", "17:00")
