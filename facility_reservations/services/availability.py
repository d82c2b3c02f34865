"""Service for resolving a facility's recurring weekly open window."""

from __future__ import annotations

from datetime import date

from facility_reservations.domain.clock import parse_time
from facility_reservations.domain.models import WEEKDAYS, Weekday

DAYS_PER_WEEK = len(WEEKDAYS)


def weekday_index(day: Weekday | str) -> int:
    """Index of *day* in the Sunday-first week (Sunday = 0)."""
    return WEEKDAYS.index(Weekday(day))


def weekday_of(candidate: date) -> Weekday:
    # date.weekday() is Monday-first; shift so Sunday lands on 0
    return WEEKDAYS[(candidate.weekday() + 1) % DAYS_PER_WEEK]


def window_offsets(start_day: Weekday | str, end_day: Weekday | str) -> range:
    """Raw day indices covered by the window, in iteration order.

    A wrapping window (Friday to Monday) continues past Saturday, so the
    indices run ``5, 6, 7, 8``; callers reduce them modulo 7 for naming.
    """
    start = weekday_index(start_day)
    end = weekday_index(end_day)
    if start > end:
        end += DAYS_PER_WEEK
    return range(start, end + 1)


def window_days(start_day: Weekday | str, end_day: Weekday | str) -> list[Weekday]:
    """Weekdays inside the inclusive, possibly wrapping, window."""
    return [WEEKDAYS[i % DAYS_PER_WEEK] for i in window_offsets(start_day, end_day)]


def is_date_within_weekly_window(
    start_day: Weekday | str, end_day: Weekday | str, candidate: date
) -> bool:
    """Return True if *candidate* falls on a day between *start_day* and *end_day*.

    The range is inclusive at both ends and wraps past the end of the week
    when *start_day* comes after *end_day*.
    """
    return weekday_of(candidate) in window_days(start_day, end_day)


def is_time_within_range(
    requested_start: str,
    requested_end: str,
    available_start: str,
    available_end: str,
) -> bool:
    """Return True if the requested window is non-empty and inside opening hours."""
    req_start = parse_time(requested_start)
    req_end = parse_time(requested_end)
    if req_start >= req_end:
        return False
    return req_start >= parse_time(available_start) and req_end <= parse_time(
        available_end
    )
