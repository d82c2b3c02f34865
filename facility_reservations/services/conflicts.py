"""Service for detecting scheduling conflicts between reservations."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from facility_reservations.domain.clock import parse_time
from facility_reservations.domain.models import Reservation


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Half-open overlap test on minute-of-day intervals.

    Exact boundary touches (end == start) are NOT considered overlaps.
    """
    return start1 < end2 and end1 > start2


def _same_day(
    reservations: Iterable[Reservation], facility_id: str, reservation_date: date
) -> list[Reservation]:
    return [
        r
        for r in reservations
        if r.facility_id == facility_id and r.reservation_date == reservation_date
    ]


def find_conflicts(
    facility_id: str,
    reservation_date: date,
    start_time: str,
    end_time: str,
    existing: Iterable[Reservation],
) -> list[Reservation]:
    """Return existing reservations on the same facility and date that overlap."""
    start = parse_time(start_time)
    end = parse_time(end_time)
    return [
        r
        for r in _same_day(existing, facility_id, reservation_date)
        if intervals_overlap(start, end, parse_time(r.start_time), parse_time(r.end_time))
    ]


def has_conflict(
    facility_id: str,
    reservation_date: date,
    start_time: str,
    end_time: str,
    existing: Iterable[Reservation],
) -> bool:
    return bool(find_conflicts(facility_id, reservation_date, start_time, end_time, existing))


def find_duplicate(
    facility_id: str,
    reservation_date: date,
    start_time: str,
    end_time: str,
    existing: Iterable[Reservation],
) -> Reservation | None:
    """Return a reservation with exactly the same start and end, if any."""
    for r in _same_day(existing, facility_id, reservation_date):
        if r.start_time == start_time and r.end_time == end_time:
            return r
    return None
