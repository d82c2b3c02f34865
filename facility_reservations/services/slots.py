"""Service for enumerating free hourly booking slots."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable

from facility_reservations.domain.clock import format_time, parse_time
from facility_reservations.domain.models import (
    WEEKDAYS,
    DayAvailability,
    Facility,
    Reservation,
    Slot,
    TimeRange,
)
from facility_reservations.services.availability import DAYS_PER_WEEK, window_offsets
from facility_reservations.services.conflicts import intervals_overlap

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60


def generate_hourly_slots(start: int, end: int) -> list[tuple[int, int]]:
    """Consecutive one-hour ``(start, end)`` pairs inside ``[start, end]``.

    A trailing remainder shorter than an hour is dropped.
    """
    slots = []
    current = start
    while current + SLOT_MINUTES <= end:
        slots.append((current, current + SLOT_MINUTES))
        current += SLOT_MINUTES
    return slots


def compute_available_slots(
    time_range: TimeRange, reservations_for_day: Iterable[Reservation]
) -> list[Slot]:
    """Return the hourly slots of *time_range* not overlapping any reservation."""
    booked = [
        (parse_time(r.start_time), parse_time(r.end_time)) for r in reservations_for_day
    ]
    candidates = generate_hourly_slots(
        parse_time(time_range.start_time), parse_time(time_range.end_time)
    )
    free = [
        Slot(start=format_time(s), end=format_time(e))
        for s, e in candidates
        if not any(intervals_overlap(s, e, bs, be) for bs, be in booked)
    ]
    logger.debug(
        "%d of %d slots free between %s and %s",
        len(free),
        len(candidates),
        time_range.start_time,
        time_range.end_time,
    )
    return free


def build_weekly_availability(
    facility: Facility,
    reference_date: date,
    reservations: Iterable[Reservation],
) -> list[DayAvailability]:
    """Free slots for each day offset in the facility's weekly window.

    The day offset is the raw window index (Sunday = 0), so the reported date
    is ``reference_date + offset`` days and the reported name is
    ``WEEKDAYS[offset % 7]``. For a wrapping window the offsets continue past
    6 and the dates can run beyond one calendar week from *reference_date*.
    """
    availability = facility.availability
    reservations = list(reservations)
    report = []
    for offset in window_offsets(availability.start_day, availability.end_day):
        day_date = reference_date + timedelta(days=offset)
        day_reservations = [r for r in reservations if r.reservation_date == day_date]
        report.append(
            DayAvailability(
                day=WEEKDAYS[offset % DAYS_PER_WEEK],
                date=day_date,
                slots=compute_available_slots(availability.time_range, day_reservations),
            )
        )
    return report
