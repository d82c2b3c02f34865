"""In-memory repositories for facilities, reservations, messages and timelines."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date, datetime, timezone
from typing import Iterator

from facility_reservations.domain.errors import ConstraintViolation
from facility_reservations.domain.models import (
    Facility,
    Message,
    Reservation,
    ReservationStatus,
    TimeRange,
    TimelineEntry,
    Weekday,
    WeeklyAvailability,
)


class FacilityRepository:
    """Dict-backed store for Facility instances, keyed by id."""

    def __init__(self) -> None:
        self._store: dict[str, Facility] = {}

    def add(self, facility: Facility) -> None:
        self._store[facility.id] = facility

    def get(self, facility_id: str) -> Facility | None:
        return self._store.get(facility_id)

    def list_all(self) -> list[Facility]:
        return list(self._store.values())


class ReservationRepository:
    """Dict-backed store for Reservation instances.

    Enforces a unique key on ``(facility_id, reservation_date, start_time,
    end_time)``. ``transaction()`` holds the store lock so a caller can run a
    read-check-write sequence without another writer interleaving.
    """

    def __init__(self) -> None:
        self._store: dict[str, Reservation] = {}
        self._keys: dict[tuple, str] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[ReservationRepository]:
        with self._lock:
            yield self

    def add(self, reservation: Reservation) -> None:
        with self._lock:
            key = reservation.slot_key
            if key in self._keys:
                raise ConstraintViolation(
                    "A reservation already exists for this facility, date and time"
                )
            self._store[reservation.id] = reservation
            self._keys[key] = reservation.id

    def get(self, reservation_id: str) -> Reservation | None:
        return self._store.get(reservation_id)

    def find(
        self,
        facility_id: str | None = None,
        reservation_date: date | None = None,
        user_id: str | None = None,
        full_name: str | None = None,
    ) -> list[Reservation]:
        """Return reservations matching every filter that is not ``None``."""
        with self._lock:
            rows = list(self._store.values())
        return [
            r
            for r in rows
            if (facility_id is None or r.facility_id == facility_id)
            and (reservation_date is None or r.reservation_date == reservation_date)
            and (user_id is None or r.user_id == user_id)
            and (full_name is None or r.full_name == full_name)
        ]

    def list_all(self) -> list[Reservation]:
        return self.find()

    def update_status(
        self, reservation_id: str, status: ReservationStatus
    ) -> Reservation | None:
        with self._lock:
            r = self._store.get(reservation_id)
            if r is not None:
                r.status = status
                r.updated_at = datetime.now(timezone.utc)
            return r

    def delete(self, reservation_id: str) -> Reservation | None:
        with self._lock:
            r = self._store.pop(reservation_id, None)
            if r is not None:
                self._keys.pop(r.slot_key, None)
            return r


class MessageRepository:
    """List-backed store for Message instances."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    def add(self, message: Message) -> None:
        self._messages.append(message)

    def list_all(self) -> list[Message]:
        return sorted(self._messages, key=lambda m: m.created_at)

    def list_for_user(self, user_id: str) -> list[Message]:
        return [m for m in self.list_all() if m.user_id == user_id]


class TimelineRepository:
    """List-backed store for TimelineEntry instances."""

    def __init__(self) -> None:
        self._entries: list[TimelineEntry] = []

    def add(self, entry: TimelineEntry) -> None:
        self._entries.append(entry)

    def list_for_reservation(self, reservation_id: str) -> list[TimelineEntry]:
        return sorted(
            [e for e in self._entries if e.reservation_id == reservation_id],
            key=lambda e: e.timestamp,
        )


# ---------------------------------------------------------------------------
# Seed data – a few facilities covering plain and week-wrapping windows
# ---------------------------------------------------------------------------


def _seed_facilities(repo: FacilityRepository) -> None:
    repo.add(
        Facility(
            name="Basketball Court",
            description="Indoor full-size court",
            price=500,
            availability=WeeklyAvailability(
                start_day=Weekday.MONDAY,
                end_day=Weekday.FRIDAY,
                time_range=TimeRange(start_time="08:00", end_time="17:00"),
            ),
        )
    )
    repo.add(
        Facility(
            name="Function Hall",
            description="Events hall, seats 120",
            price=2500,
            availability=WeeklyAvailability(
                start_day=Weekday.FRIDAY,
                end_day=Weekday.MONDAY,
                time_range=TimeRange(start_time="10:00", end_time="22:00"),
            ),
        )
    )
    repo.add(
        Facility(
            name="Conference Room",
            description="Projector and whiteboard",
            price=300,
            availability=WeeklyAvailability(
                start_day=Weekday.SUNDAY,
                end_day=Weekday.SATURDAY,
                time_range=TimeRange(start_time="09:00", end_time="12:30"),
            ),
        )
    )


def create_facility_repository(seed: bool = False) -> FacilityRepository:
    """Return a FacilityRepository, optionally pre-loaded with sample data."""
    repo = FacilityRepository()
    if seed:
        _seed_facilities(repo)
    return repo
