"""Domain models for the facility reservation system."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import StrEnum

from dateutil.parser import isoparse
from pydantic import BaseModel, Field, field_validator, model_validator

from facility_reservations.domain.clock import normalize_time, parse_time


class Weekday(StrEnum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


# Sunday = 0, matching the index order of the enum above.
WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)


class ReservationStatus(StrEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class TimelineEntryType(StrEnum):
    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    DELETED = "deleted"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _as_date(value: object) -> object:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        try:
            return isoparse(value).date()
        except ValueError:
            raise ValueError("reservation_date must be an ISO date") from None
    return value


# ---------------------------------------------------------------------------
# Core domain models
# ---------------------------------------------------------------------------


class TimeRange(BaseModel):
    start_time: str
    end_time: str

    normalize_times = field_validator("start_time", "end_time")(normalize_time)

    @model_validator(mode="after")
    def _end_after_start(self) -> TimeRange:
        if parse_time(self.end_time) <= parse_time(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class WeeklyAvailability(BaseModel):
    start_day: Weekday
    end_day: Weekday
    time_range: TimeRange


class Facility(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    price: float = Field(ge=0)
    availability: WeeklyAvailability
    created_at: datetime = Field(default_factory=_utcnow)


class Reservation(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    full_name: str
    facility_id: str
    facility_name: str
    price: float
    address: str
    contact_number: str
    purpose: str
    reservation_date: date
    start_time: str
    end_time: str
    status: ReservationStatus = ReservationStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    normalize_times = field_validator("start_time", "end_time")(normalize_time)

    @model_validator(mode="after")
    def _end_after_start(self) -> Reservation:
        if parse_time(self.end_time) <= parse_time(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self

    @property
    def slot_key(self) -> tuple[str, date, str, str]:
        """Unique key enforced by the reservation store."""
        return (self.facility_id, self.reservation_date, self.start_time, self.end_time)


class Message(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    content: str
    created_at: datetime = Field(default_factory=_utcnow)


class TimelineEntry(BaseModel):
    id: str = Field(default_factory=_new_id)
    reservation_id: str
    timestamp: datetime = Field(default_factory=_utcnow)
    type: TimelineEntryType
    payload: dict = Field(default_factory=dict)


class Requester(BaseModel):
    """Identity of the caller, as supplied by the authentication layer."""

    user_id: str
    first_name: str = ""
    last_name: str = ""
    role: str = "user"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# ---------------------------------------------------------------------------
# Availability report
# ---------------------------------------------------------------------------


class Slot(BaseModel):
    start: str
    end: str


class DayAvailability(BaseModel):
    day: Weekday
    date: date
    slots: list[Slot] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Request / Response DTOs
# ---------------------------------------------------------------------------


class CreateFacilityRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    availability: WeeklyAvailability


class CreateReservationRequest(BaseModel):
    facility_id: str = Field(min_length=1)
    address: str = Field(min_length=1)
    contact_number: str = Field(min_length=1)
    purpose: str = Field(min_length=1)
    reservation_date: date
    start_time: str
    end_time: str

    normalize_times = field_validator("start_time", "end_time")(normalize_time)
    normalize_date = field_validator("reservation_date", mode="before")(_as_date)


class UpdateStatusRequest(BaseModel):
    status: ReservationStatus


class SendMessageRequest(BaseModel):
    content: str = Field(min_length=1)
