"""Domain events emitted during the reservation lifecycle."""

from __future__ import annotations

from pydantic import BaseModel


class ReservationCreated(BaseModel):
    """Fired when a new Reservation is persisted."""

    reservation_id: str


class ReservationStatusChanged(BaseModel):
    """Fired when an administrator changes a reservation's status."""

    reservation_id: str
    old_status: str
    new_status: str


class ReservationDeleted(BaseModel):
    """Fired after a reservation has been removed from the store."""

    reservation_id: str
    deleted_by: str
