"""Service for booking, listing and administering reservations."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from facility_reservations.domain.bus import EventBus
from facility_reservations.domain.clock import parse_time
from facility_reservations.domain.errors import (
    ConflictError,
    ConstraintViolation,
    DuplicateError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from facility_reservations.domain.events import (
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
)
from facility_reservations.domain.models import (
    CreateReservationRequest,
    DayAvailability,
    Facility,
    Requester,
    Reservation,
    ReservationStatus,
)
from facility_reservations.repos.memory import FacilityRepository, ReservationRepository
from facility_reservations.services.availability import (
    is_date_within_weekly_window,
    is_time_within_range,
)
from facility_reservations.services.conflicts import find_conflicts, find_duplicate
from facility_reservations.services.slots import build_weekly_availability

logger = logging.getLogger(__name__)


class ReservationService:
    """Validates and books reservations against the facility and reservation stores."""

    def __init__(
        self,
        facility_repo: FacilityRepository,
        reservation_repo: ReservationRepository,
        bus: EventBus,
        admin_role: str = "admin",
        today: Callable[[], date] = date.today,
    ) -> None:
        self.facility_repo = facility_repo
        self.reservation_repo = reservation_repo
        self.bus = bus
        self.admin_role = admin_role
        self.today = today

    def _get_facility(self, facility_id: str) -> Facility:
        facility = self.facility_repo.get(facility_id)
        if facility is None:
            raise NotFoundError("Facility not found")
        return facility

    def _get_reservation(self, reservation_id: str) -> Reservation:
        reservation = self.reservation_repo.get(reservation_id)
        if reservation is None:
            raise NotFoundError("Reservation not found")
        return reservation

    def is_admin(self, requester: Requester) -> bool:
        return requester.role == self.admin_role

    # ------------------------------------------------------------------
    # Booking
    # ------------------------------------------------------------------

    def create_reservation(
        self, request: CreateReservationRequest, requester: Requester
    ) -> Reservation:
        """Book a slot after the availability, duplicate and overlap checks.

        Raises ``NotFoundError``, ``ValidationError``, ``DuplicateError`` or
        ``ConflictError``; nothing is written unless every check passes.
        """
        facility = self._get_facility(request.facility_id)
        window = facility.availability

        if not is_date_within_weekly_window(
            window.start_day, window.end_day, request.reservation_date
        ):
            logger.warning(
                "rejected booking for %s on %s: closed that day",
                facility.id,
                request.reservation_date,
            )
            raise ValidationError("Facility is not available on this day")

        if not is_time_within_range(
            request.start_time,
            request.end_time,
            window.time_range.start_time,
            window.time_range.end_time,
        ):
            logger.warning(
                "rejected booking for %s: %s-%s outside %s-%s",
                facility.id,
                request.start_time,
                request.end_time,
                window.time_range.start_time,
                window.time_range.end_time,
            )
            if parse_time(request.start_time) >= parse_time(request.end_time):
                raise ValidationError("End time must be later than start time.")
            raise ValidationError(
                "Reservation time is outside the facility's available time range"
            )

        reservation = Reservation(
            user_id=requester.user_id,
            full_name=requester.full_name,
            facility_id=facility.id,
            facility_name=facility.name,
            price=facility.price,
            address=request.address,
            contact_number=request.contact_number,
            purpose=request.purpose,
            reservation_date=request.reservation_date,
            start_time=request.start_time,
            end_time=request.end_time,
        )

        with self.reservation_repo.transaction() as repo:
            existing = repo.find(
                facility_id=facility.id, reservation_date=request.reservation_date
            )
            args = (
                facility.id,
                request.reservation_date,
                request.start_time,
                request.end_time,
                existing,
            )
            if find_duplicate(*args) is not None:
                logger.warning("duplicate booking for %s", reservation.slot_key)
                raise DuplicateError("Duplicate reservation detected.")
            if find_conflicts(*args):
                logger.warning("time conflict for %s", reservation.slot_key)
                raise ConflictError("Time conflict detected.")
            try:
                repo.add(reservation)
            except ConstraintViolation as exc:
                logger.warning("store rejected %s: %s", reservation.slot_key, exc.message)
                raise ConflictError("Time conflict detected.") from exc

        logger.info(
            "reservation %s created for %s on %s %s-%s",
            reservation.id,
            facility.name,
            reservation.reservation_date,
            reservation.start_time,
            reservation.end_time,
        )
        self.bus.publish(ReservationCreated(reservation_id=reservation.id))
        return reservation

    def list_available_slots(
        self, facility_id: str, reference_date: date | None = None
    ) -> list[DayAvailability]:
        """Free hourly slots per day of the facility's weekly window."""
        facility = self._get_facility(facility_id)
        reservations = self.reservation_repo.find(facility_id=facility_id)
        return build_weekly_availability(
            facility, reference_date or self.today(), reservations
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> list[Reservation]:
        return self.reservation_repo.list_all()

    def list_for_user(self, user_id: str) -> list[Reservation]:
        rows = self.reservation_repo.find(user_id=user_id)
        if not rows:
            raise NotFoundError("No reservations found for this user.")
        return rows

    def list_for_full_name(self, full_name: str) -> list[Reservation]:
        rows = self.reservation_repo.find(full_name=full_name)
        if not rows:
            raise NotFoundError("No reservations found for this user")
        return rows

    def get(self, reservation_id: str) -> Reservation:
        return self._get_reservation(reservation_id)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def update_status(
        self, reservation_id: str, status: ReservationStatus, requester: Requester
    ) -> Reservation:
        if not self.is_admin(requester):
            raise PermissionDeniedError("Only administrators can change a reservation's status")
        reservation = self._get_reservation(reservation_id)
        old_status = reservation.status
        self.reservation_repo.update_status(reservation_id, status)
        logger.info("reservation %s: %s -> %s", reservation_id, old_status, status)
        self.bus.publish(
            ReservationStatusChanged(
                reservation_id=reservation_id,
                old_status=old_status,
                new_status=status,
            )
        )
        return reservation

    def delete_reservation(self, reservation_id: str, requester: Requester) -> None:
        reservation = self._get_reservation(reservation_id)
        if not (self.is_admin(requester) or reservation.user_id == requester.user_id):
            raise PermissionDeniedError("You can only delete your own reservations")
        self.reservation_repo.delete(reservation_id)
        logger.info("reservation %s deleted by %s", reservation_id, requester.user_id)
        self.bus.publish(
            ReservationDeleted(reservation_id=reservation_id, deleted_by=requester.user_id)
        )
