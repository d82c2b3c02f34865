"""Domain event handlers, wired up at application startup."""

from __future__ import annotations

import logging

from facility_reservations.domain.bus import EventBus
from facility_reservations.domain.events import (
    ReservationCreated,
    ReservationDeleted,
    ReservationStatusChanged,
)
from facility_reservations.domain.models import TimelineEntry, TimelineEntryType
from facility_reservations.repos.memory import ReservationRepository, TimelineRepository

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Wires reservation-event handlers to the bus with access to the repositories."""

    def __init__(
        self,
        bus: EventBus,
        reservation_repo: ReservationRepository,
        timeline_repo: TimelineRepository,
    ) -> None:
        self.bus = bus
        self.reservation_repo = reservation_repo
        self.timeline_repo = timeline_repo
        self._register()

    def _register(self) -> None:
        self.bus.subscribe(ReservationCreated, self.on_reservation_created)
        self.bus.subscribe(ReservationStatusChanged, self.on_status_changed)
        self.bus.subscribe(ReservationDeleted, self.on_reservation_deleted)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def on_reservation_created(self, event: ReservationCreated) -> None:
        stored = self.reservation_repo.get(event.reservation_id)
        if stored is None:
            logger.warning("created event for unknown reservation %s", event.reservation_id)
            return

        self.timeline_repo.add(
            TimelineEntry(
                reservation_id=stored.id,
                type=TimelineEntryType.CREATED,
                payload={
                    "facility_id": stored.facility_id,
                    "reservation_date": stored.reservation_date.isoformat(),
                    "start_time": stored.start_time,
                    "end_time": stored.end_time,
                    "status": stored.status,
                },
            )
        )

    def on_status_changed(self, event: ReservationStatusChanged) -> None:
        self.timeline_repo.add(
            TimelineEntry(
                reservation_id=event.reservation_id,
                type=TimelineEntryType.STATUS_CHANGED,
                payload={"from": event.old_status, "to": event.new_status},
            )
        )

    def on_reservation_deleted(self, event: ReservationDeleted) -> None:
        # The reservation is already gone; the timeline outlives it.
        self.timeline_repo.add(
            TimelineEntry(
                reservation_id=event.reservation_id,
                type=TimelineEntryType.DELETED,
                payload={"deleted_by": event.deleted_by},
            )
        )
