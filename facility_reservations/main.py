"""FastAPI application and entry point for the facility reservation service."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from facility_reservations.config import load_settings
from facility_reservations.domain.bus import EventBus
from facility_reservations.domain.errors import (
    AuthenticationError,
    ConflictError,
    DuplicateError,
    NotFoundError,
    PermissionDeniedError,
    ReservationError,
    StorageError,
    ValidationError,
)
from facility_reservations.domain.handlers import HandlerRegistry
from facility_reservations.domain.models import (
    CreateFacilityRequest,
    CreateReservationRequest,
    DayAvailability,
    Facility,
    Message,
    Requester,
    Reservation,
    SendMessageRequest,
    TimelineEntry,
    UpdateStatusRequest,
)
from facility_reservations.repos.memory import (
    MessageRepository,
    ReservationRepository,
    TimelineRepository,
    create_facility_repository,
)
from facility_reservations.services.messages import MessageService
from facility_reservations.services.reservations import ReservationService

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_title)

# ── Singletons (created at import time for simplicity) ────────────────
event_bus = EventBus()
facility_repo = create_facility_repository(seed=settings.seed_demo_data)
reservation_repo = ReservationRepository()
message_repo = MessageRepository()
timeline_repo = TimelineRepository()

handler_registry = HandlerRegistry(
    bus=event_bus,
    reservation_repo=reservation_repo,
    timeline_repo=timeline_repo,
)
reservation_service = ReservationService(
    facility_repo=facility_repo,
    reservation_repo=reservation_repo,
    bus=event_bus,
    admin_role=settings.admin_role,
)
message_service = MessageService(message_repo, admin_role=settings.admin_role)


# ── Error mapping ─────────────────────────────────────────────────────

_STATUS_CODES: list[tuple[type[ReservationError], int]] = [
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ValidationError, 400),
    (DuplicateError, 409),
    (ConflictError, 409),
    (PermissionDeniedError, 403),
    (StorageError, 503),
]


@app.exception_handler(ReservationError)
def handle_reservation_error(request: Request, exc: ReservationError) -> JSONResponse:
    status_code = next(
        (code for cls, code in _STATUS_CODES if isinstance(exc, cls)), 500
    )
    if isinstance(exc, StorageError):
        logger.error("storage failure on %s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"message": details or "Invalid request"})


def _requester(
    user_id: str | None,
    first_name: str | None,
    last_name: str | None,
    role: str | None,
) -> Requester:
    if not user_id:
        raise AuthenticationError("Authentication required")
    return Requester(
        user_id=user_id,
        first_name=first_name or "",
        last_name=last_name or "",
        role=role or "user",
    )


# ── Facilities ────────────────────────────────────────────────────────


@app.post("/facilities", response_model=Facility, status_code=201)
def create_facility(payload: CreateFacilityRequest) -> Facility:
    """Register a bookable facility with its weekly open window."""
    facility = Facility(**payload.model_dump())
    facility_repo.add(facility)
    logger.info("facility %s (%s) created", facility.id, facility.name)
    return facility


@app.get("/facilities", response_model=list[Facility])
def list_facilities() -> list[Facility]:
    return facility_repo.list_all()


@app.get("/facilities/{facility_id}", response_model=Facility)
def get_facility(facility_id: str) -> Facility:
    facility = facility_repo.get(facility_id)
    if facility is None:
        raise NotFoundError("Facility not found")
    return facility


# ── Reservations ──────────────────────────────────────────────────────


@app.post("/reservations", response_model=Reservation, status_code=201)
def create_reservation(
    payload: CreateReservationRequest,
    x_user_id: str | None = Header(default=None),
    x_first_name: str | None = Header(default=None),
    x_last_name: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Reservation:
    """Book a facility for the authenticated user."""
    requester = _requester(x_user_id, x_first_name, x_last_name, x_user_role)
    return reservation_service.create_reservation(payload, requester)


@app.get("/reservations/available/{facility_id}", response_model=list[DayAvailability])
def list_available_slots(
    facility_id: str, date: date | None = None
) -> list[DayAvailability]:
    """Free hourly slots for each day of the facility's weekly window.

    *date* is the reference day the report is computed from; defaults to today.
    """
    return reservation_service.list_available_slots(facility_id, date)


@app.get("/reservations", response_model=list[Reservation])
def list_reservations() -> list[Reservation]:
    return reservation_service.list_all()


@app.get("/reservations/user/{user_id}", response_model=list[Reservation])
def list_user_reservations(user_id: str) -> list[Reservation]:
    return reservation_service.list_for_user(user_id)


@app.get("/reservations/by-name/{full_name}", response_model=list[Reservation])
def list_reservations_by_name(full_name: str) -> list[Reservation]:
    return reservation_service.list_for_full_name(full_name)


@app.get("/reservations/{reservation_id}", response_model=Reservation)
def get_reservation(reservation_id: str) -> Reservation:
    return reservation_service.get(reservation_id)


@app.get("/reservations/{reservation_id}/timeline", response_model=list[TimelineEntry])
def get_reservation_timeline(reservation_id: str) -> list[TimelineEntry]:
    """Lifecycle history of a reservation, oldest entry first."""
    entries = timeline_repo.list_for_reservation(reservation_id)
    if not entries:
        raise NotFoundError("Reservation not found")
    return entries


@app.put("/reservations/{reservation_id}/status", response_model=Reservation)
def update_reservation_status(
    reservation_id: str,
    body: UpdateStatusRequest,
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Reservation:
    requester = _requester(x_user_id, None, None, x_user_role)
    return reservation_service.update_status(reservation_id, body.status, requester)


@app.delete("/reservations/{reservation_id}", status_code=200)
def delete_reservation(
    reservation_id: str,
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> dict:
    requester = _requester(x_user_id, None, None, x_user_role)
    reservation_service.delete_reservation(reservation_id, requester)
    return {"message": "Reservation deleted successfully"}


# ── Messages ──────────────────────────────────────────────────────────


@app.post("/messages", response_model=Message, status_code=201)
def send_message(
    body: SendMessageRequest,
    x_user_id: str | None = Header(default=None),
) -> Message:
    """Send a message to the administrators."""
    requester = _requester(x_user_id, None, None, None)
    return message_service.send(requester, body.content)


@app.get("/messages/mine", response_model=list[Message])
def list_my_messages(x_user_id: str | None = Header(default=None)) -> list[Message]:
    requester = _requester(x_user_id, None, None, None)
    return message_service.list_mine(requester)


@app.get("/messages", response_model=list[Message])
def list_all_messages(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> list[Message]:
    requester = _requester(x_user_id, None, None, x_user_role)
    return message_service.list_all(requester)
