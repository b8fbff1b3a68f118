import logging
from datetime import date, datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from meetingroom.db import get_db
from meetingroom.models.room import Room
from meetingroom.models.user import User
from meetingroom.schemas.reservation import (
    ConflictingReservation,
    MyReservationRead,
    ReservationCreate,
    ReservationRead,
)
from meetingroom.store import ReservationConflictError, ReservationStore
from meetingroom.utils.auth import get_current_user
from meetingroom.utils.validation_helpers import booking_now, day_bounds
from meetingroom.utils.validator import (
    REJECTION_MESSAGES,
    Accepted,
    RejectionReason,
    validate_reservation,
)

logger = logging.getLogger(__name__)

PAST_DATE = "past_date"

router = APIRouter(
    prefix="/reservations",
    tags=["reservations"],
)


def get_store(db: Session = Depends(get_db)) -> ReservationStore:
    return ReservationStore(db)


def get_now() -> datetime:
    """Booking-timezone clock handed to the validator."""
    return booking_now()


def get_room_or_404(db: Session, room_id: int) -> Room:
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        logger.info(f"Room not found: {room_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


def rejection_error(reason: RejectionReason, conflicting=None) -> HTTPException:
    detail = {"reason": reason.value, "message": REJECTION_MESSAGES[reason]}
    if conflicting is not None:
        detail["conflicting"] = ConflictingReservation.model_validate(conflicting).model_dump(mode="json")
    status_code = status.HTTP_409_CONFLICT if reason == RejectionReason.OVERLAP else status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=status_code, detail=detail)


@router.get(
    "/",
    response_model=List[ReservationRead],
    summary="List a room's reservations for a day",
    description="Reservations of the room that intersect the given day, earliest first.",
)
def get_room_reservations(
    room_id: int,
    day: date,
    db: Session = Depends(get_db),
    store: ReservationStore = Depends(get_store),
):
    """
    - **room_id**: ID of the room.
    - **day**: Calendar day (e.g., 2025-05-04).
    """
    get_room_or_404(db, room_id)
    reservations = store.fetch_overlaps(room_id, day)
    logger.debug(f"Retrieved {len(reservations)} reservations for room_id: {room_id} on {day}")
    return reservations


@router.post(
    "/",
    response_model=ReservationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a reservation",
    description="Reserve a room for a time window. Requires authentication.",
)
def create_reservation(
    reservation: ReservationCreate,
    db: Session = Depends(get_db),
    store: ReservationStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """
    Reserve a room.
    Requires authentication.

    - **room_id**: ID of the room to reserve.
    - **title**: Meeting title.
    - **start_time**: Start of the reservation.
    - **end_time** or **duration_minutes**: End of the reservation, or its length (30, 60, 90, 120 are the usual shortcuts).
    - **attendees**: Attendee names, as a list or a comma separated string.
    """
    get_room_or_404(db, reservation.room_id)

    start_time = reservation.start_time
    end_time = reservation.resolved_end_time()
    logger.debug(f"Reservation request by {current_user.email}: room_id: {reservation.room_id}, {start_time} to {end_time}")

    if end_time > start_time and start_time.date() < now.date():
        logger.info(f"Rejected reservation on past date: {start_time.date()}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": PAST_DATE, "message": "Reservations cannot be made for past dates."},
        )

    # everything touching the start day, plus anything the window runs into
    day_start, day_end = day_bounds(start_time.date())
    existing = store.fetch_window(reservation.room_id, day_start, max(end_time, day_end))

    result = validate_reservation(reservation.room_id, start_time, end_time, now, existing)
    if not isinstance(result, Accepted):
        logger.info(f"Rejected reservation for room_id: {reservation.room_id}: {result.reason.value}")
        raise rejection_error(result.reason, result.offending_reservation)

    try:
        created = store.insert(result, current_user.id, reservation.title, reservation.attendees)
    except ReservationConflictError as e:
        logger.info(f"Reservation for room_id: {reservation.room_id} lost a race with {e.conflicting.id}")
        raise rejection_error(RejectionReason.OVERLAP, e.conflicting)

    logger.info(f"Created reservation: {created.id} for room_id: {created.room_id}")
    return created


@router.get(
    "/mine",
    response_model=List[MyReservationRead],
    summary="List my reservations",
    description="The current user's reservations, newest first. Requires authentication.",
)
def get_my_reservations(
    store: ReservationStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return store.list_for_user(current_user.id)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a reservation",
    description="Cancel a reservation. Requires authentication and ownership.",
)
def cancel_reservation(
    reservation_id: int,
    store: ReservationStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    """
    - **reservation_id**: ID of the reservation to cancel.
    """
    reservation = store.get(reservation_id)
    if reservation is None:
        logger.info(f"Reservation not found: {reservation_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reservation not found")

    if reservation.user_id != current_user.id:
        logger.info(f"User {current_user.email} not authorized to cancel reservation {reservation_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized to cancel this reservation")

    store.delete(reservation_id)
    logger.info(f"Cancelled reservation: {reservation_id}")
    return None
