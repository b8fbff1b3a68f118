"""Reservation Store: the persistence boundary for rooms' reservations.

Rows leave the store as typed ``ReservationRead`` records. Rows that do not
parse are reported as ``StoreError`` rather than handed to callers.
"""
import logging
from datetime import date, datetime
from threading import Lock
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from meetingroom.models.reservation import Reservation
from meetingroom.schemas.reservation import MyReservationRead, ReservationRead
from meetingroom.utils.validation_helpers import day_bounds
from meetingroom.utils.validator import Accepted, find_conflict

logger = logging.getLogger(__name__)

# Serializes the conflict re-check and insert within this process
_insert_lock = Lock()


class StoreError(Exception):
    """Backend failure while reading or writing reservations."""


class ReservationConflictError(StoreError):
    """The window was taken between validation and insert."""

    def __init__(self, conflicting: ReservationRead):
        super().__init__(f"Reservation window conflicts with reservation {conflicting.id}")
        self.conflicting = conflicting


class ReservationStore:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Reservation).options(
            joinedload(Reservation.user), joinedload(Reservation.room)
        )

    def _parse(self, rows, schema=ReservationRead):
        try:
            return [schema.model_validate(row) for row in rows]
        except ValidationError as e:
            logger.error(f"Malformed reservation record: {e}")
            raise StoreError("Malformed reservation record") from e

    def _overlapping(self, room_id: int, start: datetime, end: datetime):
        return (
            self._query()
            .filter(
                Reservation.room_id == room_id,
                Reservation.start_time < end,
                Reservation.end_time > start,
            )
            .order_by(Reservation.start_time)
            .all()
        )

    def fetch_overlaps(self, room_id: int, day: date) -> List[ReservationRead]:
        """Reservations of ``room_id`` intersecting ``day``, earliest first."""
        start, end = day_bounds(day)
        return self.fetch_window(room_id, start, end)

    def fetch_window(self, room_id: int, start: datetime, end: datetime) -> List[ReservationRead]:
        try:
            rows = self._overlapping(room_id, start, end)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch reservations for room_id: {room_id}: {e}")
            raise StoreError("Could not load reservations") from e
        return self._parse(rows)

    def get(self, reservation_id: int) -> Optional[ReservationRead]:
        try:
            row = self._query().filter(Reservation.id == reservation_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch reservation {reservation_id}: {e}")
            raise StoreError("Could not load reservation") from e
        if row is None:
            return None
        return self._parse([row])[0]

    def list_for_user(self, user_id: int) -> List[MyReservationRead]:
        """The user's reservations, newest first."""
        try:
            rows = (
                self._query()
                .filter(Reservation.user_id == user_id)
                .order_by(Reservation.start_time.desc())
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch reservations for user {user_id}: {e}")
            raise StoreError("Could not load reservations") from e
        return self._parse(rows, MyReservationRead)

    def list_starting_on(self, day: date) -> List[MyReservationRead]:
        """Reservations of every room whose start falls on ``day``."""
        start, end = day_bounds(day)
        try:
            rows = (
                self._query()
                .filter(Reservation.start_time >= start, Reservation.start_time < end)
                .order_by(Reservation.start_time)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch reservations for {day}: {e}")
            raise StoreError("Could not load reservations") from e
        return self._parse(rows, MyReservationRead)

    def insert(self, accepted: Accepted, user_id: int, title: str, attendees: List[str]) -> ReservationRead:
        """Persist an accepted window, re-checking it against the current rows."""
        with _insert_lock:
            try:
                conflicting = find_conflict(
                    accepted.start_time,
                    accepted.end_time,
                    self._overlapping(accepted.room_id, accepted.start_time, accepted.end_time),
                )
                if conflicting is not None:
                    raise ReservationConflictError(self._parse([conflicting])[0])

                row = Reservation(
                    room_id=accepted.room_id,
                    user_id=user_id,
                    title=title,
                    start_time=accepted.start_time,
                    end_time=accepted.end_time,
                    attendees=list(attendees),
                )
                self.db.add(row)
                self.db.commit()
                self.db.refresh(row)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Failed to insert reservation for room_id: {accepted.room_id}: {e}")
                raise StoreError("Could not save reservation") from e
        logger.debug(f"Inserted reservation: {row.id}, room_id: {row.room_id}")
        return self._parse([row])[0]

    def delete(self, reservation_id: int) -> None:
        try:
            row = self.db.query(Reservation).filter(Reservation.id == reservation_id).first()
            if row is not None:
                self.db.delete(row)
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete reservation {reservation_id}: {e}")
            raise StoreError("Could not cancel reservation") from e
