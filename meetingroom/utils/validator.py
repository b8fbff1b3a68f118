"""Reservation time-window validation and conflict detection.

Everything here is a pure function of its arguments: the caller supplies the
current instant and the reservations already booked for the room, and
persists the window itself once it is accepted.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Iterable, Optional, Union


QUICK_DURATIONS = (30, 60, 90, 120)
MAX_DURATION_MINUTES = 24 * 60


class RejectionReason(str, Enum):
    INVALID_WINDOW = "invalid_window"
    PAST_START_TIME = "past_start_time"
    OVERLAP = "overlap"


REJECTION_MESSAGES = {
    RejectionReason.INVALID_WINDOW: "End time must be later than start time.",
    RejectionReason.PAST_START_TIME: "Start time must not be earlier than the current time.",
    RejectionReason.OVERLAP: "The room is already reserved for the selected time. Please choose another time.",
}


@dataclass(frozen=True)
class Accepted:
    room_id: int
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    offending_reservation: Optional[Any] = None

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason]


ValidationResult = Union[Accepted, Rejected]


def _require_datetime(name: str, value: Any) -> None:
    if not isinstance(value, datetime):
        raise TypeError(f"{name} must be a datetime, got {type(value).__name__}")


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Return True when two half-open windows [start, end) intersect.

    Windows that only share a boundary (10:00-11:00 and 11:00-12:00) do not.
    """
    return start_a < end_b and start_b < end_a


def end_after(start: datetime, minutes: int) -> datetime:
    """End time for the quick-duration shortcuts. Not validated."""
    return start + timedelta(minutes=minutes)


def find_conflict(start: datetime, end: datetime, existing_reservations: Iterable[Any]) -> Optional[Any]:
    """Return the first reservation overlapping [start, end), if any."""
    for reservation in existing_reservations:
        if overlaps(start, end, reservation.start_time, reservation.end_time):
            return reservation
    return None


def validate_reservation(
    room_id: int,
    proposed_start: datetime,
    proposed_end: datetime,
    now: datetime,
    existing_reservations: Iterable[Any],
) -> ValidationResult:
    """Decide whether a reservation for ``room_id`` may be created.

    ``existing_reservations`` holds the reservations already booked for the
    room around the proposed window; each needs ``start_time`` and
    ``end_time`` attributes. Checks short-circuit in this order: window
    sanity, start not already elapsed today, overlap. Expected rejections
    are returned as ``Rejected``; only arguments of the wrong type raise.
    """
    _require_datetime("proposed_start", proposed_start)
    _require_datetime("proposed_end", proposed_end)
    _require_datetime("now", now)

    if proposed_end <= proposed_start:
        return Rejected(RejectionReason.INVALID_WINDOW)

    # earlier clock times on future days are fine
    if proposed_start.date() == now.date() and proposed_start < now:
        return Rejected(RejectionReason.PAST_START_TIME)

    conflict = find_conflict(proposed_start, proposed_end, existing_reservations)
    if conflict is not None:
        return Rejected(RejectionReason.OVERLAP, offending_reservation=conflict)

    return Accepted(room_id=room_id, start_time=proposed_start, end_time=proposed_end)
