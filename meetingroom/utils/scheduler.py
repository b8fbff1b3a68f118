from datetime import date
from typing import List
from sqlalchemy.orm import Session
from meetingroom.models.room import Room
from meetingroom.schemas.room import RoomResponse
from meetingroom.schemas.reservation import MyReservationRead
from meetingroom.schemas.schedule import DaySchedule, ScheduleEvent
from meetingroom.store import ReservationStore


def display_title(reservation: MyReservationRead):
    if reservation.room_name:
        return f"[{reservation.room_name}] {reservation.title}"
    return reservation.title


def build_day_schedule(day: date, rooms: List[Room], reservations: List[MyReservationRead]) -> DaySchedule:
    """
    Lay out one day of the room-by-room calendar.
    Rooms keep the given order; events are the reservations starting that day.
    """
    room_ids = {room.id for room in rooms}
    events = [
        ScheduleEvent(
            id=reservation.id,
            room_id=reservation.room_id,
            title=reservation.title,
            display_title=display_title(reservation),
            start_time=reservation.start_time,
            end_time=reservation.end_time,
        )
        for reservation in reservations
        if reservation.room_id in room_ids
    ]
    return DaySchedule(
        day=day,
        rooms=[RoomResponse.model_validate(room) for room in rooms],
        events=events,
    )


def load_day_schedule(db: Session, day: date) -> DaySchedule:
    rooms = db.query(Room).order_by(Room.capacity.desc(), Room.name).all()
    reservations = ReservationStore(db).list_starting_on(day)
    return build_day_schedule(day, rooms, reservations)
