from pydantic import BaseModel
from datetime import date, datetime
from typing import List
from meetingroom.schemas.room import RoomResponse


class ScheduleEvent(BaseModel):
    id: int
    room_id: int
    title: str
    display_title: str
    start_time: datetime
    end_time: datetime


class DaySchedule(BaseModel):
    day: date
    rooms: List[RoomResponse]
    events: List[ScheduleEvent]
