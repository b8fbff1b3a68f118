from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import datetime
from typing import List, Optional
from meetingroom.utils.validation_helpers import parse_comma_field, to_booking_time
from meetingroom.utils.validator import MAX_DURATION_MINUTES, end_after


class ReservationCreate(BaseModel):
    room_id: int
    title: str = Field(..., min_length=1)
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0, le=MAX_DURATION_MINUTES)
    attendees: List[str] = []

    @field_validator("title")
    @classmethod
    def strip_title(cls, value):
        value = value.strip()
        if not value:
            raise ValueError("Title must not be blank")
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_time(cls, value):
        return to_booking_time(value)

    @field_validator("attendees", mode="before")
    @classmethod
    def split_attendees(cls, value):
        return parse_comma_field(value)

    @model_validator(mode="after")
    def check_end_or_duration(self):
        if (self.end_time is None) == (self.duration_minutes is None):
            raise ValueError("Provide exactly one of end_time or duration_minutes")
        try:
            self.resolved_end_time()
        except OverflowError:
            raise ValueError("Reservation end time is out of range")
        return self

    def resolved_end_time(self) -> datetime:
        if self.end_time is not None:
            return self.end_time
        return end_after(self.start_time, self.duration_minutes)


class ReservationRead(BaseModel):
    """A reservation as handed out by the store, already checked for shape."""

    id: int
    room_id: int
    user_id: int
    title: str
    start_time: datetime
    end_time: datetime
    attendees: List[str] = []
    booker_name: str

    model_config = ConfigDict(from_attributes=True)

    @field_validator("attendees", mode="before")
    @classmethod
    def default_attendees(cls, value):
        return parse_comma_field(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_time >= self.end_time:
            raise ValueError("Reservation start_time must be earlier than end_time")
        return self


class MyReservationRead(ReservationRead):
    room_name: Optional[str] = None
    room_facilities: List[str] = []


class ConflictingReservation(BaseModel):
    id: int
    title: str
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(from_attributes=True)
