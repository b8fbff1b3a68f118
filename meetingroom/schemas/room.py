from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from meetingroom.utils.validation_helpers import parse_comma_field


class RoomBase(BaseModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0)
    facilities: List[str] = []

    @field_validator("facilities", mode="before")
    @classmethod
    def split_facilities(cls, value):
        return parse_comma_field(value)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, gt=0)
    facilities: Optional[List[str]] = None

    @field_validator("facilities", mode="before")
    @classmethod
    def split_facilities(cls, value):
        if value is None:
            return None
        return parse_comma_field(value)


class RoomResponse(RoomBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
