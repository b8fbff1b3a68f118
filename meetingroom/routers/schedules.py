from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from meetingroom.db import get_db
from meetingroom.schemas.schedule import DaySchedule
from meetingroom.utils.scheduler import load_day_schedule

router = APIRouter(
    prefix="/schedules",
    tags=["schedules"],
)


@router.get(
    "/",
    response_model=DaySchedule,
    summary="Day calendar of all rooms",
    description="Rooms ordered by capacity and the reservations starting on the given day.",
)
def get_day_schedule(day: date, db: Session = Depends(get_db)):
    return load_day_schedule(db, day)
