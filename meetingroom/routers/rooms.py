import logging
from enum import Enum
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from meetingroom.db import get_db
from meetingroom.models.room import Room
from meetingroom.models.user import User
from meetingroom.schemas.room import RoomCreate, RoomUpdate, RoomResponse
from meetingroom.utils.auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/rooms",
    tags=["rooms"],
)


class RoomSort(str, Enum):
    capacity = "capacity"
    name = "name"


@router.post("/", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(room: RoomCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """
    Create a new meeting room.
    Requires administrator access.
    """
    db_room = Room(**room.model_dump())
    db.add(db_room)
    db.commit()
    db.refresh(db_room)
    logger.info(f"Room created: {db_room.id} ({db_room.name}) by {admin.email}")
    return db_room


@router.get("/", response_model=List[RoomResponse])
def get_rooms(skip: int = 0, limit: int = 100, sort: RoomSort = RoomSort.capacity, db: Session = Depends(get_db)):
    """
    Retrieve meeting rooms, largest first by default or by name.
    """
    query = db.query(Room)
    if sort == RoomSort.name:
        query = query.order_by(Room.name)
    else:
        query = query.order_by(Room.capacity.desc(), Room.name)
    return query.offset(skip).limit(limit).all()


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a specific meeting room by ID.
    """
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(room_id: int, room_update: RoomUpdate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """
    Update a meeting room's details.
    Requires administrator access.
    """
    db_room = db.query(Room).filter(Room.id == room_id).first()
    if not db_room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    update_data = room_update.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(db_room, key, value)

    db.commit()
    db.refresh(db_room)
    logger.info(f"Room updated: {room_id} by {admin.email}")
    return db_room


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(room_id: int, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    """
    Delete a meeting room together with its reservations.
    Requires administrator access.
    """
    db_room = db.query(Room).filter(Room.id == room_id).first()
    if not db_room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")

    db.delete(db_room)
    db.commit()
    logger.info(f"Room deleted: {room_id} by {admin.email}")
    return None
