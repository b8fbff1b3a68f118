from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, JSON, CheckConstraint
from meetingroom.db import Base


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    capacity = Column(Integer, nullable=False)
    facilities = Column(JSON, nullable=False, default=list)

    reservations = relationship(
        "Reservation", back_populates="room", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("capacity > 0", name="check_room_capacity_positive"),
    )
