from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, CheckConstraint
from sqlalchemy.orm import relationship
from meetingroom.db import Base


UNKNOWN_BOOKER = "Unknown"


class Reservation(Base):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    attendees = Column(JSON, nullable=False, default=list)

    room = relationship("Room", back_populates="reservations")
    user = relationship("User", back_populates="reservations")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="check_reservation_window"),
    )

    @property
    def booker_name(self):
        if self.user is not None and self.user.full_name:
            return self.user.full_name
        return UNKNOWN_BOOKER

    @property
    def room_name(self):
        return self.room.name if self.room is not None else None

    @property
    def room_facilities(self):
        return list(self.room.facilities or []) if self.room is not None else []
