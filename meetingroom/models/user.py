from sqlalchemy.orm import relationship
from sqlalchemy import Boolean, Column, Integer, String
from meetingroom.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    is_admin = Column(Boolean, nullable=False, default=False)

    reservations = relationship(
        "Reservation", back_populates="user", cascade="all, delete-orphan"
    )
