import os


# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/meeting_rooms.db")

# JWT configuration
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-meeting-room-secret")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))

# All reservation instants are wall-clock times in this zone
BOOKING_TIMEZONE = os.getenv("BOOKING_TIMEZONE", "UTC")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Initial administrator, created on startup when both are set
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
