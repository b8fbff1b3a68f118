import os
import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from meetingroom.main import app
from meetingroom.db import Base, get_db
from meetingroom.models.room import Room
from meetingroom.models.user import User
from meetingroom.utils.auth import get_password_hash
from meetingroom.utils.validation_helpers import booking_now

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
Base.metadata.create_all(bind=engine)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)

TEST_PASSWORD = "testpassword"


def tomorrow_at(hour, minute=0):
    """A booking-timezone instant on the next calendar day."""
    midnight = booking_now().replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(days=1, hours=hour, minutes=minute)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_next_user():
    """Helper function to generate unique emails"""
    if not hasattr(get_next_user, "user_count"):
        get_next_user.user_count = 0
    get_next_user.user_count += 1
    return get_next_user.user_count


def create_user(db, is_admin=False, full_name=None):
    number = get_next_user()
    user = User(
        email=f"user_{number}@example.com",
        full_name=full_name if full_name is not None else f"User {number}",
        hashed_password=get_password_hash(TEST_PASSWORD),
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login_headers(user):
    """Login through the API and return bearer headers"""
    login_response = client.post(
        "/auth/login",
        data={"username": user.email, "password": TEST_PASSWORD},
    )
    token = login_response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user(test_db):
    """Fixture to create a regular user in the database"""
    return create_user(test_db)


@pytest.fixture
def auth_headers(test_user):
    """Fixture to get authentication headers for the regular user"""
    return login_headers(test_user)


@pytest.fixture
def admin_user(test_db):
    return create_user(test_db, is_admin=True, full_name="Admin")


@pytest.fixture
def admin_headers(admin_user):
    return login_headers(admin_user)


@pytest.fixture
def test_room(test_db):
    room = Room(name="Conference Room A", capacity=10, facilities=["Projector", "Whiteboard"])
    test_db.add(room)
    test_db.commit()
    test_db.refresh(room)
    return room
