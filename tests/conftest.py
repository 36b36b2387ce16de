"""
Shared fixtures: in-memory SQLite database, API client and auth headers per role.
"""

import os

# Must be set before the app (and its cached settings) are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import create_access_token
from app.config.database import get_db
from app.main import app
from app.models import Base, User
from app.services.reservation.settings_service import ReservationSettingsService

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make(role="staff"):
        suffix = uuid4().hex[:8]
        user = User(
            username=f"{role}-{suffix}",
            email=f"{role}-{suffix}@correo.mx",
            hashed_password="!",  # never logs in with a password
            role=role,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def auth_headers(make_user):
    def _headers(role="staff", user=None):
        user = user or make_user(role)
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def morning_hours(db):
    """Monday 09:00-12:00, 60 minute appointments, 15 minute buffer, Sunday closed."""
    return ReservationSettingsService.update_settings(db, {
        "business_hours": {
            "monday": {"enabled": True, "open": "09:00", "close": "12:00"},
            "sunday": {"enabled": False},
        },
        "default_duration": 60,
        "buffer_time": 15,
    })


# 2025-03-10 is a Monday, 2025-03-09 a Sunday, 2025-03-08 a Saturday
MONDAY = "2025-03-10"
SUNDAY = "2025-03-09"
SATURDAY = "2025-03-08"


def booking(**overrides):
    data = {
        "name": "Ana López",
        "email": "ana@correo.mx",
        "phone": "+52 55 1234 5678",
        "service": "Consulta general",
        "date": MONDAY,
        "timeSlot": "10:15",
        "notes": "Primera visita",
    }
    data.update(overrides)
    return data
