"""
Shared fixtures: in-memory SQLite database, API client and factories
"""
import os

os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import timedelta
from itertools import count

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine, get_db, init_db
from app.main import app
from app.models.event import Event
from app.models.user import User
from app.services.auth_service import AuthService
from app.utils.time_utils import utc_now


@pytest.fixture
def db_session():
    Base.metadata.drop_all(bind=engine)
    init_db(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    sequence = count(1)

    def _make_user(name=None, user_id=None):
        n = next(sequence)
        user = User(
            id=user_id,
            name=name or f"User{n}",
            last_name="Tester",
            email=f"user{n}-{user_id or 'auto'}@example.com",
            password="not-a-real-hash",
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_event(db_session):
    def _make_event(owner, starts_in=timedelta(days=1), lasts=timedelta(hours=3), event_id=None, name="Meetup"):
        start = utc_now() + starts_in
        event = Event(
            id=event_id,
            owner_id=owner.id,
            name=name,
            location="Barcelona",
            description="Social event",
            event_start_date=start,
            event_end_date=start + lasts,
            n_participators=20,
            type="social",
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def finished_event(make_event):
    """Event that ended yesterday"""
    def _finished_event(owner, event_id=None):
        return make_event(
            owner,
            starts_in=-timedelta(days=1, hours=3),
            lasts=timedelta(hours=2),
            event_id=event_id,
        )

    return _finished_event


@pytest.fixture
def auth_headers(db_session):
    def _auth_headers(user):
        token = AuthService(db_session).create_access_token_for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
