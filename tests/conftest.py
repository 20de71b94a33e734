"""
Shared pytest fixtures.

Uses a SQLite file database so no Postgres is required for tests. Every test
gets its own user id, so rows from other tests never leak into point totals
or streaks.
"""
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from vocassion.db.base import Base, get_db
from vocassion.main import app
from vocassion.models.community import Community, DEFAULT_COMMUNITY_ID
from vocassion.services.realtime import Broadcaster, get_broadcaster

SQLITE_URL = "sqlite:///./test_vocassion.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingPusher:
    """Stands in for pusher.Pusher; keeps every triggered event."""

    def __init__(self):
        self.events = []

    def trigger(self, channel, event, payload):
        self.events.append((channel, event, payload))


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(user_id, email=None, username=None):
    headers = {"X-Auth-Request-User": user_id}
    if email:
        headers["X-Auth-Request-Email"] = email
    if username:
        headers["X-Auth-Request-Preferred-Username"] = username
    return headers


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    # Seed the shared community (normally done by Alembic migration)
    db = TestingSessionLocal()
    try:
        if db.get(Community, DEFAULT_COMMUNITY_ID) is None:
            db.add(Community(
                id=DEFAULT_COMMUNITY_ID,
                name="General",
                description="The main community for all users",
            ))
            db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def user_id():
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture()
def pusher_client():
    return RecordingPusher()


@pytest.fixture()
def client(db, user_id, pusher_client):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: Broadcaster(client=pusher_client)
    with TestClient(app) as c:
        c.headers.update(auth_headers(user_id, email=f"{user_id}@example.com"))
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def anon_client(db):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_broadcaster] = lambda: Broadcaster(client=None)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
