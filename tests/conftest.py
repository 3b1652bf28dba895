import os

# Configuration is read at import time, so it has to be in place first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_EMAILS"] = "admin@portal.io"
os.environ["PUBLIC_BASE_URL"] = "https://lectures.portal.io"
os.environ.pop("SMTP_HOST", None)

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from lecture_portal import models  # noqa: E402,F401
from lecture_portal.database import Base, get_db  # noqa: E402
from lecture_portal.main import app  # noqa: E402
from lecture_portal.utils.lecture_status import utcnow  # noqa: E402

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
PASSWORD = "correct-horse"


@pytest.fixture
def session_factory():
    """A private in-memory database per test."""
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """
    API client bound to the per-test database with the clock frozen at NOW.

    Startup hooks are not run, so no scheduler is started.
    """
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[utcnow] = lambda: NOW
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup(client, email, name="Test User", **extra):
    payload = {"email": email, "password": PASSWORD, "name": name, **extra}
    resp = client.post("/auth/signup", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return bearer(signup(client, "admin@portal.io", name="Admin")["access_token"])


@pytest.fixture
def user_headers(client):
    return bearer(signup(client, "student@portal.io", name="Student")["access_token"])


@pytest.fixture
def catalog(client, admin_headers):
    """
    One course with two weeks:
      Week 1: past (completed), live, upcoming (+1d 2h 5m)
      Week 2: upcoming (+3d)
    """
    course = client.post(
        "/courses/", json={"name": "JEE Chemistry", "description": "Chemistry prep"}, headers=admin_headers
    ).json()
    week1 = client.post("/weeks/", json={"course_id": course["id"], "name": "Week 1"}, headers=admin_headers).json()
    week2 = client.post("/weeks/", json={"course_id": course["id"], "name": "Week 2"}, headers=admin_headers).json()

    def add(week, title, offset):
        resp = client.post(
            "/lectures/",
            json={
                "course_id": course["id"],
                "week_id": week["id"],
                "title": title,
                "youtube_id": "dQw4w9WgXcQ",
                "scheduled_time": (NOW + offset).isoformat(),
            },
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    lectures = {
        "completed": add(week1, "Thermodynamics", -timedelta(days=2)),
        "live": add(week1, "Plant Physiology", -timedelta(minutes=30)),
        "upcoming": add(week1, "Chemical Bonding", timedelta(days=1, hours=2, minutes=5)),
        "later": add(week2, "Human Anatomy", timedelta(days=3)),
    }
    return {"course": course, "weeks": [week1, week2], "lectures": lectures}
