import os

os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import time, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import qr_attendance.models  # noqa: F401
from qr_attendance.database.session import Base, get_db
from qr_attendance.main import app
from qr_attendance.utils import local_today


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client):
    """Registers a user and returns (headers, user) for it."""
    counter = {"n": 0}

    def _make_user(role, **extra):
        counter["n"] += 1
        body = {
            "name": f"{role} {counter['n']}",
            "email": f"{role}{counter['n']}@example.edu",
            "password": "secret123",
            "role": role,
            "department": "Computer Science",
        }
        body.update(extra)
        response = client.post("/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return auth_header(data["token"]), data["user"]

    return _make_user


@pytest.fixture
def make_course(client):
    def _make_course(headers, code="CSC101", **extra):
        body = {
            "course_code": code,
            "course_name": "Intro to Computing",
            "department": "Computer Science",
            "schedule": [
                {
                    "day": "Monday",
                    "start_time": "09:00",
                    "end_time": "11:00",
                    "venue": "LT1",
                }
            ],
        }
        body.update(extra)
        response = client.post("/courses", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["course"]

    return _make_course


@pytest.fixture
def make_session(client):
    def _make_session(headers, course_id, session_date=None, start="09:00", end="11:00"):
        body = {
            "course_id": course_id,
            "date": (session_date or local_today()).isoformat(),
            "start_time": start,
            "end_time": end,
            "venue": "LT1",
        }
        response = client.post("/classes", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["class_session"]

    return _make_session


@pytest.fixture
def classroom(client, make_user, make_course, make_session):
    """A lecturer's course with one enrolled student and yesterday's session."""
    lecturer_headers, lecturer = make_user("lecturer", lecturer_id="L-001")
    student_headers, student = make_user("student", student_id="S-001")
    course = make_course(lecturer_headers)
    response = client.post(
        f"/courses/{course['id']}/students",
        json={"student_ids": [student["id"]]},
        headers=lecturer_headers,
    )
    assert response.status_code == 200, response.text

    session_date = local_today() - timedelta(days=1)
    class_session = make_session(lecturer_headers, course["id"], session_date=session_date)
    return {
        "lecturer_headers": lecturer_headers,
        "lecturer": lecturer,
        "student_headers": student_headers,
        "student": student,
        "course": course,
        "session": class_session,
        "session_date": session_date,
        "start_time": time(9, 0),
    }
