from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from attendance_scoring.attendance.model import Event, Session, User
from attendance_scoring.core.enums import Role
from attendance_scoring.main import create_app


@pytest.fixture
def app():
    app = create_app("attendance_scoring.config.testing")
    container = app.extensions["attendance_container"]

    now = datetime.now(timezone.utc)
    start = now - timedelta(hours=1)
    container.users_repo.add(User(user_id="admin", full_name="Admin", role=Role.ADMIN, district_id="d1"))
    container.users_repo.add(User(user_id="m1", full_name="Member", role=Role.MEMBER, district_id="d1"))
    container.events_repo.add(Event(event_id="e1", title="Season", start_date=now - timedelta(days=1)))
    container.sessions_repo.add(
        Session(session_id="s1", event_id="e1", district_id="d1", start_time=start, end_time=start + timedelta(hours=2))
    )
    app.config["SESSION_START"] = start
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, user_id: str, role: Role) -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role.value


def _arrival(app, minutes_late: int) -> str:
    return (app.config["SESSION_START"] + timedelta(minutes=minutes_late)).isoformat()


def test_requires_login(client):
    resp = client.post("/api/v1/attendance", json={"sessionId": "s1"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_submit_then_resubmit(app, client):
    _login(client, "m1", Role.MEMBER)

    resp = client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 30)})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["percentageScore"] == pytest.approx(75)
    assert body["data"]["summary"]["cumulative"] == pytest.approx(75)

    resp = client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 0)})
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "Already submitted attendance for this session"

    resp = client.get("/api/v1/events/e1/attendance")
    body = resp.get_json()
    assert body["total"] == 1
    assert body["summary"]["cumulative"] == pytest.approx(75)

    assert client.get("/api/v1/attendance").get_json()["total"] == 1


def test_patch_edits_attendance_for_admin_only(app, client):
    _login(client, "m1", Role.MEMBER)
    attendance_id = client.post(
        "/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 30)}
    ).get_json()["data"]["id"]

    resp = client.patch(f"/api/v1/attendance/{attendance_id}", json={"arrivalTime": _arrival(app, 0)})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Cannot edit your own attendance"

    _login(client, "admin", Role.ADMIN)
    resp = client.patch(f"/api/v1/attendance/{attendance_id}", json={"arrivalTime": _arrival(app, 0)})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["percentageScore"] == 100
    assert data["summary"]["cumulative"] == 100

    assert client.patch(f"/api/v1/attendance/{attendance_id}", json={}).status_code == 400
    assert client.patch("/api/v1/attendance/999", json={"arrivalTime": _arrival(app, 0)}).status_code == 404


def test_submit_validation_errors(app, client):
    _login(client, "m1", Role.MEMBER)

    assert client.post("/api/v1/attendance", json={"arrivalTime": _arrival(app, 0)}).status_code == 400
    assert client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": "soon"}).status_code == 400
    assert client.post("/api/v1/attendance", json={"sessionId": "zz", "arrivalTime": _arrival(app, 0)}).status_code == 404


def test_unknown_event_is_not_found(client):
    _login(client, "m1", Role.MEMBER)
    assert client.get("/api/v1/events/nope/attendance").status_code == 404


def test_skip_flow(app, client):
    _login(client, "m1", Role.MEMBER)
    assert client.post("/api/v1/events/e1/skip", json={"userId": "m1"}).status_code == 403

    _login(client, "admin", Role.ADMIN)
    resp = client.post("/api/v1/events/e1/skip", json={"userId": "m1"})
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"eventId": "e1", "userId": "m1", "cumulative": 100, "skip": True}

    assert client.post("/api/v1/events/e1/skip", json={"userId": "m1"}).status_code == 409

    _login(client, "m1", Role.MEMBER)
    resp = client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 0)})
    assert resp.status_code == 409


def test_summaries_and_recompute_for_admin(app, client):
    _login(client, "m1", Role.MEMBER)
    client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 60)})
    assert client.get("/api/v1/events/e1/summaries").status_code == 403
    assert client.post("/api/v1/events/e1/recompute", json={"userId": "m1"}).status_code == 403

    _login(client, "admin", Role.ADMIN)
    body = client.get("/api/v1/events/e1/summaries").get_json()
    assert body["total"] == 1
    assert body["data"][0]["cumulative"] == pytest.approx(50)

    resp = client.post("/api/v1/events/e1/recompute", json={"userId": "m1"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["cumulative"] == pytest.approx(50)

    assert client.post("/api/v1/events/e1/recompute", json={}).status_code == 400


def test_dev_login_sets_session_and_logout_clears_it(app, client):
    resp = client.post("/api/v1/auth/login", json={"userId": "m1"})
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"userId": "m1", "role": "MEMBER"}

    resp = client.post("/api/v1/attendance", json={"sessionId": "s1", "arrivalTime": _arrival(app, 0)})
    assert resp.status_code == 201

    assert client.post("/api/v1/auth/logout").status_code == 200
    assert client.get("/api/v1/attendance").status_code == 401


def test_dev_login_rejects_unknown_or_missing_user(client):
    assert client.post("/api/v1/auth/login", json={"userId": "ghost"}).status_code == 401
    assert client.post("/api/v1/auth/login", json={}).status_code == 400


def test_dev_login_is_off_in_production():
    app = create_app("attendance_scoring.config.production")
    assert app.test_client().post("/api/v1/auth/login", json={"userId": "admin"}).status_code == 404
