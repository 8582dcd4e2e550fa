# tests/integration/test_api.py
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.database.memory_kv import InMemoryKeyValueStore
from app.main import create_app

INSTRUCTOR = {"X-User-Id": "i1", "X-User-Role": "instructor", "X-User-Name": "Dr. Smith",
              "X-User-Email": "instructor@example.com"}
STUDENT = {"X-User-Id": "s1", "X-User-Role": "student", "X-User-Name": "John Student",
           "X-User-Email": "student@example.com"}


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()

@pytest.fixture
def client(kv):
    app = create_app(Settings(storage_backend="memory", seed_demo_data=False), kv=kv)
    with TestClient(app) as c:
        yield c


def _future(days=7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def _create_assignment(client, **overrides) -> str:
    body = {"title": "React Components Project", "description": "Build a catalog", "deadline": _future()}
    body.update(overrides)
    r = client.post("/api/v1/assignments", json=body, headers=INSTRUCTOR)
    assert r.status_code == 201, r.text
    return r.json()["id"]


def test_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_identity_headers_required(client):
    assert client.get("/api/v1/assignments").status_code == 401
    r = client.get("/api/v1/assignments", headers={"X-User-Id": "x", "X-User-Role": "admin"})
    assert r.status_code == 400

def test_create_and_list_assignments(client, kv):
    aid = _create_assignment(client)
    r = client.get("/api/v1/assignments", headers=INSTRUCTOR)
    assert r.status_code == 200
    items = r.json()
    assert [a["id"] for a in items] == [aid]
    assert items[0]["instructorId"] == "i1"
    assert aid in kv.items["assignments"]

    r = client.get(f"/api/v1/assignments/{aid}", headers=STUDENT)
    assert r.status_code == 200
    assert r.json()["title"] == "React Components Project"

def test_create_assignment_location_header(client):
    r = client.post(
        "/api/v1/assignments",
        json={"title": "T", "description": "D", "deadline": _future()},
        headers=INSTRUCTOR,
    )
    assert r.headers["Location"] == f"/api/v1/assignments/{r.json()['id']}"

def test_create_assignment_blank_title(client):
    r = client.post(
        "/api/v1/assignments",
        json={"title": "  ", "description": "D", "deadline": _future()},
        headers=INSTRUCTOR,
    )
    assert r.status_code == 422

def test_unknown_assignment(client):
    assert client.get("/api/v1/assignments/nope", headers=STUDENT).status_code == 404
    assert client.get("/api/v1/assignments/nope/submissions", headers=INSTRUCTOR).status_code == 404
    r = client.post(
        "/api/v1/submissions",
        json={"assignmentId": "nope", "submissionUrl": "https://x.y"},
        headers=STUDENT,
    )
    assert r.status_code == 404

def test_submission_and_resubmission_flow(client):
    aid = _create_assignment(client)
    body = {"assignmentId": aid, "submissionUrl": "https://github.com/student/react", "note": "Fatto"}

    r = client.post("/api/v1/submissions", json=body, headers=STUDENT)
    assert r.status_code == 201, r.text
    sub = r.json()
    assert sub["status"] == "pending"
    assert sub["studentId"] == "s1"
    assert sub["student"] == {"name": "John Student", "email": "student@example.com"}
    assert sub["assignment"] == {"title": "React Components Project"}

    # pending -> niente seconda consegna
    assert client.post("/api/v1/submissions", json=body, headers=STUDENT).status_code == 409
    assert client.get("/api/v1/assignments/available", headers=STUDENT).json() == []

    r = client.patch(
        f"/api/v1/submissions/{sub['id']}/review",
        json={"status": "rejected", "feedback": "Manca la ricerca"},
        headers=INSTRUCTOR,
    )
    assert r.status_code == 200
    assert r.json()["feedback"] == "Manca la ricerca"
    assert r.json()["submittedAt"] == sub["submittedAt"]

    views = client.get("/api/v1/assignments/board", headers=STUDENT).json()
    assert views[0]["canSubmit"] is True
    assert views[0]["isResubmission"] is True
    assert views[0]["submission"]["status"] == "rejected"

    r = client.post("/api/v1/submissions", json=body, headers=STUDENT)
    assert r.status_code == 201
    resub = r.json()

    client.patch(f"/api/v1/submissions/{resub['id']}/review", json={"status": "accepted"}, headers=INSTRUCTOR)
    views = client.get("/api/v1/assignments/board", headers=STUDENT).json()
    assert views[0]["canSubmit"] is False
    assert client.post("/api/v1/submissions", json=body, headers=STUDENT).status_code == 409

    mine = client.get("/api/v1/submissions", headers=STUDENT).json()
    assert [s["id"] for s in mine] == [resub["id"], sub["id"]]

def test_overdue_assignment_not_submittable(client):
    aid = _create_assignment(client, deadline=(datetime.now(timezone.utc) - timedelta(hours=1)).isoformat())
    views = client.get("/api/v1/assignments/board", headers=STUDENT).json()
    assert views[0]["deadlineStatus"]["urgency"] == "overdue"
    assert views[0]["deadlineStatus"]["label"] == "Overdue"
    r = client.post(
        "/api/v1/submissions",
        json={"assignmentId": aid, "submissionUrl": "https://x.y"},
        headers=STUDENT,
    )
    assert r.status_code == 409

def test_student_assignment_listing_order(client):
    late = _create_assignment(client, title="Late", deadline=_future(10))
    past = _create_assignment(client, title="Past", deadline=(datetime.now(timezone.utc) - timedelta(days=1)).isoformat())
    soon = _create_assignment(client, title="Soon", deadline=_future(2))

    views = client.get("/api/v1/assignments/board", headers=STUDENT).json()
    assert [v["id"] for v in views] == [soon, late, past]
    assert views[0]["deadlineStatus"]["urgency"] == "soon"
    assert views[1]["deadlineStatus"]["urgency"] == "plenty"

    plain = client.get("/api/v1/assignments", headers=STUDENT).json()
    assert [a["id"] for a in plain] == [soon, late, past]
    assert "canSubmit" not in plain[0]
    assert set(plain[0]) == {"id", "title", "description", "deadline", "instructorId"}

def test_review_queue_filters_and_stats(client):
    aid = _create_assignment(client)
    other = {"X-User-Id": "s2", "X-User-Role": "student", "X-User-Name": "Alice Johnson",
             "X-User-Email": "alice@example.com"}
    s1 = client.post("/api/v1/submissions", json={"assignmentId": aid, "submissionUrl": "https://a"},
                     headers=STUDENT).json()
    client.post("/api/v1/submissions", json={"assignmentId": aid, "submissionUrl": "https://b"}, headers=other)
    client.patch(f"/api/v1/submissions/{s1['id']}/review", json={"status": "accepted"}, headers=INSTRUCTOR)

    r = client.get("/api/v1/submissions", params={"search": "alice"}, headers=INSTRUCTOR)
    assert [s["studentId"] for s in r.json()] == ["s2"]
    r = client.get("/api/v1/submissions", params={"status": "accepted"}, headers=INSTRUCTOR)
    assert [s["id"] for s in r.json()] == [s1["id"]]
    r = client.get("/api/v1/submissions", params={"assignmentId": aid}, headers=INSTRUCTOR)
    assert len(r.json()) == 2

    stats = client.get("/api/v1/submissions/stats", headers=INSTRUCTOR).json()
    assert stats == {"total": 2, "pending": 1, "accepted": 1, "rejected": 0}
    stats = client.get("/api/v1/submissions/stats", headers=STUDENT).json()
    assert stats == {"total": 1, "pending": 0, "accepted": 1, "rejected": 0}

    subs = client.get(f"/api/v1/assignments/{aid}/submissions", headers=INSTRUCTOR).json()
    assert len(subs) == 2

def test_review_errors(client):
    r = client.patch("/api/v1/submissions/nope/review", json={"status": "accepted"}, headers=INSTRUCTOR)
    assert r.status_code == 404
    assert client.get("/api/v1/submissions/nope", headers=INSTRUCTOR).status_code == 404
    aid = _create_assignment(client)
    sub = client.post("/api/v1/submissions", json={"assignmentId": aid, "submissionUrl": "https://a"},
                      headers=STUDENT).json()
    r = client.patch(f"/api/v1/submissions/{sub['id']}/review", json={"status": "graded"}, headers=INSTRUCTOR)
    assert r.status_code == 422
    assert client.get(f"/api/v1/submissions/{sub['id']}", headers=INSTRUCTOR).json()["status"] == "pending"
