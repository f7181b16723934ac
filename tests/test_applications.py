from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from conftest import EMPLOYER_A, EMPLOYER_B, auth_header
from job_platform.api import deps
from job_platform.main import app

CANDIDATE = {"candidateName": "Ada Lovelace", "candidateEmail": "ada@example.com"}


def register_channel(ws, employer_id):
    ws.send_json({"event": "register", "data": {"employerId": employer_id}})
    assert ws.receive_json() == {"event": "registered", "data": {"employerId": employer_id}}


def test_apply_returns_created_application(client, make_job):
    job = make_job()

    response = client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)

    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == job["_id"]
    assert body["candidateEmail"] == "ada@example.com"
    assert body["_id"]
    assert body["applicationDate"]


def test_apply_validation_lists_fields(client):
    response = client.post("/api/applications/not-an-id/apply", json={"candidateEmail": "nope"})

    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["jobId", "candidateName", "candidateEmail"]


def test_apply_to_missing_job(client):
    response = client.post("/api/applications/65f0000000000000000000ff/apply", json=CANDIDATE)

    assert response.status_code == 404
    assert response.json() == {"error": "Job not found"}


def test_owner_lists_applications(client, make_job):
    job = make_job(employer_id=EMPLOYER_A)
    client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)
    client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)

    response = client.get(f"/api/applications/{job['_id']}", headers=auth_header(EMPLOYER_A))
    assert response.status_code == 200
    assert len(response.json()) == 2

    other = client.get(f"/api/applications/{job['_id']}", headers=auth_header(EMPLOYER_B))
    assert other.status_code == 403


# ============================================================
# REAL-TIME CHANNEL
# ============================================================

def test_registered_employer_is_notified(client, make_job):
    job = make_job(employer_id=EMPLOYER_A)

    with client.websocket_connect("/ws") as ws:
        register_channel(ws, EMPLOYER_A)

        response = client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)
        assert response.status_code == 201

        assert ws.receive_json() == {
            "event": "newApplication",
            "data": {"jobId": job["_id"], "candidate": CANDIDATE},
        }


def test_disconnect_clears_presence(client):
    with client.websocket_connect("/ws") as ws:
        register_channel(ws, EMPLOYER_A)
        assert client.presence.lookup(EMPLOYER_A) is not None

    assert client.presence.lookup(EMPLOYER_A) is None
    assert len(client.presence) == 0


def test_register_without_employer_id(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"event": "register", "data": {}})
        assert ws.receive_json() == {"event": "error", "data": {"message": "employerId is required"}}

        ws.send_text("not json")
        assert ws.receive_json()["event"] == "error"

    assert len(client.presence) == 0


def test_binary_frame_keeps_channel_open(client, make_job):
    job = make_job(employer_id=EMPLOYER_A)

    with client.websocket_connect("/ws") as ws:
        register_channel(ws, EMPLOYER_A)

        ws.send_bytes(b"\x00\x01")
        assert ws.receive_json() == {"event": "error", "data": {"message": "Frames must be JSON text"}}
        assert client.presence.lookup(EMPLOYER_A) is not None

        # Still registered and still receiving
        client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)
        assert ws.receive_json()["event"] == "newApplication"


def test_unknown_event_gets_error_reply(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"event": "subscribe", "data": {}})

        assert ws.receive_json() == {"event": "error", "data": {"message": "Unknown event: subscribe"}}


def test_failing_channel_still_returns_created(client, make_job):
    job = make_job(employer_id=EMPLOYER_A)
    # Presence points at a channel that is no longer connected
    client.presence.register(EMPLOYER_A, "closed-channel")

    response = client.post(f"/api/applications/{job['_id']}/apply", json=CANDIDATE)

    assert response.status_code == 201
    assert response.json()["jobId"] == job["_id"]


# ============================================================
# STORE FAILURES
# ============================================================

class BrokenJobStore:
    """Every call fails the way a dropped MongoDB connection does."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise PyMongoError("connection refused")
        return fail


def test_store_failure_on_apply_is_opaque_500(client):
    app.dependency_overrides[deps.get_job_store] = lambda: BrokenJobStore()

    response = client.post("/api/applications/65f0000000000000000000ff/apply", json=CANDIDATE)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_store_failure_on_search_is_opaque_500(client):
    app.dependency_overrides[deps.get_job_store] = lambda: BrokenJobStore()

    response = client.get("/api/jobs", params={"minSalary": 60000})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}


def test_malformed_stored_job_is_json_500(client, mongo_db):
    # Missing salaryRange/employerId cannot be rendered as a job
    job_id = mongo_db.jobs.insert_one({"title": "Broken"}).inserted_id

    with TestClient(app, raise_server_exceptions=False) as lenient:
        response = lenient.get(f"/api/jobs/{job_id}")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
