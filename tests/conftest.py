"""
Shared fixtures.

MongoDB is replaced by mongomock collections injected into the stores,
so no server is needed. Index creation at startup is switched off.
"""
import os

os.environ.setdefault("INIT_INDEXES", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient

from job_platform.api import deps
from job_platform.core.auth import create_access_token
from job_platform.main import app
from job_platform.services.mongo_service import ApplicationStore, EmployerStore, JobStore
from job_platform.services.notifications import ConnectionManager, NotificationDispatcher
from job_platform.services.presence import PresenceRegistry

EMPLOYER_A = "65f000000000000000000001"
EMPLOYER_B = "65f000000000000000000002"


class RecordingChannels:
    """Stands in for ConnectionManager; records frames per channel."""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, channel_id, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append((channel_id, message))


@pytest.fixture
def mongo_db():
    db = mongomock.MongoClient().job_platform
    db.employers.create_index("email", unique=True)
    return db


@pytest.fixture
def employer_store(mongo_db):
    return EmployerStore(mongo_db.employers)


@pytest.fixture
def job_store(mongo_db):
    return JobStore(mongo_db.jobs)


@pytest.fixture
def application_store(mongo_db):
    return ApplicationStore(mongo_db.applications)


@pytest.fixture
def presence():
    return PresenceRegistry()


@pytest.fixture
def channels():
    return RecordingChannels()


@pytest.fixture
def dispatcher(presence, channels):
    return NotificationDispatcher(presence, channels)


@pytest.fixture
def make_job(job_store):
    def _make(employer_id=EMPLOYER_A, title="Software Engineer", location="New York",
              salary_min=60000, salary_max=90000):
        return job_store.create(
            {
                "title": title,
                "description": "Develop and maintain web applications.",
                "location": location,
                "salaryRange": {"min": salary_min, "max": salary_max},
            },
            employer_id=employer_id,
        )
    return _make


@pytest.fixture
def client(employer_store, job_store, application_store):
    """TestClient wired to mongomock with a fresh presence registry."""
    presence = PresenceRegistry()
    connections = ConnectionManager()
    dispatcher = NotificationDispatcher(presence, connections)

    app.dependency_overrides[deps.get_employer_store] = lambda: employer_store
    app.dependency_overrides[deps.get_job_store] = lambda: job_store
    app.dependency_overrides[deps.get_application_store] = lambda: application_store
    app.dependency_overrides[deps.get_presence] = lambda: presence
    app.dependency_overrides[deps.get_connections] = lambda: connections
    app.dependency_overrides[deps.get_dispatcher] = lambda: dispatcher

    with TestClient(app) as test_client:
        test_client.presence = presence
        yield test_client

    app.dependency_overrides.clear()


def auth_header(employer_id=EMPLOYER_A, email="employer@example.com"):
    return {"Authorization": f"Bearer {create_access_token(employer_id, email)}"}
