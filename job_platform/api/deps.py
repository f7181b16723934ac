"""FastAPI dependency providers.

Stores are created per request against the configured collections.
The presence registry, connection manager and dispatcher are owned by the
application (app.state) so HTTP handlers and the /ws channel share them.
Tests swap any of these through app.dependency_overrides.
"""
from fastapi import Depends
from starlette.requests import HTTPConnection

from job_platform.services.application_service import ApplicationService
from job_platform.services.mongo_service import ApplicationStore, EmployerStore, JobStore
from job_platform.services.notifications import ConnectionManager, NotificationDispatcher
from job_platform.services.presence import PresenceRegistry


def get_employer_store() -> EmployerStore:
    return EmployerStore()


def get_job_store() -> JobStore:
    return JobStore()


def get_application_store() -> ApplicationStore:
    return ApplicationStore()


def get_presence(conn: HTTPConnection) -> PresenceRegistry:
    return conn.app.state.presence


def get_connections(conn: HTTPConnection) -> ConnectionManager:
    return conn.app.state.connections


def get_dispatcher(conn: HTTPConnection) -> NotificationDispatcher:
    return conn.app.state.dispatcher


def get_application_service(
    jobs: JobStore = Depends(get_job_store),
    applications: ApplicationStore = Depends(get_application_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> ApplicationService:
    return ApplicationService(jobs, applications, dispatcher)
