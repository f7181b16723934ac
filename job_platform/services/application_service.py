"""
Application Submission Pipeline

    validate -> resolve job -> persist application -> notify employer

1. Validation collects every bad field (jobId, candidateName,
   candidateEmail) into one ValidationError; nothing is written if any fail.
2. The job is read with a projection of _id + employerId only.
   Store calls run in the threadpool so a slow round-trip only
   suspends this request.
   No lock is held: a job deleted between this read and the insert
   leaves an application pointing at a missing job.
3. The insert is unconditional and attempted once. Duplicate
   (candidateEmail, jobId) pairs are allowed.
4. The newApplication event is scheduled fire-and-forget; it can never
   fail or delay the submission.
"""

from typing import List

from email_validator import EmailNotValidError, validate_email
from fastapi.concurrency import run_in_threadpool
from pymongo.errors import PyMongoError

from job_platform.core.errors import (
    InternalFaultError, NotFoundError, ValidationError, field_error
)
from job_platform.core.logging import get_logger
from job_platform.schemas.schemas import CandidateInfo, NewApplicationEvent
from job_platform.services.mongo_service import ApplicationStore, JobStore, is_valid_id
from job_platform.services.notifications import NotificationDispatcher

logger = get_logger(__name__)

NEW_APPLICATION_EVENT = "newApplication"


def validate_submission(job_id, candidate_name, candidate_email) -> None:
    """Raise ValidationError listing every invalid field."""
    errors: List[dict] = []

    if not is_valid_id(job_id):
        errors.append(field_error("jobId", "Invalid job ID"))

    if not isinstance(candidate_name, str) or not candidate_name.strip():
        errors.append(field_error("candidateName", "Candidate name is required"))

    if not _is_valid_email(candidate_email):
        errors.append(field_error("candidateEmail", "A valid candidate email is required"))

    if errors:
        raise ValidationError(errors)


def _is_valid_email(value) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class ApplicationService:
    """
    Orchestrates one application submission.

    Usage:
        service = ApplicationService(JobStore(), ApplicationStore(), dispatcher)
        application = await service.submit_application(job_id, "Ada", "ada@example.com")
    """

    def __init__(self, jobs: JobStore, applications: ApplicationStore, dispatcher: NotificationDispatcher):
        self.jobs = jobs
        self.applications = applications
        self.dispatcher = dispatcher

    async def submit_application(self, job_id: str, candidate_name: str, candidate_email: str) -> dict:
        validate_submission(job_id, candidate_name, candidate_email)

        try:
            job = await run_in_threadpool(self.jobs.get_owner, job_id)
        except PyMongoError as e:
            logger.error("Job lookup failed for %s: %s", job_id, e)
            raise InternalFaultError()

        if job is None:
            raise NotFoundError("Job not found")

        try:
            application = await run_in_threadpool(
                self.applications.create, job_id, candidate_name, candidate_email
            )
        except PyMongoError as e:
            logger.error("Error saving application for job %s: %s", job_id, e)
            raise InternalFaultError()

        self._notify_employer(job, candidate_name, candidate_email)
        return application

    def _notify_employer(self, job: dict, candidate_name: str, candidate_email: str) -> None:
        event = NewApplicationEvent(
            job_id=str(job["_id"]),
            candidate=CandidateInfo(candidate_name=candidate_name, candidate_email=candidate_email)
        )
        try:
            self.dispatcher.dispatch_nowait(
                str(job.get("employerId")), NEW_APPLICATION_EVENT, event.model_dump(by_alias=True)
            )
        except Exception as e:
            logger.warning("Could not schedule notification for job %s: %s", event.job_id, e)
