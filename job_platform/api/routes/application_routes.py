"""
Application Routes

POST /applications/{job_id}/apply - Candidate applies to a job (no auth)
GET /applications/{job_id} - Applications for a job (owning employer only)
"""

from fastapi import APIRouter, Depends
from typing import List

from job_platform.api.deps import get_application_service, get_application_store, get_job_store
from job_platform.api.routes.job_routes import get_job_or_404, require_valid_job_id
from job_platform.core.auth import get_current_employer, ensure_owner
from job_platform.services.application_service import ApplicationService
from job_platform.services.mongo_service import ApplicationStore, JobStore
from job_platform.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, ErrorResponse, ValidationErrorResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post(
    "/{job_id}/apply",
    response_model=ApplicationResponse,
    status_code=201,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Input validation error"},
        404: {"model": ErrorResponse, "description": "Job not found"},
        500: {"model": ErrorResponse, "description": "Server error"},
    }
)
async def apply_to_job(
    job_id: str,
    application: ApplicationCreate,
    service: ApplicationService = Depends(get_application_service)
):
    """
    Candidate applies for a job posting.

    The employer who posted the job gets a newApplication event on /ws
    if they are connected; the response does not wait for it.
    """
    created = await service.submit_application(
        job_id=job_id,
        candidate_name=application.candidate_name,
        candidate_email=application.candidate_email
    )
    return ApplicationResponse.model_validate(created)


@router.get("/{job_id}", response_model=List[ApplicationResponse])
def list_applications(
    job_id: str,
    employer: dict = Depends(get_current_employer),
    jobs: JobStore = Depends(get_job_store),
    applications: ApplicationStore = Depends(get_application_store)
):
    """List applications received for a job. Only the owning employer can view."""
    require_valid_job_id(job_id)
    ensure_owner(get_job_or_404(jobs, job_id), employer)
    return [ApplicationResponse.model_validate(a) for a in applications.list_for_job(job_id)]
