"""
Job Routes

POST /jobs - Create job posting (authenticated employer)
GET /jobs - Search jobs by title/location text and salary range
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (owning employer only)
DELETE /jobs/{job_id} - Delete job (owning employer only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from job_platform.api.deps import get_job_store
from job_platform.core.auth import get_current_employer, ensure_owner
from job_platform.core.errors import NotFoundError, ValidationError, field_error
from job_platform.core.logging import get_logger
from job_platform.services.mongo_service import JobStore, is_valid_id
from job_platform.schemas.schemas import JobCreate, JobUpdate, JobResponse, MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = get_logger(__name__)


def require_valid_job_id(job_id: str) -> str:
    if not is_valid_id(job_id):
        raise ValidationError([field_error("id", "Invalid job ID format")])
    return job_id


def get_job_or_404(jobs: JobStore, job_id: str) -> dict:
    job = jobs.get_by_id(job_id)
    if not job:
        raise NotFoundError("Job not found")
    return job


@router.post("", response_model=JobResponse, status_code=201)
def create_job(
    job: JobCreate,
    employer: dict = Depends(get_current_employer),
    jobs: JobStore = Depends(get_job_store)
):
    """Create a new job posting owned by the authenticated employer."""
    created = jobs.create(job.model_dump(by_alias=True), employer_id=employer["employer_id"])
    logger.info("Job %s created by employer %s", created["_id"], employer["employer_id"])
    return JobResponse.model_validate(created)


@router.get("", response_model=List[JobResponse])
def search_jobs(
    title: Optional[str] = Query(None, description="Job title to search for"),
    location: Optional[str] = Query(None, description="Job location to search for"),
    min_salary: Optional[float] = Query(None, alias="minSalary", description="Minimum salary"),
    max_salary: Optional[float] = Query(None, alias="maxSalary", description="Maximum salary"),
    jobs: JobStore = Depends(get_job_store)
):
    """
    Search jobs.

    title and location are matched together as free text. minSalary keeps
    jobs whose salaryRange.min >= minSalary; maxSalary keeps jobs whose
    salaryRange.max <= maxSalary.
    """
    results = jobs.search(title=title, location=location, min_salary=min_salary, max_salary=max_salary)
    return [JobResponse.model_validate(r) for r in results]


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str, jobs: JobStore = Depends(get_job_store)):
    """Get details of a specific job."""
    require_valid_job_id(job_id)
    return JobResponse.model_validate(get_job_or_404(jobs, job_id))


@router.put("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: str,
    update: JobUpdate,
    employer: dict = Depends(get_current_employer),
    jobs: JobStore = Depends(get_job_store)
):
    """Update a job posting. Only the owning employer can update."""
    require_valid_job_id(job_id)
    ensure_owner(get_job_or_404(jobs, job_id), employer)

    changes = update.model_dump(by_alias=True, exclude_none=True)
    updated = jobs.update(job_id, changes)
    return JobResponse.model_validate(updated)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(
    job_id: str,
    employer: dict = Depends(get_current_employer),
    jobs: JobStore = Depends(get_job_store)
):
    """Delete a job posting. Its applications are left in place."""
    require_valid_job_id(job_id)
    ensure_owner(get_job_or_404(jobs, job_id), employer)

    jobs.delete(job_id)
    logger.info("Job %s deleted by employer %s", job_id, employer["employer_id"])
    return MessageResponse(message="Job deleted successfully.")
