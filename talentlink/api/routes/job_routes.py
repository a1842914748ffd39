"""
Job Routes

POST /jobs - Create job posting (organization only)
GET /jobs - List active jobs with filters, search and pagination
GET /jobs/mine - Jobs posted by the current organization
GET /jobs/stats - Posting statistics for the current organization
GET /jobs/{job_id} - Get job details (counts a view)
PUT /jobs/{job_id} - Update job (owning organization only)
DELETE /jobs/{job_id} - Deactivate job (owning organization only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from talentlink.core.auth import require_role
from talentlink.services.job_service import JobService, get_job_service
from talentlink.utils.listing import paginate
from talentlink.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, JobStatsResponse,
    JobType, WorkMode, MessageResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    job: JobCreate,
    organization: dict = Depends(require_role("organization")),
    jobs: JobService = Depends(get_job_service)
):
    """Create a new job posting. Only organizations can post jobs."""
    return jobs.create(job.model_dump(mode="json"), organization["uid"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=50),
    search: Optional[str] = Query(None, description="Search in title, description, requirements, company"),
    company: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    job_type: Optional[JobType] = Query(None),
    work_mode: Optional[WorkMode] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    jobs: JobService = Depends(get_job_service)
):
    """List active job postings with filters and pagination."""
    filters = {
        "company": company,
        "location": location,
        "job_type": job_type.value if job_type else None,
        "work_mode": work_mode.value if work_mode else None,
        "limit": limit,
    }
    results = jobs.search(search, filters) if search else jobs.list(filters)
    items, total = paginate(results, page, page_size)

    return JobListResponse(jobs=items, total=total, page=page, page_size=page_size)


@router.get("/mine", response_model=List[JobResponse])
async def my_jobs(
    organization: dict = Depends(require_role("organization")),
    jobs: JobService = Depends(get_job_service)
):
    """All postings of the current organization, including deactivated ones."""
    return jobs.list_by_organization(organization["uid"])


@router.get("/stats", response_model=JobStatsResponse)
async def job_stats(
    organization: dict = Depends(require_role("organization")),
    jobs: JobService = Depends(get_job_service)
):
    return jobs.statistics(organization["uid"])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, jobs: JobService = Depends(get_job_service)):
    """Get details of a specific job."""
    job = jobs.get_by_id(job_id, active_only=True)
    jobs.increment_views(job_id)
    return job


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    update: JobUpdate,
    organization: dict = Depends(require_role("organization")),
    jobs: JobService = Depends(get_job_service)
):
    """Update a job posting. Only the owning organization can update."""
    return jobs.update(job_id, update.model_dump(mode="json", exclude_unset=True), organization["uid"])


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    organization: dict = Depends(require_role("organization")),
    jobs: JobService = Depends(get_job_service)
):
    """Deactivate a job posting. The record is kept."""
    jobs.soft_delete(job_id, organization["uid"])
    return MessageResponse(message="Job posting deleted successfully!")
