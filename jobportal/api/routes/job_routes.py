"""
Job Routes

POST /jobs - Create job posting
GET /jobs - List active jobs with filters
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job
GET /jobs/{job_id}/analytics - Fitment of every student for this job
"""

import math
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from jobportal.core.logging import get_logger
from jobportal.services.mongo_service import get_job_service
from jobportal.services.fitment_service import get_fitment_service
from jobportal.schemas.schemas import (
    JobCreate, JobUpdate, JobResponse, JobListResponse, JobAnalyticsResponse,
    JobType, LocationType
)

logger = get_logger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate):
    """Create a new job posting. A public job_id (JOB_XXXXXXXX) is generated."""
    created = get_job_service().create(job.model_dump(mode="json"))
    logger.info(f"Created job {created['job_id']} ({created['title']})")
    return created


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    industry: Optional[str] = Query(None),
    job_type: Optional[JobType] = Query(None),
    location_type: Optional[LocationType] = Query(None, description="Remote, On-site or Hybrid")
):
    """List active job postings, newest first."""
    jobs, total = get_job_service().list_active(
        page=page,
        limit=limit,
        industry=industry,
        job_type=job_type.value if job_type else None,
        location_type=location_type.value if location_type else None
    )
    return JobListResponse(
        jobs=jobs,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit)
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str):
    job = get_job_service().get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, data: JobUpdate):
    updates = data.model_dump(mode="json", exclude_unset=True)
    job = get_job_service().update(job_id, updates)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("/{job_id}/analytics", response_model=JobAnalyticsResponse)
async def job_analytics(job_id: str):
    """
    Score every student against this job.

    Counts candidates per band (excellent >= 80, good 60-79, fair 40-59)
    and returns the top 10 plus the full ranked list.
    """
    job = get_job_service().get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    analytics = get_fitment_service().job_analytics(job)
    return JobAnalyticsResponse(
        job_id=job["job_id"],
        title=job["title"],
        company_name=(job.get("company") or {}).get("name", ""),
        analytics=analytics
    )
