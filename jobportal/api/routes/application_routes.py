"""
Job Application Routes

POST /job-applications/apply - Apply to a job
POST /job-applications/save - Bookmark a job
GET /job-applications/saved/{phone} - Saved jobs of a student
DELETE /job-applications/saved/{phone}/{job_id} - Remove a saved job
GET /job-applications/company/{company_name} - Applications received by a company
"""

import logging

from fastapi import APIRouter, HTTPException

from jobportal.core.logging import get_logger, log_with_context
from jobportal.services.mongo_service import (
    get_student_service, get_job_service, get_saved_job_service, get_application_service
)
from jobportal.services.fitment_service import get_fitment_service
from jobportal.schemas.schemas import (
    ApplicationCreate, ApplicationResponse, SaveJobRequest, SavedJobResponse,
    SavedJobListResponse, CompanyApplicationsResponse, MessageResponse
)

logger = get_logger(__name__)

router = APIRouter(prefix="/job-applications", tags=["Applications"])


@router.post("/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_job(data: ApplicationCreate):
    """
    Apply to a job with a snapshot of the student's current profile.

    A student can apply to a job only once. When no fitment score is sent,
    it is computed now.
    """
    student = get_student_service().get_by_phone(data.student_phone)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found. Please complete assessment first.")

    job_service = get_job_service()
    job = job_service.get(data.job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    application_service = get_application_service()
    if application_service.has_applied(student["phone"], job["job_id"]):
        raise HTTPException(status_code=400, detail="You have already applied for this job")

    fitment_score = data.fitment_score
    if fitment_score is None:
        fitment_score = get_fitment_service().calculate(student, job)["score"]

    application = application_service.apply(student, job, fitment_score)
    if application is None:
        raise HTTPException(status_code=400, detail="You have already applied for this job")

    job_service.increment_application_count(job["job_id"])
    log_with_context(
        logger, logging.INFO, "Application submitted",
        phone=student["phone"], job_id=job["job_id"], fitment_score=fitment_score
    )
    return application


@router.post("/save", response_model=SavedJobResponse, status_code=201)
async def save_job(data: SaveJobRequest):
    job = get_job_service().get(data.job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    saved = get_saved_job_service().save(data.student_phone, job)
    if saved is None:
        raise HTTPException(status_code=400, detail="Job already saved")
    return saved


@router.get("/saved/{phone}", response_model=SavedJobListResponse)
async def saved_jobs(phone: str):
    saved = get_saved_job_service().list_for_student(phone)
    return SavedJobListResponse(saved_jobs=saved, count=len(saved))


@router.delete("/saved/{phone}/{job_id}", response_model=MessageResponse)
async def remove_saved_job(phone: str, job_id: str):
    removed = get_saved_job_service().remove(phone, job_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Saved job not found")
    return MessageResponse(message=f"{removed['job_title']} removed from saved list")


@router.get("/company/{company_name}", response_model=CompanyApplicationsResponse)
async def company_applications(company_name: str):
    """Applications whose company name contains `company_name` (case-insensitive), grouped by job."""
    applications = get_application_service().list_for_company(company_name)

    by_job = {}
    for application in applications:
        group = by_job.setdefault(application["job_id"], {
            "job_id": application["job_id"],
            "job_title": application["job_title"],
            "applications": []
        })
        group["applications"].append(application)

    return CompanyApplicationsResponse(
        company_name=company_name,
        total_applications=len(applications),
        applications_by_job=list(by_job.values()),
        all_applications=applications
    )
