"""
Admin Routes (JWT required)

GET /admin/jobs - All jobs with filters, pagination and summary stats
DELETE /admin/jobs/{job_id} - Delete a job
PUT /admin/jobs/{job_id}/status - Activate / deactivate a job
GET /admin/students/search/{phone} - Find a student by phone number
POST /admin/students/{phone}/summary - AI recruiter summary of a student
DELETE /admin/students/{phone} - Delete a student
"""

import math
from datetime import datetime
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from jobportal.core.auth import get_current_admin
from jobportal.core.logging import get_logger
from jobportal.services.ai_client import AIServiceError, get_ai_client
from jobportal.services.fitment_service import describe_student
from jobportal.services.mongo_service import get_job_service, get_student_service
from jobportal.schemas.schemas import (
    AdminJobListResponse, JobResponse, JobStatusUpdate, StudentResponse,
    StudentSummaryResponse, MessageResponse, JobType
)

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


def _summary_profile(student: dict) -> str:
    experience = student.get("experience") or {}
    salary = student.get("salary_expectation") or {}
    internships = ", ".join(
        f"{i.get('role')} at {i.get('company')}" for i in experience.get("internships") or []
    )
    projects = ", ".join(p.get("title") or "" for p in experience.get("projects") or [])
    return "\n".join([
        "Please analyze this student profile and provide a comprehensive summary:",
        "",
        describe_student(student),
        f"- Internships: {internships or 'None'}",
        f"- Projects: {projects or 'None'}",
        f"- Interests: {', '.join(student.get('interests') or []) or 'None'}",
        f"- Preferred Locations: {', '.join(student.get('preferred_location') or []) or 'Any'}",
        f"- Salary Expectation: {salary.get('min', 0)}-{salary.get('max', 0)} {salary.get('currency', '')}",
    ])


# ============================================================
# JOBS
# ============================================================

@router.get("/jobs", response_model=AdminJobListResponse)
async def admin_list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search: Optional[str] = Query(None, description="Search in title, company name and job_id"),
    status: Optional[str] = Query(None, pattern="^(active|inactive)$"),
    industry: Optional[str] = Query(None),
    job_type: Optional[JobType] = Query(None)
):
    jobs, total, stats = get_job_service().admin_list(
        page=page,
        limit=limit,
        search=search,
        status=status,
        industry=industry,
        job_type=job_type.value if job_type else None
    )
    return AdminJobListResponse(
        jobs=jobs,
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        stats=stats
    )


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def admin_delete_job(job_id: str):
    job = get_job_service().delete(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    logger.info(f"Deleted job {job['job_id']}")
    return MessageResponse(message=f"Job {job['job_id']} deleted successfully")


@router.put("/jobs/{job_id}/status", response_model=JobResponse)
async def admin_set_job_status(job_id: str, data: JobStatusUpdate):
    job = get_job_service().set_active(job_id, data.is_active)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    logger.info(f"Job {job['job_id']} {'activated' if data.is_active else 'deactivated'}")
    return job


# ============================================================
# STUDENTS
# ============================================================

@router.get("/students/search/{phone}", response_model=StudentResponse)
async def admin_find_student(phone: str):
    student = get_student_service().get_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail=f"No student found with phone number: {phone}")
    return student


@router.post("/students/{phone}/summary", response_model=StudentSummaryResponse)
async def admin_student_summary(phone: str):
    """Generate a recruiter-facing summary of a student with the chat model."""
    student = get_student_service().get_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail=f"No student found with phone number: {phone}")

    try:
        summary = get_ai_client().summarize_student(_summary_profile(student))
    except AIServiceError as e:
        logger.error(f"Student summary failed for {phone}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return StudentSummaryResponse(
        student={"name": student["name"], "phone": student["phone"], "email": student.get("email")},
        summary=summary,
        generated_at=datetime.utcnow()
    )


@router.delete("/students/{phone}", response_model=MessageResponse)
async def admin_delete_student(phone: str):
    student = get_student_service().delete_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail=f"No student found with phone number: {phone}")
    logger.info(f"Deleted student {phone}")
    return MessageResponse(message=f"Student {student['name']} deleted successfully")
