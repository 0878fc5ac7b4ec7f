"""
Fitment Routes

GET /fitment/{phone} - Active jobs ranked by fitment for a student
GET /fitment/{phone}/{job_id} - Fitment of one student for one job
"""

from fastapi import APIRouter, HTTPException, Query

from jobportal.services.mongo_service import get_student_service, get_job_service
from jobportal.services.fitment_service import get_fitment_service
from jobportal.schemas.schemas import MatchedJobsResponse, FitmentDetailResponse

router = APIRouter(prefix="/fitment", tags=["Fitment"])


def _student_ref(student: dict) -> dict:
    return {"name": student["name"], "phone": student["phone"], "email": student.get("email")}


@router.get("/{phone}", response_model=MatchedJobsResponse)
async def matched_jobs(
    phone: str,
    limit: int = Query(10, ge=1, le=100),
    min_score: float = Query(0, ge=0, le=100)
):
    """
    Rank every active job for a student.

    total_jobs and average_score cover all jobs at or above min_score,
    matched_jobs holds only the best `limit` of them.
    """
    student = get_student_service().get_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    result = get_fitment_service().matched_jobs(student, limit=limit, min_score=min_score)
    return MatchedJobsResponse(student=_student_ref(student), **result)


@router.get("/{phone}/{job_id}", response_model=FitmentDetailResponse)
async def job_fitment(phone: str, job_id: str):
    student = get_student_service().get_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")

    job = get_job_service().get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    fitment = get_fitment_service().calculate(student, job)
    return FitmentDetailResponse(
        student=_student_ref(student),
        job_id=job["job_id"],
        job_title=job["title"],
        company_name=(job.get("company") or {}).get("name", ""),
        fitment=fitment
    )
