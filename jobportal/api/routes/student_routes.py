"""
Student Routes

POST /students - Save a student assessment profile
GET /students/{phone} - Get profile by phone number
PUT /students/{phone} - Update profile (re-scores when answers are sent)
"""

from typing import Optional

from fastapi import APIRouter, HTTPException

from jobportal.api.routes.assessment_routes import score_answers
from jobportal.core.logging import get_logger
from jobportal.services.mongo_service import get_student_service
from jobportal.schemas.schemas import (
    StudentCreate, StudentUpdate, StudentResponse, AssessmentScore
)

logger = get_logger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])

ASSESSMENT_FIELDS = {"assessment", "assessment_score"}


def _assessment_updates(data, degree: Optional[str] = None) -> dict:
    """Stored assessment fields for a create/update payload."""
    if data.assessment is not None:
        return {
            "assessment": data.assessment.model_dump(),
            "assessment_score": score_answers(data.assessment, degree).model_dump()
        }
    if data.assessment_score is not None:
        return {"assessment_score": data.assessment_score.model_dump()}
    return {}


def _profile_degree(service, phone: str, data: StudentUpdate) -> Optional[str]:
    """Degree to score with when re-submitted answers omit their education level."""
    if data.assessment is None or data.assessment.education:
        return None
    if data.education is not None:
        return data.education.degree.value
    stored = service.get_by_phone(phone)
    return ((stored or {}).get("education") or {}).get("degree")


@router.post("", response_model=StudentResponse, status_code=201)
async def create_student(data: StudentCreate):
    """
    Save a completed assessment.

    When raw answers are included, scores are computed server-side and any
    score sent by the client is ignored.
    """
    doc = data.model_dump(mode="json", exclude=ASSESSMENT_FIELDS)
    doc["assessment_score"] = AssessmentScore().model_dump()
    doc.update(_assessment_updates(data, data.education.degree.value))

    service = get_student_service()
    student = service.create(doc)
    if student is None:
        raise HTTPException(status_code=400, detail="Student with this phone number already exists")

    logger.info(f"Saved assessment for student {student['phone']}")
    return student


@router.get("/{phone}", response_model=StudentResponse)
async def get_student(phone: str):
    student = get_student_service().get_by_phone(phone)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.put("/{phone}", response_model=StudentResponse)
async def update_student(phone: str, data: StudentUpdate):
    """Partial update; only fields present in the body are changed."""
    updates = data.model_dump(mode="json", exclude_unset=True, exclude=ASSESSMENT_FIELDS)
    service = get_student_service()
    updates.update(_assessment_updates(data, _profile_degree(service, phone, data)))

    student = service.update_by_phone(phone, updates)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student
