"""
Fitment Service

PURPOSE:
Score how well a student fits a job posting (0-100) and rank jobs for a
student or students for a job.

HOW IT WORKS:
1. Rule-based fitment (always available, deterministic):
   - Education match   25 pts
   - Experience match  20 pts
   - Skills match      25 pts
   - Assessment scores 20 pts (average of the four category scores)
   - Location match    10 pts
   The total is reported as a percentage with a match level label.
2. AI fitment (optional): the chat model reads both profiles and returns a
   score with reasons. Any AI failure falls back to the rule-based result,
   so fitment never fails because the model did.
"""

import logging
import math
from typing import List, Optional

from jobportal.core.config import get_settings
from jobportal.core.logging import get_logger, log_with_context
from jobportal.services.ai_client import AIServiceError, OpenAIClient, get_ai_client
from jobportal.services.mongo_service import JobService, StudentService

settings = get_settings()
logger = get_logger(__name__)


EDUCATION_LEVELS = {
    "Any": 0,
    "High School": 1,
    "Diploma": 2,
    "Bachelor": 3,
    "BTech": 3,
    "BE": 3,
    "BSc": 3,
    "BCA": 3,
    "BBA": 3,
    "BCom": 3,
    "Master": 4,
    "MTech": 4,
    "MSc": 4,
    "MBA": 4,
    "MCA": 4,
    "PhD": 5,
}

EDUCATION_POINTS = 25
EXPERIENCE_POINTS = 20
SKILLS_POINTS = 25
ASSESSMENT_POINTS = 20
LOCATION_POINTS = 10
MAX_POINTS = EDUCATION_POINTS + EXPERIENCE_POINTS + SKILLS_POINTS + ASSESSMENT_POINTS + LOCATION_POINTS

DEFAULT_MAX_EXPERIENCE = 10


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_list(value) -> List[str]:
    # The model sometimes answers with a single string instead of a list
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(item) for item in value]


# ============================================================
# RULE-BASED COMPONENTS
# ============================================================

def education_match(student_degree: Optional[str], required: Optional[str]) -> dict:
    student_level = EDUCATION_LEVELS.get(student_degree or "", 0)
    job_level = EDUCATION_LEVELS.get(required or "", 0)

    if job_level == 0:
        return {"score": 25, "reason": "Education requirement is flexible"}
    if student_level >= job_level:
        return {"score": 25, "reason": "Education requirements met"}
    if student_level >= job_level - 1:
        return {"score": 15, "reason": "Education level close to requirement"}
    return {"score": 5, "reason": "Education level below requirement"}


def experience_match(student_years: Optional[float], min_years: Optional[float], max_years: Optional[float]) -> dict:
    years = student_years or 0
    low = min_years or 0
    high = max_years if max_years is not None else DEFAULT_MAX_EXPERIENCE

    if low <= years <= high:
        return {"score": 20, "reason": "Experience requirements met"}
    if years > high:
        return {"score": 10, "reason": "Overqualified for position"}
    if years >= low - 1:
        return {"score": 15, "reason": "Experience level close to requirement"}
    return {"score": 5, "reason": "Experience level below requirement"}


def skills_match(student_skills: List[str], job_skills: List[str]) -> dict:
    """
    Share of required skills the student covers.
    A skill matches when either name contains the other (case-insensitive),
    so "React" covers "React.js" and vice versa.
    """
    if not job_skills:
        return {"score": 25, "reason": "No specific skills required"}

    student_names = [s.lower().strip() for s in student_skills if s and s.strip()]
    job_names = [s.lower().strip() for s in job_skills if s and s.strip()]
    if not job_names:
        return {"score": 25, "reason": "No specific skills required"}

    matching = [
        skill for skill in job_names
        if any(own in skill or skill in own for own in student_names)
    ]
    pct = len(matching) / len(job_names) * 100
    score = _round_half_up(pct / 100 * SKILLS_POINTS)
    ratio = f"{len(matching)}/{len(job_names)} skills"

    if pct >= 80:
        return {"score": score, "reason": f"Excellent skills match ({ratio})"}
    if pct >= 50:
        return {"score": score, "reason": f"Good skills match ({ratio})"}
    if pct >= 25:
        return {"score": score, "reason": f"Partial skills match ({ratio})"}
    return {"score": score, "reason": f"Limited skills match ({ratio})"}


def assessment_match(assessment_score: Optional[dict]) -> dict:
    scores = assessment_score or {}
    average = sum(
        scores.get(k) or 0 for k in ("technical", "communication", "problem_solving", "teamwork")
    ) / 4

    if average >= 80:
        return {"score": 20, "reason": "Excellent assessment scores"}
    if average >= 60:
        return {"score": 15, "reason": "Good assessment scores"}
    if average >= 40:
        return {"score": 10, "reason": "Average assessment scores"}
    return {"score": 5, "reason": "Below average assessment scores"}


def location_match(preferred: Optional[List[str]], job_location: Optional[dict]) -> dict:
    preferred = [p.lower().strip() for p in (preferred or []) if p and p.strip()]
    if not preferred:
        return {"score": 10, "reason": "No location preference specified"}

    job_location = job_location or {}
    parts = [job_location.get(k) or "" for k in ("city", "state", "country")]
    job_text = " ".join(p for p in parts if p).lower()
    if job_location.get("type") == "Remote":
        job_text = f"{job_text} remote".strip()

    if job_text and any(p in job_text or job_text in p for p in preferred):
        return {"score": 10, "reason": "Location preference matched"}
    return {"score": 5, "reason": "Location preference not matched"}


def get_match_level(percentage: float) -> str:
    if percentage >= 90:
        return "Excellent Match"
    if percentage >= 75:
        return "Very Good Match"
    if percentage >= 60:
        return "Good Match"
    if percentage >= 40:
        return "Fair Match"
    return "Poor Match"


def calculate_fitment(student: dict, job: dict) -> dict:
    """
    Rule-based fitment between a stored student and a stored job.

    Returns:
        dict with score (0-100), total_score, max_score, reasons, match_level
    """
    requirements = job.get("requirements") or {}
    required_experience = requirements.get("experience") or {}
    education = student.get("education") or {}
    experience = student.get("experience") or {}

    parts = [
        education_match(education.get("degree"), requirements.get("education")),
        experience_match(
            experience.get("years"),
            required_experience.get("min"),
            required_experience.get("max")
        ),
        skills_match(
            [s.get("name") or "" for s in student.get("skills") or []],
            requirements.get("skills") or []
        ),
        assessment_match(student.get("assessment_score")),
        location_match(student.get("preferred_location"), job.get("location")),
    ]

    total = sum(p["score"] for p in parts)
    percentage = _round_half_up(total / MAX_POINTS * 100)

    return {
        "score": percentage,
        "total_score": total,
        "max_score": MAX_POINTS,
        "reasons": [p["reason"] for p in parts],
        "strengths": [],
        "improvements": [],
        "match_level": get_match_level(percentage),
        "ai_generated": False
    }


# ============================================================
# PROFILE TEXT FOR THE MODEL
# ============================================================

def describe_student(student: dict) -> str:
    education = student.get("education") or {}
    scores = student.get("assessment_score") or {}
    skills = ", ".join(
        f"{s.get('name')} ({s.get('level') or 'Intermediate'})" for s in student.get("skills") or []
    )
    return "\n".join([
        f"- Name: {student.get('name')}",
        f"- Education: {education.get('degree')} in {education.get('field')} "
        f"from {education.get('institution')} ({education.get('graduation_year')})",
        f"- Experience: {(student.get('experience') or {}).get('years', 0)} years",
        f"- Skills: {skills or 'None listed'}",
        f"- Career Goals: {student.get('career_goals') or 'Not provided'}",
        f"- Assessment Scores: Technical {scores.get('technical')}/100, "
        f"Communication {scores.get('communication')}/100, "
        f"Problem Solving {scores.get('problem_solving')}/100, "
        f"Teamwork {scores.get('teamwork')}/100",
    ])


def describe_job(job: dict) -> str:
    requirements = job.get("requirements") or {}
    experience = requirements.get("experience") or {}
    return "\n".join([
        f"- Title: {job.get('title')}",
        f"- Company: {(job.get('company') or {}).get('name')}",
        f"- Industry: {job.get('industry')}",
        f"- Job Type: {job.get('job_type')}",
        f"- Required Education: {requirements.get('education')}",
        f"- Required Experience: {experience.get('min', 0)}-{experience.get('max') or 'unlimited'} years",
        f"- Required Skills: {', '.join(requirements.get('skills') or [])}",
        f"- Description: {job.get('description')}",
        f"- Responsibilities: {', '.join(job.get('responsibilities') or [])}",
    ])


# ============================================================
# FITMENT SERVICE
# ============================================================

class FitmentService:
    """
    Computes fitment and rankings.

    Process for one pair:
    1. Try the AI analysis when it is enabled and configured
    2. Otherwise (or on any AI failure) use calculate_fitment()
    """

    def __init__(
        self,
        job_service: Optional[JobService] = None,
        student_service: Optional[StudentService] = None,
        ai_client: Optional[OpenAIClient] = None
    ):
        self.job_service = job_service or JobService()
        self.student_service = student_service or StudentService()
        self.ai_client = ai_client or get_ai_client()

    @property
    def use_ai(self) -> bool:
        return settings.use_ai_fitment and settings.ai_enabled

    def calculate(self, student: dict, job: dict) -> dict:
        if self.use_ai:
            try:
                return self._calculate_with_ai(student, job)
            except AIServiceError as e:
                log_with_context(
                    logger, logging.WARNING,
                    f"AI fitment failed, using rule-based fitment: {e.message}",
                    job_id=job.get("job_id"), phone=student.get("phone")
                )
        return calculate_fitment(student, job)

    def _calculate_with_ai(self, student: dict, job: dict) -> dict:
        data = self.ai_client.assess_fitment(describe_student(student), describe_job(job))
        try:
            score = float(data["score"])
        except (TypeError, ValueError) as e:
            raise AIServiceError(f"Non-numeric AI fitment score: {data.get('score')!r}") from e
        if not math.isfinite(score):
            raise AIServiceError(f"Non-finite AI fitment score: {score!r}")
        score = _round_half_up(min(max(score, 0), 100))
        return {
            "score": score,
            "total_score": None,
            "max_score": None,
            "reasons": _as_list(data.get("reasons")),
            "strengths": _as_list(data.get("strengths")),
            "improvements": _as_list(data.get("improvements")),
            "match_level": get_match_level(score),
            "ai_generated": True
        }

    def matched_jobs(self, student: dict, limit: int = 10, min_score: float = 0) -> dict:
        """
        Rank all active jobs for a student.

        Returns:
            dict with matched_jobs (top `limit`, best first), total_jobs
            (all jobs at or above min_score) and their average_score
        """
        matches = []
        for job in self.job_service.list_all_active():
            fitment = self.calculate(student, job)
            if fitment["score"] >= min_score:
                matches.append({"job": job, "fitment": fitment})

        matches.sort(key=lambda m: m["fitment"]["score"], reverse=True)
        average = (
            _round_half_up(sum(m["fitment"]["score"] for m in matches) / len(matches))
            if matches else 0
        )
        return {
            "matched_jobs": matches[:limit],
            "total_jobs": len(matches),
            "average_score": average
        }

    def job_analytics(self, job: dict, top_n: int = 10) -> dict:
        """Fitment of every student for one job, with match-band counts."""
        candidates = []
        for student in self.student_service.list_all():
            fitment = self.calculate(student, job)
            candidates.append({
                "student_id": student.get("id"),
                "name": student.get("name"),
                "phone": student.get("phone"),
                "email": student.get("email"),
                "education": student.get("education"),
                "fitment_score": fitment["score"],
                "strengths": fitment["strengths"],
                "improvements": fitment["improvements"],
                "assessment_score": student.get("assessment_score")
            })

        candidates.sort(key=lambda c: c["fitment_score"], reverse=True)
        scores = [c["fitment_score"] for c in candidates]
        return {
            "total_candidates": len(candidates),
            "excellent_matches": sum(1 for s in scores if s >= 80),
            "good_matches": sum(1 for s in scores if 60 <= s < 80),
            "fair_matches": sum(1 for s in scores if 40 <= s < 60),
            "average_score": _round_half_up(sum(scores) / len(scores)) if scores else 0,
            "top_candidates": candidates[:top_n],
            "candidates": candidates
        }


def get_fitment_service() -> FitmentService:
    """Get fitment service instance."""
    return FitmentService()
