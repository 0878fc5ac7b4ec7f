"""
Assessment Routes

POST /assessment/score - Score assessment answers (no persistence)
GET /assessment/options - Vocabulary and ranges the assessment form uses
"""

from typing import Optional

from fastapi import APIRouter

from jobportal.services.assessment_scoring import compute_scores, get_assessment_options
from jobportal.schemas.schemas import AssessmentAnswers, AssessmentScore, AssessmentOptionsResponse

router = APIRouter(prefix="/assessment", tags=["Assessment"])


def score_answers(answers: AssessmentAnswers, degree: Optional[str] = None) -> AssessmentScore:
    """
    Run the scoring engine on validated form answers.

    `degree` (the profile's education.degree) is used when the answers
    carry no education level of their own.
    """
    result = compute_scores(
        answers.education or degree,
        answers.core_values,
        answers.sliders.model_dump(),
        answers.bubbles.model_dump()
    )
    return AssessmentScore.model_validate(result.to_dict())


@router.post("/score", response_model=AssessmentScore)
async def score_assessment(answers: AssessmentAnswers):
    """
    Compute the four category scores for a set of answers.

    Every score lies in [20, 100]; the same answers always give the same scores.
    """
    return score_answers(answers)


@router.get("/options", response_model=AssessmentOptionsResponse)
async def assessment_options():
    return get_assessment_options()
