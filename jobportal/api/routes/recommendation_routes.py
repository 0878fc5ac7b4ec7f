"""
Recommendation Routes

POST /recommendations/generate - AI career matches for a finished assessment
POST /recommendations/voice-process - Job posting fields straight from a recording
"""

from fastapi import APIRouter, HTTPException, UploadFile, File

from jobportal.core.logging import get_logger
from jobportal.services.ai_client import AIServiceError, get_ai_client
from jobportal.services.recommendation_service import get_recommendation_service
from jobportal.utils.file_upload import read_audio_upload
from jobportal.schemas.schemas import (
    RecommendationRequest, RecommendationResponse, VoiceProcessResponse, VoiceFormType
)

logger = get_logger(__name__)

router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


@router.post("/generate", response_model=RecommendationResponse)
async def generate_recommendations(data: RecommendationRequest):
    """
    Suggest 3-6 internship roles from a fixed role list.

    Each match carries jobTitle, fitmentScore, jobDescription, relevantLogo,
    whyYouMatch and availableJobs (open postings with the same title).
    """
    try:
        return get_recommendation_service().generate(
            full_name=data.full_name,
            core_values=data.core_values,
            work_preferences=data.work_preferences,
            behavioral_answers=data.behavioral_answers
        )
    except AIServiceError as e:
        logger.error(f"Recommendation generation failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/voice-process", response_model=VoiceProcessResponse)
async def voice_process(audio: UploadFile = File(..., description="Recording, audio/* or webm, max 25MB")):
    """Transcribe a spoken job posting and extract its fields in one call."""
    content, filename, content_type = await read_audio_upload(audio)

    ai_client = get_ai_client()
    try:
        transcript = ai_client.transcribe(content, filename, content_type)["transcript"]
        fields = ai_client.extract_fields(transcript, VoiceFormType.job_posting.value)
    except AIServiceError as e:
        logger.error(f"Voice processing failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return VoiceProcessResponse(
        message="Voice input processed successfully",
        transcript=transcript,
        extracted_fields=fields
    )
