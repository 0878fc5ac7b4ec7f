"""
Voice Routes

POST /voice/transcribe - Speech to text (Whisper)
POST /voice/extract-fields - Form fields from a transcript
"""

from fastapi import APIRouter, HTTPException, UploadFile, File

from jobportal.core.logging import get_logger
from jobportal.services.ai_client import AIServiceError, get_ai_client
from jobportal.utils.file_upload import read_audio_upload
from jobportal.schemas.schemas import (
    TranscriptionResponse, ExtractFieldsRequest, ExtractFieldsResponse
)

logger = get_logger(__name__)

router = APIRouter(prefix="/voice", tags=["Voice"])


@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe_audio(audio: UploadFile = File(..., description="Recording, audio/* or webm, max 25MB")):
    content, filename, content_type = await read_audio_upload(audio)
    logger.info(f"Transcribing {filename} ({content_type}, {len(content)} bytes)")

    try:
        return get_ai_client().transcribe(content, filename, content_type)
    except AIServiceError as e:
        logger.error(f"Transcription failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/extract-fields", response_model=ExtractFieldsResponse)
async def extract_fields(data: ExtractFieldsRequest):
    """
    Extract form fields from a transcript.

    form_type `student_assessment` pulls name, email, phone and education;
    `job_posting` pulls title, company, salary, job type and contact details.
    Fields the speaker did not mention come back as null.
    """
    try:
        fields = get_ai_client().extract_fields(data.transcript, data.form_type.value)
    except AIServiceError as e:
        logger.error(f"Field extraction failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return ExtractFieldsResponse(
        transcript=data.transcript,
        form_type=data.form_type,
        extracted_fields=fields
    )
