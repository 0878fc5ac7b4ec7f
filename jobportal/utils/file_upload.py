"""
File Upload Utility - Validate voice recordings before transcription.

Accepted:
- Any audio/* content type
- WebM recordings (browsers often send video/webm for microphone capture)

Max file size: 25MB (Whisper API limit)
"""

from typing import Tuple
from fastapi import UploadFile, HTTPException


MAX_FILE_SIZE_MB = 25
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
DEFAULT_AUDIO_FILENAME = "audio.webm"


def is_audio_content_type(content_type: str) -> bool:
    content_type = (content_type or "").lower()
    return content_type.startswith("audio/") or "webm" in content_type


async def read_audio_upload(file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Read and validate an uploaded recording.

    Args:
        file: FastAPI UploadFile

    Returns:
        Tuple of (audio_bytes, filename, content_type)

    Raises:
        HTTPException on validation errors
    """
    content_type = file.content_type or ""
    if not is_audio_content_type(content_type):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{content_type}'. Only audio files are allowed"
        )

    content = await file.read()

    if len(content) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {MAX_FILE_SIZE_MB}MB"
        )

    if not content:
        raise HTTPException(status_code=400, detail="Audio file is empty")

    return content, file.filename or DEFAULT_AUDIO_FILENAME, content_type
