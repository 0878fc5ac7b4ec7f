"""
OpenAI API Client

Thin wrapper around the openai library for the few places the portal
talks to a model:
- Whisper transcription of voice-filled forms
- Field extraction from transcripts (student assessment / job posting)
- AI-assisted fitment analysis (falls back to the rule-based engine)
- Career-role recommendations and recruiter summaries

Every model call goes through _call_api so that SDK errors surface as a
single AIServiceError carrying the HTTP status the API layer should return.
"""
import json
import re
from typing import Optional

import openai
from openai import OpenAI

from jobportal.core.config import get_settings
from jobportal.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)


class AIServiceError(Exception):
    """Raised when the AI provider is unavailable or returns unusable output."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


STUDENT_FIELDS_PROMPT = """Extract the following information from this speech transcript and return it as a JSON object:
- name: Full name of the person
- email: Email address
- phone: Phone number (10 digits, clean format)
- degree: Educational degree (High School, BTech, Bachelor, Master, PhD)
- specialization: Field of study/specialization
- institution: College/University name
- graduationYear: Year of graduation (4 digits)

Transcript: "{transcript}"

Return only valid JSON with the extracted fields. If a field is not mentioned, use null."""

JOB_FIELDS_PROMPT = """Extract job posting information from this speech transcript and return it as a JSON object:
- title: Job title (e.g., "Software Engineer", "Data Scientist")
- company: Company name
- description: Brief job description
- location: Job location/city
- salary: Salary range or amount (extract numbers)
- requirements: Experience requirements or skills mentioned
- industry: one of Technology, Healthcare, Finance, Education, Retail, Manufacturing, Consulting, Marketing, Government, Non-profit, Other
- jobType: one of Full-time, Part-time, Contract, Internship, Freelance
- contactName: Contact person name (without titles like Mr, Mrs)
- contactPhone: Contact phone number

Transcript: "{transcript}"

Return only valid JSON with the extracted fields. If a field is not mentioned, use null."""

EXTRACTION_PROMPTS = {
    "student_assessment": STUDENT_FIELDS_PROMPT,
    "job_posting": JOB_FIELDS_PROMPT,
}


class OpenAIClient:
    """
    Wrapper for the OpenAI API with small, structured prompts.
    """

    def __init__(self):
        self._client: Optional[OpenAI] = None
        self.model = settings.openai_chat_model
        self.transcription_model = settings.openai_transcription_model

    @property
    def client(self) -> OpenAI:
        if not settings.ai_enabled:
            raise AIServiceError("AI features are not configured", status_code=503)
        if self._client is None:
            self._client = OpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url
            )
        return self._client

    def _call_api(
        self,
        system_prompt: str,
        user_content: str,
        max_tokens: int = 1000,
        temperature: float = 0.1
    ) -> str:
        """
        Internal method to call the chat API.
        Returns raw text response.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content}
                ],
                max_tokens=max_tokens,
                temperature=temperature
            )
        except openai.RateLimitError as e:
            raise AIServiceError("OpenAI API quota exceeded, please try again later", 429) from e
        except openai.AuthenticationError as e:
            raise AIServiceError("Invalid OpenAI API key, check the server configuration", 401) from e
        except openai.OpenAIError as e:
            raise AIServiceError(f"AI request failed: {e}") from e
        return response.choices[0].message.content or ""

    def _extract_json(self, text: str):
        """
        Extract JSON from API response.
        Handles markdown code fences and prose around a single JSON object.
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

        try:
            return json.loads(text)
        except json.JSONDecodeError:
            match = re.search(r"\{.*\}", text, re.DOTALL)
            if match:
                try:
                    return json.loads(match.group(0))
                except json.JSONDecodeError:
                    pass
        raise AIServiceError("The AI response was not in valid JSON format")

    # --------------------------------------------------------
    # Voice
    # --------------------------------------------------------

    def transcribe(self, audio: bytes, filename: str, content_type: str) -> dict:
        """Speech to text with Whisper."""
        try:
            result = self.client.audio.transcriptions.create(
                file=(filename, audio, content_type),
                model=self.transcription_model,
                language="en",
                response_format="verbose_json",
                temperature=0.2
            )
        except openai.RateLimitError as e:
            raise AIServiceError("OpenAI API quota exceeded, please try again later", 429) from e
        except openai.AuthenticationError as e:
            raise AIServiceError("Invalid OpenAI API key, check the server configuration", 401) from e
        except openai.OpenAIError as e:
            raise AIServiceError(f"Speech transcription failed: {e}") from e

        segments = getattr(result, "segments", None) or []
        return {
            "transcript": result.text,
            "language": getattr(result, "language", None),
            "duration": getattr(result, "duration", None),
            "segments": [s.model_dump() if hasattr(s, "model_dump") else s for s in segments]
        }

    def extract_fields(self, transcript: str, form_type: str = "student_assessment") -> dict:
        """Pull form fields out of a transcript."""
        prompt = EXTRACTION_PROMPTS.get(form_type, STUDENT_FIELDS_PROMPT)
        response = self._call_api(
            "You are an expert at extracting structured information from speech transcripts. "
            "Always return valid JSON only, no additional text or explanations.",
            prompt.format(transcript=transcript),
            max_tokens=500
        )
        fields = self._extract_json(response)
        if not isinstance(fields, dict):
            raise AIServiceError("The AI response was not a JSON object")
        return fields

    # --------------------------------------------------------
    # Matching
    # --------------------------------------------------------

    def assess_fitment(self, student_profile: str, job_profile: str) -> dict:
        """
        Ask the model for a fitment analysis.
        Returns the raw JSON: {score, reasons, strengths, improvements}
        """
        system_prompt = """You are an expert HR professional specializing in candidate-job matching.
Focus PRIMARILY on the student's assessment scores (technical, communication, problem solving, teamwork),
then skills alignment, career goals and education. Do not weight location or salary heavily.
Respond ONLY with JSON:
{"score": <0-100>, "reasons": ["..."], "strengths": ["..."], "improvements": ["..."]}"""

        response = self._call_api(
            system_prompt,
            f"STUDENT PROFILE:\n{student_profile}\n\nJOB REQUIREMENTS:\n{job_profile}",
            max_tokens=1000,
            temperature=0.3
        )
        data = self._extract_json(response)
        if not isinstance(data, dict) or "score" not in data:
            raise AIServiceError("The AI fitment response had no score")
        return data

    def career_matches(self, system_prompt: str, candidate_summary: str) -> dict:
        response = self._call_api(system_prompt, candidate_summary, max_tokens=2000, temperature=0.7)
        data = self._extract_json(response)
        if not isinstance(data, dict):
            raise AIServiceError("The AI response was not a JSON object")
        return data

    def summarize_student(self, student_profile: str) -> str:
        """Free-text recruiter summary of a student profile."""
        system_prompt = """You are an expert HR analyst and career counselor. Analyze the student's profile and write
a professional summary for recruiters with these sections:
1. Professional Summary
2. Key Strengths
3. Experience Level
4. Career Alignment
5. Recommendations
6. Recruiter Notes"""
        return self._call_api(system_prompt, student_profile, max_tokens=1500, temperature=0.7)

    def test_connection(self) -> bool:
        """Test if the API is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in response.upper()
        except AIServiceError as e:
            logger.warning(f"OpenAI connection failed: {e.message}")
            return False


# Singleton instance
_ai_client: OpenAIClient = None


def get_ai_client() -> OpenAIClient:
    """Get or create the OpenAI client (singleton pattern)"""
    global _ai_client
    if _ai_client is None:
        _ai_client = OpenAIClient()
    return _ai_client
