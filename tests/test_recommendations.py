"""Tests for career recommendations."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import PyMongoError

from jobportal.main import app
from jobportal.services.ai_client import AIServiceError
from jobportal.services.recommendation_service import (
    CAREER_ROLES,
    RecommendationService,
    build_candidate_summary,
    build_system_prompt,
)

client = TestClient(app)

MATCHES = {
    "matches": [
        {
            "jobTitle": "Data Analyst",
            "fitmentScore": 88,
            "jobDescription": "Analyze product data",
            "relevantLogo": "📊",
            "whyYouMatch": ["Analytical", "Curious", "Detail oriented"]
        },
        {
            "jobTitle": "UX Designer",
            "fitmentScore": 74,
            "jobDescription": "Design user flows",
            "relevantLogo": "🎨",
            "whyYouMatch": ["Creative", "Empathetic", "Collaborative"]
        },
        "not a match"
    ]
}


def test_system_prompt_lists_roles():
    prompt = build_system_prompt()
    assert CAREER_ROLES[0] in prompt
    assert CAREER_ROLES[-1] in prompt
    assert '{"matches"' in prompt


def test_candidate_summary():
    summary = build_candidate_summary("Asha Rao", ["Growth"], {"pace": 70}, {"q1": 4})
    assert "Full Name: Asha Rao" in summary
    assert 'Core Values: ["Growth"]' in summary
    assert 'Work Preferences: {"pace": 70}' in summary


class TestRecommendationService:

    def test_available_jobs_attached(self):
        jobs = MagicMock()
        jobs.active_counts_by_title.return_value = {"Data Analyst": 3}
        ai = MagicMock()
        ai.career_matches.return_value = MATCHES

        result = RecommendationService(job_service=jobs, ai_client=ai).generate(
            "Asha Rao", ["Growth"], {"pace": 70}, {"q1": 4}
        )

        assert result["total_recommendations"] == 2
        assert [r["availableJobs"] for r in result["recommendations"]] == [3, 0]
        assert result["recommendations"][0]["fitmentScore"] == 88

    def test_database_failure_keeps_matches(self):
        jobs = MagicMock()
        jobs.active_counts_by_title.side_effect = PyMongoError("connection refused")
        ai = MagicMock()
        ai.career_matches.return_value = MATCHES

        result = RecommendationService(job_service=jobs, ai_client=ai).generate(
            "Asha Rao", ["Growth"], {}, {}
        )

        assert all(r["availableJobs"] == 0 for r in result["recommendations"])

    def test_missing_matches(self):
        ai = MagicMock()
        ai.career_matches.return_value = {"roles": []}

        with pytest.raises(AIServiceError):
            RecommendationService(job_service=MagicMock(), ai_client=ai).generate("Asha Rao", ["Growth"], {}, {})


PAYLOAD = {
    "fullName": "Asha Rao",
    "coreValues": ["Growth", "Integrity"],
    "workPreferences": {"independence": 60},
    "behavioralAnswers": {"q1": 4}
}


def test_generate_route():
    service = MagicMock()
    service.generate.return_value = {
        "message": "Job recommendations generated successfully",
        "recommendations": [{"jobTitle": "Data Analyst", "availableJobs": 1}],
        "total_recommendations": 1,
        "generated_at": "2024-03-01T10:00:00"
    }

    with patch("jobportal.api.routes.recommendation_routes.get_recommendation_service", return_value=service):
        response = client.post("/api/recommendations/generate", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json()["total_recommendations"] == 1
    service.generate.assert_called_once_with(
        full_name="Asha Rao",
        core_values=["Growth", "Integrity"],
        work_preferences={"independence": 60},
        behavioral_answers={"q1": 4}
    )


def test_generate_route_ai_error():
    service = MagicMock()
    service.generate.side_effect = AIServiceError("AI features are not configured", status_code=503)

    with patch("jobportal.api.routes.recommendation_routes.get_recommendation_service", return_value=service):
        response = client.post("/api/recommendations/generate", json=PAYLOAD)

    assert response.status_code == 503


def test_generate_route_requires_core_values():
    response = client.post("/api/recommendations/generate", json={**PAYLOAD, "coreValues": []})
    assert response.status_code == 422


def test_voice_process():
    ai = MagicMock()
    ai.transcribe.return_value = {"transcript": "Hiring a data analyst at Acme", "language": "english"}
    ai.extract_fields.return_value = {"title": "Data Analyst", "company": "Acme", "jobType": None}

    with patch("jobportal.api.routes.recommendation_routes.get_ai_client", return_value=ai):
        response = client.post(
            "/api/recommendations/voice-process",
            files={"audio": ("posting.webm", b"\x1a\x45\xdf\xa3audio", "audio/webm")}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["transcript"] == "Hiring a data analyst at Acme"
    assert data["extracted_fields"]["title"] == "Data Analyst"
    ai.extract_fields.assert_called_once_with("Hiring a data analyst at Acme", "job_posting")


def test_voice_process_rejects_non_audio():
    response = client.post(
        "/api/recommendations/voice-process",
        files={"audio": ("posting.pdf", b"%PDF", "application/pdf")}
    )
    assert response.status_code == 400


def test_voice_process_quota_exceeded():
    ai = MagicMock()
    ai.transcribe.side_effect = AIServiceError("OpenAI API quota exceeded, please try again later", 429)

    with patch("jobportal.api.routes.recommendation_routes.get_ai_client", return_value=ai):
        response = client.post(
            "/api/recommendations/voice-process",
            files={"audio": ("posting.webm", b"\x1a\x45\xdf\xa3audio", "audio/webm")}
        )

    assert response.status_code == 429
    ai.extract_fields.assert_not_called()
