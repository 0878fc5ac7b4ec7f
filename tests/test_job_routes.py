"""Tests for the job endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from jobportal.main import app
from jobportal.services.fitment_service import FitmentService

client = TestClient(app)

JOB_PAYLOAD = {
    "title": "Backend Developer",
    "company": {"name": "Acme Technologies"},
    "description": "Build APIs",
    "requirements": {"education": "Bachelor", "experience": {"min": 0, "max": 3}, "skills": ["Python"]},
    "location": {"type": "Hybrid", "city": "Pune"},
    "job_type": "Full-time",
    "industry": "Technology"
}


def test_create_job(job_doc):
    mock_service = MagicMock()
    mock_service.create.return_value = job_doc

    with patch("jobportal.api.routes.job_routes.get_job_service", return_value=mock_service):
        response = client.post("/api/jobs", json=JOB_PAYLOAD)

    assert response.status_code == 201
    assert response.json()["job_id"] == "JOB_1A2B3C4D"

    stored = mock_service.create.call_args[0][0]
    assert stored["job_type"] == "Full-time"
    assert stored["location"]["type"] == "Hybrid"
    assert stored["requirements"]["experience"] == {"min": 0, "max": 3}


def test_create_job_invalid_type():
    response = client.post("/api/jobs", json={**JOB_PAYLOAD, "job_type": "Gig"})
    assert response.status_code == 422


def test_list_jobs_with_filters(job_doc):
    mock_service = MagicMock()
    mock_service.list_active.return_value = ([job_doc], 11)

    with patch("jobportal.api.routes.job_routes.get_job_service", return_value=mock_service):
        response = client.get("/api/jobs", params={
            "page": 2, "limit": 5, "industry": "Technology", "job_type": "Full-time", "location_type": "Remote"
        })

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 11
    assert data["total_pages"] == 3
    assert data["page"] == 2
    assert len(data["jobs"]) == 1
    mock_service.list_active.assert_called_once_with(
        page=2, limit=5, industry="Technology", job_type="Full-time", location_type="Remote"
    )


def test_get_job_not_found():
    mock_service = MagicMock()
    mock_service.get.return_value = None

    with patch("jobportal.api.routes.job_routes.get_job_service", return_value=mock_service):
        response = client.get("/api/jobs/JOB_MISSING0")

    assert response.status_code == 404


def test_update_job(job_doc):
    mock_service = MagicMock()
    mock_service.update.return_value = {**job_doc, "title": "Senior Backend Developer"}

    with patch("jobportal.api.routes.job_routes.get_job_service", return_value=mock_service):
        response = client.put("/api/jobs/JOB_1A2B3C4D", json={"title": "Senior Backend Developer"})

    assert response.status_code == 200
    assert response.json()["title"] == "Senior Backend Developer"
    mock_service.update.assert_called_once_with("JOB_1A2B3C4D", {"title": "Senior Backend Developer"})


def test_job_analytics(job_doc, student_doc):
    mock_job_service = MagicMock()
    mock_job_service.get.return_value = job_doc
    mock_student_service = MagicMock()
    mock_student_service.list_all.return_value = [student_doc]
    fitment_service = FitmentService(
        job_service=mock_job_service,
        student_service=mock_student_service,
        ai_client=MagicMock()
    )

    with patch("jobportal.api.routes.job_routes.get_job_service", return_value=mock_job_service), \
         patch("jobportal.api.routes.job_routes.get_fitment_service", return_value=fitment_service):
        response = client.get("/api/jobs/JOB_1A2B3C4D/analytics")

    assert response.status_code == 200
    data = response.json()
    assert data["company_name"] == "Acme Technologies"
    assert data["analytics"]["total_candidates"] == 1
    assert data["analytics"]["excellent_matches"] == 1
    assert data["analytics"]["top_candidates"][0]["fitment_score"] == 89
    assert data["analytics"]["top_candidates"][0]["assessment_score"]["problemSolving"] == 80
