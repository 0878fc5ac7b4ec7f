"""Tests for the admin dashboard endpoints."""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from jobportal.core.auth import get_current_admin
from jobportal.main import app
from jobportal.services.ai_client import AIServiceError

client = TestClient(app)

ROUTES = "jobportal.api.routes.admin_routes"


@pytest.fixture
def as_admin():
    app.dependency_overrides[get_current_admin] = lambda: {"username": "admin", "role": "admin"}
    yield
    app.dependency_overrides.clear()


def test_requires_token():
    response = client.get("/api/admin/jobs")
    assert response.status_code == 401


class TestAdminJobs:

    def test_list_with_stats(self, as_admin, job_doc):
        jobs = MagicMock()
        jobs.admin_list.return_value = (
            [job_doc],
            1,
            {"total_jobs": 4, "active_jobs": 3, "inactive_jobs": 1, "total_applications": 9}
        )

        with patch(f"{ROUTES}.get_job_service", return_value=jobs):
            response = client.get("/api/admin/jobs", params={"status": "active", "search": "acme"})

        assert response.status_code == 200
        data = response.json()
        assert data["stats"]["inactive_jobs"] == 1
        assert data["total_pages"] == 1
        jobs.admin_list.assert_called_once_with(
            page=1, limit=20, search="acme", status="active", industry=None, job_type=None
        )

    def test_invalid_status_filter(self, as_admin):
        response = client.get("/api/admin/jobs", params={"status": "archived"})
        assert response.status_code == 422

    def test_deactivate(self, as_admin, job_doc):
        jobs = MagicMock()
        jobs.set_active.return_value = {**job_doc, "is_active": False}

        with patch(f"{ROUTES}.get_job_service", return_value=jobs):
            response = client.put("/api/admin/jobs/JOB_1A2B3C4D/status", json={"is_active": False})

        assert response.status_code == 200
        assert response.json()["is_active"] is False
        jobs.set_active.assert_called_once_with("JOB_1A2B3C4D", False)

    def test_delete(self, as_admin, job_doc):
        jobs = MagicMock()
        jobs.delete.return_value = job_doc

        with patch(f"{ROUTES}.get_job_service", return_value=jobs):
            response = client.delete("/api/admin/jobs/JOB_1A2B3C4D")

        assert response.status_code == 200
        assert response.json()["message"] == "Job JOB_1A2B3C4D deleted successfully"

    def test_delete_missing(self, as_admin):
        jobs = MagicMock()
        jobs.delete.return_value = None

        with patch(f"{ROUTES}.get_job_service", return_value=jobs):
            response = client.delete("/api/admin/jobs/JOB_MISSING")

        assert response.status_code == 404


class TestAdminStudents:

    def test_search(self, as_admin, student_doc):
        students = MagicMock()
        students.get_by_phone.return_value = student_doc

        with patch(f"{ROUTES}.get_student_service", return_value=students):
            response = client.get("/api/admin/students/search/9876543210")

        assert response.status_code == 200
        assert response.json()["assessment_score"]["problemSolving"] == 80

    def test_search_missing(self, as_admin):
        students = MagicMock()
        students.get_by_phone.return_value = None

        with patch(f"{ROUTES}.get_student_service", return_value=students):
            response = client.get("/api/admin/students/search/0000000000")

        assert response.status_code == 404
        assert response.json()["detail"] == "No student found with phone number: 0000000000"

    def test_summary(self, as_admin, student_doc):
        students = MagicMock()
        students.get_by_phone.return_value = student_doc
        ai = MagicMock()
        ai.summarize_student.return_value = "Strong backend candidate."

        with patch(f"{ROUTES}.get_student_service", return_value=students), \
                patch(f"{ROUTES}.get_ai_client", return_value=ai):
            response = client.post("/api/admin/students/9876543210/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["summary"] == "Strong backend candidate."
        assert data["student"] == {"name": "Asha Rao", "phone": "9876543210", "email": "asha@example.com"}

        profile = ai.summarize_student.call_args[0][0]
        assert "- Name: Asha Rao" in profile
        assert "- Preferred Locations: Bangalore" in profile

    def test_summary_ai_unavailable(self, as_admin, student_doc):
        students = MagicMock()
        students.get_by_phone.return_value = student_doc
        ai = MagicMock()
        ai.summarize_student.side_effect = AIServiceError("AI features are not configured", status_code=503)

        with patch(f"{ROUTES}.get_student_service", return_value=students), \
                patch(f"{ROUTES}.get_ai_client", return_value=ai):
            response = client.post("/api/admin/students/9876543210/summary")

        assert response.status_code == 503
        assert response.json()["detail"] == "AI features are not configured"

    def test_delete(self, as_admin, student_doc):
        students = MagicMock()
        students.delete_by_phone.return_value = student_doc

        with patch(f"{ROUTES}.get_student_service", return_value=students):
            response = client.delete("/api/admin/students/9876543210")

        assert response.status_code == 200
        assert response.json()["message"] == "Student Asha Rao deleted successfully"
