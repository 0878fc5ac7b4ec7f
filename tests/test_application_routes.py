"""Tests for applications and saved jobs."""

from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from jobportal.main import app
from jobportal.services.fitment_service import FitmentService

client = TestClient(app)

ROUTES = "jobportal.api.routes.application_routes"


def make_application(job_id="JOB_1A2B3C4D", job_title="Backend Developer", score=89):
    return {
        "id": f"app-{job_id}",
        "student_phone": "9876543210",
        "student_name": "Asha Rao",
        "student_email": "asha@example.com",
        "job_id": job_id,
        "job_title": job_title,
        "company_name": "Acme Technologies",
        "fitment_score": score,
        "status": "applied",
        "student_details": {"skills": ["Python"]},
        "applied_at": datetime(2024, 3, 1)
    }


@pytest.fixture
def services(student_doc, job_doc):
    students = MagicMock()
    students.get_by_phone.return_value = student_doc
    jobs = MagicMock()
    jobs.get.return_value = job_doc
    applications = MagicMock()
    applications.has_applied.return_value = False
    applications.apply.return_value = make_application()
    fitment = FitmentService(job_service=jobs, student_service=students, ai_client=MagicMock())

    with patch(f"{ROUTES}.get_student_service", return_value=students), \
            patch(f"{ROUTES}.get_job_service", return_value=jobs), \
            patch(f"{ROUTES}.get_application_service", return_value=applications), \
            patch(f"{ROUTES}.get_fitment_service", return_value=fitment):
        yield {"students": students, "jobs": jobs, "applications": applications}


class TestApply:

    def test_apply_computes_fitment(self, services, student_doc, job_doc):
        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D"
        })

        assert response.status_code == 201
        assert response.json()["status"] == "applied"
        services["applications"].apply.assert_called_once_with(student_doc, job_doc, 89)
        services["jobs"].increment_application_count.assert_called_once_with("JOB_1A2B3C4D")

    def test_apply_keeps_client_score(self, services, student_doc, job_doc):
        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D", "fitment_score": 72
        })

        assert response.status_code == 201
        services["applications"].apply.assert_called_once_with(student_doc, job_doc, 72)

    def test_unknown_student(self, services):
        services["students"].get_by_phone.return_value = None

        response = client.post("/api/job-applications/apply", json={
            "student_phone": "0000000000", "job_id": "JOB_1A2B3C4D"
        })

        assert response.status_code == 404
        assert response.json()["detail"] == "Student not found. Please complete assessment first."

    def test_unknown_job(self, services):
        services["jobs"].get.return_value = None

        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_MISSING"
        })

        assert response.status_code == 404

    def test_already_applied(self, services):
        services["applications"].has_applied.return_value = True

        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D"
        })

        assert response.status_code == 400
        services["applications"].apply.assert_not_called()
        services["jobs"].increment_application_count.assert_not_called()

    def test_duplicate_insert_race(self, services):
        services["applications"].apply.return_value = None

        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D"
        })

        assert response.status_code == 400
        services["jobs"].increment_application_count.assert_not_called()

    def test_score_out_of_range(self):
        response = client.post("/api/job-applications/apply", json={
            "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D", "fitment_score": 120
        })
        assert response.status_code == 422


SAVED = {
    "id": "saved-1",
    "student_phone": "9876543210",
    "job_id": "JOB_1A2B3C4D",
    "job_title": "Backend Developer",
    "company_name": "Acme Technologies",
    "job_details": {"job_type": "Full-time"},
    "saved_at": datetime(2024, 3, 2)
}


class TestSavedJobs:

    def test_save(self, job_doc):
        jobs = MagicMock()
        jobs.get.return_value = job_doc
        saved = MagicMock()
        saved.save.return_value = SAVED

        with patch(f"{ROUTES}.get_job_service", return_value=jobs), \
                patch(f"{ROUTES}.get_saved_job_service", return_value=saved):
            response = client.post("/api/job-applications/save", json={
                "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D"
            })

        assert response.status_code == 201
        saved.save.assert_called_once_with("9876543210", job_doc)

    def test_save_twice(self, job_doc):
        jobs = MagicMock()
        jobs.get.return_value = job_doc
        saved = MagicMock()
        saved.save.return_value = None

        with patch(f"{ROUTES}.get_job_service", return_value=jobs), \
                patch(f"{ROUTES}.get_saved_job_service", return_value=saved):
            response = client.post("/api/job-applications/save", json={
                "student_phone": "9876543210", "job_id": "JOB_1A2B3C4D"
            })

        assert response.status_code == 400
        assert response.json()["detail"] == "Job already saved"

    def test_save_unknown_job(self):
        jobs = MagicMock()
        jobs.get.return_value = None

        with patch(f"{ROUTES}.get_job_service", return_value=jobs):
            response = client.post("/api/job-applications/save", json={
                "student_phone": "9876543210", "job_id": "JOB_MISSING"
            })

        assert response.status_code == 404

    def test_list_saved(self):
        saved = MagicMock()
        saved.list_for_student.return_value = [SAVED]

        with patch(f"{ROUTES}.get_saved_job_service", return_value=saved):
            response = client.get("/api/job-applications/saved/9876543210")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_remove_saved(self):
        saved = MagicMock()
        saved.remove.return_value = SAVED

        with patch(f"{ROUTES}.get_saved_job_service", return_value=saved):
            response = client.delete("/api/job-applications/saved/9876543210/JOB_1A2B3C4D")

        assert response.status_code == 200
        assert response.json()["message"] == "Backend Developer removed from saved list"

    def test_remove_missing(self):
        saved = MagicMock()
        saved.remove.return_value = None

        with patch(f"{ROUTES}.get_saved_job_service", return_value=saved):
            response = client.delete("/api/job-applications/saved/9876543210/JOB_MISSING")

        assert response.status_code == 404
        assert response.json()["detail"] == "Saved job not found"


def test_company_applications_grouped_by_job():
    applications = MagicMock()
    applications.list_for_company.return_value = [
        make_application("JOB_A", "Backend Developer"),
        make_application("JOB_B", "Data Analyst", score=55),
        {**make_application("JOB_A", "Backend Developer"), "id": "app-2", "student_phone": "9123456780"},
    ]

    with patch(f"{ROUTES}.get_application_service", return_value=applications):
        response = client.get("/api/job-applications/company/acme")

    assert response.status_code == 200
    data = response.json()
    assert data["total_applications"] == 3
    groups = {g["job_id"]: len(g["applications"]) for g in data["applications_by_job"]}
    assert groups == {"JOB_A": 2, "JOB_B": 1}
    assert [g["job_id"] for g in data["applications_by_job"]] == ["JOB_A", "JOB_B"]
