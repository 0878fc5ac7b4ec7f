"""Tests for the college endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from jobportal.core.auth import get_current_admin
from jobportal.main import app

client = TestClient(app)

COLLEGE = {
    "id": "65f0c0ffee0000000000c001",
    "name": "IIT Bombay",
    "category": "Engineering",
    "location": {"city": "Mumbai", "state": "Maharashtra", "country": "India"},
    "usage_count": 4,
    "is_verified": False
}


def test_search():
    mock_service = MagicMock()
    mock_service.search.return_value = [COLLEGE]

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.get("/api/colleges/search", params={"q": "bombay"})

    assert response.status_code == 200
    assert response.json()["count"] == 1
    mock_service.search.assert_called_once_with("bombay", limit=10)


def test_region():
    mock_service = MagicMock()
    mock_service.by_region.return_value = [COLLEGE]

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.get("/api/colleges/region/Maharashtra")

    assert response.status_code == 200
    mock_service.by_region.assert_called_once_with("Maharashtra", limit=20)


def test_add_new_college():
    mock_service = MagicMock()
    mock_service.find_or_create.return_value = ({**COLLEGE, "usage_count": 1}, True)

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.post("/api/colleges/add", json={"name": "IIT Bombay", "category": "Engineering"})

    assert response.status_code == 201
    assert response.json()["is_new"] is True
    mock_service.find_or_create.assert_called_once_with(
        "IIT Bombay", added_by=None, category="Engineering", location=None
    )


def test_add_existing_college():
    mock_service = MagicMock()
    mock_service.find_or_create.return_value = (COLLEGE, False)

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.post("/api/colleges/add", json={"name": "iit bombay"})

    assert response.status_code == 200
    assert response.json()["message"] == "College already exists, usage count updated"


def test_add_college_name_too_short():
    response = client.post("/api/colleges/add", json={"name": " x "})
    assert response.status_code == 422


def test_bulk_add():
    mock_service = MagicMock()
    mock_service.bulk_add.return_value = {"added": 2, "updated": 1, "errors": []}

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.post("/api/colleges/bulk-add", json={"colleges": ["A", "B", "C"]})

    assert response.status_code == 200
    assert response.json()["added"] == 2


def test_bulk_add_requires_colleges():
    response = client.post("/api/colleges/bulk-add", json={"colleges": []})
    assert response.status_code == 422


def test_stats():
    mock_service = MagicMock()
    mock_service.stats.return_value = {
        "total": 10, "verified": 2, "user_added": 8, "popular": 1,
        "categories": [{"name": "Engineering", "count": 7}],
        "top_states": [{"name": "Maharashtra", "count": 4}]
    }

    with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
        response = client.get("/api/colleges/stats")

    assert response.status_code == 200
    assert response.json()["categories"][0]["name"] == "Engineering"


def test_verify_requires_admin():
    response = client.put(f"/api/colleges/{COLLEGE['id']}/verify")
    assert response.status_code == 401


def test_verify_as_admin():
    mock_service = MagicMock()
    mock_service.set_verified.return_value = {**COLLEGE, "is_verified": True}
    app.dependency_overrides[get_current_admin] = lambda: {"username": "admin", "role": "admin"}

    try:
        with patch("jobportal.api.routes.college_routes.get_college_service", return_value=mock_service):
            response = client.put(f"/api/colleges/{COLLEGE['id']}/verify")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["is_verified"] is True
