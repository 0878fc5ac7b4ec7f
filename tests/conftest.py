"""Pytest configuration and fixtures."""

import os

# Settings are read once at import time, so the test environment must be in
# place before any jobportal module is imported.
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DB"] = "kaizen_job_portal_test"
os.environ["OPENAI_API_KEY"] = ""
os.environ["USE_AI_FITMENT"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD_HASH"] = ""
os.environ["DEBUG"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime

import pytest


@pytest.fixture
def student_doc():
    """A stored student profile as returned by StudentService."""
    return {
        "id": "65f0c0ffee0000000000a001",
        "name": "Asha Rao",
        "phone": "9876543210",
        "email": "asha@example.com",
        "education": {
            "degree": "BTech",
            "field": "Computer Science",
            "institution": "IIT Madras",
            "graduation_year": 2024
        },
        "skills": [
            {"name": "Python", "level": "Advanced"},
            {"name": "React", "level": "Intermediate"},
            {"name": "SQL", "level": "Intermediate"}
        ],
        "experience": {"years": 1, "internships": [], "projects": []},
        "interests": ["AI"],
        "career_goals": "Become a backend engineer",
        "preferred_location": ["Bangalore"],
        "salary_expectation": {"min": 0, "max": 0, "currency": "INR"},
        "assessment_score": {
            "technical": 85,
            "communication": 70,
            "problem_solving": 80,
            "teamwork": 75
        },
        "created_at": datetime(2024, 1, 10),
        "updated_at": datetime(2024, 1, 10)
    }


@pytest.fixture
def job_doc():
    """A stored job posting as returned by JobService."""
    return {
        "id": "65f0c0ffee0000000000b001",
        "job_id": "JOB_1A2B3C4D",
        "title": "Backend Developer",
        "company": {"name": "Acme Technologies"},
        "description": "Build APIs",
        "requirements": {
            "education": "Bachelor",
            "experience": {"min": 0, "max": 3},
            "skills": ["Python", "React.js", "Docker", "SQL"],
            "certifications": []
        },
        "responsibilities": ["Write services"],
        "benefits": [],
        "location": {"type": "On-site", "city": "Bangalore", "state": "Karnataka", "country": "India"},
        "salary": {"min": 600000, "max": 900000, "currency": "INR", "period": "Yearly"},
        "job_type": "Full-time",
        "industry": "Technology",
        "is_active": True,
        "application_count": 0,
        "created_at": datetime(2024, 2, 1),
        "updated_at": datetime(2024, 2, 1)
    }
