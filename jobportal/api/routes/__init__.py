"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobportal.api.routes.auth_routes import router as auth_router
from jobportal.api.routes.assessment_routes import router as assessment_router
from jobportal.api.routes.student_routes import router as student_router
from jobportal.api.routes.job_routes import router as job_router
from jobportal.api.routes.fitment_routes import router as fitment_router
from jobportal.api.routes.college_routes import router as college_router
from jobportal.api.routes.application_routes import router as application_router
from jobportal.api.routes.admin_routes import router as admin_router
from jobportal.api.routes.voice_routes import router as voice_router
from jobportal.api.routes.recommendation_routes import router as recommendation_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(assessment_router)
api_router.include_router(student_router)
api_router.include_router(job_router)
api_router.include_router(fitment_router)
api_router.include_router(college_router)
api_router.include_router(application_router)
api_router.include_router(admin_router)
api_router.include_router(voice_router)
api_router.include_router(recommendation_router)
