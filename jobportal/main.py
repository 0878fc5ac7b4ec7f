"""
Kaizen Job Portal - Main Application

FastAPI backend with:
- MongoDB for students, jobs, colleges, saved jobs and applications
- Rule-based assessment scoring and job fitment
- OpenAI for voice input, AI fitment and career recommendations
- JWT authentication for the admin dashboard

Run: uvicorn jobportal.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobportal import __version__
from jobportal.api import api_router
from jobportal.core.config import get_settings
from jobportal.core.logging import get_logger
from jobportal.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Kaizen Job Portal",
    description="""
    Assessment-driven job portal.

    ## Features
    - **Assessment**: Rule-based scoring of education, core values, work-style sliders and behavioral answers
    - **Students**: Assessment profiles keyed by phone number
    - **Jobs**: Postings with filters, per-job candidate analytics
    - **Fitment**: Student/job compatibility (rule-based, optional AI)
    - **Colleges**: Autocomplete directory with usage tracking
    - **Applications**: Apply, save and review applications by company
    - **Voice**: Speech to text and form-field extraction
    - **Admin**: JWT-protected job and student management
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        # The API still starts; requests touching MongoDB will fail individually
        logger.error(f"MongoDB index initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Kaizen Job Portal", "version": __version__}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
        "ai": "configured" if settings.ai_enabled else "not configured"
    }
