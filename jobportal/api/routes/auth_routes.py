"""
Authentication Routes

POST /auth/admin/login - Admin login, returns JWT token
"""

from fastapi import APIRouter, HTTPException

from jobportal.core.auth import ADMIN_ROLE, authenticate_admin, create_access_token
from jobportal.core.config import get_settings
from jobportal.core.logging import get_logger
from jobportal.schemas.schemas import AdminLoginRequest, TokenResponse

settings = get_settings()
logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(request: AdminLoginRequest):
    """
    Login as admin and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    if not authenticate_admin(request.username, request.password):
        logger.warning(f"Failed admin login for '{request.username}'")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    token = create_access_token(data={"sub": request.username, "role": ADMIN_ROLE})
    return TokenResponse(access_token=token, expires_in=settings.jwt_expire_minutes * 60)
