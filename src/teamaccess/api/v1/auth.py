"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from teamaccess.api.rate_limit import limiter
from teamaccess.auth.local import LocalAuthService
from teamaccess.auth.middleware import require_auth
from teamaccess.auth.models import TokenResponse, User, UserAccount, UserLogin
from teamaccess.logging_config import get_logger
from teamaccess.settings import settings

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)

auth_service = LocalAuthService()


@router.post("/login", response_model=TokenResponse)
@limiter.limit("10/minute")
async def login(request: Request, credentials: UserLogin):
    """Exchange email and password for a bearer token."""
    user = auth_service.authenticate(credentials.email, credentials.password)

    if not user:
        logger.info("login_failed", email=credentials.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        expires_in=settings.jwt_expire_hours * 3600,
        user=User.model_validate(user),
    )


@router.get("/me", response_model=User)
async def get_me(current_user: UserAccount = Depends(require_auth)):
    """Get the current user."""
    return User.model_validate(current_user)
