"""Authentication middleware for FastAPI."""

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from teamaccess.auth.local import LocalAuthService
from teamaccess.auth.models import UserAccount
from teamaccess.logging_config import get_logger

logger = get_logger(__name__)

# Security scheme
security = HTTPBearer(auto_error=False)

# Auth service instance
auth_service = LocalAuthService()

AJAX_HEADER_VALUE = "XMLHttpRequest"


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> UserAccount | None:
    """Get current authenticated user.

    Args:
        request: FastAPI request
        credentials: Bearer token

    Returns:
        User account or None if not authenticated
    """
    if not credentials:
        return None

    user = auth_service.get_user_from_token(credentials.credentials)

    if user:
        request.state.user = user

    return user


def require_auth(user: UserAccount | None = Depends(get_current_user)) -> UserAccount:
    """Require authentication - raises 401 if not authenticated.

    Raises:
        HTTPException: 401 if not authenticated
    """
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_ajax(
    x_requested_with: str | None = Header(default=None, alias="X-Requested-With"),
) -> None:
    """Only let XMLHttpRequest calls through.

    Raises:
        HTTPException: 400 for non-ajax requests
    """
    if x_requested_with != AJAX_HEADER_VALUE:
        logger.debug("non_ajax_request_rejected", header=x_requested_with)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only ajax requests are allowed.",
        )
