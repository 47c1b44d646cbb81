"""Authentication for team access."""

from teamaccess.auth.local import LocalAuthService
from teamaccess.auth.middleware import get_current_user, require_ajax, require_auth
from teamaccess.auth.models import SubscriptionTier, User, UserAccount

__all__ = [
    "User",
    "UserAccount",
    "SubscriptionTier",
    "LocalAuthService",
    "get_current_user",
    "require_ajax",
    "require_auth",
]
