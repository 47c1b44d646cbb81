"""Local authentication service (email/password + JWT)."""

from datetime import datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from teamaccess.auth.models import SubscriptionTier, UserAccount
from teamaccess.logging_config import get_logger
from teamaccess.settings import settings
from teamaccess.storage.db import db

logger = get_logger(__name__)

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

JWT_ALGORITHM = "HS256"


class LocalAuthService:
    """Authentication service for local (email/password) users."""

    def __init__(self):
        """Initialize auth service."""
        self.logger = get_logger(__name__)

    # ==================== PASSWORD ====================

    def _truncate_password(self, password: str) -> str:
        """Truncate password to 72 bytes (bcrypt limit)."""
        return password.encode('utf-8')[:72].decode('utf-8', errors='ignore')

    def hash_password(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain password

        Returns:
            Hashed password
        """
        return pwd_context.hash(self._truncate_password(password))

    def verify_password(self, password: str, hashed: str) -> bool:
        """Verify a password against hash."""
        return pwd_context.verify(self._truncate_password(password), hashed)

    # ==================== USER MANAGEMENT ====================

    def create_user(
        self,
        email: str,
        password: str | None = None,
        name: str | None = None,
        subscription_tier: SubscriptionTier = SubscriptionTier.FREE,
    ) -> UserAccount:
        """Create a new local user.

        Args:
            email: User email
            password: Plain password, or None for an account without login
            name: Optional name
            subscription_tier: Billing tier of the account

        Returns:
            Created user account

        Raises:
            ValueError: If email already exists
        """
        with db.session() as session:
            existing = session.query(UserAccount).filter(
                UserAccount.email == email.lower()
            ).first()

            if existing:
                raise ValueError("Email already registered")

            user = UserAccount(
                email=email.lower(),
                name=name,
                password_hash=self.hash_password(password) if password else None,
                subscription_tier=subscription_tier,
                status=True,
            )
            session.add(user)
            session.commit()
            session.refresh(user)

            self.logger.info("user_created", user_id=user.id, email=user.email)
            return user

    def authenticate(self, email: str, password: str) -> UserAccount | None:
        """Authenticate a user.

        Returns:
            User account if valid, None otherwise
        """
        with db.session() as session:
            user = session.query(UserAccount).filter(
                UserAccount.email == email.lower(),
                UserAccount.status == True,
            ).first()

            if not user or not user.password_hash:
                return None

            if not self.verify_password(password, user.password_hash):
                return None

            self.logger.info("user_authenticated", user_id=user.id)
            return user

    def get_user_by_id(self, user_id: int) -> UserAccount | None:
        """Get an active user by ID."""
        with db.session() as session:
            return session.query(UserAccount).filter(
                UserAccount.id == user_id,
                UserAccount.status == True,
            ).first()

    # ==================== JWT TOKENS ====================

    def create_access_token(
        self,
        user: UserAccount,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create JWT access token.

        Args:
            user: User account
            expires_delta: Optional expiration time

        Returns:
            JWT token string
        """
        if expires_delta is None:
            expires_delta = timedelta(hours=settings.jwt_expire_hours)

        payload = {
            "sub": str(user.id),
            "email": user.email,
            "exp": datetime.utcnow() + expires_delta,
            "iat": datetime.utcnow(),
        }

        return jwt.encode(payload, settings.jwt_secret_key, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> dict[str, Any] | None:
        """Verify and decode JWT token.

        Returns:
            Token payload or None if invalid
        """
        try:
            return jwt.decode(token, settings.jwt_secret_key, algorithms=[JWT_ALGORITHM])
        except JWTError as e:
            self.logger.debug("token_verification_failed", error=str(e))
            return None

    def get_user_from_token(self, token: str) -> UserAccount | None:
        """Get user from JWT token."""
        payload = self.verify_token(token)
        if not payload:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        return self.get_user_by_id(int(user_id))
