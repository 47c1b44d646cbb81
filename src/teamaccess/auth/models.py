"""Authentication models for user accounts."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr
from sqlalchemy import Boolean, Column, DateTime, Enum as SQLEnum, Integer, String
from sqlalchemy.orm import relationship

from teamaccess.storage.db import Base


class SubscriptionTier(str, Enum):
    """Subscription tier levels."""
    FREE = "free"      # No team members
    PRO = "pro"        # Small team
    AGENCY = "agency"  # Large team


class UserAccount(Base):
    """System account.

    The same account can be an owner (it has Facebook groups and links to
    team members) and a team member of another owner at the same time.
    """
    __tablename__ = "user_accounts"

    id = Column(Integer, primary_key=True)

    # Identity
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)

    # Auth
    password_hash = Column(String(255), nullable=True)  # Empty for members created by an owner

    # Billing
    subscription_tier = Column(SQLEnum(SubscriptionTier), default=SubscriptionTier.FREE)
    stripe_customer_id = Column(String(255), nullable=True, index=True)

    # Status (True = active)
    status = Column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    facebook_groups = relationship("FacebookGroup", back_populates="owner")
    team_member_links = relationship(
        "OwnerToTeamMember",
        foreign_keys="OwnerToTeamMember.owner_id",
        back_populates="owner",
    )
    owner_links = relationship(
        "OwnerToTeamMember",
        foreign_keys="OwnerToTeamMember.team_member_id",
        back_populates="team_member",
    )

    def __repr__(self):
        return f"<UserAccount(id={self.id}, email={self.email}, status={self.status})>"

    @property
    def status_label(self) -> str:
        """Human readable status."""
        return "Active" if self.status else "Inactive"


# Pydantic models for API
class User(BaseModel):
    """User data for API responses."""
    id: int
    email: str
    name: str | None
    status: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class UserLogin(BaseModel):
    """User login request."""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: User
