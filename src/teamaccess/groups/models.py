"""Facebook group database models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from teamaccess.storage.db import Base


class FacebookGroup(Base):
    """Facebook group owned by an account.

    Owners grant team members access to a subset of these.
    """
    __tablename__ = "facebook_groups"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("user_accounts.id"), nullable=False, index=True)

    # Facebook identity
    fb_id = Column(String(64), nullable=True, index=True)
    fb_name = Column(String(255), nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner = relationship("UserAccount", back_populates="facebook_groups")

    def __repr__(self):
        return f"<FacebookGroup(id={self.id}, name={self.fb_name}, owner={self.user_id})>"
