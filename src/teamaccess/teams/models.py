"""Team member database models."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from teamaccess.storage.db import Base


class OwnerToTeamMember(Base):
    """Link between an owner and one of their team members.

    The owner may manage the member only while this row exists.
    """
    __tablename__ = "owner_to_team_members"
    __table_args__ = (
        UniqueConstraint("owner_id", "team_member_id", name="uq_owner_team_member"),
    )

    id = Column(Integer, primary_key=True)
    owner_id = Column(Integer, ForeignKey("user_accounts.id"), nullable=False, index=True)
    team_member_id = Column(Integer, ForeignKey("user_accounts.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner = relationship("UserAccount", foreign_keys=[owner_id], back_populates="team_member_links")
    team_member = relationship("UserAccount", foreign_keys=[team_member_id], back_populates="owner_links")
    group_access = relationship("TeamMemberGroupAccess", back_populates="owner_to_team_member")

    def __repr__(self):
        return f"<OwnerToTeamMember(owner={self.owner_id}, member={self.team_member_id})>"


class TeamMemberGroupAccess(Base):
    """Grants a team member access to one of the owner's Facebook groups."""
    __tablename__ = "team_member_group_access"
    __table_args__ = (
        UniqueConstraint(
            "owner_to_team_member_id", "facebook_group_id", name="uq_team_member_group_access"
        ),
    )

    id = Column(Integer, primary_key=True)
    owner_to_team_member_id = Column(
        Integer, ForeignKey("owner_to_team_members.id"), nullable=False, index=True
    )
    facebook_group_id = Column(Integer, ForeignKey("facebook_groups.id"), nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner_to_team_member = relationship("OwnerToTeamMember", back_populates="group_access")
    facebook_group = relationship("FacebookGroup")

    def __repr__(self):
        return (
            f"<TeamMemberGroupAccess(link={self.owner_to_team_member_id}, "
            f"group={self.facebook_group_id})>"
        )
