"""Team members of owner accounts.

Owners link other accounts as team members and decide which of their
Facebook groups each member can access.
"""

from teamaccess.teams.models import OwnerToTeamMember, TeamMemberGroupAccess
from teamaccess.teams.service import TeamMemberError, TeamMemberService, team_member_service

__all__ = [
    "OwnerToTeamMember",
    "TeamMemberGroupAccess",
    "TeamMemberError",
    "TeamMemberService",
    "team_member_service",
]
