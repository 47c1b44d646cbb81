"""Team member service for owner accounts."""

from typing import Any

from sqlalchemy import case, or_
from sqlalchemy.orm import Session

from teamaccess.auth.models import User, UserAccount
from teamaccess.groups.models import FacebookGroup
from teamaccess.logging_config import get_logger
from teamaccess.storage.db import db
from teamaccess.teams.models import OwnerToTeamMember, TeamMemberGroupAccess

# DataTables column name -> sort expression. Status sorts by its label.
ORDERABLE_FIELDS = {
    "name": UserAccount.name,
    "email": UserAccount.email,
    "status": case((UserAccount.status.is_(True), 0), else_=1),
}


class TeamMemberError(Exception):
    """Team member operation error."""
    pass


def _unique(ids: list[int] | None) -> list[int]:
    """Drop duplicates while keeping the submitted order."""
    return list(dict.fromkeys(ids or []))


def _serialize_user(user: UserAccount) -> dict[str, Any]:
    return User.model_validate(user).model_dump(mode="json")


class TeamMemberService:
    """Service for managing an owner's team members."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def _get_link(self, session: Session, owner_id: int, member_id: int) -> OwnerToTeamMember | None:
        return session.query(OwnerToTeamMember).filter(
            OwnerToTeamMember.owner_id == owner_id,
            OwnerToTeamMember.team_member_id == member_id,
        ).first()

    def get_team_member(self, owner_id: int, member_id: int) -> dict[str, Any] | None:
        """Get a team member with the ids of the groups they can access.

        Returns:
            ``{"user": ..., "fb_id": [...]}`` or None if the member is not on
            the owner's team
        """
        with db.session() as session:
            link = self._get_link(session, owner_id, member_id)
            if not link:
                return None

            group_ids = [
                row.facebook_group_id
                for row in session.query(TeamMemberGroupAccess.facebook_group_id)
                .filter(TeamMemberGroupAccess.owner_to_team_member_id == link.id)
                .order_by(TeamMemberGroupAccess.facebook_group_id)
            ]

            return {
                "user": _serialize_user(link.team_member),
                "fb_id": group_ids,
            }

    def list_team_members(
        self,
        owner_id: int,
        name: str | None = None,
        email: str | None = None,
        start: int = 0,
        length: int | None = None,
        search: str | None = None,
        order: list[tuple[str, str]] | None = None,
    ) -> tuple[int, int, list[dict[str, Any]]]:
        """Page through the owner's team members.

        Args:
            owner_id: Owner user ID
            name: Optional substring filter on the member name
            email: Optional substring filter on the member email
            start: Offset of the first row
            length: Page size, None for all rows
            search: Optional substring matched against name or email
            order: ``(field, "asc"|"desc")`` pairs; fields outside
                ``ORDERABLE_FIELDS`` are ignored

        Returns:
            (total members, members matching the filters, rows)
        """
        with db.session() as session:
            base = (
                session.query(UserAccount, OwnerToTeamMember.id)
                .join(OwnerToTeamMember, OwnerToTeamMember.team_member_id == UserAccount.id)
                .filter(OwnerToTeamMember.owner_id == owner_id)
            )
            total = base.count()

            filtered_query = base
            if name:
                filtered_query = filtered_query.filter(UserAccount.name.icontains(name, autoescape=True))
            if email:
                filtered_query = filtered_query.filter(UserAccount.email.icontains(email, autoescape=True))
            if search:
                filtered_query = filtered_query.filter(or_(
                    UserAccount.name.icontains(search, autoescape=True),
                    UserAccount.email.icontains(search, autoescape=True),
                ))
            filtered = filtered_query.count() if (name or email or search) else total

            sort = []
            for field, direction in order or []:
                column = ORDERABLE_FIELDS.get(field)
                if column is not None:
                    sort.append(column.desc() if direction == "desc" else column.asc())
            sort.append(UserAccount.id.asc())

            page_query = filtered_query.order_by(*sort).offset(start)
            if length is not None:
                page_query = page_query.limit(length)
            page = page_query.all()

            link_ids = [link_id for _, link_id in page]
            group_names: dict[int, list[str]] = {link_id: [] for link_id in link_ids}
            if link_ids:
                rows = (
                    session.query(TeamMemberGroupAccess.owner_to_team_member_id, FacebookGroup.fb_name)
                    .join(FacebookGroup, FacebookGroup.id == TeamMemberGroupAccess.facebook_group_id)
                    .filter(TeamMemberGroupAccess.owner_to_team_member_id.in_(link_ids))
                    .order_by(FacebookGroup.id)
                )
                for link_id, fb_name in rows:
                    group_names[link_id].append(fb_name)

            data = []
            for user, link_id in page:
                row = _serialize_user(user)
                row["status"] = user.status_label
                row["facebook_groups_id"] = group_names[link_id]
                data.append(row)

            return total, filtered, data

    def add_team_member(self, owner_id: int, data: dict[str, Any]) -> dict[str, Any]:
        """Add a user to the owner's team and grant initial group access.

        An existing account with the same email is reused; otherwise a new
        active account without a password is created.

        Args:
            owner_id: Owner user ID
            data: ``email``, ``name`` and optional ``facebook_groups_id``

        Returns:
            ``{"success": bool, "message": str}``
        """
        email = data["email"].strip().lower()
        group_ids = _unique(data.get("facebook_groups_id"))

        with db.session() as session:
            member = session.query(UserAccount).filter(UserAccount.email == email).first()

            if member and member.id == owner_id:
                return {"success": False, "message": "You cannot add yourself as a team member."}

            if member and self._get_link(session, owner_id, member.id):
                return {"success": False, "message": "This user is already part of your team."}

            if not member:
                member = UserAccount(email=email, name=data.get("name"), status=True)
                session.add(member)
                session.flush()
                self.logger.info("team_member_account_created", user_id=member.id, owner_id=owner_id)

            link = OwnerToTeamMember(owner_id=owner_id, team_member_id=member.id)
            session.add(link)
            session.flush()

            for group_id in group_ids:
                session.add(TeamMemberGroupAccess(owner_to_team_member_id=link.id, facebook_group_id=group_id))

            session.commit()

            self.logger.info(
                "team_member_added",
                owner_id=owner_id,
                team_member_id=member.id,
                groups=group_ids,
            )

            return {"success": True, "message": "Team Member Added Successfully."}

    def sync_group_access(self, owner_id: int, member_id: int, group_ids: list[int] | None) -> list[int]:
        """Replace the member's group access with exactly ``group_ids``.

        Returns:
            The group ids the member can access afterwards

        Raises:
            TeamMemberError: If the member is not on the owner's team
        """
        wanted = _unique(group_ids)

        with db.session() as session:
            link = self._get_link(session, owner_id, member_id)
            if not link:
                raise TeamMemberError("This user is not currently part of your team.")

            existing = {
                access.facebook_group_id: access
                for access in session.query(TeamMemberGroupAccess).filter(
                    TeamMemberGroupAccess.owner_to_team_member_id == link.id
                )
            }

            removed = [group_id for group_id in existing if group_id not in wanted]
            added = [group_id for group_id in wanted if group_id not in existing]

            for group_id in removed:
                session.delete(existing[group_id])
            for group_id in added:
                session.add(TeamMemberGroupAccess(owner_to_team_member_id=link.id, facebook_group_id=group_id))

            session.commit()

            self.logger.info(
                "team_member_access_updated",
                owner_id=owner_id,
                team_member_id=member_id,
                added=added,
                removed=removed,
            )

            return wanted

    def remove_team_member(self, owner_id: int, member_id: int) -> None:
        """Remove a member from the owner's team.

        The group access rows and the link are deleted in one transaction.

        Raises:
            TeamMemberError: If the member is not on the owner's team
        """
        with db.session() as session:
            link = self._get_link(session, owner_id, member_id)
            if not link:
                raise TeamMemberError("Team member not found")

            deleted_access = session.query(TeamMemberGroupAccess).filter(
                TeamMemberGroupAccess.owner_to_team_member_id == link.id
            ).delete(synchronize_session=False)

            session.delete(link)
            session.commit()

            self.logger.info(
                "team_member_removed",
                owner_id=owner_id,
                team_member_id=member_id,
                access_rows_deleted=deleted_access,
            )

    def check_email(self, owner_id: int, email: str) -> tuple[int, dict[str, Any] | None]:
        """Count the owner's links to the account with this email.

        Returns:
            (link count, the account or None)
        """
        with db.session() as session:
            user = session.query(UserAccount).filter(
                UserAccount.email == email.strip().lower()
            ).first()

            if not user:
                return 0, None

            count = session.query(OwnerToTeamMember).filter(
                OwnerToTeamMember.owner_id == owner_id,
                OwnerToTeamMember.team_member_id == user.id,
            ).count()

            return count, _serialize_user(user)

    def suggest_emails(self, search: str) -> list[dict[str, Any]]:
        """Accounts whose email contains ``search``, sorted by email."""
        with db.session() as session:
            users = (
                session.query(UserAccount.id, UserAccount.email)
                .filter(UserAccount.email.icontains(search, autoescape=True))
                .order_by(UserAccount.email.asc())
                .all()
            )
            return [{"value": user.id, "label": user.email} for user in users]


# Singleton instance
team_member_service = TeamMemberService()
