"""Service for an owner's Facebook groups."""

from teamaccess.auth.models import UserAccount
from teamaccess.groups.models import FacebookGroup
from teamaccess.logging_config import get_logger
from teamaccess.storage.db import db


class FacebookGroupError(Exception):
    """Facebook group operation error."""
    pass


class FacebookGroupService:
    """Lookups and ownership checks for Facebook groups."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def create_group(self, owner_id: int, fb_name: str, fb_id: str | None = None) -> FacebookGroup:
        """Register a Facebook group for an owner."""
        with db.session() as session:
            owner = session.query(UserAccount).filter(UserAccount.id == owner_id).first()
            if not owner:
                raise FacebookGroupError(f"User {owner_id} not found")

            group = FacebookGroup(user_id=owner_id, fb_name=fb_name, fb_id=fb_id)
            session.add(group)
            session.commit()
            session.refresh(group)

            self.logger.info("facebook_group_created", group_id=group.id, owner_id=owner_id)
            return group

    def get_owner_groups(self, owner_id: int) -> list[dict]:
        """All groups owned by the given account, oldest first."""
        with db.session() as session:
            groups = (
                session.query(FacebookGroup)
                .filter(FacebookGroup.user_id == owner_id)
                .order_by(FacebookGroup.id)
                .all()
            )
            return [
                {"id": group.id, "fb_id": group.fb_id, "fb_name": group.fb_name}
                for group in groups
            ]

    def foreign_group_ids(self, owner_id: int, group_ids: list[int]) -> list[int]:
        """Return the ids from ``group_ids`` that the owner does not own."""
        if not group_ids:
            return []

        with db.session() as session:
            owned = {
                row.id
                for row in session.query(FacebookGroup.id).filter(
                    FacebookGroup.user_id == owner_id,
                    FacebookGroup.id.in_(group_ids),
                )
            }
        return [group_id for group_id in group_ids if group_id not in owned]


# Singleton instance
facebook_group_service = FacebookGroupService()
