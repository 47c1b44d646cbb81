"""Plan limits for team members."""

import stripe

from teamaccess.auth.models import SubscriptionTier, UserAccount
from teamaccess.logging_config import get_logger
from teamaccess.payments import stripe_service
from teamaccess.settings import settings
from teamaccess.storage.db import db
from teamaccess.teams.models import OwnerToTeamMember


class PlanLimitService:
    """Decides whether an owner may add more team members."""

    def __init__(self):
        self.logger = get_logger(__name__)

    def _tier_limit(self, tier: SubscriptionTier | None) -> int:
        tier_value = (tier or SubscriptionTier.FREE).value
        return settings.team_member_limits.get(tier_value, 0)

    def get_team_member_limit(self, owner: UserAccount) -> int:
        """Maximum number of team members the owner's plan allows.

        The active Stripe subscription is authoritative when the owner is a
        Stripe customer; the subscription tier table is used otherwise, or
        when the Stripe lookup fails.
        """
        if owner.stripe_customer_id and stripe_service.is_configured():
            try:
                limit = stripe_service.get_team_member_limit(owner.stripe_customer_id)
            except (stripe.StripeError, ValueError) as e:
                self.logger.warning(
                    "stripe_plan_lookup_failed",
                    owner_id=owner.id,
                    error=str(e),
                )
            else:
                if limit is not None:
                    return limit

        return self._tier_limit(owner.subscription_tier)

    def count_team_members(self, owner_id: int) -> int:
        """Number of members currently linked to the owner."""
        with db.session() as session:
            return session.query(OwnerToTeamMember).filter(
                OwnerToTeamMember.owner_id == owner_id
            ).count()

    def can_add_team_members(self, owner: UserAccount) -> bool:
        """Whether the owner has capacity for one more team member."""
        limit = self.get_team_member_limit(owner)
        count = self.count_team_members(owner.id)

        self.logger.debug(
            "team_member_capacity_checked",
            owner_id=owner.id,
            count=count,
            limit=limit,
        )

        return count < limit


# Singleton instance
plan_limit_service = PlanLimitService()
