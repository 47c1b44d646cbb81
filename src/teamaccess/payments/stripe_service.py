"""Stripe subscription lookups for plan limits."""

import stripe

from teamaccess.logging_config import get_logger
from teamaccess.settings import settings

logger = get_logger(__name__)

# Initialize Stripe
stripe.api_key = settings.stripe_secret_key


def is_configured() -> bool:
    """Whether a Stripe secret key is available."""
    return bool(settings.stripe_secret_key)


def get_team_member_limit(customer_id: str) -> int | None:
    """Read the team member limit from a customer's active subscription.

    The limit is stored on the subscribed price as metadata
    (``settings.stripe_limit_metadata_key``). When the customer has several
    active subscriptions the highest limit wins.

    Args:
        customer_id: Stripe customer ID

    Returns:
        Team member limit, or None if no active subscription carries one

    Raises:
        ValueError: If Stripe is not configured
        stripe.StripeError: If the Stripe API request fails
    """
    if not is_configured():
        raise ValueError("Stripe is not configured")

    subscriptions = stripe.Subscription.list(
        customer=customer_id,
        status="active",
        expand=["data.items.data.price"],
    )

    key = settings.stripe_limit_metadata_key
    limits = []
    for subscription in subscriptions.auto_paging_iter():
        for item in subscription["items"]["data"]:
            metadata = item["price"]["metadata"]
            if key not in metadata:
                continue
            try:
                limits.append(int(metadata[key]))
            except (TypeError, ValueError):
                logger.warning(
                    "stripe_team_member_limit_invalid",
                    customer_id=customer_id,
                    value=metadata[key],
                )

    logger.debug(
        "stripe_team_member_limits_fetched",
        customer_id=customer_id,
        limits=limits,
    )

    return max(limits) if limits else None
