"""Billing plan limits."""

from teamaccess.billing.plans import PlanLimitService, plan_limit_service

__all__ = ["PlanLimitService", "plan_limit_service"]
