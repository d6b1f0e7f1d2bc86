"""Entitlement resolution against the billing provider."""

from .catalog import PLANS_PATH, list_plans, plans_table
from .models import (
    ENTITLED_STATUSES,
    CustomerLookup,
    EntitlementReason,
    EntitlementResult,
    LookupStatus,
    SubscriptionLookup,
)
from .resolvers import (
    lookup_customer,
    lookup_subscriptions,
    resolve_customer,
    resolve_subscriptions,
)
from .service import (
    EntitlementService,
    has_plan,
    has_plan_with_price,
    has_plan_with_product,
    resolve_entitlement,
)

__all__ = [
    "PLANS_PATH",
    "list_plans",
    "plans_table",
    "ENTITLED_STATUSES",
    "CustomerLookup",
    "EntitlementReason",
    "EntitlementResult",
    "LookupStatus",
    "SubscriptionLookup",
    "lookup_customer",
    "lookup_subscriptions",
    "resolve_customer",
    "resolve_subscriptions",
    "EntitlementService",
    "has_plan",
    "has_plan_with_price",
    "has_plan_with_product",
    "resolve_entitlement",
]
