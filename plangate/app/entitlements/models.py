"""Domain models for entitlement decisions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..provider.models import CustomerRecord, ProviderFailure, SubscriptionRecord, SubscriptionStatus

ENTITLED_STATUSES: FrozenSet[SubscriptionStatus] = frozenset(
    {SubscriptionStatus.ACTIVE, SubscriptionStatus.TRIALING}
)


class LookupStatus(str, Enum):
    """Tagged outcome of a provider lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class CustomerLookup:
    """Result of resolving an email to the customer of record."""

    status: LookupStatus
    customer: Optional[CustomerRecord] = None
    failure: Optional[ProviderFailure] = None


@dataclass(frozen=True)
class SubscriptionLookup:
    """Result of listing a customer's subscriptions in provider order."""

    status: LookupStatus
    subscriptions: Tuple[SubscriptionRecord, ...] = field(default_factory=tuple)
    failure: Optional[ProviderFailure] = None

    @property
    def first(self) -> Optional[SubscriptionRecord]:
        return self.subscriptions[0] if self.subscriptions else None


class EntitlementReason(str, Enum):
    """Why an entitlement was granted or denied."""

    ACTIVE = "active"
    NO_CUSTOMER = "no_customer"
    NO_SUBSCRIPTION = "no_subscription"
    INACTIVE_STATUS = "inactive_status"
    PROVIDER_ERROR = "provider_error"


class EntitlementResult(BaseModel):
    """Point-in-time entitlement decision for one customer.

    ``has_plan`` is only ever true when ``product_id`` was taken from a
    subscription in an entitled status. A denial caused by an unreachable or
    failing provider carries ``reason=PROVIDER_ERROR`` so callers can choose
    to fail open or closed; it must not be cached beyond the session.
    """

    has_plan: bool = False
    product_id: Optional[str] = None
    price_id: Optional[str] = None
    reason: EntitlementReason = EntitlementReason.NO_CUSTOMER

    model_config = ConfigDict(frozen=True)

    @property
    def verified(self) -> bool:
        return self.reason != EntitlementReason.PROVIDER_ERROR

    @classmethod
    def denied(cls, reason: EntitlementReason) -> "EntitlementResult":
        return cls(has_plan=False, reason=reason)

    @classmethod
    def granted(cls, subscription: SubscriptionRecord) -> "EntitlementResult":
        if subscription.status not in ENTITLED_STATUSES:
            raise ValueError(f"Subscription status {subscription.status.value!r} does not grant access")
        return cls(
            has_plan=True,
            product_id=subscription.product_id,
            price_id=subscription.price_id,
            reason=EntitlementReason.ACTIVE,
        )
