"""Entitlement evaluation on top of the customer and subscription lookups."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..provider.client import BillingApiClient, StripeApiClient
from ..provider.models import SubscriptionRecord
from .models import (
    ENTITLED_STATUSES,
    EntitlementReason,
    EntitlementResult,
    LookupStatus,
    SubscriptionLookup,
)
from .resolvers import lookup_customer, lookup_subscriptions

logger = logging.getLogger("plangate.entitlements")


class EntitlementService:
    """Answers whether a customer holds a plan, product or price.

    ``has_plan``, ``has_plan_with_product`` and ``has_plan_with_price`` only
    look at whether a subscription exists and at the first one returned;
    they ignore its status. ``resolve_entitlement`` additionally requires the
    first subscription to be active or trialing. None of the operations
    raise for provider failures: an unreachable provider reads as "not
    subscribed".
    """

    def __init__(self, client: BillingApiClient) -> None:
        self._client = client

    def has_plan(self, email: str, credential: str) -> bool:
        lookup = self._subscriptions_for(email, credential)
        return bool(lookup.subscriptions)

    def has_plan_with_product(self, email: str, credential: str, product_id: str) -> bool:
        return self._first_matches(
            email, credential, lambda subscription: subscription.product_id == product_id
        )

    def has_plan_with_price(self, email: str, credential: str, price_id: str) -> bool:
        return self._first_matches(
            email, credential, lambda subscription: subscription.price_id == price_id
        )

    def resolve_entitlement(self, email: str, credential: str) -> EntitlementResult:
        customer_lookup = lookup_customer(self._client, email, credential)
        if customer_lookup.status == LookupStatus.PROVIDER_ERROR:
            return EntitlementResult.denied(EntitlementReason.PROVIDER_ERROR)
        if customer_lookup.customer is None:
            return EntitlementResult.denied(EntitlementReason.NO_CUSTOMER)

        lookup = lookup_subscriptions(self._client, customer_lookup.customer.id, credential)
        if lookup.status == LookupStatus.PROVIDER_ERROR:
            return EntitlementResult.denied(EntitlementReason.PROVIDER_ERROR)

        subscription = lookup.first
        if subscription is None:
            return EntitlementResult.denied(EntitlementReason.NO_SUBSCRIPTION)
        if subscription.status not in ENTITLED_STATUSES:
            logger.debug(
                "First subscription is not entitled",
                extra={"customer_id": customer_lookup.customer.id, "status": subscription.status.value},
            )
            return EntitlementResult.denied(EntitlementReason.INACTIVE_STATUS)
        return EntitlementResult.granted(subscription)

    def _subscriptions_for(self, email: str, credential: str) -> SubscriptionLookup:
        customer_lookup = lookup_customer(self._client, email, credential)
        if customer_lookup.customer is None:
            return SubscriptionLookup(status=customer_lookup.status, failure=customer_lookup.failure)
        return lookup_subscriptions(self._client, customer_lookup.customer.id, credential)

    def _first_matches(
        self,
        email: str,
        credential: str,
        predicate: Callable[[SubscriptionRecord], bool],
    ) -> bool:
        first = self._subscriptions_for(email, credential).first
        if first is None:
            return False
        return predicate(first)


def _service(client: Optional[BillingApiClient]) -> EntitlementService:
    return EntitlementService(client if client is not None else StripeApiClient())


def has_plan(email: str, credential: str, *, client: Optional[BillingApiClient] = None) -> bool:
    """Return whether the customer for ``email`` has any subscription."""

    return _service(client).has_plan(email, credential)


def has_plan_with_product(
    email: str,
    credential: str,
    product_id: str,
    *,
    client: Optional[BillingApiClient] = None,
) -> bool:
    """Return whether the customer's first subscription is for ``product_id``."""

    return _service(client).has_plan_with_product(email, credential, product_id)


def has_plan_with_price(
    email: str,
    credential: str,
    price_id: str,
    *,
    client: Optional[BillingApiClient] = None,
) -> bool:
    """Return whether the customer's first subscription uses ``price_id``."""

    return _service(client).has_plan_with_price(email, credential, price_id)


def resolve_entitlement(
    email: str,
    credential: str,
    *,
    client: Optional[BillingApiClient] = None,
) -> EntitlementResult:
    """Return the status-aware entitlement for ``email``."""

    return _service(client).resolve_entitlement(email, credential)


__all__ = [
    "EntitlementService",
    "has_plan",
    "has_plan_with_product",
    "has_plan_with_price",
    "resolve_entitlement",
]
