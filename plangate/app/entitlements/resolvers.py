"""Customer and subscription lookups against the billing provider.

Both lookups take the first element of the list the provider returns. The
provider's ordering is authoritative; no sorting (for example "most recently
created") is applied here.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..provider.client import BillingApiClient
from ..provider.models import (
    CustomerRecord,
    FailureKind,
    ProviderFailure,
    SubscriptionRecord,
)
from .models import CustomerLookup, LookupStatus, SubscriptionLookup

CUSTOMERS_PATH = "/customers"
SUBSCRIPTIONS_PATH = "/subscriptions"

logger = logging.getLogger("plangate.entitlements")


def lookup_customer(client: BillingApiClient, email: str, credential: str) -> CustomerLookup:
    """Resolve ``email`` to the first customer the provider lists for it."""

    if not email or not email.strip():
        return CustomerLookup(status=LookupStatus.NOT_FOUND)

    response = client.request(CUSTOMERS_PATH, {"email": email}, credential)
    if response.failure is not None:
        return CustomerLookup(status=LookupStatus.PROVIDER_ERROR, failure=response.failure)

    records = response.data
    if not records:
        logger.debug("No billing customer for email")
        return CustomerLookup(status=LookupStatus.NOT_FOUND)

    try:
        customer = CustomerRecord.model_validate(records[0])
    except ValidationError as exc:
        failure = ProviderFailure(kind=FailureKind.MALFORMED, message=str(exc))
        logger.warning("Unreadable customer record", extra={"error": failure.message})
        return CustomerLookup(status=LookupStatus.PROVIDER_ERROR, failure=failure)

    if len(records) > 1:
        logger.debug(
            "Multiple billing customers share an email, using the first",
            extra={"customer_id": customer.id, "match_count": len(records)},
        )
    return CustomerLookup(status=LookupStatus.FOUND, customer=customer)


def lookup_subscriptions(
    client: BillingApiClient,
    customer_id: str,
    credential: str,
) -> SubscriptionLookup:
    """List subscriptions for ``customer_id`` in provider order, any status."""

    response = client.request(SUBSCRIPTIONS_PATH, {"customer": customer_id}, credential)
    if response.failure is not None:
        return SubscriptionLookup(status=LookupStatus.PROVIDER_ERROR, failure=response.failure)

    subscriptions = tuple(
        SubscriptionRecord.from_provider(item) for item in response.data if isinstance(item, dict)
    )
    if not subscriptions:
        return SubscriptionLookup(status=LookupStatus.NOT_FOUND)
    return SubscriptionLookup(status=LookupStatus.FOUND, subscriptions=subscriptions)


def resolve_customer(client: BillingApiClient, email: str, credential: str) -> Optional[CustomerRecord]:
    """Return the customer of record, or ``None`` when absent or unreachable."""

    return lookup_customer(client, email, credential).customer


def resolve_subscriptions(
    client: BillingApiClient,
    customer_id: str,
    credential: str,
) -> List[SubscriptionRecord]:
    """Return the customer's subscriptions; failures collapse to an empty list."""

    return list(lookup_subscriptions(client, customer_id, credential).subscriptions)


__all__ = [
    "CUSTOMERS_PATH",
    "SUBSCRIPTIONS_PATH",
    "lookup_customer",
    "lookup_subscriptions",
    "resolve_customer",
    "resolve_subscriptions",
]
