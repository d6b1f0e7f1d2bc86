"""Billing provider client and wire models."""

from .client import DEFAULT_API_BASE_URL, BillingApiClient, StripeApiClient
from .models import (
    CustomerRecord,
    FailureKind,
    PlanRecord,
    ProviderFailure,
    ProviderResponse,
    SubscriptionRecord,
    SubscriptionStatus,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "BillingApiClient",
    "StripeApiClient",
    "CustomerRecord",
    "FailureKind",
    "PlanRecord",
    "ProviderFailure",
    "ProviderResponse",
    "SubscriptionRecord",
    "SubscriptionStatus",
]
