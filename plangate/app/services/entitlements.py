"""Application wiring for entitlement checks."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Optional
from urllib.parse import urlencode

from ...settings import BillingConfig, load_billing_config
from ..entitlements import EntitlementService
from ..provider import StripeApiClient

logger = logging.getLogger("plangate.billing")


class BillingNotConfiguredError(RuntimeError):
    """Raised when entitlement checks are requested without a secret key."""


@lru_cache(maxsize=1)
def get_billing_config() -> BillingConfig:
    return load_billing_config()


@lru_cache(maxsize=1)
def get_provider_client() -> StripeApiClient:
    config = get_billing_config()
    return StripeApiClient(
        api_base_url=config.api_base_url,
        timeout_seconds=config.timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_entitlement_service() -> EntitlementService:
    return EntitlementService(get_provider_client())


def get_credential() -> str:
    config = get_billing_config()
    if not config.is_configured:
        logger.error("STRIPE_SECRET_KEY is not configured; entitlement checks are unavailable")
        raise BillingNotConfiguredError("Billing provider credential is not configured")
    return config.secret_key


def with_prefilled_email(url: str, email: str) -> str:
    """Append the customer's email to an opaque checkout or portal link."""

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode({'prefilled_email': email})}"


def manage_plan_link(config: BillingConfig, email: str) -> Optional[str]:
    if not config.manage_plan_url:
        return None
    return with_prefilled_email(config.manage_plan_url, email)


def purchase_links(config: BillingConfig, email: str) -> Dict[str, str]:
    return {
        price_id: with_prefilled_email(url, email)
        for price_id, url in config.purchase_links.items()
    }


__all__ = [
    "BillingNotConfiguredError",
    "get_billing_config",
    "get_credential",
    "get_entitlement_service",
    "get_provider_client",
    "manage_plan_link",
    "purchase_links",
    "with_prefilled_email",
]
