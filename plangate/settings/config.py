"""Billing provider configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import urlparse
import os

from ..app.provider.client import DEFAULT_API_BASE_URL


@dataclass(frozen=True)
class BillingConfig:
    """Configuration for entitlement checks against the billing provider."""

    secret_key: Optional[str]
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: Optional[float] = None
    manage_plan_url: Optional[str] = None
    purchase_links: Dict[str, str] = field(default_factory=dict)
    info_email: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_key)


def _to_optional_float(value: Optional[str], *, name: str) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive")
    return parsed


def _to_base_url(value: Optional[str]) -> str:
    url = (value or "").strip() or DEFAULT_API_BASE_URL
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"STRIPE_API_BASE_URL must be an absolute http(s) URL, got {url!r}")
    return url.rstrip("/")


def _parse_purchase_links(value: Optional[str]) -> Dict[str, str]:
    """Parse ``price_id=url`` pairs separated by commas."""

    links: Dict[str, str] = {}
    if not value:
        return links
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        price_id, separator, url = chunk.partition("=")
        if not separator or not price_id.strip() or not url.strip():
            raise ValueError(f"STRIPE_PURCHASE_LINKS entry must look like price_id=url, got {chunk!r}")
        links[price_id.strip()] = url.strip()
    return links


def load_billing_config(env: Optional[Mapping[str, str]] = None) -> BillingConfig:
    """Load :class:`BillingConfig` from environment variables."""

    env_mapping = os.environ if env is None else env

    secret_key = (env_mapping.get("STRIPE_SECRET_KEY") or "").strip() or None
    api_base_url = _to_base_url(env_mapping.get("STRIPE_API_BASE_URL"))
    timeout_seconds = _to_optional_float(
        env_mapping.get("STRIPE_TIMEOUT_SECONDS"), name="STRIPE_TIMEOUT_SECONDS"
    )
    manage_plan_url = (env_mapping.get("STRIPE_MANAGE_PLAN_URL") or "").strip() or None
    purchase_links = _parse_purchase_links(env_mapping.get("STRIPE_PURCHASE_LINKS"))
    info_email = (env_mapping.get("BILLING_INFO_EMAIL") or "").strip() or None

    return BillingConfig(
        secret_key=secret_key,
        api_base_url=api_base_url,
        timeout_seconds=timeout_seconds,
        manage_plan_url=manage_plan_url,
        purchase_links=purchase_links,
        info_email=info_email,
    )
