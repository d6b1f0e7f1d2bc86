"""Convenience wrapper around an entitlement decision for gating content."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..entitlements import EntitlementResult
from .enforcement import require_product, require_subscription


@dataclass(frozen=True)
class EntitlementContext:
    """Facade exposing gating-centric helpers for one customer's entitlement."""

    result: EntitlementResult

    @property
    def has_plan(self) -> bool:
        return self.result.has_plan

    @property
    def product_id(self) -> Optional[str]:
        return self.result.product_id

    @property
    def price_id(self) -> Optional[str]:
        return self.result.price_id

    @property
    def verified(self) -> bool:
        return self.result.verified

    def allows_product(self, product_id: str) -> bool:
        return self.result.has_plan and self.result.product_id == product_id

    def allows_price(self, price_id: str) -> bool:
        return self.result.has_plan and self.result.price_id == price_id

    def require_plan(self) -> None:
        """Raise unless the customer holds an entitled subscription."""

        require_subscription(self.result)

    def require_product(self, product_id: str) -> None:
        """Raise unless the entitled subscription is for ``product_id``."""

        require_product(self.result, product_id)
