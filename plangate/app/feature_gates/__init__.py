"""Feature gating utilities built on entitlement decisions."""
from .context import EntitlementContext
from .enforcement import require_product, require_subscription
from .exceptions import FeatureGateError

__all__ = [
    "EntitlementContext",
    "FeatureGateError",
    "require_product",
    "require_subscription",
]
