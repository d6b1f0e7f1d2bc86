"""Helpers enforcing subscription checks on API and service layers."""
from __future__ import annotations

from ..entitlements import EntitlementResult
from .exceptions import FeatureGateError


def require_subscription(
    result: EntitlementResult,
    *,
    error_code: str = "subscription_required",
    message: str | None = None,
) -> None:
    """Ensure the entitlement grants access before proceeding.

    Parameters
    ----------
    result:
        Decision returned by :meth:`EntitlementService.resolve_entitlement`.
    error_code:
        Code surfaced when access is denied. Defaults to
        ``"subscription_required"``.
    message:
        Optional human-friendly explanation for the denial.

    A denial caused by a provider failure carries ``verified=False`` and is
    reported with status 503.
    """

    if result.has_plan:
        return

    if not result.verified:
        raise FeatureGateError.from_result(
            result,
            code="subscription_unverified",
            message=message or "Subscription status could not be verified.",
        )

    raise FeatureGateError.from_result(
        result,
        code=error_code,
        message=message or "An active subscription is required.",
    )


def require_product(
    result: EntitlementResult,
    product_id: str,
    *,
    error_code: str = "product_required",
    message: str | None = None,
) -> None:
    """Ensure the entitlement grants access to ``product_id``."""

    require_subscription(result, message=message)
    if result.product_id != product_id:
        raise FeatureGateError.from_result(
            result,
            code=error_code,
            message=message or f"A subscription to product '{product_id}' is required.",
            required_product=product_id,
            product_id=result.product_id,
        )
