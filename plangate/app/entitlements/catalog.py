"""Plan catalog listing formatted from the provider's plans resource."""
from __future__ import annotations

import logging
from typing import Dict, List

from ..provider.client import BillingApiClient
from ..provider.models import PlanRecord

PLANS_PATH = "/plans"
_MISSING_PLANS_MESSAGE = "Plans data not found or an error occurred during the API request."

logger = logging.getLogger("plangate.catalog")


def list_plans(client: BillingApiClient, credential: str) -> List[PlanRecord]:
    """Return plans in provider order, or an empty list with a diagnostic."""

    response = client.request(PLANS_PATH, {}, credential)
    raw_plans = response.data
    if not raw_plans:
        logger.warning(
            "%s",
            response.error_message or _MISSING_PLANS_MESSAGE,
            extra={"billing_resource": PLANS_PATH},
        )
        return []

    plans: List[PlanRecord] = []
    for raw_plan in raw_plans:
        if not isinstance(raw_plan, dict):
            continue
        try:
            plans.append(PlanRecord.from_provider(raw_plan))
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Skipping unreadable plan %s",
                raw_plan.get("id"),
                extra={"error": str(exc)},
            )
    if not plans:
        logger.warning("%s", _MISSING_PLANS_MESSAGE, extra={"billing_resource": PLANS_PATH})
    return plans


def plans_table(client: BillingApiClient, credential: str) -> List[Dict[str, object]]:
    """Return the plan catalog as flat rows."""

    return [plan.to_row() for plan in list_plans(client, credential)]


__all__ = ["PLANS_PATH", "list_plans", "plans_table"]
