"""API routes exposing subscription checks and the plan catalog."""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from ..entitlements import list_plans
from ..feature_gates import EntitlementContext
from ..schemas.entitlements import (
    EntitlementResponse,
    PlanCheckResponse,
    PlanListResponse,
    PlanRow,
)
from ..services import entitlements as entitlements_service
from ..services.entitlements import BillingNotConfiguredError

router = APIRouter(prefix="/api/billing", tags=["billing"])


def _credential() -> str:
    try:
        return entitlements_service.get_credential()
    except BillingNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


@router.get("/entitlement", response_model=EntitlementResponse)
def get_entitlement(email: str = Query(..., min_length=3, max_length=320)) -> EntitlementResponse:
    credential = _credential()
    service = entitlements_service.get_entitlement_service()
    config = entitlements_service.get_billing_config()
    result = service.resolve_entitlement(email, credential)
    return EntitlementResponse.from_result(
        result,
        manage_url=entitlements_service.manage_plan_link(config, email),
        purchase_links=entitlements_service.purchase_links(config, email),
        contact_email=config.info_email,
    )


@router.get("/entitlement/products/{product_id}", response_model=PlanCheckResponse)
def check_product(
    product_id: str,
    email: str = Query(..., min_length=3, max_length=320),
) -> PlanCheckResponse:
    credential = _credential()
    service = entitlements_service.get_entitlement_service()
    return PlanCheckResponse(has_plan=service.has_plan_with_product(email, credential, product_id))


@router.get("/entitlement/prices/{price_id}", response_model=PlanCheckResponse)
def check_price(
    price_id: str,
    email: str = Query(..., min_length=3, max_length=320),
) -> PlanCheckResponse:
    credential = _credential()
    service = entitlements_service.get_entitlement_service()
    return PlanCheckResponse(has_plan=service.has_plan_with_price(email, credential, price_id))


@router.get("/access/{product_id}", response_model=EntitlementResponse)
def require_product_access(
    product_id: str,
    email: str = Query(..., min_length=3, max_length=320),
) -> EntitlementResponse:
    """Return the entitlement only when it covers ``product_id``.

    Denials raise :class:`FeatureGateError`, rendered by the application
    handler as 403 (or 503 when the provider could not be reached).
    """

    credential = _credential()
    service = entitlements_service.get_entitlement_service()
    result = service.resolve_entitlement(email, credential)
    EntitlementContext(result).require_product(product_id)
    config = entitlements_service.get_billing_config()
    return EntitlementResponse.from_result(
        result, manage_url=entitlements_service.manage_plan_link(config, email)
    )


@router.get("/plans", response_model=PlanListResponse)
def get_plans() -> PlanListResponse:
    credential = _credential()
    client = entitlements_service.get_provider_client()
    plans = list_plans(client, credential)
    return PlanListResponse(plans=[PlanRow.from_plan(plan) for plan in plans])
