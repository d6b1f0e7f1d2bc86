"""API schemas for entitlement endpoints."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..entitlements import EntitlementResult
from ..provider import PlanRecord


class EntitlementResponse(BaseModel):
    has_plan: bool = Field(alias="hasPlan")
    product_id: Optional[str] = Field(alias="productId", default=None)
    price_id: Optional[str] = Field(alias="priceId", default=None)
    reason: str
    verified: bool
    manage_url: Optional[str] = Field(alias="manageUrl", default=None)
    purchase_links: Dict[str, str] = Field(alias="purchaseLinks", default_factory=dict)
    contact_email: Optional[str] = Field(alias="contactEmail", default=None)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_result(
        cls,
        result: EntitlementResult,
        *,
        manage_url: Optional[str] = None,
        purchase_links: Optional[Dict[str, str]] = None,
        contact_email: Optional[str] = None,
    ) -> "EntitlementResponse":
        return cls(
            has_plan=result.has_plan,
            product_id=result.product_id,
            price_id=result.price_id,
            reason=result.reason.value,
            verified=result.verified,
            # The portal link only makes sense for existing subscribers.
            manage_url=manage_url if result.has_plan else None,
            purchase_links={} if result.has_plan else dict(purchase_links or {}),
            contact_email=None if result.has_plan else contact_email,
        )


class PlanCheckResponse(BaseModel):
    has_plan: bool = Field(alias="hasPlan")

    model_config = ConfigDict(populate_by_name=True)


class PlanRow(BaseModel):
    amount: Optional[int] = None
    currency: str
    price_id: str = Field(alias="priceId")
    product_id: str = Field(alias="productId")
    period: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_plan(cls, plan: PlanRecord) -> "PlanRow":
        return cls(**plan.to_row())


class PlanListResponse(BaseModel):
    plans: List[PlanRow]

    model_config = ConfigDict(populate_by_name=True)
