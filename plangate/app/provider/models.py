"""Wire-level models for responses returned by the billing provider."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, computed_field


class FailureKind(str, Enum):
    """Categories of provider request failures."""

    TRANSPORT = "transport"
    PROVIDER = "provider"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ProviderFailure:
    """Describes why a provider request produced no usable data."""

    kind: FailureKind
    message: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class ProviderResponse:
    """Outcome of a single provider request: a parsed body or a failure."""

    body: Optional[Dict[str, Any]] = None
    failure: Optional[ProviderFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.body is not None

    @property
    def data(self) -> List[Any]:
        """Return the ``data`` array of a list resource, empty when absent."""

        if not self.ok:
            return []
        items = self.body.get("data")  # type: ignore[union-attr]
        return list(items) if isinstance(items, list) else []

    @property
    def error_message(self) -> Optional[str]:
        if self.failure is None:
            return None
        return self.failure.message

    @classmethod
    def succeeded(cls, body: Dict[str, Any]) -> "ProviderResponse":
        return cls(body=body)

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        message: str,
        *,
        status_code: Optional[int] = None,
    ) -> "ProviderResponse":
        return cls(failure=ProviderFailure(kind=kind, message=message, status_code=status_code))


def _object_id(value: object) -> Optional[str]:
    # Expandable fields arrive either as an id string or as the full object.
    if isinstance(value, Mapping):
        value = value.get("id")
    if value is None or value == "":
        return None
    return str(value)


class CustomerRecord(BaseModel):
    """Billing provider customer keyed by email."""

    id: str
    email: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class SubscriptionStatus(str, Enum):
    """Lifecycle states reported for provider subscriptions."""

    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    UNPAID = "unpaid"
    PAUSED = "paused"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "SubscriptionStatus":
        return cls.UNKNOWN


class SubscriptionRecord(BaseModel):
    """Subscription linking a customer to a price, product and status."""

    id: Optional[str] = None
    status: SubscriptionStatus = SubscriptionStatus.UNKNOWN
    price_id: Optional[str] = None
    product_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_provider(cls, payload: Mapping[str, Any]) -> "SubscriptionRecord":
        """Build a record from a raw subscription object.

        The legacy ``plan`` attribute is preferred; subscriptions created
        without it fall back to the price of their first item.
        """

        price: Mapping[str, Any] = {}
        plan = payload.get("plan")
        if isinstance(plan, Mapping):
            price = plan
        else:
            items = payload.get("items")
            item_data = items.get("data") if isinstance(items, Mapping) else None
            if isinstance(item_data, list) and item_data and isinstance(item_data[0], Mapping):
                first_price = item_data[0].get("price")
                if isinstance(first_price, Mapping):
                    price = first_price

        return cls(
            id=_object_id(payload.get("id")),
            status=SubscriptionStatus(str(payload.get("status") or "unknown")),
            price_id=_object_id(price.get("id")),
            product_id=_object_id(price.get("product")),
        )


class PlanRecord(BaseModel):
    """Priced plan offered by the billing provider."""

    amount: Optional[int] = None
    currency: str
    price_id: str
    product_id: str
    interval_count: int = 1
    interval: str

    model_config = ConfigDict(frozen=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def period(self) -> str:
        return f"{self.interval_count} {self.interval}"

    @classmethod
    def from_provider(cls, payload: Mapping[str, Any]) -> "PlanRecord":
        return cls(
            amount=payload.get("amount"),
            currency=str(payload.get("currency") or ""),
            price_id=_object_id(payload.get("id")) or "",
            product_id=_object_id(payload.get("product")) or "",
            interval_count=int(payload.get("interval_count") or 1),
            interval=str(payload.get("interval") or ""),
        )

    def to_row(self) -> Dict[str, object]:
        """Represent the plan as a flat catalog row."""

        return {
            "amount": self.amount,
            "currency": self.currency,
            "price_id": self.price_id,
            "product_id": self.product_id,
            "period": self.period,
        }
