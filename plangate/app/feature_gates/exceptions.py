"""Errors raised when a subscription gate is not satisfied."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from fastapi import HTTPException, status

from ..entitlements import EntitlementResult


@dataclass
class FeatureGateError(Exception):
    """A denied subscription gate.

    ``verified`` is False when the provider could not confirm the customer's
    status. Those denials map to 503 so clients retry instead of offering a
    purchase; verified denials map to 403.
    """

    code: str
    message: str
    verified: bool = True
    detail: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    @classmethod
    def from_result(
        cls,
        result: EntitlementResult,
        *,
        code: str,
        message: str,
        **detail: Any,
    ) -> "FeatureGateError":
        return cls(
            code=code,
            message=message,
            verified=result.verified,
            detail={"reason": result.reason.value, **detail},
        )

    @property
    def status_code(self) -> int:
        if self.verified:
            return status.HTTP_403_FORBIDDEN
        return status.HTTP_503_SERVICE_UNAVAILABLE

    @property
    def payload(self) -> Dict[str, Any]:
        return {
            **self.detail,
            "error": self.code,
            "message": self.message,
            "verified": self.verified,
        }

    def to_http_exception(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=self.payload)
