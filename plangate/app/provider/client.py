"""HTTP client for read-only calls against the Stripe REST API."""
from __future__ import annotations

import base64
import json
import logging
from http import client as http_client
from typing import Any, Mapping, Optional, Protocol
from urllib import error as urllib_error, parse as urllib_parse, request as urllib_request

from .models import FailureKind, ProviderResponse

DEFAULT_API_BASE_URL = "https://api.stripe.com/v1"

logger = logging.getLogger("plangate.provider")


class BillingApiClient(Protocol):
    """Issues authenticated GET requests against the billing provider."""

    def request(
        self,
        resource_path: str,
        query: Mapping[str, Any],
        credential: str,
    ) -> ProviderResponse:
        ...


def _basic_auth_header(credential: str) -> str:
    token = base64.b64encode(f"{credential}:".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def _provider_error_message(payload: object) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return None


class StripeApiClient:
    """Client returning parsed bodies or failures, never raising.

    The credential is supplied on every call and used as the basic auth
    username with an empty password. ``timeout_seconds`` of ``None`` leaves
    the transport default in place.
    """

    def __init__(
        self,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def build_url(self, resource_path: str, query: Mapping[str, Any]) -> str:
        path = resource_path if resource_path.startswith("/") else f"/{resource_path}"
        url = f"{self.api_base_url}{path}"
        if query:
            url = f"{url}?{urllib_parse.urlencode(dict(query))}"
        return url

    def request(
        self,
        resource_path: str,
        query: Mapping[str, Any],
        credential: str,
    ) -> ProviderResponse:
        try:
            http_request = urllib_request.Request(
                self.build_url(resource_path, query),
                headers={
                    "Authorization": _basic_auth_header(credential),
                    "Accept": "application/json",
                },
                method="GET",
            )
            if self.timeout_seconds is None:
                response = urllib_request.urlopen(http_request)
            else:
                response = urllib_request.urlopen(http_request, timeout=self.timeout_seconds)
            with response:
                raw_body = response.read()
        except urllib_error.HTTPError as exc:
            return self._http_error(resource_path, exc)
        except (urllib_error.URLError, http_client.HTTPException, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            logger.warning(
                "Billing provider unreachable",
                extra={"billing_resource": resource_path, "error": str(reason)},
            )
            return ProviderResponse.failed(FailureKind.TRANSPORT, str(reason))
        except ValueError as exc:
            # urllib rejects URLs without a scheme or host before any I/O.
            logger.warning(
                "Billing provider URL is invalid",
                extra={"billing_resource": resource_path, "error": str(exc)},
            )
            return ProviderResponse.failed(FailureKind.TRANSPORT, str(exc))

        try:
            payload = json.loads(raw_body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning(
                "Billing provider returned an unreadable body",
                extra={"billing_resource": resource_path, "error": str(exc)},
            )
            return ProviderResponse.failed(FailureKind.MALFORMED, str(exc))

        if not isinstance(payload, dict):
            logger.warning(
                "Billing provider returned a non-object body",
                extra={"billing_resource": resource_path},
            )
            return ProviderResponse.failed(FailureKind.MALFORMED, "Expected a JSON object")

        message = _provider_error_message(payload)
        if message is not None:
            logger.warning(
                "Billing provider reported an error",
                extra={"billing_resource": resource_path, "error": message},
            )
            return ProviderResponse.failed(FailureKind.PROVIDER, message)

        return ProviderResponse.succeeded(payload)

    def _http_error(self, resource_path: str, exc: urllib_error.HTTPError) -> ProviderResponse:
        message = f"HTTP {exc.code}"
        try:
            raw_body = exc.read()
            detail = _provider_error_message(json.loads(raw_body.decode("utf-8")))
        except (OSError, ValueError, AttributeError):
            detail = None
        if detail:
            message = detail

        logger.warning(
            "Billing provider request failed",
            extra={
                "billing_resource": resource_path,
                "status_code": exc.code,
                "error": message,
            },
        )
        return ProviderResponse.failed(FailureKind.PROVIDER, message, status_code=exc.code)


__all__ = ["BillingApiClient", "DEFAULT_API_BASE_URL", "StripeApiClient"]
