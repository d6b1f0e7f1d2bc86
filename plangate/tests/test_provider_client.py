from __future__ import annotations

import base64
import io
import json
from typing import Any, Dict, List
from urllib import error as urllib_error

import pytest

from plangate.app.entitlements import EntitlementService
from plangate.app.provider import FailureKind, StripeApiClient
from plangate.app.provider import client as client_module


class _FakeHTTPResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeHTTPResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        return None


class _UrlopenRecorder:
    def __init__(self, monkeypatch) -> None:
        self._monkeypatch = monkeypatch
        self.calls: List[Dict[str, Any]] = []

    def install(self, outcome: Any) -> None:
        def fake_urlopen(request, *args, **kwargs):
            self.calls.append({"request": request, "args": args, "kwargs": kwargs})
            if isinstance(outcome, BaseException):
                raise outcome
            return _FakeHTTPResponse(outcome)

        self._monkeypatch.setattr(client_module.urllib_request, "urlopen", fake_urlopen)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.calls[index]


@pytest.fixture
def captured_requests(monkeypatch) -> _UrlopenRecorder:
    return _UrlopenRecorder(monkeypatch)


def test_request_builds_authenticated_get(captured_requests):
    body = {"object": "list", "data": [{"id": "cus_1", "email": "a@example.com"}]}
    captured_requests.install(json.dumps(body).encode("utf-8"))

    response = StripeApiClient().request("/customers", {"email": "a@example.com"}, "sk_test_123")

    assert response.ok is True
    assert response.data == body["data"]
    sent = captured_requests[0]["request"]
    assert sent.get_method() == "GET"
    assert sent.full_url == "https://api.stripe.com/v1/customers?email=a%40example.com"
    expected = base64.b64encode(b"sk_test_123:").decode("ascii")
    assert sent.get_header("Authorization") == f"Basic {expected}"


def test_request_without_query_has_no_query_string(captured_requests):
    captured_requests.install(b'{"object": "list", "data": []}')

    StripeApiClient(api_base_url="https://billing.local/v1/").request("/plans", {}, "sk")

    assert captured_requests[0]["request"].full_url == "https://billing.local/v1/plans"


def test_timeout_is_only_passed_when_configured(captured_requests):
    captured_requests.install(b'{"data": []}')

    StripeApiClient().request("/plans", {}, "sk")
    StripeApiClient(timeout_seconds=2.5).request("/plans", {}, "sk")

    assert "timeout" not in captured_requests[0]["kwargs"]
    assert captured_requests[1]["kwargs"]["timeout"] == 2.5


def test_http_error_surfaces_provider_message(captured_requests):
    error_body = io.BytesIO(b'{"error": {"message": "Invalid API Key provided", "type": "invalid_request_error"}}')
    captured_requests.install(
        urllib_error.HTTPError("https://api.stripe.com/v1/plans", 401, "Unauthorized", None, error_body)
    )

    response = StripeApiClient().request("/plans", {}, "sk_bad")

    assert response.ok is False
    assert response.data == []
    assert response.failure.kind == FailureKind.PROVIDER
    assert response.failure.status_code == 401
    assert response.error_message == "Invalid API Key provided"


def test_http_error_without_body_uses_status(captured_requests):
    captured_requests.install(
        urllib_error.HTTPError("https://api.stripe.com/v1/plans", 500, "Server Error", None, io.BytesIO(b"oops"))
    )

    response = StripeApiClient().request("/plans", {}, "sk")

    assert response.error_message == "HTTP 500"


def test_transport_error_is_returned_not_raised(captured_requests):
    captured_requests.install(urllib_error.URLError("connection refused"))

    response = StripeApiClient().request("/customers", {"email": "a@example.com"}, "sk")

    assert response.ok is False
    assert response.failure.kind == FailureKind.TRANSPORT
    assert "connection refused" in response.error_message


def test_base_url_without_scheme_is_a_transport_failure(captured_requests):
    captured_requests.install(b'{"data": []}')
    client = StripeApiClient(api_base_url="api.stripe.com/v1")

    response = client.request("/customers", {"email": "a@example.com"}, "sk")

    assert response.ok is False
    assert response.failure.kind == FailureKind.TRANSPORT
    assert captured_requests.calls == []
    assert EntitlementService(client).has_plan("a@example.com", "sk") is False
    assert EntitlementService(client).resolve_entitlement("a@example.com", "sk").verified is False


def test_timeout_is_a_transport_failure(captured_requests):
    captured_requests.install(TimeoutError("timed out"))

    response = StripeApiClient(timeout_seconds=1).request("/plans", {}, "sk")

    assert response.failure.kind == FailureKind.TRANSPORT


@pytest.mark.parametrize("body", [b"<html>gateway</html>", b"[1, 2]", b"\xff\xfe"])
def test_malformed_bodies(captured_requests, body):
    captured_requests.install(body)

    response = StripeApiClient().request("/plans", {}, "sk")

    assert response.failure.kind == FailureKind.MALFORMED


def test_error_field_in_success_body_is_a_failure(captured_requests):
    captured_requests.install(b'{"error": {"message": "No such customer"}}')

    response = StripeApiClient().request("/subscriptions", {"customer": "cus_x"}, "sk")

    assert response.failure.kind == FailureKind.PROVIDER
    assert response.error_message == "No such customer"


def test_credential_is_not_logged(captured_requests, caplog):
    captured_requests.install(urllib_error.URLError("unreachable"))

    with caplog.at_level("WARNING", logger="plangate.provider"):
        StripeApiClient().request("/plans", {}, "sk_live_secret")

    assert caplog.records
    assert all("sk_live_secret" not in record.getMessage() for record in caplog.records)
