"""
Shared fixtures: client configuration, a fake Submarine deployment served
through ``httpx.MockTransport`` and JSON:API sample documents.
"""

import copy
from typing import Any, Callable, List, Optional

import httpx
import pytest

from submarine_client import ClientConfig, SubmarineClient


MOCK_SHOP = "disco-sandbox.myshopify.com"
MOCK_CUSTOMER_ID = "5594588086341"
MOCK_TOKEN = "eyJhbGciOiJIUzI1NiJ9.test-token"
MOCK_TOKEN_URL = f"https://{MOCK_SHOP}/apps/submarine/auth/tokens"
MOCK_API_HOST = "submarine-staging.discolabs.com"


class FakeSubmarine:
    """
    Request handler standing in for both the storefront token endpoint and
    the payments API.

    Responses are rebuilt for every request. ``api_handler`` may be set to a
    callable for per-request behaviour; ``token_error``/``api_error`` make the
    corresponding call raise instead of answering.
    """

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        *,
        text: Optional[str] = None,
        token_status: int = 200,
        token: str = MOCK_TOKEN,
        token_error: Optional[Exception] = None,
        api_error: Optional[Exception] = None,
        api_handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    ):
        self.status_code = status_code
        self.body = {"data": []} if body is None and text is None else body
        self.text = text
        self.token_status = token_status
        self.token = token
        self.token_error = token_error
        self.api_error = api_error
        self.api_handler = api_handler
        self.requests: List[httpx.Request] = []

    @property
    def token_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url) == MOCK_TOKEN_URL]

    @property
    def api_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if str(r.url) != MOCK_TOKEN_URL]

    @property
    def last_api_request(self) -> httpx.Request:
        return self.api_requests[-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if str(request.url) == MOCK_TOKEN_URL:
            if self.token_error is not None:
                raise self.token_error
            if self.token_status >= 400:
                return httpx.Response(self.token_status, text="nope")
            return httpx.Response(self.token_status, text=self.token)

        if self.api_error is not None:
            raise self.api_error
        if self.api_handler is not None:
            return self.api_handler(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        authentication={"shop": MOCK_SHOP, "customer_id": MOCK_CUSTOMER_ID},
        environment="staging",
    )


@pytest.fixture
def fake_submarine():
    """The FakeSubmarine class, for building per-test handlers."""
    return FakeSubmarine


@pytest.fixture
def make_client(config):
    """Return a factory building a SubmarineClient wired to a FakeSubmarine."""
    def _make(fake: FakeSubmarine, **kwargs) -> SubmarineClient:
        return SubmarineClient(config, transport=httpx.MockTransport(fake), **kwargs)
    return _make


_SUBSCRIPTIONS_DOCUMENT = {
    "data": [
        {
            "type": "subscription",
            "id": "1212",
            "attributes": {
                "status": "active",
                "interval": 30,
                "shipping_address": {
                    "data": {
                        "type": "address",
                        "id": "77",
                        "attributes": {"city": "Sydney", "country_code": "AU"},
                    }
                },
                "notes": {"gift": True},
            },
            "relationships": {
                "payment_method": {"data": {"type": "payment_method", "id": "345"}},
                "subscription_lines": {
                    "data": [
                        {"type": "subscription_line", "id": "1"},
                        {"type": "subscription_line", "id": "2"},
                    ]
                },
                "last_order": {"data": None},
            },
        },
        {
            "type": "subscription",
            "id": "1245",
            "attributes": {"status": "paused", "interval": 7},
            "relationships": {
                "payment_method": {"data": {"type": "payment_method", "id": "345"}},
            },
        },
    ],
    "included": [
        {
            "type": "payment_method",
            "id": "345",
            "attributes": {"payment_processor": "braintree", "last4": "4242"},
        },
        {
            "type": "subscription_line",
            "id": "1",
            "attributes": {"quantity": 2},
        },
    ],
}

_SUBSCRIPTION_DOCUMENT = {
    "data": {
        "type": "subscription",
        "id": "1212",
        "attributes": {"status": "paused"},
        "relationships": {
            "payment_method": {"data": {"type": "payment_method", "id": "999"}},
        },
    },
    "included": [
        {"type": "payment_method", "id": "999", "attributes": {"last4": "1111"}},
    ],
}


@pytest.fixture
def subscriptions_document() -> dict:
    return copy.deepcopy(_SUBSCRIPTIONS_DOCUMENT)


@pytest.fixture
def subscription_document() -> dict:
    return copy.deepcopy(_SUBSCRIPTION_DOCUMENT)
