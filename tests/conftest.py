"""
Shared pytest fixtures for the orderlink test suite.

Settings never read `.env` files here, so a developer's local credentials
cannot leak into tests. HTTP is either mocked with respx or replaced by
`FakeAPI`, an in-memory `RemoteAPI`.
"""

from __future__ import annotations

from typing import Any

import pytest

from adapters.http_client import ApiClient
from core.config import AppSettings
from core.domain.models import ClientConfig
from core.services.order_pipeline import OrderContext

BILLING_URL = "https://billing.test/v1/"
MESSAGING_URL = "https://messaging.test/2010-04-01/Accounts/AC123/"
FROM_NUMBER = "+15550001111"


class FakeAPI:
    """Records every call and answers from a per-(method, endpoint) queue."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self._responses: dict[tuple[str, str], list[Any]] = {}

    def queue(self, method: str, endpoint: str, response: Any) -> None:
        self._responses.setdefault((method, endpoint), []).append(response)

    def _answer(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "endpoint": endpoint, **kwargs})
        queued = self._responses.get((method, endpoint))
        if not queued:
            return {}
        response = queued.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def get(self, endpoint, params=None, *, headers=None):
        return self._answer("GET", endpoint, params=params, headers=headers)

    async def post(self, endpoint, data=None, *, headers=None):
        return self._answer("POST", endpoint, data=data, headers=headers)

    async def put(self, endpoint, data=None, *, headers=None):
        return self._answer("PUT", endpoint, data=data, headers=headers)

    async def patch(self, endpoint, data=None, *, headers=None):
        return self._answer("PATCH", endpoint, data=data, headers=headers)

    async def delete(self, endpoint, *, headers=None):
        return self._answer("DELETE", endpoint, headers=headers)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        billing_api_key="sk_test_123",
        billing_base_url=BILLING_URL,
        messaging_account_sid="AC123",
        messaging_api_key_sid="SK456",
        messaging_api_key_secret="secret",
        messaging_base_url=MESSAGING_URL,
        messaging_from_number=FROM_NUMBER,
        http_timeout_seconds=2.0,
    )


@pytest.fixture
def billing_config() -> ClientConfig:
    return ClientConfig(api_key_sid="sk_test_123", base_url=BILLING_URL)


@pytest.fixture
def billing_client(billing_config: ClientConfig) -> ApiClient:
    return ApiClient(billing_config)


@pytest.fixture
def fake_api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def ctx(settings: AppSettings) -> OrderContext:
    """Fresh context (and therefore fresh service instances) per test."""
    return OrderContext.from_settings(settings)
