# tests/test_acquired_client.py
# Acquired transport and session service tests

import asyncio
import json

import httpx
import pytest

from app.core.exceptions import ExternalServiceError
from app.services.acquired_client import ACQUIRED_TOKEN_KEY, AcquiredClient
from app.services.customer_service import CreateAcquiredCustomer
from tests.conftest import FakeCustomer, FakeTokenCache, InMemoryCustomerStore


class Recorder:
    """httpx MockTransport handler with scripted responses per path"""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        responses = self.routes[(request.method, request.url.path)]
        status, body = responses.pop(0) if len(responses) > 1 else responses[0]
        return httpx.Response(status, json=body)


def make_client(card_config, routes, cache=None):
    recorder = Recorder(routes)
    client = AcquiredClient(
        config=card_config,
        token_cache=cache if cache is not None else FakeTokenCache(),
        transport=httpx.MockTransport(recorder),
    )
    return client, recorder


class TestAuthentication:
    """Login and token caching"""

    def test_login_and_cache(self, card_config):
        cache = FakeTokenCache()
        client, recorder = make_client(
            card_config,
            {
                ("POST", "/v1/login"): [(200, {"access_token": "tok_1"})],
                ("POST", "/v1/payment-sessions"): [(201, {"session_id": "sess_1"})],
            },
            cache,
        )

        result = asyncio.run(client.create_payment_session({"transaction": {}}))

        assert result == {"session_id": "sess_1"}
        assert cache.values[ACQUIRED_TOKEN_KEY] == "tok_1"
        login = json.loads(recorder.requests[0].content)
        assert login == {"app_id": "app_123", "app_key": "key_456"}
        assert recorder.requests[1].headers["Authorization"] == "Bearer tok_1"

    def test_uses_cached_token(self, card_config):
        client, recorder = make_client(
            card_config,
            {("GET", "/v1/transactions/t1"): [(200, {"transaction_id": "t1"})]},
            FakeTokenCache({ACQUIRED_TOKEN_KEY: "cached"}),
        )

        asyncio.run(client.get_transaction("t1"))

        assert len(recorder.requests) == 1
        assert recorder.requests[0].headers["Authorization"] == "Bearer cached"

    def test_401_refreshes_token_once(self, card_config):
        cache = FakeTokenCache({ACQUIRED_TOKEN_KEY: "stale"})
        client, recorder = make_client(
            card_config,
            {
                ("POST", "/v1/login"): [(200, {"access_token": "fresh"})],
                ("GET", "/v1/transactions/t1"): [
                    (401, {"message": "expired"}),
                    (200, {"transaction_id": "t1"}),
                ],
            },
            cache,
        )

        result = asyncio.run(client.get_transaction("t1"))

        assert result == {"transaction_id": "t1"}
        assert cache.values[ACQUIRED_TOKEN_KEY] == "fresh"
        assert recorder.requests[-1].headers["Authorization"] == "Bearer fresh"

    def test_missing_credentials(self, test_settings):
        from app.services.card_config import CardConfig

        test_settings.ACQUIRED_APP_KEY = ""
        client = AcquiredClient(config=CardConfig(test_settings), token_cache=FakeTokenCache())

        with pytest.raises(ExternalServiceError):
            asyncio.run(client.authenticate())

    def test_non_json_body_raises(self, card_config):
        client = AcquiredClient(
            config=card_config,
            token_cache=FakeTokenCache({ACQUIRED_TOKEN_KEY: "tok"}),
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, text="<html>maintenance</html>")
            ),
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            asyncio.run(client.get_transaction("t1"))

        assert exc_info.value.details["endpoint"] == "/transactions/t1"

    def test_non_json_login_raises(self, card_config):
        client = AcquiredClient(
            config=card_config,
            token_cache=FakeTokenCache(),
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="ok")),
        )

        with pytest.raises(ExternalServiceError):
            asyncio.run(client.authenticate())

    def test_error_status_raises(self, card_config):
        client, _ = make_client(
            card_config,
            {("PUT", "/v1/payment-sessions/s1"): [(422, {"title": "Validation"})]},
            FakeTokenCache({ACQUIRED_TOKEN_KEY: "tok"}),
        )

        with pytest.raises(ExternalServiceError) as exc_info:
            asyncio.run(client.update_payment_session("s1", {}))

        assert exc_info.value.details["status"] == 422


class TestCreateAcquiredCustomer:
    """Gateway customer provisioning"""

    def test_existing_customer_no_call(self, card_config):
        client, recorder = make_client(card_config, {})
        store = InMemoryCustomerStore({"5": "cust_5"})

        result = asyncio.run(
            CreateAcquiredCustomer(client, store).execute(FakeCustomer(customer_id="5"))
        )

        assert result == {"customer_id": "cust_5"}
        assert recorder.requests == []

    def test_creates_and_stores(self, card_config):
        client, recorder = make_client(
            card_config,
            {("POST", "/v1/customers"): [(201, {"customer_id": "cust_new"})]},
            FakeTokenCache({ACQUIRED_TOKEN_KEY: "tok"}),
        )
        store = InMemoryCustomerStore()
        customer = FakeCustomer(
            customer_id="5", data={"email": "jane@example.com", "first_name": "Jane"}
        )

        result = asyncio.run(CreateAcquiredCustomer(client, store).execute(customer))

        assert result == {"customer_id": "cust_new"}
        assert store.ids["5"] == "cust_new"
        assert json.loads(recorder.requests[0].content) == {
            "reference": "5",
            "first_name": "Jane",
            "email": "jane@example.com",
        }
