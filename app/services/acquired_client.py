"""
Acquired API transport.

Thin async wrapper over httpx for the endpoints the bridge needs:
login, payment sessions, customers and transaction lookup. The access
token is cached (Redis by default) and refreshed once on a 401.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from fastapi import status

from app.core.exceptions import ExternalServiceError
from app.core.interfaces import TokenCache
from app.core.redis import redis_client
from app.services.card_config import CardConfig

logger = logging.getLogger(__name__)

ACQUIRED_TOKEN_KEY = "acquired:access_token"


class AcquiredClient:
    def __init__(
        self,
        config: CardConfig | None = None,
        token_cache: TokenCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.config = config or CardConfig()
        self.token_cache = token_cache if token_cache is not None else redis_client
        self._transport = transport
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self.config.get_api_url()

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    # ──────────────────────────────────────────────────────────────
    # Authentication
    # ──────────────────────────────────────────────────────────────

    async def authenticate(self) -> str:
        cached_token = await self.token_cache.get(ACQUIRED_TOKEN_KEY)
        if cached_token:
            return cached_token

        app_id = self.config.get_app_id()
        app_key = self.config.get_app_key()
        if not app_id or not app_key:
            raise ExternalServiceError(
                "Acquired credentials missing: set ACQUIRED_APP_ID and ACQUIRED_APP_KEY"
            )

        try:
            async with self._http_client() as client:
                response = await client.post(
                    f"{self.base_url}/login",
                    json={"app_id": app_id, "app_key": app_key},
                )
        except httpx.HTTPError as e:
            logger.error(f"[acquired] login error: {e}")
            raise ExternalServiceError(f"Acquired login failed: {e}") from e

        if response.status_code != status.HTTP_200_OK:
            logger.error(
                f"[acquired] login failed: HTTP {response.status_code} {response.text}"
            )
            raise ExternalServiceError(
                "Acquired login failed",
                details={"status": response.status_code, "body": response.text[:500]},
            )

        token = _parse_json(response, "/login").get("access_token")
        if not token:
            raise ExternalServiceError("Acquired login: no access_token in response")

        await self.token_cache.set(
            ACQUIRED_TOKEN_KEY, token, ttl=self.config.get_token_cache_ttl()
        )
        logger.info("[acquired] access token cached")
        return token

    # ──────────────────────────────────────────────────────────────
    # Request execution
    # ──────────────────────────────────────────────────────────────

    async def execute_request(
        self,
        endpoint: str,
        method: str = "GET",
        payload: Dict[str, Any] | None = None,
        retry_on_401: bool = True,
    ) -> Dict[str, Any]:
        token = await self.authenticate()

        headers = {"Authorization": f"Bearer {token}"}
        company_id = self.config.get_company_id()
        if company_id:
            headers["Company-Id"] = company_id

        url = f"{self.base_url}{endpoint}"

        try:
            async with self._http_client() as client:
                response = await client.request(
                    method=method,
                    url=url,
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.error(f"[acquired] {method} {endpoint} error: {e}")
            raise ExternalServiceError(f"Acquired API error: {e}") from e

        if response.status_code == status.HTTP_401_UNAUTHORIZED and retry_on_401:
            await self.token_cache.delete(ACQUIRED_TOKEN_KEY)
            logger.warning("[acquired] token expired, retrying")
            return await self.execute_request(
                endpoint=endpoint,
                method=method,
                payload=payload,
                retry_on_401=False,
            )

        if response.status_code >= 400:
            logger.error(
                f"[acquired] {method} {endpoint} failed: HTTP {response.status_code} {response.text}"
            )
            raise ExternalServiceError(
                f"Acquired API returned HTTP {response.status_code}",
                details={"endpoint": endpoint, "status": response.status_code, "body": response.text[:500]},
            )

        if not response.content:
            return {}
        return _parse_json(response, endpoint)

    # ──────────────────────────────────────────────────────────────
    # Endpoints
    # ──────────────────────────────────────────────────────────────

    async def create_payment_session(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.execute_request("/payment-sessions", method="POST", payload=payload)

    async def update_payment_session(
        self, session_id: str, payload: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.execute_request(
            f"/payment-sessions/{session_id}", method="PUT", payload=payload
        )

    async def create_customer(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self.execute_request("/customers", method="POST", payload=payload)

    async def get_transaction(self, transaction_id: str) -> Dict[str, Any]:
        return await self.execute_request(f"/transactions/{transaction_id}")



def _parse_json(response: httpx.Response, endpoint: str) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"[acquired] {endpoint} returned a non-JSON body: {response.text[:200]}")
        raise ExternalServiceError(
            "Acquired API returned an invalid JSON body",
            details={"endpoint": endpoint, "status": response.status_code, "body": response.text[:500]},
        ) from e

    if not isinstance(data, dict):
        raise ExternalServiceError(
            "Acquired API returned an unexpected JSON body",
            details={"endpoint": endpoint, "status": response.status_code},
        )
    return data
