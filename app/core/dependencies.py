"""
FastAPI dependencies.

Host adapters are attached to ``app.state.host`` by ``create_app``; the
gateway client and the card config are shared per app (``app.state``).
"""

from fastapi import Depends, Request

from app.core.encryption import Encryptor
from app.core.interfaces import CheckoutContext, HostAdapters
from app.services.acquired_client import AcquiredClient
from app.services.card_config import CardConfig
from app.services.customer_service import CreateAcquiredCustomer
from app.services.multishipping_service import MultishippingService
from app.services.nonce_service import NonceCorrelator
from app.services.session_payload import GetPaymentSessionData
from app.services.session_service import SessionService
from app.services.webhook_service import WebhookService


def get_host(request: Request) -> HostAdapters:
    host = getattr(request.app.state, "host", None)
    if host is None:
        raise RuntimeError("Host adapters are not configured; use create_app(host=...)")
    return host


def get_checkout_context(
    request: Request,
    host: HostAdapters = Depends(get_host),
) -> CheckoutContext:
    return host.checkout_context(request)


def get_card_config(request: Request) -> CardConfig:
    return request.app.state.card_config


def get_acquired_client(request: Request) -> AcquiredClient:
    return request.app.state.acquired_client


def get_multishipping_service(request: Request) -> MultishippingService:
    return request.app.state.multishipping_service


def get_encryptor(request: Request) -> Encryptor:
    return request.app.state.encryptor


def get_session_service(
    host: HostAdapters = Depends(get_host),
    card_config: CardConfig = Depends(get_card_config),
    client: AcquiredClient = Depends(get_acquired_client),
    multishipping_service: MultishippingService = Depends(get_multishipping_service),
) -> SessionService:
    payment_session_data = GetPaymentSessionData(
        card_config=card_config,
        create_acquired_customer=CreateAcquiredCustomer(client, host.customer_store),
        url_builder=host.url_builder,
        multishipping_service=multishipping_service,
    )
    return SessionService(client, payment_session_data)


def get_nonce_correlator(
    host: HostAdapters = Depends(get_host),
    encryptor: Encryptor = Depends(get_encryptor),
) -> NonceCorrelator:
    return NonceCorrelator(host.order_repository, encryptor)


def get_webhook_service(
    host: HostAdapters = Depends(get_host),
    client: AcquiredClient = Depends(get_acquired_client),
) -> WebhookService:
    return WebhookService(client, host.order_repository)
