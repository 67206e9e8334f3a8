"""
Payment session payload builder.

Assembles the JSON body sent to Acquired when a hosted payment session is
created or updated: transaction amount and capture mode, optional custom
data, the 3-D Secure block and, for logged-in customers, the customer and
card-on-file blocks.
"""

from __future__ import annotations

import base64
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Union

from app.core.exceptions import SessionBuildError
from app.core.interfaces import CheckoutContext, Serializer, UrlBuilder
from app.core.serializer import JsonSerializer
from app.schemas.acquired import (
    SessionCustomer,
    SessionPayment,
    SessionRequest,
    SessionTds,
    SessionTransaction,
)
from app.services.card_config import CardConfig
from app.services.customer_service import CreateAcquiredCustomer
from app.services.multishipping_service import MultishippingService, apply_multishipping

logger = logging.getLogger(__name__)

TDS_REDIRECT_ROUTE = "acquired/threedsecure/response"
WEBHOOK_ROUTE = "acquired/webhook"

TWO_PLACES = Decimal("0.01")


def format_amount(total: Union[Decimal, float, int, str, None]) -> str:
    """Fixed two-decimal amount with a '.' separator and no grouping."""
    value = Decimal(str(total if total is not None else 0))
    return f"{value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP):f}"


def force_https(url: str) -> str:
    """
    Swap ``http://`` for ``https://`` unless the url already contains
    ``https://``. A url with neither token is returned unchanged.
    """
    if "https://" in url:
        return url
    return url.replace("http://", "https://")


def encode_custom_data(data: Dict[str, Any], serializer: Serializer | None = None) -> str:
    serializer = serializer or JsonSerializer()
    return base64.b64encode(serializer.serialize(data).encode("utf-8")).decode("ascii")


def decode_custom_data(encoded: str, serializer: Serializer | None = None) -> Dict[str, Any]:
    serializer = serializer or JsonSerializer()
    return serializer.unserialize(base64.b64decode(encoded).decode("utf-8"))


class GetPaymentSessionData:
    def __init__(
        self,
        card_config: CardConfig,
        create_acquired_customer: CreateAcquiredCustomer,
        url_builder: UrlBuilder,
        multishipping_service: MultishippingService,
        serializer: Serializer | None = None,
    ):
        self.card_config = card_config
        self.create_acquired_customer = create_acquired_customer
        self.url_builder = url_builder
        self.multishipping_service = multishipping_service
        self.serializer = serializer or JsonSerializer()

    async def execute(
        self,
        order_id: str,
        context: CheckoutContext,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> SessionRequest:
        """
        Build the payload for creating a checkout session on Acquired.

        Raises SessionBuildError when any collaborator fails; nothing
        partial is returned.
        """
        try:
            cart = context.cart

            payload = SessionRequest(
                transaction=SessionTransaction(
                    order_id=order_id,
                    amount=format_amount(cart.get_grand_total()),
                    currency=context.currency_code.lower(),
                    capture=self.card_config.get_capture_action(),
                )
            )

            if cart.is_multi_shipping():
                order_ids = await self.multishipping_service.reserve_order_ids(cart)
                apply_multishipping(payload, order_ids)

            if custom_data:
                payload.transaction.custom_data = encode_custom_data(
                    custom_data, self.serializer
                )

            payload.tds = SessionTds(
                is_active=self.card_config.is_tds_active(),
                challenge_preference=self.card_config.get_tds_challenge_preference(),
                contact_url=force_https(self.card_config.get_tds_contact_url()),
                redirect_url=force_https(self.url_builder.get_url(TDS_REDIRECT_ROUTE)),
                webhook_url=force_https(self.url_builder.get_url(WEBHOOK_ROUTE)),
            )

            customer = context.customer
            if customer.is_logged_in():
                acquired_customer = await self.create_acquired_customer.execute(customer)
                payload.customer = SessionCustomer(
                    customer_id=acquired_customer["customer_id"]
                )

                if self.card_config.is_create_card_enabled():
                    payload.payment = SessionPayment(
                        create_card=True,
                        reference=str(customer.get_customer_id()),
                    )

        except Exception as e:
            logger.critical(
                f"Get Payment Session data failed: {e}",
                exc_info=True,
            )
            raise SessionBuildError(str(e)) from e

        return payload
