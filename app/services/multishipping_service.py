"""
Multishipping order reservation.

A multishipping checkout turns one cart into one order per shipping
address. The gateway sees a single authorization against a synthetic
``<first id>-ACQM`` order id; the real increment ids travel in custom2 so
the webhook can fan the transaction out to every sub-order.
"""

import logging
from typing import List

from app.core.config import settings
from app.core.interfaces import CartReader, OrderIdSequence
from app.core.redis import RedisClient, redis_client
from app.schemas.acquired import SessionRequest

logger = logging.getLogger(__name__)

MULTISHIPPING_MARKER = "multishipping order"
MULTISHIPPING_SUFFIX = "-ACQM"
ORDER_SEQUENCE_KEY = "acquired:order_increment_id"


class RedisOrderIdSequence:
    """Order increment id sequence backed by a Redis counter."""

    def __init__(
        self,
        redis: RedisClient | None = None,
        prefix: str | None = None,
        pad: int | None = None,
        key: str = ORDER_SEQUENCE_KEY,
    ):
        self.redis = redis or redis_client
        self.prefix = settings.ACQUIRED_ORDER_ID_PREFIX if prefix is None else prefix
        self.pad = settings.ACQUIRED_ORDER_ID_PAD if pad is None else pad
        self.key = key

    async def reserve(self, count: int) -> List[str]:
        if count < 1:
            raise ValueError("count must be at least 1")

        # INCRBY hands out a contiguous block atomically
        last = await self.redis.incrby(self.key, count)
        first = last - count + 1
        return [f"{self.prefix}{n:0{self.pad}d}" for n in range(first, last + 1)]


class MultishippingService:
    def __init__(self, sequence: OrderIdSequence | None = None):
        self.sequence = sequence or RedisOrderIdSequence()

    async def reserve_order_ids(self, cart: CartReader) -> List[str]:
        count = max(1, int(cart.get_shipping_address_count() or 0))
        order_ids = await self.sequence.reserve(count)
        if not order_ids:
            raise ValueError("Order id sequence returned no ids")

        cart.set_reserved_order_ids(list(order_ids))
        logger.info(f"[acquired] reserved multishipping order ids: {order_ids}")
        return list(order_ids)


def apply_multishipping(payload: SessionRequest, order_ids: List[str]) -> SessionRequest:
    """Rewrite a session request to authorize once for all sub-orders."""
    transaction = payload.transaction
    # authorize only; each sub-order is captured once it is confirmed
    transaction.capture = False
    transaction.custom1 = MULTISHIPPING_MARKER
    transaction.custom2 = ",".join(order_ids)
    transaction.order_id = f"{order_ids[0]}{MULTISHIPPING_SUFFIX}"
    return payload


def is_multishipping_order_id(order_id: str | None) -> bool:
    return bool(order_id) and order_id.endswith(MULTISHIPPING_SUFFIX)


def split_multishipping_order_ids(custom2: str | None) -> List[str]:
    if not custom2:
        return []
    return [part.strip() for part in custom2.split(",") if part.strip()]
