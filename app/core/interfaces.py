"""
Interfaces of the host-platform collaborators consumed by the bridge.

The host application (cart/quote persistence, customer session, order
repository, URL routing) implements these and passes them in explicitly,
either per request through ``CheckoutContext`` or once at start-up through
``HostAdapters``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

from fastapi import Request

from app.models.order import SalesOrder


class CartReader(Protocol):
    def get_grand_total(self) -> Union[Decimal, float, str]: ...

    def is_multi_shipping(self) -> bool: ...

    def get_shipping_address_count(self) -> int: ...

    def reserve_order_id(self) -> str:
        """Reserve (or return the already reserved) increment id for the cart."""
        ...

    def set_reserved_order_ids(self, order_ids: List[str]) -> None: ...


class CustomerSession(Protocol):
    def is_logged_in(self) -> bool: ...

    def get_customer_id(self) -> Optional[str]: ...

    def get_customer_data(self) -> Dict[str, Any]:
        """Email / first_name / last_name of the logged-in customer, when known."""
        ...


class UrlBuilder(Protocol):
    def get_url(self, route_name: str) -> str: ...


class OrderRepository(Protocol):
    def load_by_increment_id(self, increment_id: str) -> Optional[SalesOrder]: ...

    def save(self, order: SalesOrder) -> None: ...


class CustomerStore(Protocol):
    """Where the host keeps the gateway customer id of its customers."""

    def get_acquired_customer_id(self, customer_id: str) -> Optional[str]: ...

    def set_acquired_customer_id(self, customer_id: str, acquired_customer_id: str) -> None: ...


class Serializer(Protocol):
    def serialize(self, data: Dict[str, Any]) -> str: ...

    def unserialize(self, data: str) -> Dict[str, Any]: ...


class OrderIdSequence(Protocol):
    async def reserve(self, count: int) -> List[str]:
        """Atomically reserve ``count`` consecutive order increment ids."""
        ...


class TokenCache(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None: ...

    async def delete(self, key: str) -> None: ...


@dataclass
class CheckoutContext:
    """Request-scoped state of one checkout attempt."""

    cart: CartReader
    currency_code: str
    customer: CustomerSession


@dataclass
class HostAdapters:
    """Long-lived host collaborators wired into the FastAPI app."""

    checkout_context: Callable[[Request], CheckoutContext]
    url_builder: UrlBuilder
    order_repository: OrderRepository
    customer_store: CustomerStore
