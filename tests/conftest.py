# tests/conftest.py
# Shared fixtures: in-memory host adapters and sample gateway payloads

from decimal import Decimal

import pytest

from app.core.config import Settings
from app.core.encryption import Encryptor
from app.core.interfaces import CheckoutContext
from app.models.order import OrderPayment, SalesOrder
from app.services.card_config import CardConfig


class FakeCart:
    def __init__(self, grand_total="100.00", multi_shipping=False, addresses=1, reserved_id="000000100"):
        self.grand_total = grand_total
        self.multi_shipping = multi_shipping
        self.addresses = addresses
        self.reserved_id = reserved_id
        self.reserved_order_ids = []

    def get_grand_total(self):
        return self.grand_total

    def is_multi_shipping(self):
        return self.multi_shipping

    def get_shipping_address_count(self):
        return self.addresses

    def reserve_order_id(self):
        return self.reserved_id

    def set_reserved_order_ids(self, order_ids):
        self.reserved_order_ids = order_ids


class FakeCustomer:
    def __init__(self, customer_id=None, data=None):
        self.customer_id = customer_id
        self.data = data or {}

    def is_logged_in(self):
        return self.customer_id is not None

    def get_customer_id(self):
        return self.customer_id

    def get_customer_data(self):
        return self.data


class FakeUrlBuilder:
    def __init__(self, base_url="http://shop.example/"):
        self.base_url = base_url

    def get_url(self, route_name):
        return f"{self.base_url}{route_name}/"


class InMemoryOrderRepository:
    def __init__(self, orders=None):
        self.orders = {o.increment_id: o for o in (orders or [])}
        self.saved = []

    def load_by_increment_id(self, increment_id):
        return self.orders.get(increment_id)

    def save(self, order):
        self.saved.append(order.increment_id)


class InMemoryCustomerStore:
    def __init__(self, ids=None):
        self.ids = dict(ids or {})

    def get_acquired_customer_id(self, customer_id):
        return self.ids.get(customer_id)

    def set_acquired_customer_id(self, customer_id, acquired_customer_id):
        self.ids[customer_id] = acquired_customer_id


class FakeTokenCache:
    def __init__(self, values=None):
        self.values = dict(values or {})

    async def get(self, key):
        return self.values.get(key)

    async def set(self, key, value, ttl=None):
        self.values[key] = value

    async def delete(self, key):
        self.values.pop(key, None)


class FakeOrderIdSequence:
    def __init__(self, start=200):
        self.next = start

    async def reserve(self, count):
        ids = [f"{n:09d}" for n in range(self.next, self.next + count)]
        self.next += count
        return ids


def make_order(increment_id="000000100", salt="s4lt", last_trans_id="txn_1"):
    payment = OrderPayment(last_trans_id=last_trans_id)
    if salt is not None:
        payment.set_additional_information("acquired_nonce_salt", salt)
    return SalesOrder(increment_id=increment_id, entity_id=1, payment=payment)


@pytest.fixture
def test_settings():
    return Settings(
        ENVIRONMENT="development",
        SECRET_KEY="test-secret-key",
        ACQUIRED_ENVIRONMENT="sandbox",
        ACQUIRED_APP_ID="app_123",
        ACQUIRED_APP_KEY="key_456",
        ACQUIRED_CAPTURE_ACTION=True,
        ACQUIRED_CREATE_CARD_ENABLED=False,
        ACQUIRED_TDS_ACTIVE=True,
        ACQUIRED_TDS_CHALLENGE_PREFERENCE="challenge_preferred",
        ACQUIRED_TDS_CONTACT_URL="http://shop.example/contact",
    )


@pytest.fixture
def card_config(test_settings):
    return CardConfig(test_settings)


@pytest.fixture
def encryptor():
    return Encryptor("test-secret-key")


@pytest.fixture
def guest_context():
    return CheckoutContext(
        cart=FakeCart(grand_total=Decimal("1234.5")),
        currency_code="USD",
        customer=FakeCustomer(),
    )


@pytest.fixture
def sample_transaction():
    """Acquired GET /transactions/{id} sample"""
    return {
        "transaction_id": "a1b2c3d4",
        "status": "success",
        "payment_method": "card",
        "mid": "1045",
        "authorization_code": "AUTH42",
        "order_id": "000000100",
        "card": {
            "scheme": "VISA",
            "number": "4242",
            "expiry_month": "12",
            "expiry_year": "2027",
            "holder_name": "Jane Doe",
        },
        "check": {
            "avs_line1": "matched",
            "avs_postcode": "matched",
            "cvv": "matched",
        },
    }
