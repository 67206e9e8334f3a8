"""
Hosted response nonce.

When the browser comes back from the gateway's hosted page, the response
page embeds an encrypted nonce binding the order, its last transaction and
a per-order random salt. The storefront posts it back and it is verified
before the order is treated as paid.

Nonce generation never raises: its output is rendered straight into the
response page, so failures come back as a readable message instead.
"""

import hmac
import logging
import secrets
from dataclasses import dataclass

from app.core.encryption import Encryptor
from app.core.exceptions import OrderNotFoundError
from app.core.interfaces import OrderRepository
from app.models.order import OrderPayment, SalesOrder

logger = logging.getLogger(__name__)

NONCE_SALT_KEY = "acquired_nonce_salt"
NONCE_DELIMITER = "::"
MISSING_SALT_MESSAGE = "Missing nonce salt"


@dataclass
class NonceResult:
    value: str
    ok: bool


class NonceCorrelator:
    def __init__(self, order_repository: OrderRepository, encryptor: Encryptor):
        self.order_repository = order_repository
        self.encryptor = encryptor

    @staticmethod
    def assign_salt(payment: OrderPayment) -> str:
        salt = secrets.token_hex(16)
        payment.set_additional_information(NONCE_SALT_KEY, salt)
        return salt

    def get_order(self, order_increment_id: str) -> SalesOrder:
        order = self.order_repository.load_by_increment_id(order_increment_id)
        if order is None:
            raise OrderNotFoundError(details={"order_id": order_increment_id})
        return order

    def _plaintext(self, order_increment_id: str) -> str | None:
        payment = self.get_order(order_increment_id).get_payment()
        if payment is None:
            raise ValueError(f"Order {order_increment_id} has no payment")

        salt = payment.get_additional_information(NONCE_SALT_KEY)
        if salt is None:
            return None

        return NONCE_DELIMITER.join(
            [order_increment_id, str(payment.last_trans_id or ""), salt]
        )

    def resolve(self, order_increment_id: str) -> NonceResult:
        try:
            plaintext = self._plaintext(order_increment_id)
            if plaintext is None:
                return NonceResult(MISSING_SALT_MESSAGE, ok=False)
            return NonceResult(self.encryptor.encrypt(plaintext), ok=True)
        except Exception as e:
            logger.warning(f"[acquired] nonce for order {order_increment_id} unavailable: {e}")
            return NonceResult(str(e), ok=False)

    def encrypted_nonce(self, order_increment_id: str) -> str:
        return self.resolve(order_increment_id).value

    def verify(self, order_increment_id: str, nonce: str) -> bool:
        try:
            expected = self._plaintext(order_increment_id)
            if expected is None:
                return False
            actual = self.encryptor.decrypt(nonce)
        except Exception as e:
            logger.warning(f"[acquired] nonce verification failed for order {order_increment_id}: {e}")
            return False

        return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
