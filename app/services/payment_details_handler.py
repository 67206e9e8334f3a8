import logging
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from app.core.exceptions import TransactionApplyError
from app.models.order import OrderPayment
from app.schemas.acquired import TransactionOutcome

logger = logging.getLogger(__name__)


def _present(block: Optional[BaseModel]) -> Optional[BaseModel]:
    """Treat an empty card/check block the same as a missing one."""
    if block is None or not block.model_dump(exclude_none=True):
        return None
    return block


class PaymentDetailsHandler:
    """Write an Acquired transaction onto the host order payment."""

    def handle(
        self,
        payment: OrderPayment,
        response: Union[TransactionOutcome, Dict[str, Any]],
    ) -> None:
        try:
            transaction = (
                response
                if isinstance(response, TransactionOutcome)
                else TransactionOutcome.model_validate(response)
            )

            self._set_transaction_data_to_payment(payment, transaction)
            self._set_additional_transaction_data(payment, transaction)

            payment.order.can_send_new_email_flag = True

            # settlement is decided by later gateway callbacks
            payment.is_transaction_closed = False
            payment.should_close_parent_transaction = False
        except Exception as e:
            message = f"Payment Details Handler failed: {e}"
            logger.critical(message, exc_info=True)
            raise TransactionApplyError(message) from e

    @staticmethod
    def _set_transaction_data_to_payment(
        payment: OrderPayment, transaction: TransactionOutcome
    ) -> None:
        payment.last_trans_id = transaction.transaction_id
        payment.transaction_id = transaction.transaction_id

        card = _present(transaction.card)
        if card:
            payment.cc_type = card.scheme
            payment.cc_last4 = card.number
            payment.cc_exp_month = card.expiry_month
            payment.cc_exp_year = card.expiry_year

    @staticmethod
    def _set_additional_transaction_data(
        payment: OrderPayment, transaction: TransactionOutcome
    ) -> None:
        payment.set_additional_information("payment_method", transaction.payment_method)
        payment.set_additional_information("mid", transaction.mid)
        payment.set_additional_information("transaction_id", transaction.transaction_id)
        payment.set_additional_information("authorization_code", transaction.authorization_code)

        card = _present(transaction.card)
        if card:
            payment.set_additional_information("cc_type", card.scheme)
            payment.set_additional_information("holder_name", card.holder_name)
            payment.set_additional_information("cc_last4", card.number)
            payment.set_additional_information(
                "cc_exp", f"{card.expiry_month}/{card.expiry_year}"
            )

        check = _present(transaction.check)
        if check:
            payment.set_additional_information("avs_line1", check.avs_line1)
            payment.set_additional_information("avs_postcode", check.avs_postcode)
            payment.set_additional_information("cvv", check.cvv)
