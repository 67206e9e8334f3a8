"""
Acquired webhook processing.

Loads the transaction named in the webhook, resolves the order(s) it
belongs to and applies the transaction details to each order payment.
Multishipping transactions carry a synthetic ``-ACQM`` order id and list
the real sub-orders in custom2.
"""

import logging
from typing import List

from app.core.exceptions import OrderNotFoundError
from app.core.interfaces import OrderRepository
from app.models.order import SalesOrder
from app.schemas.acquired import TransactionOutcome, WebhookPayload, WebhookResponse
from app.services.acquired_client import AcquiredClient
from app.services.multishipping_service import (
    is_multishipping_order_id,
    split_multishipping_order_ids,
)
from app.services.payment_details_handler import PaymentDetailsHandler

logger = logging.getLogger(__name__)

HANDLED_STATUSES = {"success", "settled", "executed", "tds_success"}


class WebhookService:
    def __init__(
        self,
        client: AcquiredClient,
        order_repository: OrderRepository,
        handler: PaymentDetailsHandler | None = None,
    ):
        self.client = client
        self.order_repository = order_repository
        self.handler = handler or PaymentDetailsHandler()

    def resolve_order_ids(self, transaction: TransactionOutcome) -> List[str]:
        # only the gateway record decides which order a transaction belongs to
        order_id = transaction.order_id
        if not order_id:
            raise OrderNotFoundError(
                f"Transaction {transaction.transaction_id} carries no order id",
                details={"transaction_id": transaction.transaction_id},
            )
        if is_multishipping_order_id(order_id):
            order_ids = split_multishipping_order_ids(transaction.custom2)
            if order_ids:
                return order_ids
        return [order_id]

    def _load_orders(self, order_ids: List[str]) -> List[SalesOrder]:
        orders = []
        for order_id in order_ids:
            order = self.order_repository.load_by_increment_id(order_id)
            if order is None:
                raise OrderNotFoundError(details={"order_id": order_id})
            orders.append(order)
        return orders

    async def process(self, payload: WebhookPayload) -> WebhookResponse:
        body = payload.webhook_body
        status = (body.status or "").lower()

        logger.info(
            f"[acquired] webhook received: type={payload.webhook_type}, "
            f"transaction_id={body.transaction_id}, status={status}"
        )

        if status and status not in HANDLED_STATUSES:
            return WebhookResponse(action="IGNORED", transaction_id=body.transaction_id)

        data = await self.client.get_transaction(body.transaction_id)
        transaction = TransactionOutcome.model_validate(
            {"transaction_id": body.transaction_id, **data}
        )

        transaction_status = (transaction.status or status).lower()
        if transaction_status not in HANDLED_STATUSES:
            logger.info(
                f"[acquired] transaction {transaction.transaction_id} not applied: "
                f"status={transaction_status or 'missing'}"
            )
            return WebhookResponse(action="IGNORED", transaction_id=transaction.transaction_id)

        order_ids = self.resolve_order_ids(transaction)
        orders = self._load_orders(order_ids)

        for order in orders:
            if order.get_payment() is None:
                raise OrderNotFoundError(
                    f"Order {order.increment_id} has no payment",
                    details={"order_id": order.increment_id},
                )

        for order in orders:
            self.handler.handle(order.get_payment(), transaction)
            self.order_repository.save(order)

        logger.info(
            f"[acquired] transaction {transaction.transaction_id} applied to orders {order_ids}"
        )
        return WebhookResponse(
            action="APPLIED",
            transaction_id=transaction.transaction_id,
            orders=order_ids,
        )
