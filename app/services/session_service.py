import logging
from typing import Any, Dict, Optional

from app.core.exceptions import ExternalServiceError
from app.core.interfaces import CheckoutContext
from app.schemas.acquired import SessionData
from app.services.acquired_client import AcquiredClient
from app.services.session_payload import GetPaymentSessionData

logger = logging.getLogger(__name__)


class SessionService:
    """Create and update hosted checkout sessions on Acquired."""

    def __init__(self, client: AcquiredClient, payment_session_data: GetPaymentSessionData):
        self.client = client
        self.payment_session_data = payment_session_data

    async def get(
        self,
        context: CheckoutContext,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> SessionData:
        order_id = context.cart.reserve_order_id()
        payload = await self.payment_session_data.execute(order_id, context, custom_data)

        response = await self.client.create_payment_session(payload.to_payload())
        session_id = _pick_session_id(response)
        if not session_id:
            raise ExternalServiceError(
                "Acquired session creation returned no session_id",
                details={"response": response},
            )

        logger.info(
            f"[acquired] session {session_id} created for order {payload.transaction.order_id}"
        )
        return SessionData(session_id=session_id, order_id=payload.transaction.order_id)

    async def update(
        self,
        context: CheckoutContext,
        session_id: str,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> SessionData:
        order_id = context.cart.reserve_order_id()
        payload = await self.payment_session_data.execute(order_id, context, custom_data)

        response = await self.client.update_payment_session(session_id, payload.to_payload())

        logger.info(
            f"[acquired] session {session_id} updated for order {payload.transaction.order_id}"
        )
        return SessionData(
            session_id=_pick_session_id(response) or session_id,
            order_id=payload.transaction.order_id,
        )


def _pick_session_id(data: Dict[str, Any]) -> Optional[str]:
    value = data.get("session_id")
    return value if isinstance(value, str) and value else None
