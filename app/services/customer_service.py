import logging
from typing import Dict

from app.core.exceptions import ExternalServiceError
from app.core.interfaces import CustomerSession, CustomerStore
from app.services.acquired_client import AcquiredClient

logger = logging.getLogger(__name__)

CUSTOMER_FIELD_MAPPING = [
    ("first_name", "first_name"),
    ("last_name", "last_name"),
    ("email", "email"),
]


class CreateAcquiredCustomer:
    """Ensure the logged-in customer has a customer record on Acquired."""

    def __init__(self, client: AcquiredClient, customer_store: CustomerStore):
        self.client = client
        self.customer_store = customer_store

    async def execute(self, customer: CustomerSession) -> Dict[str, str]:
        customer_id = customer.get_customer_id()
        if not customer_id:
            raise ValueError("Customer session has no customer id")
        customer_id = str(customer_id)

        existing = self.customer_store.get_acquired_customer_id(customer_id)
        if existing:
            return {"customer_id": existing}

        data = customer.get_customer_data() or {}
        payload = {"reference": customer_id}
        for src, dest in CUSTOMER_FIELD_MAPPING:
            val = data.get(src)
            if isinstance(val, str) and val:
                payload[dest] = val

        response = await self.client.create_customer(payload)
        acquired_customer_id = response.get("customer_id")
        if not acquired_customer_id:
            raise ExternalServiceError(
                "Acquired customer creation returned no customer_id",
                details={"response": response},
            )

        self.customer_store.set_acquired_customer_id(customer_id, acquired_customer_id)
        logger.info(
            f"[acquired] created customer {acquired_customer_id} for customer {customer_id}"
        )
        return {"customer_id": acquired_customer_id}
