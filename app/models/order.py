from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class OrderPayment:
    """Payment record of a host order, as written by the response handler."""

    method: str = "acquired_card"
    last_trans_id: Optional[str] = None
    transaction_id: Optional[str] = None
    cc_type: Optional[str] = None
    cc_last4: Optional[str] = None
    cc_exp_month: Optional[str] = None
    cc_exp_year: Optional[str] = None
    additional_information: Dict[str, Any] = field(default_factory=dict)
    is_transaction_closed: bool = True
    should_close_parent_transaction: bool = True
    order: Optional["SalesOrder"] = field(default=None, repr=False, compare=False)

    def set_additional_information(self, key: str, value: Any) -> None:
        self.additional_information[key] = value

    def get_additional_information(self, key: str) -> Any:
        return self.additional_information.get(key)


@dataclass
class SalesOrder:
    increment_id: str
    entity_id: Optional[int] = None
    can_send_new_email_flag: bool = False
    payment: Optional[OrderPayment] = None

    def __post_init__(self) -> None:
        if self.payment is not None:
            self.payment.order = self

    def get_payment(self) -> Optional[OrderPayment]:
        return self.payment

    def __repr__(self) -> str:
        return f"<SalesOrder {self.increment_id}>"
