"""
Pydantic models for the Acquired payment session and transaction payloads.

Field names mirror the gateway wire contract and must not be renamed.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


ChallengePreference = Literal[
    "challenge_mandated",
    "challenge_preferred",
    "no_challenge_requested",
    "no_preference",
]


# ──────────────────────────────────────────────────────────────────────
#  Session request – POST/PUT /payment-sessions
# ──────────────────────────────────────────────────────────────────────


class SessionTransaction(BaseModel):
    order_id: str
    amount: str = Field(..., description="Decimal string fixed to 2 places")
    currency: str = Field(..., description="Lowercase ISO 4217 code")
    capture: bool
    custom1: Optional[str] = None
    custom2: Optional[str] = None
    custom_data: Optional[str] = Field(
        None, description="base64 encoded serialized custom data"
    )


class SessionTds(BaseModel):
    is_active: bool
    challenge_preference: ChallengePreference
    contact_url: str
    redirect_url: str
    webhook_url: str


class SessionCustomer(BaseModel):
    customer_id: str


class SessionPayment(BaseModel):
    create_card: bool
    reference: str


class SessionRequest(BaseModel):
    """Outbound payload for creating or updating a hosted payment session."""

    transaction: SessionTransaction
    tds: Optional[SessionTds] = None
    customer: Optional[SessionCustomer] = None
    payment: Optional[SessionPayment] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SessionData(BaseModel):
    session_id: str
    order_id: str


# ──────────────────────────────────────────────────────────────────────
#  Transaction outcome – GET /transactions/{id} and webhooks
# ──────────────────────────────────────────────────────────────────────


class TransactionCard(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    scheme: Optional[str] = None
    number: Optional[str] = Field(None, description="Last four digits")
    expiry_month: Optional[str] = None
    expiry_year: Optional[str] = None
    holder_name: Optional[str] = None


class TransactionCheck(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    avs_line1: Optional[str] = None
    avs_postcode: Optional[str] = None
    cvv: Optional[str] = None


class TransactionOutcome(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    transaction_id: str
    payment_method: Optional[str] = None
    mid: Optional[str] = None
    authorization_code: Optional[str] = None
    status: Optional[str] = None
    order_id: Optional[str] = None
    custom1: Optional[str] = None
    custom2: Optional[str] = None
    card: Optional[TransactionCard] = None
    check: Optional[TransactionCheck] = None


# ──────────────────────────────────────────────────────────────────────
#  HTTP surface
# ──────────────────────────────────────────────────────────────────────


class SessionCreateRequest(BaseModel):
    custom_data: Optional[Dict[str, Any]] = None


class HostedResponse(BaseModel):
    order_id: str
    nonce: str


class NonceVerifyRequest(BaseModel):
    order_id: str
    nonce: str


class NonceVerifyResponse(BaseModel):
    valid: bool


class WebhookBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    transaction_id: str
    order_id: Optional[str] = None
    status: Optional[str] = None


class WebhookPayload(BaseModel):
    """Incoming webhook payload from Acquired."""

    model_config = ConfigDict(extra="allow")

    webhook_type: Optional[str] = None
    webhook_id: Optional[str] = None
    timestamp: Optional[int] = None
    webhook_body: WebhookBody


class WebhookResponse(BaseModel):
    action: str
    transaction_id: Optional[str] = None
    orders: List[str] = []
