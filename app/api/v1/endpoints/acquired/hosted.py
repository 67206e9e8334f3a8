"""
Hosted payment page return routes.

Endpoints:
  GET  /api/v1/acquired/hosted/response/{order_id} — Nonce for the response page
  POST /api/v1/acquired/hosted/verify              — Verify a returned nonce

The response endpoint always answers 200: when no nonce can be produced
the body carries a readable message in its place.
"""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_nonce_correlator
from app.schemas.acquired import HostedResponse, NonceVerifyRequest, NonceVerifyResponse
from app.services.nonce_service import NonceCorrelator

router = APIRouter()


@router.get(
    "/hosted/response/{order_id}",
    response_model=HostedResponse,
    summary="Encrypted nonce for the hosted response page",
)
async def hosted_response(
    order_id: str,
    correlator: NonceCorrelator = Depends(get_nonce_correlator),
):
    return HostedResponse(order_id=order_id, nonce=correlator.encrypted_nonce(order_id))


@router.post(
    "/hosted/verify",
    response_model=NonceVerifyResponse,
    summary="Verify a hosted response nonce",
)
async def verify_nonce(
    body: NonceVerifyRequest,
    correlator: NonceCorrelator = Depends(get_nonce_correlator),
):
    return NonceVerifyResponse(valid=correlator.verify(body.order_id, body.nonce))
