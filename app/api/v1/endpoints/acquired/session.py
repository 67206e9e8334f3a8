"""
Acquired hosted session routes.

Endpoints:
  POST /api/v1/acquired/session              — Create a checkout session
  PUT  /api/v1/acquired/session/{session_id} — Update an existing session
"""

import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_checkout_context, get_session_service
from app.core.interfaces import CheckoutContext
from app.schemas.acquired import SessionCreateRequest, SessionData
from app.services.session_service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/session",
    response_model=SessionData,
    summary="Create an Acquired checkout session",
)
async def create_session(
    body: SessionCreateRequest,
    context: CheckoutContext = Depends(get_checkout_context),
    service: SessionService = Depends(get_session_service),
):
    return await service.get(context, body.custom_data)


@router.put(
    "/session/{session_id}",
    response_model=SessionData,
    summary="Update an Acquired checkout session",
)
async def update_session(
    session_id: str,
    body: SessionCreateRequest,
    context: CheckoutContext = Depends(get_checkout_context),
    service: SessionService = Depends(get_session_service),
):
    return await service.update(context, session_id, body.custom_data)
