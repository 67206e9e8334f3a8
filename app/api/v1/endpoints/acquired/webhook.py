"""
Acquired Webhook Route.

Endpoint:
  POST /api/v1/acquired/webhook — Receive transaction webhooks from Acquired
"""

import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_webhook_service
from app.schemas.acquired import WebhookPayload, WebhookResponse
from app.services.webhook_service import WebhookService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/webhook",
    response_model=WebhookResponse,
    summary="Receive Acquired webhook events",
)
async def handle_acquired_webhook(
    payload: WebhookPayload,
    service: WebhookService = Depends(get_webhook_service),
):
    result = await service.process(payload)

    logger.info(f"[acquired] webhook processed, action={result.action}")
    return result
