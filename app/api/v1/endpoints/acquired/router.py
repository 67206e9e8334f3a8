"""
Acquired Router Aggregator.

  POST /api/v1/acquired/session                 — Create hosted session
  PUT  /api/v1/acquired/session/{session_id}    — Update hosted session
  GET  /api/v1/acquired/hosted/response/{id}    — Response page nonce
  POST /api/v1/acquired/hosted/verify           — Verify nonce
  POST /api/v1/acquired/webhook                 — Acquired webhook receiver
"""

from fastapi import APIRouter

from app.api.v1.endpoints.acquired.hosted import router as hosted_router
from app.api.v1.endpoints.acquired.session import router as session_router
from app.api.v1.endpoints.acquired.webhook import router as webhook_router

acquired_router = APIRouter()

acquired_router.include_router(session_router)
acquired_router.include_router(hosted_router)
acquired_router.include_router(webhook_router)
