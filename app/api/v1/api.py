from fastapi import APIRouter

from app.api.v1.endpoints.acquired.router import acquired_router

api_router = APIRouter()

# Full paths: /api/v1/acquired/session, /api/v1/acquired/webhook, etc.
api_router.include_router(
    acquired_router,
    prefix="/acquired",
    tags=["acquired"],
)
