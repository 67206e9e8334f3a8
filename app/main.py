import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.encryption import Encryptor
from app.core.exceptions import AppException
from app.core.interfaces import HostAdapters, OrderIdSequence, TokenCache
from app.core.redis import redis_client
from app.services.acquired_client import AcquiredClient
from app.services.card_config import CardConfig
from app.services.multishipping_service import MultishippingService

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    host: HostAdapters | None = None,
    token_cache: TokenCache | None = None,
    order_id_sequence: OrderIdSequence | None = None,
    acquired_client: AcquiredClient | None = None,
    card_config: CardConfig | None = None,
) -> FastAPI:
    """
    Build the FastAPI app. The host platform passes its adapters in;
    Redis backs the token cache and order id sequence unless replaced.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} starting ({settings.ENVIRONMENT})")
        yield
        await redis_client.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    card_config = card_config or CardConfig(settings)
    app.state.host = host
    app.state.card_config = card_config
    app.state.acquired_client = acquired_client or AcquiredClient(
        config=card_config, token_cache=token_cache
    )
    app.state.multishipping_service = MultishippingService(order_id_sequence)
    app.state.encryptor = Encryptor(settings.SECRET_KEY)

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.error(
            f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}"
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "error_code": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": settings.APP_VERSION}

    app.include_router(api_router, prefix="/api/v1")
    return app
