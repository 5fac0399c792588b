"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .config import RelayConfig
from .dispatcher import DeliveryDispatcher
from .errors import register_error_handlers
from .logging import SERVICE_NAME
from .twilio_client import TwilioClient

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the Twilio client. Shutdown: drain deliveries, then close it."""
    settings: RelayConfig = app.state.settings
    client = TwilioClient(settings.twilio)
    await client.start()
    app.state.twilio = client
    app.state.dispatcher = DeliveryDispatcher(client, await_delivery=settings.await_delivery)
    logger.info("sms_relay_started", await_delivery=settings.await_delivery)
    yield
    await app.state.dispatcher.drain()
    await client.stop()
    logger.info("shutdown_complete")


def create_app(settings: RelayConfig | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    if settings is None:
        settings = RelayConfig()  # type: ignore[call-arg]

    app = FastAPI(
        title="SMS Relay",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    register_error_handlers(app)

    from .routes import router as alert_router

    app.include_router(alert_router)

    @app.get("/health")
    async def health():
        dispatcher: DeliveryDispatcher | None = getattr(app.state, "dispatcher", None)
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "pending_deliveries": dispatcher.pending if dispatcher is not None else 0,
        }

    @app.get("/ready")
    async def ready() -> JSONResponse:
        client: TwilioClient | None = getattr(app.state, "twilio", None)
        is_ready = client is not None and client.is_started
        return JSONResponse(
            {"ready": is_ready},
            status_code=200 if is_ready else 503,
        )

    return app
