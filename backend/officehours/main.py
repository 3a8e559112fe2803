"""
Office Hours Queue API - Main FastAPI application.

Students join a room's line with their phone number, TAs serve from the
front, and the next student can be pinged on WhatsApp.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from officehours.config import Settings, get_settings
from officehours.errors import DuplicateError, NotFoundError
from officehours.services.delivery import DeliveryChannel
from officehours.state import build_office_hours
from officehours.utils.timezone import utc_now

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    office = app.state.office
    configure_logging(office.settings)

    # Startup
    logger.info(f"Starting {office.settings.app_name} in {office.settings.app_env} mode...")
    office.dispatcher.bind_loop(asyncio.get_running_loop())
    logger.info(
        f"Default room {office.default_room_code} ready, WhatsApp "
        f"{'enabled' if office.dispatcher.channel.enabled else 'disabled'}"
    )

    yield

    # Shutdown
    logger.info("Shutting down...")
    if office.dispatcher.pending_count:
        logger.info(f"Waiting for {office.dispatcher.pending_count} notification(s)...")
    await office.dispatcher.drain()


async def duplicate_error_handler(request: Request, exc: DuplicateError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


def create_app(
    settings: Optional[Settings] = None,
    channel: Optional[DeliveryChannel] = None,
) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Office hours queue with WhatsApp notifications",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.office = build_office_hours(settings, channel)

    # CORS middleware - allow the frontend to connect
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "ok",
            "timestamp": utc_now().isoformat(),
            "delivery_enabled": app.state.office.dispatcher.channel.enabled,
        }

    # Routers
    from officehours.routers import auth, notifications, queue, rooms, tas

    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(rooms.router, prefix="/api/rooms", tags=["Rooms"])
    app.include_router(queue.router, prefix="/api/rooms/{code}/queue", tags=["Queue"])
    app.include_router(queue.default_router, prefix="/api/queue", tags=["Queue"])
    app.include_router(tas.router, prefix="/api/tas", tags=["TAs"])
    app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])

    # Development route to clear all data
    if settings.app_env == "development":
        from officehours.routers import dev

        app.include_router(dev.router, prefix="/api", tags=["Development"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "officehours.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug and not settings.is_production,
    )
