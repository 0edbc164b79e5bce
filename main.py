"""
Main FastAPI Application
Entry point for the Sealed Letter OTP service
"""
import uvicorn

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from typing import Optional

import logging

from sealed_otp.core.config import Settings, settings as default_settings
from sealed_otp.background.scheduler import BackgroundScheduler
from sealed_otp.db.repositories.otp_session_repository import OTPSessionRepository
from sealed_otp.services.otp_service import OTPService
from sealed_otp.services.recipient_service import RecipientResolver
from sealed_otp.services.telegram_service import TelegramClient
from sealed_otp.exceptions.handlers import (
    otp_gate_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)
from sealed_otp.exceptions.custom_exceptions import OTPGateException
from sealed_otp.utils.logger import setup_logger

# Routers
from sealed_otp.api.routes import (
    health_routes,
    otp_routes,
    static_routes,
)

logger = logging.getLogger("sealed_otp.main")


# ============================================================================
# LIFESPAN EVENTS
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown."""
    settings: Settings = app.state.settings
    scheduler: BackgroundScheduler = app.state.scheduler

    # STARTUP
    logger.info("=" * 60)
    logger.info(f" STARTING {settings.APP_NAME.upper()}")
    logger.info("=" * 60)

    if not settings.is_token_configured:
        logger.warning(" Bot token missing. Set TG_BOT_TOKEN or TELEGRAM_BOT_TOKEN in .env")
    if settings.is_fixed_chat_configured:
        logger.info(" Using fixed Telegram chat from TELEGRAM_CHAT_ID")

    await scheduler.start()
    scheduler_stats = scheduler.get_statistics()
    logger.info(f" Scheduler: {scheduler_stats['total_jobs']} jobs scheduled")
    logger.info(f" Ready on http://localhost:{settings.PORT}")

    yield

    # SHUTDOWN
    logger.info(" Shutting down...")

    await scheduler.shutdown()

    try:
        await app.state.telegram.aclose()
    except Exception as e:
        logger.error(f"Error closing Telegram client: {e}")

    logger.info(" Shutdown complete")


# ============================================================================
# CREATE APP
# ============================================================================

def create_app(
    settings: Optional[Settings] = None,
    telegram_client: Optional[TelegramClient] = None,
) -> FastAPI:
    """
    Build the application and its components

    Args:
        settings: Settings to use, the environment-loaded ones by default
        telegram_client: Pre-built Bot API client (tests pass a mocked one)
    """
    settings = settings or default_settings

    setup_logger(log_file=settings.LOG_FILE, level=settings.LOG_LEVEL)

    telegram = telegram_client or TelegramClient(
        settings.TELEGRAM_BOT_TOKEN,
        base_url=settings.TELEGRAM_API_BASE_URL,
        timeout=settings.TELEGRAM_HTTP_TIMEOUT,
    )
    resolver = RecipientResolver(telegram, fixed_chat_id=settings.TELEGRAM_CHAT_ID)
    otp_service = OTPService(
        OTPSessionRepository(),
        telegram,
        resolver,
        ttl_ms=settings.OTP_TTL_MS,
        max_attempts=settings.OTP_MAX_ATTEMPTS,
    )

    app = FastAPI(
        title=settings.APP_NAME,
        description="One-time passcodes delivered through a Telegram bot",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.telegram = telegram
    app.state.recipient_resolver = resolver
    app.state.otp_service = otp_service
    app.state.scheduler = BackgroundScheduler(
        otp_service,
        sweep_interval_seconds=settings.OTP_SWEEP_INTERVAL_SECONDS,
        timezone=settings.TIMEZONE,
    )

    # MIDDLEWARE
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming requests."""
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    # EXCEPTION HANDLERS
    app.add_exception_handler(OTPGateException, otp_gate_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ROUTERS (catch-all last)
    app.include_router(health_routes.router)
    app.include_router(otp_routes.router)
    app.include_router(static_routes.router)

    return app


app = create_app()


# ============================================================================
# RUN APP
# ============================================================================

if __name__ == "__main__":

    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
