"""
Health Routes
Configuration status for the front end
"""

from fastapi import APIRouter, Depends

from sealed_otp.core.config import Settings
from sealed_otp.core.dependencies import get_settings
from sealed_otp.schemas.responses.otp_responses import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.api_route("/health", methods=["GET", "HEAD"], response_model=HealthResponse, summary="Health Check")
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        tokenConfigured=settings.is_token_configured,
        fixedChatConfigured=settings.is_fixed_chat_configured
    )
