"""
OTP Routes
Endpoints for chat resolution, OTP delivery and verification
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from sealed_otp.core.config import Settings
from sealed_otp.core.dependencies import get_otp_service, get_recipient_resolver, get_settings
from sealed_otp.exceptions.custom_exceptions import ConfigurationException
from sealed_otp.schemas.requests.otp_requests import RequestOTPRequest, VerifyOTPRequest
from sealed_otp.schemas.responses.otp_responses import (
    ChatIdResponse,
    ErrorResponse,
    RequestOTPResponse,
    VerifyOTPResponse,
)
from sealed_otp.services.otp_service import OTPService
from sealed_otp.services.recipient_service import RecipientResolver

router = APIRouter(prefix="/api", tags=["OTP"])


@router.api_route(
    "/bot/chat-id",
    methods=["GET", "HEAD"],
    response_model=ChatIdResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Resolve the delivery chat id"
)
async def get_chat_id(
    settings: Settings = Depends(get_settings),
    resolver: RecipientResolver = Depends(get_recipient_resolver)
):
    """
    **Resolve Chat Id**

    - Uses TELEGRAM_CHAT_ID when configured
    - Otherwise scans the bot's recent updates for a human sender
    - Never returns the bot's own id
    """
    if not settings.is_token_configured:
        raise ConfigurationException()

    chat_id = await resolver.resolve()
    return ChatIdResponse(chatId=chat_id)


@router.post(
    "/request-otp",
    response_model=RequestOTPResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Send an OTP to Telegram"
)
async def request_otp(
    request: Optional[RequestOTPRequest] = Body(None),
    otp_service: OTPService = Depends(get_otp_service)
):
    """
    **Request OTP**

    - Resolves the chat (explicit chatId wins)
    - Generates a 6-digit code and sends it through the bot
    - Returns the session id; the code itself is never returned
    """
    chat_id = request.chatId if request else None

    issued = await otp_service.issue(chat_id)

    return RequestOTPResponse(
        sessionId=issued.session_id,
        expiresInSeconds=issued.expires_in_seconds
    )


@router.post(
    "/verify-telegram-otp",
    response_model=VerifyOTPResponse,
    responses={
        400: {"model": VerifyOTPResponse},
        401: {"model": VerifyOTPResponse},
        429: {"model": VerifyOTPResponse},
    },
    summary="Verify an OTP"
)
async def verify_telegram_otp(
    request: Optional[VerifyOTPRequest] = Body(None),
    otp_service: OTPService = Depends(get_otp_service)
):
    """
    **Verify OTP**

    - 200 when the code matches (the session is consumed)
    - 401 on a wrong code while attempts remain
    - 400 for malformed input, unknown or expired sessions
    - 429 once the attempt cap is reached
    """
    request = request or VerifyOTPRequest()

    result = await otp_service.verify(request.sessionId, request.code)

    if not result.valid:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=result.model_dump()
        )

    return VerifyOTPResponse(**result.model_dump())
