"""
FastAPI Dependencies
Access to the components built by create_app()
"""

from fastapi import Request

from sealed_otp.core.config import Settings
from sealed_otp.services.otp_service import OTPService
from sealed_otp.services.recipient_service import RecipientResolver


def get_settings(request: Request) -> Settings:
    """
    Settings the app was built with

    Usage in endpoint:
        async def endpoint(settings: Settings = Depends(get_settings)):
            ...
    """
    return request.app.state.settings


def get_otp_service(request: Request) -> OTPService:
    return request.app.state.otp_service


def get_recipient_resolver(request: Request) -> RecipientResolver:
    return request.app.state.recipient_resolver
