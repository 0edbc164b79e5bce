"""
Services Module
Business logic layer
"""

from sealed_otp.services.telegram_service import TelegramClient
from sealed_otp.services.recipient_service import RecipientResolver
from sealed_otp.services.otp_service import OTPService

__all__ = [
    "TelegramClient",
    "RecipientResolver",
    "OTPService"
]
