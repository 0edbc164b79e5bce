"""
Custom Exception Classes
Application-specific exceptions with proper status codes
"""

from fastapi import status
from typing import Any, Optional


class OTPGateException(Exception):
    """Base exception for the OTP gate"""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================

class ConfigurationException(OTPGateException):
    """Bot credentials are missing"""

    def __init__(self, message: str = "Bot token missing. Set TG_BOT_TOKEN or TELEGRAM_BOT_TOKEN in .env"):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


# ============================================================================
# TELEGRAM EXCEPTIONS
# ============================================================================

class UpstreamException(OTPGateException):
    """Telegram Bot API call did not report success"""

    def __init__(self, message: str = "Telegram API call failed", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


# ============================================================================
# RECIPIENT EXCEPTIONS
# ============================================================================

class SelfRecipientException(OTPGateException):
    """Recipient is the bot's own account"""

    def __init__(
        self,
        message: str = "TELEGRAM_CHAT_ID is set to the bot's own ID. Use your personal Telegram chat ID instead."
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class NoRecipientFoundException(OTPGateException):
    """No chat could be resolved"""

    def __init__(
        self,
        message: str = "No Telegram chat found. Send /start to your bot first, then request OTP again."
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


# ============================================================================
# VERIFICATION EXCEPTIONS
# ============================================================================

class VerificationException(OTPGateException):
    """Base OTP verification exception, rendered as {valid, message}"""
    pass


class OTPValidationException(VerificationException):
    """Session id or code is malformed"""

    def __init__(self, message: str = "OTP must be exactly 6 digits."):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class OTPNotFoundException(VerificationException):
    """Session never existed, was consumed, or was swept"""

    def __init__(self, message: str = "OTP session not found. Request a new OTP."):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class OTPExpiredException(VerificationException):
    """OTP has expired"""

    def __init__(self, message: str = "OTP expired. Request a new code."):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST
        )


class OTPMaxAttemptsException(VerificationException):
    """Max OTP verification attempts exceeded"""

    def __init__(self, message: str = "Too many attempts. Request a new OTP."):
        super().__init__(
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS
        )
