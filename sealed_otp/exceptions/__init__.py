"""
Exceptions Module
Custom exceptions and handlers
"""

from sealed_otp.exceptions.custom_exceptions import (
    # Base
    OTPGateException,

    # Configuration
    ConfigurationException,

    # Telegram
    UpstreamException,

    # Recipient
    SelfRecipientException,
    NoRecipientFoundException,

    # Verification
    VerificationException,
    OTPValidationException,
    OTPNotFoundException,
    OTPExpiredException,
    OTPMaxAttemptsException,
)

from sealed_otp.exceptions.handlers import (
    otp_gate_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

__all__ = [
    "OTPGateException",
    "ConfigurationException",
    "UpstreamException",
    "SelfRecipientException",
    "NoRecipientFoundException",
    "VerificationException",
    "OTPValidationException",
    "OTPNotFoundException",
    "OTPExpiredException",
    "OTPMaxAttemptsException",

    # Handlers
    "otp_gate_exception_handler",
    "validation_exception_handler",
    "generic_exception_handler"
]
