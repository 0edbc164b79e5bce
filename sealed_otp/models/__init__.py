"""
Models Module
Pydantic models for data validation
"""

from sealed_otp.models.otp_session import OTPSession, IssuedOTP, VerificationResult

__all__ = [
    "OTPSession",
    "IssuedOTP",
    "VerificationResult"
]
