"""
Response Schemas Module
All API response schemas
"""

from sealed_otp.schemas.responses.otp_responses import (
    HealthResponse,
    ChatIdResponse,
    RequestOTPResponse,
    VerifyOTPResponse,
    ErrorResponse
)

__all__ = [
    "HealthResponse",
    "ChatIdResponse",
    "RequestOTPResponse",
    "VerifyOTPResponse",
    "ErrorResponse"
]
