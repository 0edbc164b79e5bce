"""
Request Schemas Module
All API request schemas
"""

from sealed_otp.schemas.requests.otp_requests import RequestOTPRequest, VerifyOTPRequest

__all__ = [
    "RequestOTPRequest",
    "VerifyOTPRequest"
]
