"""
OTP Request Schemas
Pydantic models for OTP endpoints
"""

from pydantic import BaseModel, Field, validator
from typing import Any, Optional


class RequestOTPRequest(BaseModel):
    """Request schema for sending an OTP"""

    chatId: Optional[str] = Field(None, description="Telegram chat id, resolved automatically when omitted")

    @validator('chatId', pre=True)
    def only_strings(cls, v: Any):
        # Non-string chat ids are ignored rather than rejected
        if not isinstance(v, str):
            return None
        return v.strip() or None

    class Config:
        json_schema_extra = {
            "example": {
                "chatId": "123456789"
            }
        }


class VerifyOTPRequest(BaseModel):
    """Request schema for OTP verification"""

    sessionId: str = Field("", description="Session id returned by request-otp")
    code: str = Field("", description="6-digit OTP")

    @validator('sessionId', 'code', pre=True)
    def to_text(cls, v: Any):
        # Format checks happen in the service so they precede session lookup
        if v is None:
            return ""
        return str(v).strip()

    class Config:
        json_schema_extra = {
            "example": {
                "sessionId": "1b4e28ba-2fa1-11d2-883f-0016d3cca427",
                "code": "123456"
            }
        }
