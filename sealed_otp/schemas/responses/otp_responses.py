"""
OTP Response Schemas
Pydantic models for OTP endpoint responses
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    ok: bool = True
    tokenConfigured: bool
    fixedChatConfigured: bool


class ChatIdResponse(BaseModel):
    ok: bool = True
    chatId: str


class RequestOTPResponse(BaseModel):
    """Response schema for a delivered OTP"""

    ok: bool = True
    sessionId: str
    expiresInSeconds: int
    message: str = "OTP sent to your Telegram chat."

    class Config:
        json_schema_extra = {
            "example": {
                "ok": True,
                "sessionId": "1b4e28ba-2fa1-11d2-883f-0016d3cca427",
                "expiresInSeconds": 300,
                "message": "OTP sent to your Telegram chat."
            }
        }


class VerifyOTPResponse(BaseModel):
    valid: bool
    message: str


class ErrorResponse(BaseModel):
    ok: bool = False
    message: str
