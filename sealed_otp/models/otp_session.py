from pydantic import BaseModel


class OTPSession(BaseModel):
    session_id: str
    chat_id: str

    # SHA-256 of the code; the plaintext is never kept
    otp_hash: str

    attempts: int = 0
    expires_at: float  # epoch seconds

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class IssuedOTP(BaseModel):
    session_id: str
    expires_in_seconds: int


class VerificationResult(BaseModel):
    valid: bool
    message: str
