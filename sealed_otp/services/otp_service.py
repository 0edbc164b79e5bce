"""
OTP Service
Issue, verify and expire Telegram-delivered OTP sessions
"""

from typing import Callable, Optional
import logging
import math
import time
import uuid

from sealed_otp.db.repositories.otp_session_repository import OTPSessionRepository
from sealed_otp.exceptions.custom_exceptions import (
    ConfigurationException,
    OTPExpiredException,
    OTPMaxAttemptsException,
    OTPNotFoundException,
    OTPValidationException,
    UpstreamException,
)
from sealed_otp.models.otp_session import IssuedOTP, OTPSession, VerificationResult
from sealed_otp.services.recipient_service import RecipientResolver
from sealed_otp.services.telegram_service import TelegramClient
from sealed_otp.utils.otp_generator import OTPGenerator

logger = logging.getLogger(__name__)


class OTPService:
    """OTP session lifecycle"""

    def __init__(
        self,
        store: OTPSessionRepository,
        telegram: TelegramClient,
        resolver: RecipientResolver,
        *,
        ttl_ms: int = 300000,
        max_attempts: int = 5,
        clock: Callable[[], float] = time.time,
        code_factory: Callable[[], str] = OTPGenerator.generate_otp,
    ):
        self.store = store
        self.telegram = telegram
        self.resolver = resolver
        self.ttl_ms = ttl_ms
        self.max_attempts = max_attempts
        self.clock = clock
        self.code_factory = code_factory

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_ms // 1000

    @property
    def ttl_minutes(self) -> int:
        """Minutes quoted in the delivered message, rounded up"""
        return math.ceil(self.ttl_ms / 60000)

    # ========================================================================
    # ISSUE
    # ========================================================================

    async def issue(self, chat_id: Optional[str] = None) -> IssuedOTP:
        """
        Create a session and deliver its code

        Args:
            chat_id: Explicit recipient, resolved from config or bot
                activity when omitted

        Returns:
            Session id and TTL in whole seconds

        Raises:
            ConfigurationException: No bot token
            SelfRecipientException / NoRecipientFoundException: Resolution failed
            UpstreamException: Telegram refused a call
        """
        if not self.telegram.is_configured:
            raise ConfigurationException()

        recipient = await self.resolver.resolve(chat_id)

        otp = self.code_factory()
        session = OTPSession(
            session_id=str(uuid.uuid4()),
            chat_id=recipient,
            otp_hash=OTPGenerator.hash_otp(otp),
            attempts=0,
            expires_at=self.clock() + self.ttl_ms / 1000,
        )
        self.store.set(session)

        try:
            await self.telegram.send_message(
                recipient,
                f"Your Sealed Letter OTP is: {otp}\nThis code expires in {self.ttl_minutes} minute(s).",
            )
        except UpstreamException:
            # Undeliverable code, nobody can ever verify it
            self.store.delete(session.session_id)
            raise

        logger.info(f"OTP issued for session {session.session_id}")

        return IssuedOTP(session_id=session.session_id, expires_in_seconds=self.ttl_seconds)

    # ========================================================================
    # VERIFY
    # ========================================================================

    async def verify(self, session_id: Optional[str], code: Optional[str]) -> VerificationResult:
        """
        Check a code against its session

        Validation runs before lookup. Expired and exhausted sessions are
        deleted when detected, as is the session on success.

        Raises:
            OTPValidationException: Missing session id or malformed code
            OTPNotFoundException: Unknown, consumed or swept session
            OTPExpiredException: TTL elapsed
            OTPMaxAttemptsException: Attempt cap reached
        """
        session_id = (session_id or "").strip()
        code = (code or "").strip()

        if not session_id:
            raise OTPValidationException("Missing sessionId. Request a new OTP first.")

        if not OTPGenerator.is_valid_format(code):
            raise OTPValidationException("OTP must be exactly 6 digits.")

        session = self.store.get(session_id)
        if session is None:
            raise OTPNotFoundException()

        if session.is_expired(self.clock()):
            self.store.delete(session_id)
            logger.info(f"OTP session {session_id} expired")
            raise OTPExpiredException()

        if session.attempts >= self.max_attempts:
            self.store.delete(session_id)
            raise OTPMaxAttemptsException()

        if not OTPGenerator.verify_otp(code, session.otp_hash):
            session.attempts += 1

            if session.attempts >= self.max_attempts:
                self.store.delete(session_id)
                logger.warning(f"OTP session {session_id} exhausted after {session.attempts} attempts")
                raise OTPMaxAttemptsException()

            self.store.set(session)
            logger.info(f"Invalid OTP for session {session_id} (attempt {session.attempts}/{self.max_attempts})")
            return VerificationResult(valid=False, message="Invalid OTP.")

        self.store.delete(session_id)
        logger.info(f"OTP verified for session {session_id}")

        return VerificationResult(valid=True, message="OTP verified.")

    # ========================================================================
    # SWEEP
    # ========================================================================

    def sweep(self) -> None:
        """Drop every expired session"""
        removed = self.store.sweep(self.clock())
        if removed:
            logger.info(f"Swept {removed} expired OTP session(s)")
