"""
OTP Session Repository
In-memory storage for live OTP sessions
"""

from typing import Dict, Optional
import logging

from sealed_otp.models.otp_session import OTPSession

logger = logging.getLogger(__name__)


class OTPSessionRepository:
    """
    Session store keyed by session id

    Lives in process memory only. All access happens on the event loop,
    so the dict is never touched by two callers at once. A threaded
    caller would need a lock around every method.
    """

    def __init__(self):
        self._sessions: Dict[str, OTPSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    # ========================================================================
    # READ
    # ========================================================================

    def get(self, session_id: str) -> Optional[OTPSession]:
        """Return a copy of the session so callers persist changes through set()"""
        session = self._sessions.get(session_id)
        return session.model_copy() if session else None

    # ========================================================================
    # WRITE
    # ========================================================================

    def set(self, session: OTPSession) -> None:
        self._sessions[session.session_id] = session.model_copy()

    def delete(self, session_id: str) -> bool:
        """Remove a session, returns False when it was already gone"""
        return self._sessions.pop(session_id, None) is not None

    # ========================================================================
    # CLEANUP
    # ========================================================================

    def sweep(self, now: float) -> int:
        """
        Delete every session whose expiry has passed

        Args:
            now: Current epoch time in seconds

        Returns:
            Number of sessions removed
        """
        expired = [sid for sid, session in self._sessions.items() if session.expires_at <= now]
        for session_id in expired:
            del self._sessions[session_id]
        return len(expired)
