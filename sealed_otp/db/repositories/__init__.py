"""
Repositories Module
Session storage layer
"""

from sealed_otp.db.repositories.otp_session_repository import OTPSessionRepository

__all__ = [
    "OTPSessionRepository"
]
