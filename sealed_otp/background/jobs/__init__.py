"""
Background Jobs Module
Scheduled job definitions
"""

from sealed_otp.background.jobs.cleanup_jobs import cleanup_expired_sessions

__all__ = [
    "cleanup_expired_sessions"
]
