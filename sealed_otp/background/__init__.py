"""
Background Module
Scheduler and periodic jobs
"""

from sealed_otp.background.scheduler import BackgroundScheduler

__all__ = [
    "BackgroundScheduler"
]
