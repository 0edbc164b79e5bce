"""
Core Module
Configuration and dependencies
"""

from sealed_otp.core.config import Settings, settings
from sealed_otp.core.dependencies import (
    get_settings,
    get_otp_service,
    get_recipient_resolver
)

__all__ = [
    # Config
    "Settings",
    "settings",

    # Dependencies
    "get_settings",
    "get_otp_service",
    "get_recipient_resolver"
]
