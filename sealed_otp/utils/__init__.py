"""
Utilities Module
Helper functions and utilities
"""

from sealed_otp.utils.otp_generator import OTPGenerator
from sealed_otp.utils.logger import setup_logger

__all__ = [
    'OTPGenerator',
    'setup_logger',
]
