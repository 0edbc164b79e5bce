"""
OTP Generator and Verifier
Generate, hash and check six digit codes
"""

import hashlib
import hmac
import re
import secrets


class OTPGenerator:
    """OTP generation and verification"""

    OTP_MIN = 100000
    OTP_SPAN = 900000

    _CODE_PATTERN = re.compile(r"[0-9]{6}")

    @staticmethod
    def generate_otp() -> str:
        """
        Generate a 6-digit OTP

        Uniform over 100000-999999, so the code never starts with zero.

        Returns:
            6-digit OTP string
        """
        return str(OTPGenerator.OTP_MIN + secrets.randbelow(OTPGenerator.OTP_SPAN))

    @staticmethod
    def hash_otp(otp: str) -> str:
        """
        Hash OTP for storage

        Args:
            otp: Plain OTP

        Returns:
            SHA-256 hex digest
        """
        return hashlib.sha256(otp.encode()).hexdigest()

    @staticmethod
    def verify_otp(plain_otp: str, hashed_otp: str) -> bool:
        """
        Verify OTP against hash

        Args:
            plain_otp: Plain OTP entered by user
            hashed_otp: Stored hash

        Returns:
            True if match, False otherwise
        """
        return hmac.compare_digest(OTPGenerator.hash_otp(plain_otp), hashed_otp)

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Exactly six ASCII digits"""
        return OTPGenerator._CODE_PATTERN.fullmatch(code) is not None
