"""
Cleanup Jobs
Removes abandoned OTP sessions
"""

import logging
from datetime import datetime

from sealed_otp.services.otp_service import OTPService

logger = logging.getLogger(__name__)


async def cleanup_expired_sessions(otp_service: OTPService):
    """
    Clean up expired OTP sessions (runs every OTP_SWEEP_INTERVAL_SECONDS)

    Args:
        otp_service: Service owning the session store
    """
    start_time = datetime.now()

    try:
        before = len(otp_service.store)
        otp_service.sweep()
        deleted_count = before - len(otp_service.store)

        duration = (datetime.now() - start_time).total_seconds()
        logger.debug(f"OTP session cleanup: deleted {deleted_count}, {len(otp_service.store)} live, {duration:.3f}s")

    except Exception as e:
        logger.error(f" OTP session cleanup job failed: {e}", exc_info=True)
