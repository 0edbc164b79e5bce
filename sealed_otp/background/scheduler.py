"""
Background Job Scheduler
Uses APScheduler to run the session sweep
"""

import asyncio
import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from sealed_otp.background.jobs.cleanup_jobs import cleanup_expired_sessions
from sealed_otp.services.otp_service import OTPService

logger = logging.getLogger(__name__)


class BackgroundScheduler:
    """
    Manages background jobs using APScheduler

    Must be started from a running event loop; the jobs run on that
    loop, next to the request handlers.
    """

    SWEEP_JOB_ID = "cleanup_otp_sessions"

    def __init__(self, otp_service: OTPService, sweep_interval_seconds: int = 60, timezone: str = "UTC"):
        self.otp_service = otp_service
        self.sweep_interval_seconds = sweep_interval_seconds
        self.scheduler = AsyncIOScheduler(timezone=timezone)

    # ========================================================================
    # SCHEDULER LIFECYCLE
    # ========================================================================

    async def start(self):
        """Start the scheduler and add the sweep job"""
        try:
            self.scheduler.add_job(
                func=cleanup_expired_sessions,
                trigger=IntervalTrigger(seconds=self.sweep_interval_seconds),
                id=self.SWEEP_JOB_ID,
                name="Cleanup Expired OTP Sessions",
                args=[self.otp_service],
                replace_existing=True,
                max_instances=1
            )
            logger.info(f" Job added: Cleanup Expired OTP Sessions (every {self.sweep_interval_seconds}s)")

            self.scheduler.start()
            self._log_scheduled_jobs()

        except Exception as e:
            logger.error(f" Failed to start background scheduler: {e}")
            raise

    async def shutdown(self):
        """Shutdown the scheduler"""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            # AsyncIOScheduler finishes stopping on a later loop tick
            while self.scheduler.running:
                await asyncio.sleep(0)
            logger.info(" Background scheduler shut down")

    # ========================================================================
    # UTILITIES
    # ========================================================================

    def _log_scheduled_jobs(self):
        for job in self.scheduler.get_jobs():
            logger.info(f"  - {job.name} (ID: {job.id}) next run: {getattr(job, 'next_run_time', None)}")

    def is_running(self) -> bool:
        return self.scheduler.running

    def get_statistics(self):
        """Get scheduler statistics"""
        jobs = self.scheduler.get_jobs()

        return {
            "running": self.scheduler.running,
            "total_jobs": len(jobs),
            "jobs": [
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": job.next_run_time.isoformat() if getattr(job, "next_run_time", None) else None
                }
                for job in jobs
            ]
        }
