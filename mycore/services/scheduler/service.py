"""
Scheduler Service - Background scheduler lifecycle management
Handles starting, stopping, and configuring the APScheduler instance
"""
import logging
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from mycore.core.config import settings
from mycore.utils.timezone import get_app_tz
from .jobs import send_daily_reminders

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def start_scheduler():
    """
    Start the background scheduler
    Sends the daily reminder at REMINDER_HOUR in the app timezone
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already running")
        return

    scheduler = BackgroundScheduler(timezone=get_app_tz())

    scheduler.add_job(
        func=send_daily_reminders,
        trigger=CronTrigger(hour=settings.REMINDER_HOUR, minute=0, timezone=get_app_tz()),
        id='daily_reminders',
        name='Remind about open habits and due tasks',
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"Scheduler started - daily reminders at {settings.REMINDER_HOUR:02d}:00 {settings.APP_TIMEZONE}")


def stop_scheduler():
    """Stop the background scheduler"""
    global scheduler

    if scheduler is not None:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")
