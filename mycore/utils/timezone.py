"""
Timezone Utilities - Centralized timezone handling
"""
from datetime import date, datetime
import pytz

from mycore.core.config import settings


def get_app_tz():
    """
    Get the application timezone object

    Returns:
        pytz timezone configured by APP_TIMEZONE
    """
    return pytz.timezone(settings.APP_TIMEZONE)


def get_app_now() -> datetime:
    """
    Get current datetime in the application timezone

    Returns:
        Timezone-aware datetime object
    """
    return datetime.now(get_app_tz())


def get_app_today_date() -> date:
    """
    Get today's date in the application timezone

    Returns:
        date object for today
    """
    return get_app_now().date()


def get_app_now_iso() -> str:
    """Current timestamp as an ISO-8601 string, used for completion stamps"""
    return get_app_now().isoformat()
