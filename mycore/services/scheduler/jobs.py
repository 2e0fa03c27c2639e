"""
Scheduler Job Definitions
"""
import logging
from typing import Optional

from mycore.core.dependencies import get_notification_service, get_store
from mycore.services.notifications.service import NotificationService
from mycore.utils.dates import format_date

logger = logging.getLogger(__name__)


def send_daily_reminders(store=None, notification_service: Optional[NotificationService] = None) -> int:
    """
    Remind the signed-in user about today's open habits and due tasks

    Runs once a day. Does nothing without a session or when the user
    has notifications turned off.

    Returns:
        Number of reminders sent
    """
    store = store or get_store()
    notification_service = notification_service or get_notification_service()

    try:
        user = store.get_user()
        if user is None or not user.onboarded:
            logger.info("[SCHEDULER] No onboarded user in session, skipping reminders")
            return 0
        if not user.settings.notifications_enabled:
            logger.info("[SCHEDULER] Notifications disabled, skipping reminders")
            return 0

        today = format_date(store.today())
        sent = 0

        todays_instances = store.get_instances_for_date(today)
        if notification_service.send_reminder_for_habits(store.get_habits(), todays_instances):
            sent += 1

        due_tasks = [t for t in store.get_tasks() if not t.completed and t.due_date == today]
        if notification_service.send_task_reminder(due_tasks):
            sent += 1

        logger.info(f"[SCHEDULER] Sent {sent} reminder(s) for {today}")
        return sent

    except Exception as e:
        logger.error(f"[SCHEDULER] Error in send_daily_reminders: {e}", exc_info=True)
        return 0
