"""
Notifications Service - Message formatting and delivery
Centralizes all notification message templates and sending logic
"""
import logging
from typing import Callable, Iterable, Optional

from mycore.models.habit import Habit, HabitInstance
from mycore.models.task import Task

logger = logging.getLogger(__name__)


# ============================================================================
# MESSAGE FORMATTING
# ============================================================================

def format_message(title: str, body: str) -> str:
    return f"{title}\n\n{body}"


def format_habit_reminder(pending_names: list) -> str:
    """
    Format the daily reminder listing habits still open today

    Args:
        pending_names: Names of habits not yet completed

    Returns:
        Reminder body text
    """
    count = len(pending_names)
    noun = "habit" if count == 1 else "habits"
    return f"You have {count} {noun} left today: {', '.join(pending_names)}"


def format_task_reminder(tasks: list) -> str:
    return f"You have {len(tasks)} tasks due today: {', '.join(t.title for t in tasks)}"


def format_streak_congratulation(habit_name: str, streak: int) -> str:
    return f"{habit_name} is on a {streak}-day streak. Keep it going!"


def format_completion_congratulation() -> str:
    return "Every habit for today is done. Great work!"


# ============================================================================
# NOTIFICATION SENDING
# ============================================================================

class NotificationService:
    """
    Service for sending notifications via a delivery callback

    Failures are logged and reported as False, never raised, so a
    notification can not break the write that triggered it.
    """

    def __init__(self, send_callback: Optional[Callable[[str], bool]] = None):
        """
        Initialize notification service

        Args:
            send_callback: Optional callback function for sending messages
                          Should have signature: callback(message: str) -> bool
        """
        self.send_callback = send_callback

    def request_permission(self) -> bool:
        """Whether a delivery channel is available"""
        if not self.send_callback:
            logger.info("[NOTIFY] No delivery channel configured - notifications disabled")
            return False
        return True

    def send(self, title: str, body: str) -> bool:
        """
        Send a notification

        Args:
            title: Notification title
            body: Notification body

        Returns:
            True if sent successfully, False otherwise
        """
        message = format_message(title, body)
        if not self.send_callback:
            logger.info(f"[NOTIFY] Would have sent: {message}")
            return False

        try:
            result = self.send_callback(message)
            if result:
                logger.info("[NOTIFY] Notification sent successfully")
            else:
                logger.warning("[NOTIFY] Notification send callback returned False")
            return bool(result)
        except Exception as e:
            logger.error(f"[NOTIFY] Failed to send notification: {e}")
            return False

    def send_reminder_for_habits(self, habits: Iterable[Habit],
                                 todays_instances: Iterable[HabitInstance]) -> bool:
        """
        Remind about today's instances that are still open

        Returns:
            True if a reminder was sent, False if nothing is pending or sending failed
        """
        names = {h.id: h.name for h in habits}
        pending = [names[i.habit_id] for i in todays_instances
                   if not i.completed and i.habit_id in names]
        if not pending:
            return False
        return self.send("Habit Reminder", format_habit_reminder(pending))

    def send_task_reminder(self, tasks: Iterable[Task]) -> bool:
        tasks = list(tasks)
        if not tasks:
            return False
        return self.send("Task Reminder", format_task_reminder(tasks))

    def send_streak_congratulation(self, habit_name: str, streak: int) -> bool:
        return self.send("Streak!", format_streak_congratulation(habit_name, streak))

    def send_completion_congratulation(self) -> bool:
        return self.send("All done", format_completion_congratulation())
