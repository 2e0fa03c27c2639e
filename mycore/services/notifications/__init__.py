"""
Notifications module
Message formatting and delivery for reminders and congratulations
"""
from .service import (
    NotificationService,
    format_habit_reminder,
    format_task_reminder,
    format_streak_congratulation,
    format_completion_congratulation
)

__all__ = [
    'NotificationService',
    'format_habit_reminder',
    'format_task_reminder',
    'format_streak_congratulation',
    'format_completion_congratulation'
]
