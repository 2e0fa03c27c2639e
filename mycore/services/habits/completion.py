"""
Completion events - toggling an instance and the congratulations it earns
"""
import logging
import random
from typing import Optional

from mycore.core.constants import (
    STREAK_CONGRATULATION_MIN_STREAK,
    STREAK_CONGRATULATION_PROBABILITY
)
from mycore.models.habit import HabitInstance
from mycore.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


def toggle_instance(store, instance_id: str, value: Optional[float] = None,
                    notifications: Optional[NotificationService] = None,
                    rng: Optional[random.Random] = None) -> Optional[HabitInstance]:
    """
    Flip an instance's completed state and send congratulations

    The write happens first; notification errors are logged and never
    undo or fail it.

    Args:
        store: HabitStore for the signed-in user
        instance_id: Instance to toggle
        value: Optional quantity recorded with the completion
        notifications: Service used for congratulations, if any
        rng: Random source for the streak congratulation draw

    Returns:
        The updated instance, or None if it does not exist
    """
    instance = store.get_instance(instance_id)
    if instance is None:
        return None

    updated = store.update_instance_status(instance_id, not instance.completed, value)
    if updated is None or not updated.completed or notifications is None:
        return updated

    try:
        _congratulate(store, updated, notifications, rng or random.Random())
    except Exception as e:
        logger.error(f"[COMPLETION] Congratulation failed for {instance_id}: {e}")

    return updated


def _congratulate(store, instance: HabitInstance, notifications: NotificationService,
                  rng: random.Random) -> None:
    user = store.get_user()
    if user is None or not user.settings.notifications_enabled:
        return

    habit = next((h for h in store.get_habits() if h.id == instance.habit_id), None)
    if (habit is not None and habit.streak >= STREAK_CONGRATULATION_MIN_STREAK
            and rng.random() < STREAK_CONGRATULATION_PROBABILITY):
        notifications.send_streak_congratulation(habit.name, habit.streak)

    day_instances = store.get_instances_for_date(instance.date)
    if day_instances and all(i.completed for i in day_instances):
        notifications.send_completion_congratulation()
