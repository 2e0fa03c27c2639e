"""
Streak & Strength Calculator
"""
from datetime import date
from typing import Optional, Sequence

from mycore.core.constants import (
    STREAK_CAP_DAYS,
    COMPLETION_RATE_WEIGHT,
    STREAK_BONUS_WEIGHT
)
from mycore.models.habit import HabitInstance
from mycore.utils.dates import format_date, round_half_up
from mycore.utils.timezone import get_app_today_date


def current_streak(instances: Sequence[HabitInstance], today: Optional[date] = None) -> int:
    """
    Count the leading run of completed instances, newest first

    The walk starts at today: instances dated after today are ignored,
    and an open instance dated today is skipped instead of ending the
    run, so an outstanding habit does not zero yesterday's streak.
    Future instances are not counted even when already completed.

    Args:
        instances: One habit's instances, in any order
        today: Reference date, defaults to today in the app timezone

    Returns:
        Non-negative streak length
    """
    today_str = format_date(today or get_app_today_date())
    streak = 0

    for inst in sorted(instances, key=lambda i: i.date, reverse=True):
        if inst.date > today_str:
            continue
        if inst.completed:
            streak += 1
            continue
        if inst.date == today_str:
            continue
        break

    return streak


def strength_score(instances: Sequence[HabitInstance], today: Optional[date] = None) -> int:
    """
    Blend completion rate (70%) and capped streak momentum (30%) into 0-100

    Args:
        instances: One habit's instances
        today: Reference date for the streak

    Returns:
        Integer score, 0 when there are no instances
    """
    total = len(instances)
    if total == 0:
        return 0

    completed = sum(1 for i in instances if i.completed)
    completion_rate = completed / total * 100

    streak = current_streak(instances, today=today)
    streak_bonus = min(streak, STREAK_CAP_DAYS) / STREAK_CAP_DAYS * 100

    return round_half_up(completion_rate * COMPLETION_RATE_WEIGHT + streak_bonus * STREAK_BONUS_WEIGHT)
