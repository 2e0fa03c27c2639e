"""
Scheduling Engine - decides which habits are due on a date and
materializes missing habit instances, idempotently
"""
import logging
import random
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

from mycore.core.constants import INSTANCE_ID_SEPARATOR
from mycore.models.habit import Habit, HabitInstance, ScheduleType
from mycore.utils.dates import DateLike, date_range, format_date, is_weekend, parse_date

logger = logging.getLogger(__name__)


def make_instance_id(day: DateLike, habit_id: str) -> str:
    """
    Build the composite instance identifier for a habit on a date

    Args:
        day: The calendar date
        habit_id: The habit ID

    Returns:
        "<YYYY-MM-DD>_<habit_id>", unique per (habit, date)
    """
    return f"{format_date(parse_date(day))}{INSTANCE_ID_SEPARATOR}{habit_id}"


def is_due_on(habit: Habit, day: DateLike) -> bool:
    """
    Check whether a habit's recurrence rule matches a date

    DAILY is always due, WEEKDAYS only Monday-Friday, WEEKENDS only
    Saturday/Sunday. CUSTOM and anything unrecognized is always due.
    """
    weekend = is_weekend(day)
    if habit.schedule == ScheduleType.DAILY:
        return True
    if habit.schedule == ScheduleType.WEEKDAYS:
        return not weekend
    if habit.schedule == ScheduleType.WEEKENDS:
        return weekend
    return True


def instances_due_on(day: DateLike, habits: Iterable[Habit]) -> List[Habit]:
    """Filter habits to those due on the given date, preserving order"""
    return [h for h in habits if is_due_on(h, day)]


def create_instances_for_day(day: DateLike, habits: Iterable[Habit],
                             user_id: Optional[str] = None) -> List[HabitInstance]:
    """Build fresh (uncompleted) instances for every habit due on a date"""
    day_str = format_date(parse_date(day))
    return [
        HabitInstance(
            id=make_instance_id(day_str, h.id),
            habit_id=h.id,
            date=day_str,
            completed=False,
            user_id=user_id
        )
        for h in instances_due_on(day_str, habits)
    ]


def ensure_instances_for_range(dates: Sequence[DateLike], habits: Sequence[Habit],
                               existing_instances: Iterable[HabitInstance],
                               user_id: Optional[str] = None) -> List[HabitInstance]:
    """
    Create the instances missing for a list of dates

    Args:
        dates: Dates to cover
        habits: Habit definitions
        existing_instances: Instances already persisted
        user_id: Owner stamped on new instances

    Returns:
        Only the newly created instances (the caller persists them).
        Calling again with these added to existing_instances returns [].
    """
    seen = {inst.id for inst in existing_instances}
    created: List[HabitInstance] = []

    for day in dates:
        for instance in create_instances_for_day(day, habits, user_id=user_id):
            if instance.id in seen:
                continue
            seen.add(instance.id)
            created.append(instance)

    if created:
        logger.debug(f"[SCHEDULING] {len(created)} new instance(s) across {len(dates)} date(s)")
    return created


def seed_history(habits: Sequence[Habit], from_offset_days: int, to_offset_days: int,
                 today: date, existing_dates: Iterable[str] = (),
                 completion_rate: float = 0.0, rng: Optional[random.Random] = None,
                 completed_at: Optional[str] = None,
                 user_id: Optional[str] = None) -> List[HabitInstance]:
    """
    Generate instances for an inclusive window of days around today

    Dates that already have instances are skipped entirely. Past dates
    (offset < 0) are marked completed with probability completion_rate,
    drawn from rng; with the default rate of 0 no history is simulated.

    Args:
        habits: Habit definitions to seed
        from_offset_days: First offset relative to today (e.g. -14)
        to_offset_days: Last offset relative to today (e.g. 3)
        today: Reference date
        existing_dates: Dates (YYYY-MM-DD) that already have instances
        completion_rate: Probability in [0, 1] of a simulated completion
        rng: Random source, seeded for reproducible output
        completed_at: Timestamp stamped on simulated completions
        user_id: Owner stamped on new instances

    Returns:
        List of generated instances
    """
    skip = set(existing_dates)
    if completion_rate > 0 and rng is None:
        rng = random.Random(0)

    seeded: List[HabitInstance] = []
    start = today + timedelta(days=from_offset_days)
    end = today + timedelta(days=to_offset_days)
    for day in date_range(start, end):
        day_str = format_date(day)
        if day_str in skip:
            continue

        instances = create_instances_for_day(day_str, habits, user_id=user_id)
        if day < today and completion_rate > 0:
            for inst in instances:
                if rng.random() < completion_rate:
                    inst.completed = True
                    inst.completed_at = completed_at
        seeded.extend(instances)

    logger.info(f"[SCHEDULING] Seeded {len(seeded)} instance(s) for {len(habits)} habit(s)")
    return seeded
