"""
Suggestion Engine - template habits filtered by interest
"""
from typing import Iterable, List, Optional, Sequence

from mycore.core.constants import SUGGESTION_TARGET_COUNT
from mycore.models.habit import Habit, InterestType, ScheduleType, TriggerType

# Template catalog offered during onboarding
SUGGESTED_HABITS: List[Habit] = [
    Habit(
        id="h1",
        name="Morning Run (Gym)",
        icon="Activity",
        interest=InterestType.HEALTH,
        schedule=ScheduleType.DAILY,
        trigger_type=TriggerType.LOCATION,
        trigger_config={"location_name": "Gold's Gym"}
    ),
    Habit(
        id="h2",
        name="Market Analysis",
        icon="TrendingUp",
        interest=InterestType.FINANCE,
        schedule=ScheduleType.WEEKDAYS,
        trigger_type=TriggerType.APP_OPEN,
        trigger_config={"app_name": "Market Terminal", "action_detail": "Check S&P 500"}
    ),
    Habit(
        id="h3",
        name="Social Media < 30m",
        icon="Smartphone",
        interest=InterestType.DETOX,
        schedule=ScheduleType.DAILY,
        trigger_type=TriggerType.SCREEN_TIME,
        trigger_config={"threshold_minutes": 30}
    ),
    Habit(
        id="h4",
        name="Read 1 Chapter",
        icon="BookOpen",
        interest=InterestType.LEARNING,
        schedule=ScheduleType.DAILY,
        trigger_type=TriggerType.MANUAL
    ),
    Habit(
        id="h5",
        name="Deep Work Session",
        icon="Zap",
        interest=InterestType.PRODUCTIVITY,
        schedule=ScheduleType.WEEKDAYS,
        trigger_type=TriggerType.APP_OPEN,
        trigger_config={"app_name": "Timer Started"}
    ),
]


def suggest(interests: Iterable[InterestType], catalog: Optional[Sequence[Habit]] = None,
            target_count: int = SUGGESTION_TARGET_COUNT) -> List[Habit]:
    """
    Pick catalog habits matching the interests, backfilled to target_count

    Matches keep catalog order. If there are fewer than target_count,
    the first unselected catalog entries fill the gap. The result never
    has more than target_count entries and contains no duplicates.
    """
    if catalog is None:
        catalog = SUGGESTED_HABITS
    wanted = set(interests)

    selected = [h for h in catalog if h.interest in wanted]
    if len(selected) < target_count:
        chosen_ids = {h.id for h in selected}
        backfill = [h for h in catalog if h.id not in chosen_ids]
        selected.extend(backfill[:target_count - len(selected)])

    return [h.model_copy(deep=True) for h in selected[:target_count]]
