"""
Tests for the scheduling engine
"""
import random
from datetime import date

from mycore.models.habit import Habit, HabitInstance, InterestType, ScheduleType
from mycore.services.habits.scheduling import (
    ensure_instances_for_range,
    instances_due_on,
    is_due_on,
    make_instance_id,
    seed_history
)

SATURDAY = "2024-06-08"
MONDAY = "2024-06-10"


def habit(habit_id, schedule):
    return Habit(id=habit_id, name=habit_id, interest=InterestType.HEALTH, schedule=schedule)


DAILY = habit("h1", ScheduleType.DAILY)
WEEKDAYS = habit("h2", ScheduleType.WEEKDAYS)
WEEKENDS = habit("h3", ScheduleType.WEEKENDS)
CUSTOM = habit("h4", ScheduleType.CUSTOM)


def test_saturday_only_daily_habit_due():
    due = instances_due_on(SATURDAY, [DAILY, WEEKDAYS])
    assert [h.id for h in due] == ["h1"]


def test_rule_evaluation():
    assert is_due_on(WEEKDAYS, MONDAY)
    assert not is_due_on(WEEKENDS, MONDAY)
    assert is_due_on(WEEKENDS, SATURDAY)
    assert is_due_on(WEEKENDS, "2024-06-09")


def test_custom_rule_is_always_due():
    assert is_due_on(CUSTOM, SATURDAY)
    assert is_due_on(CUSTOM, MONDAY)


def test_instance_id_is_date_and_habit():
    assert make_instance_id("2024-06-05", "h1") == "2024-06-05_h1"
    assert make_instance_id(date(2024, 6, 5), "abc-h2") == "2024-06-05_abc-h2"


def test_ensure_creates_uncompleted_instances():
    created = ensure_instances_for_range([SATURDAY, MONDAY], [DAILY, WEEKDAYS], [])
    assert sorted(i.id for i in created) == [
        "2024-06-08_h1", "2024-06-10_h1", "2024-06-10_h2"
    ]
    assert all(not i.completed and i.completed_at is None for i in created)


def test_ensure_is_idempotent():
    existing = [HabitInstance(id="2024-06-10_h1", habit_id="h1", date=MONDAY, completed=True)]
    first = ensure_instances_for_range([SATURDAY, MONDAY], [DAILY, WEEKDAYS], existing)
    second = ensure_instances_for_range([SATURDAY, MONDAY], [DAILY, WEEKDAYS], existing + first)
    assert second == []


def test_ensure_creates_exactly_the_missing_subset():
    existing = [
        HabitInstance(id="2024-06-10_h1", habit_id="h1", date=MONDAY),
        HabitInstance(id="2024-06-08_h1", habit_id="h1", date=SATURDAY),
    ]
    created = ensure_instances_for_range([SATURDAY, MONDAY], [DAILY, WEEKDAYS], existing)
    assert [i.id for i in created] == ["2024-06-10_h2"]


def test_ensure_ignores_repeated_dates():
    created = ensure_instances_for_range([MONDAY, MONDAY], [DAILY], [])
    assert len(created) == 1


def test_ensure_stamps_owner():
    created = ensure_instances_for_range([MONDAY], [DAILY], [], user_id="u1")
    assert created[0].user_id == "u1"


def test_seed_covers_inclusive_window():
    seeded = seed_history([DAILY], -14, 3, today=date(2024, 6, 5))
    dates = sorted(i.date for i in seeded)
    assert len(seeded) == 18
    assert dates[0] == "2024-05-22"
    assert dates[-1] == "2024-06-08"


def test_seed_skips_dates_with_instances():
    seeded = seed_history([DAILY], -2, 0, today=date(2024, 6, 5), existing_dates={"2024-06-04"})
    assert sorted(i.date for i in seeded) == ["2024-06-03", "2024-06-05"]


def test_seed_without_rate_completes_nothing():
    seeded = seed_history([DAILY, WEEKDAYS], -14, 3, today=date(2024, 6, 5))
    assert not any(i.completed for i in seeded)


def test_seed_completes_only_past_dates():
    seeded = seed_history([DAILY], -3, 3, today=date(2024, 6, 5), completion_rate=1.0,
                          rng=random.Random(1), completed_at="2024-06-05T00:00:00")
    for inst in seeded:
        if inst.date < "2024-06-05":
            assert inst.completed and inst.completed_at == "2024-06-05T00:00:00"
        else:
            assert not inst.completed and inst.completed_at is None


def test_seed_is_reproducible_with_seeded_rng():
    def run():
        seeded = seed_history([DAILY, WEEKDAYS], -14, 3, today=date(2024, 6, 5),
                              completion_rate=0.7, rng=random.Random(42))
        return [(i.id, i.completed) for i in seeded]

    assert run() == run()
