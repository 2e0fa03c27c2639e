"""
Tests for notifications, completion events and the reminder job
"""
from conftest import RecordingChannel
from mycore.models.habit import Habit, HabitInstance, InterestType
from mycore.models.task import Task
from mycore.models.user import UserSettings
from mycore.services.habits.completion import toggle_instance
from mycore.services.notifications import NotificationService
from mycore.services.scheduler.jobs import send_daily_reminders


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def exploding_channel(message):
    raise RuntimeError("channel down")


HABITS = [
    Habit(id="a", name="Run", interest=InterestType.HEALTH),
    Habit(id="b", name="Read", interest=InterestType.LEARNING),
]


# ============================================================================
# NOTIFICATION SERVICE
# ============================================================================

def test_send_without_channel_is_logged_only():
    service = NotificationService()
    assert service.send("Title", "Body") is False
    assert service.request_permission() is False


def test_send_formats_title_and_body(notifications, channel):
    assert notifications.send("Title", "Body") is True
    assert channel.messages == ["Title\n\nBody"]


def test_send_failure_is_swallowed():
    assert NotificationService(exploding_channel).send("Title", "Body") is False


def test_channel_returning_false():
    assert NotificationService(RecordingChannel(result=False)).send("T", "B") is False


def test_habit_reminder_lists_only_pending(notifications, channel):
    instances = [
        HabitInstance(id="2024-06-05_a", habit_id="a", date="2024-06-05", completed=True),
        HabitInstance(id="2024-06-05_b", habit_id="b", date="2024-06-05"),
    ]
    assert notifications.send_reminder_for_habits(HABITS, instances) is True
    assert channel.messages == ["Habit Reminder\n\nYou have 1 habit left today: Read"]


def test_habit_reminder_skipped_when_all_done(notifications, channel):
    instances = [HabitInstance(id="2024-06-05_a", habit_id="a", date="2024-06-05", completed=True)]
    assert notifications.send_reminder_for_habits(HABITS, instances) is False
    assert channel.messages == []


def test_task_reminder(notifications, channel):
    assert notifications.send_task_reminder([]) is False
    notifications.send_task_reminder([Task(title="Pay rent"), Task(title="Call mom")])
    assert channel.messages == ["Task Reminder\n\nYou have 2 tasks due today: Pay rent, Call mom"]


# ============================================================================
# COMPLETION EVENTS
# ============================================================================

def complete_past_days(store):
    for day in ("2024-06-02", "2024-06-03", "2024-06-04"):
        store.update_instance_status(f"{day}_u1-h1", True)


def test_toggle_flips_state(onboarded_store):
    first = toggle_instance(onboarded_store, "2024-06-05_u1-h1")
    assert first.completed
    second = toggle_instance(onboarded_store, "2024-06-05_u1-h1")
    assert not second.completed and second.completed_at is None


def test_toggle_missing_instance(onboarded_store):
    assert toggle_instance(onboarded_store, "2024-01-01_nope") is None


def test_streak_congratulation(onboarded_store, notifications, channel):
    complete_past_days(onboarded_store)
    toggle_instance(onboarded_store, "2024-06-05_u1-h1", notifications=notifications, rng=FixedRandom(0.0))
    assert channel.messages == ["Streak!\n\nMorning Run (Gym) is on a 4-day streak. Keep it going!"]


def test_streak_congratulation_is_a_draw(onboarded_store, notifications, channel):
    complete_past_days(onboarded_store)
    toggle_instance(onboarded_store, "2024-06-05_u1-h1", notifications=notifications, rng=FixedRandom(0.99))
    assert channel.messages == []


def test_completion_congratulation_when_day_done(onboarded_store, notifications, channel):
    toggle_instance(onboarded_store, "2024-06-05_u1-h1", notifications=notifications, rng=FixedRandom(0.0))
    assert channel.messages == []
    toggle_instance(onboarded_store, "2024-06-05_u1-h2", notifications=notifications, rng=FixedRandom(0.0))
    assert channel.messages == ["All done\n\nEvery habit for today is done. Great work!"]


def test_no_congratulation_when_notifications_off(onboarded_store, notifications, channel):
    onboarded_store.update_user_settings(UserSettings(notifications_enabled=False))
    complete_past_days(onboarded_store)
    toggle_instance(onboarded_store, "2024-06-05_u1-h1", notifications=notifications, rng=FixedRandom(0.0))
    assert channel.messages == []


def test_notification_failure_does_not_block_write(onboarded_store):
    complete_past_days(onboarded_store)
    broken = NotificationService(exploding_channel)
    result = toggle_instance(onboarded_store, "2024-06-05_u1-h1", notifications=broken, rng=FixedRandom(0.0))
    assert result.completed
    assert onboarded_store.get_instance("2024-06-05_u1-h1").completed


# ============================================================================
# REMINDER JOB
# ============================================================================

def test_daily_reminders(onboarded_store, notifications, channel):
    onboarded_store.add_task(Task(title="Pay rent", due_date="2024-06-05"))
    onboarded_store.add_task(Task(title="Later", due_date="2024-06-20"))
    onboarded_store.add_task(Task(title="Done", due_date="2024-06-05", completed=True))

    assert send_daily_reminders(onboarded_store, notifications) == 2
    assert channel.messages == [
        "Habit Reminder\n\nYou have 2 habits left today: Morning Run (Gym), Market Analysis",
        "Task Reminder\n\nYou have 1 tasks due today: Pay rent",
    ]


def test_daily_reminders_respect_settings(onboarded_store, notifications, channel):
    onboarded_store.update_user_settings(UserSettings(notifications_enabled=False))
    assert send_daily_reminders(onboarded_store, notifications) == 0
    assert channel.messages == []


def test_daily_reminders_without_session(store, notifications, channel):
    assert send_daily_reminders(store, notifications) == 0
