"""
Habit/Task/Project Store - the data-access surface used by the routes
Recomputes derived fields (habit streaks on read, project progress on write)
on top of any Storage backend.
"""
import logging
import random
import uuid
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from mycore.core.config import settings
from mycore.core.constants import SEED_FROM_OFFSET_DAYS, SEED_TO_OFFSET_DAYS
from mycore.core.exceptions import InvalidDataError, NotAuthenticatedError, OnboardingError
from mycore.models.habit import Habit, HabitInstance, HabitStats, InterestType
from mycore.models.task import Project, ProjectStatus, Task
from mycore.models.user import AuthIdentity, Permissions, User, UserSettings
from mycore.services.habits.scheduling import ensure_instances_for_range, seed_history
from mycore.services.habits.scoring import current_streak, strength_score
from mycore.services.habits.suggestions import suggest
from mycore.services.session import SessionContext
from mycore.services.storage.base import (
    Storage,
    ALL_TABLES,
    PROFILES,
    HABITS,
    HABIT_INSTANCES,
    TASKS,
    PROJECTS
)
from mycore.utils.dates import (
    DateLike,
    calculate_completion,
    format_date,
    get_day_name,
    get_week_days,
    parse_date
)
from mycore.utils.timezone import get_app_now_iso, get_app_today_date

logger = logging.getLogger(__name__)


# Task fields that have no None value
_REQUIRED_TASK_FIELDS = ("title", "description", "priority", "category", "completed")


def _new_id() -> str:
    return uuid.uuid4().hex


def _group_by_habit(instances: Iterable[HabitInstance]) -> Dict[str, List[HabitInstance]]:
    grouped: Dict[str, List[HabitInstance]] = {}
    for inst in instances:
        grouped.setdefault(inst.habit_id, []).append(inst)
    return grouped


def _parse_day(value: DateLike) -> date:
    try:
        return parse_date(value)
    except (TypeError, ValueError) as e:
        raise InvalidDataError(f"Invalid date '{value}': {e}")


def _reset_policy_override() -> Optional[bool]:
    if settings.RESET_PURGES_DATA in ("1", "true", "yes"):
        return True
    if settings.RESET_PURGES_DATA in ("0", "false", "no"):
        return False
    return None


class HabitStore:
    """
    Store for one session, backed by a Storage implementation

    Args:
        storage: Persistence backend
        session: Session context; a fresh one is created if omitted
        today_provider: Returns "today"; defaults to the app timezone
        now_provider: Returns the ISO timestamp used for completion stamps
        seed_completion_rate: Probability of simulated past completions
        rng: Random source for simulated completions
        reset_purges_data: Overrides the backend's reset policy
    """

    def __init__(self, storage: Storage, session: Optional[SessionContext] = None,
                 today_provider: Optional[Callable[[], date]] = None,
                 now_provider: Optional[Callable[[], str]] = None,
                 seed_completion_rate: Optional[float] = None,
                 rng: Optional[random.Random] = None,
                 reset_purges_data: Optional[bool] = None):
        self.storage = storage
        self.session = session or SessionContext()
        self.today_provider = today_provider or get_app_today_date
        self.now_provider = now_provider or get_app_now_iso
        self.seed_completion_rate = (
            settings.SEED_COMPLETION_RATE if seed_completion_rate is None else seed_completion_rate
        )
        self.rng = rng or random.Random(settings.SEED_RANDOM_SEED)
        self.reset_purges_data = (
            _reset_policy_override() if reset_purges_data is None else reset_purges_data
        )

    # ========================================================================
    # SESSION
    # ========================================================================

    def bind_identity(self, identity: AuthIdentity) -> None:
        self.session.bind(identity)

    def logout(self) -> None:
        self.session.clear()

    def today(self) -> date:
        return self.today_provider()

    # ========================================================================
    # USER
    # ========================================================================

    def get_user(self) -> Optional[User]:
        """Get the signed-in user's profile, or None"""
        if not self.session.is_authenticated:
            return None
        if self.session.user is not None:
            return self.session.user

        row = self.storage.get(PROFILES, self.session.identity.id)
        if row is None:
            return None
        self.session.user = User.model_validate(row)
        return self.session.user

    def init_user(self, email: str, name: str) -> User:
        """
        Get or create the profile linked to the signed-in identity

        Raises:
            NotAuthenticatedError: If no session is active
        """
        user_id = self.session.require_user_id()
        existing = self.get_user()
        if existing:
            return existing

        user = User(id=user_id, email=email, name=name)
        self.storage.put(PROFILES, user.model_dump(mode="json"))
        self.session.user = user
        logger.info(f"[STORE] Created profile for {email}")
        return user

    def update_user_settings(self, new_settings: UserSettings) -> Optional[User]:
        self.session.require_user_id()
        user = self.get_user()
        if user is None:
            return None

        self.storage.update(PROFILES, user.id, {"settings": new_settings.model_dump(mode="json")})
        user.settings = new_settings
        return user

    def complete_onboarding(self, user_id: str, interests: List[InterestType],
                            habits: List[Habit], permissions: Permissions) -> Optional[User]:
        """
        One-way transition to the onboarded state

        Persists the chosen habits, seeds their history and finally flags
        the profile onboarded. Habit ids are derived from the user and the
        chosen habit, so a retried partial onboarding rewrites the same rows.

        Returns:
            The updated profile, or None if the profile does not exist

        Raises:
            NotAuthenticatedError: If no session, or user_id is not the session user
            OnboardingError: If the user is already onboarded
        """
        session_user_id = self.session.require_user_id()
        if user_id != session_user_id:
            raise NotAuthenticatedError("Cannot onboard a different user")

        user = self.get_user()
        if user is None:
            logger.warning(f"[STORE] Onboarding skipped, no profile for {user_id}")
            return None
        if user.onboarded:
            raise OnboardingError("User has already completed onboarding")

        owned: Dict[str, Habit] = {}
        for habit in habits:
            owned_id = f"{user_id}-{habit.id}"
            owned[owned_id] = habit.model_copy(update={"id": owned_id, "user_id": user_id, "streak": 0})
        owned_habits = list(owned.values())
        self.storage.upsert(HABITS, [h.model_dump(mode="json") for h in owned_habits])

        self._seed_history(user_id, owned_habits)

        user.interests = list(interests)
        user.onboarded = True
        user.settings = permissions.to_settings()
        self.storage.update(PROFILES, user_id, {
            "interests": [i.value for i in user.interests],
            "onboarded": True,
            "settings": user.settings.model_dump(mode="json")
        })
        self.session.user = user
        logger.info(f"[STORE] Onboarded {user.email} with {len(owned_habits)} habit(s)")
        return user

    def _seed_history(self, user_id: str, habits: List[Habit]) -> None:
        existing = self.storage.select(HABIT_INSTANCES, user_id=user_id)
        seeded = seed_history(
            habits,
            SEED_FROM_OFFSET_DAYS,
            SEED_TO_OFFSET_DAYS,
            today=self.today(),
            existing_dates={row["date"] for row in existing},
            completion_rate=self.seed_completion_rate,
            rng=self.rng,
            completed_at=self.now_provider(),
            user_id=user_id
        )
        self.storage.upsert(HABIT_INSTANCES, [i.model_dump(mode="json") for i in seeded])

    # ========================================================================
    # HABITS
    # ========================================================================

    def _load_habits(self, user_id: str) -> List[Habit]:
        return [Habit.model_validate(r) for r in self.storage.select(HABITS, user_id=user_id)]

    def _load_instances(self, user_id: str) -> List[HabitInstance]:
        return [HabitInstance.model_validate(r) for r in self.storage.select(HABIT_INSTANCES, user_id=user_id)]

    def _derive_streaks(self, habits: List[Habit], instances: Iterable[HabitInstance]) -> List[Habit]:
        """Recompute-on-read: streaks always come from instance history"""
        by_habit = _group_by_habit(instances)
        today = self.today()
        for habit in habits:
            habit.streak = current_streak(by_habit.get(habit.id, []), today=today)
        return habits

    def get_habits(self) -> List[Habit]:
        """Get the user's habits with streaks recomputed from instance history"""
        user_id = self.session.require_user_id()
        habits = self._load_habits(user_id)
        return self._derive_streaks(habits, self._load_instances(user_id))

    def get_habit_stats(self) -> List[HabitStats]:
        """
        Streak, strength and completion counts for every habit

        Only history up to today is scored; instances already created for
        upcoming days are not yet due.
        """
        user_id = self.session.require_user_id()
        today = self.today()
        today_str = format_date(today)
        by_habit = _group_by_habit(
            i for i in self._load_instances(user_id) if i.date <= today_str
        )

        stats = []
        for habit in self._load_habits(user_id):
            instances = by_habit.get(habit.id, [])
            stats.append(HabitStats(
                habit_id=habit.id,
                name=habit.name,
                streak=current_streak(instances, today=today),
                strength=strength_score(instances, today=today),
                completed=sum(1 for i in instances if i.completed),
                total=len(instances)
            ))
        return stats

    def get_suggestions(self, interests: Iterable[InterestType]) -> List[Habit]:
        return suggest(interests)

    # ========================================================================
    # INSTANCES
    # ========================================================================

    def get_week_instances(self, dates: Iterable[DateLike]) -> List[HabitInstance]:
        """
        Get all instances for the given dates, creating missing ones

        Returns:
            Instances sorted by date, then habit id
        """
        user_id = self.session.require_user_id()
        date_strs = list(dict.fromkeys(format_date(_parse_day(d)) for d in dates))
        if not date_strs:
            return []

        existing = [
            HabitInstance.model_validate(r)
            for r in self.storage.select_in(HABIT_INSTANCES, "date", date_strs, user_id=user_id)
        ]
        created = ensure_instances_for_range(date_strs, self._load_habits(user_id), existing, user_id=user_id)
        if created:
            self.storage.upsert(HABIT_INSTANCES, [i.model_dump(mode="json") for i in created])
            logger.info(f"[STORE] Created {len(created)} instance(s) for {len(date_strs)} date(s)")

        return sorted(existing + created, key=lambda i: (i.date, i.habit_id))

    def get_instances_for_date(self, day: DateLike) -> List[HabitInstance]:
        return self.get_week_instances([day])

    def get_instance(self, instance_id: str) -> Optional[HabitInstance]:
        user_id = self.session.require_user_id()
        row = self.storage.get(HABIT_INSTANCES, instance_id)
        if row is None or row.get("user_id") != user_id:
            return None
        return HabitInstance.model_validate(row)

    def update_instance_status(self, instance_id: str, completed: bool,
                               value: Optional[float] = None) -> Optional[HabitInstance]:
        """
        Set an instance's completed flag, stamping or clearing completed_at

        Missing instances are ignored. Streaks are not touched here; they
        are recomputed on the next get_habits().
        """
        instance = self.get_instance(instance_id)
        if instance is None:
            logger.info(f"[STORE] Instance {instance_id} not found, nothing to update")
            return None

        data: Dict[str, Any] = {
            "completed": completed,
            "completed_at": self.now_provider() if completed else None
        }
        if value is not None:
            data["value"] = value

        row = self.storage.update(HABIT_INSTANCES, instance_id, data)
        return HabitInstance.model_validate(row) if row else None

    # ========================================================================
    # ANALYTICS
    # ========================================================================

    def get_daily_summary(self, day: Optional[DateLike] = None) -> Dict[str, Any]:
        """
        Completion summary for one date

        Returns:
            Dict with date, total_habits, completed, missed, completion_rate,
            completed_habits and missed_habits (names)
        """
        day_str = format_date(_parse_day(day) if day is not None else self.today())
        instances = self.get_instances_for_date(day_str)
        names = {h.id: h.name for h in self._load_habits(self.session.require_user_id())}

        completed_habits = [names.get(i.habit_id, i.habit_id) for i in instances if i.completed]
        missed_habits = [names.get(i.habit_id, i.habit_id) for i in instances if not i.completed]

        return {
            "date": day_str,
            "total_habits": len(instances),
            "completed": len(completed_habits),
            "missed": len(missed_habits),
            "completion_rate": calculate_completion(len(instances), len(completed_habits)),
            "completed_habits": completed_habits,
            "missed_habits": missed_habits
        }

    def get_week_overview(self, anchor: Optional[DateLike] = None) -> Dict[str, Any]:
        """Instances for the 7-day window around anchor, grouped by date"""
        anchor_date = _parse_day(anchor) if anchor is not None else self.today()
        dates = [format_date(d) for d in get_week_days(anchor_date)]
        instances = self.get_week_instances(dates)

        grouped: Dict[str, List[HabitInstance]] = {d: [] for d in dates}
        for inst in instances:
            grouped[inst.date].append(inst)

        days = []
        for d in dates:
            day_instances = grouped[d]
            done = sum(1 for i in day_instances if i.completed)
            days.append({
                "date": d,
                "day_name": get_day_name(d),
                "total": len(day_instances),
                "completed": done,
                "completion": calculate_completion(len(day_instances), done),
                "instances": day_instances
            })

        return {
            "anchor": format_date(anchor_date),
            "days": days,
            "week_completion": calculate_completion(
                len(instances), sum(1 for i in instances if i.completed)
            )
        }

    # ========================================================================
    # TASKS & PROJECTS
    # ========================================================================

    def get_tasks(self) -> List[Task]:
        user_id = self.session.require_user_id()
        return [Task.model_validate(r) for r in self.storage.select(TASKS, user_id=user_id)]

    def _get_owned(self, table: str, row_id: str) -> Optional[Dict[str, Any]]:
        user_id = self.session.require_user_id()
        row = self.storage.get(table, row_id)
        if row is None or row.get("user_id") != user_id:
            return None
        return row

    def add_task(self, task: Task) -> Task:
        user_id = self.session.require_user_id()
        created = task.model_copy(update={"id": task.id or _new_id(), "user_id": user_id})
        self.storage.put(TASKS, created.model_dump(mode="json"))
        self._after_task_write(None, created)
        return created

    def update_task(self, task_id: str, updates: Dict[str, Any]) -> Optional[Task]:
        """
        Apply a partial update to a task. Missing tasks are a no-op.

        A None for a field the task cannot leave empty (title, completed,
        ...) means "unchanged"; nullable fields are cleared by None.

        Returns:
            The updated task, or None if it does not exist

        Raises:
            InvalidDataError: If the merged task fails validation
        """
        row = self._get_owned(TASKS, task_id)
        if row is None:
            logger.info(f"[STORE] Task {task_id} not found, nothing to update")
            return None

        previous = Task.model_validate(row)
        changes = {
            k: v for k, v in updates.items()
            if k not in ("id", "user_id") and not (v is None and k in _REQUIRED_TASK_FIELDS)
        }
        try:
            updated = Task.model_validate({**row, **changes})
        except ValidationError as e:
            raise InvalidDataError(f"Invalid task update: {e}")
        self.storage.put(TASKS, updated.model_dump(mode="json"))
        self._after_task_write(previous, updated)
        return updated

    def delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False if it did not exist."""
        row = self._get_owned(TASKS, task_id)
        if row is None:
            return False

        self.storage.delete(TASKS, task_id)
        self._after_task_write(Task.model_validate(row), None)
        return True

    def get_projects(self) -> List[Project]:
        user_id = self.session.require_user_id()
        return [Project.model_validate(r) for r in self.storage.select(PROJECTS, user_id=user_id)]

    def add_project(self, project: Project) -> Project:
        user_id = self.session.require_user_id()
        created = project.model_copy(update={"id": project.id or _new_id(), "user_id": user_id})
        self.storage.put(PROJECTS, created.model_dump(mode="json"))
        return self._recompute_project(created.id) or created

    def _after_task_write(self, previous: Optional[Task], current: Optional[Task]) -> None:
        """Recompute-on-write: refresh every project whose task set changed"""
        affected = set()
        if previous is None or current is None:
            task = previous or current
            if task.project_id:
                affected.add(task.project_id)
        elif (previous.project_id != current.project_id
              or previous.completed != current.completed):
            affected.update(p for p in (previous.project_id, current.project_id) if p)

        for project_id in affected:
            self._recompute_project(project_id)

    def _recompute_project(self, project_id: str) -> Optional[Project]:
        """Progress is the percentage of the project's tasks completed"""
        row = self._get_owned(PROJECTS, project_id)
        if row is None:
            return None

        tasks = self.storage.select(TASKS, project_id=project_id, user_id=row["user_id"])
        done = sum(1 for t in tasks if t.get("completed"))
        progress = calculate_completion(len(tasks), done)
        status = ProjectStatus.COMPLETED if progress == 100 else ProjectStatus.ACTIVE

        updated = self.storage.update(PROJECTS, project_id, {"progress": progress, "status": status.value})
        logger.info(f"[STORE] Project {project_id} progress {progress}% ({status.value})")
        return Project.model_validate(updated) if updated else None

    # ========================================================================
    # RESET
    # ========================================================================

    def reset(self, purge: Optional[bool] = None) -> bool:
        """
        Clear the session, optionally wiping the user's stored data

        Args:
            purge: Force or forbid wiping; defaults to the configured policy,
                   then to the backend's (local backends wipe, networked keep)

        Returns:
            True if stored data was wiped
        """
        if purge is None:
            purge = self.reset_purges_data
        if purge is None:
            purge = self.storage.purges_on_reset

        wiped = False
        if purge and self.session.is_authenticated:
            user_id = self.session.identity.id
            for table in ALL_TABLES:
                if table == PROFILES:
                    self.storage.delete_where(table, id=user_id)
                else:
                    self.storage.delete_where(table, user_id=user_id)
            wiped = True
            logger.info(f"[STORE] Wiped stored data for {user_id}")

        self.session.clear()
        return wiped
