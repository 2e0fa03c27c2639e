"""
Pydantic models for the application
"""
from mycore.models.habit import (
    InterestType,
    ScheduleType,
    TriggerType,
    Habit,
    HabitInstance,
    HabitStats,
    InstanceStatusRequest,
    ToggleInstanceRequest,
    SuggestionRequest
)
from mycore.models.task import (
    TaskPriority,
    ProjectStatus,
    Task,
    TaskUpdate,
    Project
)
from mycore.models.user import (
    UserSettings,
    User,
    Permissions,
    AuthIdentity,
    InitUserRequest,
    OnboardingRequest,
    CredentialsRequest
)

__all__ = [
    "InterestType",
    "ScheduleType",
    "TriggerType",
    "Habit",
    "HabitInstance",
    "HabitStats",
    "InstanceStatusRequest",
    "ToggleInstanceRequest",
    "SuggestionRequest",
    "TaskPriority",
    "ProjectStatus",
    "Task",
    "TaskUpdate",
    "Project",
    "UserSettings",
    "User",
    "Permissions",
    "AuthIdentity",
    "InitUserRequest",
    "OnboardingRequest",
    "CredentialsRequest"
]
