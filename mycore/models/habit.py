"""
Pydantic models for habits and habit instances
"""
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any, List


class InterestType(str, Enum):
    """Interest categories a habit belongs to"""
    HEALTH = "HEALTH"
    FINANCE = "FINANCE"
    DETOX = "DETOX"
    LEARNING = "LEARNING"
    PRODUCTIVITY = "PRODUCTIVITY"


class ScheduleType(str, Enum):
    """Weekly recurrence rule"""
    DAILY = "DAILY"
    WEEKDAYS = "WEEKDAYS"
    WEEKENDS = "WEEKENDS"
    CUSTOM = "CUSTOM"


class TriggerType(str, Enum):
    """Mechanism that conceptually marks an instance complete"""
    MANUAL = "MANUAL"
    LOCATION = "LOCATION"
    APP_OPEN = "APP_OPEN"
    SCREEN_TIME = "SCREEN_TIME"


def validate_iso_date(v: str) -> str:
    """Validate a date string is YYYY-MM-DD"""
    try:
        datetime.strptime(v, "%Y-%m-%d")
        return v
    except ValueError:
        raise ValueError(f"Invalid date format '{v}'. Use YYYY-MM-DD")


class Habit(BaseModel):
    """A recurring intention"""
    id: str = Field(..., min_length=1, description="Stable habit identifier")
    name: str = Field(..., min_length=1, max_length=200)
    icon: str = Field("Circle", description="Icon reference")
    interest: InterestType
    schedule: ScheduleType = ScheduleType.DAILY
    trigger_type: TriggerType = TriggerType.MANUAL
    trigger_config: Dict[str, Any] = Field(default_factory=dict)
    streak: int = Field(0, ge=0, description="Derived from instance history")
    user_id: Optional[str] = None


class HabitInstance(BaseModel):
    """The occurrence of a habit on one calendar date"""
    id: str
    habit_id: str
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    completed: bool = False
    completed_at: Optional[str] = None
    value: Optional[float] = None
    user_id: Optional[str] = None

    @field_validator('date')
    @classmethod
    def validate_date_format(cls, v: str) -> str:
        return validate_iso_date(v)


class HabitStats(BaseModel):
    """Per-habit analytics"""
    habit_id: str
    name: str
    streak: int
    strength: int
    completed: int
    total: int


class InstanceStatusRequest(BaseModel):
    """Request model for setting an instance's completion state"""
    completed: bool
    value: Optional[float] = Field(None, description="Optional quantity for measured triggers")


class ToggleInstanceRequest(BaseModel):
    """Request model for toggling an instance"""
    value: Optional[float] = None


class SuggestionRequest(BaseModel):
    """Request model for habit suggestions"""
    interests: List[InterestType] = Field(default_factory=list)
