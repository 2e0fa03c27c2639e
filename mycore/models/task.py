"""
Pydantic models for tasks and projects
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Task(BaseModel):
    """A one-off todo item"""
    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    due_date: Optional[str] = Field(None, description="Due date (YYYY-MM-DD) or datetime")
    priority: TaskPriority = TaskPriority.MEDIUM
    category: str = "general"
    project_id: Optional[str] = None
    completed: bool = False
    reminder: Optional[Dict[str, Any]] = None
    user_id: Optional[str] = None


class TaskUpdate(BaseModel):
    """Partial update for a task; only fields that are set are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[TaskPriority] = None
    category: Optional[str] = None
    project_id: Optional[str] = None
    completed: Optional[bool] = None
    reminder: Optional[Dict[str, Any]] = None


class Project(BaseModel):
    """A grouping of tasks with derived progress"""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    progress: int = Field(0, ge=0, le=100)
    status: ProjectStatus = ProjectStatus.ACTIVE
    user_id: Optional[str] = None
