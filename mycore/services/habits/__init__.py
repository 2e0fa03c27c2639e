"""
Habits module - scheduling, scoring, suggestions and completion events
"""
from . import scheduling
from . import scoring
from . import suggestions
from . import completion

from .scheduling import (
    make_instance_id,
    is_due_on,
    instances_due_on,
    ensure_instances_for_range,
    seed_history
)
from .scoring import current_streak, strength_score
from .suggestions import SUGGESTED_HABITS, suggest
from .completion import toggle_instance

__all__ = [
    # Modules
    'scheduling',
    'scoring',
    'suggestions',
    'completion',

    # Scheduling
    'make_instance_id',
    'is_due_on',
    'instances_due_on',
    'ensure_instances_for_range',
    'seed_history',

    # Scoring
    'current_streak',
    'strength_score',

    # Suggestions
    'SUGGESTED_HABITS',
    'suggest',

    # Completion
    'toggle_instance'
]
