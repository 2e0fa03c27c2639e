"""
Fixed design constants for scheduling, scoring and suggestions
"""

# Strength score
STREAK_CAP_DAYS = 21
COMPLETION_RATE_WEIGHT = 0.7
STREAK_BONUS_WEIGHT = 0.3

# Suggestions
SUGGESTION_TARGET_COUNT = 5

# History seeding window, in days relative to today (inclusive)
SEED_FROM_OFFSET_DAYS = -14
SEED_TO_OFFSET_DAYS = 3

# Week view: days shown on each side of the anchor date
WEEK_WINDOW_RADIUS_DAYS = 3

# Completion congratulations
STREAK_CONGRATULATION_MIN_STREAK = 3
STREAK_CONGRATULATION_PROBABILITY = 0.3

# Instance ids are "<date><sep><habit_id>"
INSTANCE_ID_SEPARATOR = "_"
