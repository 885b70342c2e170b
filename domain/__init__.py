"""
Domain layer for the training engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    Actor,
    ExerciseSet,
    PersonalRecord,
    ProgressionScheme,
    Role,
    SessionExerciseEntry,
    Streak,
    WorkoutSession,
)

__all__ = [
    "Actor",
    "ExerciseSet",
    "PersonalRecord",
    "ProgressionScheme",
    "Role",
    "SessionExerciseEntry",
    "Streak",
    "WorkoutSession",
]
