"""
Domain models for the training engine.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- WorkoutSession: The aggregate root for a live or completed workout
- SessionExerciseEntry / ExerciseSet: What was performed within a session
- PersonalRecord / Streak: Derived achievements written at completion
- WorkoutTemplate / ProgramAssignment: Read-only program context
- NominalTargets / ProgressedTargets: Inputs and outputs of progression math
- Actor: The authenticated caller

Usage:
    >>> from domain.models import WorkoutSession, ExerciseSet, SetType

    >>> s = ExerciseSet(entry_id="e1", set_number=1, weight=100, reps=5)
    >>> s.set_type
    <SetType.WORKING: 'WORKING'>
"""

from domain.models.actor import Actor, Role
from domain.models.program import (
    NominalTargets,
    ProgramAssignment,
    ProgramContext,
    ProgressedTargets,
    ProgressionScheme,
    TemplateExercise,
    WorkoutTemplate,
)
from domain.models.records import (
    DEFAULT_FREEZES_ALLOWED,
    PersonalRecord,
    RecordType,
    Streak,
)
from domain.models.session import (
    ExerciseSet,
    SessionExerciseEntry,
    SessionStatus,
    SetType,
    WorkoutSession,
)

__all__ = [
    # Session aggregate
    "WorkoutSession",
    "SessionExerciseEntry",
    "ExerciseSet",
    "SessionStatus",
    "SetType",
    # Achievements
    "PersonalRecord",
    "RecordType",
    "Streak",
    "DEFAULT_FREEZES_ALLOWED",
    # Program context
    "WorkoutTemplate",
    "TemplateExercise",
    "ProgramContext",
    "ProgramAssignment",
    "ProgressionScheme",
    "NominalTargets",
    "ProgressedTargets",
    # Caller
    "Actor",
    "Role",
]
