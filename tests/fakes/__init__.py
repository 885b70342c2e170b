"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeSessionRepository, create_session_repo

    repo = FakeSessionRepository()
    session = create_session_repo(athlete_id="athlete-1", sets=[(100, 5)])
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

from domain.models import (
    ExerciseSet,
    NominalTargets,
    ProgramAssignment,
    ProgramContext,
    ProgressionScheme,
    SessionExerciseEntry,
    TemplateExercise,
    WorkoutSession,
    WorkoutTemplate,
)

from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.program_repository import FakeProgramRepository
from tests.fakes.exercises_repository import FakeExercisesRepository
from tests.fakes.personal_record_repository import FakePersonalRecordRepository
from tests.fakes.streak_repository import FakeStreakRepository

FIXED_NOW = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def build_session(
    *,
    athlete_id: str = "athlete-1",
    exercise_id: str = "barbell-bench-press",
    sets: Sequence[Tuple[Optional[float], Optional[int]]] = (),
    started_at: datetime = FIXED_NOW - timedelta(hours=1),
    completed_at: Optional[datetime] = None,
    session_id: str = "session-1",
    entry_id: str = "entry-1",
) -> WorkoutSession:
    """
    Build an unsaved session with one exercise entry.

    Args:
        sets: (weight, reps) pairs, logged as completed WORKING sets

    Returns:
        WorkoutSession ready to seed into a FakeSessionRepository
    """
    return WorkoutSession(
        id=session_id,
        athlete_id=athlete_id,
        started_at=started_at,
        completed_at=completed_at,
        total_volume=0.0 if completed_at else None,
        duration_seconds=0 if completed_at else None,
        entries=[
            SessionExerciseEntry(
                id=entry_id,
                session_id=session_id,
                exercise_id=exercise_id,
                position="A1",
                order=0,
                sets=[
                    ExerciseSet(
                        id=f"{entry_id}-set-{i}",
                        entry_id=entry_id,
                        set_number=i,
                        weight=weight,
                        reps=reps,
                    )
                    for i, (weight, reps) in enumerate(sets, start=1)
                ],
            )
        ],
    )


def create_session_repo(**kwargs) -> FakeSessionRepository:
    """Create a FakeSessionRepository seeded with one session from build_session()."""
    repo = FakeSessionRepository()
    repo.seed(build_session(**kwargs))
    return repo


def create_program_repo(
    *,
    athlete_id: str = "athlete-1",
    scheme: ProgressionScheme = ProgressionScheme.LINEAR,
    weeks: int = 6,
    start_date: datetime = FIXED_NOW - timedelta(weeks=2),
    baselines: Optional[dict] = None,
    exercises: Optional[List[TemplateExercise]] = None,
) -> FakeProgramRepository:
    """
    Create a FakeProgramRepository with one program template ("tpl-1") and
    an active assignment for the athlete.
    """
    if exercises is None:
        exercises = [
            TemplateExercise(
                exercise_id="barbell-back-squat",
                position="A1",
                **NominalTargets(target_reps="5", target_sets=5, rest_seconds=180).model_dump(),
            ),
            TemplateExercise(exercise_id="barbell-bench-press", position="B1"),
        ]

    repo = FakeProgramRepository()
    repo.seed_template(WorkoutTemplate(
        id="tpl-1",
        name="Lower / Upper",
        program=ProgramContext(id="prog-1", weeks=weeks, progression_scheme=scheme),
        exercises=exercises,
    ))
    repo.seed_template(WorkoutTemplate(
        id="tpl-standalone",
        name="Standalone",
        exercises=[TemplateExercise(exercise_id="pull-up", position="A1")],
    ))
    repo.seed_assignment(
        ProgramAssignment(
            id="assign-1",
            program_id="prog-1",
            athlete_id=athlete_id,
            start_date=start_date,
        ),
        baselines=baselines,
    )
    return repo


__all__ = [
    "FakeSessionRepository",
    "FakeProgramRepository",
    "FakeExercisesRepository",
    "FakePersonalRecordRepository",
    "FakeStreakRepository",
    "FIXED_NOW",
    "build_session",
    "create_session_repo",
    "create_program_repo",
]
