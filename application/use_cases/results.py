"""
Use case outcomes.

Every session operation returns a result carrying one of a closed set of
outcomes instead of raising, so callers can render a specific message for
each failure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from domain.models import (
    PersonalRecord,
    ProgressedTargets,
    ProgressionScheme,
    WorkoutSession,
)


class Outcome(str, Enum):
    """How a use case ended."""

    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    ILLEGAL_STATE = "illegal_state"
    INVALID = "invalid"


@dataclass
class UseCaseResult:
    """Base result shared by all session use cases."""

    outcome: Outcome = Outcome.OK
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome == Outcome.OK

    @classmethod
    def failure(cls, outcome: Outcome, error: str):
        return cls(outcome=outcome, error=error)


@dataclass
class MaterializedEntry:
    """An exercise entry created when a session starts."""

    entry_id: str
    exercise_id: str
    position: str
    targets: Optional[ProgressedTargets] = None


@dataclass
class StartSessionResult(UseCaseResult):
    """Result of starting a session."""

    session_id: Optional[str] = None
    entries: List[MaterializedEntry] = field(default_factory=list)
    week_number: Optional[int] = None
    progression_scheme: ProgressionScheme = ProgressionScheme.NONE
    total_weeks: Optional[int] = None
    exercise_baselines: Dict[str, float] = field(default_factory=dict)


@dataclass
class LogSetResult(UseCaseResult):
    """Result of logging or updating a set."""

    set_id: Optional[str] = None


@dataclass
class AddExerciseResult(UseCaseResult):
    """Result of appending an exercise to a session."""

    entry_id: Optional[str] = None
    exercise_id: Optional[str] = None
    position: Optional[str] = None


@dataclass
class CompleteSessionResult(UseCaseResult):
    """Result of completing a session."""

    total_volume: Optional[float] = None
    duration_seconds: Optional[int] = None
    new_records: List[PersonalRecord] = field(default_factory=list)


@dataclass
class RemoveSessionResult(UseCaseResult):
    """Result of abandoning or deleting a session."""

    deleted: bool = False


@dataclass
class SessionDetailResult(UseCaseResult):
    """Result of reading one session with its entries and sets."""

    session: Optional[WorkoutSession] = None
