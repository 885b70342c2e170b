"""
Workout session aggregate.

A WorkoutSession is created when an athlete starts training, owns its
exercise entries and their sets, and becomes immutable once completed.
Abandonment removes the session entirely, so only two statuses exist.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Lifecycle status of a workout session."""

    ACTIVE = "active"
    COMPLETED = "completed"


class SetType(str, Enum):
    """
    Tag describing how a set was performed.

    - WARMUP: Light preparatory set
    - WORKING: Standard prescribed set
    - DROP: Reduced-load continuation of the previous set
    - AMRAP: As many reps as possible
    - FAILURE: Taken to muscular failure
    """

    WARMUP = "WARMUP"
    WORKING = "WORKING"
    DROP = "DROP"
    AMRAP = "AMRAP"
    FAILURE = "FAILURE"


class ExerciseSet(BaseModel):
    """A single logged set belonging to one session exercise entry."""

    id: Optional[str] = Field(default=None, description="Set ID (None until persisted)")
    entry_id: str = Field(..., description="Owning session exercise entry")
    set_number: int = Field(..., ge=1, description="1-based set number")
    set_type: SetType = Field(default=SetType.WORKING)
    weight: Optional[float] = Field(default=None, ge=0, description="Load in kg")
    reps: Optional[int] = Field(default=None, ge=0)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    rpe: Optional[float] = Field(default=None, ge=0, le=10, description="Perceived exertion")
    completed: bool = Field(default=True)


class SessionExerciseEntry(BaseModel):
    """
    One exercise performed within a session.

    Entries are ordered by `order`; `position` is the display label
    (e.g. "A1", "B2") copied from the template or derived on append.
    """

    id: Optional[str] = None
    session_id: str
    exercise_id: str
    position: str = Field(..., min_length=1)
    order: int = Field(default=0, ge=0)
    sets: List[ExerciseSet] = Field(default_factory=list)


class WorkoutSession(BaseModel):
    """
    Aggregate root for a live or completed workout.

    Status is derived from `completed_at`: a session without a completion
    timestamp is ACTIVE. Completed sessions always carry volume and duration.
    """

    id: Optional[str] = None
    athlete_id: str = Field(..., description="User who performs the session")
    template_id: Optional[str] = None
    week_number: Optional[int] = Field(default=None, ge=1)
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_volume: Optional[float] = Field(default=None, ge=0)
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None
    logged_by: Optional[str] = None
    entries: List[SessionExerciseEntry] = Field(default_factory=list)

    @property
    def status(self) -> SessionStatus:
        if self.completed_at is None:
            return SessionStatus.ACTIVE
        return SessionStatus.COMPLETED

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def all_sets(self) -> List[ExerciseSet]:
        """Every set across every entry, in entry order."""
        return [s for entry in sorted(self.entries, key=lambda e: e.order) for s in entry.sets]

    @property
    def next_order(self) -> int:
        """Order index for an entry appended after all existing entries."""
        if not self.entries:
            return 0
        return max(entry.order for entry in self.entries) + 1

    def owned_by(self, user_id: str) -> bool:
        return self.athlete_id == user_id
