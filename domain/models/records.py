"""
Personal record and streak models.

Personal records are append-only: each new best is a new row, and the
current record for a type is always the maximum by value.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RecordType(str, Enum):
    """Metric a personal record is tracked against."""

    E1RM = "E1RM"
    MAX_WEIGHT = "MAX_WEIGHT"
    MAX_REPS = "MAX_REPS"
    MAX_DURATION = "MAX_DURATION"


class PersonalRecord(BaseModel):
    """A best-ever value for one (athlete, exercise, record type)."""

    id: Optional[str] = None
    athlete_id: str
    exercise_id: str
    record_type: RecordType
    value: float
    context: Optional[str] = Field(default=None, description='e.g. "100kg x 5 reps"')
    achieved_at: datetime
    session_id: Optional[str] = Field(
        default=None,
        description="Session in which the record was set",
    )


DEFAULT_FREEZES_ALLOWED = 2


class Streak(BaseModel):
    """
    Weekly consistency counter, one per athlete.

    Freezes are grace weeks that do not break the streak. They are stored
    but not consumed by the completion path.
    """

    athlete_id: str
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_activity_date: Optional[datetime] = None
    freezes_used: int = Field(default=0, ge=0)
    freezes_allowed: int = Field(default=DEFAULT_FREEZES_ALLOWED, ge=0)
