"""
Program, template and progression target models.

Templates and program assignments are authored elsewhere; the engine only
reads them to materialize sessions and to anchor progression math.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ProgressionScheme(str, Enum):
    """
    Program-level overload policy.

    - NONE: Targets never change week over week
    - STRENGTH: Heavier weight, fewer reps, longer rest
    - HYPERTROPHY: Heavier weight, one extra set in the second half
    - ENDURANCE: More reps, shorter rest, small weight increase
    - LINEAR: Weight only
    """

    NONE = "NONE"
    STRENGTH = "STRENGTH"
    HYPERTROPHY = "HYPERTROPHY"
    ENDURANCE = "ENDURANCE"
    LINEAR = "LINEAR"


class NominalTargets(BaseModel):
    """Un-progressed targets as written in the template."""

    target_sets: int = Field(default=3, ge=0)
    target_reps: str = Field(default="8-12", description='Single count or range, e.g. "8-12"')
    target_weight: str = Field(default="", description="Free-text weight descriptor")
    rest_seconds: int = Field(default=90, ge=0)


class ProgressedTargets(BaseModel):
    """Week-adjusted targets produced by the progression calculator."""

    target_sets: int
    target_reps: str
    target_weight: str
    rest_seconds: int
    progression_note: str = ""
    target_weight_kg: Optional[float] = Field(
        default=None,
        description="Absolute target when a numeric baseline exists",
    )
    suggested_weight_change: Optional[str] = Field(
        default=None,
        description='Relative change (e.g. "+5.0%") when no baseline exists',
    )
    target_rpe: Optional[str] = None


class TemplateExercise(BaseModel):
    """An exercise slot in a workout template."""

    exercise_id: str
    position: str
    target_sets: int = 3
    target_reps: str = "8-12"
    target_weight: str = ""
    rest_seconds: int = 90

    def nominal_targets(self) -> NominalTargets:
        return NominalTargets(
            target_sets=self.target_sets,
            target_reps=self.target_reps,
            target_weight=self.target_weight,
            rest_seconds=self.rest_seconds,
        )


class ProgramContext(BaseModel):
    """The slice of a program the engine needs."""

    id: str
    weeks: int = Field(..., ge=0)
    progression_scheme: ProgressionScheme = ProgressionScheme.NONE


class WorkoutTemplate(BaseModel):
    """A workout template with its exercises flattened in display order."""

    id: str
    name: str = ""
    program: Optional[ProgramContext] = None
    exercises: List[TemplateExercise] = Field(default_factory=list)


class ProgramAssignment(BaseModel):
    """A client's enrolment in a program."""

    id: str
    program_id: str
    athlete_id: str
    start_date: datetime
    active: bool = True
