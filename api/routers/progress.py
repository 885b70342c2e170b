"""
Progress router for athlete progress views.

This router provides endpoints for:
- Personal records (best per type, grouped by exercise)
- Training streak
- Previous performance for an exercise
- Week-by-week progression previews
- Chart series: weekly volume, e1RM history, daily activity
"""
import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_actor, get_progress_service
from application.exceptions import RepositoryError
from backend.core.progress_service import ProgressService
from backend.core.progression import WeekTargets
from domain.models import Actor, NominalTargets, ProgressionScheme, RecordType, SetType

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/progress",
    tags=["Progress"],
)


# =============================================================================
# Request/Response Models
# =============================================================================


class RecordItem(BaseModel):
    """The current best for one record type."""
    record_type: RecordType
    value: float
    context: Optional[str] = None
    achieved_at: datetime
    session_id: Optional[str] = None


class ExerciseRecordsItem(BaseModel):
    exercise_id: str
    records: List[RecordItem] = Field(default_factory=list)


class PersonalRecordsApiResponse(BaseModel):
    """Response model for personal records endpoint."""
    athlete_id: str
    exercises: List[ExerciseRecordsItem] = Field(default_factory=list)


class StreakApiResponse(BaseModel):
    """Response model for streak endpoint."""
    athlete_id: str
    current_streak: int
    longest_streak: int
    last_activity_date: Optional[datetime] = None
    freezes_used: int
    freezes_allowed: int


class PreviousSetItem(BaseModel):
    set_number: int
    set_type: SetType
    weight: Optional[float] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    rpe: Optional[float] = None


class PreviousPerformanceApiResponse(BaseModel):
    """Response model for previous performance endpoint."""
    exercise_id: str
    session_id: Optional[str] = None
    sets: List[PreviousSetItem] = Field(default_factory=list)
    best_e1rm: Optional[float] = None


class VolumePointItem(BaseModel):
    week_start: date
    volume: int
    sessions: int
    label: str
    change_percent: Optional[float] = None


class VolumeHistoryResponse(BaseModel):
    """Response model for weekly volume history."""
    athlete_id: str
    weeks: int
    points: List[VolumePointItem] = Field(default_factory=list)


class E1RMPointItem(BaseModel):
    session_id: str
    completed_at: datetime
    e1rm: float
    weight: float
    reps: int
    display: str
    intensity: int


class E1RMHistoryResponse(BaseModel):
    """Response model for e1RM history of one exercise."""
    athlete_id: str
    exercise_id: str
    months: int
    points: List[E1RMPointItem] = Field(default_factory=list)


class ActivityDayItem(BaseModel):
    day: date
    count: int


class ActivityResponse(BaseModel):
    """Response model for the activity calendar."""
    athlete_id: str
    months: int
    days: List[ActivityDayItem] = Field(default_factory=list)


class ProgressionPreviewRequest(BaseModel):
    """Request model for a progression preview."""
    progression_scheme: ProgressionScheme
    total_weeks: int = Field(..., ge=1, le=52)
    target_sets: int = Field(3, ge=0)
    target_reps: str = "8-12"
    target_weight: str = ""
    rest_seconds: int = Field(90, ge=0)
    starting_weight: Optional[float] = Field(None, gt=0, description="Baseline in kg")


class ProgressionPreviewResponse(BaseModel):
    progression_scheme: ProgressionScheme
    total_weeks: int
    weeks: List[WeekTargets]


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/records", response_model=PersonalRecordsApiResponse)
def get_personal_records(
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> PersonalRecordsApiResponse:
    """Get the current best of each record type for every exercise."""
    try:
        result = service.get_personal_records(actor, athlete_id)
    except RepositoryError as e:
        logger.error(f"Failed to load personal records: {e}")
        raise HTTPException(status_code=500, detail="Failed to load personal records")

    return PersonalRecordsApiResponse(
        athlete_id=result.athlete_id,
        exercises=[
            ExerciseRecordsItem(
                exercise_id=group.exercise_id,
                records=[
                    RecordItem(
                        record_type=r.record_type,
                        value=r.value,
                        context=r.context,
                        achieved_at=r.achieved_at,
                        session_id=r.session_id,
                    )
                    for r in group.records.values()
                ],
            )
            for group in result.exercises
        ],
    )


@router.get("/streak", response_model=StreakApiResponse)
def get_streak(
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> StreakApiResponse:
    """Get the athlete's weekly training streak."""
    try:
        streak = service.get_streak(actor, athlete_id)
    except RepositoryError as e:
        logger.error(f"Failed to load streak: {e}")
        raise HTTPException(status_code=500, detail="Failed to load streak")
    return StreakApiResponse(**streak.model_dump())


@router.get(
    "/exercises/{exercise_id}/previous",
    response_model=PreviousPerformanceApiResponse,
)
def get_previous_performance(
    exercise_id: str = Path(..., description="Catalog exercise ID"),
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> PreviousPerformanceApiResponse:
    """
    Get the sets from the last completed session that included the exercise.

    Returns an empty set list when the athlete has never performed it.
    """
    target = service.resolve_athlete(actor, athlete_id)
    try:
        previous = service.get_previous_performance(target, exercise_id)
    except RepositoryError as e:
        logger.error(f"Failed to load previous performance: {e}")
        raise HTTPException(status_code=500, detail="Failed to load previous performance")

    return PreviousPerformanceApiResponse(
        exercise_id=previous.exercise_id,
        session_id=previous.session_id,
        sets=[
            PreviousSetItem(
                set_number=s.set_number,
                set_type=s.set_type,
                weight=s.weight,
                reps=s.reps,
                duration_seconds=s.duration_seconds,
                rpe=s.rpe,
            )
            for s in previous.sets
        ],
        best_e1rm=previous.best_e1rm,
    )


@router.post("/preview", response_model=ProgressionPreviewResponse)
def preview_progression(
    request: ProgressionPreviewRequest,
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> ProgressionPreviewResponse:
    """Show the targets an exercise would get in every week of a program."""
    nominal = NominalTargets(
        target_sets=request.target_sets,
        target_reps=request.target_reps,
        target_weight=request.target_weight,
        rest_seconds=request.rest_seconds,
    )
    weeks = service.get_progression_preview(
        nominal,
        request.progression_scheme,
        request.total_weeks,
        request.starting_weight,
    )
    return ProgressionPreviewResponse(
        progression_scheme=request.progression_scheme,
        total_weeks=request.total_weeks,
        weeks=weeks,
    )


@router.get("/volume", response_model=VolumeHistoryResponse)
def get_volume_history(
    weeks: int = Query(12, ge=1, le=104, description="How many weeks back"),
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> VolumeHistoryResponse:
    """Get completed volume per training week."""
    try:
        points = service.get_volume_history(actor, athlete_id, weeks=weeks)
    except RepositoryError as e:
        logger.error(f"Failed to load volume history: {e}")
        raise HTTPException(status_code=500, detail="Failed to load volume history")

    return VolumeHistoryResponse(
        athlete_id=service.resolve_athlete(actor, athlete_id),
        weeks=weeks,
        points=[VolumePointItem(**asdict(p)) for p in points],
    )


@router.get("/exercises/{exercise_id}/e1rm", response_model=E1RMHistoryResponse)
def get_e1rm_history(
    exercise_id: str = Path(..., description="Catalog exercise ID"),
    months: int = Query(6, ge=1, le=36, description="How many months back"),
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> E1RMHistoryResponse:
    """Get the best estimated 1RM for the exercise in each completed session."""
    try:
        points = service.get_e1rm_history(actor, exercise_id, athlete_id, months=months)
    except RepositoryError as e:
        logger.error(f"Failed to load e1RM history: {e}")
        raise HTTPException(status_code=500, detail="Failed to load e1RM history")

    return E1RMHistoryResponse(
        athlete_id=service.resolve_athlete(actor, athlete_id),
        exercise_id=exercise_id,
        months=months,
        points=[E1RMPointItem(**asdict(p)) for p in points],
    )


@router.get("/activity", response_model=ActivityResponse)
def get_activity(
    months: int = Query(6, ge=1, le=36, description="How many months back"),
    athlete_id: Optional[str] = Query(None, description="Athlete to view (trainers only)"),
    actor: Actor = Depends(get_current_actor),
    service: ProgressService = Depends(get_progress_service),
) -> ActivityResponse:
    """Get the number of sessions completed on each day."""
    try:
        days = service.get_activity(actor, athlete_id, months=months)
    except RepositoryError as e:
        logger.error(f"Failed to load activity: {e}")
        raise HTTPException(status_code=500, detail="Failed to load activity")

    return ActivityResponse(
        athlete_id=service.resolve_athlete(actor, athlete_id),
        months=months,
        days=[ActivityDayItem(day=d.day, count=d.count) for d in days],
    )
