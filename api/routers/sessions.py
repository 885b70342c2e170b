"""
Sessions router for the workout session lifecycle.

This router provides endpoints for:
- Starting a session (empty or from a template)
- Logging and editing sets
- Adding exercises mid-session
- Reading a session with its entries and sets
- Completing, abandoning and deleting sessions

Use case outcomes map to HTTP statuses: UNAUTHORIZED -> 403,
NOT_FOUND -> 404, ILLEGAL_STATE -> 409, INVALID -> 422.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field

from api.deps import (
    get_abandon_session_use_case,
    get_add_exercise_use_case,
    get_complete_session_use_case,
    get_current_actor,
    get_delete_session_use_case,
    get_log_set_use_case,
    get_session_detail_use_case,
    get_start_session_use_case,
)
from application.exceptions import RepositoryError
from application.use_cases import (
    AbandonSessionUseCase,
    AddExerciseUseCase,
    CompleteSessionUseCase,
    DeleteSessionUseCase,
    GetSessionUseCase,
    LogSetUseCase,
    Outcome,
    StartSessionUseCase,
    UseCaseResult,
)
from domain.models import (
    Actor,
    ProgressedTargets,
    ProgressionScheme,
    RecordType,
    SessionStatus,
    SetType,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/sessions",
    tags=["Sessions"],
)

_OUTCOME_STATUS = {
    Outcome.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    Outcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    Outcome.ILLEGAL_STATE: status.HTTP_409_CONFLICT,
    Outcome.INVALID: status.HTTP_422_UNPROCESSABLE_ENTITY,
}

# Set fields that may not be cleared with an explicit null
_NON_NULLABLE_SET_FIELDS = {"set_type", "completed"}


def _raise_for_outcome(result: UseCaseResult) -> None:
    """Translate a failed use case result into an HTTPException."""
    if result.success:
        return
    raise HTTPException(
        status_code=_OUTCOME_STATUS.get(result.outcome, status.HTTP_400_BAD_REQUEST),
        detail=result.error,
    )


def _repository_failure(action: str, error: RepositoryError) -> HTTPException:
    logger.error(f"Failed to {action}: {error}")
    return HTTPException(status_code=500, detail=f"Failed to {action}")


# =============================================================================
# Request/Response Models
# =============================================================================


class StartSessionRequest(BaseModel):
    """Request model for starting a session."""
    template_id: Optional[str] = Field(None, description="Template to start from; omit for a quick workout")
    week_number: Optional[int] = Field(None, ge=1, description="Program week; computed when omitted")


class SessionEntryResponse(BaseModel):
    """An exercise entry materialized at session start."""
    entry_id: str
    exercise_id: str
    position: str
    targets: Optional[ProgressedTargets] = None


class StartSessionResponse(BaseModel):
    """Response model for a started session."""
    session_id: str
    week_number: Optional[int] = None
    progression_scheme: ProgressionScheme = ProgressionScheme.NONE
    total_weeks: Optional[int] = None
    exercise_baselines: Dict[str, float] = Field(default_factory=dict)
    entries: List[SessionEntryResponse] = Field(default_factory=list)


class LogSetRequest(BaseModel):
    """Request model for logging a set."""
    set_number: int = Field(..., ge=1)
    set_type: SetType = SetType.WORKING
    weight: Optional[float] = Field(None, ge=0, description="Load in kg")
    reps: Optional[int] = Field(None, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)
    rpe: Optional[float] = Field(None, ge=0, le=10)


class UpdateSetRequest(BaseModel):
    """Partial update of a set; only fields present in the body change."""
    set_type: Optional[SetType] = None
    weight: Optional[float] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    duration_seconds: Optional[int] = Field(None, ge=0)
    rpe: Optional[float] = Field(None, ge=0, le=10)
    completed: Optional[bool] = None


class SetResponse(BaseModel):
    set_id: str


class AddExerciseRequest(BaseModel):
    """Request model for appending an exercise."""
    exercise_id: str = Field(..., min_length=1)


class AddExerciseResponse(BaseModel):
    entry_id: str
    exercise_id: str
    position: str


class CompleteSessionRequest(BaseModel):
    """Request model for completing a session."""
    notes: Optional[str] = None


class NewRecordResponse(BaseModel):
    """A personal record set during the completed session."""
    exercise_id: str
    record_type: RecordType
    value: float
    context: Optional[str] = None


class CompleteSessionResponse(BaseModel):
    """Response model for a completed session."""
    total_volume: float
    duration_seconds: int
    new_records: List[NewRecordResponse] = Field(default_factory=list)


class SessionSetItem(BaseModel):
    set_id: str
    set_number: int
    set_type: SetType
    weight: Optional[float] = None
    reps: Optional[int] = None
    duration_seconds: Optional[int] = None
    rpe: Optional[float] = None
    completed: bool


class SessionDetailEntry(BaseModel):
    entry_id: str
    exercise_id: str
    position: str
    order: int
    sets: List[SessionSetItem] = Field(default_factory=list)


class SessionDetailResponse(BaseModel):
    """Response model for a single session with its entries and sets."""
    session_id: str
    athlete_id: str
    status: SessionStatus
    template_id: Optional[str] = None
    week_number: Optional[int] = None
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_volume: Optional[float] = None
    duration_seconds: Optional[int] = None
    notes: Optional[str] = None
    entries: List[SessionDetailEntry] = Field(default_factory=list)


class RemoveSessionResponse(BaseModel):
    deleted: bool


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=StartSessionResponse, status_code=status.HTTP_201_CREATED)
def start_session(
    request: StartSessionRequest,
    actor: Actor = Depends(get_current_actor),
    use_case: StartSessionUseCase = Depends(get_start_session_use_case),
) -> StartSessionResponse:
    """
    Start a workout session.

    With a template, one entry per template exercise is created and each
    carries targets progressed for the program week.
    """
    try:
        result = use_case.execute(
            actor,
            template_id=request.template_id,
            week_number=request.week_number,
        )
    except RepositoryError as e:
        raise _repository_failure("start session", e)
    _raise_for_outcome(result)

    return StartSessionResponse(
        session_id=result.session_id,
        week_number=result.week_number,
        progression_scheme=result.progression_scheme,
        total_weeks=result.total_weeks,
        exercise_baselines=result.exercise_baselines,
        entries=[
            SessionEntryResponse(
                entry_id=e.entry_id,
                exercise_id=e.exercise_id,
                position=e.position,
                targets=e.targets,
            )
            for e in result.entries
        ],
    )


@router.post(
    "/entries/{entry_id}/sets",
    response_model=SetResponse,
    status_code=status.HTTP_201_CREATED,
)
def log_set(
    request: LogSetRequest,
    entry_id: str = Path(..., description="Session exercise entry ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: LogSetUseCase = Depends(get_log_set_use_case),
) -> SetResponse:
    """Log a completed set against a session exercise."""
    try:
        result = use_case.log_set(
            actor,
            entry_id,
            set_number=request.set_number,
            set_type=request.set_type,
            weight=request.weight,
            reps=request.reps,
            duration_seconds=request.duration_seconds,
            rpe=request.rpe,
        )
    except RepositoryError as e:
        raise _repository_failure("log set", e)
    _raise_for_outcome(result)
    return SetResponse(set_id=result.set_id)


@router.patch("/sets/{set_id}", response_model=SetResponse)
def update_set(
    request: UpdateSetRequest,
    set_id: str = Path(..., description="Set ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: LogSetUseCase = Depends(get_log_set_use_case),
) -> SetResponse:
    """Edit a previously logged set."""
    fields = {
        k: v
        for k, v in request.model_dump(exclude_unset=True).items()
        if v is not None or k not in _NON_NULLABLE_SET_FIELDS
    }
    try:
        result = use_case.update_set(actor, set_id, fields)
    except RepositoryError as e:
        raise _repository_failure("update set", e)
    _raise_for_outcome(result)
    return SetResponse(set_id=result.set_id)


@router.post(
    "/{session_id}/exercises",
    response_model=AddExerciseResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_exercise(
    request: AddExerciseRequest,
    session_id: str = Path(..., description="Session ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: AddExerciseUseCase = Depends(get_add_exercise_use_case),
) -> AddExerciseResponse:
    """Append a catalog exercise to an active session."""
    try:
        result = use_case.execute(actor, session_id, request.exercise_id)
    except RepositoryError as e:
        raise _repository_failure("add exercise", e)
    _raise_for_outcome(result)
    return AddExerciseResponse(
        entry_id=result.entry_id,
        exercise_id=result.exercise_id,
        position=result.position,
    )


@router.post("/{session_id}/complete", response_model=CompleteSessionResponse)
def complete_session(
    session_id: str = Path(..., description="Session ID"),
    request: Optional[CompleteSessionRequest] = None,
    actor: Actor = Depends(get_current_actor),
    use_case: CompleteSessionUseCase = Depends(get_complete_session_use_case),
) -> CompleteSessionResponse:
    """
    Complete a session.

    Computes volume and duration, then detects personal records and updates
    the streak. Completing an already completed session returns 409.
    """
    notes = request.notes if request else None
    try:
        result = use_case.execute(actor, session_id, notes=notes)
    except RepositoryError as e:
        raise _repository_failure("complete session", e)
    _raise_for_outcome(result)

    return CompleteSessionResponse(
        total_volume=result.total_volume,
        duration_seconds=result.duration_seconds,
        new_records=[
            NewRecordResponse(
                exercise_id=r.exercise_id,
                record_type=r.record_type,
                value=r.value,
                context=r.context,
            )
            for r in result.new_records
        ],
    )


@router.post("/{session_id}/abandon", response_model=RemoveSessionResponse)
def abandon_session(
    session_id: str = Path(..., description="Session ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: AbandonSessionUseCase = Depends(get_abandon_session_use_case),
) -> RemoveSessionResponse:
    """Discard an active session with all its entries and sets."""
    try:
        result = use_case.execute(actor, session_id)
    except RepositoryError as e:
        raise _repository_failure("abandon session", e)
    _raise_for_outcome(result)
    return RemoveSessionResponse(deleted=result.deleted)


@router.delete("/{session_id}", response_model=RemoveSessionResponse)
def delete_session(
    session_id: str = Path(..., description="Session ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: DeleteSessionUseCase = Depends(get_delete_session_use_case),
) -> RemoveSessionResponse:
    """Remove a session from history, including records set during it."""
    try:
        result = use_case.execute(actor, session_id)
    except RepositoryError as e:
        raise _repository_failure("delete session", e)
    _raise_for_outcome(result)
    return RemoveSessionResponse(deleted=result.deleted)


@router.get("/{session_id}", response_model=SessionDetailResponse)
def get_session(
    session_id: str = Path(..., description="Session ID"),
    actor: Actor = Depends(get_current_actor),
    use_case: GetSessionUseCase = Depends(get_session_detail_use_case),
) -> SessionDetailResponse:
    """Get a session, active or completed, with every entry and set."""
    try:
        result = use_case.execute(actor, session_id)
    except RepositoryError as e:
        raise _repository_failure("load session", e)
    _raise_for_outcome(result)

    session = result.session
    return SessionDetailResponse(
        session_id=session.id,
        athlete_id=session.athlete_id,
        status=session.status,
        template_id=session.template_id,
        week_number=session.week_number,
        started_at=session.started_at,
        completed_at=session.completed_at,
        total_volume=session.total_volume,
        duration_seconds=session.duration_seconds,
        notes=session.notes,
        entries=[
            SessionDetailEntry(
                entry_id=entry.id,
                exercise_id=entry.exercise_id,
                position=entry.position,
                order=entry.order,
                sets=[
                    SessionSetItem(
                        set_id=s.id,
                        set_number=s.set_number,
                        set_type=s.set_type,
                        weight=s.weight,
                        reps=s.reps,
                        duration_seconds=s.duration_seconds,
                        rpe=s.rpe,
                        completed=s.completed,
                    )
                    for s in entry.sets
                ],
            )
            for entry in session.entries
        ],
    )
