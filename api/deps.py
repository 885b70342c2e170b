"""
FastAPI Dependency Providers for the training engine API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Use case and service providers compose repositories per-request
- Auth providers wrap backend.auth so there is one source of truth

Usage in routers:
    from api.deps import get_current_actor, get_complete_session_use_case

    @router.post("/sessions/{session_id}/complete")
    def complete(
        session_id: str,
        actor: Actor = Depends(get_current_actor),
        use_case: CompleteSessionUseCase = Depends(get_complete_session_use_case),
    ):
        return use_case.execute(actor, session_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ExercisesRepository,
    PersonalRecordRepository,
    ProgramRepository,
    SessionRepository,
    StreakRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseExercisesRepository,
    SupabasePersonalRecordRepository,
    SupabaseProgramRepository,
    SupabaseSessionRepository,
    SupabaseStreakRepository,
)

from application.use_cases import (
    AbandonSessionUseCase,
    AddExerciseUseCase,
    CompleteSessionUseCase,
    DeleteSessionUseCase,
    GetSessionUseCase,
    LogSetUseCase,
    StartSessionUseCase,
)
from backend.core.progress_service import ProgressService
from backend.settings import Settings, get_settings as _get_settings
from backend.auth import get_current_actor as _get_current_actor
from domain.models import Actor


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
) -> SessionRepository:
    """
    Get SessionRepository implementation.

    The return type is the Protocol to enable easy faking.
    """
    return SupabaseSessionRepository(client)


def get_program_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramRepository:
    """Get ProgramRepository implementation."""
    return SupabaseProgramRepository(client)


def get_exercises_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExercisesRepository:
    """Get ExercisesRepository implementation."""
    return SupabaseExercisesRepository(client)


def get_personal_record_repo(
    client: Client = Depends(get_supabase_client_required),
) -> PersonalRecordRepository:
    """Get PersonalRecordRepository implementation."""
    return SupabasePersonalRecordRepository(client)


def get_streak_repo(
    client: Client = Depends(get_supabase_client_required),
) -> StreakRepository:
    """Get StreakRepository implementation."""
    return SupabaseStreakRepository(client)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_start_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    program_repo: ProgramRepository = Depends(get_program_repo),
    settings: Settings = Depends(get_settings),
) -> StartSessionUseCase:
    """Get StartSessionUseCase configured from settings."""
    return StartSessionUseCase(
        session_repo,
        program_repo,
        enforce_single_active=settings.enforce_single_active_session,
        default_total_weeks=settings.default_program_weeks,
    )


def get_log_set_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> LogSetUseCase:
    return LogSetUseCase(session_repo)


def get_add_exercise_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
) -> AddExerciseUseCase:
    return AddExerciseUseCase(session_repo, exercises_repo)


def get_complete_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    record_repo: PersonalRecordRepository = Depends(get_personal_record_repo),
    streak_repo: StreakRepository = Depends(get_streak_repo),
) -> CompleteSessionUseCase:
    return CompleteSessionUseCase(session_repo, record_repo, streak_repo)


def get_abandon_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> AbandonSessionUseCase:
    return AbandonSessionUseCase(session_repo)


def get_delete_session_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
    record_repo: PersonalRecordRepository = Depends(get_personal_record_repo),
) -> DeleteSessionUseCase:
    return DeleteSessionUseCase(session_repo, record_repo)


def get_session_detail_use_case(
    session_repo: SessionRepository = Depends(get_session_repo),
) -> GetSessionUseCase:
    return GetSessionUseCase(session_repo)


def get_progress_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    record_repo: PersonalRecordRepository = Depends(get_personal_record_repo),
    streak_repo: StreakRepository = Depends(get_streak_repo),
) -> ProgressService:
    """Get ProgressService for the read-side progress endpoints."""
    return ProgressService(session_repo, record_repo, streak_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_actor(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> Actor:
    """
    Get the current authenticated Actor.

    Wraps backend.auth.get_current_actor for dependency injection.

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_actor(
        authorization=authorization,
        x_api_key=x_api_key,
        settings=settings,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_session_repo",
    "get_program_repo",
    "get_exercises_repo",
    "get_personal_record_repo",
    "get_streak_repo",
    # Use cases and services
    "get_start_session_use_case",
    "get_log_set_use_case",
    "get_add_exercise_use_case",
    "get_complete_session_use_case",
    "get_abandon_session_use_case",
    "get_delete_session_use_case",
    "get_session_detail_use_case",
    "get_progress_service",
    # Authentication
    "get_current_actor",
]
