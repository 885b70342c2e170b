"""
API package for the training engine.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_session_repo,
    get_program_repo,
    get_exercises_repo,
    get_personal_record_repo,
    get_streak_repo,
    get_start_session_use_case,
    get_log_set_use_case,
    get_add_exercise_use_case,
    get_complete_session_use_case,
    get_abandon_session_use_case,
    get_delete_session_use_case,
    get_session_detail_use_case,
    get_progress_service,
    get_current_actor,
)

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
