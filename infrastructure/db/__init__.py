"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionRepository,
        SupabaseProgramRepository,
        SupabasePersonalRecordRepository,
        SupabaseStreakRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    session_repo = SupabaseSessionRepository(client)
    program_repo = SupabaseProgramRepository(client)
    record_repo = SupabasePersonalRecordRepository(client)
    streak_repo = SupabaseStreakRepository(client)
"""

from infrastructure.db.session_repository import SupabaseSessionRepository
from infrastructure.db.program_repository import SupabaseProgramRepository
from infrastructure.db.exercises_repository import SupabaseExercisesRepository
from infrastructure.db.personal_record_repository import SupabasePersonalRecordRepository
from infrastructure.db.streak_repository import SupabaseStreakRepository

__all__ = [
    # Session persistence
    "SupabaseSessionRepository",

    # Program context
    "SupabaseProgramRepository",

    # Exercise catalog
    "SupabaseExercisesRepository",

    # Achievements
    "SupabasePersonalRecordRepository",
    "SupabaseStreakRepository",
]
