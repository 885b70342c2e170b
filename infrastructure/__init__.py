"""
Infrastructure Layer for the training engine.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseSessionRepository,
    SupabaseProgramRepository,
    SupabaseExercisesRepository,
    SupabasePersonalRecordRepository,
    SupabaseStreakRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseProgramRepository",
    "SupabaseExercisesRepository",
    "SupabasePersonalRecordRepository",
    "SupabaseStreakRepository",
]
